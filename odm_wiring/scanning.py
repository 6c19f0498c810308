"""Package scanning for marked entity classes."""

from __future__ import annotations

import importlib
import inspect
import pkgutil
from types import ModuleType
from typing import Callable

from odm_wiring.config import validate_base_package
from odm_wiring.logging_config import logger
from odm_wiring.mapping import is_entity


class PackageScanner:
    """Finds classes in a package that pass an include filter.

    The default filter accepts classes marked with @document or @persistent.
    """

    def __init__(self, include: Callable[[type], bool] = is_entity) -> None:
        self._include = include

    def find_candidate_components(self, base_package: str) -> set[str]:
        """Collect qualified names of matching classes under base_package.

        Args:
            base_package: Dotted package (or module) path to scan

        Returns:
            Set of "module.QualName" strings; empty if the package is missing

        Raises:
            ValueError: If base_package is not a dotted path
        """
        validate_base_package(base_package)

        try:
            root = importlib.import_module(base_package)
        except ModuleNotFoundError as e:
            missing = e.name or ""
            if base_package != missing and not base_package.startswith(f"{missing}."):
                raise
            logger.warning(f"Base package '{base_package}' not found, nothing to scan")
            return set()

        candidates: set[str] = set()
        for module in self._iter_modules(root):
            candidates.update(self._scan_module(module))

        logger.debug(f"Scanned '{base_package}': {len(candidates)} entity classes")
        return candidates

    def _iter_modules(self, root: ModuleType):
        yield root

        # Plain modules have no __path__ and no submodules
        path = getattr(root, "__path__", None)
        if path is None:
            return

        for info in pkgutil.walk_packages(path, prefix=f"{root.__name__}."):
            yield importlib.import_module(info.name)

    def _scan_module(self, module: ModuleType) -> set[str]:
        found: set[str] = set()
        for _, cls in inspect.getmembers(module, inspect.isclass):
            # Skip classes imported from elsewhere
            if cls.__module__ != module.__name__:
                continue
            if self._include(cls):
                found.add(f"{cls.__module__}.{cls.__qualname__}")
        return found
