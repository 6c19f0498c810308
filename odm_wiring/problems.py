"""Reporting of configuration problems."""

from __future__ import annotations

from lxml import etree

from odm_wiring.logging_config import logger
from odm_wiring.models import Problem, SourceLocation


class ConfigError(Exception):
    """Raised for a configuration problem when the reporter fails fast."""

    def __init__(self, problem: Problem) -> None:
        self.problem = problem
        super().__init__(str(problem))


def location_of(elem: etree._Element | None) -> SourceLocation | None:
    """Build a SourceLocation for an element, or None without one."""
    if elem is None:
        return None
    return SourceLocation(tag=etree.QName(elem).localname, line=elem.sourceline)


class ProblemReporter:
    """Channel for configuration diagnostics.

    With fail_fast (the default) the first problem raises ConfigError.
    Otherwise problems are logged and collected so that the rest of the
    document can still be read.
    """

    def __init__(self, fail_fast: bool = True) -> None:
        self.fail_fast = fail_fast
        self._problems: list[Problem] = []

    def error(self, message: str, elem: etree._Element | None = None) -> None:
        """Report a problem found at elem.

        Raises:
            ConfigError: If the reporter fails fast
        """
        problem = Problem(message=message, location=location_of(elem))
        if self.fail_fast:
            raise ConfigError(problem)

        logger.error(str(problem))
        self._problems.append(problem)

    @property
    def problems(self) -> list[Problem]:
        """Problems collected so far."""
        return list(self._problems)

    @property
    def has_problems(self) -> bool:
        return bool(self._problems)
