"""Component registry mapping names to descriptors."""

from __future__ import annotations

from collections.abc import Iterator

from odm_wiring.logging_config import logger
from odm_wiring.models import ComponentDescriptor


class NoSuchComponentError(Exception):
    """Raised when a named component is not present in the registry."""

    def __init__(self, name: str) -> None:
        """Initialize the error.

        Args:
            name: The component name that could not be found
        """
        self.name = name
        super().__init__(f"No component named '{name}' is registered")


class DuplicateComponentError(Exception):
    """Raised when a name is registered twice and overriding is disabled."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"A component named '{name}' is already registered")


class ComponentRegistry:
    """Registry of component descriptors keyed by name.

    Names are unique. Aliases point at a registered name and are resolved
    by contains() and get().
    """

    def __init__(self, allow_overriding: bool = True) -> None:
        """Initialize an empty registry.

        Args:
            allow_overriding: Whether a later registration may replace an
                earlier one under the same name
        """
        self.allow_overriding = allow_overriding
        self._descriptors: dict[str, ComponentDescriptor] = {}
        self._aliases: dict[str, str] = {}

    def _canonical_name(self, name: str) -> str:
        seen = {name}
        while name in self._aliases:
            name = self._aliases[name]
            if name in seen:
                break
            seen.add(name)
        return name

    def contains(self, name: str) -> bool:
        """Check if a component (or alias) is registered under name."""
        return self._canonical_name(name) in self._descriptors

    def get(self, name: str) -> ComponentDescriptor:
        """Get the descriptor registered under name.

        Args:
            name: Component name or alias

        Returns:
            The registered descriptor

        Raises:
            NoSuchComponentError: If nothing is registered under name
        """
        canonical = self._canonical_name(name)
        if canonical not in self._descriptors:
            raise NoSuchComponentError(name)
        return self._descriptors[canonical]

    def register(self, name: str, descriptor: ComponentDescriptor) -> None:
        """Register a descriptor under name.

        Args:
            name: The component name
            descriptor: The descriptor to store

        Raises:
            DuplicateComponentError: If name is taken, as a component or an
                alias, and overriding is disabled
            ValueError: If name is blank
        """
        if not name or not name.strip():
            raise ValueError("Component name must not be blank")

        if name in self._descriptors:
            if not self.allow_overriding:
                raise DuplicateComponentError(name)
            logger.warning(f"Overriding component '{name}'")
        elif name in self._aliases:
            if not self.allow_overriding:
                raise DuplicateComponentError(name)
            target = self._aliases.pop(name)
            logger.warning(f"Component '{name}' replaces the alias for '{target}'")

        self._descriptors[name] = descriptor
        logger.debug(f"Registered '{name}' ({descriptor.class_name})")

    def register_alias(self, name: str, alias: str) -> None:
        """Register alias as another name for the component called name.

        Aliases may point at other aliases; lookups follow the chain.

        Raises:
            DuplicateComponentError: If alias is already a component name
            ValueError: If the alias would make the chain circular
        """
        if alias == name:
            return
        if alias in self._descriptors:
            raise DuplicateComponentError(alias)
        if self._canonical_name(name) == alias:
            raise ValueError(
                f"Cannot register alias '{alias}' for '{name}': circular reference"
            )
        self._aliases[alias] = name

    def aliases(self, name: str) -> list[str]:
        """Return the aliases that resolve to name, directly or through a chain."""
        return [alias for alias in self._aliases if self._canonical_name(alias) == name]

    def names(self) -> list[str]:
        """Return registered component names in registration order."""
        return list(self._descriptors.keys())

    def items(self) -> list[tuple[str, ComponentDescriptor]]:
        """Return (name, descriptor) pairs in registration order."""
        return list(self._descriptors.items())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._descriptors)
