"""Data models for component descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Reference:
    """A named pointer to another component in the registry.

    References are resolved by the container, not by the reader.
    """

    name: str


@dataclass(frozen=True)
class SourceLocation:
    """Where a descriptor or problem came from in the configuration."""

    tag: str
    line: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return f"<{self.tag}>"
        return f"<{self.tag}> (line {self.line})"


@dataclass
class ComponentDescriptor:
    """Instructions for building one managed component.

    Values held in constructor_args and properties are plain Python values,
    References, nested ComponentDescriptors, or lists/sets/dicts of those.
    """

    class_name: str | None = None
    constructor_args: list[Any] = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)
    scope: str = "singleton"
    lazy_init: bool = False
    init_method: str | None = None
    destroy_method: str | None = None
    factory_method: str | None = None
    source: SourceLocation | None = None

    def add_constructor_arg(self, value: Any) -> ComponentDescriptor:
        """Append a constructor argument value."""
        self.constructor_args.append(value)
        return self

    def add_constructor_arg_reference(self, name: str) -> ComponentDescriptor:
        """Append a constructor argument pointing at a named component."""
        self.constructor_args.append(Reference(name))
        return self

    def add_property_value(self, name: str, value: Any) -> ComponentDescriptor:
        """Set a property to a value."""
        self.properties[name] = value
        return self

    def add_property_reference(self, name: str, ref: str) -> ComponentDescriptor:
        """Set a property to a reference to a named component."""
        self.properties[name] = Reference(ref)
        return self


@dataclass
class DescriptorHolder:
    """A descriptor together with the name and aliases it was declared with."""

    descriptor: ComponentDescriptor
    name: str | None = None
    aliases: list[str] = field(default_factory=list)


@dataclass
class Problem:
    """A configuration diagnostic."""

    message: str
    location: SourceLocation | None = None

    def __str__(self) -> str:
        if self.location is None:
            return self.message
        return f"{self.message} [{self.location}]"
