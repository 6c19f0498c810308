"""Protocol definitions for element parsers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from odm_wiring.problems import ProblemReporter
from odm_wiring.registry import ComponentRegistry
from odm_wiring.scanning import PackageScanner

if TYPE_CHECKING:
    from lxml import etree

    from odm_wiring.models import ComponentDescriptor, DescriptorHolder
    from odm_wiring.parsers.beans import BeanDefinitionDelegate


@dataclass
class ParseContext:
    """Context passed through parsing operations."""

    registry: ComponentRegistry = field(default_factory=ComponentRegistry)
    """Registry that receives the parsed descriptors."""

    reporter: ProblemReporter = field(default_factory=ProblemReporter)
    """Channel for configuration problems."""

    scanner: PackageScanner = field(default_factory=PackageScanner)
    """Scanner used to find entity classes in a base package."""

    delegate: BeanDefinitionDelegate | None = None
    """Parser for generic <bean> elements, set by the reader."""

    @property
    def bean_delegate(self) -> BeanDefinitionDelegate:
        """The bean delegate, created on first use."""
        if self.delegate is None:
            from odm_wiring.parsers.beans import BeanDefinitionDelegate

            self.delegate = BeanDefinitionDelegate()
        return self.delegate


class ElementParser(Protocol):
    """Protocol for top-level element parsers.

    A parser turns one configuration element into a primary descriptor.
    It may register supporting descriptors itself; the reader registers
    the returned descriptor under resolve_id().
    """

    def parse(
        self,
        elem: etree._Element,
        context: ParseContext,
    ) -> ComponentDescriptor | None:
        """Parse the element into a descriptor.

        Args:
            elem: The XML element to parse
            context: Current parsing context

        Returns:
            The primary descriptor, or None if nothing should be registered
        """
        ...

    def resolve_id(
        self,
        elem: etree._Element,
        descriptor: ComponentDescriptor,
        context: ParseContext,
    ) -> str:
        """Return the name to register the primary descriptor under."""
        ...


class AttributeDecorator(Protocol):
    """Protocol for decorating a bean from a foreign-namespace attribute."""

    def decorate(
        self,
        attr_name: str,
        value: str,
        holder: DescriptorHolder,
        context: ParseContext,
    ) -> None:
        """Apply the attribute (local name attr_name) to holder."""
        ...
