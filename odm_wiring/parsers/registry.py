"""Element parser registry for mapping qualified tag names to parsers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from odm_wiring.config import BEANS_NAMESPACE

if TYPE_CHECKING:
    from lxml import etree

    from odm_wiring.parsers.protocols import ElementParser


def get_tag_name(elem: etree._Element) -> str:
    """Get tag name without namespace prefix.

    Args:
        elem: XML element

    Returns:
        Tag name without namespace (e.g., "bean" not "{ns}bean"), or ""
        for comments and processing instructions
    """
    tag = elem.tag
    if isinstance(tag, str) and "}" in tag:
        return tag.split("}")[-1]
    return tag if isinstance(tag, str) else ""


def get_namespace(elem: etree._Element) -> str:
    """Get the namespace URI of an element.

    Un-namespaced elements belong to the beans namespace.
    """
    tag = elem.tag
    if isinstance(tag, str) and tag.startswith("{"):
        return tag[1:].split("}")[0]
    return BEANS_NAMESPACE


def child_elements(elem: etree._Element, tag_name: str) -> list[etree._Element]:
    """Return direct children with the given local name, in document order."""
    return [child for child in elem if get_tag_name(child) == tag_name]


class ElementParserRegistry:
    """Registry mapping (namespace, tag name) pairs to element parsers."""

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._parsers: dict[tuple[str, str], ElementParser] = {}

    def register(
        self,
        tag_name: str,
        parser: ElementParser,
        namespace: str = BEANS_NAMESPACE,
    ) -> None:
        """Register a parser for a tag in a namespace.

        Args:
            tag_name: The XML tag name (without namespace)
            parser: The parser to use for this tag
            namespace: Namespace URI the tag belongs to
        """
        self._parsers[(namespace, tag_name)] = parser

    def get_parser(self, elem: etree._Element) -> ElementParser | None:
        """Get the parser for an element.

        Args:
            elem: The XML element to get a parser for

        Returns:
            The parser if registered, None otherwise
        """
        return self._parsers.get((get_namespace(elem), get_tag_name(elem)))

    def has_parser(self, tag_name: str, namespace: str = BEANS_NAMESPACE) -> bool:
        """Check if a parser is registered for a tag."""
        return (namespace, tag_name) in self._parsers

    def registered_tags(self) -> set[tuple[str, str]]:
        """Return set of all registered (namespace, tag name) pairs."""
        return set(self._parsers.keys())
