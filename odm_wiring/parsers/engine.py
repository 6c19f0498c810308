"""Configuration reader that dispatches elements to their parsers."""

from __future__ import annotations

from pathlib import Path

from lxml import etree

from odm_wiring.config import BEANS_NAMESPACE
from odm_wiring.logging_config import logger
from odm_wiring.parsers.protocols import ParseContext
from odm_wiring.parsers.registry import (
    ElementParserRegistry,
    get_namespace,
    get_tag_name,
)
from odm_wiring.registry import ComponentRegistry


class UnknownElementError(Exception):
    """Raised when encountering an element without a registered parser."""

    def __init__(self, tag_name: str, context: str = "") -> None:
        """Initialize the error.

        Args:
            tag_name: The unhandled tag name
            context: Additional context about where the element was found
        """
        self.tag_name = tag_name
        msg = f"No handler for element <{tag_name}>"
        if context:
            msg = f"{msg} in {context}"
        super().__init__(msg)


def _xml_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True)


class ConfigReader:
    """Reader that loads component descriptors from XML configuration.

    The root element must be <beans>. Its children are handled in
    document order: <bean> and <alias> by the reader itself, elements in
    other namespaces by the parser registered for them. Anything else
    raises UnknownElementError.
    """

    def __init__(
        self,
        parsers: ElementParserRegistry,
        context: ParseContext | None = None,
    ) -> None:
        """Initialize the reader.

        Args:
            parsers: Registry of element parsers for custom namespaces
            context: Parse context to load into (default: a fresh one)
        """
        self._parsers = parsers
        self.context = context or ParseContext()

    @property
    def registry(self) -> ComponentRegistry:
        return self.context.registry

    def load_string(self, text: str | bytes) -> int:
        """Load configuration from an XML string.

        Returns:
            Number of components added to the registry
        """
        data = text.encode("utf-8") if isinstance(text, str) else text
        return self.load_element(etree.fromstring(data, _xml_parser()))

    def load_file(self, path: Path | str) -> int:
        """Load configuration from an XML file.

        Returns:
            Number of components added to the registry
        """
        tree = etree.parse(str(path), _xml_parser())
        logger.info(f"Loading {path}")
        return self.load_element(tree.getroot())

    def load_element(self, root: etree._Element) -> int:
        """Load configuration from a parsed <beans> element.

        Returns:
            Number of components added to the registry

        Raises:
            UnknownElementError: If the root or a child has no handler
        """
        if get_tag_name(root) != "beans" or get_namespace(root) != BEANS_NAMESPACE:
            raise UnknownElementError(get_tag_name(root), context="document root")

        before = len(self.registry)
        for child in root:
            self.parse_element(child)
        return len(self.registry) - before

    def parse_element(self, elem: etree._Element) -> None:
        """Parse one top-level element and register what it describes."""
        tag_name = get_tag_name(elem)

        # Comments and processing instructions
        if not tag_name:
            return

        namespace = get_namespace(elem)
        if namespace == BEANS_NAMESPACE:
            self._parse_default_element(elem, tag_name)
            return

        parser = self._parsers.get_parser(elem)
        if parser is None:
            raise UnknownElementError(tag_name, context=f"namespace [{namespace}]")

        with logger.element(f"<{tag_name}>"):
            descriptor = parser.parse(elem, self.context)
            if descriptor is None:
                return
            name = parser.resolve_id(elem, descriptor, self.context)
            self.registry.register(name, descriptor)

    def _parse_default_element(self, elem: etree._Element, tag_name: str) -> None:
        if tag_name == "bean":
            self._register_bean(elem)
        elif tag_name == "alias":
            self._register_alias(elem)
        elif tag_name == "description":
            return
        else:
            raise UnknownElementError(tag_name)

    def _register_bean(self, elem: etree._Element) -> None:
        delegate = self.context.bean_delegate
        with logger.element("<bean>"):
            holder = delegate.parse_bean_element(elem, self.context)
            holder = delegate.decorate_if_required(elem, holder, self.context)

            name = holder.name or delegate.generate_name(holder.descriptor, self.registry)
            self.registry.register(name, holder.descriptor)
            for alias in holder.aliases:
                self.registry.register_alias(name, alias)

    def _register_alias(self, elem: etree._Element) -> None:
        name = (elem.get("name") or "").strip()
        alias = (elem.get("alias") or "").strip()
        if not name or not alias:
            self.context.reporter.error(
                "Element <alias> must specify both 'name' and 'alias'", elem
            )
            return
        self.registry.register_alias(name, alias)
