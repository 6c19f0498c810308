"""Tests for ElementParserRegistry and tag helpers."""

from lxml import etree

from odm_wiring.config import BEANS_NAMESPACE, MONGO_NAMESPACE
from odm_wiring.parsers import (
    ElementParserRegistry,
    MappingConverterParser,
    create_parser_registry,
)
from odm_wiring.parsers.registry import child_elements, get_namespace, get_tag_name


class MockParser:
    """Mock parser for testing."""

    def parse(self, elem, context):
        return None

    def resolve_id(self, elem, descriptor, context):
        return "mock"


class TestTagHelpers:
    """Tests for get_tag_name, get_namespace and child_elements."""

    def test_namespace_stripped_from_tag(self) -> None:
        elem = etree.fromstring('<ns:test xmlns:ns="http://example.com"/>')
        assert get_tag_name(elem) == "test"
        assert get_namespace(elem) == "http://example.com"

    def test_unnamespaced_element_is_beans(self) -> None:
        elem = etree.fromstring("<bean/>")
        assert get_tag_name(elem) == "bean"
        assert get_namespace(elem) == BEANS_NAMESPACE

    def test_comment_has_no_tag_name(self) -> None:
        root = etree.fromstring("<beans><!-- note --></beans>")
        assert get_tag_name(root[0]) == ""

    def test_child_elements_in_document_order(self) -> None:
        root = etree.fromstring(
            '<a xmlns:m="urn:m"><m:item n="1"/><other/><item n="2"/></a>'
        )
        items = child_elements(root, "item")
        assert [item.get("n") for item in items] == ["1", "2"]

    def test_child_elements_direct_children_only(self) -> None:
        root = etree.fromstring("<a><b><item/></b></a>")
        assert child_elements(root, "item") == []


class TestElementParserRegistry:
    """Tests for ElementParserRegistry class."""

    def test_register_and_get_parser(self) -> None:
        registry = ElementParserRegistry()
        parser = MockParser()
        registry.register("thing", parser, "urn:test")

        elem = etree.fromstring('<t:thing xmlns:t="urn:test"/>')

        assert registry.get_parser(elem) is parser

    def test_same_tag_other_namespace(self) -> None:
        registry = ElementParserRegistry()
        registry.register("thing", MockParser(), "urn:test")

        elem = etree.fromstring('<t:thing xmlns:t="urn:other"/>')

        assert registry.get_parser(elem) is None

    def test_default_namespace_registration(self) -> None:
        registry = ElementParserRegistry()
        parser = MockParser()
        registry.register("thing", parser)

        assert registry.get_parser(etree.fromstring("<thing/>")) is parser
        assert registry.has_parser("thing")
        assert not registry.has_parser("thing", "urn:test")

    def test_registered_tags(self) -> None:
        registry = ElementParserRegistry()
        registry.register("a", MockParser(), "urn:x")
        registry.register("b", MockParser())

        assert registry.registered_tags() == {("urn:x", "a"), (BEANS_NAMESPACE, "b")}


class TestCreateParserRegistry:
    """Tests for the default parser wiring."""

    def test_mapping_converter_registered(self) -> None:
        registry = create_parser_registry()

        assert registry.has_parser("mapping-converter", MONGO_NAMESPACE)
        elem = etree.fromstring(f'<m:mapping-converter xmlns:m="{MONGO_NAMESPACE}"/>')
        assert isinstance(registry.get_parser(elem), MappingConverterParser)
