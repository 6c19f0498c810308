"""Parsing of generic <bean> elements.

The delegate handles the beans vocabulary shared by every configuration
file: <bean>, <constructor-arg>, <property> and the value elements that
can appear inside them (<value>, <ref>, <null>, <list>, <set>, <map>).
Element parsers use it for inline bean definitions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from lxml import etree

from odm_wiring.config import BEANS_NAMESPACE, P_NAMESPACE, has_text
from odm_wiring.models import ComponentDescriptor, DescriptorHolder, Reference
from odm_wiring.parsers.registry import get_tag_name
from odm_wiring.problems import location_of

if TYPE_CHECKING:
    from odm_wiring.parsers.protocols import AttributeDecorator, ParseContext
    from odm_wiring.registry import ComponentRegistry

# Separators allowed between names in a <bean name="..."> attribute
NAME_SEPARATORS = re.compile(r"[,;\s]+")

# Elements that carry documentation only
DESCRIPTION_TAGS = {"description", "meta"}


class _Invalid:
    """Marker for a value that could not be parsed (problem already reported)."""


INVALID = _Invalid()


def _value_elements(elem: etree._Element) -> list[etree._Element]:
    return [
        child
        for child in elem
        if get_tag_name(child) and get_tag_name(child) not in DESCRIPTION_TAGS
    ]


@dataclass
class PropertyAttributeDecorator:
    """Decorator for p-namespace attributes.

    p:name="value" sets property name to a string value and
    p:name-ref="other" sets it to a reference. Hyphens in the property
    name become underscores.
    """

    def decorate(
        self,
        attr_name: str,
        value: str,
        holder: DescriptorHolder,
        context: ParseContext,
    ) -> None:
        if attr_name.endswith("-ref"):
            prop = attr_name[: -len("-ref")].replace("-", "_")
            holder.descriptor.add_property_reference(prop, value)
        else:
            holder.descriptor.add_property_value(attr_name.replace("-", "_"), value)


class BeanDefinitionDelegate:
    """Parser for <bean> elements and their nested value elements."""

    def __init__(
        self,
        decorators: dict[str, AttributeDecorator] | None = None,
    ) -> None:
        """Initialize the delegate.

        Args:
            decorators: Attribute decorators keyed by namespace URI
                (default: the p-namespace decorator)
        """
        if decorators is None:
            decorators = {P_NAMESPACE: PropertyAttributeDecorator()}
        self._decorators: dict[str, AttributeDecorator] = dict(decorators)

    def register_decorator(self, namespace: str, decorator: AttributeDecorator) -> None:
        """Register a decorator for attributes in namespace."""
        self._decorators[namespace] = decorator

    def parse_bean_element(
        self,
        elem: etree._Element,
        context: ParseContext,
    ) -> DescriptorHolder:
        """Parse a <bean> element.

        Args:
            elem: The <bean> element
            context: Current parsing context

        Returns:
            DescriptorHolder with the descriptor, its id and aliases
        """
        bean_id = (elem.get("id") or "").strip()
        aliases = [n for n in NAME_SEPARATORS.split(elem.get("name") or "") if n]
        if not bean_id and aliases:
            bean_id = aliases.pop(0)

        class_name = (elem.get("class") or "").strip() or None
        factory_method = (elem.get("factory-method") or "").strip() or None
        if class_name is None and factory_method is None:
            context.reporter.error(
                "Element <bean> must specify a 'class' or a 'factory-method'", elem
            )

        descriptor = ComponentDescriptor(
            class_name=class_name,
            scope=(elem.get("scope") or "singleton").strip(),
            lazy_init=(elem.get("lazy-init") or "").strip().lower() == "true",
            init_method=(elem.get("init-method") or "").strip() or None,
            destroy_method=(elem.get("destroy-method") or "").strip() or None,
            factory_method=factory_method,
            source=location_of(elem),
        )

        for child in elem:
            tag = get_tag_name(child)
            if tag == "constructor-arg":
                value = self._parse_value_holder(child, context, "<constructor-arg>")
                if value is not INVALID:
                    descriptor.add_constructor_arg(value)
            elif tag == "property":
                self._parse_property(child, descriptor, context)

        return DescriptorHolder(
            descriptor=descriptor,
            name=bean_id or None,
            aliases=aliases,
        )

    def decorate_if_required(
        self,
        elem: etree._Element,
        holder: DescriptorHolder,
        context: ParseContext,
    ) -> DescriptorHolder:
        """Apply decorators for attributes from foreign namespaces.

        Args:
            elem: The <bean> element the holder was parsed from
            holder: The parsed holder, modified in place
            context: Current parsing context

        Returns:
            The decorated holder
        """
        for attr, value in elem.attrib.items():
            namespace = etree.QName(attr).namespace
            if namespace is None or namespace == BEANS_NAMESPACE:
                continue

            decorator = self._decorators.get(namespace)
            if decorator is None:
                context.reporter.error(
                    f"No decorator registered for namespace [{namespace}]", elem
                )
                continue

            decorator.decorate(etree.QName(attr).localname, value, holder, context)

        return holder

    def parse_nested_bean(
        self,
        elem: etree._Element,
        context: ParseContext,
    ) -> ComponentDescriptor:
        """Parse and decorate an inner <bean>, returning its descriptor."""
        holder = self.parse_bean_element(elem, context)
        holder = self.decorate_if_required(elem, holder, context)
        return holder.descriptor

    def generate_name(
        self,
        descriptor: ComponentDescriptor,
        registry: ComponentRegistry,
    ) -> str:
        """Generate a free name of the form "<class>#<n>" for an anonymous bean."""
        base = descriptor.class_name or descriptor.factory_method or "component"
        index = 0
        while registry.contains(f"{base}#{index}"):
            index += 1
        return f"{base}#{index}"

    def _parse_property(
        self,
        elem: etree._Element,
        descriptor: ComponentDescriptor,
        context: ParseContext,
    ) -> None:
        name = (elem.get("name") or "").strip()
        if not name:
            context.reporter.error("Tag 'property' must have a 'name' attribute", elem)
            return

        if name in descriptor.properties:
            context.reporter.error(
                f"Multiple 'property' definitions for property '{name}'", elem
            )
            return

        value = self._parse_value_holder(elem, context, f"<property> '{name}'")
        if value is not INVALID:
            descriptor.add_property_value(name, value)

    def _parse_value_holder(
        self,
        elem: etree._Element,
        context: ParseContext,
        element_name: str,
        value_attr: str = "value",
        ref_attr: str = "ref",
    ) -> Any:
        """Parse an element that holds one value as attribute or sub-element."""
        has_value = elem.get(value_attr) is not None
        has_ref = elem.get(ref_attr) is not None
        subs = _value_elements(elem)

        if has_value and has_ref:
            context.reporter.error(
                f"{element_name} is only allowed to contain either "
                f"'{ref_attr}' attribute OR '{value_attr}' attribute",
                elem,
            )
            return INVALID

        if (has_value or has_ref) and subs:
            context.reporter.error(
                f"{element_name} must not contain both an attribute and a sub-element",
                elem,
            )
            return INVALID

        if len(subs) > 1:
            context.reporter.error(
                f"{element_name} must not contain more than one sub-element", elem
            )
            return INVALID

        if has_ref:
            ref = elem.get(ref_attr, "")
            if not has_text(ref):
                context.reporter.error(f"{element_name} contains empty '{ref_attr}' attribute", elem)
                return INVALID
            return Reference(ref.strip())

        if has_value:
            return elem.get(value_attr)

        if subs:
            return self._parse_value_element(subs[0], context)

        context.reporter.error(f"{element_name} must specify a ref or value", elem)
        return INVALID

    def _parse_value_element(self, elem: etree._Element, context: ParseContext) -> Any:
        tag = get_tag_name(elem)

        if tag == "bean":
            return self.parse_nested_bean(elem, context)

        if tag == "ref":
            ref = elem.get("bean", "")
            if not has_text(ref):
                context.reporter.error("<ref> element must specify a 'bean' attribute", elem)
                return INVALID
            return Reference(ref.strip())

        if tag == "value":
            return elem.text or ""

        if tag == "null":
            return None

        if tag == "list":
            return self._parse_collection(elem, context)

        if tag == "set":
            items = self._parse_collection(elem, context)
            if any(isinstance(item, (ComponentDescriptor, list, set, dict)) for item in items):
                context.reporter.error(
                    "<set> may only contain values, references and <null/>", elem
                )
                return INVALID
            return set(items)

        if tag == "map":
            return self._parse_map(elem, context)

        context.reporter.error(f"Unknown value element <{tag}>", elem)
        return INVALID

    def _parse_collection(self, elem: etree._Element, context: ParseContext) -> list[Any]:
        items: list[Any] = []
        for child in _value_elements(elem):
            value = self._parse_value_element(child, context)
            if value is not INVALID:
                items.append(value)
        return items

    def _parse_map(self, elem: etree._Element, context: ParseContext) -> dict[Any, Any]:
        result: dict[Any, Any] = {}
        for entry in _value_elements(elem):
            if get_tag_name(entry) != "entry":
                context.reporter.error("<map> may only contain <entry> elements", entry)
                continue

            if entry.get("key") is not None:
                key: Any = entry.get("key")
            elif has_text(entry.get("key-ref")):
                key = Reference(entry.get("key-ref", "").strip())
            else:
                context.reporter.error("<entry> must specify a 'key' or 'key-ref'", entry)
                continue

            value = self._parse_value_holder(
                entry, context, "<entry>", value_attr="value", ref_attr="value-ref"
            )
            if value is not INVALID:
                result[key] = value
        return result
