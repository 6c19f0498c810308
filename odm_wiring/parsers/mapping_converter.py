"""Parser for the <mongo:mapping-converter> element.

One element produces the converter descriptor plus the components it
needs: a mapping context, a post-processor that hands the context to
mapping-aware components, and an index creation helper.

    <mongo:mapping-converter id="converter" base-package="app.models">
        <mongo:custom-converters>
            <mongo:converter ref="moneyConverter"/>
            <mongo:converter>
                <bean class="app.convert.DateConverter"/>
            </mongo:converter>
        </mongo:custom-converters>
    </mongo:mapping-converter>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from odm_wiring.config import (
    CONVERTER_CLASS,
    DEFAULT_CONVERTER_ID,
    DEFAULT_MONGO_REF,
    DEFAULT_TEMPLATE_REF,
    INDEX_CREATOR_CLASS,
    INDEX_HELPER,
    MAPPING_CONTEXT,
    MAPPING_CONTEXT_CLASS,
    POST_PROCESSOR,
    POST_PROCESSOR_CLASS,
    has_text,
)
from odm_wiring.logging_config import logger
from odm_wiring.models import ComponentDescriptor
from odm_wiring.parsers.registry import child_elements
from odm_wiring.problems import location_of

if TYPE_CHECKING:
    from lxml import etree

    from odm_wiring.parsers.protocols import ParseContext

BASE_PACKAGE = "base-package"


@dataclass
class MappingConverterParser:
    """Element parser for <mongo:mapping-converter>."""

    def resolve_id(
        self,
        elem: etree._Element,
        descriptor: ComponentDescriptor | None = None,
        context: ParseContext | None = None,
    ) -> str:
        """Return the element's id, or "mappingConverter" if it has none."""
        element_id = elem.get("id")
        return element_id if has_text(element_id) else DEFAULT_CONVERTER_ID

    def parse(
        self,
        elem: etree._Element,
        context: ParseContext,
    ) -> ComponentDescriptor:
        """Parse the element into the converter descriptor.

        Supporting components are registered into context.registry unless
        a component with the same name already exists. The converter itself
        is returned unregistered.

        Args:
            elem: The <mapping-converter> element
            context: Current parsing context

        Returns:
            Descriptor for the mapping converter

        Raises:
            NoSuchComponentError: If a custom converter refers to an unknown name
        """
        ctx_ref = elem.get("mapping-context-ref")
        if not has_text(ctx_ref):
            ctx_ref = MAPPING_CONTEXT
            self._register_if_absent(
                context, MAPPING_CONTEXT, lambda: self._mapping_context(elem, context)
            )

        self._register_if_absent(
            context,
            POST_PROCESSOR,
            lambda: ComponentDescriptor(
                class_name=POST_PROCESSOR_CLASS,
                source=location_of(elem),
            ).add_property_value("mapping_context_bean_name", ctx_ref),
        )

        converter = ComponentDescriptor(
            class_name=CONVERTER_CLASS,
            source=location_of(elem),
        )
        converter.add_constructor_arg_reference(ctx_ref)

        mongo_ref = elem.get("mongo-ref")
        converter.add_property_reference(
            "mongo", mongo_ref if has_text(mongo_ref) else DEFAULT_MONGO_REF
        )

        template_ref = elem.get("mongo-template-ref")
        self._register_if_absent(
            context,
            INDEX_HELPER,
            lambda: ComponentDescriptor(
                class_name=INDEX_CREATOR_CLASS,
                source=location_of(elem),
            )
            .add_constructor_arg_reference(ctx_ref)
            .add_constructor_arg_reference(
                template_ref if has_text(template_ref) else DEFAULT_TEMPLATE_REF
            ),
        )

        blocks = child_elements(elem, "custom-converters")
        if len(blocks) > 1:
            logger.warning(
                f"Found {len(blocks)} <custom-converters> elements: using the first, "
                f"ignoring the other {len(blocks) - 1}"
            )
        if blocks:
            converters = []
            for converter_elem in child_elements(blocks[0], "converter"):
                entry = self.parse_converter_entry(converter_elem, context)
                if entry is not None:
                    converters.append(entry)
            converter.add_property_value("converters", converters)

        return converter

    def parse_converter_entry(
        self,
        elem: etree._Element,
        context: ParseContext,
    ) -> ComponentDescriptor | None:
        """Parse one <converter> entry.

        Args:
            elem: The <converter> element
            context: Current parsing context

        Returns:
            The referenced or inline descriptor, or None if the entry is
            malformed (the problem is reported through context.reporter)

        Raises:
            NoSuchComponentError: If ref names an unregistered component
        """
        converter_ref = elem.get("ref")
        if has_text(converter_ref):
            return context.registry.get(converter_ref.strip())

        beans = child_elements(elem, "bean")
        if len(beans) == 1:
            return context.bean_delegate.parse_nested_bean(beans[0], context)

        context.reporter.error(
            "Element <converter> must specify either 'ref' or contain a bean "
            "definition for the converter",
            elem,
        )
        return None

    def find_initial_entity_classes(
        self,
        elem: etree._Element,
        context: ParseContext,
    ) -> set[str] | None:
        """Scan the base package for entity classes.

        Returns:
            Qualified class names, or None if no base package is given
        """
        base_package = elem.get(BASE_PACKAGE)
        if not has_text(base_package):
            return None
        return context.scanner.find_candidate_components(base_package.strip())

    def _mapping_context(
        self,
        elem: etree._Element,
        context: ParseContext,
    ) -> ComponentDescriptor:
        descriptor = ComponentDescriptor(
            class_name=MAPPING_CONTEXT_CLASS,
            source=location_of(elem),
        )
        classes = self.find_initial_entity_classes(elem, context)
        if classes is not None:
            descriptor.add_property_value("initial_entity_set", classes)
        return descriptor

    def _register_if_absent(
        self,
        context: ParseContext,
        name: str,
        build: Callable[[], ComponentDescriptor],
    ) -> None:
        registry = context.registry
        if registry.contains(name):
            logger.debug(f"'{name}' already registered, keeping existing component")
            return
        registry.register(name, build())
