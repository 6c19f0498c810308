"""Element parsing for odm_wiring XML configuration."""

from odm_wiring.parsers.beans import BeanDefinitionDelegate, PropertyAttributeDecorator
from odm_wiring.parsers.config import create_parser_registry, create_reader
from odm_wiring.parsers.engine import ConfigReader, UnknownElementError
from odm_wiring.parsers.mapping_converter import MappingConverterParser
from odm_wiring.parsers.protocols import (
    AttributeDecorator,
    ElementParser,
    ParseContext,
)
from odm_wiring.parsers.registry import ElementParserRegistry

__all__ = [
    "AttributeDecorator",
    "BeanDefinitionDelegate",
    "ConfigReader",
    "ElementParser",
    "ElementParserRegistry",
    "MappingConverterParser",
    "ParseContext",
    "PropertyAttributeDecorator",
    "UnknownElementError",
    "create_parser_registry",
    "create_reader",
]
