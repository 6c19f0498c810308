"""Parser configuration for odm_wiring XML documents."""

from odm_wiring.config import MONGO_NAMESPACE
from odm_wiring.parsers.beans import BeanDefinitionDelegate
from odm_wiring.parsers.engine import ConfigReader
from odm_wiring.parsers.mapping_converter import MappingConverterParser
from odm_wiring.parsers.protocols import ParseContext
from odm_wiring.parsers.registry import ElementParserRegistry
from odm_wiring.problems import ProblemReporter
from odm_wiring.registry import ComponentRegistry
from odm_wiring.scanning import PackageScanner


def create_parser_registry() -> ElementParserRegistry:
    """Create registry configured with all namespace element parsers.

    Returns:
        ElementParserRegistry with every custom element parser registered
    """
    parsers = ElementParserRegistry()

    # Mongo namespace
    parsers.register("mapping-converter", MappingConverterParser(), MONGO_NAMESPACE)

    return parsers


def create_reader(
    registry: ComponentRegistry | None = None,
    fail_fast: bool = True,
    scanner: PackageScanner | None = None,
) -> ConfigReader:
    """Create a ConfigReader wired with the default parsers.

    Args:
        registry: Registry to load into (default: a new, empty one)
        fail_fast: Raise on the first configuration problem instead of
            collecting problems
        scanner: Package scanner for base-package lookups

    Returns:
        ConfigReader ready to load documents
    """
    context = ParseContext(
        registry=registry if registry is not None else ComponentRegistry(),
        reporter=ProblemReporter(fail_fast=fail_fast),
        scanner=scanner or PackageScanner(),
        delegate=BeanDefinitionDelegate(),
    )
    return ConfigReader(create_parser_registry(), context)
