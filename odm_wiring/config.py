"""Shared configuration for the odm_wiring package."""

import re

# XML namespaces understood by the reader
BEANS_NAMESPACE = "urn:odm-wiring:beans"
MONGO_NAMESPACE = "urn:odm-wiring:mongo"
P_NAMESPACE = "urn:odm-wiring:p"

# Well-known component names
DEFAULT_CONVERTER_ID = "mappingConverter"
MAPPING_CONTEXT = "mappingContext"
POST_PROCESSOR = "mappingContextAwareBeanPostProcessor"
INDEX_HELPER = "indexCreationHelper"

# Default references when the element leaves them blank
DEFAULT_MONGO_REF = "mongo"
DEFAULT_TEMPLATE_REF = "mongoTemplate"

# Collaborator classes, referenced by name only (never imported here)
MAPPING_CONTEXT_CLASS = "odm.mapping.MongoMappingContext"
POST_PROCESSOR_CLASS = "odm.mapping.MappingContextAwarePostProcessor"
CONVERTER_CLASS = "odm.convert.MappingMongoConverter"
INDEX_CREATOR_CLASS = "odm.mapping.MongoPersistentEntityIndexCreator"

# Class attributes set by the entity marker decorators
DOCUMENT_MARKER = "__odm_document__"
PERSISTENT_MARKER = "__odm_persistent__"

# Dotted Python package path: pkg.sub.module
BASE_PACKAGE_PATTERN = re.compile(r"^[A-Za-z_]\w*(\.[A-Za-z_]\w*)*$")


def validate_base_package(base_package: str) -> None:
    """Validate a dotted package path.

    Args:
        base_package: The package path to validate

    Raises:
        ValueError: If the path is not a dotted Python identifier
    """
    if not BASE_PACKAGE_PATTERN.match(base_package):
        raise ValueError(
            f"Invalid base package: '{base_package}'. Expected a dotted path (e.g., app.models)"
        )


def has_text(value: str | None) -> bool:
    """Return True if value contains at least one non-whitespace character."""
    return bool(value and value.strip())
