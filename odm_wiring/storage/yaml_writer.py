"""YAML writer for component registries."""

import io
from pathlib import Path
from typing import Any

import ruamel.yaml

from odm_wiring.models import ComponentDescriptor, Reference
from odm_wiring.registry import ComponentRegistry


def _value_to_yaml(value: Any) -> Any:
    """Convert a descriptor value to plain YAML data.

    References become {ref: name}, nested descriptors become mappings,
    sets become sorted lists.
    """
    if isinstance(value, Reference):
        return {"ref": value.name}
    if isinstance(value, ComponentDescriptor):
        return _descriptor_to_dict(value)
    if isinstance(value, set):
        return sorted((_value_to_yaml(v) for v in value), key=str)
    if isinstance(value, list):
        return [_value_to_yaml(v) for v in value]
    if isinstance(value, dict):
        return {str(_value_to_yaml(k)): _value_to_yaml(v) for k, v in value.items()}
    return value


def _descriptor_to_dict(descriptor: ComponentDescriptor) -> dict:
    """Convert a descriptor to a dictionary, leaving out defaults."""
    result: dict[str, Any] = {"class": descriptor.class_name}

    if descriptor.scope != "singleton":
        result["scope"] = descriptor.scope
    if descriptor.lazy_init:
        result["lazy_init"] = True
    if descriptor.factory_method:
        result["factory_method"] = descriptor.factory_method
    if descriptor.init_method:
        result["init_method"] = descriptor.init_method
    if descriptor.destroy_method:
        result["destroy_method"] = descriptor.destroy_method
    if descriptor.constructor_args:
        result["constructor_args"] = [
            _value_to_yaml(arg) for arg in descriptor.constructor_args
        ]
    if descriptor.properties:
        result["properties"] = {
            name: _value_to_yaml(value) for name, value in descriptor.properties.items()
        }

    return result


def generate_yaml_dict(registry: ComponentRegistry) -> dict:
    """Generate a dictionary describing every registered component.

    Args:
        registry: The registry to convert

    Returns:
        Dictionary ready for YAML serialization
    """
    components = {}
    for name, descriptor in registry.items():
        entry = _descriptor_to_dict(descriptor)
        aliases = registry.aliases(name)
        if aliases:
            entry["aliases"] = aliases
        components[name] = entry

    return {"components": components}


def dump_yaml(registry: ComponentRegistry) -> str:
    """Serialize a registry to YAML text."""
    yaml = ruamel.yaml.YAML()
    yaml.default_flow_style = False
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.width = 100
    yaml.explicit_start = True

    buffer = io.StringIO()
    yaml.dump(generate_yaml_dict(registry), buffer)
    content = buffer.getvalue()
    return "\n".join(line.rstrip() for line in content.splitlines()) + "\n"


def save_yaml(registry: ComponentRegistry, output_file: Path) -> Path:
    """Save a registry as a YAML file.

    Args:
        registry: The registry to save
        output_file: Destination path; parent directories are created

    Returns:
        Path to the saved file
    """
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", encoding="utf-8", newline="\n") as f:
        f.write(dump_yaml(registry))

    return output_file
