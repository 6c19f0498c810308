"""
Step definitions for mapping converter wiring features
"""

from behave import given, then, when  # type: ignore[import-untyped]

from odm_wiring.models import Reference
from odm_wiring.parsers import create_reader
from odm_wiring.registry import ComponentRegistry, NoSuchComponentError

NAMESPACES = (
    'xmlns="urn:odm-wiring:beans" '
    'xmlns:mongo="urn:odm-wiring:mongo" '
    'xmlns:p="urn:odm-wiring:p"'
)


class TableScanner:
    """Scanner returning entity names given in feature tables"""

    def __init__(self):
        self.packages = {}

    def find_candidate_components(self, base_package):
        return set(self.packages.get(base_package, []))


def _table_classes(context):
    return [row["class"] for row in context.table] if context.table else []


# === Setup ===


@given("an empty registry")  # type: ignore[misc]
def step_given_empty_registry(context):
    context.registry = ComponentRegistry()
    context.scanner = TableScanner()
    context.fail_fast = True


@given("problems are collected")  # type: ignore[misc]
def step_given_lenient(context):
    context.fail_fast = False


@given('package "{package}" contains entities:')  # type: ignore[misc]
def step_given_package_entities(context, package):
    context.scanner.packages[package] = _table_classes(context)


# === Actions ===


@when("I load the configuration:")  # type: ignore[misc]
def step_when_load(context):
    context.reader = create_reader(
        context.registry,
        fail_fast=context.fail_fast,
        scanner=context.scanner,
    )
    try:
        context.reader.load_string(f"<beans {NAMESPACES}>{context.text}</beans>")
        context.error = None
    except NoSuchComponentError as e:
        context.error = e


# === Assertions ===


@then('component "{name}" is registered')  # type: ignore[misc]
def step_then_registered(context, name):
    assert context.registry.contains(name), f"'{name}' is not registered"


@then('component "{name}" is not registered')  # type: ignore[misc]
def step_then_not_registered(context, name):
    assert not context.registry.contains(name), f"'{name}' is registered"


@then("the registry contains {count:d} components")  # type: ignore[misc]
def step_then_count(context, count):
    assert len(context.registry) == count, context.registry.names()


@then('component "{name}" has property "{prop}" referencing "{ref}"')  # type: ignore[misc]
def step_then_property_ref(context, name, prop, ref):
    actual = context.registry.get(name).properties[prop]
    assert actual == Reference(ref), f"Expected reference to '{ref}', got {actual!r}"


@then('component "{name}" has property "{prop}" with value "{value}"')  # type: ignore[misc]
def step_then_property_value(context, name, prop, value):
    actual = context.registry.get(name).properties[prop]
    assert actual == value, f"Expected '{value}', got {actual!r}"


@then('component "{name}" has constructor argument {index:d} referencing "{ref}"')  # type: ignore[misc]
def step_then_constructor_ref(context, name, index, ref):
    args = context.registry.get(name).constructor_args
    assert args[index - 1] == Reference(ref), f"Expected reference to '{ref}', got {args!r}"


@then('component "{name}" has initial entities:')  # type: ignore[misc]
def step_then_initial_entities(context, name):
    actual = context.registry.get(name).properties["initial_entity_set"]
    assert actual == set(_table_classes(context)), actual


@then('component "{name}" has converters:')  # type: ignore[misc]
def step_then_converters(context, name):
    converters = context.registry.get(name).properties["converters"]
    assert [c.class_name for c in converters] == _table_classes(context)


@then('a problem is reported for element "{tag}"')  # type: ignore[misc]
def step_then_problem(context, tag):
    problems = context.reader.context.reporter.problems
    assert [p.location.tag for p in problems] == [tag], problems


@then('loading fails because "{name}" is not registered')  # type: ignore[misc]
def step_then_missing_reference(context, name):
    assert isinstance(context.error, NoSuchComponentError), context.error
    assert context.error.name == name
