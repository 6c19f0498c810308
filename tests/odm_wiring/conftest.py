"""Shared fixtures for odm_wiring tests."""

import importlib
import logging
import sys
import textwrap
from collections.abc import Iterator
from pathlib import Path

import pytest
from lxml import etree

from odm_wiring.logging_config import ElementDepth
from odm_wiring.parsers import BeanDefinitionDelegate, ParseContext
from odm_wiring.problems import ProblemReporter
from odm_wiring.registry import ComponentRegistry

NAMESPACES = (
    'xmlns="urn:odm-wiring:beans" '
    'xmlns:mongo="urn:odm-wiring:mongo" '
    'xmlns:p="urn:odm-wiring:p"'
)

SAMPLE_PACKAGE = "odm_sample_models"


class FakeScanner:
    """Scanner returning canned results per base package."""

    def __init__(self, results: dict[str, set[str]] | None = None) -> None:
        self.results = results or {}
        self.calls: list[str] = []

    def find_candidate_components(self, base_package: str) -> set[str]:
        self.calls.append(base_package)
        return set(self.results.get(base_package, set()))


def wrap_beans(body: str) -> str:
    """Wrap XML body in a <beans> root declaring all namespaces."""
    return f"<beans {NAMESPACES}>{body}</beans>"


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep log indentation and CLI-installed handlers from leaking between tests."""
    ElementDepth.reset()
    yield
    ElementDepth.reset()
    base_logger = logging.getLogger("odm_wiring")
    base_logger.handlers = []
    base_logger.setLevel(logging.NOTSET)


@pytest.fixture
def element():
    """Build a single element from an XML fragment using the test namespaces."""

    def build(fragment: str) -> etree._Element:
        root = etree.fromstring(wrap_beans(fragment).encode("utf-8"))
        return root[0]

    return build


@pytest.fixture
def beans_xml():
    """Wrap a fragment in a complete <beans> document."""
    return wrap_beans


@pytest.fixture
def scanner() -> FakeScanner:
    return FakeScanner()


@pytest.fixture
def registry() -> ComponentRegistry:
    return ComponentRegistry()


@pytest.fixture
def context(registry: ComponentRegistry, scanner: FakeScanner) -> ParseContext:
    """Fail-fast parse context with a fake scanner."""
    return ParseContext(
        registry=registry,
        reporter=ProblemReporter(fail_fast=True),
        scanner=scanner,
        delegate=BeanDefinitionDelegate(),
    )


@pytest.fixture
def lenient_context(registry: ComponentRegistry, scanner: FakeScanner) -> ParseContext:
    """Parse context that collects problems instead of raising."""
    return ParseContext(
        registry=registry,
        reporter=ProblemReporter(fail_fast=False),
        scanner=scanner,
        delegate=BeanDefinitionDelegate(),
    )


@pytest.fixture
def entity_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """Write an importable package with marked and unmarked classes.

    Returns:
        The package name
    """
    root = tmp_path / SAMPLE_PACKAGE
    (root / "orders").mkdir(parents=True)
    (root / "__init__.py").write_text("")
    (root / "people.py").write_text(
        textwrap.dedent(
            """
            from odm_wiring.mapping import document, persistent


            @document(collection="people")
            class Person:
                pass


            @persistent
            class Address:
                pass


            class Employee(Person):
                pass


            class Helper:
                pass
            """
        )
    )
    (root / "orders" / "__init__.py").write_text("")
    (root / "orders" / "model.py").write_text(
        textwrap.dedent(
            f"""
            from odm_wiring.mapping import document
            from {SAMPLE_PACKAGE}.people import Person


            @document()
            class Order:
                class Line:
                    pass
            """
        )
    )

    monkeypatch.syspath_prepend(str(tmp_path))
    importlib.invalidate_caches()
    yield SAMPLE_PACKAGE

    for name in list(sys.modules):
        if name == SAMPLE_PACKAGE or name.startswith(f"{SAMPLE_PACKAGE}."):
            del sys.modules[name]
