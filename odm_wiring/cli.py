"""Command-line interface for odm_wiring."""

import logging
from pathlib import Path

import typer
from lxml import etree
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from odm_wiring import __version__
from odm_wiring.logging_config import setup_logging
from odm_wiring.models import ComponentDescriptor, Reference
from odm_wiring.parsers import ConfigReader, UnknownElementError, create_reader
from odm_wiring.problems import ConfigError
from odm_wiring.registry import DuplicateComponentError, NoSuchComponentError
from odm_wiring.storage.yaml_writer import save_yaml

app = typer.Typer(
    name="odm-wiring",
    help="Read XML component configuration and show the resulting descriptors.",
)
console = Console()

LOAD_ERRORS = (
    ConfigError,
    DuplicateComponentError,
    NoSuchComponentError,
    UnknownElementError,
    etree.XMLSyntaxError,
    OSError,
    ValueError,
)


def _describe(value) -> str:
    if isinstance(value, Reference):
        return f"→ {value.name}"
    if isinstance(value, ComponentDescriptor):
        return f"<{value.class_name}>"
    if isinstance(value, set):
        return "{" + ", ".join(sorted(_describe(v) for v in value)) + "}"
    if isinstance(value, list):
        return "[" + ", ".join(_describe(v) for v in value) + "]"
    return repr(value)


def _load(path: Path, lenient: bool, verbose: bool) -> ConfigReader:
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    reader = create_reader(fail_fast=not lenient)
    try:
        count = reader.load_file(path)
    except LOAD_ERRORS as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e

    console.print(f"{count} components loaded from [bold]{escape(str(path))}[/bold]")
    return reader


def _print_problems(reader: ConfigReader) -> None:
    reporter = reader.context.reporter
    if not reporter.has_problems:
        return
    console.print()
    console.print(f"[bold yellow]{len(reporter.problems)} problems:[/bold yellow]")
    for problem in reporter.problems:
        console.print(f"  {escape(str(problem))}")


@app.command()
def inspect(
    path: Path = typer.Argument(..., help="XML configuration file"),
    lenient: bool = typer.Option(
        False, "--lenient", "-l", help="Collect problems instead of stopping"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log parsing steps"),
) -> None:
    """Show the components an XML configuration file registers."""
    reader = _load(path, lenient, verbose)

    table = Table("Name", "Class", "Constructor args", "Properties")
    for name, descriptor in reader.registry.items():
        args = ", ".join(_describe(arg) for arg in descriptor.constructor_args)
        props = "\n".join(
            f"{prop} = {_describe(value)}" for prop, value in descriptor.properties.items()
        )
        table.add_row(
            escape(name),
            escape(descriptor.class_name or ""),
            escape(args),
            escape(props),
        )
    console.print(table)

    _print_problems(reader)
    if reader.context.reporter.has_problems:
        raise typer.Exit(1)


@app.command()
def export(
    path: Path = typer.Argument(..., help="XML configuration file"),
    output: Path = typer.Option(..., "--output", "-o", help="YAML file to write"),
    lenient: bool = typer.Option(
        False, "--lenient", "-l", help="Collect problems instead of stopping"
    ),
) -> None:
    """Export the components of an XML configuration file as YAML."""
    reader = _load(path, lenient, verbose=False)
    output_path = save_yaml(reader.registry, output)
    console.print(f"[bold green]Saved to:[/bold green] {output_path}")

    _print_problems(reader)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"odm-wiring {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
