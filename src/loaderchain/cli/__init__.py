"""CLI module for loaderchain.

Inspect how the fallback chain resolves a resource or a type name in the
current environment.
"""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from loaderchain import get_resolver
from loaderchain.config import load_config
from loaderchain.diagnostics import DiagnosticRecord, describe
from loaderchain.exceptions import (
    NoProviderError,
    ResourceIOError,
    TypeNotFoundError,
)
from loaderchain.providers.package import PackageProvider
from loaderchain.providers.typeload import locate_type
from loaderchain.resolver import Resolver
from loaderchain.utils.logging import setup_logging

app = typer.Typer(
    name="loaderchain",
    help="loaderchain - ordered fallback lookup of resources and types",
    add_completion=False,
)
console = Console()


def _resolver(verbose: bool) -> Resolver:
    if verbose:
        setup_logging(level=logging.DEBUG)
    config = load_config(log_level="DEBUG" if verbose else None)
    return get_resolver(config)


def _calling_type(dotted: Optional[str]) -> type:
    if dotted is None:
        return Resolver
    try:
        return locate_type(dotted)
    except TypeNotFoundError as e:
        console.print(f"[red]Calling type not found:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)


def _print_record(record: DiagnosticRecord) -> None:
    table = Table(show_header=False)
    table.add_column("key", style="cyan")
    table.add_column("value")
    for key, value in record.as_mapping().items():
        table.add_row(escape(key), "-" if value is None else escape(value))
    console.print(table)


@app.command()
def resource(
    name: str = typer.Argument(..., help="Resource name, e.g. data/config.json"),
    calling_type: Optional[str] = typer.Option(
        None, "--calling-type", "-c", help="Dotted name of the requesting type"
    ),
    all_matches: bool = typer.Option(
        False, "--all", "-a", help="List every match from the winning provider"
    ),
    show: bool = typer.Option(False, "--show", help="Print the resource content"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
) -> None:
    """Resolve a resource through the provider chain."""
    resolver = _resolver(verbose)
    caller = _calling_type(calling_type)

    try:
        if all_matches:
            locators = resolver.get_resources(name, caller)
            if not locators:
                raise typer.Exit(code=1)
            for locator in locators:
                console.print(locator.url, soft_wrap=True, markup=False)
            return

        if show:
            stream = resolver.get_resource_as_stream(name, caller)
            if stream is None:
                raise typer.Exit(code=1)
            with stream:
                console.print(
                    stream.read().decode("utf-8", errors="replace"),
                    soft_wrap=True,
                    markup=False,
                )
            return

        found = resolver.get_resource(name, caller)
    except ResourceIOError as e:
        console.print(f"[red]I/O error:[/red] {escape(str(e))}")
        raise typer.Exit(code=3)
    except NoProviderError as e:
        console.print(f"[red]No provider:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if found is None:
        raise typer.Exit(code=1)
    console.print(found.url, soft_wrap=True, markup=False)


@app.command("load-type")
def load_type(
    name: str = typer.Argument(..., help="Qualified type name, e.g. pkg.mod.Class"),
    calling_type: Optional[str] = typer.Option(
        None, "--calling-type", "-c", help="Dotted name of the requesting type"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
) -> None:
    """Load a type through the provider chain."""
    resolver = _resolver(verbose)
    caller = _calling_type(calling_type)

    try:
        tp = resolver.load_type(name, caller)
    except TypeNotFoundError as e:
        console.print(f"[red]Type not found:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except NoProviderError as e:
        console.print(f"[red]No provider:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    console.print(f"{tp.__module__}.{tp.__qualname__}")


@app.command("describe")
def describe_provider(
    package: Optional[str] = typer.Option(
        None, "--package", "-p", help="Describe the provider of this package"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging"
    ),
) -> None:
    """Show the diagnostic record of a provider."""
    resolver = _resolver(verbose)
    provider = (
        PackageProvider(package) if package else resolver.context_provider()
    )
    try:
        record = describe(provider)
    except ModuleNotFoundError as e:
        console.print(f"[red]Package not importable:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    _print_record(record)


if __name__ == "__main__":
    app()
