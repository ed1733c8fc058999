"""Command-line interface for typeproto schema generation."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from typeproto.generator import (
    CompilerOptions,
    SchemaError,
    compile_schema,
    describe_type,
    load_type,
    type_name,
)

if TYPE_CHECKING:
    from typeproto.generator import SchemaDocument, TypeDescriptor

_type_option = click.option(
    "--type", "-t", "type_name_", required=True, help="Root type, as module:Class or module.Class"
)
_path_option = click.option(
    "--path",
    "-p",
    "search_path",
    multiple=True,
    type=click.Path(file_okay=False),
    help="Extra directory to import the type from (repeatable)",
)


@click.group()
def cli() -> None:
    """Typeproto .proto schema compiler."""


def _fail(message: str) -> NoReturn:
    Console(stderr=True).print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)
    sys.exit(1)


@cli.command()
@_type_option
@click.option("--output", "-o", "output_file", default=None, help="Output file (default: stdout)")
@_path_option
@click.option("--prefix", default="Grpc", show_default=True, help="Root message and enum prefix")
@click.option("--package", default=None, help="Package to declare in the schema")
@click.option(
    "--indent", default=None, type=click.IntRange(min=1), help="Indent with N spaces instead of tabs"
)
@click.option("--no-header", is_flag=True, default=False, help="Omit the syntax/package header")
def gen(
    type_name_: str,
    output_file: str | None,
    search_path: tuple[str, ...],
    prefix: str,
    package: str | None,
    indent: int | None,
    no_header: bool,
) -> None:
    """Generate a .proto schema from a Python type."""
    try:
        options = CompilerOptions(
            prefix=prefix,
            package=package,
            indent=" " * indent if indent else "\t",
            header=not no_header,
        )
        root = load_type(type_name_, search_path)
        document = compile_schema(root, options)
    except SchemaError as e:
        _fail(str(e))

    if output_file is None:
        click.echo(document.text, nl=False)
        return

    with open(output_file, "w", encoding="utf-8") as f:
        f.write(document.text)
    Console(stderr=True).print(
        f"Wrote {len(document.messages)} messages and {len(document.enums)} enums "
        f"to {escape(output_file)}",
        soft_wrap=True,
    )


@cli.command()
@_type_option
@_path_option
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(type_name_: str, search_path: tuple[str, ...], output_json: bool) -> None:
    """Display how a type's fields are classified and which blocks it produces."""
    try:
        root = load_type(type_name_, search_path)
        descriptor = describe_type(root)
        document = compile_schema(root)
    except SchemaError as e:
        _fail(str(e))

    if output_json:
        _output_json(descriptor, document)
    else:
        _output_plain(descriptor, document)


def _output_json(descriptor: TypeDescriptor, document: SchemaDocument) -> None:
    """Output type info as JSON."""
    data: dict = {
        "type": descriptor.to_dict(),
        "messages": document.messages,
        "enums": document.enums,
        "imports": document.imports,
    }
    print(json.dumps(data, indent=2))


def _output_plain(descriptor: TypeDescriptor, document: SchemaDocument) -> None:
    """Output type info using rich text formatting."""
    console = Console()

    console.print(f"[bold cyan]{escape(descriptor.qualified_name)}[/bold cyan]")
    field_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    field_table.add_column("#", style="green", justify="right")
    field_table.add_column("Field", style="white")
    field_table.add_column("Shape", style="yellow")
    field_table.add_column("Type", style="dim")

    for ordinal, f in enumerate(descriptor.fields, start=1):
        shown = f.element_type if f.shape.is_container else f.declared_type
        field_table.add_row(str(ordinal), f.name, f.shape.value, escape(str(type_name(shown))))

    console.print(field_table)
    console.print()

    console.print("[bold cyan]Blocks[/bold cyan]")
    block_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    block_table.add_column("Kind", style="dim")
    block_table.add_column("Name", style="white")

    for name in document.enums:
        block_table.add_row("enum", name)
    for name in document.messages:
        block_table.add_row("message", name)

    console.print(block_table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
