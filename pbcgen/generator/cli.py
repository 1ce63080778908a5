"""Command-line interface for pbcgen code generation."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pbcgen.generator import c, load_schema
from pbcgen.generator.escape import cescape
from pbcgen.generator.fields import (
    FieldGenerator,
    UnsupportedFieldKind,
    make_field_generator,
    uses_presence_flag,
)
from pbcgen.generator.naming import full_name_to_c, full_name_to_lower, full_name_to_upper
from pbcgen.generator.printer import Printer
from pbcgen.generator.ranges import compress_ranges, write_int_ranges
from pbcgen.generator.schema import ValidationError
from pbcgen.generator.types import Cardinality, SchemaFile

logger = logging.getLogger(__name__)


def _read_schema(input_file: str) -> SchemaFile:
    with open(input_file, encoding="utf-8") as f:
        text = f.read()
    try:
        return load_schema(text)
    except ValidationError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """pbcgen C code generator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input schema file (JSON)")
@click.option("--output", "-o", "output_path", default=".", help="Output directory")
def gen(input_file: str, output_path: str) -> None:
    """Generate C code from a schema file."""
    schema = _read_schema(input_file)

    try:
        files = c.render(schema)
    except UnsupportedFieldKind as e:
        raise click.ClickException(str(e)) from e

    for name, content in files.items():
        target = Path(output_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.info("Wrote %s", target)


def _layout(gen: FieldGenerator) -> str:
    field = gen.field
    if field.cardinality == Cardinality.REPEATED:
        return f"n_{gen.variables['name']} + {gen.variables['name']}"
    if uses_presence_flag(field):
        return f"has_{gen.variables['name']} + {gen.variables['name']}"
    return gen.variables["name"]


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input schema file (JSON)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, output_json: bool) -> None:
    """Display synthesized names and number ranges for every message."""
    schema = _read_schema(input_file)

    data: dict = {"file": schema.name, "messages": {}}
    for message in schema.all_messages():
        try:
            generators = [make_field_generator(f) for f in message.fields]
        except UnsupportedFieldKind as e:
            raise click.ClickException(str(e)) from e
        ranges, n_ranges = compress_ranges(sorted(f.number for f in message.fields))
        data["messages"][message.full_name] = {
            "c_name": full_name_to_c(message.full_name, schema),
            "lower": full_name_to_lower(message.full_name, schema),
            "upper": full_name_to_upper(message.full_name, schema),
            "n_ranges": n_ranges,
            "ranges": [r.as_tuple() for r in ranges],
            "fields": [
                {
                    "name": gen.field.name,
                    "number": gen.field.number,
                    "kind": gen.field.kind.value,
                    "label": gen.field.cardinality.value,
                    "member": _layout(gen),
                }
                for gen in generators
            ],
        }

    if output_json:
        click.echo(json.dumps(data, indent=2))
        return

    console = Console()
    for full_name, msg in data["messages"].items():
        console.print(f"[bold cyan]{full_name}[/bold cyan] ({msg['c_name']})")

        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Field", style="white")
        table.add_column("Number", style="yellow", justify="right")
        table.add_column("Kind", style="dim")
        table.add_column("Label", style="dim")
        table.add_column("Member", style="green")
        for f in msg["fields"]:
            table.add_row(f["name"], str(f["number"]), f["kind"], f["label"], f["member"])
        console.print(table)

        ranges_str = ", ".join(f"{{{s}, {o}}}" for s, o in msg["ranges"])
        console.print(f"[dim]Ranges ({msg['n_ranges']}):[/dim] {ranges_str}")
        console.print()


@cli.command()
@click.argument("values", nargs=-1, type=int)
@click.option("--name", default="number_ranges", help="C name of the table")
def ranges(values: tuple[int, ...], name: str) -> None:
    """Print the compressed range table for a set of field numbers."""
    printer = Printer()
    write_int_ranges(printer, sorted(set(values)), name)
    click.echo(printer.getvalue(), nl=False)


@cli.command()
@click.argument("text")
@click.option("--octal", is_flag=True, default=False, help="Use octal instead of hex escapes")
def escape(text: str, octal: bool) -> None:
    """Print TEXT escaped as a C string literal (characters map to bytes via latin-1)."""
    try:
        data = text.encode("latin-1")
    except UnicodeEncodeError as e:
        raise click.ClickException("TEXT must only contain characters up to U+00FF") from e
    click.echo(f'"{cescape(data, use_hex=not octal)}"')


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
