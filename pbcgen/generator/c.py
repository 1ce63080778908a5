"""C code generator: renders a schema file to a .pb-c.h / .pb-c.c pair."""

import logging
from collections.abc import Callable

from jinja2 import Environment, PackageLoader

from .message import MessageGenerator
from .naming import filename_identifier, strip_proto
from .printer import Printer
from .types import SchemaFile

logger = logging.getLogger(__name__)

env = Environment(
    loader=PackageLoader("pbcgen.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

header_template = env.get_template("pb-c.h.j2")
source_template = env.get_template("pb-c.c.j2")


def _emit(method: Callable[[Printer], None]) -> str:
    printer = Printer()
    method(printer)
    return printer.getvalue()


def header_name(file: SchemaFile) -> str:
    return strip_proto(file.name) + ".pb-c.h"


def source_name(file: SchemaFile) -> str:
    return strip_proto(file.name) + ".pb-c.c"


def _message_generators(file: SchemaFile) -> list[MessageGenerator]:
    generators = [MessageGenerator(message) for message in file.all_messages()]
    logger.debug("%s: %d messages", file.name, len(generators))
    return generators


def render_header(file: SchemaFile) -> str:
    """Render the C header for a schema file."""
    return header_template.render(
        file=file,
        messages=_message_generators(file),
        guard=filename_identifier(file.name),
        emit=_emit,
    )


def render_source(file: SchemaFile) -> str:
    """Render the C source for a schema file."""
    return source_template.render(
        file=file,
        messages=_message_generators(file),
        header_name=header_name(file),
        emit=_emit,
    )


def render(file: SchemaFile) -> dict[str, str]:
    """Render both output files, keyed by output file name."""
    return {
        header_name(file): render_header(file),
        source_name(file): render_source(file),
    }
