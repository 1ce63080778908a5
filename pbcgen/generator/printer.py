"""Text sink with $variable$ substitution, used by the field generators."""

import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from .util import split_string_using

_VARIABLE_RE = re.compile(r"\$([A-Za-z0-9_]*)\$")


class PrinterError(RuntimeError):
    """Raised when a template cannot be expanded."""


class Printer:
    """Collect generated text.

    Templates use $name$ placeholders. Values are inserted verbatim: they are
    not escaped and not expanded again. $$ produces a literal $.
    Indentation applies to the start of every non-empty line.
    """

    def __init__(self, indent_step: str = "  "):
        self._chunks: list[str] = []
        self._indent = ""
        self._indent_step = indent_step
        self._at_line_start = True

    def print(self, template: str, variables: Mapping[str, str] | None = None) -> None:
        variables = variables or {}

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name == "":
                return "$"
            if name not in variables:
                raise PrinterError(f"Undefined variable in template: {name}")
            return variables[name]

        if template.count("$") % 2 != 0:
            raise PrinterError(f"Unterminated variable in template: {template!r}")

        self._write(_VARIABLE_RE.sub(_substitute, template))

    def _write(self, text: str) -> None:
        for line in text.splitlines(keepends=True):
            if self._at_line_start and line != "\n":
                self._chunks.append(self._indent)
            self._chunks.append(line)
            self._at_line_start = line.endswith("\n")

    @contextmanager
    def indent(self) -> Iterator[None]:
        previous = self._indent
        self._indent += self._indent_step
        try:
            yield
        finally:
            self._indent = previous

    def getvalue(self) -> str:
        return "".join(self._chunks)


def print_comment(printer: Printer, comment: str | None) -> None:
    """Print a schema comment as a C block comment."""
    if not comment:
        return

    printer.print("/*\n")
    for line in split_string_using(comment, "\r\n"):
        # Never close the block early or open a nested one
        if line.startswith("/"):
            line = " " + line
        line = line.replace("/*", " *").replace("*/", "* ")
        printer.print(" *$line$\n", {"line": line})
    printer.print(" */\n")
