"""Unit tests configuration file."""

import pytest

from pbcgen.generator.types import Cardinality, FieldKind, SchemaField, SchemaFile, SchemaMessage


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def make_field():
    """Build a field attached to a one-message schema file."""

    def _make_field(
        name="data",
        *,
        kind=FieldKind.BYTES,
        cardinality=Cardinality.OPTIONAL,
        number=1,
        default_value=None,
        oneof=None,
        deprecated=False,
        syntax=2,
        package="foo",
        c_package=None,
        message="Bar",
    ):
        field = SchemaField(
            name=name,
            number=number,
            kind=kind,
            cardinality=cardinality,
            default_value=default_value,
            oneof=oneof,
            deprecated=deprecated,
        )
        SchemaFile(
            name="foo/bar.proto",
            package=package,
            syntax=syntax,
            c_package=c_package,
            messages=[SchemaMessage(name=message, fields=[field])],
        )
        return field

    return _make_field
