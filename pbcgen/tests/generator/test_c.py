"""Tests for whole-file C rendering."""

import os

import pytest

from pbcgen.generator import load_schema, render, render_header, render_source
from pbcgen.generator.fields import UnsupportedFieldKind
from pbcgen.generator.types import FieldKind, SchemaField, SchemaFile, SchemaMessage

FILE_DIR = os.path.dirname(os.path.realpath(__file__))


@pytest.fixture
def schema():
    with open(f"{FILE_DIR}/schema.json", encoding="utf-8") as f:
        return load_schema(f.read())


def describe_render_header():
    def wraps_declarations_in_guard(expect, schema):
        header = render_header(schema)
        expect(header.startswith("/* Generated by pbcgen.  DO NOT EDIT! */\n")) == True
        expect("/* Generated from: foo/bar.proto */" in header) == True
        expect("#ifndef PROTOBUF_C_foo_2fbar_2eproto__INCLUDED\n" in header) == True
        expect("#include <protobuf-c/protobuf-c.h>\n" in header) == True
        expect(header.endswith("#endif  /* PROTOBUF_C_foo_2fbar_2eproto__INCLUDED */\n")) == True

    def orders_sections(expect, schema):
        header = render_header(schema)
        sections = [
            "PROTOBUF_C__BEGIN_DECLS",
            "typedef struct Foo__Blob__Empty Foo__Blob__Empty;",
            "typedef struct Foo__Blob Foo__Blob;",
            "/* --- enums --- */",
            "} Foo__Blob__PayloadCase;",
            "/* --- messages --- */",
            "struct  Foo__Blob__Empty\n",
            "struct  Foo__Blob\n",
            "void   foo__blob__init\n",
            "/* --- descriptors --- */",
            "extern const ProtobufCMessageDescriptor foo__blob__descriptor;",
            "PROTOBUF_C__END_DECLS",
        ]
        positions = [header.index(s) for s in sections]
        expect(positions) == sorted(positions)

    def declares_default_data(expect, schema):
        header = render_header(schema)
        expect("extern uint8_t foo__blob__data__default_value_data[];\n" in header) == True


def describe_render_source():
    def includes_header(expect, schema):
        source = render_source(schema)
        expect(source.startswith("/* Generated by pbcgen.  DO NOT EDIT! */\n")) == True
        expect("#define PROTOBUF_C__NO_DEPRECATED\n" in source) == True
        expect('#include "foo/bar.pb-c.h"\n' in source) == True

    def defines_init_functions_before_descriptors(expect, schema):
        source = render_source(schema)
        init = source.index("void   foo__blob__init\n")
        descriptor = source.index("const ProtobufCMessageDescriptor foo__blob__descriptor =")
        expect(init < descriptor) == True

    def defines_default_data(expect, schema):
        source = render_source(schema)
        expect('uint8_t foo__blob__data__default_value_data[] = "ab";\n' in source) == True

    def flags_deprecated_fields(expect, schema):
        source = render_source(schema)
        expect("0 | PROTOBUF_C_FIELD_FLAG_DEPRECATED,             /* flags */" in source) == True
        expect("0 | PROTOBUF_C_FIELD_FLAG_ONEOF,             /* flags */" in source) == True

    def is_deterministic(expect, schema):
        expect(render_source(schema)) == render_source(schema)


def describe_render():
    def names_outputs_after_schema_file(expect, schema):
        expect(sorted(render(schema))) == ["foo/bar.pb-c.c", "foo/bar.pb-c.h"]

    def strips_protodevel_suffix(expect):
        schema = SchemaFile(name="x.protodevel")
        expect(sorted(render(schema))) == ["x.pb-c.c", "x.pb-c.h"]

    def rejects_unsupported_kinds(expect):
        field = SchemaField(name="count", number=1, kind=FieldKind.INT32)
        schema = SchemaFile(name="x.proto", messages=[SchemaMessage(name="M", fields=[field])])
        with pytest.raises(UnsupportedFieldKind):
            render(schema)
