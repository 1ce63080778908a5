"""Tests for message level generation."""

import os

import pytest

from pbcgen.generator import load_schema
from pbcgen.generator.message import MessageGenerator
from pbcgen.generator.printer import Printer

FILE_DIR = os.path.dirname(os.path.realpath(__file__))


@pytest.fixture
def blob():
    with open(f"{FILE_DIR}/schema.json", encoding="utf-8") as f:
        schema = load_schema(f.read())
    return MessageGenerator(schema.messages[0])


@pytest.fixture
def empty():
    with open(f"{FILE_DIR}/schema.json", encoding="utf-8") as f:
        schema = load_schema(f.read())
    return MessageGenerator(schema.messages[0].nested_types[0])


def emit(generator, operation):
    printer = Printer()
    getattr(generator, operation)(printer)
    return printer.getvalue()


def describe_names():
    def derives_c_names(expect, blob, empty):
        expect(blob.variables["classname"]) == "Foo__Blob"
        expect(blob.variables["lcclassname"]) == "foo__blob"
        expect(blob.variables["ucclassname"]) == "FOO__BLOB"
        expect(empty.variables["classname"]) == "Foo__Blob__Empty"
        expect(empty.variables["fullname"]) == "foo.Blob.Empty"

    def emits_typedef(expect, blob):
        expect(emit(blob, "generate_struct_typedef")) == (
            "typedef struct Foo__Blob Foo__Blob;\n"
        )


def describe_enums():
    def emits_oneof_case_enum(expect, blob):
        expect(emit(blob, "generate_enums")) == (
            "typedef enum {\n"
            "  FOO__BLOB__PAYLOAD__NOT_SET = 0,\n"
            "  FOO__BLOB__PAYLOAD_RAW = 10,\n"
            "  FOO__BLOB__PAYLOAD_TEXT = 11,\n"
            "  PROTOBUF_C__FORCE_ENUM_TO_BE_INT_SIZE(FOO__BLOB__PAYLOAD__CASE)\n"
            "} Foo__Blob__PayloadCase;\n\n"
        )

    def emits_nothing_without_oneofs(expect, empty):
        expect(emit(empty, "generate_enums")) == ""


def describe_struct_definition():
    def lays_out_members(expect, blob):
        expect(emit(blob, "generate_struct_definition")) == (
            "/*\n"
            " * A chunk of data\n"
            " */\n"
            "struct  Foo__Blob\n"
            "{\n"
            "  ProtobufCMessage base;\n"
            "  char *id;\n"
            "  protobuf_c_boolean has_data;\n"
            "  ProtobufCBinaryData data;\n"
            "  size_t n_parts;\n"
            "  ProtobufCBinaryData *parts;\n"
            "  protobuf_c_boolean has_legacy PROTOBUF_C__DEPRECATED;\n"
            "  ProtobufCBinaryData legacy PROTOBUF_C__DEPRECATED;\n"
            "  Foo__Blob__PayloadCase payload_case;\n"
            "  union {\n"
            "    ProtobufCBinaryData raw;\n"
            "    char *text;\n"
            "  };\n"
            "};\n"
            "#define FOO__BLOB__INIT \\\n"
            " { PROTOBUF_C_MESSAGE_INIT (&foo__blob__descriptor) \\\n"
            "    , NULL, 0, { 2, foo__blob__data__default_value_data }, 0,NULL,"
            " 0, {0,NULL}, FOO__BLOB__PAYLOAD__NOT_SET, {0} }\n\n"
        )

    def lays_out_empty_message(expect, empty):
        expect(emit(empty, "generate_struct_definition")) == (
            "struct  Foo__Blob__Empty\n"
            "{\n"
            "  ProtobufCMessage base;\n"
            "};\n"
            "#define FOO__BLOB__EMPTY__INIT \\\n"
            " { PROTOBUF_C_MESSAGE_INIT (&foo__blob__empty__descriptor) \\\n"
            "     }\n\n"
        )


def describe_helpers():
    def declares_defaults_and_init(expect, blob):
        expect(emit(blob, "generate_helper_function_declarations")) == (
            "extern uint8_t foo__blob__data__default_value_data[];\n"
            "/* Foo__Blob methods */\n"
            "void   foo__blob__init\n"
            "       (Foo__Blob *message);\n"
        )

    def defines_init(expect, blob):
        expect(emit(blob, "generate_helper_functions")) == (
            "void   foo__blob__init\n"
            "       (Foo__Blob *message)\n"
            "{\n"
            "  static const Foo__Blob init_value = FOO__BLOB__INIT;\n"
            "  *message = init_value;\n"
            "}\n"
        )

    def declares_descriptor(expect, blob):
        expect(emit(blob, "generate_descriptor_declarations")) == (
            "extern const ProtobufCMessageDescriptor foo__blob__descriptor;\n"
        )


def describe_message_descriptor():
    def defines_default_objects(expect, blob):
        text = emit(blob, "generate_message_descriptor")
        expect(text.startswith(
            'uint8_t foo__blob__data__default_value_data[] = "ab";\n'
            "static const ProtobufCBinaryData foo__blob__data__default_value ="
            " { 2, foo__blob__data__default_value_data };\n"
        )) == True

    def orders_descriptors_by_number(expect, blob):
        text = emit(blob, "generate_message_descriptor")
        expect("foo__blob__field_descriptors[6] =" in text) == True
        positions = [text.index(f'  "{name}",\n') for name in ("id", "data", "parts", "raw", "text", "legacy")]
        expect(positions) == sorted(positions)

    def indexes_fields_by_name(expect, blob):
        text = emit(blob, "generate_message_descriptor")
        expect(
            "static const unsigned foo__blob__field_indices_by_name[] = {\n"
            "  1,   /* field[1] = data */\n"
            "  0,   /* field[0] = id */\n"
            "  5,   /* field[5] = legacy */\n"
            "  2,   /* field[2] = parts */\n"
            "  3,   /* field[3] = raw */\n"
            "  4,   /* field[4] = text */\n"
            "};\n"
            in text
        ) == True

    def writes_number_ranges(expect, blob):
        text = emit(blob, "generate_message_descriptor")
        expect(
            "static const ProtobufCIntRange foo__blob__number_ranges[3 + 1] =\n"
            "{\n"
            "  { 1, 0 },\n"
            "  { 10, 3 },\n"
            "  { 20, 5 },\n"
            "  { 0, 6 }\n"
            "};\n"
            in text
        ) == True
        expect("  3,  foo__blob__number_ranges,\n" in text) == True

    def emits_message_descriptor(expect, blob):
        text = emit(blob, "generate_message_descriptor")
        expect(
            "const ProtobufCMessageDescriptor foo__blob__descriptor =\n"
            "{\n"
            "  PROTOBUF_C__MESSAGE_DESCRIPTOR_MAGIC,\n"
            '  "foo.Blob",\n'
            '  "Blob",\n'
            '  "Foo__Blob",\n'
            '  "foo",\n'
            "  sizeof(Foo__Blob),\n"
            "  6,\n"
            in text
        ) == True
        expect("  (ProtobufCMessageInit) foo__blob__init,\n" in text) == True

    def uses_null_tables_without_fields(expect, empty):
        text = emit(empty, "generate_message_descriptor")
        expect(text.startswith(
            "#define foo__blob__empty__field_descriptors NULL\n"
            "#define foo__blob__empty__field_indices_by_name NULL\n"
            "#define foo__blob__empty__number_ranges NULL\n"
        )) == True
        expect("  0,  foo__blob__empty__number_ranges,\n" in text) == True
