"""Per-kind field generators.

Each generator emits, for one field: its members in the message struct, the
data backing an explicit default value, its part of the static initializer
and its entry in the field descriptor table.
"""

import logging
from abc import ABC, abstractmethod

from .escape import cescape
from .naming import field_deprecated, field_name, full_name_to_c, full_name_to_lower
from .printer import Printer
from .types import Cardinality, FieldKind, SchemaField
from .util import camel_to_lower, camel_to_upper, get_label_name

logger = logging.getLogger(__name__)


class UnsupportedFieldKind(RuntimeError):
    """Raised when no generator exists for a field kind."""


def uses_presence_flag(field: SchemaField) -> bool:
    """Check if an optional field is tracked with a has_ member.

    Only proto2 files use explicit presence flags. Oneof members are tracked
    by the oneof case member instead.
    """
    return (
        field.cardinality == Cardinality.OPTIONAL
        and not field.is_part_of_exclusive_group
        and field.file.syntax == 2
    )


def has_static_default(field: SchemaField) -> bool:
    """Check if a field gets default value data and a static default object.

    Repeated fields never do, even when the schema supplies a default.
    """
    return field.has_default_value and field.cardinality != Cardinality.REPEATED


class FieldGenerator(ABC):
    """Base class for the generators of one field kind."""

    kind: FieldKind

    def __init__(self, field: SchemaField):
        self.field = field
        self.lower_full_name = full_name_to_lower(field.full_name, field.file)
        self.variables: dict[str, str] = {
            "name": field_name(field),
            "deprecated": field_deprecated(field),
        }

    @abstractmethod
    def generate_struct_members(self, printer: Printer) -> None:
        ...

    @abstractmethod
    def generate_default_value_declarations(self, printer: Printer) -> None:
        ...

    @abstractmethod
    def generate_default_value_implementations(self, printer: Printer) -> None:
        ...

    @abstractmethod
    def generate_static_init(self, printer: Printer) -> None:
        ...

    @abstractmethod
    def generate_descriptor_initializer(self, printer: Printer) -> None:
        ...

    @abstractmethod
    def get_default_value(self) -> str:
        ...

    def default_value_c_type(self) -> str | None:
        """C type of the static default object, None if the data array serves directly."""
        return None

    def _warn_repeated_default(self) -> None:
        if self.field.cardinality == Cardinality.REPEATED and self.field.has_default_value:
            logger.warning(
                "Repeated field %s has a default value; it is not part of the initializer",
                self.field.full_name,
            )

    def generate_descriptor_initializer_generic(
        self,
        printer: Printer,
        optional_uses_has: bool,
        type_macro: str,
        descriptor_addr: str,
    ) -> None:
        field = self.field
        message = field.message
        syntax = field.file.syntax

        variables = {
            "TYPE": type_macro,
            "classname": full_name_to_c(message.full_name, field.file),
            "name": field_name(field),
            "proto_name": field.name,
            "descriptor_addr": descriptor_addr,
            "value": str(field.number),
        }
        if field.oneof is not None:
            variables["oneofname"] = camel_to_lower(field.oneof)

        if syntax == 3 and field.cardinality == Cardinality.OPTIONAL:
            variables["LABEL"] = "NONE"
            optional_uses_has = False
        else:
            variables["LABEL"] = camel_to_upper(get_label_name(field.cardinality))

        if has_static_default(field):
            variables["default_value"] = f"&{self.lower_full_name}__default_value"
        elif syntax == 3 and field.kind == FieldKind.STRING:
            variables["default_value"] = "&protobuf_c_empty_string"
        else:
            variables["default_value"] = "NULL"

        flags = "0"
        if field.deprecated:
            flags += " | PROTOBUF_C_FIELD_FLAG_DEPRECATED"
        if field.oneof is not None:
            flags += " | PROTOBUF_C_FIELD_FLAG_ONEOF"
        variables["flags"] = flags

        printer.print("{\n")
        printer.print('  "$proto_name$",\n', variables)
        printer.print(
            "  $value$,\n  PROTOBUF_C_LABEL_$LABEL$,\n  PROTOBUF_C_TYPE_$TYPE$,\n",
            variables,
        )
        if field.cardinality == Cardinality.REQUIRED:
            printer.print("  0,   /* quantifier_offset */\n", variables)
        elif field.cardinality == Cardinality.OPTIONAL:
            if field.oneof is not None:
                printer.print("  offsetof($classname$, $oneofname$_case),\n", variables)
            elif optional_uses_has:
                printer.print("  offsetof($classname$, has_$name$),\n", variables)
            else:
                printer.print("  0,   /* quantifier_offset */\n", variables)
        else:
            printer.print("  offsetof($classname$, n_$name$),\n", variables)
        printer.print("  offsetof($classname$, $name$),\n", variables)
        printer.print("  $descriptor_addr$,\n", variables)
        printer.print("  $default_value$,\n", variables)
        printer.print("  $flags$,             /* flags */\n", variables)
        printer.print("  0,NULL,NULL    /* reserved1,reserved2, etc */\n", variables)
        printer.print("},\n")


class BytesFieldGenerator(FieldGenerator):
    """Generator for bytes fields, stored as ProtobufCBinaryData."""

    kind = FieldKind.BYTES

    def __init__(self, field: SchemaField):
        super().__init__(field)
        self.variables["default_value"] = (
            self.get_default_value() if field.has_default_value else "{0,NULL}"
        )

    @property
    def default_bytes(self) -> bytes:
        if self.field.default_value is None:
            return b""
        return self.field.default_value.encode("latin-1")

    def generate_struct_members(self, printer: Printer) -> None:
        cardinality = self.field.cardinality
        if cardinality == Cardinality.REQUIRED:
            printer.print("ProtobufCBinaryData $name$$deprecated$;\n", self.variables)
        elif cardinality == Cardinality.OPTIONAL:
            if uses_presence_flag(self.field):
                printer.print("protobuf_c_boolean has_$name$$deprecated$;\n", self.variables)
            printer.print("ProtobufCBinaryData $name$$deprecated$;\n", self.variables)
        else:
            printer.print("size_t n_$name$$deprecated$;\n", self.variables)
            printer.print("ProtobufCBinaryData *$name$$deprecated$;\n", self.variables)

    def generate_default_value_declarations(self, printer: Printer) -> None:
        variables = {"default_value_data": f"{self.lower_full_name}__default_value_data"}
        printer.print("extern uint8_t $default_value_data$[];\n", variables)

    def generate_default_value_implementations(self, printer: Printer) -> None:
        escaped = cescape(self.default_bytes)
        assert len(escaped) >= len(self.default_bytes)
        variables = {
            "default_value_data": f"{self.lower_full_name}__default_value_data",
            "escaped": escaped,
        }
        printer.print('uint8_t $default_value_data$[] = "$escaped$";\n', variables)

    def get_default_value(self) -> str:
        # The implicit NUL of the literal is not part of the length
        return f"{{ {len(self.default_bytes)}, {self.lower_full_name}__default_value_data }}"

    def default_value_c_type(self) -> str | None:
        return "ProtobufCBinaryData"

    def generate_static_init(self, printer: Printer) -> None:
        cardinality = self.field.cardinality
        if cardinality == Cardinality.REQUIRED:
            printer.print("$default_value$", self.variables)
        elif cardinality == Cardinality.OPTIONAL:
            if uses_presence_flag(self.field):
                printer.print("0, ")
            printer.print("$default_value$", self.variables)
        else:
            self._warn_repeated_default()
            printer.print("0,NULL")

    def generate_descriptor_initializer(self, printer: Printer) -> None:
        self.generate_descriptor_initializer_generic(printer, True, self.kind.c_type_macro, "NULL")


class StringFieldGenerator(FieldGenerator):
    """Generator for string fields, stored as NUL terminated char pointers."""

    kind = FieldKind.STRING

    def __init__(self, field: SchemaField):
        super().__init__(field)
        self.variables["default"] = f"{self.lower_full_name}__default_value"

    @property
    def default_bytes(self) -> bytes:
        if self.field.default_value is None:
            return b""
        return self.field.default_value.encode("utf-8")

    def generate_struct_members(self, printer: Printer) -> None:
        if self.field.cardinality == Cardinality.REPEATED:
            printer.print("size_t n_$name$$deprecated$;\n", self.variables)
            printer.print("char **$name$$deprecated$;\n", self.variables)
        else:
            printer.print("char *$name$$deprecated$;\n", self.variables)

    def generate_default_value_declarations(self, printer: Printer) -> None:
        printer.print("extern char $default$[];\n", self.variables)

    def generate_default_value_implementations(self, printer: Printer) -> None:
        variables = dict(self.variables, escaped=cescape(self.default_bytes))
        printer.print('char $default$[] = "$escaped$";\n', variables)

    def get_default_value(self) -> str:
        return self.variables["default"]

    def generate_static_init(self, printer: Printer) -> None:
        if self.field.cardinality == Cardinality.REPEATED:
            self._warn_repeated_default()
            printer.print("0,NULL")
        elif self.field.has_default_value:
            printer.print("$default$", self.variables)
        elif self.field.file.syntax == 3:
            printer.print("(char *)protobuf_c_empty_string")
        else:
            printer.print("NULL")

    def generate_descriptor_initializer(self, printer: Printer) -> None:
        self.generate_descriptor_initializer_generic(printer, False, self.kind.c_type_macro, "NULL")


FIELD_GENERATORS: dict[FieldKind, type[FieldGenerator]] = {
    FieldKind.BYTES: BytesFieldGenerator,
    FieldKind.STRING: StringFieldGenerator,
}


def make_field_generator(field: SchemaField) -> FieldGenerator:
    """Create the generator for a field's kind."""
    try:
        generator_type = FIELD_GENERATORS[field.kind]
    except KeyError:
        raise UnsupportedFieldKind(
            f"No generator for {field.kind} field {field.full_name}"
        ) from None
    return generator_type(field)
