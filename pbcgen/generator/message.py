"""Message level generation: struct, initializer and descriptor tables."""

import logging

from .fields import FieldGenerator, has_static_default, make_field_generator
from .naming import full_name_to_c, full_name_to_lower, full_name_to_upper
from .printer import Printer, print_comment
from .ranges import write_int_ranges
from .types import SchemaMessage
from .util import camel_to_lower, camel_to_upper, convert_to_spaces

logger = logging.getLogger(__name__)


class MessageGenerator:
    """Emit the C code for one message and its fields."""

    def __init__(self, message: SchemaMessage):
        self.message = message
        self.file = message.file
        self.field_generators: list[FieldGenerator] = [
            make_field_generator(f) for f in message.fields
        ]
        self.classname = full_name_to_c(message.full_name, self.file)
        self.variables = {
            "classname": self.classname,
            "lcclassname": full_name_to_lower(message.full_name, self.file),
            "ucclassname": full_name_to_upper(message.full_name, self.file),
            "fullname": message.full_name,
            "shortname": message.name,
            "packagename": self.file.package,
            "n_fields": str(len(message.fields)),
        }

    def _oneof_variables(self, oneof: str) -> dict[str, str]:
        oneof_full_name = f"{self.message.full_name}.{oneof}"
        return dict(
            self.variables,
            oneofname=camel_to_lower(oneof),
            uconeofname=camel_to_upper(oneof),
            foneofname=full_name_to_c(oneof_full_name, self.file),
            ufoneofname=full_name_to_upper(oneof_full_name, self.file),
        )

    def generate_struct_typedef(self, printer: Printer) -> None:
        printer.print("typedef struct $classname$ $classname$;\n", self.variables)

    def generate_enums(self, printer: Printer) -> None:
        """Emit the case enum of every oneof."""
        for oneof in self.message.oneofs():
            variables = self._oneof_variables(oneof)
            printer.print("typedef enum {\n")
            with printer.indent():
                printer.print("$ufoneofname$__NOT_SET = 0,\n", variables)
                for gen in self.field_generators:
                    if gen.field.oneof != oneof:
                        continue
                    printer.print(
                        "$ucclassname$__$uconeofname$_$fieldname$ = $fieldnum$,\n",
                        dict(
                            variables,
                            fieldname=camel_to_upper(gen.field.name),
                            fieldnum=str(gen.field.number),
                        ),
                    )
                printer.print("PROTOBUF_C__FORCE_ENUM_TO_BE_INT_SIZE($ufoneofname$__CASE)\n", variables)
            printer.print("} $foneofname$Case;\n\n", variables)

    def generate_struct_definition(self, printer: Printer) -> None:
        print_comment(printer, self.message.comment)
        printer.print("struct  $classname$\n{\n", self.variables)
        with printer.indent():
            printer.print("ProtobufCMessage base;\n")
            for gen in self.field_generators:
                if gen.field.oneof is None:
                    gen.generate_struct_members(printer)
            for oneof in self.message.oneofs():
                variables = self._oneof_variables(oneof)
                printer.print("$foneofname$Case $oneofname$_case;\n", variables)
                printer.print("union {\n")
                with printer.indent():
                    for gen in self.field_generators:
                        if gen.field.oneof == oneof:
                            gen.generate_struct_members(printer)
                printer.print("};\n")
        printer.print("};\n")

        self.generate_static_init_macro(printer)

    def generate_static_init_macro(self, printer: Printer) -> None:
        printer.print(
            "#define $ucclassname$__INIT \\\n"
            " { PROTOBUF_C_MESSAGE_INIT (&$lcclassname$__descriptor) \\\n    ",
            self.variables,
        )
        for gen in self.field_generators:
            if gen.field.oneof is None:
                printer.print(", ")
                gen.generate_static_init(printer)
        for oneof in self.message.oneofs():
            printer.print(", $ufoneofname$__NOT_SET, {0}", self._oneof_variables(oneof))
        printer.print(" }\n\n")

    def generate_default_value_declarations(self, printer: Printer) -> None:
        for gen in self.field_generators:
            if has_static_default(gen.field):
                gen.generate_default_value_declarations(printer)

    def generate_helper_function_declarations(self, printer: Printer) -> None:
        self.generate_default_value_declarations(printer)
        variables = dict(self.variables, pad=convert_to_spaces("void   "))
        printer.print(
            "/* $classname$ methods */\n"
            "void   $lcclassname$__init\n"
            "$pad$($classname$ *message);\n",
            variables,
        )

    def generate_descriptor_declarations(self, printer: Printer) -> None:
        printer.print(
            "extern const ProtobufCMessageDescriptor $lcclassname$__descriptor;\n",
            self.variables,
        )

    def generate_helper_functions(self, printer: Printer) -> None:
        variables = dict(self.variables, pad=convert_to_spaces("void   "))
        printer.print(
            "void   $lcclassname$__init\n"
            "$pad$($classname$ *message)\n"
            "{\n"
            "  static const $classname$ init_value = $ucclassname$__INIT;\n"
            "  *message = init_value;\n"
            "}\n",
            variables,
        )

    def generate_message_descriptor(self, printer: Printer) -> None:
        logger.debug("Generating descriptor for %s", self.message.full_name)

        defaults = [gen for gen in self.field_generators if has_static_default(gen.field)]
        for gen in defaults:
            gen.generate_default_value_implementations(printer)
        for gen in defaults:
            c_type = gen.default_value_c_type()
            if c_type is not None:
                printer.print(
                    "static const $type$ $lcfieldname$__default_value = $dv$;\n",
                    {"type": c_type, "lcfieldname": gen.lower_full_name, "dv": gen.get_default_value()},
                )

        by_number = sorted(self.field_generators, key=lambda g: g.field.number)
        if by_number:
            printer.print(
                "static const ProtobufCFieldDescriptor $lcclassname$__field_descriptors[$n_fields$] =\n{\n",
                self.variables,
            )
            with printer.indent():
                for gen in by_number:
                    gen.generate_descriptor_initializer(printer)
            printer.print("};\n")

            printer.print(
                "static const unsigned $lcclassname$__field_indices_by_name[] = {\n",
                self.variables,
            )
            by_name = sorted(range(len(by_number)), key=lambda i: by_number[i].field.name)
            for index in by_name:
                printer.print(
                    "  $index$,   /* field[$index$] = $name$ */\n",
                    {"index": str(index), "name": by_number[index].field.name},
                )
            printer.print("};\n")
        else:
            printer.print("#define $lcclassname$__field_descriptors NULL\n", self.variables)
            printer.print("#define $lcclassname$__field_indices_by_name NULL\n", self.variables)

        n_ranges = write_int_ranges(
            printer,
            [gen.field.number for gen in by_number],
            f"{self.variables['lcclassname']}__number_ranges",
        )

        variables = dict(self.variables, n_ranges=str(n_ranges))
        printer.print(
            "const ProtobufCMessageDescriptor $lcclassname$__descriptor =\n"
            "{\n"
            "  PROTOBUF_C__MESSAGE_DESCRIPTOR_MAGIC,\n"
            '  "$fullname$",\n'
            '  "$shortname$",\n'
            '  "$classname$",\n'
            '  "$packagename$",\n'
            "  sizeof($classname$),\n"
            "  $n_fields$,\n"
            "  $lcclassname$__field_descriptors,\n"
            "  $lcclassname$__field_indices_by_name,\n"
            "  $n_ranges$,"
            "  $lcclassname$__number_ranges,\n"
            "  (ProtobufCMessageInit) $lcclassname$__init,\n"
            "  NULL,NULL,NULL    /* reserved[123] */\n"
            "};\n",
            variables,
        )
