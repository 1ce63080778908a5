"""C identifier synthesis for schema names."""

from .types import SchemaField, SchemaFile
from .util import (
    camel_to_lower,
    camel_to_upper,
    fast_hex,
    split_string_using,
    to_camel,
    to_lower,
)

# C and C++ keywords, a field named after one of these gets a trailing underscore
C_KEYWORDS = frozenset(
    [
        "and",
        "and_eq",
        "asm",
        "auto",
        "bitand",
        "bitor",
        "bool",
        "break",
        "case",
        "catch",
        "char",
        "class",
        "compl",
        "const",
        "const_cast",
        "continue",
        "default",
        "delete",
        "do",
        "double",
        "dynamic_cast",
        "else",
        "enum",
        "explicit",
        "extern",
        "false",
        "float",
        "for",
        "friend",
        "goto",
        "if",
        "inline",
        "int",
        "long",
        "mutable",
        "namespace",
        "new",
        "not",
        "not_eq",
        "operator",
        "or",
        "or_eq",
        "private",
        "protected",
        "public",
        "register",
        "reinterpret_cast",
        "return",
        "short",
        "signed",
        "sizeof",
        "static",
        "static_cast",
        "struct",
        "switch",
        "template",
        "this",
        "throw",
        "true",
        "try",
        "typedef",
        "typeid",
        "typename",
        "union",
        "unsigned",
        "using",
        "virtual",
        "void",
        "volatile",
        "wchar_t",
        "while",
        "xor",
        "xor_eq",
    ]
)

DEPRECATED_ATTRIBUTE = " PROTOBUF_C__DEPRECATED"


def override_full_name(full_name: str, package: str, c_package: str | None) -> str:
    """Swap the leading package of full_name for the c_package override."""
    if not c_package:
        return full_name

    new_name = c_package
    if not package:
        new_name += "."
    return new_name + full_name[len(package) :]


def _pieces(full_name: str, file: SchemaFile | None) -> list[str]:
    if file is not None:
        full_name = override_full_name(full_name, file.package, file.c_package)
    return split_string_using(full_name, ".")


def full_name_to_lower(full_name: str, file: SchemaFile | None = None) -> str:
    """foo.bar.FooBar -> foo__bar__foo_bar."""
    return "__".join(camel_to_lower(p) for p in _pieces(full_name, file))


def full_name_to_upper(full_name: str, file: SchemaFile | None = None) -> str:
    """foo.bar.FooBar -> FOO__BAR__FOO_BAR."""
    return "__".join(camel_to_upper(p) for p in _pieces(full_name, file))


def full_name_to_c(full_name: str, file: SchemaFile | None = None) -> str:
    """foo.bar.FooBar -> Foo__Bar__FooBar."""
    return "__".join(to_camel(p) for p in _pieces(full_name, file))


def field_name(field: SchemaField) -> str:
    """Member name used for a field inside the generated struct."""
    result = to_lower(field.name)
    if result in C_KEYWORDS:
        result += "_"
    return result


def field_deprecated(field: SchemaField) -> str:
    return DEPRECATED_ATTRIBUTE if field.deprecated else ""


def strip_proto(filename: str) -> str:
    if filename.endswith(".protodevel"):
        return filename[: -len(".protodevel")]
    if filename.endswith(".proto"):
        return filename[: -len(".proto")]
    return filename


def filename_identifier(filename: str) -> str:
    """Convert a file name into a valid C identifier.

    Every byte that is not an ASCII letter or digit is replaced by an
    underscore followed by its hex code, so distinct names never collide.
    """
    result: list[str] = []
    for byte in filename.encode("utf-8"):
        c = chr(byte)
        if c.isascii() and c.isalnum():
            result.append(c)
        else:
            result.append("_" + fast_hex(byte))
    return "".join(result)
