"""Loading and validation of the JSON schema model."""

import json
from typing import Any

from .naming import field_name
from .types import Cardinality, FieldKind, SchemaFile, SchemaMessage


class ValidationError(RuntimeError):
    """Raised when schema validation fails."""


def _validate_message(message: SchemaMessage) -> None:
    numbers: dict[int, str] = {}
    names: set[str] = set()

    for field in message.fields:
        if field.number <= 0:
            raise ValidationError(f"{field.full_name}: field number must be positive")
        if field.number in numbers:
            raise ValidationError(
                f"{field.full_name}: field number {field.number} already used by "
                f"{numbers[field.number]}"
            )
        numbers[field.number] = field.name

        # Member names are case folded, so Foo and foo would collide in C
        member = field_name(field)
        if member in names:
            raise ValidationError(f"{field.full_name}: duplicate field name {member}")
        names.add(member)

        if field.cardinality == Cardinality.REPEATED and field.has_default_value:
            raise ValidationError(f"{field.full_name}: repeated fields cannot have default values")
        if field.oneof is not None and field.cardinality != Cardinality.OPTIONAL:
            raise ValidationError(f"{field.full_name}: fields in a oneof must be optional")
        if field.kind == FieldKind.BYTES and field.default_value is not None:
            try:
                field.default_value.encode("latin-1")
            except UnicodeEncodeError as e:
                raise ValidationError(
                    f"{field.full_name}: bytes default must only contain characters up to U+00FF"
                ) from e

    for nested in message.nested_types:
        _validate_message(nested)


def validate(file: SchemaFile) -> None:
    """Validate a schema model."""
    if file.syntax not in (2, 3):
        raise ValidationError(f"{file.name}: unknown syntax {file.syntax}")

    for message in file.messages:
        _validate_message(message)

    if file.syntax == 3:
        for message in file.all_messages():
            for field in message.fields:
                if field.cardinality == Cardinality.REQUIRED:
                    raise ValidationError(
                        f"{field.full_name}: required fields are not allowed in proto3"
                    )
                if field.has_default_value:
                    raise ValidationError(
                        f"{field.full_name}: explicit default values are not allowed in proto3"
                    )


def from_dict(data: dict[str, Any]) -> SchemaFile:
    """Build and validate a schema model from decoded JSON."""
    try:
        file = SchemaFile.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Malformed schema: {e}") from e

    validate(file)
    return file


def load_schema(text: str) -> SchemaFile:
    """Parse a JSON schema document."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Schema is not valid JSON: {e}") from e
    return from_dict(data)
