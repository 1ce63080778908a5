"""Schema model types consumed by the code generators."""

from dataclasses import dataclass, field
from enum import StrEnum, auto

from dataclasses_json import DataClassJsonMixin


class FieldKind(StrEnum):
    """Wire type of a schema field."""

    DOUBLE = auto()
    FLOAT = auto()
    INT32 = auto()
    INT64 = auto()
    UINT32 = auto()
    UINT64 = auto()
    SINT32 = auto()
    SINT64 = auto()
    FIXED32 = auto()
    FIXED64 = auto()
    SFIXED32 = auto()
    SFIXED64 = auto()
    BOOL = auto()
    ENUM = auto()
    STRING = auto()
    BYTES = auto()
    MESSAGE = auto()

    @property
    def c_type_macro(self) -> str:
        """Suffix of the PROTOBUF_C_TYPE_* constant for this kind."""
        return self.value.upper()


class Cardinality(StrEnum):
    """How many times a field may appear in a message."""

    REQUIRED = auto()
    OPTIONAL = auto()
    REPEATED = auto()


@dataclass
class SchemaField(DataClassJsonMixin):
    """Represents one field of a message.

    default_value is kept as text and is only interpreted by the generator
    for the field's kind:
    - bytes: each character is one byte (latin-1)
    - string: UTF-8 text

    full_name is derived from the enclosing message when left empty.
    """

    name: str
    number: int
    kind: FieldKind
    cardinality: Cardinality = Cardinality.OPTIONAL
    full_name: str = ""
    default_value: str | None = None
    oneof: str | None = None
    deprecated: bool = False
    comment: str | None = None

    def __post_init__(self) -> None:
        # Lookup-only back references, filled in by SchemaFile
        self._file: "SchemaFile | None" = None
        self._message: "SchemaMessage | None" = None

    @property
    def has_default_value(self) -> bool:
        return self.default_value is not None

    @property
    def is_part_of_exclusive_group(self) -> bool:
        return self.oneof is not None

    @property
    def file(self) -> "SchemaFile":
        if self._file is None:
            raise RuntimeError(f"Field {self.name} is not attached to a schema file")
        return self._file

    @property
    def message(self) -> "SchemaMessage":
        if self._message is None:
            raise RuntimeError(f"Field {self.name} is not attached to a message")
        return self._message


@dataclass
class SchemaMessage(DataClassJsonMixin):
    """Represents a message (aggregate) definition."""

    name: str
    fields: list[SchemaField] = field(default_factory=list)
    nested_types: list["SchemaMessage"] = field(default_factory=list)
    full_name: str = ""
    comment: str | None = None

    def __post_init__(self) -> None:
        self._file: "SchemaFile | None" = None

    @property
    def file(self) -> "SchemaFile":
        if self._file is None:
            raise RuntimeError(f"Message {self.name} is not attached to a schema file")
        return self._file

    def oneofs(self) -> list[str]:
        """Return oneof names in declaration order."""
        names: list[str] = []
        for f in self.fields:
            if f.oneof is not None and f.oneof not in names:
                names.append(f.oneof)
        return names


@dataclass
class SchemaFile(DataClassJsonMixin):
    """Represents a complete schema file.

    c_package overrides the package segment of generated C identifiers.
    """

    name: str
    package: str = ""
    syntax: int = 2
    c_package: str | None = None
    messages: list[SchemaMessage] = field(default_factory=list)

    def __post_init__(self) -> None:
        for message in self.messages:
            self._link(message, self.package)

    def _link(self, message: SchemaMessage, scope: str) -> None:
        if not message.full_name:
            message.full_name = f"{scope}.{message.name}" if scope else message.name
        message._file = self
        for f in message.fields:
            if not f.full_name:
                f.full_name = f"{message.full_name}.{f.name}"
            f._file = self
            f._message = message
        for nested in message.nested_types:
            self._link(nested, message.full_name)

    def all_messages(self) -> list[SchemaMessage]:
        """Return every message, nested types first."""
        result: list[SchemaMessage] = []

        def _walk(message: SchemaMessage) -> None:
            for nested in message.nested_types:
                _walk(nested)
            result.append(message)

        for message in self.messages:
            _walk(message)
        return result


@dataclass(frozen=True)
class IntRange:
    """One entry of a compressed number range table."""

    start_value: int
    orig_index: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.start_value, self.orig_index)

