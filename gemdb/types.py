"""Field, column, relation and value types that describe and fill tables."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from gemdb.table import Table


class FieldType(enum.Enum):
    """Scalar field types that are stored inline in a row."""

    ULID = "ulid"
    INT32 = "int32"
    INT64 = "int64"
    STRING = "string"


class ColumnType(enum.Enum):
    """Physical type of a stored column."""

    ULID = "ulid"
    INT32 = "int32"
    INT64 = "int64"
    STRING = "string"


class RelationType(enum.Enum):
    """Cardinality of a relation to another table."""

    SCALAR = "scalar"
    ARRAY = "array"


@dataclass(frozen=True)
class TableLink:
    """A virtual field: rows of ``table`` whose ``key`` column equals this row's first column."""

    key: str
    relation_type: RelationType
    table: Table


@dataclass(frozen=True)
class RelationLink:
    """A stored reference to a row of another table, kept as a 32-bit integer."""

    table: Table


@dataclass(frozen=True)
class Field:
    """A named field of a table schema."""

    name: str
    field_type: Union[FieldType, TableLink, RelationLink]


@dataclass(frozen=True)
class Column:
    """A stored column with its physical type."""

    name: str
    column_type: ColumnType


@dataclass(frozen=True)
class Relation:
    """A link from a table to rows of another table."""

    name: str
    key: str
    relation_type: RelationType
    table: Table


def _check_int(value: object, low: int, high: int, kind: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{kind} value must be an int, got {type(value).__name__}")
    if not low <= value <= high:
        raise ValueError(f"{value} is out of range for {kind}")


@dataclass(frozen=True)
class UlidValue:
    """A 128-bit unsigned identifier."""

    value: int

    def __post_init__(self) -> None:
        _check_int(self.value, 0, 2**128 - 1, "ulid")


@dataclass(frozen=True)
class Int32Value:
    """A signed 32-bit integer."""

    value: int

    def __post_init__(self) -> None:
        _check_int(self.value, -(2**31), 2**31 - 1, "int32")


@dataclass(frozen=True)
class Int64Value:
    """A signed 64-bit integer."""

    value: int

    def __post_init__(self) -> None:
        _check_int(self.value, -(2**63), 2**63 - 1, "int64")


@dataclass(frozen=True)
class StringValue:
    """A text value."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"string value must be a str, got {type(self.value).__name__}")


@dataclass(frozen=True)
class ArrayValue:
    """Rows of a related table attached to a selected row."""

    rows: list


Value = Union[UlidValue, Int32Value, Int64Value, StringValue, ArrayValue]

_SCALAR_COLUMN_TYPES = {
    FieldType.ULID: ColumnType.ULID,
    FieldType.INT32: ColumnType.INT32,
    FieldType.INT64: ColumnType.INT64,
    FieldType.STRING: ColumnType.STRING,
}


def field_type_to_column_type(field_type: Union[FieldType, TableLink, RelationLink]) -> ColumnType:
    """Return the physical column type used to store a field of ``field_type``."""
    if isinstance(field_type, (TableLink, RelationLink)):
        return ColumnType.INT32
    try:
        return _SCALAR_COLUMN_TYPES[field_type]
    except (KeyError, TypeError):
        raise TypeError(f"unknown field type: {field_type!r}") from None