"""Row-oriented tables stored in packed little-endian byte buffers."""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from gemdb.types import (
    ArrayValue,
    Column,
    ColumnType,
    Field,
    Int32Value,
    Int64Value,
    Relation,
    StringValue,
    TableLink,
    UlidValue,
    Value,
    field_type_to_column_type,
)

ROW_ALIGNMENT = 16
CELL_WIDTH = 12
_MAX_U16 = 0xFFFF

# (size, alignment) of each stored column type
_LAYOUT = {
    ColumnType.ULID: (16, 16),
    ColumnType.INT32: (4, 4),
    ColumnType.INT64: (8, 8),
    ColumnType.STRING: (2, 2),
}

_VALUE_CLASSES = {
    ColumnType.ULID: UlidValue,
    ColumnType.INT32: Int32Value,
    ColumnType.INT64: Int64Value,
    ColumnType.STRING: StringValue,
}


def memory_align(offset: int, alignment: int) -> int:
    """Return the padding needed to bring ``offset`` up to a multiple of ``alignment``."""
    remainder = offset % alignment
    return 0 if remainder == 0 else alignment - remainder


@dataclass(frozen=True)
class Eq:
    """Query matching rows whose column ``column_name`` equals ``value``."""

    column_name: str
    value: Value


def _debug(value: Value) -> str:
    if isinstance(value, ArrayValue):
        return f"Array({_debug_rows(value.rows)})"
    if isinstance(value, StringValue):
        escaped = value.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'String("{escaped}")'
    name = {UlidValue: "Ulid", Int32Value: "Int32", Int64Value: "Int64"}[type(value)]
    return f"{name}({value.value})"


def _debug_rows(rows: Sequence[Sequence[Value]]) -> str:
    return "[" + ", ".join("[" + ", ".join(_debug(v) for v in row) + "]" for row in rows) + "]"


def _format_cell(value: Value) -> str:
    if isinstance(value, ArrayValue):
        return _debug_rows(value.rows)
    return f"{value.value:<{CELL_WIDTH}}"


class Table:
    """A table whose rows are packed into a byte buffer, with strings kept in a side storage."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.fields: list[Field] = []
        self.relations: list[Relation] = []
        self.columns: list[Column] = []
        self.column_offsets: list[int] = []
        self.column_indexes: dict[str, int] = {}
        self.row_width = 0
        self.records = bytearray()
        self.storage = bytearray()
        self._row_count = 0

    def __repr__(self) -> str:
        return f"Table({self.name!r})"

    def __len__(self) -> int:
        return self._row_count

    def add_fields(self, fields: Iterable[Field]) -> None:
        """Set the schema: lay out stored columns and register table links as relations."""
        if self._row_count:
            raise ValueError(f"table {self.name!r} already holds rows")
        self.fields = list(fields)
        self.relations = []
        self.columns = []
        offsets: list[int] = []
        indexes: dict[str, int] = {}
        offset = 0

        for field in self.fields:
            field_type = field.field_type
            if isinstance(field_type, TableLink):
                self.relations.append(
                    Relation(field.name, field_type.key, field_type.relation_type, field_type.table)
                )
                continue
            column_type = field_type_to_column_type(field_type)
            size, alignment = _LAYOUT[column_type]
            offset += memory_align(offset, alignment)
            indexes[field.name] = len(self.columns)
            offsets.append(offset)
            offset += size
            self.columns.append(Column(field.name, column_type))

        offset += memory_align(offset, ROW_ALIGNMENT)
        self.column_indexes = indexes
        self.column_offsets = offsets
        self.row_width = offset

    def add_relations(self, relations: Iterable[Relation]) -> None:
        """Replace the table's relations."""
        self.relations = list(relations)

    def get_field(self, field_index: int) -> Value:
        """Return column ``field_index`` of the first row."""
        if not self._row_count:
            raise IndexError(f"table {self.name!r} is empty")
        return self.extract_column(self.records[: self.row_width], field_index)

    def _store_string(self, text: str) -> int:
        if len(self.storage) % 2:
            self.storage.append(0)
        start = len(self.storage)
        if start > _MAX_U16:
            raise ValueError(f"string storage of table {self.name!r} is full")
        data = text.encode("utf-8")
        if len(data) > _MAX_U16:
            raise ValueError(f"string of {len(data)} bytes is too long")
        self.storage += struct.pack("<H", len(data)) + data
        return start

    def _encode(self, row: bytearray, offset: int, column: Column, value: Value) -> None:
        expected = _VALUE_CLASSES[column.column_type]
        if not isinstance(value, expected):
            raise TypeError(
                f"column {column.name!r} expects {expected.__name__}, got {type(value).__name__}"
            )
        if column.column_type is ColumnType.ULID:
            row[offset : offset + 16] = value.value.to_bytes(16, "little")
        elif column.column_type is ColumnType.INT32:
            struct.pack_into("<i", row, offset, value.value)
        elif column.column_type is ColumnType.INT64:
            struct.pack_into("<q", row, offset, value.value)
        else:
            struct.pack_into("<H", row, offset, self._store_string(value.value))

    def insert(self, values: Sequence[Value]) -> None:
        """Append a row; values beyond the stored columns are ignored."""
        if not self.columns:
            raise ValueError(f"table {self.name!r} has no columns")
        if len(values) < len(self.columns):
            raise ValueError(f"expected {len(self.columns)} values, got {len(values)}")
        row = bytearray(self.row_width)
        storage_mark = len(self.storage)
        try:
            for column, offset, value in zip(self.columns, self.column_offsets, values):
                self._encode(row, offset, column, value)
        except (TypeError, ValueError):
            del self.storage[storage_mark:]
            raise
        self.records += row
        self._row_count += 1

    def extract_column(self, record: bytes, column_index: int) -> Value:
        """Decode column ``column_index`` from the bytes of one row."""
        if len(record) < self.row_width:
            raise ValueError(f"record of {len(record)} bytes is shorter than row width {self.row_width}")
        column = self.columns[column_index]
        offset = self.column_offsets[column_index]
        if column.column_type is ColumnType.ULID:
            return UlidValue(int.from_bytes(bytes(record[offset : offset + 16]), "little"))
        if column.column_type is ColumnType.INT32:
            return Int32Value(struct.unpack_from("<i", record, offset)[0])
        if column.column_type is ColumnType.INT64:
            return Int64Value(struct.unpack_from("<q", record, offset)[0])
        start = struct.unpack_from("<H", record, offset)[0]
        (length,) = struct.unpack_from("<H", self.storage, start)
        return StringValue(bytes(self.storage[start + 2 : start + 2 + length]).decode("utf-8"))

    def extract_record(self, index: int) -> list[Value]:
        """Decode every stored column of row ``index``."""
        if not 0 <= index < self._row_count:
            raise IndexError(f"row {index} out of range")
        start = index * self.row_width
        record = bytes(self.records[start : start + self.row_width])
        return [self.extract_column(record, i) for i in range(len(self.columns))]

    def matches(self, query: Optional[Eq], values: Sequence[Value]) -> bool:
        """Tell whether a decoded row satisfies ``query``; only ulid and int32 columns can match."""
        if query is None:
            return True
        value = values[self.column_indexes[query.column_name]]
        if isinstance(value, (UlidValue, Int32Value)) and type(value) is type(query.value):
            return value == query.value
        return False

    def select(self, query: Optional[Eq] = None) -> list[list[Value]]:
        """Return matching rows, each followed by one ArrayValue per relation."""
        rows = []
        for index in range(self._row_count):
            columns = self.extract_record(index)
            if not self.matches(query, columns):
                continue
            for relation in self.relations:
                related = relation.table.select(Eq(relation.key, columns[0]))
                columns.append(ArrayValue(related))
            rows.append(columns)
        return rows

    def render(self, rows: Iterable[Sequence[Value]]) -> str:
        """Format rows as a fixed-width text table."""
        headers = [column.name for column in self.columns] + [r.name for r in self.relations]
        lines = [
            "".join(f"{name:<{CELL_WIDTH}}" for name in headers),
            "".join(f"{'-' * (CELL_WIDTH - 1):<{CELL_WIDTH}}" for _ in headers),
        ]
        lines.extend("".join(_format_cell(value) for value in row) for row in rows)
        return "\n".join(lines) + "\n\n"

    def print(self, rows: Iterable[Sequence[Value]]) -> None:
        """Write rows to standard output as a text table."""
        sys.stdout.write(self.render(rows))