"""A nested query language: field selections, sub-arrays, filters and boolean operators."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Sequence, Union

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class Int32:
    """A signed 32-bit integer literal."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Int32 literal must be an int, got {type(self.value).__name__}")
        if not _INT32_MIN <= self.value <= _INT32_MAX:
            raise ValueError(f"{self.value} is out of range for int32")


@dataclass(frozen=True)
class Text:
    """A string literal."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"Text literal must be a str, got {type(self.value).__name__}")


Literal = Union[Int32, Text]


@dataclass(frozen=True)
class EqOp:
    """Condition that field ``name`` equals ``value``."""

    name: str
    value: Literal

    def __post_init__(self) -> None:
        if not isinstance(self.value, (Int32, Text)):
            raise TypeError(f"EqOp value must be Int32 or Text, got {type(self.value).__name__}")


@dataclass(frozen=True)
class AndOp:
    """Condition that every one of ``ops`` holds."""

    ops: tuple

    def __init__(self, ops: Sequence[Op]) -> None:
        ops = tuple(ops)
        for op in ops:
            if not isinstance(op, (EqOp, AndOp)):
                raise TypeError(f"AndOp operand must be an operator, got {type(op).__name__}")
        object.__setattr__(self, "ops", ops)


Op = Union[EqOp, AndOp]


@dataclass(frozen=True)
class FieldQuery:
    """Selection of a single scalar field."""

    name: str


@dataclass(frozen=True)
class Select:
    """Command choosing which sub-queries to return."""

    queries: tuple

    def __init__(self, queries: Sequence[Query]) -> None:
        queries = tuple(queries)
        for query in queries:
            if not isinstance(query, (FieldQuery, ArrayQuery)):
                raise TypeError(f"Select entry must be a query, got {type(query).__name__}")
        object.__setattr__(self, "queries", queries)


@dataclass(frozen=True)
class Where:
    """Command filtering rows by an operator."""

    op: Op

    def __post_init__(self) -> None:
        if not isinstance(self.op, (EqOp, AndOp)):
            raise TypeError(f"Where needs an operator, got {type(self.op).__name__}")


Command = Union[Select, Where]


@dataclass(frozen=True)
class ArrayQuery:
    """Selection of a collection ``name`` shaped by a sequence of commands."""

    name: str
    commands: tuple

    def __init__(self, name: str, commands: Sequence[Command]) -> None:
        commands = tuple(commands)
        for command in commands:
            if not isinstance(command, (Select, Where)):
                raise TypeError(f"ArrayQuery command must be Select or Where, got {type(command).__name__}")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "commands", commands)


Query = Union[FieldQuery, ArrayQuery]


ITEMS_QUERY = ArrayQuery(
    "items",
    [
        Select(
            [
                FieldQuery("title"),
                ArrayQuery("comments", [Select([FieldQuery("comment")])]),
            ]
        ),
        Where(AndOp([EqOp("id", Int32(255)), EqOp("title", Text("foo"))])),
    ],
)


def apply(query: Query) -> None:
    """Run a query: a field query writes its name to standard output; an array query does nothing yet."""
    if isinstance(query, FieldQuery):
        sys.stdout.write(f"{query.name}\n")
    elif isinstance(query, ArrayQuery):
        return
    else:
        raise TypeError(f"not a query: {query!r}")