"""Command that builds a small demo database and prints its items."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from gemdb.table import Eq, Table
from gemdb.types import (
    Field,
    FieldType,
    Int32Value,
    Int64Value,
    RelationType,
    StringValue,
    TableLink,
)

ITEM_255 = Eq("id", Int32Value(255))


def build_demo() -> dict[str, Table]:
    """Create the demo ``items`` and ``comments`` tables, filled with sample rows."""
    items = Table("items")
    comments = Table("comments")
    tables = {"items": items, "comments": comments}

    items.add_fields(
        [
            Field("id", FieldType.INT32),
            Field("title", FieldType.STRING),
            Field("estimate", FieldType.INT64),
            Field("comments", TableLink("item_id", RelationType.ARRAY, comments)),
        ]
    )
    comments.add_fields(
        [
            Field("id", FieldType.INT32),
            Field("item_id", FieldType.INT32),
            Field("comment", FieldType.INT32),
        ]
    )

    items.insert([Int32Value(255), StringValue("ÀÀ"), Int64Value(65535), Int32Value(255)])
    items.insert([Int32Value(10), StringValue("AA"), Int64Value(20), Int32Value(30)])
    comments.insert([Int32Value(100), Int32Value(255), Int32Value(200)])
    return tables


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Build the demo database and print every item with its comments."""
    parser = argparse.ArgumentParser(
        prog="gemdb", description="Build a demo database and print its items."
    )
    parser.parse_args(argv)
    items = build_demo()["items"]
    items.print(items.select(None))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())