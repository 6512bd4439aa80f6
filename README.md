# gemdb

A small in-memory table store. Each table keeps its rows in one packed byte
buffer. Every column sits at an aligned offset inside a fixed-width row, and
strings go into a separate storage area. A table can link to another table
through a key column. When you select from the parent, each row gets the
matching child rows under that link.

## Installing

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Running the demo

```
gemdb
```

The command takes no options other than `--help`. It calls
`gemdb.cli.build_demo()`, which returns a dict with an `items` table and a
`comments` table, with items linked to their comments. It then prints every
item together with its comments as a fixed-width text table.

## Using the library

```python
from gemdb.table import Table, Eq
from gemdb.types import (
    Field, FieldType, TableLink, RelationType,
    Int32Value, Int64Value, StringValue,
)

comments = Table("comments")
items = Table("items")

items.add_fields([
    Field("id", FieldType.INT32),
    Field("title", FieldType.STRING),
    Field("estimate", FieldType.INT64),
    Field("comments", TableLink(key="item_id",
                                relation_type=RelationType.ARRAY,
                                table=comments)),
])
comments.add_fields([
    Field("id", FieldType.INT32),
    Field("item_id", FieldType.INT32),
    Field("comment", FieldType.INT32),
])

items.insert([Int32Value(255), StringValue("hello"), Int64Value(65535)])
comments.insert([Int32Value(100), Int32Value(255), Int32Value(200)])

rows = items.select(Eq("id", Int32Value(255)))
print(items.render(rows))
```

### Tables

- `Table.add_fields(fields)` sets the schema. Scalar fields become stored
  columns. A field of type `TableLink` becomes a `Relation` and takes no room
  in the row. A field of type `RelationLink` is stored as a 32-bit integer.
  Calling this on a table that already holds rows raises `ValueError`.
- `Table.insert(values)` appends a row. It needs at least one value per stored
  column, and it ignores any values past that. If a value is of the wrong kind
  for its column, the call raises `TypeError` and the table is left unchanged.
- `Table.select(query=None)` returns the rows that match. Each row is a list of
  values. After the values, every relation adds one `ArrayValue` holding the
  child rows whose key column equals the row's first column.
- `Table.extract_record(index)`, `Table.extract_column(record, column_index)`
  and `Table.get_field(field_index)` decode stored rows. `get_field` reads from
  the first row.
- `Table.render(rows)` returns the rows as a text table, and `Table.print(rows)`
  writes that table to standard output. `len(table)` gives the number of rows.

### Values and column types

| Value class   | Column type | Size in row | Alignment |
|---------------|-------------|-------------|-----------|
| `UlidValue`   | ULID        | 16 bytes    | 16        |
| `Int32Value`  | INT32       | 4 bytes     | 4         |
| `Int64Value`  | INT64       | 8 bytes     | 8         |
| `StringValue` | STRING      | 2 bytes     | 2         |

Every row is padded to a multiple of 16 bytes. A string column holds a 2-byte
offset into the string storage. That storage keeps each string as a 2-byte
length followed by its UTF-8 bytes. A single string can be at most 65535 bytes,
and the string storage can grow only until its offsets reach 65535. The integer
value classes check their ranges when you create them, and an out-of-range
value raises `ValueError`.

### Filtering

`Eq(column_name, value)` matches a row when the named column holds a value of
the same class as `value` and the two are equal. Only ULID and 32-bit integer
columns can ever match. A comparison on a 64-bit integer column or a string
column never matches.

### Query descriptions

`gemdb.query` describes nested queries as plain data: `ArrayQuery`,
`FieldQuery`, `Select`, `Where`, `EqOp` and `AndOp`, with the literals `Int32`
and `Text`. `ITEMS_QUERY` is a sample query. `apply(query)` writes the name of a
`FieldQuery` to standard output. It does nothing for an `ArrayQuery`, and it
raises `TypeError` for anything else.

## What it does not do

- Tables live in memory only. Nothing is written to disk.
- No server is included, and the command line does not accept queries.
- The query descriptions in `gemdb.query` are not run against tables. Only
  `Eq` filters on a single column are supported, through `Table.select`.