import dataclasses

import pytest

from gemdb.query import (
    ITEMS_QUERY,
    AndOp,
    ArrayQuery,
    EqOp,
    FieldQuery,
    Int32,
    Select,
    Text,
    Where,
    apply,
)


def test_apply_field_prints_name(capsys):
    apply(FieldQuery("title"))
    assert capsys.readouterr().out == "title\n"


def test_apply_array_prints_nothing(capsys):
    apply(ArrayQuery("items", [Select([FieldQuery("title")])]))
    assert capsys.readouterr().out == ""


def test_apply_rejects_non_query():
    with pytest.raises(TypeError):
        apply(Select([FieldQuery("title")]))


def test_int32_range():
    assert Int32(255).value == 255
    with pytest.raises(ValueError):
        Int32(2**31)
    with pytest.raises(TypeError):
        Int32("255")
    with pytest.raises(TypeError):
        Int32(True)


def test_text_requires_str():
    assert Text("foo").value == "foo"
    with pytest.raises(TypeError):
        Text(5)


def test_sequences_become_tuples_and_compare_equal():
    a = AndOp([EqOp("id", Int32(255))])
    b = AndOp((EqOp("id", Int32(255)),))
    assert a == b
    assert isinstance(a.ops, tuple)


def test_nodes_are_immutable():
    query = FieldQuery("title")
    with pytest.raises(dataclasses.FrozenInstanceError):
        query.name = "other"
    assert query.name == "title"
    assert query == FieldQuery("title")


def test_invalid_children_rejected():
    with pytest.raises(TypeError):
        Select([Where(EqOp("id", Int32(1)))])
    with pytest.raises(TypeError):
        ArrayQuery("items", [FieldQuery("title")])
    with pytest.raises(TypeError):
        Where(FieldQuery("title"))
    with pytest.raises(TypeError):
        AndOp([FieldQuery("title")])
    with pytest.raises(TypeError):
        EqOp("id", 255)


def test_items_query_structure():
    assert ITEMS_QUERY.name == "items"
    select, where = ITEMS_QUERY.commands
    assert select.queries[0] == FieldQuery("title")
    comments = select.queries[1]
    assert comments.name == "comments"
    assert comments.commands == (Select([FieldQuery("comment")]),)
    assert where.op.ops == (EqOp("id", Int32(255)), EqOp("title", Text("foo")))