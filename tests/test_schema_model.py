"""Tests for the structural schema model."""

import pytest

from contractgate.kernel.schema import (
    ABSENT,
    Absent,
    LITERAL_KEY,
    LeafShape,
    ObjectShape,
    Present,
    SchemaDocument,
    SchemaShapeError,
    canonical_dumps,
    enum_values,
    shape_from_json,
    shape_key,
)


def test_missing_properties_and_required_are_empty():
    doc = SchemaDocument.from_json({"type": "object"})
    assert doc.properties == {}
    assert doc.required == frozenset()


def test_null_properties_and_required_are_empty():
    doc = SchemaDocument.from_json({"properties": None, "required": None})
    assert doc.properties == {}
    assert doc.required == frozenset()


def test_leaf_and_object_shapes():
    doc = SchemaDocument.from_json({
        "properties": {
            "name": {"type": "string"},
            "address": {
                "type": "object",
                "properties": {"city": {"type": "string"}},
                "required": ["city"],
            },
        },
        "required": ["name"],
    })
    assert isinstance(doc.properties["name"], LeafShape)
    assert doc.properties["name"].extra == {"type": "string"}
    address = doc.properties["address"]
    assert isinstance(address, ObjectShape)
    assert address.required == ("city",)
    assert isinstance(address.properties["city"], LeafShape)
    assert doc.required == frozenset({"name"})


def test_enum_is_tracked_only_when_list():
    listed = shape_from_json({"type": "string", "enum": ["A", "B"]})
    assert listed.enum == ("A", "B")
    assert "enum" not in listed.extra

    scalar = shape_from_json({"enum": "A"})
    assert scalar.enum is None
    assert scalar.extra == {"enum": "A"}


def test_shape_equality_ignores_key_order():
    a = shape_from_json({"type": "string", "format": "date"})
    b = shape_from_json({"format": "date", "type": "string"})
    assert a == b
    assert shape_key(a) == shape_key(b)


def test_shape_equality_is_deep():
    a = shape_from_json({"type": "array", "items": {"type": "string"}})
    b = shape_from_json({"type": "array", "items": {"type": "integer"}})
    assert a != b
    assert shape_key(a) != shape_key(b)


def test_leaf_never_equals_object():
    leaf = shape_from_json({"type": "object"})
    obj = shape_from_json({"type": "object", "properties": {}})
    assert leaf != obj


def test_boolean_schema_is_a_literal_leaf():
    shape = shape_from_json(True)
    assert isinstance(shape, LeafShape)
    assert shape.extra == {LITERAL_KEY: True}
    assert shape != shape_from_json(False)


def test_enum_values_handles_unhashable_members():
    shape = shape_from_json({"enum": [{"a": 1}, [1, 2], "x"]})
    assert len(enum_values(shape)) == 3


def test_canonical_dumps_keeps_booleans_apart_from_numbers():
    assert canonical_dumps(True) == "true"
    assert canonical_dumps(1) == "1"
    assert canonical_dumps([0, 1]) != canonical_dumps([False, True])


def test_canonical_dumps_integral_floats_are_integers():
    assert canonical_dumps(1.0) == "1"
    assert canonical_dumps({"b": [2.0], "a": 1.5}) == '{"a":1.5,"b":[2]}'


def test_shape_key_separates_const_true_from_const_one():
    assert shape_key(shape_from_json({"const": 1})) != shape_key(shape_from_json({"const": True}))
    assert shape_key(shape_from_json({"const": 1})) == shape_key(shape_from_json({"const": 1.0}))


def test_enum_values_bool_and_int_are_distinct():
    assert enum_values(shape_from_json({"enum": [1, True]})) == frozenset({"1", "true"})


@pytest.mark.parametrize(
    "raw",
    [
        [],
        "schema",
        {"properties": []},
        {"required": "name"},
        {"required": ["name", 3]},
    ],
)
def test_malformed_documents_raise(raw):
    with pytest.raises(SchemaShapeError):
        SchemaDocument.from_json(raw)


def test_from_json_bytes_invalid_json():
    with pytest.raises(SchemaShapeError, match="invalid JSON"):
        SchemaDocument.from_json_bytes(b"{not json")


def test_absent_and_empty_present_are_distinct():
    empty = Present(SchemaDocument.from_json({}))
    assert isinstance(ABSENT, Absent)
    assert empty != ABSENT
    assert not isinstance(empty, Absent)
