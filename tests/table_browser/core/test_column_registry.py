from __future__ import annotations

import pytest

from table_browser.core.column_registry import ColumnDescriptor, ColumnRegistry
from table_browser.core.exceptions import InvalidColumnReference


def _make_registry() -> ColumnRegistry:
    return ColumnRegistry(
        [
            ColumnDescriptor.for_field("name", label="Name"),
            ColumnDescriptor.for_field("age", label="Age"),
            ColumnDescriptor("initial", "Initial", lambda row: row["name"][:1]),
        ]
    )


def test_registration_order_is_natural_order():
    registry = _make_registry()
    assert registry.ids() == ("name", "age", "initial")
    assert registry.labels() == {"name": "Name", "age": "Age", "initial": "Initial"}
    assert len(registry) == 3
    assert "age" in registry
    assert "zzz" not in registry


def test_duplicate_id_rejected():
    registry = _make_registry()
    with pytest.raises(ValueError):
        registry.register(ColumnDescriptor.for_field("age"))


def test_non_descriptor_rejected():
    with pytest.raises(TypeError):
        ColumnRegistry(["name"])


def test_get_unknown_raises_invalid_column_reference():
    registry = _make_registry()
    with pytest.raises(InvalidColumnReference):
        registry.get("zzz")
    # also a KeyError for callers that treat the registry as a mapping
    with pytest.raises(KeyError):
        registry.get("zzz")


def test_accessors_read_rows():
    registry = _make_registry()
    row = {"name": "Ann", "age": 30}
    accessors = registry.accessors()
    assert accessors["name"](row) == "Ann"
    assert accessors["age"](row) == 30
    assert accessors["initial"](row) == "A"


def test_field_accessor_tolerates_missing_field():
    column = ColumnDescriptor.for_field("email", field="mail")
    assert column.label == "email"
    assert column.accessor({"name": "Ann"}) is None
    assert column.accessor({"mail": "a@x.org"}) == "a@x.org"


def test_from_fields():
    registry = ColumnRegistry.from_fields(["a", "b"])
    assert registry.ids() == ("a", "b")
    assert [c.label for c in registry] == ["a", "b"]
