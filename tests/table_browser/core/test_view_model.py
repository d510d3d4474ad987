from __future__ import annotations

import pytest

from table_browser.core.column_order import initialize, toggle_pin
from table_browser.core.column_registry import ColumnRegistry
from table_browser.core.filter_state import FilterState, VisibilityState
from table_browser.core.view_model import (
    build_view_model,
    filter_rows,
    page_count,
    page_rows,
    visible_columns,
)


def _make_rows(n: int):
    return [{"id": i, "name": f"person{i}"} for i in range(n)]


def test_visible_columns_follow_order_and_skip_hidden():
    state = toggle_pin(initialize(["id", "name", "age"]), "age")
    vis = VisibilityState({"name": False})
    assert visible_columns(state, vis) == ("age", "id")


def test_filter_rows_keeps_source_positions():
    registry = ColumnRegistry.from_fields(["id", "name"])
    rows = _make_rows(12)
    kept = filter_rows(rows, registry, FilterState(global_filter="person1"), VisibilityState())
    assert [i for i, _ in kept] == [1, 10, 11]


def test_page_count():
    assert page_count(0, 10) == 1
    assert page_count(10, 10) == 1
    assert page_count(11, 10) == 2
    with pytest.raises(ValueError):
        page_count(5, 0)


def test_page_rows_slices():
    rows = list(range(25))
    assert page_rows(rows, 0, 10) == list(range(10))
    assert page_rows(rows, 2, 10) == [20, 21, 22, 23, 24]


def test_page_beyond_range_is_empty_not_an_error():
    rows = list(range(25))
    assert page_rows(rows, 3, 10) == []
    assert page_rows(rows, 99, 10) == []
    assert page_rows([], 0, 10) == []


def test_page_rows_rejects_negative_index_and_bad_size():
    with pytest.raises(ValueError):
        page_rows([1, 2], -1, 10)
    with pytest.raises(ValueError):
        page_rows([1, 2], 0, 0)


def test_build_view_model():
    registry = ColumnRegistry.from_fields(["id", "name"])
    rows = _make_rows(25)

    vm = build_view_model(
        initialize(registry.ids()),
        VisibilityState(),
        FilterState(),
        registry,
        rows,
        page_index=2,
        page_size=10,
    )

    assert vm.visible_columns == ("id", "name")
    assert vm.total_rows == 25
    assert vm.filtered_count == 25
    assert vm.page_count == 3
    assert [row["id"] for _, row in vm.page_rows] == [20, 21, 22, 23, 24]
    assert vm.can_previous
    assert not vm.can_next
