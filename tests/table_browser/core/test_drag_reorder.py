from __future__ import annotations

import pytest

from table_browser.core.column_order import ColumnOrderStore
from table_browser.core.column_registry import ColumnRegistry
from table_browser.core.drag_reorder import DragPhase, DragReorderController
from table_browser.core.exceptions import InvalidColumnReference


def _make_controller():
    store = ColumnOrderStore(ColumnRegistry.from_fields(["A", "B", "C", "D"]))
    return store, DragReorderController(store)


def test_begin_and_end_commits_reorder():
    store, drag = _make_controller()

    drag.begin("A")
    assert drag.phase is DragPhase.DRAGGING
    assert drag.dragging_id == "A"

    state = drag.end("C")
    assert drag.phase is DragPhase.IDLE
    assert drag.dragging_id is None
    assert state.order == ("B", "C", "A", "D")
    assert store.state is state


def test_drop_outside_any_target_commits_nothing():
    store, drag = _make_controller()
    before = store.state

    drag.begin("A")
    assert drag.end(None) is before
    assert store.state is before
    assert drag.phase is DragPhase.IDLE


def test_drop_on_itself_commits_nothing():
    store, drag = _make_controller()
    before = store.state

    assert drag.handle_drag_end("B", "B") is before
    assert store.state is before


def test_cancel_is_idempotent_and_side_effect_free():
    store, drag = _make_controller()
    before = store.state

    drag.cancel()
    drag.begin("D")
    drag.cancel()
    drag.cancel()

    assert drag.phase is DragPhase.IDLE
    assert store.state is before
    # ending after a cancel does nothing either
    assert drag.end("A") is before


def test_begin_with_unknown_id_raises():
    _, drag = _make_controller()
    with pytest.raises(InvalidColumnReference):
        drag.begin("zzz")
    assert drag.phase is DragPhase.IDLE


def test_end_with_stale_target_raises_and_clears_gesture():
    store, drag = _make_controller()
    before = store.state

    drag.begin("A")
    with pytest.raises(InvalidColumnReference):
        drag.end("zzz")

    assert drag.phase is DragPhase.IDLE
    assert store.state is before


def test_new_gesture_replaces_unfinished_one():
    store, drag = _make_controller()
    drag.begin("A")
    drag.begin("D")
    state = drag.end("A")
    assert state.order == ("D", "A", "B", "C")


def test_drag_respects_pins():
    store, drag = _make_controller()
    store.toggle_pin("C")

    state = drag.handle_drag_end("A", "D")
    assert state.order[0] == "C"
