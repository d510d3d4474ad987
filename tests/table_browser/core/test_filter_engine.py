from __future__ import annotations

import math

import pytest

from table_browser.core.exceptions import InvalidColumnReference
from table_browser.core.filter_engine import FilterPolicy, matches, row_visible, to_text
from table_browser.core.filter_state import VisibilityState

ROWS = [
    {"name": "Ann", "age": 30},
    {"name": "Bob", "age": 31},
]

ACCESSORS = {
    "name": lambda r: r.get("name"),
    "age": lambda r: r.get("age"),
}


def _visible(rows, column_filters=None, global_filter="", visibility=None, policy=FilterPolicy()):
    return [
        r["name"]
        for r in rows
        if row_visible(r, column_filters or {}, global_filter, ACCESSORS, visibility, policy)
    ]


def test_to_text_canonical_forms():
    assert to_text(30) == "30"
    assert to_text("Ann") == "Ann"
    assert to_text(None) == ""
    assert to_text(math.nan) == ""
    assert to_text(True) == "true"
    assert to_text(2.5) == "2.5"


def test_empty_filter_always_matches():
    assert matches(ROWS[0], ACCESSORS["name"], "")
    assert matches(ROWS[0], ACCESSORS["name"], None)
    assert matches({"name": None}, ACCESSORS["name"], "")


def test_matches_is_case_insensitive_substring():
    assert matches(ROWS[0], ACCESSORS["name"], "an")
    assert matches(ROWS[0], ACCESSORS["name"], "ANN")
    assert not matches(ROWS[0], ACCESSORS["name"], "bob")


def test_numbers_match_on_their_string_form():
    assert matches(ROWS[0], ACCESSORS["age"], "3")
    assert matches(ROWS[0], ACCESSORS["age"], "30")
    assert not matches(ROWS[0], ACCESSORS["age"], "31")


def test_missing_value_never_matches_non_empty_filter():
    assert not matches({"name": None}, ACCESSORS["name"], "none")


def test_per_column_filters_are_anded():
    assert _visible(ROWS, {"age": "3"}) == ["Ann", "Bob"]
    assert _visible(ROWS, {"age": "3", "name": "b"}) == ["Bob"]
    assert _visible(ROWS, {"age": "30", "name": "b"}) == []


def test_global_filter_is_ored_across_columns():
    assert _visible(ROWS, global_filter="bob") == ["Bob"]
    assert _visible(ROWS, global_filter="31") == ["Bob"]
    assert _visible(ROWS, global_filter="3") == ["Ann", "Bob"]


def test_global_and_per_column_compose_with_and():
    assert _visible(ROWS, {"age": "30"}, global_filter="bob") == []
    assert _visible(ROWS, {"age": "31"}, global_filter="bob") == ["Bob"]


def test_hidden_column_still_filters_by_default():
    hidden_age = VisibilityState({"age": False})
    assert _visible(ROWS, {"age": "30"}, visibility=hidden_age) == ["Ann"]


def test_hidden_column_skipped_by_global_search_by_default():
    hidden_age = VisibilityState({"age": False})
    assert _visible(ROWS, global_filter="31", visibility=hidden_age) == []
    assert _visible(ROWS, global_filter="bob", visibility=hidden_age) == ["Bob"]


def test_policy_options_flip_hidden_column_behaviour():
    hidden_age = VisibilityState({"age": False})
    policy = FilterPolicy(filter_hidden_columns=False, search_hidden_columns=True)

    assert _visible(ROWS, {"age": "30"}, visibility=hidden_age, policy=policy) == ["Ann", "Bob"]
    assert _visible(ROWS, global_filter="31", visibility=hidden_age, policy=policy) == ["Bob"]


def test_filter_on_unknown_column_raises():
    with pytest.raises(InvalidColumnReference):
        row_visible(ROWS[0], {"zzz": "x"}, "", ACCESSORS)
