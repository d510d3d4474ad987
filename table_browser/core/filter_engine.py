from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .column_registry import Accessor, Row
from .exceptions import InvalidColumnReference
from .filter_state import VisibilityState


@dataclass(frozen=True)
class FilterPolicy:
    """
    How filters treat hidden columns.

    :param filter_hidden_columns: a per-column filter still applies while its column is hidden
    :param search_hidden_columns: the global search also scans hidden columns
    """
    filter_hidden_columns: bool = True
    search_hidden_columns: bool = False


DEFAULT_POLICY = FilterPolicy()


def to_text(value: Any) -> str:
    """
    Canonical string form used both for matching and for rendering cells.
    Missing values (None / NaN) render as empty text.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


def matches(record: Row, accessor: Accessor, filter_text: Optional[str]) -> bool:
    """
    Case-insensitive substring test of the record's field against filter_text.
    No filter text always matches.
    """
    if not filter_text:
        return True
    return str(filter_text).casefold() in to_text(accessor(record)).casefold()


def row_visible(
    record: Row,
    column_filters: Mapping[str, str],
    global_filter: Optional[str],
    accessors: Mapping[str, Accessor],
    visibility: Optional[VisibilityState] = None,
    policy: FilterPolicy = DEFAULT_POLICY,
) -> bool:
    """
    A row survives when it passes every active per-column filter AND, if a
    global filter is set, at least one scanned column contains it.

    Raises:
        InvalidColumnReference: if a per-column filter names an unknown column
    """
    visibility = visibility or VisibilityState()

    for column_id, text in column_filters.items():
        if not text:
            continue
        try:
            accessor = accessors[column_id]
        except KeyError:
            raise InvalidColumnReference(column_id, "column filter") from None
        if not policy.filter_hidden_columns and not visibility.is_visible(column_id):
            continue
        if not matches(record, accessor, text):
            return False

    if not global_filter:
        return True

    return any(
        matches(record, accessor, global_filter)
        for column_id, accessor in accessors.items()
        if policy.search_hidden_columns or visibility.is_visible(column_id)
    )
