from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .column_order import ColumnOrderState
from .column_registry import ColumnRegistry, Row
from .filter_engine import DEFAULT_POLICY, FilterPolicy, row_visible
from .filter_state import FilterState, VisibilityState


@dataclass(frozen=True)
class TableViewModel:
    """
    Everything the renderer needs for one frame of the table.

    Derived entirely from its inputs; holds no state of its own.
    """
    visible_columns: Tuple[str, ...]
    filtered_rows: Tuple[Tuple[int, Row], ...]
    page_rows: Tuple[Tuple[int, Row], ...]
    page_index: int
    page_size: int
    page_count: int
    total_rows: int

    @property
    def filtered_count(self) -> int:
        return len(self.filtered_rows)

    @property
    def can_previous(self) -> bool:
        return self.page_index > 0

    @property
    def can_next(self) -> bool:
        return self.page_index + 1 < self.page_count


def visible_columns(order_state: ColumnOrderState, visibility: VisibilityState) -> Tuple[str, ...]:
    return tuple(cid for cid in order_state.order if visibility.is_visible(cid))


def filter_rows(
    rows: Sequence[Row],
    registry: ColumnRegistry,
    filter_state: FilterState,
    visibility: VisibilityState,
    policy: FilterPolicy = DEFAULT_POLICY,
) -> List[Tuple[int, Row]]:
    """
    Rows that pass the current filters, each paired with its position in
    ``rows`` so callers can keep a stable row identity.
    """
    accessors = registry.accessors()
    return [
        (i, row)
        for i, row in enumerate(rows)
        if row_visible(
            row,
            filter_state.column_filters,
            filter_state.global_filter,
            accessors,
            visibility,
            policy,
        )
    ]


def page_count(n_rows: int, page_size: int) -> int:
    """Number of pages; an empty table still shows one (empty) page."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return max(1, math.ceil(n_rows / page_size))


def page_rows(rows: Sequence, page_index: int, page_size: int) -> list:
    """
    Slice out one page. Asking for a page past the end gives an empty list.

    Raises:
        ValueError: if page_index is negative or page_size < 1
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    if page_index < 0:
        raise ValueError(f"page_index must be >= 0, got {page_index}")
    start = page_index * page_size
    return list(rows[start:start + page_size])


def build_view_model(
    order_state: ColumnOrderState,
    visibility: VisibilityState,
    filter_state: FilterState,
    registry: ColumnRegistry,
    rows: Sequence[Row],
    page_index: int = 0,
    page_size: int = 10,
    policy: FilterPolicy = DEFAULT_POLICY,
    filtered: Optional[Sequence[Tuple[int, Row]]] = None,
) -> TableViewModel:
    """
    Pass ``filtered`` when the rows have already been run through
    ``filter_rows`` with the same state.
    """
    if filtered is None:
        filtered = filter_rows(rows, registry, filter_state, visibility, policy)
    return TableViewModel(
        visible_columns=visible_columns(order_state, visibility),
        filtered_rows=tuple(filtered),
        page_rows=tuple(page_rows(filtered, page_index, page_size)),
        page_index=page_index,
        page_size=page_size,
        page_count=page_count(len(filtered), page_size),
        total_rows=len(rows),
    )
