from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .column_order import ColumnOrderState, ColumnOrderStore, check_invariants, initialize, normalise
from .column_registry import ColumnRegistry, Row
from .drag_reorder import DragReorderController
from .exceptions import InvalidColumnReference
from .filter_engine import DEFAULT_POLICY, FilterPolicy, to_text
from .filter_state import FilterState, VisibilityState
from .view_model import TableViewModel, build_view_model, filter_rows, page_count, page_rows

logger = logging.getLogger(__name__)

Listener = Callable[["TableSnapshot"], None]


@dataclass(frozen=True)
class TableSnapshot:
    """
    One committed, immutable state of the table's column management.

    - columns: column order + pin state
    - filters: per-column and global search text
    - visibility: hidden columns
    """
    columns: ColumnOrderState
    filters: FilterState = field(default_factory=FilterState)
    visibility: VisibilityState = field(default_factory=VisibilityState)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": self.columns.to_dict(),
            "filters": self.filters.to_dict(),
            "visibility": self.visibility.to_dict(),
        }

    @classmethod
    def initial(cls, registry: ColumnRegistry) -> TableSnapshot:
        return cls(columns=initialize(registry.ids()))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], registry: ColumnRegistry) -> TableSnapshot:
        """
        Rebuild a snapshot stored by the UI.

        Stored state can be older than the registry (a column renamed or added
        in config since the browser cached it), so ids are repaired rather than
        rejected: unknown ids are dropped, missing ones appended in registry order.
        """
        if not isinstance(data, dict) or not data:
            return cls.initial(registry)

        known = registry.ids()
        raw_columns = data.get("columns") or {}
        raw_order = [str(c) for c in raw_columns.get("order") or []]
        raw_pinned = [str(c) for c in raw_columns.get("pinned") or []]

        order = list(dict.fromkeys(c for c in raw_order if c in registry))
        order += [c for c in known if c not in order]
        pinned = [c for c in raw_pinned if c in registry]
        columns = normalise(order, pinned)

        if columns.order != tuple(raw_order) or columns.pinned != tuple(raw_pinned):
            logger.warning(
                "Repaired stale column state",
                extra={"stored_order": raw_order, "stored_pinned": raw_pinned, "order": list(columns.order)},
            )

        filters = FilterState.from_dict(data.get("filters") or {})
        filters = FilterState(
            column_filters={k: v for k, v in filters.column_filters.items() if k in registry},
            global_filter=filters.global_filter,
        )
        visibility = VisibilityState.from_dict(
            {k: v for k, v in (data.get("visibility") or {}).items() if k in registry}
        )
        return cls(columns=columns, filters=filters, visibility=visibility)


@dataclass(frozen=True)
class DisplayColumn:
    id: str
    label: str
    is_pinned: bool
    is_visible: bool
    filter_text: str


@dataclass(frozen=True)
class RenderedCell:
    column_id: str
    rendered_value: str


@dataclass(frozen=True)
class RenderedRow:
    row_id: str
    cells: Tuple[RenderedCell, ...]

    def to_record(self) -> Dict[str, str]:
        """Flat {column_id: text} record, the shape Dash's DataTable wants."""
        return {cell.column_id: cell.rendered_value for cell in self.cells}


class TableStateContainer:
    """
    State container for one table instance.

    Owns the current TableSnapshot, the row list and the column registry, and
    exposes the mutation entry points the UI calls. Each mutation commits a
    whole new snapshot and notifies subscribers; a rejected mutation raises
    and leaves the snapshot untouched.

    Mutations are serialised behind one lock per instance because reorder and
    pin toggles read and rewrite the entire column state.
    """

    MAX_FILTER_CACHE = 32

    def __init__(
        self,
        registry: ColumnRegistry,
        rows: Sequence[Row] = (),
        policy: FilterPolicy = DEFAULT_POLICY,
        row_id_field: Optional[str] = None,
        snapshot: Optional[TableSnapshot] = None,
    ) -> None:
        self.registry = registry
        self.policy = policy
        self.row_id_field = row_id_field
        self._rows: Tuple[Row, ...] = tuple(rows)

        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

        self._order_store = ColumnOrderStore(registry)
        self._drag = DragReorderController(self._order_store)

        # Cache of filtered rows keyed by the inputs that decide them
        self._filter_cache: Dict[Tuple[FilterState, VisibilityState], Tuple[Tuple[int, Row], ...]] = {}

        snapshot = snapshot or TableSnapshot.initial(registry)
        self._order_store.load(snapshot.columns)
        self._snapshot = snapshot

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------
    @property
    def snapshot(self) -> TableSnapshot:
        return self._snapshot

    @property
    def rows(self) -> Tuple[Row, ...]:
        return self._rows

    @property
    def drag(self) -> DragReorderController:
        return self._drag

    def get_display_columns(self) -> List[DisplayColumn]:
        """Every column in display order, with flags for header rendering."""
        snap = self._snapshot
        labels = self.registry.labels()
        return [
            DisplayColumn(
                id=cid,
                label=labels[cid],
                is_pinned=snap.columns.is_pinned(cid),
                is_visible=snap.visibility.is_visible(cid),
                filter_text=snap.filters.filter_text(cid),
            )
            for cid in snap.columns.order
        ]

    def filtered_rows(self) -> Tuple[Tuple[int, Row], ...]:
        snap = self._snapshot
        key = (snap.filters, snap.visibility)
        cached = self._filter_cache.get(key)
        if cached is not None:
            return cached

        result = tuple(filter_rows(self._rows, self.registry, snap.filters, snap.visibility, self.policy))
        if len(self._filter_cache) >= self.MAX_FILTER_CACHE:
            self._filter_cache.clear()
        self._filter_cache[key] = result
        return result

    def page_count(self, page_size: int) -> int:
        return page_count(len(self.filtered_rows()), page_size)

    def get_visible_rows(self, page_index: int, page_size: int) -> List[RenderedRow]:
        """
        One page of filtered rows, each cell rendered as text, over the
        visible columns in display order. A page past the end is empty.
        """
        snap = self._snapshot
        accessors = self.registry.accessors()
        columns = [cid for cid in snap.columns.order if snap.visibility.is_visible(cid)]

        return [
            RenderedRow(
                row_id=self._row_id(index, row),
                cells=tuple(RenderedCell(cid, to_text(accessors[cid](row))) for cid in columns),
            )
            for index, row in page_rows(self.filtered_rows(), page_index, page_size)
        ]

    def view_model(self, page_index: int = 0, page_size: int = 10) -> TableViewModel:
        snap = self._snapshot
        return build_view_model(
            snap.columns,
            snap.visibility,
            snap.filters,
            self.registry,
            self._rows,
            page_index=page_index,
            page_size=page_size,
            policy=self.policy,
            filtered=self.filtered_rows(),
        )

    def _row_id(self, index: int, row: Row) -> str:
        if self.row_id_field:
            value = row.get(self.row_id_field)
            if value is not None:
                return to_text(value)
        return str(index)

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call ``listener(snapshot)`` after every committed change.
        :return: a function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, snapshot: TableSnapshot) -> TableSnapshot:
        if snapshot == self._snapshot:
            return snapshot
        self._snapshot = snapshot
        self._notify()
        return snapshot

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._snapshot)
            except Exception:
                logger.exception("Table state listener failed")

    def _rejected(self, err: InvalidColumnReference) -> None:
        logger.warning(
            "Rejected column operation",
            extra={"column_id": err.column_id, "operation": err.operation},
        )

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------
    def set_column_filter(self, column_id: str, text: Optional[str]) -> TableSnapshot:
        with self._lock:
            try:
                self.registry.require(column_id, "set_column_filter")
            except InvalidColumnReference as e:
                self._rejected(e)
                raise
            filters = self._snapshot.filters.with_column_filter(column_id, text)
            return self._commit(replace(self._snapshot, filters=filters))

    def set_global_filter(self, text: Optional[str]) -> TableSnapshot:
        with self._lock:
            filters = self._snapshot.filters.with_global_filter(text)
            return self._commit(replace(self._snapshot, filters=filters))

    def set_column_visible(self, column_id: str, visible: bool) -> TableSnapshot:
        with self._lock:
            try:
                self.registry.require(column_id, "set_column_visible")
            except InvalidColumnReference as e:
                self._rejected(e)
                raise
            visibility = self._snapshot.visibility.with_visible(column_id, visible)
            return self._commit(replace(self._snapshot, visibility=visibility))

    def set_visible_columns(self, visible_ids: Sequence[str]) -> TableSnapshot:
        """Show exactly ``visible_ids`` and hide every other column."""
        with self._lock:
            for column_id in visible_ids:
                try:
                    self.registry.require(column_id, "set_visible_columns")
                except InvalidColumnReference as e:
                    self._rejected(e)
                    raise
            wanted = set(visible_ids)
            visibility = VisibilityState({cid: cid in wanted for cid in self.registry.ids()})
            return self._commit(replace(self._snapshot, visibility=visibility))

    def toggle_pin(self, column_id: str) -> TableSnapshot:
        with self._lock:
            try:
                columns = self._order_store.toggle_pin(column_id)
            except InvalidColumnReference as e:
                self._rejected(e)
                raise
            return self._commit(replace(self._snapshot, columns=columns))

    def handle_drag_end(self, source_id: str, target_id: Optional[str]) -> TableSnapshot:
        with self._lock:
            try:
                columns = self._drag.handle_drag_end(source_id, target_id)
            except InvalidColumnReference as e:
                self._rejected(e)
                raise
            if columns != self._snapshot.columns:
                logger.info(
                    "Moved column",
                    extra={"source_id": source_id, "target_id": target_id, "order": list(columns.order)},
                )
            return self._commit(replace(self._snapshot, columns=columns))

    def reset_columns(self) -> TableSnapshot:
        """Registry order, nothing pinned, everything visible. Filters are kept."""
        with self._lock:
            columns = self._order_store.reset()
            return self._commit(replace(self._snapshot, columns=columns, visibility=VisibilityState()))

    def replace_rows(self, rows: Sequence[Row]) -> TableSnapshot:
        """
        Swap in a fresh row list. Column state is re-checked against the
        registry; row identity is not tracked across refreshes.
        """
        with self._lock:
            check_invariants(self._snapshot.columns, self.registry.ids())
            self._rows = tuple(rows)
            self._filter_cache.clear()
            logger.info("Replaced table rows", extra={"n_rows": len(self._rows)})
            self._notify()
            return self._snapshot
