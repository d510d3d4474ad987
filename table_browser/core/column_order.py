from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

from .column_registry import ColumnRegistry
from .exceptions import InvalidColumnReference

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnOrderState:
    """
    Display order and pin state of the table's columns.

    Fields:

    - order: every known column id exactly once, left-to-right
    - pinned: pinned column ids, in display order

    Invariant: every id in ``pinned`` sits in ``order`` before every id that
    is not pinned. Operations below return new states and never mutate.
    """
    order: Tuple[str, ...] = ()
    pinned: Tuple[str, ...] = ()

    def is_pinned(self, column_id: str) -> bool:
        return column_id in self.pinned

    def to_dict(self) -> dict:
        return {"order": list(self.order), "pinned": list(self.pinned)}


def initialize(ids: Iterable[str]) -> ColumnOrderState:
    """
    Initial state: ``ids`` in the given order, nothing pinned.

    Raises:
        ValueError: if ``ids`` contains duplicates
    """
    order = tuple(ids)
    if len(set(order)) != len(order):
        dupes = sorted({i for i in order if order.count(i) > 1})
        raise ValueError(f"Duplicate column ids: {dupes}")
    return ColumnOrderState(order=order, pinned=())


def normalise(order: Sequence[str], pinned: Iterable[str]) -> ColumnOrderState:
    """Pinned ids first, then the rest, both in their order within ``order``."""
    pinned_set = set(pinned)
    head = tuple(cid for cid in order if cid in pinned_set)
    tail = tuple(cid for cid in order if cid not in pinned_set)
    return ColumnOrderState(order=head + tail, pinned=head)


def reorder(state: ColumnOrderState, source_id: str, target_id: str) -> ColumnOrderState:
    """
    Move ``source_id`` to the slot ``target_id`` occupies.

    Both indices are taken before the source is removed, so the source lands
    at the target's original index: [A, B, C, D] moving A onto C gives
    [B, C, A, D]. Pinned columns are then pulled back to the front, keeping
    their post-move relative order.

    Dropping a known column onto itself returns ``state`` unchanged.

    Raises:
        InvalidColumnReference: if either id is not in ``state.order``
    """
    for column_id in (source_id, target_id):
        if column_id not in state.order:
            raise InvalidColumnReference(column_id, "reorder")

    if source_id == target_id:
        return state

    old_index = state.order.index(source_id)
    new_index = state.order.index(target_id)

    spliced = list(state.order)
    del spliced[old_index]
    spliced.insert(new_index, source_id)

    return normalise(spliced, state.pinned)


def toggle_pin(state: ColumnOrderState, column_id: str) -> ColumnOrderState:
    """
    Pin ``column_id`` if it is unpinned, unpin it otherwise.

    The order is rebuilt as pinned columns then unpinned columns, each group
    keeping its relative order from the previous state. Since pinned columns
    already lead, a newly pinned column joins the end of the pinned group and
    an unpinned one heads the unpinned group.

    Raises:
        InvalidColumnReference: if ``column_id`` is not a known column
    """
    if column_id not in state.order:
        raise InvalidColumnReference(column_id, "toggle_pin")

    pinned = set(state.pinned) ^ {column_id}
    return normalise(state.order, pinned)


class ColumnOrderStore:
    """
    Holds the authoritative ColumnOrderState for one table, bound to its
    ColumnRegistry. Every mutation either commits a complete new state or
    raises and leaves the current one in place.
    """

    def __init__(self, registry: ColumnRegistry):
        self.registry = registry
        self._state = initialize(registry.ids())

    @property
    def state(self) -> ColumnOrderState:
        return self._state

    def load(self, state: ColumnOrderState) -> None:
        """
        Replace the current state with one that was built elsewhere
        (e.g. deserialised from the UI store).

        Raises:
            ValueError: if ``state`` breaks the permutation or pin-prefix rules
        """
        check_invariants(state, self.registry.ids())
        self._state = state

    def reorder(self, source_id: str, target_id: str) -> ColumnOrderState:
        self._state = reorder(self._state, source_id, target_id)
        return self._state

    def toggle_pin(self, column_id: str) -> ColumnOrderState:
        self.registry.require(column_id, "toggle_pin")
        self._state = toggle_pin(self._state, column_id)
        logger.debug(
            "Toggled column pin",
            extra={"column_id": column_id, "pinned": self._state.is_pinned(column_id)},
        )
        return self._state

    def is_pinned(self, column_id: str) -> bool:
        return self._state.is_pinned(column_id)

    def reset(self) -> ColumnOrderState:
        """Back to registry order with nothing pinned."""
        self._state = initialize(self.registry.ids())
        return self._state


def check_invariants(state: ColumnOrderState, known_ids: Sequence[str]) -> None:
    """
    Raises ValueError unless ``state.order`` is a permutation of ``known_ids``
    and the pinned ids form its leading prefix.
    """
    if len(state.order) != len(known_ids) or set(state.order) != set(known_ids):
        raise ValueError(f"Column order {list(state.order)} is not a permutation of {list(known_ids)}")

    if len(set(state.pinned)) != len(state.pinned) or not set(state.pinned) <= set(known_ids):
        raise ValueError(f"Invalid pinned columns {list(state.pinned)}")

    if state.order[: len(state.pinned)] != state.pinned:
        raise ValueError(f"Pinned columns {list(state.pinned)} are not a prefix of {list(state.order)}")
