from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .column_order import ColumnOrderState, ColumnOrderStore

logger = logging.getLogger(__name__)


class DragPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragReorderController:
    """
    Turns a column-header drag gesture into at most one reorder on a
    ColumnOrderStore.

    IDLE --begin(source)--> DRAGGING --end(target) / cancel()--> IDLE

    Only ``end`` with a resolved target different from the source mutates the
    store. Dropping outside any header (target None), dropping on the source
    itself, or cancelling commits nothing.
    """

    def __init__(self, store: ColumnOrderStore):
        self.store = store
        self._source_id: Optional[str] = None

    @property
    def phase(self) -> DragPhase:
        return DragPhase.IDLE if self._source_id is None else DragPhase.DRAGGING

    @property
    def dragging_id(self) -> Optional[str]:
        """Id of the header being dragged, for visual feedback."""
        return self._source_id

    def begin(self, source_id: str) -> None:
        """
        Start a drag from ``source_id``. A new gesture replaces one that never ended.

        Raises:
            InvalidColumnReference: if ``source_id`` is not a known column
        """
        self.store.registry.require(source_id, "drag start")
        if self._source_id is not None:
            logger.debug("Drag restarted before previous gesture ended", extra={"column_id": self._source_id})
        self._source_id = source_id

    def end(self, target_id: Optional[str]) -> ColumnOrderState:
        """
        Finish the gesture and return the (possibly unchanged) column state.

        Raises:
            InvalidColumnReference: if ``target_id`` is not in the current order;
            the gesture is still cleared and the store is left as it was
        """
        source_id, self._source_id = self._source_id, None

        if source_id is None or target_id is None or target_id == source_id:
            return self.store.state

        return self.store.reorder(source_id, target_id)

    def cancel(self) -> None:
        """Drop the in-flight gesture. Safe to call when nothing is being dragged."""
        self._source_id = None

    def handle_drag_end(self, source_id: str, target_id: Optional[str]) -> ColumnOrderState:
        """Single completed gesture, as reported by a gesture recogniser."""
        self.begin(source_id)
        return self.end(target_id)
