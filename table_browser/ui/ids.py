from __future__ import annotations

__all__ = ["IDs", "column_filter_id", "column_pin_id"]


class IDs:
    class Store:
        TABLE_STATE = "table-state"
        PAGE_INDEX = "page-index"

    class Control:
        # Sidebar
        GLOBAL_FILTER = "global-filter"
        VISIBILITY_CHECKLIST = "visibility-checklist"
        RESET_COLUMNS_BTN = "reset-columns-btn"

        # Header bar / column move
        HEADER_BAR = "header-bar"
        MOVE_SOURCE = "move-source-select"
        MOVE_TARGET = "move-target-select"
        MOVE_BTN = "move-btn"

        # Table + pagination
        TABLE_CONTAINER = "table-container"
        PAGE_PREV_BTN = "page-prev-btn"
        PAGE_NEXT_BTN = "page-next-btn"
        PAGE_SIZE_SELECT = "page-size-select"
        PAGE_LABEL = "page-label"
        ROW_COUNT = "row-count"

        # Status bar
        STATUS_BAR = "status-bar"

    class Pattern:
        # pattern-matching "type" strings
        COLUMN_FILTER = "column-filter"
        COLUMN_PIN = "column-pin"


def column_filter_id(column_id: str) -> dict:
    return {"type": IDs.Pattern.COLUMN_FILTER, "index": column_id}


def column_pin_id(column_id: str) -> dict:
    return {"type": IDs.Pattern.COLUMN_PIN, "index": column_id}
