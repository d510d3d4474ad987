from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import ALL, Input, Output, State, exceptions, no_update

from table_browser.core.exceptions import InvalidColumnReference
from table_browser.core.table_state import TableStateContainer
from table_browser.ui.helpers import container_from_store
from table_browser.ui.ids import IDs

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

# Triggers whose value is a click count: a None/0 count means the button was
# just (re-)rendered, not clicked
CLICK_TRIGGERS = (IDs.Control.MOVE_BTN, IDs.Control.RESET_COLUMNS_BTN, IDs.Pattern.COLUMN_PIN)


def _trigger_key(triggered_id: Any) -> Any:
    if isinstance(triggered_id, dict):
        return triggered_id.get("type")
    return triggered_id


def apply_table_event(
    container: TableStateContainer,
    triggered_id: Any,
    value: Any,
    move_source: Optional[str] = None,
    move_target: Optional[str] = None,
) -> str:
    """
    Pure helper: apply one UI event to the container and return a status
    message for the status bar.

    Raises:
        InvalidColumnReference: if the event names a column the registry doesn't know
        PreventUpdate: if the trigger isn't a table event
    """
    key = _trigger_key(triggered_id)

    if key == IDs.Control.GLOBAL_FILTER:
        container.set_global_filter(value or "")
        return ""

    if key == IDs.Pattern.COLUMN_FILTER:
        container.set_column_filter(triggered_id["index"], value or "")
        return ""

    if key == IDs.Control.VISIBILITY_CHECKLIST:
        container.set_visible_columns(list(value or []))
        return ""

    if key == IDs.Pattern.COLUMN_PIN:
        column_id = triggered_id["index"]
        container.toggle_pin(column_id)
        verb = "Pinned" if container.snapshot.columns.is_pinned(column_id) else "Unpinned"
        return f"{verb} '{container.registry.get(column_id).label}'."

    if key == IDs.Control.MOVE_BTN:
        if not move_source:
            return "Choose a column to move."
        before = container.snapshot.columns
        container.handle_drag_end(move_source, move_target or None)
        if container.snapshot.columns == before:
            return "Column order unchanged."
        return f"Moved '{container.registry.get(move_source).label}'."

    if key == IDs.Control.RESET_COLUMNS_BTN:
        container.reset_columns()
        return "Columns reset."

    raise exceptions.PreventUpdate


def register_state_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Every column-management event goes through here and commits a new
    # snapshot to the table-state store
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.TABLE_STATE, "data"),
        Output(IDs.Control.VISIBILITY_CHECKLIST, "value"),
        Output(IDs.Control.STATUS_BAR, "children"),
        Input(IDs.Control.GLOBAL_FILTER, "value"),
        Input({"type": IDs.Pattern.COLUMN_FILTER, "index": ALL}, "value"),
        Input(IDs.Control.VISIBILITY_CHECKLIST, "value"),
        Input({"type": IDs.Pattern.COLUMN_PIN, "index": ALL}, "n_clicks"),
        Input(IDs.Control.MOVE_BTN, "n_clicks"),
        Input(IDs.Control.RESET_COLUMNS_BTN, "n_clicks"),
        State(IDs.Control.MOVE_SOURCE, "value"),
        State(IDs.Control.MOVE_TARGET, "value"),
        State(IDs.Store.TABLE_STATE, "data"),
        prevent_initial_call=True,
    )
    def update_table_state(
        _global_filter,
        _column_filters,
        _visible,
        _pin_clicks,
        _move_clicks,
        _reset_clicks,
        move_source,
        move_target,
        data,
    ):
        triggered_id = dash.ctx.triggered_id
        if triggered_id is None:
            raise exceptions.PreventUpdate

        value = dash.ctx.triggered[0].get("value") if dash.ctx.triggered else None
        if _trigger_key(triggered_id) in CLICK_TRIGGERS and not value:
            raise exceptions.PreventUpdate

        container = container_from_store(ctx, data)
        try:
            status = apply_table_event(container, triggered_id, value, move_source, move_target)
        except InvalidColumnReference as e:
            # Stale ids from the browser; keep the committed state
            logger.warning("Ignoring table event", extra={"trigger": str(triggered_id), "error": str(e)})
            return no_update, no_update, f"Ignored: {e}"

        checklist = (
            [c.id for c in container.get_display_columns() if c.is_visible]
            if triggered_id == IDs.Control.RESET_COLUMNS_BTN
            else no_update
        )
        return container.snapshot.to_dict(), checklist, status
