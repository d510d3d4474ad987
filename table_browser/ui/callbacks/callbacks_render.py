from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import dash
from dash import Input, Output, State, exceptions

from table_browser.ui.callbacks.callbacks_utils import parse_page_index, parse_page_size
from table_browser.ui.helpers import (
    column_options,
    container_from_store,
    data_table,
    header_bar,
    page_label,
    row_count_text,
)
from table_browser.ui.ids import IDs

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def next_page_index(triggered_id: Any, current: int, page_count: int) -> int:
    """
    Pure helper for the pagination buttons.

    - previous/next step one page, staying in range
    - a new page size starts again at the first page
    - any other change (filters, columns) keeps the page if it still exists
    """
    last = max(0, page_count - 1)

    if triggered_id == IDs.Control.PAGE_PREV_BTN:
        return max(0, min(current, last) - 1)
    if triggered_id == IDs.Control.PAGE_NEXT_BTN:
        return min(last, current + 1)
    if triggered_id == IDs.Control.PAGE_SIZE_SELECT:
        return 0
    return min(current, last)


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    default_page_size = ctx.table_config.page_size

    # ---------------------------------------------------------
    # Page index bookkeeping
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.PAGE_INDEX, "data"),
        Input(IDs.Control.PAGE_PREV_BTN, "n_clicks"),
        Input(IDs.Control.PAGE_NEXT_BTN, "n_clicks"),
        Input(IDs.Control.PAGE_SIZE_SELECT, "value"),
        Input(IDs.Store.TABLE_STATE, "data"),
        State(IDs.Store.PAGE_INDEX, "data"),
        prevent_initial_call=True,
    )
    def update_page_index(_prev, _next, page_size_value, data, current):
        page_size = parse_page_size(page_size_value, default_page_size)
        container = container_from_store(ctx, data)
        new_index = next_page_index(
            dash.ctx.triggered_id,
            parse_page_index(current),
            container.page_count(page_size),
        )
        if new_index == current:
            raise exceptions.PreventUpdate
        return new_index

    # ---------------------------------------------------------
    # Header bar, table page, pagination labels, move options
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.HEADER_BAR, "children"),
        Output(IDs.Control.TABLE_CONTAINER, "children"),
        Output(IDs.Control.PAGE_LABEL, "children"),
        Output(IDs.Control.ROW_COUNT, "children"),
        Output(IDs.Control.PAGE_PREV_BTN, "disabled"),
        Output(IDs.Control.PAGE_NEXT_BTN, "disabled"),
        Output(IDs.Control.MOVE_SOURCE, "options"),
        Output(IDs.Control.MOVE_TARGET, "options"),
        Input(IDs.Store.TABLE_STATE, "data"),
        Input(IDs.Store.PAGE_INDEX, "data"),
        Input(IDs.Control.PAGE_SIZE_SELECT, "value"),
    )
    def render_table(data, page_index_value, page_size_value):
        page_size = parse_page_size(page_size_value, default_page_size)
        page_index = parse_page_index(page_index_value)

        container = container_from_store(ctx, data)
        vm = container.view_model(page_index=page_index, page_size=page_size)
        columns = container.get_display_columns()
        visible = [c for c in columns if c.is_visible]

        logger.debug(
            "Rendering table",
            extra={
                "page_index": page_index,
                "page_size": page_size,
                "filtered_rows": vm.filtered_count,
                "visible_columns": list(vm.visible_columns),
            },
        )

        options = column_options(visible)
        return (
            header_bar(columns),
            data_table(container, page_index, page_size),
            page_label(page_index, vm.page_count),
            row_count_text(vm.filtered_count, vm.total_rows),
            not vm.can_previous,
            not vm.can_next,
            options,
            options,
        )
