from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

import dash_bootstrap_components as dbc
from dash import dash_table, html

from table_browser.core.table_state import DisplayColumn, TableSnapshot, TableStateContainer
from table_browser.ui.ids import column_pin_id

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

FONT_FAMILY = 'system-ui, -apple-system, BlinkMacSystemFont, "SF Pro Text", "Segoe UI", sans-serif'


def container_from_store(ctx: AppConfig, data: Optional[dict]) -> TableStateContainer:
    """
    Rebuild the table's state container from the browser-side store.
    Missing or stale store data falls back to / is repaired against the registry.
    """
    snapshot = TableSnapshot.from_dict(data, ctx.registry)
    return TableStateContainer(
        ctx.registry,
        ctx.rows,
        policy=ctx.table_config.filter_policy,
        row_id_field=ctx.table_config.row_id_field,
        snapshot=snapshot,
    )


def column_options(columns: List[DisplayColumn]) -> List[dict]:
    return [{"label": c.label, "value": c.id} for c in columns]


def header_bar(columns: List[DisplayColumn]) -> html.Div:
    """
    One chip per visible column, in display order, with its pin button and
    the active filter text (if any).
    """
    chips = []
    for col in columns:
        if not col.is_visible:
            continue

        children = [
            html.Span(col.label, className="tb-header-label"),
            dbc.Button(
                "Unpin" if col.is_pinned else "Pin",
                id=column_pin_id(col.id),
                size="sm",
                color="primary" if col.is_pinned else "secondary",
                outline=not col.is_pinned,
                className="ms-2",
                title="Unpin" if col.is_pinned else "Pin",
            ),
        ]
        if col.filter_text:
            children.append(
                dbc.Badge(f"filter: {col.filter_text}", color="info", className="ms-2")
            )

        chips.append(
            html.Div(
                children,
                className="tb-header-chip tb-header-chip-pinned" if col.is_pinned else "tb-header-chip",
            )
        )

    if not chips:
        return html.Div("All columns are hidden.", className="text-muted")

    return html.Div(chips, className="d-flex flex-wrap gap-2")


def data_table(container: TableStateContainer, page_index: int, page_size: int) -> dash_table.DataTable:
    """
    Build a styled Dash DataTable for one page of the filtered rows.

    Paging, sorting and filtering all happen in the table core, so the
    DataTable's own versions are switched off.
    """
    columns = [c for c in container.get_display_columns() if c.is_visible]
    rows = container.get_visible_rows(page_index, page_size)
    pinned_ids = [c.id for c in columns if c.is_pinned]

    return dash_table.DataTable(
        data=[r.to_record() for r in rows],
        columns=[{"name": c.label, "id": c.id} for c in columns],

        # ---- FONT + LOOK & FEEL ----
        style_table={
            "overflowX": "auto",
            "minWidth": "100%",
        },
        style_as_list_view=True,
        style_cell={
            "fontFamily": FONT_FAMILY,
            "fontSize": "12px",
            "padding": "6px 8px",
            "border": "none",
            "textAlign": "left",
            "minWidth": "80px",
            "maxWidth": "260px",
            "whiteSpace": "nowrap",
            "textOverflow": "ellipsis",
        },
        style_header={
            "fontFamily": FONT_FAMILY,
            "fontSize": "12px",
            "fontWeight": "600",
            "backgroundColor": "#f3f4f6",
            "borderBottom": "1px solid #e5e7eb",
        },
        style_header_conditional=[
            {
                "if": {"column_id": cid},
                "backgroundColor": "#eff6ff",
                "fontWeight": "700",
            }
            for cid in pinned_ids
        ],
        style_data={
            "borderBottom": "1px solid #e5e7eb",
        },

        # pinned columns stay put while scrolling sideways
        fixed_columns={"headers": True, "data": len(pinned_ids)} if pinned_ids else {},
        page_action="none",
        sort_action="none",
        filter_action="none",
    )


def page_label(page_index: int, page_count: int) -> str:
    return f"Page {page_index + 1} of {page_count}"


def row_count_text(filtered: int, total: int) -> str:
    if filtered == total:
        return f"{total} rows"
    return f"{filtered} of {total} rows"
