from __future__ import annotations

from typing import Sequence

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.ui.ids import IDs


def _move_control() -> html.Div:
    return html.Div(
        [
            html.Span("Move column", className="me-2 fw-semibold"),
            dcc.Dropdown(
                id=IDs.Control.MOVE_SOURCE,
                placeholder="Column",
                clearable=True,
                className="tb-move-select me-2",
            ),
            html.Span("onto", className="me-2 text-muted"),
            dcc.Dropdown(
                id=IDs.Control.MOVE_TARGET,
                placeholder="Target column",
                clearable=True,
                className="tb-move-select me-2",
            ),
            dbc.Button("Move", id=IDs.Control.MOVE_BTN, color="primary", size="sm"),
        ],
        className="d-flex align-items-center mb-3",
    )


def _pagination(page_size: int, page_size_options: Sequence[int]) -> html.Div:
    return html.Div(
        [
            dbc.Button("Previous", id=IDs.Control.PAGE_PREV_BTN, color="secondary", outline=True, size="sm"),
            dbc.Button("Next", id=IDs.Control.PAGE_NEXT_BTN, color="secondary", outline=True, size="sm"),
            html.Span(id=IDs.Control.PAGE_LABEL, className="ms-2"),
            html.Span(id=IDs.Control.ROW_COUNT, className="ms-3 text-muted"),
            html.Div(
                [
                    html.Label("Rows per page", className="me-2 mb-0"),
                    dbc.Select(
                        id=IDs.Control.PAGE_SIZE_SELECT,
                        options=[{"label": str(n), "value": str(n)} for n in page_size_options],
                        value=str(page_size),
                        size="sm",
                        style={"width": "90px"},
                    ),
                ],
                className="ms-auto d-flex align-items-center",
            ),
        ],
        className="mt-3 d-flex align-items-center gap-2",
    )


def build_table_panel(page_size: int, page_size_options: Sequence[int]) -> dbc.Card:
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong("Columns"),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    html.Div(id=IDs.Control.HEADER_BAR, className="mb-3"),
                    _move_control(),
                    dcc.Loading(
                        id="table-loading",
                        type="default",
                        children=html.Div(id=IDs.Control.TABLE_CONTAINER),
                    ),
                    _pagination(page_size, page_size_options),
                    html.Div(id=IDs.Control.STATUS_BAR, className="mt-2 small text-muted"),
                ],
                className="tb-main-body",
            ),
        ],
        className="tb-maincard",
    )
