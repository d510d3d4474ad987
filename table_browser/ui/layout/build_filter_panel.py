from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from table_browser.core.column_registry import ColumnRegistry
from table_browser.ui.ids import IDs, column_filter_id


def build_filter_panel(registry: ColumnRegistry) -> dbc.Card:
    """
    Sidebar: global search, one search box per column (registry order, so the
    inputs stay put while columns move around) and the visibility checklist.
    """
    column_filters = [
        html.Div(
            [
                html.Label(column.label, className="form-label mb-1"),
                dcc.Input(
                    id=column_filter_id(column.id),
                    type="text",
                    value="",
                    placeholder=f"Search {column.id}...",
                    className="form-control form-control-sm mb-2",
                ),
            ]
        )
        for column in registry
    ]

    return dbc.Card(
        [
            dbc.CardHeader("Filters", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.Label("Search all columns", className="form-label"),
                    dcc.Input(
                        id=IDs.Control.GLOBAL_FILTER,
                        type="text",
                        value="",
                        placeholder="Search across all columns...",
                        className="form-control mb-3",
                    ),
                    html.Hr(),

                    html.Div(column_filters, className="mb-3"),
                    html.Hr(),

                    html.Label("Toggle columns", className="form-label"),
                    dbc.Checklist(
                        id=IDs.Control.VISIBILITY_CHECKLIST,
                        options=[{"label": f" {c.label}", "value": c.id} for c in registry],
                        value=list(registry.ids()),
                        switch=True,
                        className="mb-3",
                    ),
                    dbc.Button(
                        "Reset columns",
                        id=IDs.Control.RESET_COLUMNS_BTN,
                        color="secondary",
                        outline=True,
                        size="sm",
                    ),
                ]
            ),
        ],
        className="tb-sidebar",
    )
