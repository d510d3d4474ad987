from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from table_browser.config.model import TableConfig


def build_navbar(table_config: TableConfig, n_rows: int) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(table_config.ui_title, className="mb-0"),
                        html.Small(
                            table_config.subtitle,
                            className="text-muted",
                            id="navbar-subtitle",
                        ),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    f"{n_rows} rows loaded",
                    className="ms-auto text-muted tb-navbar-meta",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm tb-navbar",
    )
