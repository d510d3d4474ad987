from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc

from table_browser.core.table_state import TableSnapshot
from table_browser.ui.ids import IDs
from table_browser.ui.layout.build_filter_panel import build_filter_panel
from table_browser.ui.layout.build_navbar import build_navbar
from table_browser.ui.layout.build_table_panel import build_table_panel

if TYPE_CHECKING:
    from table_browser.ui.config import AppConfig


def build_layout(ctx: AppConfig) -> dbc.Container:
    cfg = ctx.table_config

    return dbc.Container(
        fluid=True,
        className="tb-root",
        children=[
            build_navbar(cfg, len(ctx.rows)),

            # App-level stores; column state is per browser tab and never persisted
            dcc.Store(
                id=IDs.Store.TABLE_STATE,
                storage_type="memory",
                data=TableSnapshot.initial(ctx.registry).to_dict(),
            ),
            dcc.Store(id=IDs.Store.PAGE_INDEX, storage_type="memory", data=0),

            dbc.Row(
                [
                    dbc.Col(
                        build_filter_panel(ctx.registry),
                        md=3,
                        className="mt-3",
                    ),
                    dbc.Col(
                        build_table_panel(cfg.page_size, cfg.page_size_options),
                        md=9,
                        className="mt-3",
                    ),
                ],
                className="gx-3",
            ),
        ],
    )
