from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from table_browser.config.loader import load_table
from table_browser.ui.callbacks.callbacks_render import register_render_callbacks
from table_browser.ui.callbacks.callbacks_state import register_state_callbacks
from table_browser.ui.layout.build_layout import build_layout

logger = logging.getLogger(__name__)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load config, columns and rows
    table_config, registry, rows = load_table(config_root)

    # 2) App context
    ctx = AppConfig(
        config_root=config_root,
        table_config=table_config,
        registry=registry,
        rows=rows,
    )
    ctx.validate()

    # Explicitly resolve the assets folder so styles.css is found regardless
    # of the working directory
    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = table_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_state_callbacks(app, ctx)
    register_render_callbacks(app, ctx)

    logger.info(
        "Dash app created",
        extra={"config_root": str(config_root), "n_rows": len(rows), "n_columns": len(registry)},
    )
    return app
