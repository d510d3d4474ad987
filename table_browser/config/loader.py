from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from table_browser.config.model import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_PAGE_SIZE_OPTIONS,
    ColumnConfig,
    TableConfig,
)
from table_browser.config.row_source import frame_to_rows, load_frame
from table_browser.core.column_registry import ColumnDescriptor, ColumnRegistry
from table_browser.core.exceptions import ConfigError
from table_browser.core.filter_engine import FilterPolicy
from table_browser.validation.config_validation import validate_table_config, warn_on_unmatched_fields
from table_browser.validation.errors import ValidationError

logger = logging.getLogger(__name__)


def load_table_config(root: Path) -> TableConfig:
    """
    Load configuration from a directory.

    Expected structure:

        root/
            global.json
            data/
                people.csv

    global.json keys (all optional):

    - ui_title / subtitle: navbar text
    - page_size: initial rows per page, defaults to 10
    - page_size_options: choices offered in the page size select
    - data: path to a .csv or .json row file; relative paths are resolved
            against the config root
    - row_id_field: row field used as the stable row id; otherwise rows are
                    identified by position
    - filter_policy: {"filter_hidden_columns": bool, "search_hidden_columns": bool}
    - columns: [{"id": ..., "label": ..., "field": ...}]; if omitted, one
               column per field in the data file

    :param root: Directory containing 'global.json'.
    :return: A TableConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if global.json is not valid JSON or fails validation.
    """
    root = Path(root)
    logger.info("Loading table config", extra={"config_root": str(root)})

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    try:
        with global_path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{global_path} is not valid JSON: {e}") from e

    try:
        validate_table_config(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {global_path}:\n{e}") from e

    return _config_from_raw(raw, root)


def _config_from_raw(raw: Dict[str, Any], root: Path) -> TableConfig:
    data_raw = raw.get("data")
    if data_raw is None:
        data_path = None
    else:
        data_path = Path(data_raw)
        if not data_path.is_absolute():
            data_path = (root / data_path).resolve()

    page_size = raw.get("page_size", DEFAULT_PAGE_SIZE)
    options = tuple(raw.get("page_size_options") or DEFAULT_PAGE_SIZE_OPTIONS)
    if page_size not in options:
        options = tuple(sorted(set(options) | {page_size}))

    columns = [
        ColumnConfig(id=c["id"], label=c.get("label"), field=c.get("field"))
        for c in raw.get("columns") or []
    ]

    return TableConfig(
        ui_title=raw.get("ui_title", "Table Browser"),
        subtitle=raw.get("subtitle", "Interactive Table Explorer"),
        page_size=page_size,
        page_size_options=options,
        data_path=data_path,
        row_id_field=raw.get("row_id_field"),
        filter_policy=FilterPolicy(**(raw.get("filter_policy") or {})),
        columns=columns,
    )


def build_registry(config: TableConfig, fields: Sequence[str] = ()) -> ColumnRegistry:
    """
    Column registry for the configured columns, or one column per data field
    when the config lists none.
    """
    if not config.columns:
        return ColumnRegistry.from_fields(fields)

    return ColumnRegistry(
        ColumnDescriptor.for_field(c.id, label=c.display_label, field=c.source_field)
        for c in config.columns
    )


def load_table(root: Path) -> Tuple[TableConfig, ColumnRegistry, List[Dict[str, Any]]]:
    """
    Main entrypoint used by the UI: config, column registry and rows.

    :raises ConfigError: if the config is invalid or names no data file
    :raises RowSourceError: if the data file can't be read
    """
    config = load_table_config(root)
    if config.data_path is None:
        raise ConfigError(f"No 'data' file configured in {Path(root) / 'global.json'}")

    frame = load_frame(config.data_path)
    rows = frame_to_rows(frame)
    fields = [str(c) for c in frame.columns]

    if config.columns:
        warn_on_unmatched_fields(config, fields, logger)

    registry = build_registry(config, fields)
    logger.info(
        "Table ready",
        extra={"n_rows": len(rows), "columns": list(registry.ids())},
    )
    return config, registry, rows
