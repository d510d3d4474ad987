import json
from pathlib import Path

import pytest

from table_browser.config.loader import build_registry, load_table, load_table_config
from table_browser.core.exceptions import ConfigError, RowSourceError
from table_browser.core.filter_engine import FilterPolicy


def _write_config(root: Path, global_json: dict, csv_text: str | None = None) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "global.json").write_text(json.dumps(global_json))
    if csv_text is not None:
        data_dir = root / "data"
        data_dir.mkdir(exist_ok=True)
        (data_dir / "people.csv").write_text(csv_text)
    return root


PEOPLE_CSV = "id,firstName,age\n1,Ann,30\n2,Bob,31\n"


def test_load_table_config_defaults(tmp_path):
    root = _write_config(tmp_path / "config", {})
    cfg = load_table_config(root)

    assert cfg.ui_title == "Table Browser"
    assert cfg.page_size == 10
    assert cfg.page_size_options == (10, 20, 50)
    assert cfg.data_path is None
    assert cfg.filter_policy == FilterPolicy()
    assert cfg.columns == []


def test_load_table_config_full(tmp_path):
    root = _write_config(
        tmp_path / "config",
        {
            "ui_title": "People",
            "page_size": 5,
            "page_size_options": [10, 20],
            "data": "data/people.csv",
            "row_id_field": "id",
            "filter_policy": {"search_hidden_columns": True},
            "columns": [
                {"id": "id", "label": "ID"},
                {"id": "first", "label": "First Name", "field": "firstName"},
            ],
        },
    )
    cfg = load_table_config(root)

    assert cfg.ui_title == "People"
    assert cfg.page_size == 5
    # the configured page size is always offered
    assert cfg.page_size_options == (5, 10, 20)
    assert cfg.data_path == (root / "data" / "people.csv").resolve()
    assert cfg.row_id_field == "id"
    assert cfg.filter_policy == FilterPolicy(filter_hidden_columns=True, search_hidden_columns=True)
    assert [c.id for c in cfg.columns] == ["id", "first"]
    assert cfg.columns[1].source_field == "firstName"
    assert cfg.columns[0].source_field == "id"


def test_missing_global_json_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_table_config(tmp_path)


def test_invalid_json_raises_config_error(tmp_path):
    (tmp_path / "global.json").write_text("{not json")
    with pytest.raises(ConfigError):
        load_table_config(tmp_path)


def test_invalid_values_raise_config_error(tmp_path):
    root = _write_config(tmp_path, {"page_size": 0, "columns": [{"id": "a"}, {"id": "a"}]})
    with pytest.raises(ConfigError) as exc:
        load_table_config(root)
    assert "CONFIG_PAGE_SIZE" in str(exc.value)
    assert "CONFIG_DUPLICATE_COLUMN" in str(exc.value)


def test_load_table_with_configured_columns(tmp_path):
    root = _write_config(
        tmp_path / "config",
        {
            "data": "data/people.csv",
            "columns": [
                {"id": "first", "label": "First Name", "field": "firstName"},
                {"id": "age", "label": "Age"},
            ],
        },
        PEOPLE_CSV,
    )
    cfg, registry, rows = load_table(root)

    assert registry.ids() == ("first", "age")
    assert registry.labels()["first"] == "First Name"
    assert len(rows) == 2
    assert registry.get("first").accessor(rows[0]) == "Ann"
    assert registry.get("age").accessor(rows[1]) == "31"


def test_load_table_infers_columns_from_header(tmp_path):
    root = _write_config(tmp_path / "config", {"data": "data/people.csv"}, PEOPLE_CSV)
    _, registry, _ = load_table(root)
    assert registry.ids() == ("id", "firstName", "age")


def test_load_table_without_data_raises(tmp_path):
    root = _write_config(tmp_path / "config", {})
    with pytest.raises(ConfigError):
        load_table(root)


def test_load_table_with_missing_data_file_raises(tmp_path):
    root = _write_config(tmp_path / "config", {"data": "data/nope.csv"})
    with pytest.raises(RowSourceError):
        load_table(root)


def test_build_registry_from_fields_when_no_columns(tmp_path):
    root = _write_config(tmp_path, {})
    cfg = load_table_config(root)
    assert build_registry(cfg, ["x", "y"]).ids() == ("x", "y")


def test_shipped_config_loads():
    root = Path(__file__).resolve().parents[3] / "config"
    cfg, registry, rows = load_table(root)
    assert registry.ids() == ("id", "firstName", "lastName", "age", "email")
    assert cfg.row_id_field == "id"
    assert len(rows) > cfg.page_size
