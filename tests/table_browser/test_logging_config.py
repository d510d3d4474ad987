import logging

from pythonjsonlogger import jsonlogger

from table_browser.logging_config import configure_logging


def _restore(root: logging.Logger, handlers, level):
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_format_by_default(monkeypatch):
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    monkeypatch.delenv("TABLE_BROWSER_LOG_FORMAT", raising=False)
    try:
        configure_logging(level=logging.DEBUG)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)
        assert root.level == logging.DEBUG
    finally:
        _restore(root, *saved)


def test_plain_format_from_env(monkeypatch):
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    monkeypatch.setenv("TABLE_BROWSER_LOG_FORMAT", "plain")
    monkeypatch.setenv("TABLE_BROWSER_LOG_LEVEL", "warning")
    try:
        configure_logging()
        formatter = root.handlers[0].formatter
        assert not isinstance(formatter, jsonlogger.JsonFormatter)
        assert root.level == logging.WARNING
    finally:
        _restore(root, *saved)


def test_force_format_wins_over_env(monkeypatch):
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    monkeypatch.setenv("TABLE_BROWSER_LOG_FORMAT", "plain")
    try:
        configure_logging(force_format="json")
        assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)
    finally:
        _restore(root, *saved)
