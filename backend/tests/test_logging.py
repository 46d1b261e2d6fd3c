# ruff: noqa: INP001

from __future__ import annotations

import json
import logging

import pytest

from app.core import logging as app_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.makeLogRecord(
        {"name": "app.services.tasks", "levelname": "INFO", "levelno": logging.INFO, "msg": "task.created"},
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_merges_extras_at_top_level() -> None:
    line = app_logging.JsonFormatter(use_utc=True).format(_record(task_id="abc", actor="alice"))
    payload = json.loads(line)

    assert payload["message"] == "task.created"
    assert payload["logger"] == "app.services.tasks"
    assert payload["level"] == "INFO"
    assert payload["task_id"] == "abc"
    assert payload["actor"] == "alice"
    assert payload["timestamp"].endswith("+00:00")


def test_key_value_formatter_appends_sorted_pairs() -> None:
    formatter = app_logging.KeyValueFormatter("%(levelname)s %(message)s")

    assert formatter.format(_record(b="2", a="1")) == "INFO task.created a=1 b=2"
    assert formatter.format(_record()) == "INFO task.created"


def test_configure_logging_does_not_duplicate_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app_logging.settings, "log_format", "json")
    root = logging.getLogger()
    original_level = root.level

    try:
        app_logging.configure_logging()
        app_logging.configure_logging()

        ours = [h for h in root.handlers if h.get_name() == "tasklist-api"]
        assert len(ours) == 1
        assert isinstance(ours[0].formatter, app_logging.JsonFormatter)
    finally:
        monkeypatch.setattr(app_logging.settings, "log_format", "text")
        app_logging.configure_logging()
        root.setLevel(original_level)
