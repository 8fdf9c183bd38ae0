from __future__ import annotations

import logging

from utils.logging_setup import LOG_FORMAT, RunIdFilter, SafeExtraFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("talents", logging.INFO, __file__, 1, "Saved talent", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_run_id_filter_stamps_env_run_id(monkeypatch):
    monkeypatch.setenv("RUN_ID", "run-42")
    record = _record()
    assert RunIdFilter().filter(record) is True
    assert record.run_id == "run-42"


def test_run_id_filter_keeps_explicit_run_id(monkeypatch):
    monkeypatch.setenv("RUN_ID", "run-42")
    record = _record(run_id="other")
    RunIdFilter().filter(record)
    assert record.run_id == "other"


def test_formatter_defaults_missing_extras(monkeypatch):
    monkeypatch.delenv("RUN_ID", raising=False)
    record = _record(talent_id=7, status="ok")
    RunIdFilter().filter(record)
    line = SafeExtraFormatter(fmt=LOG_FORMAT).format(record)
    assert "Saved talent" in line
    assert "run_id=- step=- status=ok page=-" in line
    assert "talent_id=7" in line
