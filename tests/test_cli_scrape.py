from __future__ import annotations

import json
import sqlite3
import sys
from typing import List

import pytest

from models import Found, PageResult


def _run_cli_with_args(args_list: List[str]) -> None:
    """Run cli.py main() with provided argv in-process (no subprocess)."""
    argv_backup = sys.argv[:]
    try:
        sys.argv = ["cli.py"] + args_list
        # Import fresh to ensure clean parser each time
        if "cli" in sys.modules:
            del sys.modules["cli"]
        import cli  # type: ignore
        try:
            cli.main()  # type: ignore[attr-defined]
        except SystemExit as e:
            code = int(getattr(e, "code", 0) or 0)
            if code not in (0, None):
                raise
    finally:
        sys.argv = argv_backup


class _StubSource:
    source_name = "braintrust"

    def fetch_page(self, page, location):
        if page == 1:
            return PageResult(results=[{"id": 11, "search_score": 3, "personal_rank": [1]}, {"id": 12}], next="p2")
        return PageResult(results=[{"id": 13, "matching_skills_percent": 90}], next=None)

    def fetch_detail(self, talent_id):
        return Found(detail={"id": talent_id, "user": {"public_name": f"Talent {talent_id}"}, "role": {"name": "Developer"}})

    def get_api_usage(self):
        return {"api_calls_made": 5}


def test_cli_scrape_writes_db(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("RUN_ENV", "test")
    monkeypatch.setenv("RUN_ID", "cli-test-run")
    # Stub registry to avoid network
    import sources.registry as reg

    monkeypatch.setattr(reg, "_REGISTRY", {"braintrust": lambda: _StubSource()})

    db_path = tmp_path / "cli_scrape.db"
    _run_cli_with_args(["--db", str(db_path), "bootstrap"])
    _run_cli_with_args(["--db", str(db_path), "scrape", "--start-page", "1", "--end-page", "5", "--delay-ms", "0"])

    out = capsys.readouterr().out
    assert "Total talents saved: 3" in out
    assert '{"totalSaved": 3, "totalErrors": 0}' in out

    conn = sqlite3.connect(str(db_path))
    try:
        cur = conn.cursor()
        cur.execute("SELECT talent_id, doc FROM talents ORDER BY talent_id")
        rows = cur.fetchall()
        assert [r[0] for r in rows] == [11, 12, 13]
        doc = json.loads(rows[0][1])
        assert doc["search_score"] == 3
        assert doc["user"]["public_name"] == "Talent 11"
        assert "matching_skills_percent" not in doc
    finally:
        conn.close()


def test_cli_report_talents_filters(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("RUN_ID", "cli-test-run")
    import sources.registry as reg

    monkeypatch.setattr(reg, "_REGISTRY", {"braintrust": lambda: _StubSource()})
    db_path = tmp_path / "cli_report.db"
    _run_cli_with_args(["--db", str(db_path), "scrape", "--end-page", "1", "--delay-ms", "0"])
    capsys.readouterr()

    _run_cli_with_args(["--db", str(db_path), "report-talents", "--search", "talent 12"])
    listing = json.loads(capsys.readouterr().out)
    assert [t["id"] for t in listing["talents"]] == [12]
    assert listing["filters"]["roles"] == ["Developer"]

    _run_cli_with_args(["--db", str(db_path), "report-talent", "--id", "11"])
    doc = json.loads(capsys.readouterr().out)
    assert doc["talent_id"] == 11


def test_cli_bootstrap_closes_connection(tmp_path, monkeypatch, capsys):
    import db.connection as connection

    opened = []
    real_get_connection = connection.get_connection

    def _tracking_get_connection(*args, **kwargs):
        conn = real_get_connection(*args, **kwargs)
        opened.append(conn)
        return conn

    # cli binds get_connection at import; _run_cli_with_args re-imports it
    monkeypatch.setattr(connection, "get_connection", _tracking_get_connection)
    _run_cli_with_args(["--db", str(tmp_path / "boot.db"), "bootstrap"])

    assert "Schema ready" in capsys.readouterr().out
    assert len(opened) == 1
    with pytest.raises(sqlite3.ProgrammingError):
        opened[0].execute("SELECT 1")
