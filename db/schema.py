from __future__ import annotations

import sqlite3


def bootstrap(conn: sqlite3.Connection) -> None:
    """Create the talents document table and its indexes (idempotent).

    Each row holds one JSON document in ``doc``. ``talent_id`` and ``id`` mirror
    the document's identity keys so SQLite can enforce their uniqueness;
    legacy rows may carry only ``id``. ``rank_key`` is the numeric sort key
    derived from ``personal_rank``.
    """
    cur = conn.cursor()

    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS talents (\n"
            "  doc_id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "  talent_id INTEGER UNIQUE,\n"
            "  id INTEGER UNIQUE,\n"
            "  rank_key REAL,\n"
            "  doc TEXT NOT NULL,\n"
            "  updated_at TEXT\n"
            ")"
        )
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_talents_rank ON talents(rank_key DESC, id ASC);")

    conn.commit()
