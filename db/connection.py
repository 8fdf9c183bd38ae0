from __future__ import annotations

import sqlite3
from typing import Optional


def get_connection(
    db_path: str,
    timeout: Optional[float] = 30.0,
    check_same_thread: bool = True,
) -> sqlite3.Connection:
    """Open a SQLite connection for the talent document store.

    - WAL journal so the viewer API can read while a scrape writes
    - NORMAL synchronous for performance
    - check_same_thread=False for the API, which may hop worker threads per request
    """
    conn = sqlite3.connect(db_path, timeout=timeout or 30.0, check_same_thread=check_same_thread)
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    return conn
