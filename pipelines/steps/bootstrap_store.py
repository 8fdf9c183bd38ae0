from __future__ import annotations

import sqlite3

from db import schema
from pipelines.runner import RunContext


class BootstrapStore:
    """Pipeline step: make sure the talents table exists before writing."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def run(self, ctx: RunContext) -> RunContext:
        schema.bootstrap(self.conn)
        ctx.meta["store_ready"] = True
        return ctx
