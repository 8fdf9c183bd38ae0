from __future__ import annotations

import logging
import os
import sys
from typing import Any

from config.settings import get_settings


_INITIALIZED: bool = False

LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s %(message)s "
    "run_id=%(run_id)s step=%(step)s status=%(status)s page=%(page)s "
    "talent_id=%(talent_id)s duration_ms=%(duration_ms)s error=%(error)s"
)


class RunIdFilter(logging.Filter):
    """Stamps the current RUN_ID on records that were not logged with one.

    The CLI sets RUN_ID once per scrape, so every line of a run can be
    matched with its request trace entries.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "run_id", None):
            record.run_id = os.getenv("RUN_ID") or "-"
        return True


class SafeExtraFormatter(logging.Formatter):
    """Formatter that tolerates missing extra fields by injecting defaults."""

    DEFAULTS: dict[str, Any] = {
        "step": "-",
        "status": "-",
        "page": "-",
        "talent_id": "-",
        "duration_ms": "-",
        "error": "-",
        "run_id": "-",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        for key, value in self.DEFAULTS.items():
            if getattr(record, key, None) is None:
                setattr(record, key, value)
        return super().format(record)


def init_logging(level: str | None = None) -> None:
    """Attach one stdout handler to the root logger; later calls are no-ops."""
    global _INITIALIZED
    if _INITIALIZED:
        return

    log_level = getattr(logging, (level or get_settings().log_level).upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.addFilter(RunIdFilter())
        handler.setFormatter(SafeExtraFormatter(fmt=LOG_FORMAT))
        root_logger.addHandler(handler)

    _INITIALIZED = True
