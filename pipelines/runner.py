from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from models import ScrapeTotals
from utils.logging_setup import init_logging


logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    """State handed from step to step during one scrape run."""

    start_page: int = 1
    end_page: int = 10
    location: Optional[str] = None
    run_id: str = field(default_factory=lambda: os.getenv("RUN_ID") or "-")
    totals: ScrapeTotals = field(default_factory=ScrapeTotals)
    step_durations_ms: Dict[str, int] = field(default_factory=dict)
    meta: dict = field(default_factory=dict)


class Step(Protocol):
    def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        init_logging()
        for step in self.steps:
            name = type(step).__name__
            extra = {"step": name, "run_id": ctx.run_id}
            logger.info(f"Running {name}", extra=extra)
            started = time.monotonic()
            ctx = step.run(ctx)
            duration_ms = int((time.monotonic() - started) * 1000)
            ctx.step_durations_ms[name] = duration_ms
            logger.info(f"Finished {name}", extra={**extra, "status": "ok", "duration_ms": duration_ms})
        return ctx
