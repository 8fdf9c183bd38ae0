from __future__ import annotations

import time
from typing import Callable, Optional

from config.settings import get_settings
from pipelines.runner import RunContext
from pipelines.scrape_talents import ProgressCallback, scrape_talents
from ports import TalentSinkPort, TalentSourcePort


class ScrapeTalents:
    """Pipeline step: run the page loop for ctx.start_page..ctx.end_page."""

    def __init__(
        self,
        source: TalentSourcePort,
        sink: TalentSinkPort,
        delay_ms: Optional[int] = None,
        empty_page_policy: Optional[str] = None,
        sleep: Callable[[float], None] = time.sleep,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        settings = get_settings()
        self.source = source
        self.sink = sink
        self.delay_ms = settings.delay_ms if delay_ms is None else delay_ms
        self.empty_page_policy = empty_page_policy or settings.empty_page_policy
        self.location = settings.talent_location
        self.sleep = sleep
        self.on_progress = on_progress

    def run(self, ctx: RunContext) -> RunContext:
        totals = scrape_talents(
            list_client=self.source,
            detail_client=self.source,
            sink=self.sink,
            start_page=ctx.start_page,
            end_page=ctx.end_page,
            delay_ms=self.delay_ms,
            location=ctx.location or self.location,
            empty_page_policy=self.empty_page_policy,
            sleep=self.sleep,
            on_progress=self.on_progress,
        )
        ctx.totals = ctx.totals + totals
        ctx.meta["total_saved"] = ctx.totals.total_saved
        ctx.meta["total_errors"] = ctx.totals.total_errors
        ctx.meta["stop_reason"] = ctx.totals.stop_reason
        return ctx
