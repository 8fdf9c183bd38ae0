from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from errors import TalentStoreError
from models import Found, PageResult, ScrapeTotals, TalentSummary
from ports import TalentDetailPort, TalentListPort, TalentSinkPort
from services.merge import merge_talent


logger = logging.getLogger(__name__)

# Stop reasons
END_PAGE_REACHED = "end_page_reached"
NO_DATA = "no_data"
EMPTY_PAGE = "empty_page"
NO_MORE_PAGES = "no_more_pages"

ProgressCallback = Callable[[int, int, Any, str], None]


def _pause(sleep: Callable[[float], None], delay_ms: int) -> None:
    if delay_ms > 0:
        sleep(delay_ms / 1000.0)


def _display_name(summary: Dict[str, Any]) -> str:
    try:
        return TalentSummary.model_validate(summary).display_name
    except ValidationError:
        return "Unknown"


def process_talent(
    summary: Dict[str, Any],
    detail_client: TalentDetailPort,
    sink: TalentSinkPort,
) -> bool:
    """Fetch, merge and save one list row. Returns True when the talent was saved."""
    talent_id = summary.get("id")
    log_extra = {"step": "process_talent", "talent_id": talent_id if talent_id is not None else "-"}
    if talent_id is None:
        logger.error("✗ List row without an id, skipping", extra={**log_extra, "status": "error"})
        return False

    logger.info(f"Processing talent ID: {talent_id} ({_display_name(summary)})", extra=log_extra)
    lookup = detail_client.fetch_detail(talent_id)
    if not isinstance(lookup, Found):
        logger.warning(f"✗ Failed to fetch details for talent {talent_id}: {lookup.reason}", extra={**log_extra, "status": "error"})
        return False

    record = merge_talent(lookup.detail, summary)
    try:
        result = sink.save(record)
    except TalentStoreError as e:
        logger.error(f"✗ Failed to save talent {talent_id}: {e}", extra={**log_extra, "status": "error", "error": type(e).__name__})
        return False

    if not result.success:
        logger.warning(f"✗ Failed to save talent {talent_id}: {result.message or 'unknown error'}", extra={**log_extra, "status": "error"})
        return False
    logger.info(f"✓ Saved talent {talent_id}", extra={**log_extra, "status": "ok"})
    return True


def process_page(
    page: int,
    page_result: PageResult,
    detail_client: TalentDetailPort,
    sink: TalentSinkPort,
    delay_ms: int,
    sleep: Callable[[float], None] = time.sleep,
    on_progress: Optional[ProgressCallback] = None,
) -> ScrapeTotals:
    """Process every row of one page in order; returns this page's counts."""
    rows = page_result.results or []
    total = len(rows)
    saved = 0
    errors = 0
    for idx, raw in enumerate(rows, start=1):
        summary = raw if isinstance(raw, dict) else {}
        if on_progress:
            on_progress(idx, total, summary.get("id"), _display_name(summary))
        if process_talent(summary, detail_client, sink):
            saved += 1
        else:
            errors += 1
        # Politeness delay after every item, whatever the outcome
        _pause(sleep, delay_ms)
    return ScrapeTotals(total_saved=saved, total_errors=errors, pages_processed=1, last_page=page)


def scrape_talents(
    list_client: TalentListPort,
    detail_client: TalentDetailPort,
    sink: TalentSinkPort,
    start_page: int,
    end_page: int,
    delay_ms: int,
    location: str,
    empty_page_policy: str = "continue",
    sleep: Callable[[float], None] = time.sleep,
    on_progress: Optional[ProgressCallback] = None,
) -> ScrapeTotals:
    """Scrape pages ``start_page``..``end_page`` one talent at a time.

    Item failures are counted, never raised. The run stops at the end page,
    on a missing page, on a page without results, or when the remote reports
    no next page. An empty (but present) results list stops the run only when
    ``empty_page_policy`` is "stop".
    """
    logger.info(f"Starting scrape from page {start_page} to {end_page}...", extra={"step": "scrape"})
    totals = ScrapeTotals()
    page = start_page

    while page <= end_page:
        page_result = list_client.fetch_page(page, location)
        if page_result is None or page_result.results is None:
            logger.info(f"No data found for page {page}, stopping...", extra={"step": "scrape", "page": page, "status": NO_DATA})
            totals = totals.stopped(NO_DATA)
            break

        logger.info(f"Page {page}: Found {len(page_result.results)} talents", extra={"step": "scrape", "page": page})
        if not page_result.results and empty_page_policy == "stop":
            logger.info(f"Page {page} is empty, stopping...", extra={"step": "scrape", "page": page, "status": EMPTY_PAGE})
            totals = totals.stopped(EMPTY_PAGE)
            break

        totals = totals + process_page(page, page_result, detail_client, sink, delay_ms, sleep=sleep, on_progress=on_progress)

        if not page_result.has_next:
            logger.info(f"No more pages available. Stopping at page {page}.", extra={"step": "scrape", "page": page, "status": NO_MORE_PAGES})
            totals = totals.stopped(NO_MORE_PAGES)
            break

        page += 1
        _pause(sleep, delay_ms)
    else:
        totals = totals.stopped(END_PAGE_REACHED)

    logger.info(
        f"Scraping complete: saved={totals.total_saved} errors={totals.total_errors} reason={totals.stop_reason}",
        extra={"step": "scrape", "status": totals.stop_reason},
    )
    return totals
