from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional

from config.settings import get_settings
from models import ScrapeTotals


def _requests_for_run(run_id: str, log_path: Path) -> Dict[str, Dict[str, int]]:
    """Aggregate the JSONL request trace for the given run_id.

    Returns dict like { 'braintrust.fetch_page': {'calls': N, 'errors': E}, ... }
    """
    result: Dict[str, Dict[str, int]] = {}
    if not log_path.exists():
        return result
    with log_path.open("r", encoding="utf-8") as f:
        for line in f:
            try:
                rec = json.loads(line)
            except ValueError:
                continue
            if not isinstance(rec, dict) or rec.get("run_id") != run_id:
                continue
            bucket = result.setdefault(rec.get("caller") or "unknown", {"calls": 0, "errors": 0})
            bucket["calls"] += 1
            if rec.get("status") != "ok":
                bucket["errors"] += 1
    return result


def print_summary(totals: ScrapeTotals, start_page: int, end_page: int, api_usage: Optional[dict] = None) -> None:
    """Print summary of a scrape run."""
    print("\n" + "=" * 60)
    print("TALENT SCRAPE - SUMMARY")
    print("=" * 60)
    print(f"Pages Requested: {start_page}-{end_page}")
    print(f"Pages Processed: {totals.pages_processed}")
    print(f"Last Page: {totals.last_page if totals.last_page is not None else 'N/A'}")
    print(f"Stop Reason: {totals.stop_reason or 'N/A'}")
    print()
    print(f"Total talents saved: {totals.total_saved}")
    print(f"Total errors: {totals.total_errors}")
    if api_usage:
        print(f"API Calls Made: {api_usage.get('api_calls_made', 0)}")

    settings = get_settings()
    run_id = os.getenv("RUN_ID")
    if run_id and settings.request_trace:
        usage = _requests_for_run(run_id, Path(settings.request_log_path))
        if usage:
            print("Request Trace:")
            for caller, stats in usage.items():
                print(f"  {caller}: calls={stats['calls']}, errors={stats['errors']}")
    print("=" * 60)
