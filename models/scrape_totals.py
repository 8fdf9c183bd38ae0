from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ScrapeTotals:
    """Counters of one scrape run; combined with ``+`` as the loop advances."""

    total_saved: int = 0
    total_errors: int = 0
    pages_processed: int = 0
    last_page: Optional[int] = None
    stop_reason: Optional[str] = None

    def __add__(self, other: "ScrapeTotals") -> "ScrapeTotals":
        if not isinstance(other, ScrapeTotals):
            return NotImplemented
        return ScrapeTotals(
            total_saved=self.total_saved + other.total_saved,
            total_errors=self.total_errors + other.total_errors,
            pages_processed=self.pages_processed + other.pages_processed,
            last_page=other.last_page if other.last_page is not None else self.last_page,
            stop_reason=other.stop_reason or self.stop_reason,
        )

    def stopped(self, reason: str) -> "ScrapeTotals":
        return replace(self, stop_reason=reason)

    def as_dict(self) -> Dict[str, Any]:
        return {"totalSaved": self.total_saved, "totalErrors": self.total_errors}
