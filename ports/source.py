from __future__ import annotations

from typing import Any, Optional, Protocol

from models import DetailLookup, PageResult


class TalentListPort(Protocol):
    def fetch_page(self, page: int, location: str) -> Optional[PageResult]:
        ...


class TalentDetailPort(Protocol):
    def fetch_detail(self, talent_id: Any) -> DetailLookup:
        ...


class TalentSourcePort(TalentListPort, TalentDetailPort, Protocol):
    source_name: str
