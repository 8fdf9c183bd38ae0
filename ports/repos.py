from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from models import TalentListing, UpsertResult


class TalentSinkPort(Protocol):
    def save(self, record: Dict[str, Any]) -> UpsertResult:
        ...


class TalentsRepoPort(TalentSinkPort, Protocol):
    def get(self, talent_id: int) -> Optional[Dict[str, Any]]:
        ...

    def list_talents(
        self,
        page: int = 1,
        limit: int = 20,
        search: str = "",
        role: str = "",
    ) -> TalentListing:
        ...
