from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict


class PageResult(BaseModel):
    """Remote list page: raw result rows plus the next-page link.

    ``results`` is None when the payload carried no results key at all,
    which is distinct from an empty list. Rows are kept as received; a row
    that is not an object is counted as an error when the page is processed.
    """

    results: List[Any] | None = None
    next: str | None = None

    model_config = ConfigDict(extra="ignore")

    @property
    def has_next(self) -> bool:
        return bool(self.next)
