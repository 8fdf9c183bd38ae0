from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class UpsertResult(BaseModel):
    """Outcome of one talent save, as returned by the store and by PUT /api/talent."""

    success: bool
    id: int | None = None
    matched: int = 0
    modified: int = 0
    upserted: int = 0
    message: str | None = None

    model_config = ConfigDict(extra="ignore")
