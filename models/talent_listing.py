from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")

    model_config = ConfigDict(populate_by_name=True)


class ListingFilters(BaseModel):
    roles: List[str] = Field(default_factory=list)


class TalentListing(BaseModel):
    """Viewer response shape for GET /api/talent."""

    talents: List[Dict[str, Any]] = Field(default_factory=list)
    pagination: Pagination
    filters: ListingFilters = Field(default_factory=ListingFilters)

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
