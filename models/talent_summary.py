from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class TalentUser(BaseModel):
    """Nested user block of a list row; only the display name is read."""

    public_name: str | None = None

    model_config = ConfigDict(extra="allow")


class TalentSummary(BaseModel):
    """One row of a remote list page."""

    id: Any = None
    search_score: Any = None
    matching_skills_percent: Any = None
    personal_rank: Any = None
    user: TalentUser | None = None

    model_config = ConfigDict(extra="allow")

    @property
    def display_name(self) -> str:
        if self.user and self.user.public_name:
            return self.user.public_name
        return "Unknown"
