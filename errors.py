"""
Error types shared by the talent store, the remote API client and the route layer.
"""
from __future__ import annotations

from typing import Optional


class TalentStoreError(Exception):
    """Base class for failures while persisting a talent document."""


class InvalidTalentId(TalentStoreError, ValueError):
    """The record has no usable numeric id; nothing was written."""

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class StoreConflict(TalentStoreError):
    """A uniqueness violation that the fallback lookups could not resolve."""

    def __init__(self, talent_id: int, message: str):
        super().__init__(message)
        self.talent_id = talent_id


class StoreFailure(TalentStoreError):
    """Any other database error during a save."""


class RemoteFetchFailure(Exception):
    """Non-success status or transport error from the remote talent API."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
