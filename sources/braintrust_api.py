"""
Braintrust talent API integration: list pages and per-talent detail records.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Optional

import requests
from pydantic import ValidationError

from config.settings import Settings, get_settings
from errors import RemoteFetchFailure
from models import DetailLookup, Found, NotFound, PageResult
from sources.registry import register
from utils.request_trace import log_request


logger = logging.getLogger(__name__)


class BraintrustTalentSource:
    """Fetches talent list pages and detail records. Never retries."""

    source_name = "braintrust"

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.api_base = self.settings.talent_api_base.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.api_calls_made = 0

    def _get_json(self, url: str, caller: str, params: Optional[dict] = None) -> Any:
        """GET ``url`` and return the decoded body, or raise RemoteFetchFailure."""
        started = time.monotonic()
        try:
            response = self.session.get(url, params=params, timeout=self.settings.http_timeout_seconds)
        except requests.exceptions.RequestException as e:
            log_request(
                caller=caller,
                method="GET",
                url=url,
                duration_ms=int((time.monotonic() - started) * 1000),
                status="error",
                error=str(e),
                extras=params,
                settings=self.settings,
            )
            raise RemoteFetchFailure(url, f"request error: {e}") from e

        self.api_calls_made += 1
        log_request(
            caller=caller,
            method="GET",
            url=url,
            status_code=response.status_code,
            duration_ms=int((time.monotonic() - started) * 1000),
            status="ok" if response.status_code == 200 else "error",
            extras=params,
            settings=self.settings,
        )
        if response.status_code != 200:
            raise RemoteFetchFailure(url, f"Status {response.status_code}", status_code=response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise RemoteFetchFailure(url, "response body is not JSON", status_code=response.status_code) from e

    def fetch_page(self, page: int, location: Optional[str] = None) -> Optional[PageResult]:
        """Fetch one list page; None on any failure."""
        location = location or self.settings.talent_location
        url = f"{self.api_base}/talent/"
        logger.info(f"Fetching page {page}...", extra={"step": "fetch_page", "page": page})
        try:
            payload = self._get_json(url, "braintrust.fetch_page", params={"custom_location": location, "page": page})
        except RemoteFetchFailure as e:
            logger.error(
                f"Error fetching page {page}: {e}",
                extra={"step": "fetch_page", "status": "error", "page": page, "error": e.status_code or "-"},
            )
            return None

        if not isinstance(payload, dict):
            logger.error(f"Unexpected payload for page {page}: expected an object", extra={"step": "fetch_page", "page": page})
            return None
        try:
            return PageResult.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Malformed page {page}: {e.error_count()} validation errors", extra={"step": "fetch_page", "page": page})
            return None

    def fetch_detail(self, talent_id: Any) -> DetailLookup:
        """Fetch the full record for one talent."""
        url = f"{self.api_base}/freelancers/{talent_id}"
        try:
            payload = self._get_json(url, "braintrust.fetch_detail")
        except RemoteFetchFailure as e:
            logger.error(
                f"Error fetching talent {talent_id}: {e}",
                extra={"step": "fetch_detail", "status": "error", "talent_id": talent_id, "error": e.status_code or "-"},
            )
            return NotFound(talent_id=talent_id, reason=str(e), status_code=e.status_code)

        if not isinstance(payload, dict):
            logger.error(f"Unexpected detail payload for talent {talent_id}", extra={"step": "fetch_detail", "talent_id": talent_id})
            return NotFound(talent_id=talent_id, reason="detail body is not an object", status_code=200)
        return Found(detail=payload)

    def get_api_usage(self) -> dict:
        return {"api_calls_made": self.api_calls_made}


def _register():
    register(BraintrustTalentSource.source_name, BraintrustTalentSource)


_register()
