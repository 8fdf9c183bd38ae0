from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Mapping, Optional

import requests
from pydantic import ValidationError

from config.settings import Settings, get_settings
from models import UpsertResult
from utils.request_trace import log_request


logger = logging.getLogger(__name__)


class LocalApiTalentSink:
    """Saves merged talents through PUT /api/talent on the local persistence API."""

    def __init__(self, url: Optional[str] = None, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.url = url or self.settings.local_api_url
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def save(self, record: Mapping[str, Any]) -> UpsertResult:
        talent_id = record.get("id")
        started = time.monotonic()
        try:
            response = self.session.put(self.url, json=dict(record), timeout=self.settings.http_timeout_seconds)
        except requests.exceptions.RequestException as e:
            log_request(
                caller="local_api.save",
                method="PUT",
                url=self.url,
                duration_ms=int((time.monotonic() - started) * 1000),
                status="error",
                error=str(e),
                extras={"talent_id": talent_id},
                settings=self.settings,
            )
            logger.error(f"Error saving talent {talent_id}: {e}", extra={"step": "save", "status": "error", "talent_id": talent_id})
            return UpsertResult(success=False, message=str(e))

        log_request(
            caller="local_api.save",
            method="PUT",
            url=self.url,
            status_code=response.status_code,
            duration_ms=int((time.monotonic() - started) * 1000),
            status="ok" if response.status_code in (200, 201) else "error",
            extras={"talent_id": talent_id},
            settings=self.settings,
        )
        body = self._body(response)
        if response.status_code not in (200, 201):
            logger.error(
                f"Error saving talent {talent_id}: Status {response.status_code} {body}",
                extra={"step": "save", "status": "error", "talent_id": talent_id, "error": response.status_code},
            )
            return UpsertResult(success=False, message=self._error_message(body) or f"Status {response.status_code}")

        if not isinstance(body, dict):
            return UpsertResult(success=True, message="Talent saved")
        try:
            return UpsertResult.model_validate({"success": True, **body})
        except ValidationError:
            return UpsertResult(success=True, message=str(body.get("message") or "Talent saved"))

    @staticmethod
    def _error_message(body: Dict[str, Any] | str) -> Optional[str]:
        if not isinstance(body, dict):
            return None
        detail = body.get("details") or body.get("error")
        if not detail:
            return None
        return detail if isinstance(detail, str) else json.dumps(detail, default=str)

    @staticmethod
    def _body(response: requests.Response) -> Dict[str, Any] | str:
        content_type = response.headers.get("content-type") or ""
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError:
                pass
        return response.text
