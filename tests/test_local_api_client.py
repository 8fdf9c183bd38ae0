from __future__ import annotations

from unittest.mock import MagicMock

import requests

from config.settings import get_settings
from services.local_api_client import LocalApiTalentSink


def _mock_resp(status_code: int, payload=None, text: str = "") -> MagicMock:
    mock = MagicMock()
    mock.status_code = status_code
    mock.headers = {"content-type": "application/json"} if payload is not None else {"content-type": "text/plain"}
    mock.json.return_value = payload
    mock.text = text
    return mock


def test_put_success_parses_counts():
    session = MagicMock()
    session.put.return_value = _mock_resp(200, {"success": True, "id": 4, "matched": 1, "modified": 1, "upserted": 0})
    sink = LocalApiTalentSink(url="http://localhost:3000/api/talent", settings=get_settings(), session=session)

    result = sink.save({"id": 4, "title": "Dev"})

    assert result.success
    assert (result.id, result.matched, result.modified, result.upserted) == (4, 1, 1, 0)
    args, kwargs = session.put.call_args
    assert args[0] == "http://localhost:3000/api/talent"
    assert kwargs["json"] == {"id": 4, "title": "Dev"}


def test_put_created_counts_as_success():
    session = MagicMock()
    session.put.return_value = _mock_resp(201, {"success": True, "id": 5, "upserted": 1})
    assert LocalApiTalentSink(session=session).save({"id": 5}).success


def test_put_error_status_is_failure():
    session = MagicMock()
    session.put.return_value = _mock_resp(400, {"error": "Invalid talent ID. Must be a valid number."})
    result = LocalApiTalentSink(session=session).save({"id": "abc"})
    assert result.success is False
    assert "Invalid talent ID" in (result.message or "")


def test_put_non_json_error_body():
    session = MagicMock()
    session.put.return_value = _mock_resp(502, text="Bad Gateway")
    result = LocalApiTalentSink(session=session).save({"id": 1})
    assert result.success is False
    assert result.message == "Status 502"


def test_put_transport_error_is_failure():
    session = MagicMock()
    session.put.side_effect = requests.exceptions.ConnectionError("refused")
    result = LocalApiTalentSink(session=session).save({"id": 1})
    assert result.success is False


def test_put_error_with_structured_details_is_failure():
    session = MagicMock()
    session.put.return_value = _mock_resp(500, {"error": "Failed to save talent", "details": {"code": 11000}})

    result = LocalApiTalentSink(session=session).save({"id": 6})

    assert result.success is False
    assert result.message == '{"code": 11000}'
