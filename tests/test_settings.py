from __future__ import annotations

import pytest

from config.settings import get_settings


def test_defaults(monkeypatch):
    for name in ("START_PAGE", "END_PAGE", "DELAY_MS", "TALENT_LOCATION", "EMPTY_PAGE_POLICY", "HTTP_TIMEOUT_SECONDS", "TALENT_API_BASE"):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert (s.start_page, s.end_page, s.delay_ms) == (1, 10, 1000)
    assert s.talent_location == "united_states_only"
    assert s.talent_api_base == "https://app.usebraintrust.com/api"
    assert s.empty_page_policy == "continue"
    assert s.http_timeout_seconds is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("START_PAGE", "3")
    monkeypatch.setenv("END_PAGE", "7")
    monkeypatch.setenv("DELAY_MS", "0")
    monkeypatch.setenv("EMPTY_PAGE_POLICY", "STOP")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "12.5")
    s = get_settings()
    assert (s.start_page, s.end_page, s.delay_ms) == (3, 7, 0)
    assert s.empty_page_policy == "stop"
    assert s.http_timeout_seconds == 12.5


@pytest.mark.parametrize("name,value", [("END_PAGE", "ten"), ("EMPTY_PAGE_POLICY", "skip")])
def test_invalid_values_raise(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(RuntimeError):
        get_settings()
