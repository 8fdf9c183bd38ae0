from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


EMPTY_PAGE_POLICIES = ("continue", "stop")


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Remote Braintrust API
    talent_api_base: str
    talent_location: str

    # Local persistence endpoint (PUT /api/talent)
    local_api_url: str

    # Paging / politeness
    start_page: int
    end_page: int
    delay_ms: int
    empty_page_policy: str  # continue | stop

    log_level: str

    # Core/runtime
    db_path: str
    run_env: str

    # None means the transport default (no timeout)
    http_timeout_seconds: float | None = None

    # Local API server
    api_host: str = "127.0.0.1"
    api_port: int = 3000

    # Logging/tracing
    request_trace: bool = False
    request_log_path: str = "logs/requests.jsonl"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    policy = os.getenv("EMPTY_PAGE_POLICY", "continue").strip().lower()
    if policy not in EMPTY_PAGE_POLICIES:
        raise RuntimeError(
            f"EMPTY_PAGE_POLICY must be one of {', '.join(EMPTY_PAGE_POLICIES)}, got {policy!r}"
        )

    timeout_raw = os.getenv("HTTP_TIMEOUT_SECONDS")
    http_timeout_seconds = None
    if timeout_raw:
        try:
            http_timeout_seconds = float(timeout_raw)
        except ValueError:
            raise RuntimeError(f"HTTP_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}") from None

    return Settings(
        talent_api_base=os.getenv("TALENT_API_BASE", "https://app.usebraintrust.com/api").rstrip("/"),
        talent_location=os.getenv("TALENT_LOCATION", "united_states_only"),
        local_api_url=os.getenv("LOCAL_API_URL", "http://localhost:3000/api/talent"),
        start_page=_env_int("START_PAGE", 1),
        end_page=_env_int("END_PAGE", 10),
        delay_ms=_env_int("DELAY_MS", 1000),
        empty_page_policy=policy,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        db_path=os.getenv("DB_PATH", "talents.db"),
        run_env=os.getenv("RUN_ENV", "local"),
        http_timeout_seconds=http_timeout_seconds,
        api_host=os.getenv("API_HOST", "127.0.0.1"),
        api_port=_env_int("API_PORT", 3000),
        request_trace=_env_bool("REQUEST_TRACE"),
        request_log_path=os.getenv("REQUEST_LOG_PATH", "logs/requests.jsonl"),
    )
