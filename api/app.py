"""
Local persistence API for scraped talents: PUT upserts, GET lists with search/filter.
"""
from __future__ import annotations

import logging
from typing import Any, Iterator

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from config.settings import get_settings
from db import schema
from db.connection import get_connection
from db.repos.talents_repo import TalentsRepo
from errors import InvalidTalentId
from ports import TalentsRepoPort


logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "86400",
}

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20

app = FastAPI(title="Talent Store API", version="1.0")


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    for key, value in CORS_HEADERS.items():
        response.headers.setdefault(key, value)
    return response


def get_repo() -> Iterator[TalentsRepo]:
    settings = get_settings()
    conn = get_connection(settings.db_path, check_same_thread=False)
    try:
        schema.bootstrap(conn)
        yield TalentsRepo(conn)
    finally:
        conn.close()


def _positive_int(raw: str | None, default: int) -> int:
    try:
        value = int(raw) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


@app.get("/health")
def health():
    return {"ok": True}


@app.options("/api/talent")
def talent_preflight():
    return JSONResponse({}, headers=CORS_HEADERS)


@app.put("/api/talent")
async def put_talent(request: Request, repo: TalentsRepoPort = Depends(get_repo)):
    try:
        talent_data: Any = await request.json()
    except ValueError:
        talent_data = None
    if not isinstance(talent_data, dict):
        return JSONResponse({"error": "Invalid talent data. ID is required."}, status_code=400)

    try:
        result = await run_in_threadpool(repo.save, talent_data)
    except InvalidTalentId as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except Exception as e:
        logger.exception("Error saving talent", extra={"step": "api.put", "status": "error", "talent_id": talent_data.get("id")})
        return JSONResponse({"error": "Failed to save talent", "details": str(e)}, status_code=500)

    body = {
        "success": result.success,
        "message": result.message,
        "id": result.id,
        "matched": result.matched,
        "modified": result.modified,
        "upserted": result.upserted,
    }
    return JSONResponse(body, status_code=201 if result.upserted else 200)


@app.get("/api/talent")
def list_talents(
    page: str | None = None,
    limit: str | None = None,
    search: str = "",
    role: str = "",
    repo: TalentsRepoPort = Depends(get_repo),
):
    try:
        listing = repo.list_talents(
            page=_positive_int(page, DEFAULT_PAGE),
            limit=_positive_int(limit, DEFAULT_LIMIT),
            search=search.strip(),
            role=role.strip(),
        )
    except Exception as e:
        logger.exception("Error fetching talents", extra={"step": "api.get", "status": "error"})
        return JSONResponse({"error": "Failed to fetch talents", "details": str(e)}, status_code=500)
    return listing.to_response()
