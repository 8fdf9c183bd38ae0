from __future__ import annotations

import json
import logging
import math
import sqlite3
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from errors import InvalidTalentId, StoreConflict, StoreFailure
from models import ListingFilters, Pagination, TalentListing, UpsertResult


logger = logging.getLogger(__name__)

# Lookup order used when the primary upsert hits a uniqueness violation.
# "id" covers pre-existing documents that were keyed on the legacy id only.
FALLBACK_LOOKUPS: Tuple[str, ...] = ("talent_id", "id")

SEARCH_PATHS: Tuple[str, ...] = (
    "$.user.first_name",
    "$.user.last_name",
    "$.user.public_name",
    "$.user.title",
    "$.user.introduction_headline",
    "$.location",
)

MAX_PAGE_SIZE = 100

# SQLite INTEGER is a signed 64-bit value
MIN_TALENT_ID = -(2**63)
MAX_TALENT_ID = 2**63 - 1


def coerce_talent_id(value: Any) -> int:
    """Return ``value`` as a non-zero integer id or raise InvalidTalentId."""
    if value is None or isinstance(value, bool):
        raise InvalidTalentId("Invalid talent data. ID is required.", value)
    if isinstance(value, int):
        talent_id = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise InvalidTalentId("Invalid talent ID. Must be a valid number.", value)
        talent_id = int(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidTalentId("Invalid talent data. ID is required.", value)
        try:
            number = float(text)
        except ValueError:
            raise InvalidTalentId("Invalid talent ID. Must be a valid number.", value) from None
        if not math.isfinite(number) or not number.is_integer():
            raise InvalidTalentId("Invalid talent ID. Must be a valid number.", value)
        talent_id = int(number)
    else:
        raise InvalidTalentId("Invalid talent ID. Must be a valid number.", value)
    if talent_id == 0:
        raise InvalidTalentId("Invalid talent ID. Must be a valid number.", value)
    if not MIN_TALENT_ID <= talent_id <= MAX_TALENT_ID:
        raise InvalidTalentId("Invalid talent ID. Out of range.", value)
    return talent_id


def prepare_document(record: Mapping[str, Any], talent_id: int, updated_at: str) -> Dict[str, Any]:
    """Stamp identity and updatedAt, then drop top-level None values (never talent_id)."""
    doc: Dict[str, Any] = dict(record)
    doc["id"] = talent_id
    doc["talent_id"] = talent_id
    doc["updatedAt"] = updated_at
    return {k: v for k, v in doc.items() if k == "talent_id" or v is not None}


def _rank_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def rank_key(personal_rank: Any) -> Optional[float]:
    """Numeric sort key for personal_rank; arrays sort by their largest number."""
    if isinstance(personal_rank, (list, tuple)):
        numbers = [n for n in (_rank_number(x) for x in personal_rank) if n is not None]
        return max(numbers) if numbers else None
    return _rank_number(personal_rank)


def _contains_ci(haystack: Any, needle: Any) -> int:
    if haystack is None or needle is None:
        return 0
    return int(str(needle).casefold() in str(haystack).casefold())


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class TalentsRepo:
    """Talent document collection stored in the ``talents`` table."""

    def __init__(self, conn: sqlite3.Connection, clock: Optional[Callable[[], str]] = None):
        self.conn = conn
        self.clock = clock or _utc_now_iso
        self.conn.create_function("contains_ci", 2, _contains_ci, deterministic=True)

    # --- Writes ---
    def save(self, record: Mapping[str, Any]) -> UpsertResult:
        """Upsert a merged talent record keyed by talent_id.

        Raises InvalidTalentId before touching the database, StoreConflict when a
        uniqueness violation cannot be resolved, StoreFailure for other errors.
        """
        if not isinstance(record, Mapping):
            raise InvalidTalentId("Invalid talent data. ID is required.", record)
        talent_id = coerce_talent_id(record.get("id"))
        doc = prepare_document(record, talent_id, self.clock())

        try:
            return self._upsert(talent_id, doc)
        except sqlite3.IntegrityError as e:
            logger.warning(
                f"Duplicate key saving talent {talent_id}, retrying by lookup: {e}",
                extra={"step": "save", "status": "conflict", "talent_id": talent_id},
            )
            try:
                result = self.update_by_fallback(talent_id, doc)
            except sqlite3.Error as retry_error:
                raise StoreConflict(talent_id, f"Error retrying save after duplicate key error: {retry_error}") from retry_error
            if result.matched == 0:
                raise StoreConflict(talent_id, f"Duplicate key for talent {talent_id} but no document matched") from e
            return result
        except sqlite3.Error as e:
            raise StoreFailure(f"Failed to save talent {talent_id}: {e}") from e

    def _upsert(self, talent_id: int, doc: Dict[str, Any]) -> UpsertResult:
        with self.conn:
            cur = self.conn.cursor()
            if not self.conn.in_transaction:
                cur.execute("BEGIN IMMEDIATE")
            cur.execute("SELECT doc_id, doc FROM talents WHERE talent_id = ?", (talent_id,))
            row = cur.fetchone()
            if row is None:
                cur.execute(
                    "INSERT INTO talents (talent_id, id, rank_key, doc, updated_at) VALUES (?, ?, ?, ?, ?)",
                    (talent_id, talent_id, rank_key(doc.get("personal_rank")), self._dumps(doc), doc["updatedAt"]),
                )
                return UpsertResult(success=True, id=talent_id, upserted=1, message="Talent saved successfully")
            modified = self._apply_set(cur, int(row[0]), row[1], doc)
        return UpsertResult(success=True, id=talent_id, matched=1, modified=int(modified), message="Talent saved successfully")

    def update_by_fallback(self, talent_id: int, doc: Dict[str, Any]) -> UpsertResult:
        """Update the first document found via FALLBACK_LOOKUPS; never inserts.

        Returns matched=0 when no lookup finds a document.
        """
        for field in FALLBACK_LOOKUPS:
            with self.conn:
                cur = self.conn.cursor()
                cur.execute(f"SELECT doc_id, doc FROM talents WHERE {field} = ?", (talent_id,))
                row = cur.fetchone()
                if row is None:
                    continue
                modified = self._apply_set(cur, int(row[0]), row[1], doc)
            return UpsertResult(
                success=True,
                id=talent_id,
                matched=1,
                modified=int(modified),
                message="Talent updated successfully (duplicate key resolved)",
            )
        return UpsertResult(success=False, id=talent_id, message="No document matched any fallback lookup")

    def _apply_set(self, cur: sqlite3.Cursor, doc_id: int, stored: str, doc: Dict[str, Any]) -> bool:
        """$set semantics: payload keys replace stored keys, other stored keys stay."""
        try:
            existing = json.loads(stored)
        except ValueError as e:
            raise StoreFailure(f"Stored document {doc_id} is not valid JSON") from e
        merged = dict(existing) if isinstance(existing, dict) else {}
        merged.update(doc)
        cur.execute(
            "UPDATE talents SET talent_id = ?, id = ?, rank_key = ?, doc = ?, updated_at = ? WHERE doc_id = ?",
            (
                merged["talent_id"],
                merged["id"],
                rank_key(merged.get("personal_rank")),
                self._dumps(merged),
                merged.get("updatedAt"),
                doc_id,
            ),
        )
        return merged != existing

    @staticmethod
    def _dumps(doc: Dict[str, Any]) -> str:
        # Preserve non-ASCII characters (names, locations) in stored JSON text
        return json.dumps(doc, ensure_ascii=False, default=str)

    # --- Reads ---
    def get(self, talent_id: int) -> Optional[Dict[str, Any]]:
        cur = self.conn.cursor()
        cur.execute("SELECT doc FROM talents WHERE talent_id = ? OR (talent_id IS NULL AND id = ?) LIMIT 1", (talent_id, talent_id))
        row = cur.fetchone()
        return json.loads(row[0]) if row else None

    def count(self) -> int:
        cur = self.conn.cursor()
        cur.execute("SELECT COUNT(*) FROM talents")
        return int(cur.fetchone()[0])

    def distinct_roles(self) -> List[str]:
        cur = self.conn.cursor()
        cur.execute("SELECT DISTINCT json_extract(doc, '$.role.name') FROM talents")
        return sorted(str(r[0]) for r in cur.fetchall() if r[0])

    def list_talents(self, page: int = 1, limit: int = 20, search: str = "", role: str = "") -> TalentListing:
        """Filtered, sorted page of talent documents plus pagination and role filters."""
        page = max(1, int(page))
        limit = max(1, min(int(limit), MAX_PAGE_SIZE))
        where: List[str] = []
        params: List[Any] = []
        if search:
            where.append("(" + " OR ".join(f"contains_ci(json_extract(doc, '{path}'), ?)" for path in SEARCH_PATHS) + ")")
            params.extend([search] * len(SEARCH_PATHS))
        if role:
            where.append("json_extract(doc, '$.role.name') = ?")
            params.append(role)
        where_sql = (" WHERE " + " AND ".join(where)) if where else ""

        cur = self.conn.cursor()
        cur.execute(f"SELECT COUNT(*) FROM talents{where_sql}", tuple(params))
        total = int(cur.fetchone()[0])
        cur.execute(
            f"SELECT doc FROM talents{where_sql} ORDER BY rank_key DESC, id ASC LIMIT ? OFFSET ?",
            (*params, limit, (page - 1) * limit),
        )
        talents = [json.loads(r[0]) for r in cur.fetchall()]
        return TalentListing(
            talents=talents,
            pagination=Pagination(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit)),
            filters=ListingFilters(roles=self.distinct_roles()),
        )
