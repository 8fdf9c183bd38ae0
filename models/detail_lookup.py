from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class Found:
    detail: Dict[str, Any]


@dataclass(frozen=True)
class NotFound:
    talent_id: Any
    reason: str
    status_code: Optional[int] = None


DetailLookup = Union[Found, NotFound]
