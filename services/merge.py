from __future__ import annotations

from typing import Any, Dict, Mapping


# Rank/score signals that only the list endpoint returns
SUMMARY_FIELDS = ("search_score", "matching_skills_percent", "personal_rank")


def merge_talent(detail: Mapping[str, Any], summary: Mapping[str, Any]) -> Dict[str, Any]:
    """Combine a detail record with the summary-only fields of its list row.

    Shallow: nested objects come from ``detail`` as-is. The three summary
    fields always win; a field the summary lacks is set to None.
    """
    merged = dict(detail)
    for key in SUMMARY_FIELDS:
        merged[key] = summary.get(key)
    return merged
