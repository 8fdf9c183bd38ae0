from __future__ import annotations

from services.merge import merge_talent


def test_merge_keeps_detail_and_injects_summary_fields():
    merged = merge_talent(
        {"id": 1, "x": "a"},
        {"search_score": 9, "matching_skills_percent": 50, "personal_rank": [1]},
    )
    assert merged == {"id": 1, "x": "a", "search_score": 9, "matching_skills_percent": 50, "personal_rank": [1]}


def test_summary_fields_win_over_detail():
    detail = {"id": 5, "search_score": 1, "personal_rank": [0]}
    summary = {"id": 5, "search_score": 7, "matching_skills_percent": 80, "personal_rank": [3], "user": {"public_name": "X"}}
    merged = merge_talent(detail, summary)
    assert merged["search_score"] == 7
    assert merged["personal_rank"] == [3]
    # Only the three rank/score fields come from the summary
    assert "user" not in merged


def test_merge_is_shallow_and_does_not_mutate_inputs():
    user = {"public_name": "Jane"}
    detail = {"id": 2, "user": user}
    summary = {"search_score": 3}
    merged = merge_talent(detail, summary)
    assert merged["user"] is user
    assert detail == {"id": 2, "user": user}
    assert merged["matching_skills_percent"] is None
