from __future__ import annotations

import pytest


def test_builtin_sources_registered():
    # Import package to trigger registration
    import sources  # noqa: F401
    from sources.registry import available_sources, get_source

    assert "braintrust" in available_sources()
    src = get_source("braintrust")
    assert src.source_name == "braintrust"
    assert hasattr(src, "fetch_page") and hasattr(src, "fetch_detail")


def test_unknown_source_raises():
    from sources.registry import get_source

    with pytest.raises(KeyError):
        get_source("does_not_exist")
