from __future__ import annotations

from typing import Any, Callable, Dict


DEFAULT_SOURCE = "braintrust"

_REGISTRY: Dict[str, Callable[..., Any]] = {}


def register(name: str, factory: Callable[..., Any]) -> None:
    _REGISTRY[name] = factory


def get_source(name: str = DEFAULT_SOURCE, **kwargs: Any):
    """Instantiate a registered talent source; kwargs go to its factory."""
    if name not in _REGISTRY:
        known = ", ".join(sorted(_REGISTRY)) or "none"
        raise KeyError(f"Unknown source: {name} (available: {known})")
    return _REGISTRY[name](**kwargs)


def available_sources() -> Dict[str, Callable[..., Any]]:
    return dict(_REGISTRY)
