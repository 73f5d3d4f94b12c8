"""Static vocabularies used for weighting and suggestions.

Both tables are built once at import time and exposed read-only.
"""

from types import MappingProxyType
from typing import Mapping

DEFAULT_TERM_WEIGHT = 1.0

TERM_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        # Svelte 5 runes
        "runes": 1.5,
        "$state": 1.5,
        "$derived": 1.5,
        "$effect": 1.5,
        "$props": 1.5,
        "$bindable": 1.5,
        # Core concepts
        "lifecycle": 1.3,
        "component": 1.3,
        "store": 1.3,
        "reactive": 1.3,
        # SvelteKit
        "sveltekit": 1.4,
        "routing": 1.4,
        "server": 1.4,
        "load": 1.4,
        "action": 1.4,
        # Errors
        "error": 1.2,
        "warning": 1.2,
        "debug": 1.2,
    }
)

RELATED_TERMS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "state": ("$state", "reactive", "store", "writable"),
        "store": ("writable", "readable", "derived", "state", "$state"),
        "props": ("$props", "component", "attributes"),
        "effect": ("$effect", "lifecycle", "onMount", "onDestroy"),
        "derived": ("$derived", "computed", "store"),
        "route": ("routing", "navigation", "params", "sveltekit"),
        "params": ("routing", "dynamic", "url", "query"),
        "component": ("custom element", "lifecycle", "slot"),
        "error": ("debug", "warning", "exception", "handle"),
        "action": ("form", "submit", "server", "mutate"),
        "bind": ("binding", "$bindable", "two-way"),
        "slot": ("component", "children", "content"),
        "rune": ("$state", "$derived", "$effect", "$props"),
    }
)


def term_weight(term: str) -> float:
    """Return the multiplier for a term, 1.0 when it is not listed."""
    return TERM_WEIGHTS.get(term, DEFAULT_TERM_WEIGHT)


def is_weighted(term: str) -> bool:
    return term in TERM_WEIGHTS
