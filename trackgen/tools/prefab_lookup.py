"""
Prefab alias lookup.

Short human-friendly keys ("cube1", "cylinder0x5") map to the game's
canonical asset names. Anything not in the table is assumed to already be
a canonical name and passes through unchanged.
"""

import json
from functools import lru_cache
from pathlib import Path


# ============================================================================
# Data Loading
# ============================================================================

@lru_cache(maxsize=1)
def _load_aliases() -> dict[str, str]:
    """Load the alias table from JSON. Cached so we only read once."""
    data_path = Path(__file__).parent.parent / "data" / "prefabs.json"
    with open(data_path, encoding="utf-8") as f:
        return json.load(f)


# ============================================================================
# Lookup
# ============================================================================

def resolve_type_id(key: str) -> str:
    """Return the canonical asset name for `key`, or `key` itself if unknown."""
    return _load_aliases().get(key, key)


def is_alias(key: str) -> bool:
    return key in _load_aliases()


def list_aliases() -> dict[str, str]:
    """Return a copy of the alias table, sorted by alias."""
    return dict(sorted(_load_aliases().items()))
