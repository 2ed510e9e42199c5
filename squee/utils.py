"""Small list helpers shared by the emitter."""

from __future__ import annotations

from typing import Any, List


def remove_from_list(items: List[Any], item: Any) -> bool:
    """Remove every occurrence of ``item`` (by identity) from ``items`` in place.

    Returns True if at least one occurrence was removed.
    """
    kept = [existing for existing in items if existing is not item]
    if len(kept) == len(items):
        return False
    items[:] = kept
    return True
