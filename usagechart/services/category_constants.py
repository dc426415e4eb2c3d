"""Shared category constants and helpers for session categories.

Keeps the category pie and the app list agreeing on the same display label
for a given raw category value.
"""
from __future__ import annotations
from typing import Optional

# Canonical bucket for missing or "other"-like categories
OTHER_LABEL = "Other"

# Lowercased values that collapse into OTHER_LABEL
OTHER_ALIASES = {
    "other",
    "others",
}


def normalize_category(raw: Optional[str]) -> str:
    """Normalize a raw category value to its display label.

    - None, empty or whitespace-only values become "Other".
    - "other" / "others" in any casing become "Other".
    - Anything else is returned verbatim (case preserved, not trimmed).
    """
    if raw is None or not raw.strip():
        return OTHER_LABEL

    if raw.lower() in OTHER_ALIASES:
        return OTHER_LABEL

    return raw


__all__ = [
    "OTHER_LABEL",
    "OTHER_ALIASES",
    "normalize_category",
]
