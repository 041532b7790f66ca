"""
Tone Normalization
==================

Maps the many spellings of an emotional tone ("Fear", "anxious",
"Joy Theme", "HAPPY") onto a small fixed set of canonical categories.

Rules are case-insensitive substring matches applied in order, after
stripping whitespace and a trailing "Theme" suffix. Anything that matches
no rule, and any missing or empty label, becomes ``"Neutral"``. Canonical
names always map to themselves, which makes normalization idempotent.
"""

from __future__ import annotations

import re
from typing import Optional

NEUTRAL = "Neutral"

#: The fixed canonical tone set.
CANONICAL_TONES: tuple[str, ...] = (
    "Joy",
    "Sadness",
    "Anxiety",
    "Anger",
    "Contentment",
    "Confusion",
    "Overwhelm",
    "Loneliness",
    NEUTRAL,
)

#: Ordered (substring, canonical tone) rules. First match wins.
_TONE_RULES: list[tuple[str, str]] = [
    ("neutral", NEUTRAL),
    ("overwhelm", "Overwhelm"),
    ("stress", "Overwhelm"),
    ("lonel", "Loneliness"),
    ("isolat", "Loneliness"),
    ("fear", "Anxiety"),
    ("anxi", "Anxiety"),
    ("worr", "Anxiety"),
    ("nervous", "Anxiety"),
    ("panic", "Anxiety"),
    ("unhapp", "Sadness"),
    ("joy", "Joy"),
    ("happ", "Joy"),
    ("delight", "Joy"),
    ("sad", "Sadness"),
    ("depress", "Sadness"),
    ("grief", "Sadness"),
    ("anger", "Anger"),
    ("angry", "Anger"),
    ("rage", "Anger"),
    ("frustrat", "Anger"),
    ("content", "Contentment"),
    ("calm", "Contentment"),
    ("peace", "Contentment"),
    ("confus", "Confusion"),
]

_THEME_SUFFIX = re.compile(r"\s*theme\s*$", re.IGNORECASE)


def normalize_tone(label: Optional[str]) -> str:
    """Return the canonical tone for a raw tone label."""
    if not isinstance(label, str):
        return NEUTRAL

    cleaned = _THEME_SUFFIX.sub("", label.strip()).strip()
    if not cleaned:
        return NEUTRAL

    lowered = cleaned.lower()
    for canonical in CANONICAL_TONES:
        if lowered == canonical.lower():
            return canonical
    for needle, canonical in _TONE_RULES:
        if needle in lowered:
            return canonical
    return NEUTRAL
