"""
Point data model shared by the store, the analysis tools and the scene.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np
from numpy.typing import NDArray

Vector3 = tuple[float, float, float]


@dataclass(frozen=True)
class Relationship:
    """A scored link from one point to another, by id."""
    id: str
    strength: float


@dataclass(frozen=True)
class Point:
    """A single extracted term placed in the 3-D cloud.

    Attributes:
        id: Unique identifier within one PointStore.
        word: The term itself.
        emotional_tone: Canonical tone (always canonical or "Neutral").
        sentiment: Sentiment in [0, 1], or None when unknown.
        position: Static (x, y, z) from the layout provider, or None.
        color: RGB floats in [0, 1].
        hex_color: The same color as ``#RRGGBB``.
        frequency: Occurrence count in the source text, if known.
        category: ``"action"`` or ``"subject"`` when known.
        keywords: Context words the term co-occurs with.
        relationships: Related points, strongest first, never self.
    """
    id: str
    word: str
    emotional_tone: str
    sentiment: Optional[float]
    position: Optional[Vector3]
    color: Vector3
    hex_color: str
    frequency: Optional[int] = None
    category: Optional[str] = None
    keywords: tuple[str, ...] = ()
    relationships: tuple[Relationship, ...] = field(default_factory=tuple)

    @property
    def has_position(self) -> bool:
        return self.position is not None

    def position_array(self) -> NDArray:
        """Position as a float array; NaNs when missing."""
        if self.position is None:
            return np.full(3, np.nan)
        return np.asarray(self.position, dtype=float)

    def with_relationships(self, relationships: list[Relationship]) -> Point:
        ordered = sorted(
            (r for r in relationships if r.id != self.id),
            key=lambda r: -r.strength,
        )
        return replace(self, relationships=tuple(ordered))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "word": self.word,
            "emotional_tone": self.emotional_tone,
            "sentiment": self.sentiment,
            "position": list(self.position) if self.position is not None else None,
            "color": self.hex_color,
            "frequency": self.frequency,
            "category": self.category,
            "keywords": list(self.keywords),
            "relationships": [
                {"id": r.id, "strength": round(r.strength, 4)} for r in self.relationships
            ],
        }
