"""
Relationship Scoring
====================

Pairwise similarity between two points, combining four signals:

    spatial_similarity
        ``max(0, 1 - d / distance_scale)`` for the Euclidean distance ``d``
        between static positions. The scale depends on the layout and is a
        tunable parameter (40 by default). 0 when either position is missing.

    sentiment_similarity
        ``1 - |s1 - s2|``. 0 when either sentiment is missing.

    same_emotional_group
        Whether both points share a canonical tone.

    shared_keywords
        Context keywords both points carry.

The overall similarity is ``0.4 * spatial + 0.4 * sentiment + 0.2 * same``
and drives both the strength labels shown for an explicit comparison and the
precomputed ``relationships`` list on every point. Scoring is symmetric.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional

from scipy.spatial.distance import euclidean

from ..config import RelationshipConfig
from ..points.model import Point, Relationship

logger = logging.getLogger(__name__)

#: (lower bound, label) pairs, strongest first.
STRENGTH_LABELS: list[tuple[float, str]] = [
    (0.8, "Strongly Related"),
    (0.6, "Related"),
    (0.4, "Moderately Related"),
    (0.2, "Weakly Related"),
]


@dataclass(frozen=True)
class RelationshipScore:
    """Similarity breakdown for one pair of points."""
    spatial_similarity: float
    sentiment_similarity: float
    same_emotional_group: bool
    shared_keywords: tuple[str, ...]
    overall_similarity: float

    @property
    def label(self) -> str:
        return strength_label(self.overall_similarity)

    def to_dict(self) -> dict:
        return {
            "spatial_similarity": self.spatial_similarity,
            "sentiment_similarity": self.sentiment_similarity,
            "same_emotional_group": self.same_emotional_group,
            "shared_keywords": list(self.shared_keywords),
            "overall_similarity": self.overall_similarity,
            "label": self.label,
        }


def strength_label(overall: float) -> str:
    for bound, label in STRENGTH_LABELS:
        if overall >= bound:
            return label
    return "Barely Related"


def _valid_position(point: Point) -> bool:
    if point.position is None or len(point.position) != 3:
        return False
    return all(math.isfinite(v) for v in point.position)


def spatial_similarity(p1: Point, p2: Point, distance_scale: float = 40.0) -> float:
    if not (_valid_position(p1) and _valid_position(p2)):
        return 0.0
    distance = euclidean(p1.position, p2.position)
    return max(0.0, 1.0 - distance / distance_scale)


def sentiment_similarity(p1: Point, p2: Point) -> float:
    if p1.sentiment is None or p2.sentiment is None:
        return 0.0
    return 1.0 - abs(p1.sentiment - p2.sentiment)


def score_relationship(
    p1: Point,
    p2: Point,
    config: Optional[RelationshipConfig] = None,
) -> RelationshipScore:
    """
    Score how related two points are.

    Parameters
    ----------
    p1, p2 : Point
        The points to compare. Order does not affect any score.
    config : RelationshipConfig, optional
        Distance scale and component weights.

    Returns
    -------
    RelationshipScore
        Per-signal similarities plus the weighted overall score.
    """
    cfg = config or RelationshipConfig()

    spatial = spatial_similarity(p1, p2, cfg.distance_scale)
    sentiment = sentiment_similarity(p1, p2)
    same_group = (p1.emotional_tone or "Neutral") == (p2.emotional_tone or "Neutral")
    other_keywords = set(p2.keywords)
    shared = tuple(k for k in p1.keywords if k in other_keywords)

    overall = (
        cfg.spatial_weight * spatial
        + cfg.sentiment_weight * sentiment
        + cfg.group_weight * (1.0 if same_group else 0.0)
    )

    return RelationshipScore(
        spatial_similarity=spatial,
        sentiment_similarity=sentiment,
        same_emotional_group=same_group,
        shared_keywords=shared,
        overall_similarity=overall,
    )


def rank_relationships(
    point: Point,
    others: Iterable[Point],
    limit: int = 5,
    config: Optional[RelationshipConfig] = None,
) -> list[Relationship]:
    """Strongest relationships from ``point`` to ``others``, self excluded."""
    scored = [
        Relationship(id=other.id, strength=score_relationship(point, other, config).overall_similarity)
        for other in others
        if other.id != point.id
    ]
    scored.sort(key=lambda r: -r.strength)
    return scored[:max(0, limit)]


def connected_points(point: Optional[Point], store, limit: int = 3) -> list[Point]:
    """
    Resolve a point's precomputed relationships to points in ``store``.

    Only the ``limit`` strongest relationships are used; ids no longer in
    the store are skipped.
    """
    if point is None:
        return []
    connected: list[Point] = []
    for rel in point.relationships[:limit]:
        other = store.get(rel.id)
        if other is not None and other.id != point.id:
            connected.append(other)
    return connected
