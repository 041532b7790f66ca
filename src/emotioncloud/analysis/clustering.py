"""
Emotional Grouping
==================

Groups points by canonical tone and measures each group's extent.

For every tone present, the group centroid is the arithmetic mean of its
members' static positions and the radius is ``radius_padding`` (1.5) times
the largest centroid-to-member distance, so points near the boundary stay
visually inside the cluster. Members without a position stay in the group
but take no part in its geometry.

Visible cluster count
---------------------
The scene can limit how many groups are considered for rendering and
filtering (1-12, 8 by default). Groups are ordered by member count
(largest first), ties broken by tone name, and the smallest groups are
dropped first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.distance import cdist

from ..config import ClusterConfig
from ..points.model import Point

logger = logging.getLogger(__name__)


@dataclass
class EmotionalGroup:
    """The points sharing one canonical tone.

    Attributes:
        name: Canonical tone.
        color: Hex color of the group (taken from its members).
        points: Member points, in store order.
        centroid: Mean static position of positioned members; zeros when
            no member has a position.
        radius: Padded maximum centroid-to-member distance.
    """
    name: str
    color: str
    points: list[Point] = field(default_factory=list)
    centroid: NDArray = field(default_factory=lambda: np.zeros(3))
    radius: float = 0.0

    @property
    def size(self) -> int:
        return len(self.points)

    @property
    def words(self) -> list[str]:
        return [p.word for p in self.points]

    def contains(self, position) -> bool:
        """Whether a position lies within the group's sphere."""
        pos = np.asarray(position, dtype=float)
        return float(np.linalg.norm(pos - self.centroid)) <= self.radius + 1e-9

    def __repr__(self) -> str:
        return (
            f"EmotionalGroup(name={self.name!r}, size={self.size}, "
            f"radius={self.radius:.3f})"
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "color": self.color,
            "words": self.words,
            "centroid": [float(c) for c in self.centroid],
            "radius": float(self.radius),
        }


def _group_geometry(points: list[Point], padding: float) -> tuple[NDArray, float]:
    positioned = [p.position for p in points if p.position is not None]
    if not positioned:
        return np.zeros(3), 0.0

    coords = np.asarray(positioned, dtype=float)
    centroid = coords.mean(axis=0)
    distances = cdist(coords, centroid[np.newaxis, :]).ravel()
    return centroid, float(padding * distances.max())


def group_points(
    points: Iterable[Point],
    config: Optional[ClusterConfig] = None,
) -> list[EmotionalGroup]:
    """
    Group points by tone and compute centroid and radius per group.

    Parameters
    ----------
    points : iterable of Point
        Points to group (typically a whole PointStore).
    config : ClusterConfig, optional
        Provides the radius padding factor.

    Returns
    -------
    list[EmotionalGroup]
        Groups ordered by size (largest first), ties by name.
    """
    cfg = config or ClusterConfig()
    members: dict[str, list[Point]] = {}
    for point in points:
        members.setdefault(point.emotional_tone or "Neutral", []).append(point)

    groups: list[EmotionalGroup] = []
    for name, group_members in members.items():
        centroid, radius = _group_geometry(group_members, cfg.radius_padding)
        groups.append(EmotionalGroup(
            name=name,
            color=group_members[0].hex_color,
            points=group_members,
            centroid=centroid,
            radius=radius,
        ))

    groups.sort(key=lambda g: (-g.size, g.name))

    if groups:
        logger.debug(
            f"Grouped points into {len(groups)} emotional groups: "
            + ", ".join(f"{g.name}={g.size}" for g in groups)
        )
    return groups


def clamp_cluster_count(count: int, config: Optional[ClusterConfig] = None) -> int:
    cfg = config or ClusterConfig()
    return max(cfg.min_visible, min(cfg.max_visible, int(count)))


def visible_groups(
    groups: list[EmotionalGroup],
    count: int,
    config: Optional[ClusterConfig] = None,
) -> list[EmotionalGroup]:
    """Keep the ``count`` largest groups; the smallest are dropped first."""
    ordered = sorted(groups, key=lambda g: (-g.size, g.name))
    return ordered[:clamp_cluster_count(count, config)]


def group_summary(groups: list[EmotionalGroup]) -> list[dict]:
    """Per-group size and share of all points, in percent."""
    total = sum(g.size for g in groups)
    return [
        {
            "name": g.name,
            "size": g.size,
            "share": round(100.0 * g.size / max(1, total), 1),
            "radius": round(g.radius, 4),
        }
        for g in groups
    ]
