"""
Layout Providers
================

A layout provider turns ``(word, tone, sentiment)`` items into one
``[x, y, z]`` coordinate per item. Real layouts (embedding projections and
the like) live outside this package; anything implementing
``LayoutProvider`` can be plugged into the pipeline.

``SeededLayoutProvider`` is the built-in default. Each tone gets a center
drawn uniformly from a cube, and its terms are jittered around that center.
Neutral terms have no center and scatter across a wider cube. The same seed
always yields the same layout.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

import numpy as np

from ..config import LayoutConfig
from ..text.tones import NEUTRAL

logger = logging.getLogger(__name__)

LayoutItem = tuple[str, str, float]


class LayoutProvider(Protocol):
    def layout(self, items: Sequence[LayoutItem]) -> list[list[float]]:
        ...


class SeededLayoutProvider:
    """Deterministic tone-clustered layout."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def layout(self, items: Sequence[LayoutItem]) -> list[list[float]]:
        cfg = self.config
        rng = np.random.default_rng(cfg.seed)

        centers: dict[str, np.ndarray] = {}
        for _, tone, _ in items:
            if tone != NEUTRAL and tone not in centers:
                centers[tone] = rng.uniform(-1.0, 1.0, size=3) * cfg.center_spread

        coords: list[list[float]] = []
        for _, tone, _ in items:
            if tone in centers:
                pos = centers[tone] + rng.uniform(-1.0, 1.0, size=3) * cfg.cluster_jitter
            else:
                pos = rng.uniform(-1.0, 1.0, size=3) * cfg.neutral_spread
            coords.append([float(v) for v in pos])

        logger.debug(f"Laid out {len(coords)} items around {len(centers)} tone centers")
        return coords
