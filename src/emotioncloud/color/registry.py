"""
Tone Color Registry
===================

Assigns each canonical tone a color that stays fixed for the lifetime of the
registry. The first lookup of an unseen tone draws a palette entry from a
seeded generator, so the assignment order is reproducible from run to run.
Joy is pinned to a legible amber instead of a palette draw.

Two tones may land on the same palette entry; the registry guarantees
stability, not uniqueness.

A registry is a plain service object. Create one per session and pass it to
whatever needs colors; ``reset()`` returns it to its freshly seeded state.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from matplotlib.colors import to_rgb

from ..config import ColorConfig

logger = logging.getLogger(__name__)

RGB = tuple[float, float, float]


def hex_to_rgb(color: str) -> RGB:
    """Convert a ``#RRGGBB`` string to floats in [0, 1]."""
    if not color.startswith("#"):
        color = f"#{color}"
    r, g, b = to_rgb(color)
    return (float(r), float(g), float(b))


class ColorRegistry:
    """
    Process-lifetime cache from canonical tone to hex color.

    Parameters
    ----------
    config : ColorConfig, optional
        Palette, seed, Joy color and fallback color.
    """

    def __init__(self, config: Optional[ColorConfig] = None):
        self.config = config or ColorConfig()
        self._palette = list(self.config.palette)
        self._cache: dict[str, str] = {}
        self._rng = np.random.default_rng(self.config.seed)

    def reset(self) -> None:
        """Forget all assignments and re-seed the generator."""
        self._cache.clear()
        self._rng = np.random.default_rng(self.config.seed)
        logger.debug("Color registry reset")

    @property
    def fallback_color(self) -> str:
        return self.config.fallback_color

    @property
    def assignments(self) -> dict[str, str]:
        """Snapshot of the tones assigned so far."""
        return dict(self._cache)

    def color_for(self, tone: Optional[str]) -> str:
        """Return the hex color for a tone, assigning one on first use."""
        if not tone:
            return self.config.fallback_color

        cached = self._cache.get(tone)
        if cached is not None:
            return cached

        if "joy" in tone.lower():
            color = self.config.joy_color
        else:
            index = int(np.floor(self._rng.random() * len(self._palette)))
            color = self._palette[index]

        self._cache[tone] = color
        logger.debug(f"Assigned color {color} to tone '{tone}'")
        return color

    def rgb_for(self, tone: Optional[str]) -> RGB:
        return hex_to_rgb(self.color_for(tone))

    def __contains__(self, tone: str) -> bool:
        return tone in self._cache

    def __len__(self) -> int:
        return len(self._cache)
