"""
Idle "breathing" animation.

Each point drifts along every axis with its own sine wave. Frequencies vary
with the point index modulo small primes so neighbours do not move in step.
The offsets are cosmetic: they are applied to rendered positions only.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def axis_frequencies(n: int) -> NDArray:
    """(n, 3) per-axis angular frequencies."""
    i = np.arange(n)
    return np.column_stack([
        0.2 + (i % 5) * 0.02,
        0.3 + (i % 3) * 0.01,
        0.25 + (i % 7) * 0.015,
    ])


def breathing_offsets(n: int, time: float, amplitude: float = 0.05) -> NDArray:
    if n <= 0:
        return np.zeros((0, 3))
    return np.sin(time * axis_frequencies(n)) * amplitude


def animated_positions(positions: NDArray, time: float, amplitude: float = 0.05) -> NDArray:
    """Static positions plus breathing offsets. The input is not modified."""
    positions = np.asarray(positions, dtype=float).reshape(-1, 3)
    return positions + breathing_offsets(len(positions), time, amplitude)
