"""
Ray Picking
===========

Hit-testing of a pointer ray against point positions.

Picking always uses the static layout positions, never the animated ones,
so a point is selectable exactly where the layout put it. A point is hit
when its distance to the ray is strictly below the threshold (2 units by
default); the nearest such point wins. Points behind the camera measure
their distance to the ray origin.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .camera import Ray


def ray_point_distances(ray: Ray, positions: NDArray) -> NDArray:
    """
    Distance from each position to the ray.

    Parameters
    ----------
    ray : Ray
        Ray with a unit-length direction.
    positions : ndarray, shape (n, 3)
        Static positions; rows containing NaN yield ``inf``.

    Returns
    -------
    ndarray, shape (n,)
    """
    positions = np.asarray(positions, dtype=float).reshape(-1, 3)
    if positions.shape[0] == 0:
        return np.empty(0)

    offsets = positions - ray.origin
    t = np.clip(offsets @ ray.direction, 0.0, None)
    closest = ray.origin + t[:, np.newaxis] * ray.direction
    distances = np.linalg.norm(positions - closest, axis=1)
    return np.where(np.isnan(distances), np.inf, distances)


def pick_index(
    ray: Ray,
    positions: NDArray,
    threshold: float = 2.0,
    selectable: Optional[NDArray] = None,
) -> Optional[int]:
    """Index of the nearest selectable position within ``threshold``, else None."""
    distances = ray_point_distances(ray, positions)
    if distances.size == 0:
        return None
    if selectable is not None:
        distances = np.where(np.asarray(selectable, dtype=bool), distances, np.inf)

    best = int(np.argmin(distances))
    if distances[best] < threshold:
        return best
    return None
