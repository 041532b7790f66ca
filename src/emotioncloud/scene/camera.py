"""
Scene Camera
============

A perspective camera orbiting a target point, with the three externally
invokable view actions:

    zoom_in / zoom_out
        Scale the camera-to-target distance by 0.8 / 1.2, clamped to the
        configured [min_distance, max_distance] range.

    reset
        Interpolate position and target back to their defaults over a fixed
        duration with power2 in-out easing.

Transitions are advanced explicitly with ``advance(dt)`` from the frame
loop; nothing here runs in the background.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from ..config import SceneConfig

logger = logging.getLogger(__name__)

_WORLD_UP = np.array([0.0, 1.0, 0.0])


def ease_power2_in_out(t: float) -> float:
    t = max(0.0, min(1.0, t))
    if t < 0.5:
        return 2.0 * t * t
    return 1.0 - (-2.0 * t + 2.0) ** 2 / 2.0


def _normalize(v: NDArray) -> NDArray:
    norm = np.linalg.norm(v)
    if norm == 0.0:
        return v
    return v / norm


@dataclass(frozen=True)
class Ray:
    """A half-line in world space; ``direction`` is unit length."""
    origin: NDArray
    direction: NDArray

    def at(self, t: float) -> NDArray:
        return self.origin + t * self.direction


@dataclass
class CameraTransition:
    """Eased interpolation of camera position and target."""
    start_position: NDArray
    end_position: NDArray
    start_target: NDArray
    end_target: NDArray
    duration: float
    elapsed: float = 0.0

    @property
    def done(self) -> bool:
        return self.elapsed >= self.duration

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0
        return ease_power2_in_out(self.elapsed / self.duration)

    def step(self, dt: float) -> tuple[NDArray, NDArray]:
        self.elapsed = min(self.duration, self.elapsed + max(0.0, dt))
        k = self.progress
        position = self.start_position + (self.end_position - self.start_position) * k
        target = self.start_target + (self.end_target - self.start_target) * k
        return position, target


def pointer_to_ndc(px: float, py: float, width: float, height: float) -> tuple[float, float]:
    """Convert canvas pixel coordinates to normalized device coordinates."""
    width = max(1.0, float(width))
    height = max(1.0, float(height))
    return (px / width) * 2.0 - 1.0, -((py / height) * 2.0 - 1.0)


class Camera:
    """
    Perspective camera looking at a target.

    Parameters
    ----------
    config : SceneConfig, optional
        Field of view, canvas size, default pose, zoom factors and limits.
    """

    def __init__(self, config: Optional[SceneConfig] = None):
        self.config = config or SceneConfig()
        self.fov = float(self.config.fov)
        self.aspect = self.config.canvas_width / max(1, self.config.canvas_height)
        self.position = self.default_position
        self.target = self.default_target
        self.transition: Optional[CameraTransition] = None

    @property
    def default_position(self) -> NDArray:
        return np.asarray(self.config.camera_position, dtype=float)

    @property
    def default_target(self) -> NDArray:
        return np.asarray(self.config.camera_target, dtype=float)

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.position - self.target))

    @property
    def is_animating(self) -> bool:
        return self.transition is not None and not self.transition.done

    def basis(self) -> tuple[NDArray, NDArray, NDArray]:
        """Unit (forward, right, up) vectors of the view."""
        forward = _normalize(self.target - self.position)
        right = np.cross(forward, _WORLD_UP)
        if np.linalg.norm(right) < 1e-9:
            # Looking straight up or down
            right = np.array([1.0, 0.0, 0.0])
        right = _normalize(right)
        up = np.cross(right, forward)
        return forward, right, up

    def ray_from_pointer(self, ndc_x: float, ndc_y: float) -> Ray:
        """World-space ray through the pointer at normalized device coords."""
        forward, right, up = self.basis()
        tan_half = math.tan(math.radians(self.fov) / 2.0)
        direction = (
            forward
            + ndc_x * tan_half * self.aspect * right
            + ndc_y * tan_half * up
        )
        return Ray(origin=self.position.copy(), direction=_normalize(direction))

    def _zoom(self, factor: float) -> None:
        self.transition = None
        cfg = self.config
        offset = self.position - self.target
        current = np.linalg.norm(offset)
        if current == 0.0:
            offset = np.array([0.0, 0.0, 1.0])
            current = 1.0
        new_distance = max(cfg.min_distance, min(cfg.max_distance, current * factor))
        self.position = self.target + offset / current * new_distance
        logger.debug(f"Camera zoom x{factor}: distance {current:.2f} -> {new_distance:.2f}")

    def zoom_in(self) -> None:
        self._zoom(self.config.zoom_in_factor)

    def zoom_out(self) -> None:
        self._zoom(self.config.zoom_out_factor)

    def move_to(self, position, target, duration: float) -> CameraTransition:
        """Start an eased transition to a new pose."""
        self.transition = CameraTransition(
            start_position=self.position.copy(),
            end_position=np.asarray(position, dtype=float),
            start_target=self.target.copy(),
            end_target=np.asarray(target, dtype=float),
            duration=max(0.0, duration),
        )
        if self.transition.duration == 0.0:
            self.advance(0.0)
        return self.transition

    def reset(self) -> CameraTransition:
        return self.move_to(self.default_position, self.default_target, self.config.reset_duration)

    def focus_on(self, point, distance: Optional[float] = None) -> CameraTransition:
        """Look at ``point`` from ``distance`` units along +z."""
        point = np.asarray(point, dtype=float)
        distance = self.config.focus_distance if distance is None else distance
        return self.move_to(
            point + np.array([0.0, 0.0, distance]),
            point,
            self.config.focus_duration,
        )

    def advance(self, dt: float) -> bool:
        """Step the active transition; returns True while still moving."""
        if self.transition is None:
            return False
        self.position, self.target = self.transition.step(dt)
        if self.transition.done:
            self.transition = None
            return False
        return True
