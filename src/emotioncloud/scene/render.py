"""
Render Commands
===============

The scene is drawn from a pure function of its inputs::

    build_render_frame(points, state, time, config) -> RenderFrame

``state`` carries the transient view state (selected point, its connected
points, the active tone filter and the visible tones). The returned frame is
a flat list of marker and line commands that any backend can draw; nothing
here touches a graphics context, which keeps selection and filtering logic
testable on its own.

Rules
-----
- Markers use animated positions; lines use static positions.
- A marker whose tone differs from the active filter is dimmed
  (``dimmed_opacity``), not removed.
- Points whose tone is outside the visible cluster set are not drawn.
- The selected marker is drawn twice as large, connected markers 1.5x;
  frequent words grow up to 2x.
- Lines run from the selected point to each connected point; without a
  selection there are no lines.
- A store with no positioned points produces a placeholder frame.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from ..config import SceneConfig
from ..points.model import Point, Vector3
from .animation import breathing_offsets

NO_DATA_MESSAGE = "No data to display"


@dataclass(frozen=True)
class SceneState:
    """Transient view state that feeds a frame."""
    selected_id: Optional[str] = None
    connected_ids: tuple[str, ...] = ()
    tone_filter: Optional[str] = None
    visible_tones: Optional[frozenset[str]] = None


@dataclass(frozen=True)
class MarkerCommand:
    point_id: str
    word: str
    position: Vector3
    color: Vector3
    size: float
    opacity: float
    selected: bool = False
    connected: bool = False
    dimmed: bool = False


@dataclass(frozen=True)
class LineCommand:
    from_id: str
    to_id: str
    start: Vector3
    end: Vector3
    color: Vector3
    opacity: float = 0.5


@dataclass
class RenderFrame:
    markers: list[MarkerCommand] = field(default_factory=list)
    lines: list[LineCommand] = field(default_factory=list)
    placeholder: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return self.placeholder is not None

    def marker(self, point_id: str) -> Optional[MarkerCommand]:
        for m in self.markers:
            if m.point_id == point_id:
                return m
        return None


def frequency_scale(frequency: Optional[int]) -> float:
    if not frequency or frequency <= 0:
        return 1.0
    return min(2.0, math.sqrt(frequency) / 2.0 + 0.8)


def is_visible(point: Point, state: SceneState) -> bool:
    if point.position is None:
        return False
    return state.visible_tones is None or point.emotional_tone in state.visible_tones


def is_dimmed(point: Point, state: SceneState) -> bool:
    return state.tone_filter is not None and point.emotional_tone != state.tone_filter


def build_render_frame(
    points: Sequence[Point],
    state: SceneState = SceneState(),
    time: float = 0.0,
    config: Optional[SceneConfig] = None,
) -> RenderFrame:
    """
    Build the draw commands for one frame.

    Parameters
    ----------
    points : sequence of Point
        The current snapshot, in store order. The index of each point in
        this sequence seeds its animation frequencies.
    state : SceneState
        Selection, connections, tone filter and visible tones.
    time : float
        Animation clock in seconds.
    config : SceneConfig, optional
        Point size, dimmed opacity and animation settings.

    Returns
    -------
    RenderFrame
    """
    cfg = config or SceneConfig()
    if not any(p.position is not None for p in points):
        return RenderFrame(placeholder=NO_DATA_MESSAGE)

    amplitude = cfg.animation_amplitude if cfg.animate else 0.0
    offsets = breathing_offsets(len(points), time, amplitude)
    connected = set(state.connected_ids)
    by_id = {p.id: p for p in points}

    markers: list[MarkerCommand] = []
    for index, point in enumerate(points):
        if not is_visible(point, state):
            continue
        selected = point.id == state.selected_id
        is_connected = point.id in connected and not selected
        dimmed = is_dimmed(point, state)

        scale = 2.0 if selected else 1.5 if is_connected else 1.0
        drawn = np.asarray(point.position, dtype=float) + offsets[index]
        markers.append(MarkerCommand(
            point_id=point.id,
            word=point.word,
            position=(float(drawn[0]), float(drawn[1]), float(drawn[2])),
            color=point.color,
            size=cfg.point_size * scale * frequency_scale(point.frequency),
            opacity=cfg.dimmed_opacity if dimmed else 1.0,
            selected=selected,
            connected=is_connected,
            dimmed=dimmed,
        ))

    lines: list[LineCommand] = []
    source = by_id.get(state.selected_id) if state.selected_id else None
    if source is not None and source.position is not None:
        for other_id in state.connected_ids:
            other = by_id.get(other_id)
            if other is None or other.id == source.id or other.position is None:
                continue
            lines.append(LineCommand(
                from_id=source.id,
                to_id=other.id,
                start=source.position,
                end=other.position,
                color=source.color,
            ))

    return RenderFrame(markers=markers, lines=lines)
