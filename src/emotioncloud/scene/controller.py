"""
Scene Controller
================

Owns the view state of one interactive point-cloud session: the current
PointStore snapshot, the camera, the selected point, the active tone filter
and the visible cluster count.

Host applications drive it with pointer clicks and the imperative actions
``reset_view``, ``zoom_in``, ``zoom_out``, ``focus_on_emotional_group`` and
``reset_emotional_group_filter``, and receive two events:

    on_point_click(point | None)
        After every click or programmatic selection.

    on_filter_change(tone | None)
        Whenever the tone filter is set or cleared.

Each frame the host calls ``tick(dt)`` and draws ``frame()``. The controller
is single-threaded; it holds no locks and spawns nothing.

Filtered-out points are dimmed and are not selectable unless
``SceneConfig.select_filtered_points`` is set. Points from groups beyond the
visible cluster count are neither drawn nor selectable.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

import numpy as np

from ..analysis.clustering import EmotionalGroup, clamp_cluster_count, group_points, visible_groups
from ..analysis.relationships import connected_points
from ..config import ClusterConfig, RelationshipConfig, SceneConfig
from ..points.model import Point
from ..points.store import PointStore
from ..text.tones import normalize_tone
from .camera import Camera, pointer_to_ndc
from .picking import pick_index
from .render import RenderFrame, SceneState, build_render_frame, is_dimmed, is_visible

logger = logging.getLogger(__name__)

PointCallback = Callable[[Optional[Point]], None]
FilterCallback = Callable[[Optional[str]], None]


class SceneController:
    """
    Interactive state machine behind the 3-D point cloud.

    Parameters
    ----------
    config : SceneConfig, optional
        Camera, picking and rendering settings.
    cluster_config : ClusterConfig, optional
        Visible cluster count and grouping settings.
    relationship_config : RelationshipConfig, optional
        Provides how many connected points a selection shows.
    on_point_click, on_filter_change : callable, optional
        Event callbacks to the host.
    """

    def __init__(
        self,
        config: Optional[SceneConfig] = None,
        cluster_config: Optional[ClusterConfig] = None,
        relationship_config: Optional[RelationshipConfig] = None,
        on_point_click: Optional[PointCallback] = None,
        on_filter_change: Optional[FilterCallback] = None,
    ):
        self.config = config or SceneConfig()
        self.cluster_config = cluster_config or ClusterConfig()
        self.relationship_config = relationship_config or RelationshipConfig()
        self.on_point_click = on_point_click
        self.on_filter_change = on_filter_change

        self.camera = Camera(self.config)
        self.store = PointStore.empty()
        self.groups: list[EmotionalGroup] = []
        self.selected_id: Optional[str] = None
        self.tone_filter: Optional[str] = None
        self.visible_cluster_count = clamp_cluster_count(
            self.cluster_config.visible_cluster_count, self.cluster_config
        )
        self.time = 0.0

    # ------------------------------------------------------------------
    # Snapshot handling
    # ------------------------------------------------------------------

    def load(self, store: PointStore) -> bool:
        """
        Swap in a new PointStore snapshot.

        Snapshots older than the current one are ignored. Selection and
        filter are cleared because their ids belong to the old snapshot.

        Returns
        -------
        bool
            Whether the snapshot was accepted.
        """
        if store.generation < self.store.generation:
            logger.warning(
                f"Ignoring stale point store generation {store.generation} "
                f"(current {self.store.generation})"
            )
            return False

        self.store = store
        self.groups = group_points(store.points, self.cluster_config)
        self.selected_id = None
        self.tone_filter = None
        logger.info(
            f"Scene loaded generation {store.generation}: "
            f"{len(store)} points in {len(self.groups)} groups"
        )
        return True

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def visible_group_list(self) -> list[EmotionalGroup]:
        return visible_groups(self.groups, self.visible_cluster_count, self.cluster_config)

    @property
    def visible_tones(self) -> frozenset[str]:
        return frozenset(g.name for g in self.visible_group_list)

    @property
    def selected_point(self) -> Optional[Point]:
        if self.selected_id is None:
            return None
        return self.store.get(self.selected_id)

    @property
    def connected_points(self) -> list[Point]:
        return connected_points(
            self.selected_point, self.store, self.relationship_config.connected_limit
        )

    def state(self) -> SceneState:
        return SceneState(
            selected_id=self.selected_id,
            connected_ids=tuple(p.id for p in self.connected_points),
            tone_filter=self.tone_filter,
            visible_tones=self.visible_tones,
        )

    def is_selectable(self, point: Point) -> bool:
        state = SceneState(tone_filter=self.tone_filter, visible_tones=self.visible_tones)
        if not is_visible(point, state):
            return False
        if is_dimmed(point, state) and not self.config.select_filtered_points:
            return False
        return True

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_point(self, point: Optional[Point]) -> Optional[Point]:
        """Select a point (or clear with None) and notify the host."""
        if point is not None and self.store.get(point.id) is None:
            logger.warning(f"Cannot select unknown point {point.id!r}")
            point = None
        elif point is not None and not self.is_selectable(point):
            logger.info(f"Point {point.id!r} is filtered out and cannot be selected")
            point = None
        self.selected_id = point.id if point is not None else None
        if self.on_point_click is not None:
            self.on_point_click(point)
        return point

    def select_word(self, word: str) -> Optional[Point]:
        return self.select_point(self.store.find_word(word))

    def click(self, ndc_x: float, ndc_y: float) -> Optional[Point]:
        """
        Hit-test a pointer at normalized device coordinates.

        Selects the nearest selectable point whose static position lies
        within ``hit_threshold`` of the pointer ray, or clears the
        selection when nothing is hit.
        """
        if self.store.is_empty:
            return self.select_point(None)

        ray = self.camera.ray_from_pointer(ndc_x, ndc_y)
        selectable = np.array([self.is_selectable(p) for p in self.store.points])
        index = pick_index(
            ray, self.store.positions(), self.config.hit_threshold, selectable
        )
        hit = self.store[index] if index is not None else None
        logger.debug(f"Click at ({ndc_x:.3f}, {ndc_y:.3f}) -> {hit.word if hit else None}")
        return self.select_point(hit)

    def click_pixel(self, px: float, py: float) -> Optional[Point]:
        ndc_x, ndc_y = pointer_to_ndc(
            px, py, self.config.canvas_width, self.config.canvas_height
        )
        return self.click(ndc_x, ndc_y)

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def _set_filter(self, tone: Optional[str]) -> None:
        self.tone_filter = tone
        selected = self.selected_point
        if selected is not None and not self.is_selectable(selected):
            self.select_point(None)
        if self.on_filter_change is not None:
            self.on_filter_change(tone)

    def focus_on_emotional_group(self, tone: str) -> bool:
        """Filter to a tone and move the camera to its centroid."""
        canonical = normalize_tone(tone)
        group = next((g for g in self.visible_group_list if g.name == canonical), None)
        if group is None:
            logger.warning(f"No visible emotional group named {tone!r}")
            return False

        self._set_filter(canonical)
        self.camera.focus_on(group.centroid)
        return True

    def reset_emotional_group_filter(self) -> None:
        self._set_filter(None)

    def set_visible_cluster_count(self, count: int) -> int:
        self.visible_cluster_count = clamp_cluster_count(count, self.cluster_config)
        if self.tone_filter is not None and self.tone_filter not in self.visible_tones:
            self._set_filter(None)
        selected = self.selected_point
        if selected is not None and not self.is_selectable(selected):
            self.select_point(None)
        return self.visible_cluster_count

    # ------------------------------------------------------------------
    # Camera actions
    # ------------------------------------------------------------------

    def zoom_in(self) -> None:
        self.camera.zoom_in()

    def zoom_out(self) -> None:
        self.camera.zoom_out()

    def reset_view(self) -> None:
        """Animate the camera home and clear selection and filter."""
        self.camera.reset()
        if self.tone_filter is not None:
            self._set_filter(None)
        if self.selected_id is not None:
            self.select_point(None)

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def tick(self, dt: float) -> None:
        """Advance the animation clock and any camera transition."""
        if self.config.animate:
            self.time += max(0.0, dt)
        self.camera.advance(dt)

    def frame(self, time: Optional[float] = None) -> RenderFrame:
        return build_render_frame(
            self.store.points,
            self.state(),
            self.time if time is None else time,
            self.config,
        )
