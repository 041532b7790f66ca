"""
Point Store
===========

Assembles immutable ``Point`` snapshots from extracted terms and externally
supplied coordinates.

Each analysis run produces exactly one ``PointStore``. The store is never
mutated afterwards; re-analysis builds a new store and consumers swap the
whole snapshot at once.

Two ingestion paths exist:

    build_point_store
        From ``ExtractedTerm`` objects plus one coordinate per term.

    PointStore.from_payload
        From loosely typed dict records, e.g. a JSON payload produced by an
        external analyzer. Every optional field is resolved here, once, so
        downstream code never has to second-guess a point.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from ..analysis.relationships import rank_relationships
from ..color.registry import ColorRegistry, hex_to_rgb
from ..config import RelationshipConfig
from ..text.extractor import ExtractedTerm
from ..text.tones import NEUTRAL, normalize_tone
from .model import Point, Vector3

logger = logging.getLogger(__name__)


def _coerce_position(value) -> Optional[Vector3]:
    """Return a finite (x, y, z) tuple, or None for anything unusable."""
    if value is None:
        return None
    try:
        coords = [float(v) for v in value]
    except (TypeError, ValueError):
        return None
    if len(coords) != 3 or not all(math.isfinite(v) for v in coords):
        return None
    return (coords[0], coords[1], coords[2])


def _coerce_sentiment(value, default: Optional[float] = 0.5) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return default
    try:
        sentiment = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(sentiment):
        return default
    return max(0.0, min(1.0, sentiment))


def _coerce_frequency(value) -> Optional[int]:
    """Non-negative whole count, or None for anything unusable."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return int(value)


def _resolve_color(raw_color, tone: Optional[str], registry: ColorRegistry) -> tuple[Vector3, str]:
    if isinstance(raw_color, str) and raw_color.strip():
        try:
            rgb = hex_to_rgb(raw_color.strip())
            return rgb, "#{:02X}{:02X}{:02X}".format(*(round(c * 255) for c in rgb))
        except ValueError:
            logger.debug(f"Ignoring unparseable color {raw_color!r}")
    elif isinstance(raw_color, (list, tuple)) and len(raw_color) == 3:
        try:
            rgb = tuple(max(0.0, min(1.0, float(c))) for c in raw_color)
        except (TypeError, ValueError):
            rgb = None
        # All-zero colors are treated as "unset"
        if rgb is not None and any(rgb):
            return rgb, "#{:02X}{:02X}{:02X}".format(*(round(c * 255) for c in rgb))

    hex_color = registry.color_for(tone) if tone else registry.fallback_color
    return hex_to_rgb(hex_color), hex_color


class PointStore:
    """
    Immutable snapshot of the points produced by one analysis run.

    Parameters
    ----------
    points : iterable of Point
        Points with unique ids.
    generation : int
        Run id of the analysis that produced the snapshot.
    """

    def __init__(self, points: Iterable[Point] = (), generation: int = 0):
        self._points: tuple[Point, ...] = tuple(points)
        self.generation = generation
        self._by_id: dict[str, Point] = {p.id: p for p in self._points}
        if len(self._by_id) != len(self._points):
            raise ValueError("PointStore requires unique point ids")

    @classmethod
    def empty(cls, generation: int = 0) -> PointStore:
        return cls((), generation)

    @property
    def points(self) -> tuple[Point, ...]:
        return self._points

    @property
    def is_empty(self) -> bool:
        return not self._points

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def get(self, point_id: str) -> Optional[Point]:
        return self._by_id.get(point_id)

    def find_word(self, word: str) -> Optional[Point]:
        """First point whose word matches, case-insensitively."""
        target = word.lower()
        for p in self._points:
            if p.word.lower() == target:
                return p
        return None

    def index_of(self, point_id: str) -> int:
        for i, p in enumerate(self._points):
            if p.id == point_id:
                return i
        return -1

    def tones(self) -> list[str]:
        """Distinct tones present, sorted by name."""
        return sorted({p.emotional_tone for p in self._points})

    def tone_counts(self) -> Counter:
        return Counter(p.emotional_tone for p in self._points)

    def positions(self) -> NDArray:
        """(n, 3) array of static positions, NaN rows where missing."""
        if not self._points:
            return np.empty((0, 3))
        return np.vstack([p.position_array() for p in self._points])

    def to_dict(self) -> dict:
        return {
            "generation": self.generation,
            "points": [p.to_dict() for p in self._points],
        }

    @classmethod
    def from_payload(
        cls,
        records: Optional[Sequence[dict]],
        registry: ColorRegistry,
        generation: int = 0,
        relationship_config: Optional[RelationshipConfig] = None,
    ) -> PointStore:
        """
        Build a store from loosely typed point records.

        Recognized keys: ``id``, ``word`` or ``text``, ``tone`` or
        ``emotionalTone``, ``sentiment``, ``frequency``, ``position`` or
        ``x``/``y``/``z``, ``color`` (hex string or RGB triple),
        ``keywords``, ``category``. Records without a usable word are
        skipped; malformed optional fields fall back to neutral defaults.
        """
        if not records:
            return cls.empty(generation)

        rel_cfg = relationship_config or RelationshipConfig()
        points: list[Point] = []
        seen_ids: set[str] = set()

        for index, record in enumerate(records):
            if not isinstance(record, dict):
                logger.warning(f"Skipping non-dict point record at index {index}")
                continue
            word = record.get("word") or record.get("text")
            if not isinstance(word, str) or not word.strip():
                logger.warning(f"Skipping point record without a word at index {index}")
                continue

            raw_tone = record.get("tone") or record.get("emotionalTone")
            tone = normalize_tone(raw_tone)

            position = record.get("position")
            if position is None and all(k in record for k in ("x", "y", "z")):
                position = (record["x"], record["y"], record["z"])

            rgb, hex_color = _resolve_color(record.get("color"), tone if raw_tone else None, registry)

            keywords = record.get("keywords")
            if not isinstance(keywords, (list, tuple)):
                keywords = ()

            points.append(Point(
                id=_unique_id(record.get("id"), index, seen_ids),
                word=word.strip(),
                emotional_tone=tone,
                sentiment=_coerce_sentiment(record.get("sentiment")),
                position=_coerce_position(position),
                color=rgb,
                hex_color=hex_color,
                frequency=_coerce_frequency(record.get("frequency")),
                category=record.get("category") if isinstance(record.get("category"), str) else None,
                keywords=tuple(str(k) for k in keywords if isinstance(k, str)),
            ))

        store = cls(_attach_relationships(points, rel_cfg), generation)
        logger.info(f"Ingested {len(store)} points from {len(records)} payload records")
        return store


def _unique_id(candidate, index: int, seen: set[str]) -> str:
    base = str(candidate) if candidate not in (None, "") else f"point-{index}"
    point_id = base
    suffix = 1
    while point_id in seen:
        point_id = f"{base}-{suffix}"
        suffix += 1
    seen.add(point_id)
    return point_id


def _attach_relationships(points: list[Point], config: RelationshipConfig) -> list[Point]:
    return [
        p.with_relationships(rank_relationships(p, points, config.relationship_limit, config))
        for p in points
    ]


def build_point_store(
    terms: Sequence[ExtractedTerm],
    coordinates: Optional[Sequence[Sequence[float]]],
    registry: ColorRegistry,
    generation: int = 0,
    relationship_config: Optional[RelationshipConfig] = None,
) -> PointStore:
    """
    Build the Point snapshot for one analysis run.

    Parameters
    ----------
    terms : sequence of ExtractedTerm
        Ranked terms from the extractor.
    coordinates : sequence of [x, y, z], optional
        One coordinate per term from the layout provider. Missing or
        malformed entries leave the point without a position.
    registry : ColorRegistry
        Session color registry used to color each tone.
    generation : int
        Run id stamped on the snapshot.
    relationship_config : RelationshipConfig, optional
        Scoring parameters for the precomputed relationships.

    Returns
    -------
    PointStore
        The new snapshot (empty when there are no terms).
    """
    if not terms:
        return PointStore.empty(generation)

    coordinates = list(coordinates or [])
    if len(coordinates) != len(terms):
        logger.warning(
            f"Layout returned {len(coordinates)} coordinates for {len(terms)} terms; "
            f"unmatched points get no position"
        )

    rel_cfg = relationship_config or RelationshipConfig()
    points: list[Point] = []
    seen_ids: set[str] = set()

    for index, term in enumerate(terms):
        tone = normalize_tone(term.tone) if term.tone else NEUTRAL
        hex_color = registry.color_for(tone) if term.tone else registry.fallback_color
        position = _coerce_position(coordinates[index]) if index < len(coordinates) else None

        points.append(Point(
            id=_unique_id(None, index, seen_ids),
            word=term.term,
            emotional_tone=tone,
            sentiment=_coerce_sentiment(term.sentiment),
            position=position,
            color=hex_to_rgb(hex_color),
            hex_color=hex_color,
            frequency=term.frequency,
            category=term.category,
            keywords=term.keywords,
        ))

    store = PointStore(_attach_relationships(points, rel_cfg), generation)
    logger.info(
        f"Built point store generation {generation}: {len(store)} points, "
        f"{len(store.tones())} tones"
    )
    return store
