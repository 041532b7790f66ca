"""
Tests for emotional grouping and relationship scoring.
"""

import numpy as np
import pytest

from emotioncloud.analysis import (
    group_points,
    score_relationship,
    strength_label,
    visible_groups,
)
from emotioncloud.analysis.clustering import clamp_cluster_count, group_summary
from emotioncloud.analysis.relationships import connected_points, rank_relationships
from emotioncloud.points.model import Point, Relationship
from emotioncloud.points.store import PointStore


def _make_point(pid, tone, position, sentiment=0.5, keywords=()) -> Point:
    return Point(
        id=pid,
        word=pid,
        emotional_tone=tone,
        sentiment=sentiment,
        position=position,
        color=(0.5, 0.5, 0.5),
        hex_color="#808080",
        keywords=tuple(keywords),
    )


def _make_points() -> list:
    return [
        _make_point("j1", "Joy", (0.0, 0.0, 0.0)),
        _make_point("j2", "Joy", (2.0, 0.0, 0.0)),
        _make_point("j3", "Joy", (1.0, 3.0, 0.0)),
        _make_point("s1", "Sadness", (10.0, 0.0, 0.0)),
        _make_point("s2", "Sadness", (10.0, 1.0, 1.0)),
        _make_point("a1", "Anger", (-5.0, -5.0, 0.0)),
        _make_point("c1", "Calm", (4.0, 4.0, 4.0)),
    ]


class TestGrouping:
    """Test tone groups, centroids and radii."""

    def test_one_group_per_tone(self):
        groups = group_points(_make_points())
        assert sorted(g.name for g in groups) == ["Anger", "Calm", "Joy", "Sadness"]
        assert sum(g.size for g in groups) == 7

    def test_members_inside_radius(self):
        for group in group_points(_make_points()):
            for point in group.points:
                assert group.contains(point.position)

    def test_radius_is_padded_max_distance(self):
        points = [_make_point("a", "Joy", (0.0, 0.0, 0.0)), _make_point("b", "Joy", (2.0, 0.0, 0.0))]
        group = group_points(points)[0]
        np.testing.assert_allclose(group.centroid, [1.0, 0.0, 0.0])
        assert group.radius == pytest.approx(1.5)

    def test_single_member_has_zero_radius(self):
        group = group_points([_make_point("a", "Joy", (3.0, 2.0, 1.0))])[0]
        np.testing.assert_allclose(group.centroid, [3.0, 2.0, 1.0])
        assert group.radius == 0.0

    def test_unpositioned_members_skip_geometry(self):
        points = [_make_point("a", "Joy", None), _make_point("b", "Joy", None)]
        group = group_points(points)[0]
        assert group.size == 2
        np.testing.assert_allclose(group.centroid, [0.0, 0.0, 0.0])
        assert group.radius == 0.0

    def test_order_by_size_then_name(self):
        groups = group_points(_make_points())
        assert [g.name for g in groups] == ["Joy", "Sadness", "Anger", "Calm"]

    def test_empty(self):
        assert group_points([]) == []
        assert group_summary([]) == []


class TestVisibleGroups:
    """Test the visible cluster count."""

    def test_smallest_dropped_first(self):
        groups = group_points(_make_points())
        assert [g.name for g in visible_groups(groups, 2)] == ["Joy", "Sadness"]
        # Anger and Calm tie on size; the name decides
        assert [g.name for g in visible_groups(groups, 3)] == ["Joy", "Sadness", "Anger"]

    def test_clamped(self):
        assert clamp_cluster_count(0) == 1
        assert clamp_cluster_count(-4) == 1
        assert clamp_cluster_count(8) == 8
        assert clamp_cluster_count(50) == 12
        groups = group_points(_make_points())
        assert len(visible_groups(groups, 0)) == 1
        assert len(visible_groups(groups, 50)) == 4

    def test_summary_shares(self):
        summary = group_summary(group_points(_make_points()))
        assert summary[0]["name"] == "Joy"
        assert summary[0]["size"] == 3
        assert sum(s["share"] for s in summary) == pytest.approx(100.0, abs=0.5)


class TestRelationships:
    """Test pairwise relationship scores."""

    def test_identical_points(self):
        p = _make_point("a", "Joy", (1.0, 1.0, 1.0), 0.7)
        q = _make_point("b", "Joy", (1.0, 1.0, 1.0), 0.7)
        score = score_relationship(p, q)
        assert score.overall_similarity == pytest.approx(1.0)
        assert score.label == "Strongly Related"

    def test_symmetric(self):
        points = _make_points()
        for p in points:
            for q in points:
                forward = score_relationship(p, q)
                backward = score_relationship(q, p)
                assert forward.overall_similarity == pytest.approx(backward.overall_similarity)

    def test_spatial_scale(self):
        p = _make_point("a", "Joy", (0.0, 0.0, 0.0))
        assert score_relationship(p, _make_point("b", "Joy", (20.0, 0.0, 0.0))).spatial_similarity == pytest.approx(0.5)
        assert score_relationship(p, _make_point("c", "Joy", (40.0, 0.0, 0.0))).spatial_similarity == 0.0
        assert score_relationship(p, _make_point("d", "Joy", (90.0, 0.0, 0.0))).spatial_similarity == 0.0

    def test_weights(self):
        p = _make_point("a", "Joy", (0.0, 0.0, 0.0), sentiment=1.0)
        q = _make_point("b", "Sadness", (20.0, 0.0, 0.0), sentiment=0.5)
        score = score_relationship(p, q)
        assert not score.same_emotional_group
        assert score.overall_similarity == pytest.approx(0.4 * 0.5 + 0.4 * 0.5)

    def test_missing_position_scores_zero(self):
        p = _make_point("a", "Joy", None, 0.5)
        q = _make_point("b", "Joy", (0.0, 0.0, 0.0), 0.5)
        score = score_relationship(p, q)
        assert score.spatial_similarity == 0.0
        assert score.overall_similarity == pytest.approx(0.6)

    def test_missing_sentiment_scores_zero(self):
        p = _make_point("a", "Joy", (0.0, 0.0, 0.0), None)
        q = _make_point("b", "Joy", (0.0, 0.0, 0.0), 0.5)
        assert score_relationship(p, q).sentiment_similarity == 0.0

    def test_shared_keywords(self):
        p = _make_point("a", "Joy", None, keywords=["friend", "park", "sun"])
        q = _make_point("b", "Joy", None, keywords=["sun", "friend"])
        assert score_relationship(p, q).shared_keywords == ("friend", "sun")

    @pytest.mark.parametrize("overall,label", [
        (1.0, "Strongly Related"),
        (0.8, "Strongly Related"),
        (0.79, "Related"),
        (0.6, "Related"),
        (0.45, "Moderately Related"),
        (0.2, "Weakly Related"),
        (0.19, "Barely Related"),
        (0.0, "Barely Related"),
    ])
    def test_labels(self, overall, label):
        assert strength_label(overall) == label

    def test_to_dict(self):
        p = _make_point("a", "Joy", (0.0, 0.0, 0.0))
        data = score_relationship(p, p).to_dict()
        assert data["label"] == "Strongly Related"
        assert data["same_emotional_group"] is True


class TestRanking:
    """Test relationship ranking and connected points."""

    def test_rank_excludes_self_and_limits(self):
        points = _make_points()
        ranked = rank_relationships(points[0], points, limit=3)
        assert len(ranked) == 3
        assert "j1" not in [r.id for r in ranked]
        strengths = [r.strength for r in ranked]
        assert strengths == sorted(strengths, reverse=True)
        assert ranked[0].id in ("j2", "j3")

    def test_connected_points(self):
        source = _make_point("x", "Joy", (0.0, 0.0, 0.0)).with_relationships([
            Relationship("j1", 0.9), Relationship("gone", 0.8),
            Relationship("j2", 0.7), Relationship("j3", 0.6),
        ])
        store = PointStore(_make_points())
        assert [p.id for p in connected_points(source, store, limit=3)] == ["j1", "j2"]
        assert connected_points(None, store) == []
