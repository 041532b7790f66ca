"""
Analysis Package
================

Geometric analysis over a PointStore snapshot.

This package provides two main interfaces:

    group_points / visible_groups
        Partition points by emotional tone into EmotionalGroups with a
        centroid and a bounding radius, and choose which groups stay on
        screen for a given visible cluster count.

    score_relationship
        Compares two points by spatial proximity, sentiment and shared
        tone, returning a RelationshipScore with a strength label.

Usage::

    from emotioncloud.analysis import group_points, score_relationship

    groups = group_points(store.points)
    score = score_relationship(store[0], store[1])
    print(score.label, score.overall_similarity)
"""

from .clustering import EmotionalGroup, group_points, visible_groups
from .relationships import RelationshipScore, score_relationship, strength_label

__all__ = [
    "EmotionalGroup",
    "group_points",
    "visible_groups",
    "RelationshipScore",
    "score_relationship",
    "strength_label",
]
