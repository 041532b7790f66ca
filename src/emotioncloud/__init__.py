"""
Emotion Cloud
=============

Turns a plain-text document into a navigable 3-D semantic point cloud.

A heuristic emotional analysis extracts weighted, tone-categorized terms
from the text. Each term becomes a point with a stable tone color, a
cluster membership and a ranked list of related points. A pure scene model
handles pointer selection, connection lines, tone filtering and camera
control, and a matcher suggests static wellness action plans from trigger
words and detected tones.

Everything is static, in-memory and process-local: there is no trained
model, no persistence and no learning across sessions.
"""

__version__ = "0.1.0"
