"""
Wellness Knowledge Base
=======================

A static, read-only mapping ``category -> {title, steps, trigger_words}``
loaded once per process. Trigger words are matched as lowercase substrings,
which is why several are stems ("frustrat", "isolat").

``KnowledgeBase.from_yaml`` loads an alternative mapping with the same
shape::

    Anxiety:
      title: Managing Anxiety and Worry
      steps: [...]
      trigger_words: [anxious, worry]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

import yaml

logger = logging.getLogger(__name__)

GENERAL = "General"


@dataclass(frozen=True)
class PlanTemplate:
    title: str
    steps: tuple[str, ...]
    trigger_words: tuple[str, ...]


class KnowledgeBase(Mapping[str, PlanTemplate]):
    """Read-only, insertion-ordered mapping of category to plan template."""

    def __init__(self, entries: Mapping[str, PlanTemplate]):
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, category: str) -> PlanTemplate:
        return self._entries[category]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping]) -> KnowledgeBase:
        entries: dict[str, PlanTemplate] = {}
        for category, raw in data.items():
            if not isinstance(raw, Mapping) or "title" not in raw:
                raise ValueError(f"Knowledge base entry {category!r} needs a title")
            entries[str(category)] = PlanTemplate(
                title=str(raw["title"]),
                steps=tuple(str(s) for s in raw.get("steps", ())),
                trigger_words=tuple(
                    str(w).lower() for w in raw.get("trigger_words", raw.get("triggerWords", ()))
                ),
            )
        return cls(entries)

    @classmethod
    def from_yaml(cls, path: str | Path) -> KnowledgeBase:
        """Load a knowledge base from a YAML file."""
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        kb = cls.from_dict(data)
        logger.info(f"Loaded knowledge base with {len(kb)} categories from {path}")
        return kb


DEFAULT_KNOWLEDGE_BASE = KnowledgeBase.from_dict({
    "Joy": {
        "title": "Cultivate Positive Emotions",
        "steps": [
            "Practice gratitude daily by listing three things you appreciate",
            "Share your positive experiences with trusted friends or family",
            "Engage in activities that bring you authentic joy",
            "Create a physical environment that uplifts your mood",
            "Celebrate small achievements and milestones",
        ],
        "trigger_words": ["happy", "joy", "excite", "pleasure", "content", "delight", "cheer"],
    },
    "Sadness": {
        "title": "Managing Difficult Emotions",
        "steps": [
            "Practice deep breathing exercises (4-7-8 technique)",
            "Try a short mindfulness meditation focused on acceptance",
            "Express your feelings through journaling or creative outlets",
            "Establish a gentle movement routine, even if just a short walk",
            "Create a self-care kit with items that engage your senses",
        ],
        "trigger_words": [
            "sad", "unhappy", "depress", "miserable", "down", "blue", "grief",
            "sorrow", "melancholy",
        ],
    },
    "Anxiety": {
        "title": "Managing Anxiety and Worry",
        "steps": [
            "Use grounding techniques like the 5-4-3-2-1 sensory exercise",
            "Practice progressive muscle relaxation to release physical tension",
            "Challenge anxious thoughts by writing evidence for and against them",
            "Create a worry period: set aside 15-30 minutes to focus on worries",
            "Develop a regular meditation practice focused on present awareness",
        ],
        "trigger_words": [
            "anxious", "worry", "stress", "tense", "nervous", "fear", "overwhelm",
            "panic", "dread", "apprehension",
        ],
    },
    "Anger": {
        "title": "Healthy Expression of Anger",
        "steps": [
            "Identify your personal anger triggers and early warning signs",
            "Practice time-outs: step away from triggering situations briefly",
            "Release physical tension through exercise or safe physical outlets",
            "Use 'I statements' when expressing feelings ('I feel frustrated when...')",
            "Try anger reduction techniques like deep breathing or counting to ten",
        ],
        "trigger_words": [
            "angry", "mad", "frustrat", "irritat", "annoy", "rage", "resent",
            "hostile", "bitter", "fury",
        ],
    },
    "Overwhelm": {
        "title": "Managing Feelings of Overwhelm",
        "steps": [
            "Break large tasks into smaller, manageable steps",
            "Practice prioritization using an urgent/important matrix",
            "Implement time-blocking in your schedule",
            "Take short breaks throughout the day to reset",
            "Practice saying 'no' to new commitments when needed",
        ],
        "trigger_words": [
            "overwhelm", "too much", "burden", "swamp", "drown", "flood", "crush",
            "pressure",
        ],
    },
    "Sleep": {
        "title": "Improving Sleep Quality",
        "steps": [
            "Create a consistent sleep schedule, even on weekends",
            "Develop a calming bedtime routine (reading, gentle stretching)",
            "Make your bedroom comfortable, dark, quiet and cool",
            "Limit screen time 1-2 hours before bed",
            "Avoid caffeine and alcohol close to bedtime",
        ],
        "trigger_words": [
            "sleep", "insomnia", "tired", "fatigue", "exhausted", "rest", "dream",
            "night", "bed",
        ],
    },
    "Loneliness": {
        "title": "Addressing Feelings of Loneliness",
        "steps": [
            "Reach out to one friend or family member for a conversation",
            "Join a group activity aligned with your interests",
            "Consider volunteer opportunities to connect with others",
            "Use technology mindfully to foster genuine connections",
            "Develop a nurturing relationship with yourself through self-compassion",
        ],
        "trigger_words": [
            "lonely", "alone", "isolat", "disconnect", "abandoned", "rejected", "solitary",
        ],
    },
    GENERAL: {
        "title": "Daily Wellness Practices",
        "steps": [
            "Start a morning routine that includes 10 minutes of movement",
            "Prioritize 7-9 hours of quality sleep each night",
            "Take short breaks every hour during focused work",
            "Stay hydrated by drinking water throughout the day",
            "Spend time outdoors to connect with nature daily",
        ],
        "trigger_words": [],
    },
})
