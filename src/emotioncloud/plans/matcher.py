"""
Action-Plan Matcher
===================

Suggests up to three wellness plans for a piece of text.

Matching runs in two passes over the knowledge base:

    1. Trigger words. A category matches when any of its trigger words
       occurs in the lowercased text as a substring. The plan lists the
       triggers that matched.
    2. Detected tones. A detected tone whose capitalized name equals a
       category key matches that category. The plan lists the words
       detected for that tone, when given.

Categories are deduplicated (first match wins) and the result is capped.
If nothing matched but at least one tone was detected, a single "General"
plan is returned. No text and no tones yields an empty list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Union

from .knowledge_base import DEFAULT_KNOWLEDGE_BASE, GENERAL, KnowledgeBase

logger = logging.getLogger(__name__)

ToneCounts = Union[Mapping[str, int], Iterable[str]]


@dataclass(frozen=True)
class ActionPlan:
    """A matched wellness suggestion."""
    title: str
    steps: tuple[str, ...]
    category: str
    trigger_words: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "category": self.category,
            "steps": list(self.steps),
            "trigger_words": list(self.trigger_words),
        }


def _detected_tones(tone_counts: Optional[ToneCounts]) -> list[str]:
    if not tone_counts:
        return []
    if isinstance(tone_counts, Mapping):
        return [tone for tone, count in tone_counts.items() if tone and count > 0]
    return [tone for tone in tone_counts if tone]


def _plan(kb: KnowledgeBase, category: str, triggers: Iterable[str]) -> ActionPlan:
    template = kb[category]
    return ActionPlan(
        title=template.title,
        steps=template.steps,
        category=category,
        trigger_words=tuple(triggers),
    )


def match_action_plans(
    text: Optional[str],
    tone_counts: Optional[ToneCounts] = None,
    knowledge_base: Optional[KnowledgeBase] = None,
    limit: int = 3,
    tone_words: Optional[Mapping[str, list[str]]] = None,
) -> list[ActionPlan]:
    """
    Match wellness plans against text and detected tones.

    Parameters
    ----------
    text : str or None
        Raw entry text.
    tone_counts : mapping of tone to count, or iterable of tones, optional
        Tones detected in the text. Tones with a zero count are ignored.
    knowledge_base : KnowledgeBase, optional
        Defaults to ``DEFAULT_KNOWLEDGE_BASE``.
    limit : int
        Maximum number of plans returned.
    tone_words : mapping of tone to words, optional
        Words detected per tone, attached to tone-matched plans.

    Returns
    -------
    list[ActionPlan]
    """
    kb = knowledge_base or DEFAULT_KNOWLEDGE_BASE
    lowered = text.lower() if isinstance(text, str) else ""
    tones = _detected_tones(tone_counts)

    if not lowered.strip() and not tones:
        return []

    plans: list[ActionPlan] = []
    added: set[str] = set()

    if lowered:
        for category, template in kb.items():
            matched = [t for t in template.trigger_words if t and t in lowered]
            if matched and category not in added:
                plans.append(_plan(kb, category, matched))
                added.add(category)

    for tone in tones:
        category = tone[:1].upper() + tone[1:]
        if category in kb and category not in added and category != GENERAL:
            words = (tone_words or {}).get(tone, [])
            plans.append(_plan(kb, category, words))
            added.add(category)

    if not plans and tones and GENERAL in kb:
        plans.append(_plan(kb, GENERAL, ()))

    result = plans[:max(0, limit)]
    logger.debug(f"Matched action plans: {[p.category for p in result]}")
    return result
