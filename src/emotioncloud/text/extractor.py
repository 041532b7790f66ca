"""
Keyword/Emotion Extractor
=========================

Turns raw document text into two ranked term lists:

    actions
        Verb-like, emotion-bearing words ("anxious", "cried", "racing").
        Capped at 10 by default.

    subjects
        Noun-like words ("friend", "deadline", "heart"). Capped at 8.

Scoring
-------
Every occurrence of a dictionary word scores 1. Within a sentence, each
dictionary hit additionally gains ``context_boost`` (0.5) for every other
hit of the same category in that sentence, so reinforced mentions rank
higher than isolated ones.

Words missing from both dictionaries are promoted when they occur at least
``min_repeat`` times. They score their raw count and are classified by
suffix: ``-ing``, ``-ed``, ``-ize`` ... are action-like, anything else is
subject-like. Their tone is Neutral.

Terms are ordered by total score, ties broken by first occurrence. Empty or
missing text yields empty lists.

Tokenization uses nltk tokenizers that need no downloaded corpora: an
untrained Punkt sentence splitter and a regular-expression word tokenizer.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from nltk.tokenize import PunktSentenceTokenizer, RegexpTokenizer

from ..config import ExtractorConfig
from .lexicon import (
    ACTION_LEXICON,
    ACTION_SUFFIXES,
    NEGATIVE_CUES,
    POSITIVE_CUES,
    STOPWORDS,
    SUBJECT_LEXICON,
    TONE_SENTIMENT,
)
from .tones import NEUTRAL, normalize_tone

logger = logging.getLogger(__name__)

ACTION = "action"
SUBJECT = "subject"

_sentence_tokenizer = PunktSentenceTokenizer()
_word_tokenizer = RegexpTokenizer(r"[a-z]+(?:'[a-z]+)?")


def sent_tokenize(text: str) -> list[str]:
    """Split text into sentences."""
    return [s for s in _sentence_tokenizer.tokenize(text) if s.strip()]


def word_tokenize(text: str) -> list[str]:
    """Lowercase word tokens, keeping inner apostrophes ("don't")."""
    return _word_tokenizer.tokenize(text.lower())


def term_sentiment(term: str, tone: str) -> float:
    """Sentiment in [0, 1]: the tone baseline nudged by cue words."""
    score = TONE_SENTIMENT.get(tone, 0.5)
    if term in POSITIVE_CUES:
        score += 0.1
    if term in NEGATIVE_CUES:
        score -= 0.1
    return max(0.0, min(1.0, score))


def classify_by_suffix(word: str) -> str:
    """Action-like if the word ends in a verbal suffix, subject-like otherwise."""
    for suffix in ACTION_SUFFIXES:
        if word.endswith(suffix) and len(word) > len(suffix) + 2:
            return ACTION
    return SUBJECT


@dataclass(frozen=True)
class ExtractedTerm:
    """A ranked term produced by the extractor.

    Attributes:
        term: Lowercased word.
        category: ``"action"`` or ``"subject"``.
        tone: Canonical emotional tone.
        weight: Total score (occurrences plus contextual boosts).
        frequency: Raw occurrence count.
        first_index: Token index of the first occurrence, used for
            stable tie-breaking.
        sentiment: Sentiment in [0, 1].
        keywords: Most frequent other content words sharing a sentence
            with this term.
    """
    term: str
    category: str
    tone: str
    weight: float
    frequency: int
    first_index: int
    sentiment: float
    keywords: tuple[str, ...] = ()


@dataclass
class ExtractionResult:
    """Ranked action and subject terms for one document."""
    actions: list[ExtractedTerm] = field(default_factory=list)
    subjects: list[ExtractedTerm] = field(default_factory=list)
    word_count: int = 0
    sentence_count: int = 0

    @property
    def terms(self) -> list[ExtractedTerm]:
        """Actions followed by subjects."""
        return self.actions + self.subjects

    @property
    def is_empty(self) -> bool:
        return not self.actions and not self.subjects

    @property
    def tone_counts(self) -> Counter:
        """Number of ranked terms per canonical tone (Neutral included)."""
        return Counter(t.tone for t in self.terms)

    def words_by_tone(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for t in self.terms:
            grouped.setdefault(t.tone, []).append(t.term)
        return grouped

    def summary(self) -> dict:
        return {
            "word_count": self.word_count,
            "sentence_count": self.sentence_count,
            "actions": [t.term for t in self.actions],
            "subjects": [t.term for t in self.subjects],
            "tone_counts": dict(self.tone_counts),
        }


@dataclass
class _TermStats:
    category: str
    raw_tone: str
    in_dictionary: bool
    score: float = 0.0
    count: int = 0
    first_index: int = -1
    context: Counter = field(default_factory=Counter)


class KeywordExtractor:
    """
    Heuristic dictionary-based keyword and emotion extractor.

    Parameters
    ----------
    config : ExtractorConfig, optional
        Caps, boost factor and repetition threshold.
    action_lexicon, subject_lexicon : dict[str, str], optional
        Override the default ``word -> raw tone`` dictionaries.
    stopwords : frozenset[str], optional
        Override the default stopword list.

    Examples
    --------
    >>> extractor = KeywordExtractor()
    >>> result = extractor.extract("I feel anxious. My heart is racing.")
    >>> [t.term for t in result.actions]
    ['feel', 'anxious', 'racing']
    """

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        action_lexicon: Optional[dict[str, str]] = None,
        subject_lexicon: Optional[dict[str, str]] = None,
        stopwords: Optional[frozenset[str]] = None,
    ):
        self.config = config or ExtractorConfig()
        self.action_lexicon = action_lexicon if action_lexicon is not None else ACTION_LEXICON
        self.subject_lexicon = subject_lexicon if subject_lexicon is not None else SUBJECT_LEXICON
        self.stopwords = stopwords if stopwords is not None else STOPWORDS

    def _is_content_word(self, token: str) -> bool:
        return len(token) >= self.config.min_word_length and token not in self.stopwords

    def _lookup(self, token: str) -> Optional[tuple[str, str]]:
        if token in self.action_lexicon:
            return ACTION, self.action_lexicon[token]
        if token in self.subject_lexicon:
            return SUBJECT, self.subject_lexicon[token]
        return None

    def extract(self, text: Optional[str]) -> ExtractionResult:
        """
        Extract ranked action and subject terms from text.

        Parameters
        ----------
        text : str or None
            Document text. Anything that is not a non-blank string yields
            an empty result.

        Returns
        -------
        ExtractionResult
            Ranked, capped term lists.
        """
        if not isinstance(text, str) or not text.strip():
            return ExtractionResult()

        cfg = self.config
        stats: dict[str, _TermStats] = {}
        token_index = 0
        word_count = 0
        sentences = sent_tokenize(text)

        for sentence in sentences:
            tokens = word_tokenize(sentence)
            word_count += len(tokens)
            content = [t for t in tokens if self._is_content_word(t)]
            hits_per_category: Counter = Counter()

            for token in content:
                entry = stats.get(token)
                if entry is None:
                    found = self._lookup(token)
                    if found is None:
                        entry = _TermStats(
                            category=classify_by_suffix(token),
                            raw_tone=NEUTRAL,
                            in_dictionary=False,
                        )
                    else:
                        entry = _TermStats(
                            category=found[0], raw_tone=found[1], in_dictionary=True
                        )
                    entry.first_index = token_index
                    stats[token] = entry

                entry.count += 1
                token_index += 1
                if entry.in_dictionary:
                    hits_per_category[entry.category] += 1

            # Dictionary scoring with the same-sentence contextual boost
            sentence_counts = Counter(content)
            for token in content:
                entry = stats[token]
                if entry.in_dictionary:
                    others = hits_per_category[entry.category] - 1
                    entry.score += 1.0 + cfg.context_boost * others

            for token in sentence_counts:
                context = stats[token].context
                for other, n in sentence_counts.items():
                    if other != token:
                        context[other] += n

        ranked: dict[str, list[ExtractedTerm]] = {ACTION: [], SUBJECT: []}
        for token, entry in stats.items():
            if not entry.in_dictionary:
                if entry.count < cfg.min_repeat:
                    continue
                entry.score = float(entry.count)

            tone = normalize_tone(entry.raw_tone)
            ranked[entry.category].append(ExtractedTerm(
                term=token,
                category=entry.category,
                tone=tone,
                weight=entry.score,
                frequency=entry.count,
                first_index=entry.first_index,
                sentiment=term_sentiment(token, tone),
                keywords=self._top_keywords(entry.context, stats),
            ))

        for terms in ranked.values():
            terms.sort(key=lambda t: (-t.weight, t.first_index))

        result = ExtractionResult(
            actions=ranked[ACTION][:cfg.max_actions],
            subjects=ranked[SUBJECT][:cfg.max_subjects],
            word_count=word_count,
            sentence_count=len(sentences),
        )

        logger.debug(
            f"Extracted {len(result.actions)} actions and {len(result.subjects)} subjects "
            f"from {word_count} words in {len(sentences)} sentences"
        )
        return result

    def _top_keywords(self, context: Counter, stats: dict[str, _TermStats]) -> tuple[str, ...]:
        ordered = sorted(context.items(), key=lambda kv: (-kv[1], stats[kv[0]].first_index))
        return tuple(word for word, _ in ordered[:self.config.max_keywords])


def extract_keywords(text: Optional[str], config: Optional[ExtractorConfig] = None) -> ExtractionResult:
    """Convenience wrapper around ``KeywordExtractor.extract``."""
    return KeywordExtractor(config).extract(text)
