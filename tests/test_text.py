"""
Tests for keyword/emotion extraction and tone normalization.
"""

import pytest

from emotioncloud.config import ExtractorConfig
from emotioncloud.text.extractor import (
    ACTION,
    SUBJECT,
    KeywordExtractor,
    classify_by_suffix,
    extract_keywords,
    word_tokenize,
)
from emotioncloud.text.tones import CANONICAL_TONES, NEUTRAL, normalize_tone


class TestTokenize:
    """Test the corpus-free tokenizers."""

    def test_lowercases_and_keeps_apostrophes(self):
        assert word_tokenize("I DON'T know, Friend!") == ["i", "don't", "know", "friend"]

    def test_suffix_classification(self):
        assert classify_by_suffix("coding") == ACTION
        assert classify_by_suffix("finalize") == ACTION
        assert classify_by_suffix("project") == SUBJECT
        # Too short to carry a verbal suffix
        assert classify_by_suffix("red") == SUBJECT


class TestExtractor:
    """Test ranking, caps and degenerate input."""

    def test_empty_input(self):
        extractor = KeywordExtractor()
        for text in ("", "   ", None, 42):
            result = extractor.extract(text)
            assert result.is_empty
            assert result.actions == []
            assert result.subjects == []

    def test_only_stopwords(self):
        result = extract_keywords("the the and and of of")
        assert result.is_empty

    def test_ordering_ties_by_first_occurrence(self):
        result = extract_keywords("I feel anxious. My heart is racing.")
        assert [t.term for t in result.actions] == ["feel", "anxious", "racing"]
        assert [t.term for t in result.subjects] == ["heart"]

    def test_context_boost_same_category(self):
        result = extract_keywords("I cried and yelled")
        weights = {t.term: t.weight for t in result.actions}
        assert weights["cried"] == pytest.approx(1.5)
        assert weights["yelled"] == pytest.approx(1.5)

    def test_no_boost_across_categories(self):
        result = extract_keywords("I cried about the deadline")
        assert result.actions[0].term == "cried"
        assert result.actions[0].weight == pytest.approx(1.0)
        assert result.subjects[0].term == "deadline"
        assert result.subjects[0].weight == pytest.approx(1.0)

    def test_repeated_mentions_rank_higher(self):
        result = extract_keywords("I cried. I cried and yelled.")
        assert result.actions[0].term == "cried"
        assert result.actions[0].weight > result.actions[1].weight
        assert result.actions[0].frequency == 2

    def test_caps(self):
        text = (
            "I cried, yelled, laughed, smiled, worried, panicked, shouted, "
            "relaxed, wondered, struggled and rushed. Friends, exam, deadline, "
            "music, garden, family, work, home, night and silence."
        )
        result = KeywordExtractor(ExtractorConfig(max_actions=3, max_subjects=2)).extract(text)
        assert len(result.actions) == 3
        assert len(result.subjects) == 2

    def test_default_caps(self):
        words = [
            "cried", "yelled", "laughed", "smiled", "worried", "panicked", "shouted",
            "relaxed", "confused", "struggled", "rushing", "hated", "missed",
        ]
        subjects = [
            "friends", "exam", "deadline", "music", "garden", "family", "work",
            "home", "night", "silence",
        ]
        result = extract_keywords(" ".join(words) + ". " + " ".join(subjects) + ".")
        assert len(result.actions) == 10
        assert len(result.subjects) == 8

    def test_repeated_unknown_words_promoted(self):
        result = extract_keywords("The project was hard. The project is late. Coding coding.")
        subjects = {t.term: t for t in result.subjects}
        actions = {t.term: t for t in result.actions}
        assert "project" in subjects
        assert subjects["project"].tone == NEUTRAL
        assert subjects["project"].weight == pytest.approx(2.0)
        assert "coding" in actions

    def test_single_unknown_word_dropped(self):
        result = extract_keywords("The project was fine")
        assert "project" not in [t.term for t in result.terms]

    def test_short_words_ignored(self):
        result = extract_keywords("ok ok ok ok")
        assert result.is_empty

    def test_tones_are_canonical(self):
        result = extract_keywords("I was worried and happy, then furious about the pressure.")
        tones = {t.term: t.tone for t in result.terms}
        assert tones["worried"] == "Anxiety"
        assert tones["happy"] == "Joy"
        assert tones["furious"] == "Anger"
        assert tones["pressure"] == "Overwhelm"
        assert all(t in CANONICAL_TONES for t in tones.values())

    def test_sentiment_range(self):
        result = extract_keywords("I love my friends but I hate the awful deadline.")
        for term in result.terms:
            assert 0.0 <= term.sentiment <= 1.0
        by_term = {t.term: t for t in result.terms}
        assert by_term["love"].sentiment > by_term["hate"].sentiment

    def test_keywords_exclude_self(self):
        result = extract_keywords("I cried about my friend and my friend cried.")
        for term in result.terms:
            assert term.term not in term.keywords

    def test_tone_counts_and_summary(self):
        result = extract_keywords("I feel so anxious and my heart is racing")
        counts = result.tone_counts
        assert counts["Anxiety"] == 2
        assert counts[NEUTRAL] == 2
        summary = result.summary()
        assert summary["actions"] == ["feel", "anxious", "racing"]
        assert summary["subjects"] == ["heart"]
        assert result.words_by_tone()["Anxiety"] == ["anxious", "racing"]


class TestToneNormalizer:
    """Test tone label normalization."""

    @pytest.mark.parametrize("label,expected", [
        ("Joy", "Joy"),
        ("joy theme", "Joy"),
        ("Joy Theme", "Joy"),
        ("HAPPY", "Joy"),
        ("Unhappy", "Sadness"),
        ("Fear", "Anxiety"),
        ("worry", "Anxiety"),
        ("Stressed", "Overwhelm"),
        ("Isolation", "Loneliness"),
        ("Frustration", "Anger"),
        ("Grief", "Sadness"),
        ("Peace", "Contentment"),
        ("Confused", "Confusion"),
        ("  anxiety theme ", "Anxiety"),
    ])
    def test_mapping(self, label, expected):
        assert normalize_tone(label) == expected

    @pytest.mark.parametrize("label", [None, "", "   ", "Theme", "Banana", 3.5])
    def test_unknown_is_neutral(self, label):
        assert normalize_tone(label) == NEUTRAL

    def test_canonical_names_are_fixed_points(self):
        for tone in CANONICAL_TONES:
            assert normalize_tone(tone) == tone

    def test_idempotent(self):
        for label in ["Fear", "joy theme", "Stress", "Banana", "lonely", "Calm"]:
            once = normalize_tone(label)
            assert normalize_tone(once) == once
