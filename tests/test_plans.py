"""
Tests for the wellness knowledge base and action-plan matching.
"""

import tempfile
from pathlib import Path

import pytest
import yaml

from emotioncloud.plans.knowledge_base import DEFAULT_KNOWLEDGE_BASE, GENERAL, KnowledgeBase
from emotioncloud.plans.matcher import match_action_plans


class TestKnowledgeBase:
    """Test the static knowledge base."""

    def test_default_categories(self):
        assert list(DEFAULT_KNOWLEDGE_BASE) == [
            "Joy", "Sadness", "Anxiety", "Anger", "Overwhelm", "Sleep", "Loneliness", "General",
        ]
        for template in DEFAULT_KNOWLEDGE_BASE.values():
            assert template.title
            assert len(template.steps) == 5
        assert DEFAULT_KNOWLEDGE_BASE[GENERAL].trigger_words == ()

    def test_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_KNOWLEDGE_BASE["Joy"] = DEFAULT_KNOWLEDGE_BASE["Sadness"]

    def test_from_yaml(self):
        data = {
            "Focus": {
                "title": "Regain Focus",
                "steps": ["Close extra tabs", "Set a timer"],
                "triggerWords": ["Distracted", "scattered"],
            },
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "kb.yaml"
            with open(path, "w") as f:
                yaml.safe_dump(data, f)
            kb = KnowledgeBase.from_yaml(path)

        assert list(kb) == ["Focus"]
        assert kb["Focus"].trigger_words == ("distracted", "scattered")
        plans = match_action_plans("I feel so distracted", knowledge_base=kb)
        assert [p.title for p in plans] == ["Regain Focus"]

    def test_entry_without_title(self):
        with pytest.raises(ValueError):
            KnowledgeBase.from_dict({"Broken": {"steps": []}})


class TestMatcher:
    """Test trigger and tone matching."""

    def test_trigger_word(self):
        plans = match_action_plans("I feel so anxious")
        assert plans[0].category == "Anxiety"
        assert "anxious" in plans[0].trigger_words
        assert plans[0].title == "Managing Anxiety and Worry"

    def test_case_insensitive_substring(self):
        plans = match_action_plans("So FRUSTRATED with everything")
        assert [p.category for p in plans] == ["Anger"]
        assert plans[0].trigger_words == ("frustrat",)

    def test_capped_in_knowledge_base_order(self):
        plans = match_action_plans("happy sad anxious angry lonely tired")
        assert [p.category for p in plans] == ["Joy", "Sadness", "Anxiety"]
        assert len(match_action_plans("happy sad anxious angry", limit=10)) == 4

    def test_tone_match_carries_words(self):
        plans = match_action_plans(
            "", {"Sadness": 2}, tone_words={"Sadness": ["tears", "grief"]},
        )
        assert [p.category for p in plans] == ["Sadness"]
        assert plans[0].trigger_words == ("tears", "grief")

    def test_tone_is_capitalized(self):
        plans = match_action_plans(None, ["anger"])
        assert [p.category for p in plans] == ["Anger"]

    def test_deduplicated(self):
        plans = match_action_plans("I am sad", {"Sadness": 1})
        assert [p.category for p in plans] == ["Sadness"]
        assert plans[0].trigger_words == ("sad",)

    def test_general_fallback(self):
        plans = match_action_plans("The meeting went on", {"Neutral": 3})
        assert [p.category for p in plans] == [GENERAL]
        assert plans[0].title == "Daily Wellness Practices"

    def test_no_match_without_tones(self):
        assert match_action_plans("The meeting went on") == []

    def test_empty(self):
        assert match_action_plans("") == []
        assert match_action_plans(None) == []
        assert match_action_plans("   ", {"Sadness": 0}) == []

    def test_to_dict(self):
        data = match_action_plans("I feel so anxious")[0].to_dict()
        assert data["category"] == "Anxiety"
        assert len(data["steps"]) == 5
        assert data["trigger_words"] == ["anxious"]
