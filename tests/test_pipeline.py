"""
Tests for the Emotion Cloud pipeline.

These tests run complete analyses on short synthetic journal entries to
validate the session, the staleness guard, configuration and outputs
without any network access.
"""

import json
import tempfile
from pathlib import Path

import pytest

from emotioncloud.config import PipelineConfig
from emotioncloud.pipeline import AnalysisSession, main, save_result
from emotioncloud.scene.render import RenderFrame, build_render_frame
from emotioncloud.scene.renderer import SceneRenderer

ENTRY = "I feel so anxious and my heart is racing, but I also felt joy seeing my friend"


class _FixedLayout:
    """Layout provider that lines terms up along the x axis."""

    def layout(self, items):
        return [[float(i), 0.0, 0.0] for i in range(len(items))]


class TestAnalysisSession:
    """Test complete analysis runs."""

    def test_example_entry(self):
        session = AnalysisSession()
        result = session.analyze(ENTRY)

        assert result.status == "ok"
        assert [t.term for t in result.extraction.actions] == ["feel", "anxious", "racing", "felt"]
        assert [t.term for t in result.extraction.subjects] == ["heart", "joy", "friend"]
        assert [p.category for p in result.plans] == ["Joy", "Anxiety"]
        assert result.plans[0].trigger_words == ("joy",)

        assert [g.name for g in result.groups] == ["Neutral", "Anxiety", "Joy"]
        assert session.controller.store is result.store
        assert result.store.find_word("friend").hex_color == "#FFC107"

    def test_empty_entry(self):
        session = AnalysisSession()
        result = session.analyze("")
        assert result.status == "empty"
        assert result.plans == []
        assert result.groups == []
        assert session.controller.frame().is_placeholder

    def test_stale_run_dropped(self):
        session = AnalysisSession()
        first = session.begin_run()
        second = session.begin_run()

        newer = session.compute("I am so happy today", second)
        assert session.commit(newer)

        older = session.compute("I cried all night", first)
        assert not session.commit(older)

        assert session.result is newer
        assert session.controller.store.generation == second
        assert session.controller.store.find_word("happy") is not None

    def test_run_ids_increase(self):
        session = AnalysisSession()
        ids = [session.analyze("happy").run_id for _ in range(3)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 3

    def test_custom_layout(self):
        session = AnalysisSession(layout_provider=_FixedLayout())
        result = session.analyze(ENTRY)
        assert [p.position[0] for p in result.store] == [float(i) for i in range(len(result.store))]

    def test_compare(self):
        session = AnalysisSession()
        session.analyze(ENTRY)
        score = session.compare("anxious", "racing")
        assert score.same_emotional_group
        assert 0.0 <= score.overall_similarity <= 1.0
        assert session.compare("anxious", "banana") is None

    def test_scene_interaction_after_analysis(self):
        session = AnalysisSession(layout_provider=_FixedLayout())
        session.analyze(ENTRY)
        # "feel" sits at the origin, straight down the default view axis
        assert session.controller.click(0.0, 0.0).word == "feel"
        assert session.controller.focus_on_emotional_group("Joy")

    def test_reset(self):
        session = AnalysisSession()
        session.analyze(ENTRY)
        session.reset()
        assert len(session.registry) == 0
        assert session.result is None
        assert session.controller.store.is_empty

    def test_result_serializable(self):
        result = AnalysisSession().analyze(ENTRY)
        data = json.loads(json.dumps(result.to_dict()))
        assert data["status"] == "ok"
        assert len(data["points"]) == 7
        assert [p["category"] for p in data["plans"]] == ["Joy", "Anxiety"]


class TestConfig:
    """Test YAML configuration."""

    def test_round_trip(self):
        config = PipelineConfig()
        config.extractor.max_actions = 6
        config.cluster.visible_cluster_count = 4
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.yaml"
            config.to_yaml(path)
            loaded = PipelineConfig.from_yaml(path)
        assert loaded == config

    def test_invalid_values(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.yaml"
            path.write_text("cluster:\n  min_visible: 6\n  max_visible: 2\n")
            with pytest.raises(ValueError):
                PipelineConfig.from_yaml(path)

    def test_unknown_key(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.yaml"
            path.write_text("scene:\n  warp_speed: 9\n")
            with pytest.raises(TypeError):
                PipelineConfig.from_yaml(path)

    def test_config_drives_extractor(self):
        config = PipelineConfig()
        config.extractor.max_actions = 2
        result = AnalysisSession(config).analyze(ENTRY)
        assert len(result.extraction.actions) == 2


class TestOutputs:
    """Test JSON and figure output."""

    def test_save_result(self):
        result = AnalysisSession().analyze(ENTRY)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = save_result(result, tmpdir)
            data = json.loads(path.read_text())
        assert path.name == "analysis.json"
        assert data["run_id"] == result.run_id

    def test_render_point_cloud(self):
        session = AnalysisSession()
        session.analyze(ENTRY)
        session.controller.select_word("anxious")
        with tempfile.TemporaryDirectory() as tmpdir:
            path = SceneRenderer(tmpdir).render(session.controller.frame(), title="Entry")
            assert path.exists()
            assert path.suffix == ".png"

    def test_render_placeholder(self):
        frame = build_render_frame([])
        assert isinstance(frame, RenderFrame)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = SceneRenderer(tmpdir).render(frame, filename="empty")
            assert path.exists()

    def test_cli(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            text_file = Path(tmpdir) / "entry.txt"
            text_file.write_text(ENTRY)
            out_dir = Path(tmpdir) / "out"
            code = main([
                "--text-file", str(text_file),
                "--config", str(Path(tmpdir) / "missing.yaml"),
                "--output", str(out_dir),
                "--render",
            ])
            assert code == 0
            assert (out_dir / "analysis.json").exists()
            assert (out_dir / "point_cloud.png").exists()
