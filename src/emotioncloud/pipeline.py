"""
Main Pipeline
=============

Orchestrates one analysis run of the Emotion Cloud engine.

Pipeline Stages:
    1. EXTRACT - Rank action and subject terms, tag each with a tone
    2. LAYOUT  - Ask the layout provider for one coordinate per term
    3. POINTS  - Color each tone and build the immutable PointStore
    4. GROUPS  - Partition points into emotional groups
    5. PLANS   - Match wellness action plans against the text
    6. SCENE   - Hand the snapshot to the scene controller

Runs are identified by a monotonically increasing run id. A result is only
committed to the session when it belongs to the newest run that was begun,
so a slow earlier run can never overwrite a later one.

Usage::

    session = AnalysisSession(PipelineConfig())
    result = session.analyze("I feel anxious but I also felt joy")
    session.controller.select_word("anxious")
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .analysis.clustering import EmotionalGroup, group_points, group_summary
from .analysis.relationships import RelationshipScore, score_relationship
from .color.registry import ColorRegistry
from .config import PipelineConfig
from .plans.knowledge_base import DEFAULT_KNOWLEDGE_BASE, KnowledgeBase
from .plans.matcher import ActionPlan, match_action_plans
from .points.layout import LayoutProvider, SeededLayoutProvider
from .points.store import PointStore, build_point_store
from .scene.controller import SceneController
from .text.extractor import ExtractionResult, KeywordExtractor

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Everything one run produced."""
    run_id: int
    text: str
    extraction: ExtractionResult
    store: PointStore
    groups: list[EmotionalGroup] = field(default_factory=list)
    plans: list[ActionPlan] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def status(self) -> str:
        return "empty" if self.store.is_empty else "ok"

    def to_dict(self) -> dict:
        return {
            "run_id": self.run_id,
            "status": self.status,
            "elapsed_seconds": self.elapsed_seconds,
            "extraction": self.extraction.summary(),
            "points": [p.to_dict() for p in self.store.points],
            "groups": group_summary(self.groups),
            "plans": [p.to_dict() for p in self.plans],
        }


class AnalysisSession:
    """
    One user's analysis session.

    Owns the per-session collaborators: extractor, color registry, layout
    provider, knowledge base and the scene controller that displays the
    latest committed snapshot.

    Parameters
    ----------
    config : PipelineConfig, optional
    layout_provider : LayoutProvider, optional
        Coordinate source. Defaults to ``SeededLayoutProvider``.
    registry : ColorRegistry, optional
        Defaults to a fresh registry seeded from ``config.color``.
    knowledge_base : KnowledgeBase, optional
        Defaults to ``config.knowledge_base`` when set, otherwise the
        built-in wellness knowledge base.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        layout_provider: Optional[LayoutProvider] = None,
        registry: Optional[ColorRegistry] = None,
        knowledge_base: Optional[KnowledgeBase] = None,
    ):
        self.config = config or PipelineConfig()
        self.extractor = KeywordExtractor(self.config.extractor)
        self.registry = registry or ColorRegistry(self.config.color)
        self.layout_provider = layout_provider or SeededLayoutProvider(self.config.layout)

        if knowledge_base is not None:
            self.knowledge_base = knowledge_base
        elif self.config.knowledge_base:
            self.knowledge_base = KnowledgeBase.from_yaml(self.config.knowledge_base)
        else:
            self.knowledge_base = DEFAULT_KNOWLEDGE_BASE

        self.controller = SceneController(
            config=self.config.scene,
            cluster_config=self.config.cluster,
            relationship_config=self.config.relationship,
        )

        self._latest_run_id = 0
        self.result: Optional[AnalysisResult] = None

    @property
    def latest_run_id(self) -> int:
        return self._latest_run_id

    def begin_run(self) -> int:
        """Reserve the next run id. Results of earlier runs become stale."""
        self._latest_run_id += 1
        return self._latest_run_id

    def compute(self, text: Optional[str], run_id: int) -> AnalysisResult:
        """
        Run the analysis stages without touching session state.

        Parameters
        ----------
        text : str or None
            Raw document text. Missing text analyzes as empty.
        run_id : int
            Id from ``begin_run``; stamped on the PointStore as its
            generation.
        """
        start = time.time()
        text = text if isinstance(text, str) else ""

        extraction = self.extractor.extract(text)
        terms = extraction.terms

        coordinates = None
        if terms:
            coordinates = self.layout_provider.layout(
                [(t.term, t.tone, t.sentiment) for t in terms]
            )

        store = build_point_store(
            terms, coordinates, self.registry,
            generation=run_id,
            relationship_config=self.config.relationship,
        )
        groups = group_points(store.points, self.config.cluster)
        plans = match_action_plans(
            text,
            extraction.tone_counts,
            knowledge_base=self.knowledge_base,
            tone_words=extraction.words_by_tone(),
        )

        elapsed = time.time() - start
        logger.info(
            f"Run {run_id}: {len(store)} points, {len(groups)} groups, "
            f"{len(plans)} plans ({elapsed:.3f}s)"
        )
        return AnalysisResult(
            run_id=run_id,
            text=text,
            extraction=extraction,
            store=store,
            groups=groups,
            plans=plans,
            elapsed_seconds=elapsed,
        )

    def commit(self, result: AnalysisResult) -> bool:
        """
        Publish a result if it belongs to the newest run.

        Returns
        -------
        bool
            False when the result was stale and dropped.
        """
        if result.run_id != self._latest_run_id:
            logger.warning(
                f"Dropping stale result of run {result.run_id} "
                f"(latest run is {self._latest_run_id})"
            )
            return False

        self.result = result
        self.controller.load(result.store)
        return True

    def analyze(self, text: Optional[str]) -> AnalysisResult:
        """Begin, compute and commit a run in one call."""
        run_id = self.begin_run()
        result = self.compute(text, run_id)
        self.commit(result)
        return result

    def compare(self, word1: str, word2: str) -> Optional[RelationshipScore]:
        """Score two words of the committed snapshot, or None if either is missing."""
        store = self.controller.store
        p1, p2 = store.find_word(word1), store.find_word(word2)
        if p1 is None or p2 is None:
            logger.warning(f"Cannot compare {word1!r} and {word2!r}: word not in point cloud")
            return None
        return score_relationship(p1, p2, self.config.relationship)

    def reset(self) -> None:
        """Forget colors and results. Pending runs become stale."""
        self.registry.reset()
        self.begin_run()
        self.result = None
        self.controller.load(PointStore.empty(self._latest_run_id))


def save_result(result: AnalysisResult, output_dir: str | Path) -> Path:
    """Write ``analysis.json`` for a result and return its path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / "analysis.json"
    with open(path, "w") as f:
        json.dump(result.to_dict(), f, indent=2, default=str)
    logger.info(f"Analysis saved to {path}")
    return path


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for running an analysis from the command line."""
    import argparse
    import sys

    parser = argparse.ArgumentParser(
        description="Emotion Cloud text analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Analyze a journal entry with default config
    python -m emotioncloud.pipeline --text-file entry.txt

    # Read from stdin and render the point cloud
    cat entry.txt | python -m emotioncloud.pipeline --render

    # Run with custom config
    python -m emotioncloud.pipeline -t entry.txt --config configs/custom.yaml
        """,
    )
    parser.add_argument(
        "--text-file", "-t",
        help="Path to a text file (reads stdin when omitted)",
    )
    parser.add_argument(
        "--config", "-c",
        default="configs/default.yaml",
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--output", "-o",
        help="Output directory (overrides config)",
    )
    parser.add_argument(
        "--render", "-r",
        action="store_true",
        help="Render the point cloud to an image",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Load config
    config_path = Path(args.config)
    if config_path.exists():
        config = PipelineConfig.from_yaml(config_path)
    else:
        logger.info(f"Config file {config_path} not found, using defaults")
        config = PipelineConfig()

    if args.output:
        config.output.output_dir = args.output
    if args.render:
        config.output.render_figure = True

    if args.text_file:
        text = Path(args.text_file).read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()

    session = AnalysisSession(config)
    result = session.analyze(text)

    output_dir = Path(config.output.output_dir)
    if config.output.save_json:
        save_result(result, output_dir)

    if config.output.render_figure:
        from .scene.renderer import SceneRenderer
        renderer = SceneRenderer(output_dir, config.render)
        renderer.render(session.controller.frame(), title="Emotion Cloud")

    # Print summary
    print("\n" + "=" * 60)
    print(f"ANALYSIS COMPLETE ({result.status})")
    print("=" * 60)
    for group in result.groups:
        print(f"  {group.name}: {', '.join(group.words)}")
    for plan in result.plans:
        print(f"  Plan: {plan.title} [{plan.category}]")
    print(f"\nResults saved to: {output_dir}/")

    return 0


if __name__ == "__main__":
    import sys
    sys.exit(main())
