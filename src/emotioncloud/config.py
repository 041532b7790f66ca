"""
Configuration
=============

Central configuration for the Emotion Cloud pipeline.
Loads from YAML config files with sensible defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


@dataclass
class ExtractorConfig:
    """Keyword/emotion extraction configuration."""
    max_actions: int = 10
    max_subjects: int = 8
    context_boost: float = 0.5
    min_repeat: int = 2  # Non-dictionary words must repeat this often
    min_word_length: int = 3
    max_keywords: int = 5


@dataclass
class ColorConfig:
    """Tone color assignment configuration."""
    seed: int = 123
    joy_color: str = "#FFC107"
    fallback_color: str = "#95A5A6"
    palette: list[str] = field(default_factory=lambda: [
        "#F2FCE2",  # Soft green
        "#FFC107",  # Amber
        "#FEC6A1",  # Soft orange
        "#E5DEFF",  # Soft purple
        "#FFDEE2",  # Soft pink
        "#FDE1D3",  # Soft peach
        "#D3E4FD",  # Soft blue
        "#F1F0FB",  # Soft gray
        "#9B87F5",  # Primary purple
        "#7E69AB",  # Secondary purple
        "#6E59A5",  # Tertiary purple
        "#D6BCFA",  # Light purple
        "#0EA5E9",  # Ocean blue
        "#8B5CF6",  # Vivid purple
        "#D946EF",  # Magenta pink
        "#F97316",  # Bright orange
    ])


@dataclass
class LayoutConfig:
    """Seeded default layout provider configuration."""
    seed: int = 42
    center_spread: float = 2.0
    cluster_jitter: float = 0.5
    neutral_spread: float = 4.0


@dataclass
class ClusterConfig:
    """Emotional grouping configuration."""
    visible_cluster_count: int = 8
    min_visible: int = 1
    max_visible: int = 12
    radius_padding: float = 1.5


@dataclass
class RelationshipConfig:
    """Relationship scoring configuration."""
    distance_scale: float = 40.0
    spatial_weight: float = 0.4
    sentiment_weight: float = 0.4
    group_weight: float = 0.2
    relationship_limit: int = 5
    connected_limit: int = 3


@dataclass
class SceneConfig:
    """Interactive scene configuration."""
    canvas_width: int = 800
    canvas_height: int = 600
    fov: float = 75.0
    camera_position: list[float] = field(default_factory=lambda: [0.0, 0.0, 15.0])
    camera_target: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    min_distance: float = 1.0
    max_distance: float = 30.0
    zoom_in_factor: float = 0.8
    zoom_out_factor: float = 1.2
    reset_duration: float = 1.0
    focus_duration: float = 1.5
    focus_distance: float = 10.0
    hit_threshold: float = 2.0
    point_size: float = 4.0
    dimmed_opacity: float = 0.2
    animation_amplitude: float = 0.05
    animate: bool = True
    select_filtered_points: bool = False


@dataclass
class RenderConfig:
    """Static figure rendering configuration."""
    figsize: tuple[float, float] = (10, 8)
    dpi: int = 150
    file_format: str = "png"
    style: str = "white"
    context: str = "notebook"
    label_points: bool = True
    annotation_fontsize: int = 8


@dataclass
class OutputConfig:
    """Analysis output configuration."""
    output_dir: str = "output"
    save_json: bool = True
    render_figure: bool = False


@dataclass
class PipelineConfig:
    """Master configuration for the full pipeline."""
    extractor: ExtractorConfig = field(default_factory=ExtractorConfig)
    color: ColorConfig = field(default_factory=ColorConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    relationship: RelationshipConfig = field(default_factory=RelationshipConfig)
    scene: SceneConfig = field(default_factory=SceneConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # Optional YAML file overriding the built-in wellness knowledge base
    knowledge_base: Optional[str] = None

    @classmethod
    def from_yaml(cls, path: str | Path) -> PipelineConfig:
        """Load configuration from a YAML file."""
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        config = cls()

        if "extractor" in data:
            config.extractor = ExtractorConfig(**data["extractor"])
        if "color" in data:
            config.color = ColorConfig(**data["color"])
        if "layout" in data:
            config.layout = LayoutConfig(**data["layout"])
        if "cluster" in data:
            config.cluster = ClusterConfig(**data["cluster"])
        if "relationship" in data:
            config.relationship = RelationshipConfig(**data["relationship"])
        if "scene" in data:
            config.scene = SceneConfig(**data["scene"])
        if "render" in data:
            render = dict(data["render"])
            if "figsize" in render:
                render["figsize"] = tuple(render["figsize"])
            config.render = RenderConfig(**render)
        if "output" in data:
            config.output = OutputConfig(**data["output"])
        if "knowledge_base" in data:
            config.knowledge_base = data["knowledge_base"]

        config.validate()
        return config

    def validate(self) -> None:
        """Reject values the pipeline cannot work with."""
        if self.extractor.max_actions < 0 or self.extractor.max_subjects < 0:
            raise ValueError("Extractor caps must be non-negative")
        if not self.color.palette:
            raise ValueError("Color palette must not be empty")
        if self.cluster.min_visible > self.cluster.max_visible:
            raise ValueError(
                f"cluster.min_visible ({self.cluster.min_visible}) exceeds "
                f"cluster.max_visible ({self.cluster.max_visible})"
            )
        if self.relationship.distance_scale <= 0:
            raise ValueError("relationship.distance_scale must be positive")
        if self.scene.hit_threshold <= 0:
            raise ValueError("scene.hit_threshold must be positive")
        if not 0 < self.scene.zoom_in_factor < 1 < self.scene.zoom_out_factor:
            raise ValueError("Zoom factors must satisfy 0 < zoom_in < 1 < zoom_out")

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        import dataclasses
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = dataclasses.asdict(self)
        data["render"]["figsize"] = list(data["render"]["figsize"])
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
