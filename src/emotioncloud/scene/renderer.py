"""
Figure Renderer
===============

Draws a ``RenderFrame`` onto a matplotlib 3-D axes and saves it.

This is the static rendering surface of the package: it understands only
marker and line commands, so anything the interactive controller can show
can also be written to an image. Placeholder frames are drawn as a centered
message on an empty canvas.

Dependencies
------------
    - matplotlib (Agg backend)
    - seaborn (figure theme)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for server/CLI use
import matplotlib.pyplot as plt
import seaborn as sns

from ..config import RenderConfig
from .render import RenderFrame

logger = logging.getLogger(__name__)


class SceneRenderer:
    """
    Saves render frames as image files.

    Parameters
    ----------
    output_dir : str or Path
        Directory where figures are written. Created if missing.
    config : RenderConfig, optional
        Figure size, DPI, format and theme.
    """

    def __init__(
        self,
        output_dir: str | Path = "./output",
        config: Optional[RenderConfig] = None,
    ):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.config = config or RenderConfig()

        sns.set_theme(style=self.config.style, context=self.config.context)

    def _save_figure(self, fig: plt.Figure, filename: str) -> Path:
        filepath = self.output_dir / f"{filename}.{self.config.file_format}"
        fig.savefig(
            filepath,
            dpi=self.config.dpi,
            format=self.config.file_format,
            bbox_inches="tight",
            facecolor="white",
            edgecolor="none",
        )
        plt.close(fig)
        logger.info(f"Saved figure: {filepath}")
        return filepath

    def draw(self, frame: RenderFrame, title: Optional[str] = None) -> plt.Figure:
        """Draw a frame onto a new figure and return it."""
        fig = plt.figure(figsize=self.config.figsize)

        if frame.is_placeholder or not frame.markers:
            fig.text(
                0.5, 0.5, frame.placeholder or "No data to display",
                ha="center", va="center", fontsize=14, color="#6B7280",
            )
            return fig

        ax = fig.add_subplot(projection="3d")

        positions = np.array([m.position for m in frame.markers], dtype=float)
        colors = np.array([(*m.color, m.opacity) for m in frame.markers], dtype=float)
        # Scene sizes are in screen units; scatter wants points squared
        sizes = np.array([(m.size * 3.0) ** 2 for m in frame.markers], dtype=float)
        edge = ["#111827" if m.selected else "none" for m in frame.markers]

        ax.scatter(
            positions[:, 0], positions[:, 1], positions[:, 2],
            c=colors, s=sizes, edgecolors=edge, depthshade=False,
        )

        for line in frame.lines:
            ax.plot(
                [line.start[0], line.end[0]],
                [line.start[1], line.end[1]],
                [line.start[2], line.end[2]],
                color=line.color, alpha=line.opacity, linewidth=2,
            )

        if self.config.label_points:
            for m in frame.markers:
                if m.dimmed:
                    continue
                ax.text(
                    m.position[0], m.position[1], m.position[2], m.word,
                    fontsize=self.config.annotation_fontsize,
                    fontweight="bold" if m.selected else "normal",
                )

        ax.set_xlabel("x")
        ax.set_ylabel("y")
        ax.set_zlabel("z")
        if title:
            ax.set_title(title)
        return fig

    def render(
        self,
        frame: RenderFrame,
        filename: str = "point_cloud",
        title: Optional[str] = None,
    ) -> Path:
        """Draw a frame and save it to the output directory."""
        return self._save_figure(self.draw(frame, title), filename)
