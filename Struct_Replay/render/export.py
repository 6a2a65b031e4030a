"""Headless frame export using ``matplotlib`` and ``imageio``.

:class:`FigureSurface` keeps the picture like
:class:`~Struct_Replay.render.surface.RecordingSurface` and rasterises it on
demand. :class:`FrameRecorder` is a scheduler step listener that writes one
frame per applied step either into a video/GIF or as numbered PNG files.

Example
-------
```
sr play script.yaml --frames out.mp4
```
"""

from __future__ import annotations

import logging
import os
from typing import Any

import imageio
import matplotlib
import numpy as np

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Rectangle

from ..config import Config
from .scene import BoxShape, EdgeShape, NodeShape
from .styles import FOCUS_RING, style
from .surface import RecordingSurface

logger = logging.getLogger(__name__)

_VIDEO_SUFFIXES = (".mp4", ".gif", ".avi", ".mov")


class FigureSurface(RecordingSurface):
    """Recording surface that can draw its current state with matplotlib."""

    def __init__(self, dpi: int = 80) -> None:
        super().__init__()
        self.connectors: list = []
        width = Config.viewport_width / dpi
        height = Config.viewport_height / dpi
        self.fig, self.ax = plt.subplots(figsize=(width, height), dpi=dpi)

    def clear(self) -> None:
        super().clear()
        self.connectors = []

    def draw_connector(self, shape) -> None:
        super().draw_connector(shape)
        self.connectors.append(shape)

    def _anchor(self, handle: str, x: float, y: float) -> tuple[float, float]:
        return self.moved.get(handle, (x, y))

    def frame(self) -> np.ndarray:
        """Render the current state to an RGB array."""
        ax = self.ax
        ax.clear()
        ax.set_xlim(0, Config.viewport_width)
        ax.set_ylim(Config.viewport_height, 0)
        ax.set_aspect("equal")
        ax.set_axis_off()

        for conn in self.connectors:
            ax.plot([conn.x1, conn.x2], [conn.y1, conn.y2], color="gray", linewidth=1)
        for handle, shape in self.shapes.items():
            colours = style(self.highlights.get(handle))
            if isinstance(shape, EdgeShape):
                ax.plot(
                    [shape.x1, shape.x2],
                    [shape.y1, shape.y2],
                    color=colours["stroke"],
                    linewidth=colours["width"] / 2,
                    zorder=1,
                )
                if shape.label is not None:
                    ax.text(
                        (shape.x1 + shape.x2) / 2,
                        (shape.y1 + shape.y2) / 2 - 8,
                        shape.label,
                        ha="center",
                        fontsize=8,
                        zorder=2,
                    )
            elif isinstance(shape, BoxShape):
                x, y = self._anchor(handle, shape.x, shape.y)
                ax.add_patch(
                    Rectangle(
                        (x, y),
                        shape.width,
                        shape.height,
                        facecolor=colours["fill"],
                        edgecolor=colours["stroke"],
                        zorder=2,
                    )
                )
                ax.text(
                    x + shape.width / 2,
                    y + shape.height / 2,
                    shape.label,
                    color=colours["text"],
                    ha="center",
                    va="center",
                    fontsize=8,
                    zorder=3,
                )
                if shape.caption:
                    ax.text(x + shape.width / 2, y + shape.height + 10, shape.caption, ha="center", fontsize=7)
            elif isinstance(shape, NodeShape):
                x, y = self._anchor(handle, shape.x, shape.y)
                ax.add_patch(
                    Circle(
                        (x, y),
                        shape.radius,
                        facecolor=colours["fill"],
                        edgecolor=colours["stroke"],
                        linewidth=colours["width"] / 2,
                        zorder=3,
                    )
                )
                ax.text(x, y, shape.label, color=colours["text"], ha="center", va="center", fontsize=9, zorder=4)

        for handle, text in self.badges.items():
            pos = self._badge_anchor(handle)
            if pos is not None:
                ax.text(pos[0] + 24, pos[1] - 24, text, color=style("traversed")["stroke"], fontsize=8, zorder=5)
        if self.focus is not None:
            ax.add_patch(
                Circle(
                    self.focus,
                    FOCUS_RING["radius"],
                    fill=False,
                    edgecolor=FOCUS_RING["stroke"],
                    linewidth=FOCUS_RING["width"] / 2,
                    zorder=5,
                )
            )
        ax.text(10, Config.viewport_height - 20, self.status, fontsize=10, weight="bold")
        if self.panel:
            ax.text(10, Config.viewport_height - 45, "Queue: " + " ".join(self.panel), fontsize=9)

        canvas = self.fig.canvas
        canvas.draw()
        return np.asarray(canvas.buffer_rgba())[..., :3].copy()

    def _badge_anchor(self, handle: str) -> tuple[float, float] | None:
        shape = self.shapes.get(handle)
        if isinstance(shape, (NodeShape, BoxShape)):
            return self._anchor(handle, shape.x, shape.y)
        if isinstance(shape, EdgeShape):
            return (shape.x1 + shape.x2) / 2, (shape.y1 + shape.y2) / 2
        return None

    def close(self) -> None:
        plt.close(self.fig)


class FrameRecorder:
    """Step listener writing one frame of ``surface`` per applied step.

    Parameters
    ----------
    surface:
        Surface whose :meth:`FigureSurface.frame` is captured.
    output_path:
        A video or GIF file (``.mp4``, ``.gif`` ...) or a directory that
        receives ``frame_00000.png`` style files.
    fps:
        Frames per second when writing a video.
    """

    def __init__(self, surface: FigureSurface, output_path: str, fps: int = 2) -> None:
        self.surface = surface
        self.output_path = output_path
        self.count = 0
        self._writer: Any = None
        if output_path.lower().endswith(_VIDEO_SUFFIXES):
            self._writer = imageio.get_writer(output_path, fps=fps)
        else:
            os.makedirs(output_path, exist_ok=True)

    def __call__(self, index: int, rec: Any = None) -> None:
        self.capture()

    def capture(self) -> None:
        frame = self.surface.frame()
        if self._writer is not None:
            self._writer.append_data(frame)
        else:
            path = os.path.join(self.output_path, f"frame_{self.count:05d}.png")
            imageio.imwrite(path, frame)
        self.count += 1

    def close(self) -> None:
        if self._writer is not None:
            self._writer.close()
            self._writer = None
        logger.info("wrote %d frames to %s", self.count, self.output_path)
