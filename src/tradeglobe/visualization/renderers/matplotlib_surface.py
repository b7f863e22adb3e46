# SPDX-License-Identifier: Apache-2.0
"""Matplotlib (Agg) surface that rasterises globe frames to PNG."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.collections import LineCollection
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Circle as CirclePatch
from matplotlib.patches import PathPatch, Rectangle
from matplotlib.path import Path as MplPath

from tradeglobe.visualization.commands import (
    Circle,
    Clear,
    DrawCommand,
    FillRect,
    LinkBand,
    NodeBox,
    Polygon,
    PopClip,
    PushClip,
    Segment,
    Text,
    Tooltip,
)
from tradeglobe.visualization.styles import FIGURE_DPI

from .base import FrameBundle, Surface, SurfaceError
from .registry import register

LOGGER = logging.getLogger(__name__)

_ANCHORS = {"start": "left", "middle": "center", "end": "right"}
_BAND_SAMPLES = 24


def _bezier(link: LinkBand, samples: int = _BAND_SAMPLES) -> np.ndarray:
    t = np.linspace(0.0, 1.0, samples)[:, None]
    p0, c1, c2, p1 = (np.asarray(p, dtype=float) for p in (link.p0, link.c1, link.c2, link.p1))
    return (
        (1 - t) ** 3 * p0
        + 3 * (1 - t) ** 2 * t * c1
        + 3 * (1 - t) * t**2 * c2
        + t**3 * p1
    )


@register
class MatplotlibSurface(Surface):
    slug = "matplotlib"
    description = "Agg-backed surface that writes frame.png."

    def __init__(self, **options: object) -> None:
        super().__init__(**options)
        self._figure: Figure | None = None
        self._canvas: FigureCanvasAgg | None = None
        self._ax = None
        self._clips: list[PathPatch] = []

    @property
    def dpi(self) -> float:
        return float(self._options.get("dpi", FIGURE_DPI))

    def _px(self, width: float) -> float:
        """Convert a pixel width to Matplotlib points."""

        return float(width) * 72.0 / self.dpi

    def _clip(self, artist) -> None:
        if self._clips:
            artist.set_clip_path(self._clips[-1])

    def _reset(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise SurfaceError(f"Invalid surface size: {width}x{height}")
        dpi = self.dpi
        self._figure = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        self._canvas = FigureCanvasAgg(self._figure)
        ax = self._figure.add_axes((0.0, 0.0, 1.0, 1.0))
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_axis_off()
        self._ax = ax
        self._clips = []

    def _draw(self, commands: list[DrawCommand]) -> None:
        if not commands or not isinstance(commands[0], Clear):
            raise SurfaceError("A frame must start with a Clear command")
        for command in commands:
            handler = getattr(self, f"_draw_{command.command}", None)
            if handler is None:
                raise SurfaceError(f"Unsupported draw command: {command.command}")
            handler(command)
        LOGGER.debug("Rasterised %d commands", len(commands))

    def _draw_clear(self, cmd: Clear) -> None:
        self._reset(cmd.width, cmd.height)

    def _draw_fill_rect(self, cmd: FillRect) -> None:
        patch = Rectangle((cmd.x, cmd.y), cmd.width, cmd.height, facecolor=cmd.fill, linewidth=0)
        self._clip(patch)
        self._ax.add_patch(patch)

    def _draw_circle(self, cmd: Circle) -> None:
        patch = CirclePatch((cmd.x, cmd.y), cmd.radius, facecolor=cmd.fill, linewidth=0)
        self._clip(patch)
        self._ax.add_patch(patch)

    def _draw_push_clip(self, cmd: PushClip) -> None:
        path = MplPath(list(cmd.points) + [cmd.points[0]], closed=True)
        patch = PathPatch(path, transform=self._ax.transData, facecolor="none", edgecolor="none")
        self._clips.append(patch)

    def _draw_pop_clip(self, cmd: PopClip) -> None:
        if self._clips:
            self._clips.pop()

    def _draw_polygon(self, cmd: Polygon) -> None:
        paths = [MplPath(list(ring) + [ring[0]], closed=True) for ring in cmd.rings if ring]
        if not paths:
            return
        path = MplPath.make_compound_path(*paths)
        patch = PathPatch(
            path,
            facecolor=cmd.fill,
            edgecolor=cmd.stroke if cmd.stroke else "none",
            linewidth=self._px(cmd.line_width),
        )
        self._clip(patch)
        self._ax.add_patch(patch)

    def _draw_segment(self, cmd: Segment) -> None:
        line = Line2D(
            [cmd.x0, cmd.x1],
            [cmd.y0, cmd.y1],
            color=cmd.color,
            linewidth=self._px(cmd.width),
            solid_capstyle="round",
        )
        self._clip(line)
        self._ax.add_line(line)

    def _draw_node_box(self, cmd: NodeBox) -> None:
        patch = Rectangle(
            (cmd.x0, cmd.y0),
            cmd.x1 - cmd.x0,
            cmd.y1 - cmd.y0,
            facecolor=cmd.fill,
            edgecolor=cmd.stroke,
            linewidth=self._px(1.0),
        )
        self._ax.add_patch(patch)

    def _draw_link_band(self, cmd: LinkBand) -> None:
        pts = _bezier(cmd)
        segments = np.stack((pts[:-1], pts[1:]), axis=1)
        start = np.asarray(to_rgba(cmd.start_color, cmd.opacity))
        end = np.asarray(to_rgba(cmd.end_color, cmd.opacity))
        t = np.linspace(0.0, 1.0, len(segments))[:, None]
        colors = start + (end - start) * t
        collection = LineCollection(
            segments, colors=colors, linewidths=self._px(cmd.width), capstyle="butt"
        )
        self._ax.add_collection(collection)

    def _draw_text(self, cmd: Text) -> None:
        self._ax.text(
            cmd.x,
            cmd.y,
            cmd.text,
            color=cmd.color,
            fontsize=cmd.size,
            ha=_ANCHORS.get(cmd.anchor, "left"),
            va="center",
        )

    def _draw_tooltip(self, cmd: Tooltip) -> None:
        self._ax.text(
            cmd.x,
            cmd.y,
            cmd.text,
            color="black",
            fontsize=9,
            ha="left",
            va="top",
            bbox={"facecolor": "white", "edgecolor": "#cccccc", "boxstyle": "round,pad=0.4"},
        )

    def to_array(self) -> np.ndarray:
        """Return the last frame as an ``(H, W, 4)`` uint8 RGBA array."""

        if self._canvas is None:
            raise SurfaceError("No frame has been presented yet")
        self._canvas.draw()
        return np.asarray(self._canvas.buffer_rgba()).copy()

    def export(self, *, output_dir: Path) -> FrameBundle:
        if self._figure is None:
            raise SurfaceError("No frame has been presented yet")
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / f"{self.frame_name}.png"
        self._figure.savefig(path, dpi=self.dpi)
        return FrameBundle(output_dir=output_dir, frame=path, assets=(path,))
