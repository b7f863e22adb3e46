# SPDX-License-Identifier: Apache-2.0
"""Draw commands emitted by the scene compositor.

Commands are plain immutable records in screen pixels (origin top-left, y
down). Surfaces replay them in order; nothing here touches pixels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

Point = tuple[float, float]


@dataclass(frozen=True)
class Clear:
    command: ClassVar[str] = "clear"
    width: float
    height: float


@dataclass(frozen=True)
class FillRect:
    command: ClassVar[str] = "fill_rect"
    x: float
    y: float
    width: float
    height: float
    fill: str


@dataclass(frozen=True)
class Circle:
    command: ClassVar[str] = "circle"
    x: float
    y: float
    radius: float
    fill: str


@dataclass(frozen=True)
class PushClip:
    command: ClassVar[str] = "push_clip"
    points: tuple[Point, ...]


@dataclass(frozen=True)
class PopClip:
    command: ClassVar[str] = "pop_clip"


@dataclass(frozen=True)
class Polygon:
    command: ClassVar[str] = "polygon"
    rings: tuple[tuple[Point, ...], ...]
    fill: str
    stroke: str | None = None
    line_width: float = 0.0
    name: str | None = None


@dataclass(frozen=True)
class Segment:
    command: ClassVar[str] = "segment"
    x0: float
    y0: float
    x1: float
    y1: float
    color: str
    width: float


@dataclass(frozen=True)
class NodeBox:
    command: ClassVar[str] = "node_box"
    x0: float
    y0: float
    x1: float
    y1: float
    fill: str
    stroke: str
    label: str


@dataclass(frozen=True)
class LinkBand:
    """Horizontal cubic Bezier ``p0, c1, c2, p1`` stroked at ``width``."""

    command: ClassVar[str] = "link_band"
    p0: Point
    c1: Point
    c2: Point
    p1: Point
    width: float
    start_color: str
    end_color: str
    opacity: float


@dataclass(frozen=True)
class Text:
    command: ClassVar[str] = "text"
    x: float
    y: float
    text: str
    color: str
    size: float = 10.0
    anchor: str = "start"


@dataclass(frozen=True)
class Tooltip:
    command: ClassVar[str] = "tooltip"
    x: float
    y: float
    text: str


DrawCommand = Union[
    Clear,
    FillRect,
    Circle,
    PushClip,
    PopClip,
    Polygon,
    Segment,
    NodeBox,
    LinkBand,
    Text,
    Tooltip,
]

__all__ = [
    "Circle",
    "Clear",
    "DrawCommand",
    "FillRect",
    "LinkBand",
    "NodeBox",
    "Point",
    "Polygon",
    "PopClip",
    "PushClip",
    "Segment",
    "Text",
    "Tooltip",
]
