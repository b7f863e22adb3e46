# SPDX-License-Identifier: Apache-2.0
"""Scene composition: turn a :class:`SceneState` into an ordered draw list.

``render`` is pure. Every pass starts from a full clear and emits, in this
order: background and stars, the flow overlay (screen-fixed), the sphere clip,
ocean, country polygons, trade arcs, and finally the tooltip.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import matplotlib
import numpy as np
from matplotlib.colors import to_hex, to_rgba

from tradeglobe.geo import CountryFeature, CountrySet
from tradeglobe.geo.spherical import interpolate
from tradeglobe.transform.aggregate import FlowArc
from tradeglobe.transform.aliases import DEFAULT_ALIASES, AliasTable

from .camera import CameraState
from .commands import (
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
from .flow_layout import FlowLayout
from .projection import OrthographicProjection
from .styles import (
    DEFAULT_STAR_SEED,
    DEFAULT_STYLE,
    FLOW_NODE_STROKE,
    STAR_COUNT,
    STAR_MAX_RADIUS,
    GlobeStyle,
)


@dataclass(frozen=True)
class Star:
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class Starfield:
    stars: tuple[Star, ...] = field(default_factory=tuple)

    @classmethod
    def generate(
        cls,
        width: float,
        height: float,
        *,
        count: int = STAR_COUNT,
        seed: int | None = DEFAULT_STAR_SEED,
    ) -> "Starfield":
        rng = np.random.default_rng(seed)
        xs = rng.random(count) * width
        ys = rng.random(count) * height
        radii = rng.random(count) * STAR_MAX_RADIUS
        return cls(
            stars=tuple(
                Star(float(x), float(y), float(r)) for x, y, r in zip(xs, ys, radii)
            )
        )


@dataclass(frozen=True)
class TooltipState:
    x: float
    y: float
    text: str


@dataclass(frozen=True)
class SceneState:
    width: float
    height: float
    camera: CameraState
    countries: CountrySet
    focal_country: str
    arcs: tuple[FlowArc, ...] = field(default_factory=tuple)
    flow: FlowLayout = field(default_factory=FlowLayout)
    starfield: Starfield = field(default_factory=Starfield)
    tooltip: TooltipState | None = None
    style: GlobeStyle = DEFAULT_STYLE
    aliases: AliasTable = field(default=DEFAULT_ALIASES, repr=False, compare=False)

    def projection(self) -> OrthographicProjection:
        return OrthographicProjection.from_camera(self.camera, self.width, self.height)


def flow_panel(
    width: float, height: float, style: GlobeStyle = DEFAULT_STYLE
) -> tuple[float, float, float, float]:
    """Screen rectangle ``(x, y, w, h)`` reserved for the flow overlay."""

    left, top, w, h = style.flow_panel
    return left * width, top * height, w * width, h * height


def _short_label(label: str) -> str:
    return label.split("(")[0].strip() or label


def _flow_commands(layout: FlowLayout, origin: tuple[float, float], style: GlobeStyle):
    if layout.is_empty:
        return []
    placed = layout.translate(*origin)
    out: list[DrawCommand] = []
    for link in placed.links:
        out.append(
            LinkBand(
                p0=link.p0,
                c1=link.c1,
                c2=link.c2,
                p1=link.p1,
                width=max(1.0, link.width),
                start_color=link.source_color,
                end_color=link.target_color,
                opacity=style.flow_link_opacity,
            )
        )
    for node in placed.nodes:
        out.append(
            NodeBox(
                x0=node.x0,
                y0=node.y0,
                x1=node.x1,
                y1=node.y1,
                fill=node.color,
                stroke=FLOW_NODE_STROKE,
                label=node.id,
            )
        )
        mid = (node.y0 + node.y1) / 2.0
        if node.kind == "root":
            out.append(Text(node.x1 + 6.0, mid, node.id, style.flow_text, anchor="start"))
        else:
            out.append(
                Text(node.x0 - 6.0, mid, _short_label(node.id), style.flow_text, anchor="end")
            )
    return out


def _country_commands(
    state: SceneState, projection: OrthographicProjection
) -> list[DrawCommand]:
    style = state.style
    line_width = style.border_width(state.camera.zoom)
    focal = state.aliases.to_geo(state.focal_country)
    out: list[DrawCommand] = []
    for feature in state.countries:
        rings = [
            piece
            for polygon in feature.polygons()
            for piece in projection.clip_polygon(polygon)
            if len(piece) >= 3
        ]
        if not rings:
            continue
        fill = style.focal if feature.name == focal else style.land
        out.append(
            Polygon(
                rings=tuple(rings),
                fill=fill,
                stroke=style.border,
                line_width=line_width,
                name=feature.name,
            )
        )
    return out


def _mix(a: np.ndarray, b: np.ndarray, t: float) -> str:
    return to_hex(tuple(np.clip(a + (b - a) * t, 0.0, 1.0)))


def arc_segments(
    arc: FlowArc, projection: OrthographicProjection, style: GlobeStyle = DEFAULT_STYLE
) -> list[Segment]:
    """Split one arc into short great-circle segments with colour and taper.

    Segment ``i`` of ``n`` is coloured between the base colour (origin) and
    the colormap colour of the arc weight (destination), and widens from
    ``arc_min_width`` to a width proportional to the weight. Segments with
    either endpoint on the far hemisphere are skipped.
    """

    n = max(1, int(style.arc_segments))
    points = interpolate(arc.origin_coord, arc.dest_coord, n)
    xy, visible = projection.project_many(points)
    weight = min(1.0, max(0.0, arc.normalized_weight))
    start = np.asarray(to_rgba(style.arc_base))
    end = np.asarray(matplotlib.colormaps[style.arc_cmap](0.25 + 0.75 * weight))
    end_width = style.arc_min_width + (style.arc_max_width - style.arc_min_width) * weight
    out: list[Segment] = []
    for i in range(n):
        if not (visible[i] and visible[i + 1]):
            continue
        t = (i + 0.5) / n
        out.append(
            Segment(
                x0=float(xy[i, 0]),
                y0=float(xy[i, 1]),
                x1=float(xy[i + 1, 0]),
                y1=float(xy[i + 1, 1]),
                color=_mix(start, end, t),
                width=style.arc_min_width + (end_width - style.arc_min_width) * t,
            )
        )
    return out


def render(state: SceneState) -> list[DrawCommand]:
    """Compose one full frame for ``state``."""

    style = state.style
    commands: list[DrawCommand] = [Clear(state.width, state.height)]
    if state.width <= 0 or state.height <= 0:
        return commands

    commands.append(FillRect(0.0, 0.0, state.width, state.height, style.background))
    for star in state.starfield.stars:
        commands.append(Circle(star.x, star.y, star.radius, style.star_fill))

    panel_x, panel_y, _, _ = flow_panel(state.width, state.height, style)
    commands.extend(_flow_commands(state.flow, (panel_x, panel_y), style))

    projection = state.projection()
    outline = tuple(projection.sphere_outline())
    commands.append(PushClip(outline))
    commands.append(Polygon(rings=(outline,), fill=style.ocean))
    commands.extend(_country_commands(state, projection))
    for arc in state.arcs:
        commands.extend(arc_segments(arc, projection, style))
    commands.append(PopClip())

    if state.tooltip is not None:
        commands.append(Tooltip(state.tooltip.x, state.tooltip.y, state.tooltip.text))
    return commands


def hit_test(state: SceneState, x: float, y: float) -> CountryFeature | None:
    """Country under the screen point, or ``None`` when off-globe or over sea."""

    if state.width <= 0 or state.height <= 0:
        return None
    lonlat = state.projection().invert(x, y)
    if lonlat is None:
        return None
    return state.countries.locate(*lonlat)


__all__ = [
    "SceneState",
    "Star",
    "Starfield",
    "TooltipState",
    "arc_segments",
    "flow_panel",
    "hit_test",
    "render",
]
