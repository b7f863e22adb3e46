# SPDX-License-Identifier: Apache-2.0
"""Colour and size defaults for the globe scene."""

from __future__ import annotations

from dataclasses import dataclass

BACKGROUND_FILL = "#000000"
STAR_FILL = "#ffffff"
STAR_COUNT = 200
STAR_MAX_RADIUS = 1.5
DEFAULT_STAR_SEED = 20231

OCEAN_FILL = "#87CEEB"
LAND_FILL = "#f0e4d7"
FOCAL_FILL = "#009A49"
BORDER_STROKE = "#00000080"
BORDER_WIDTH_PER_ZOOM = 0.2
MIN_BORDER_WIDTH = 0.4

DEFAULT_ARC_CMAP = "YlOrRd"
ARC_BASE_COLOR = "#ffe08a"
ARC_SEGMENTS = 64
ARC_MIN_WIDTH = 0.5
ARC_MAX_WIDTH = 6.0

FLOW_NODE_WIDTH = 20.0
FLOW_NODE_PADDING = 10.0
FLOW_CMAP = "tab10"
FLOW_NODE_STROKE = "#000000"
FLOW_LINK_OPACITY = 0.7
FLOW_TEXT_COLOR = "#ffffff"
# Overlay panel as fractions of the viewport: (left, top, width, height).
FLOW_PANEL = (0.02, 0.05, 0.3, 0.5)

TOOLTIP_OFFSET = 10.0
FIGURE_DPI = 100


@dataclass(frozen=True)
class GlobeStyle:
    background: str = BACKGROUND_FILL
    star_fill: str = STAR_FILL
    ocean: str = OCEAN_FILL
    land: str = LAND_FILL
    focal: str = FOCAL_FILL
    border: str = BORDER_STROKE
    border_per_zoom: float = BORDER_WIDTH_PER_ZOOM
    min_border: float = MIN_BORDER_WIDTH
    arc_cmap: str = DEFAULT_ARC_CMAP
    arc_base: str = ARC_BASE_COLOR
    arc_segments: int = ARC_SEGMENTS
    arc_min_width: float = ARC_MIN_WIDTH
    arc_max_width: float = ARC_MAX_WIDTH
    flow_cmap: str = FLOW_CMAP
    flow_panel: tuple[float, float, float, float] = FLOW_PANEL
    flow_link_opacity: float = FLOW_LINK_OPACITY
    flow_text: str = FLOW_TEXT_COLOR
    tooltip_offset: float = TOOLTIP_OFFSET

    def border_width(self, zoom: float) -> float:
        return max(self.min_border, self.border_per_zoom * zoom)


DEFAULT_STYLE = GlobeStyle()
