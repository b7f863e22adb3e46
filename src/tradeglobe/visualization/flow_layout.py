# SPDX-License-Identifier: Apache-2.0
"""Two-column flow (Sankey-style) layout for the category tree."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

import matplotlib
from matplotlib.colors import to_hex

from tradeglobe.transform.aggregate import CategoryTree

from .styles import FLOW_CMAP, FLOW_NODE_PADDING, FLOW_NODE_WIDTH, FOCAL_FILL

OTHER_COLOR = "#9e9e9e"


@dataclass(frozen=True)
class FlowNode:
    id: str
    kind: str
    value: float
    x0: float
    y0: float
    x1: float
    y1: float
    color: str

    @property
    def height(self) -> float:
        return self.y1 - self.y0


@dataclass(frozen=True)
class FlowLink:
    source: str
    target: str
    value: float
    width: float
    p0: tuple[float, float]
    c1: tuple[float, float]
    c2: tuple[float, float]
    p1: tuple[float, float]
    source_color: str
    target_color: str


@dataclass(frozen=True)
class FlowLayout:
    nodes: tuple[FlowNode, ...] = field(default_factory=tuple)
    links: tuple[FlowLink, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "FlowLayout":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def translate(self, dx: float, dy: float) -> "FlowLayout":
        def shift(p: tuple[float, float]) -> tuple[float, float]:
            return (p[0] + dx, p[1] + dy)

        nodes = tuple(
            replace(n, x0=n.x0 + dx, x1=n.x1 + dx, y0=n.y0 + dy, y1=n.y1 + dy)
            for n in self.nodes
        )
        links = tuple(
            replace(
                link,
                p0=shift(link.p0),
                c1=shift(link.c1),
                c2=shift(link.c2),
                p1=shift(link.p1),
            )
            for link in self.links
        )
        return FlowLayout(nodes=nodes, links=links)


def _palette(name: str, count: int) -> list[str]:
    cmap = matplotlib.colormaps[name]
    size = getattr(cmap, "N", 256)
    if size <= 20:
        return [to_hex(cmap(i % size)) for i in range(count)]
    if count == 1:
        return [to_hex(cmap(0.5))]
    return [to_hex(cmap(i / max(count - 1, 1))) for i in range(count)]


def layout_flows(
    tree: CategoryTree,
    width: float,
    height: float,
    *,
    node_width: float = FLOW_NODE_WIDTH,
    node_padding: float = FLOW_NODE_PADDING,
    cmap: str = FLOW_CMAP,
    root_color: str = FOCAL_FILL,
) -> FlowLayout:
    """Lay out ``tree`` with the root on the left and categories on the right.

    Node heights and link widths share one value-to-pixel scale, so every
    category box is exactly as tall as the band feeding it and the root is as
    tall as all bands together. Returns an empty layout when there is nothing
    to connect or no room to draw.
    """

    if len(tree.nodes) <= 1 or not tree.links:
        return FlowLayout.empty()
    root = tree.root
    if root is None:
        return FlowLayout.empty()
    by_id = {n.id: n for n in tree.nodes}
    targets = [
        (by_id[link.target], link)
        for link in tree.links
        if link.source == root.id and link.target in by_id and link.value > 0
    ]
    total = sum(link.value for _, link in targets)
    if not targets or total <= 0 or width <= 2 * node_width or height <= 0:
        return FlowLayout.empty()

    count = len(targets)
    padding = node_padding if count == 1 else min(node_padding, height / (count - 1))
    ky = (height - (count - 1) * padding) / total
    if ky <= 0:
        return FlowLayout.empty()

    palette = _palette(cmap, count)
    root_height = total * ky
    root_y0 = (height - root_height) / 2.0
    root_node = FlowNode(
        id=root.id,
        kind=root.kind,
        value=total,
        x0=0.0,
        y0=root_y0,
        x1=node_width,
        y1=root_y0 + root_height,
        color=root_color,
    )

    extent = root_height + (count - 1) * padding
    y = (height - extent) / 2.0
    right_x0 = width - node_width
    mid_x = (node_width + right_x0) / 2.0
    nodes = [root_node]
    links: list[FlowLink] = []
    source_y = root_y0
    for index, (target, link) in enumerate(targets):
        band = link.value * ky
        color = OTHER_COLOR if target.kind == "other" else palette[index]
        node = FlowNode(
            id=target.id,
            kind=target.kind,
            value=link.value,
            x0=right_x0,
            y0=y,
            x1=width,
            y1=y + band,
            color=color,
        )
        nodes.append(node)
        sy = source_y + band / 2.0
        ty = y + band / 2.0
        links.append(
            FlowLink(
                source=root_node.id,
                target=node.id,
                value=link.value,
                width=band,
                p0=(node_width, sy),
                c1=(mid_x, sy),
                c2=(mid_x, ty),
                p1=(right_x0, ty),
                source_color=root_color,
                target_color=color,
            )
        )
        source_y += band
        y += band + padding
    return FlowLayout(nodes=tuple(nodes), links=tuple(links))


__all__ = ["FlowLayout", "FlowLink", "FlowNode", "layout_flows"]
