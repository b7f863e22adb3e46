# SPDX-License-Identifier: Apache-2.0
"""Turn trade records into weighted arcs and a category flow tree.

Both aggregations are pure: the same table and filter always produce the
same output, in the same order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from tradeglobe.geo import CountryFeature, CountrySet

from .aliases import DEFAULT_ALIASES, AliasTable
from .records import TOTAL_SENTINEL, TradeRecord

LOGGER = logging.getLogger(__name__)

# Source values are thousands of currency units.
UNIT_SCALE = 1000.0
OTHER_THRESHOLD = 0.02
OTHER_LABEL = "Other"


@dataclass(frozen=True)
class FlowArc:
    origin: str
    destination: str
    origin_coord: tuple[float, float]
    dest_coord: tuple[float, float]
    raw_value: float
    normalized_weight: float


@dataclass(frozen=True)
class CategoryNode:
    id: str
    value: float
    kind: str = "category"  # root | category | other


@dataclass(frozen=True)
class CategoryLink:
    source: str
    target: str
    value: float


@dataclass(frozen=True)
class CategoryTree:
    nodes: tuple[CategoryNode, ...] = field(default_factory=tuple)
    links: tuple[CategoryLink, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    @property
    def root(self) -> CategoryNode | None:
        for node in self.nodes:
            if node.kind == "root":
                return node
        return None

    def node(self, node_id: str) -> CategoryNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


def aggregate_arcs(
    records: Iterable[TradeRecord],
    focal_country: str,
    category: str,
    year: str,
    *,
    countries: CountrySet,
    aliases: AliasTable = DEFAULT_ALIASES,
    unit_scale: float = UNIT_SCALE,
) -> list[FlowArc]:
    """Build one arc per destination country for the ``(category, year)`` filter.

    Records whose country has no boundary feature are dropped without error.
    Records resolving to the same feature (duplicates or aliases such as the
    constituent countries of the United Kingdom) are summed into one arc.
    """

    origin = countries.find_by_name(aliases.to_geo(focal_country))
    if origin is None:
        LOGGER.debug("Focal country '%s' not found in boundary data", focal_country)
        return []

    totals: dict[str, float] = {}
    destinations: dict[str, CountryFeature] = {}
    misses = 0
    for record in records:
        if record.commodity_group != category or record.year != year:
            continue
        geo_name = aliases.to_geo(record.country)
        feature = countries.find_by_name(geo_name)
        if feature is None:
            misses += 1
            continue
        if feature.name == origin.name:
            continue
        destinations.setdefault(feature.name, feature)
        totals[feature.name] = totals.get(feature.name, 0.0) + record.value * unit_scale

    if misses:
        LOGGER.debug("Dropped %d records without a boundary match", misses)
    if not totals:
        return []

    peak = max(totals.values())
    arcs: list[FlowArc] = []
    for name, raw in totals.items():
        weight = raw / peak if peak > 0 else 0.0
        dest = destinations[name]
        arcs.append(
            FlowArc(
                origin=origin.name,
                destination=name,
                origin_coord=origin.centroid,
                dest_coord=dest.centroid,
                raw_value=raw,
                normalized_weight=min(1.0, max(0.0, weight)),
            )
        )
    return arcs


def aggregate_category_tree(
    records: Iterable[TradeRecord],
    focal_country: str,
    year: str,
    *,
    partner: str | None = None,
    threshold: float = OTHER_THRESHOLD,
    total_label: str = TOTAL_SENTINEL,
    unit_scale: float = UNIT_SCALE,
) -> CategoryTree:
    """Group export value by commodity for ``year`` into a root-to-category tree.

    Categories below ``threshold`` of the grand total are merged into a single
    ``"Other"`` node. Categories with a non-positive total are left out.
    """

    groups: dict[str, float] = {}
    for record in records:
        if record.year != year or record.commodity_group == total_label:
            continue
        if partner is not None and record.country != partner:
            continue
        if not record.commodity_group:
            continue
        groups[record.commodity_group] = (
            groups.get(record.commodity_group, 0.0) + record.value * unit_scale
        )

    groups = {k: v for k, v in groups.items() if v > 0}
    total = sum(groups.values())
    if not groups or total <= 0:
        return CategoryTree()

    kept: list[tuple[str, float]] = []
    other = 0.0
    merged = 0
    for label, value in groups.items():
        if value / total < threshold or label == OTHER_LABEL:
            other += value
            merged += 1
        else:
            kept.append((label, value))
    kept.sort(key=lambda item: (-item[1], item[0]))

    nodes = [CategoryNode(id=focal_country, value=total, kind="root")]
    links: list[CategoryLink] = []
    for label, value in kept:
        nodes.append(CategoryNode(id=label, value=value))
        links.append(CategoryLink(source=focal_country, target=label, value=value))
    if merged:
        nodes.append(CategoryNode(id=OTHER_LABEL, value=other, kind="other"))
        links.append(CategoryLink(source=focal_country, target=OTHER_LABEL, value=other))
    return CategoryTree(nodes=tuple(nodes), links=tuple(links))


__all__ = [
    "CategoryLink",
    "CategoryNode",
    "CategoryTree",
    "FlowArc",
    "OTHER_LABEL",
    "OTHER_THRESHOLD",
    "UNIT_SCALE",
    "aggregate_arcs",
    "aggregate_category_tree",
]
