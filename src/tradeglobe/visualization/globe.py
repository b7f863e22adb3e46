# SPDX-License-Identifier: Apache-2.0
"""The globe view: data, camera and surface wired into one redraw cycle."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Protocol, Sequence

from tradeglobe.geo import CountryFeature, CountrySet, load_countries
from tradeglobe.transform.aggregate import (
    OTHER_THRESHOLD,
    UNIT_SCALE,
    CategoryTree,
    FlowArc,
    aggregate_arcs,
    aggregate_category_tree,
)
from tradeglobe.transform.aliases import DEFAULT_ALIASES, AliasTable
from tradeglobe.transform.records import TradeRecord, load_records
from tradeglobe.utils.cli_helpers import env_int

from .camera import CameraAction, CameraConfig, CameraState, reduce_camera
from .commands import DrawCommand
from .flow_layout import FlowLayout, layout_flows
from .scene import (
    SceneState,
    Starfield,
    TooltipState,
    flow_panel,
    hit_test,
    render,
)
from .styles import DEFAULT_STAR_SEED, DEFAULT_STYLE, GlobeStyle

LOGGER = logging.getLogger(__name__)


class SupportsPresent(Protocol):
    def present(self, commands: Sequence[DrawCommand]) -> None: ...


class GlobeView:
    """Owns everything one interactive globe needs between events.

    Inputs (records, filter, boundaries) are treated as immutable; derived
    arcs, category tree and flow layout are rebuilt whenever the filter or the
    viewport changes. Every :meth:`redraw` renders a complete frame and hands
    it to the surface before returning.
    """

    def __init__(
        self,
        records: Iterable[TradeRecord],
        countries: CountrySet,
        *,
        focal_country: str = "Ireland",
        category: str = "",
        year: str = "",
        width: float = 960,
        height: float = 600,
        surface: SupportsPresent | None = None,
        on_country_select: Callable[[str], Any] | None = None,
        aliases: AliasTable = DEFAULT_ALIASES,
        camera_config: CameraConfig | None = None,
        style: GlobeStyle = DEFAULT_STYLE,
        star_seed: int | None = None,
        threshold: float = OTHER_THRESHOLD,
        unit_scale: float = UNIT_SCALE,
    ) -> None:
        self.records: tuple[TradeRecord, ...] = tuple(records)
        self.countries = countries
        self.aliases = aliases
        self.focal_country = aliases.to_geo(focal_country)
        self.category = category
        self.year = year
        self.width = float(width)
        self.height = float(height)
        self.surface = surface
        self.on_country_select = on_country_select
        self.style = style
        self.threshold = threshold
        self.unit_scale = unit_scale
        self.star_seed = (
            star_seed if star_seed is not None else env_int("STAR_SEED", DEFAULT_STAR_SEED)
        )
        self.camera_config = camera_config or self._default_camera_config()
        self.camera = CameraState.initial(self.camera_config)
        self.arcs: tuple[FlowArc, ...] = ()
        self.tree = CategoryTree()
        self.flow = FlowLayout.empty()
        self.starfield = Starfield()
        self.tooltip: TooltipState | None = None
        self.last_frame: list[DrawCommand] = []
        self.frame_count = 0

    @classmethod
    def from_sources(
        cls,
        records_path: str | Path,
        boundaries: Mapping[str, Any] | str | Path,
        *,
        object_name: str = "countries",
        name_property: str = "name",
        **kwargs: Any,
    ) -> "GlobeView":
        """Load records and boundaries, raising ``DataFormatError`` before any draw."""

        countries = load_countries(
            boundaries, object_name=object_name, name_property=name_property
        )
        return cls(load_records(records_path), countries, **kwargs)

    def _default_camera_config(self) -> CameraConfig:
        focal = self.countries.find_by_name(self.focal_country)
        if focal is None:
            return CameraConfig()
        lon, lat = focal.centroid
        return CameraConfig(initial_rotation=CameraState.centered_on(lon, lat).rotation)

    # -- derived data -----------------------------------------------------

    def recompute(self) -> None:
        self.arcs = tuple(
            aggregate_arcs(
                self.records,
                self.focal_country,
                self.category,
                self.year,
                countries=self.countries,
                aliases=self.aliases,
                unit_scale=self.unit_scale,
            )
        )
        self.tree = aggregate_category_tree(
            self.records,
            self.focal_country,
            self.year,
            threshold=self.threshold,
            unit_scale=self.unit_scale,
        )
        self.relayout()
        LOGGER.debug(
            "Filter (%r, %r): %d arcs, %d categories",
            self.category,
            self.year,
            len(self.arcs),
            max(0, len(self.tree.nodes) - 1),
        )

    def relayout(self) -> None:
        _, _, panel_w, panel_h = flow_panel(self.width, self.height, self.style)
        self.flow = layout_flows(
            self.tree, panel_w, panel_h, cmap=self.style.flow_cmap, root_color=self.style.focal
        )

    # -- lifecycle --------------------------------------------------------

    def mount(self) -> list[DrawCommand]:
        self.starfield = Starfield.generate(self.width, self.height, seed=self.star_seed)
        self.recompute()
        return self.redraw()

    def set_filter(self, category: str, year: str) -> list[DrawCommand]:
        self.category = category
        self.year = str(year)
        self.recompute()
        return self.redraw()

    def resize(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)
        self.starfield = Starfield.generate(self.width, self.height, seed=self.star_seed)
        self.tooltip = None
        self.relayout()

    def apply_camera(self, action: CameraAction) -> CameraState:
        self.camera = reduce_camera(self.camera, action, self.camera_config)
        return self.camera

    # -- rendering --------------------------------------------------------

    def scene(self) -> SceneState:
        return SceneState(
            width=self.width,
            height=self.height,
            camera=self.camera,
            countries=self.countries,
            focal_country=self.focal_country,
            arcs=self.arcs,
            flow=self.flow,
            starfield=self.starfield,
            tooltip=self.tooltip,
            style=self.style,
            aliases=self.aliases,
        )

    def redraw(self) -> list[DrawCommand]:
        commands = render(self.scene())
        self.last_frame = commands
        self.frame_count += 1
        if self.surface is not None:
            self.surface.present(commands)
        return commands

    # -- hit testing ------------------------------------------------------

    def hit_test(self, x: float, y: float) -> CountryFeature | None:
        return hit_test(self.scene(), x, y)

    def show_tooltip(self, x: float, y: float, text: str) -> None:
        offset = self.style.tooltip_offset
        self.tooltip = TooltipState(x + offset, y + offset, text)

    def hide_tooltip(self) -> None:
        self.tooltip = None

    def select(self, feature: CountryFeature) -> str:
        """Report ``feature`` to the host using the trade table's name for it."""

        name = self.aliases.to_trade(feature.name)
        if self.on_country_select is not None:
            self.on_country_select(name)
        return name


__all__ = ["GlobeView", "SupportsPresent"]
