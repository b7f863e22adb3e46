# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import numpy as np

from tests.helpers import ring_feature, world
from tradeglobe.geo import load_countries
from tradeglobe.transform import aggregate_arcs, aggregate_category_tree
from tradeglobe.transform.aggregate import FlowArc
from tradeglobe.visualization.camera import CameraState
from tradeglobe.visualization.commands import (
    Circle,
    Clear,
    FillRect,
    LinkBand,
    NodeBox,
    Polygon,
    PopClip,
    PushClip,
    Segment,
    Tooltip,
)
from tradeglobe.visualization.flow_layout import layout_flows
from tradeglobe.visualization.projection import OrthographicProjection
from tradeglobe.visualization.scene import (
    SceneState,
    Starfield,
    TooltipState,
    arc_segments,
    hit_test,
    render,
)
from tradeglobe.visualization.styles import DEFAULT_STYLE

FOOD = "Food and live animals (0)"


def _state(countries, records, **kwargs) -> SceneState:
    arcs = tuple(aggregate_arcs(records, "Ireland", FOOD, "2023", countries=countries))
    flow = layout_flows(aggregate_category_tree(records, "Ireland", "2023"), 288, 300)
    defaults = dict(
        width=960,
        height=600,
        camera=CameraState.centered_on(-8.0, 53.0),
        countries=countries,
        focal_country="Ireland",
        arcs=arcs,
        flow=flow,
        starfield=Starfield.generate(960, 600, count=5, seed=1),
    )
    defaults.update(kwargs)
    return SceneState(**defaults)


def _first(commands, kind) -> int:
    return next(i for i, c in enumerate(commands) if isinstance(c, kind))


def test_render_paints_layers_in_order(countries, records) -> None:
    commands = render(_state(countries, records, tooltip=TooltipState(5, 5, "France")))
    assert isinstance(commands[0], Clear)
    assert isinstance(commands[1], FillRect)
    assert all(isinstance(c, Circle) for c in commands[2:7])
    band, node = _first(commands, LinkBand), _first(commands, NodeBox)
    clip = _first(commands, PushClip)
    assert 7 <= band < node < clip
    ocean = commands[clip + 1]
    assert isinstance(ocean, Polygon) and ocean.fill == DEFAULT_STYLE.ocean
    first_segment = _first(commands, Segment)
    last_polygon = max(i for i, c in enumerate(commands) if isinstance(c, Polygon))
    assert last_polygon < first_segment < _first(commands, PopClip)
    assert isinstance(commands[-1], Tooltip)


def test_render_highlights_focal_country(countries, records) -> None:
    polygons = {c.name: c for c in render(_state(countries, records)) if isinstance(c, Polygon)}
    assert polygons["Ireland"].fill == DEFAULT_STYLE.focal
    assert polygons["France"].fill == DEFAULT_STYLE.land
    assert polygons["France"].line_width == DEFAULT_STYLE.border_width(1.0)


def test_render_without_size_only_clears(countries, records) -> None:
    assert render(_state(countries, records, width=0)) == [Clear(0, 600)]


def test_render_is_pure(countries, records) -> None:
    state = _state(countries, records)
    assert render(state) == render(state)


def test_empty_flow_is_omitted(countries, records) -> None:
    empty_flow = layout_flows(aggregate_category_tree([], "Ireland", "2023"), 288, 300)
    commands = render(_state(countries, [], flow=empty_flow))
    assert not any(isinstance(c, (LinkBand, NodeBox, Segment)) for c in commands)


def test_arc_segments_taper_and_skip_far_side() -> None:
    proj = OrthographicProjection(rotation=(0.0, 0.0, 0.0), scale=100.0, translate=(0, 0))
    arc = FlowArc("A", "B", (0.0, 0.0), (150.0, 0.0), 10.0, 1.0)
    segments = arc_segments(arc, proj)
    assert 0 < len(segments) < DEFAULT_STYLE.arc_segments
    assert segments[0].width < segments[-1].width
    assert segments[0].width > DEFAULT_STYLE.arc_min_width

    front = FlowArc("A", "B", (0.0, 0.0), (30.0, 10.0), 10.0, 0.0)
    thin = arc_segments(front, proj)
    assert len(thin) == DEFAULT_STYLE.arc_segments
    assert {s.width for s in thin} == {DEFAULT_STYLE.arc_min_width}


def test_hit_test(countries, records) -> None:
    state = _state(countries, records)
    x, y = state.projection().project(3.0, 46.0)
    assert hit_test(state, x, y).name == "France"
    assert hit_test(state, 1.0, 1.0) is None
    ox, oy = state.projection().project(-30.0, 40.0)
    assert hit_test(state, ox, oy) is None


def test_starfield_is_seeded_and_in_bounds() -> None:
    a = Starfield.generate(100, 50, count=20, seed=7)
    b = Starfield.generate(100, 50, count=20, seed=7)
    assert a == b
    assert len(a.stars) == 20
    assert all(0 <= s.x <= 100 and 0 <= s.y <= 50 for s in a.stars)


def test_focal_fill_accepts_trade_table_names(countries, records) -> None:
    camera = CameraState.centered_on(-97.0, 39.0)
    state = _state(countries, records, focal_country="USA", camera=camera)
    polygons = {c.name: c for c in render(state) if isinstance(c, Polygon)}
    assert polygons["United States of America"].fill == DEFAULT_STYLE.focal
    assert polygons["Ireland"].fill == DEFAULT_STYLE.land


def test_country_behind_the_limb_is_clipped_not_flattened() -> None:
    band = [[float(lon), -1.0] for lon in range(60, 301, 10)]
    band += [[float(lon), 1.0] for lon in range(300, 59, -10)]
    countries = load_countries(world(ring_feature("Band", band + [band[0]])))
    state = _state(countries, [], camera=CameraState(rotation=(0.0, 0.0, 0.0)))
    (polygon,) = [c for c in render(state) if isinstance(c, Polygon) and c.name == "Band"]
    radius = state.projection().radius
    for ring in polygon.rings:
        zs = np.asarray(ring)[:, 1] - state.height / 2.0
        assert np.abs(zs).max() < 0.05 * radius
