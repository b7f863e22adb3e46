# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import pytest

from tradeglobe.geo import DataFormatError
from tradeglobe.visualization import (
    Click,
    DragMove,
    DragStart,
    GlobeView,
    InteractionRouter,
    PointerLeave,
    PointerMove,
    Resize,
    Wheel,
)
from tradeglobe.visualization.commands import Clear, Polygon, Segment, Tooltip

FOOD = "Food and live animals (0)"


@pytest.fixture()
def view(records, countries):
    selected: list[str] = []
    v = GlobeView(
        records,
        countries,
        category=FOOD,
        year="2023",
        on_country_select=selected.append,
        star_seed=3,
    )
    v.selected = selected  # type: ignore[attr-defined]
    v.mount()
    return v


def _screen(view, lon, lat):
    xy = view.scene().projection().project(lon, lat)
    assert xy is not None
    return xy


def test_mount_centres_on_focal_country(view, countries) -> None:
    lon, lat = countries.find_by_name("Ireland").centroid
    assert _screen(view, lon, lat) == pytest.approx((480.0, 300.0))
    assert view.frame_count == 1
    assert len(view.arcs) == 2
    assert any(isinstance(c, Segment) for c in view.last_frame)


def test_click_on_france_selects_once(view) -> None:
    router = InteractionRouter(view)
    result = router.dispatch(Click(*_screen(view, 3.0, 46.0)))
    assert result.selected == "France"
    assert result.redrawn
    assert view.selected == ["France"]


def test_click_reports_trade_table_name(view) -> None:
    result = InteractionRouter(view).dispatch(Click(*_screen(view, -2.0, 54.0)))
    assert result.selected == "Great Britain"


def test_click_on_sea_or_space_selects_nothing(view) -> None:
    router = InteractionRouter(view)
    router.dispatch(Click(*_screen(view, -30.0, 40.0)))
    router.dispatch(Click(2.0, 2.0))
    assert view.selected == []


def test_drag_and_wheel_update_camera(view) -> None:
    router = InteractionRouter(view)
    before = view.camera
    assert router.dispatch(DragStart(10, 10)).prevent_default
    router.dispatch(DragMove(50.0, 0.0))
    assert view.camera.rotation[0] == pytest.approx(before.rotation[0] + 10.0)
    result = router.dispatch(Wheel(-500.0))
    assert result.prevent_default
    assert view.camera.zoom == pytest.approx(2.0)
    for _ in range(10):
        router.dispatch(Wheel(-5000.0))
    assert view.camera.zoom == view.camera_config.max_zoom
    assert view.frame_count == 14


def test_hover_shows_and_hides_tooltip(view) -> None:
    router = InteractionRouter(view)
    x, y = _screen(view, 3.0, 46.0)
    assert router.dispatch(PointerMove(x, y)).hovered == "France"
    tip = view.last_frame[-1]
    assert isinstance(tip, Tooltip)
    assert (tip.x, tip.y, tip.text) == (x + 10.0, y + 10.0, "France")
    router.dispatch(PointerLeave())
    assert not any(isinstance(c, Tooltip) for c in view.last_frame)


def test_resize_redraws_at_new_size(view) -> None:
    router = InteractionRouter(view)
    router.dispatch(Resize(400, 300))
    assert view.last_frame[0] == Clear(400.0, 300.0)
    assert all(s.x <= 400 and s.y <= 300 for s in view.starfield.stars)


def test_set_filter_recomputes_arcs(view) -> None:
    view.set_filter("Machinery and transport equipment (7)", "2023")
    assert [a.destination for a in view.arcs] == ["United States of America"]
    view.set_filter(FOOD, "1999")
    assert view.arcs == ()
    assert any(isinstance(c, Polygon) for c in view.last_frame)


def test_unknown_event_raises(view) -> None:
    with pytest.raises(TypeError):
        InteractionRouter(view).dispatch("tap")  # type: ignore[arg-type]


def test_from_sources(records_path, world_path) -> None:
    view = GlobeView.from_sources(records_path, world_path, category=FOOD, year="2023")
    view.mount()
    assert {a.destination for a in view.arcs} == {"United States of America", "France"}


def test_from_sources_rejects_bad_boundaries(tmp_path, records_path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text('{"type": "Topology", "arcs": [], "objects": {}}', encoding="utf-8")
    with pytest.raises(DataFormatError):
        GlobeView.from_sources(records_path, bad)
