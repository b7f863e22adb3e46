# SPDX-License-Identifier: Apache-2.0
"""CLI handlers for rendering the trade globe and dumping its derived data."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

from tradeglobe.geo import DataFormatError, load_countries
from tradeglobe.transform import (
    aggregate_arcs,
    aggregate_category_tree,
    category_options,
    load_records,
    years,
)
from tradeglobe.utils.cli_helpers import apply_verbosity, configure_logging_from_env
from tradeglobe.utils.io_utils import write_json
from tradeglobe.utils.serialize import to_obj
from tradeglobe.visualization.flow_layout import layout_flows
from tradeglobe.visualization.globe import GlobeView
from tradeglobe.visualization.interaction import (
    Click,
    DragMove,
    DragStart,
    InteractionRouter,
    PointerMove,
    Wheel,
)
from tradeglobe.visualization.renderers import get as get_surface
from tradeglobe.visualization.renderers import slugs


def _prepare(ns: Any) -> None:
    apply_verbosity(ns)
    configure_logging_from_env()


def _load_records(ns: Any):
    try:
        return load_records(ns.records)
    except FileNotFoundError as exc:
        raise SystemExit(f"Records file not found: {ns.records}") from exc


def _load(ns: Any):
    try:
        countries = load_countries(
            ns.boundaries, object_name=ns.object_name, name_property=ns.name_property
        )
    except (DataFormatError, FileNotFoundError) as exc:
        raise SystemExit(f"Cannot load boundaries: {exc}") from exc
    return _load_records(ns), countries


def _resolve_year(year: str | None, records) -> str:
    if year:
        return str(year)
    known = years(records)
    if not known:
        raise SystemExit("Records contain no years")
    return known[-1]


def _resolve_filter(ns: Any, records) -> tuple[str, str]:
    category = ns.category
    if not category:
        options = category_options(records)
        if not options:
            raise SystemExit("Records contain no commodity groups")
        category = options[0][0]
    return category, _resolve_year(ns.year, records)


def handle_render(ns: Any) -> int:
    """Handle ``render``: draw one frame, replaying any scripted pointer events."""

    _prepare(ns)
    try:
        surface_cls = get_surface(ns.target)
    except KeyError as exc:
        raise SystemExit(exc.args[0]) from exc
    records, countries = _load(ns)
    category, year = _resolve_filter(ns, records)

    surface = surface_cls(dpi=ns.dpi)
    selected: list[str] = []
    view = GlobeView(
        records,
        countries,
        focal_country=ns.focal,
        category=category,
        year=year,
        width=ns.width,
        height=ns.height,
        surface=surface,
        on_country_select=selected.append,
        star_seed=ns.star_seed,
    )
    view.mount()
    router = InteractionRouter(view)
    for dx, dy in ns.drag or []:
        router.dispatch(DragStart())
        router.dispatch(DragMove(dx, dy))
    for delta in ns.wheel or []:
        router.dispatch(Wheel(delta))
    for x, y in ns.click or []:
        router.dispatch(Click(x, y))
    if ns.hover:
        router.dispatch(PointerMove(*ns.hover))

    bundle = surface.export(output_dir=Path(ns.output))
    logging.info("Rendered %s/%s with %d arcs to %s", category, year, len(view.arcs), bundle.frame)
    for name in selected:
        logging.info("Selected country: %s", name)
    return 0


def handle_arcs(ns: Any) -> int:
    """Handle ``arcs``: write the weighted arcs for a filter as JSON."""

    _prepare(ns)
    records, countries = _load(ns)
    category, year = _resolve_filter(ns, records)
    arcs = aggregate_arcs(records, ns.focal, category, year, countries=countries)
    write_json(
        {"category": category, "year": year, "arcs": to_obj(arcs)}, ns.output
    )
    return 0


def handle_flows(ns: Any) -> int:
    """Handle ``flows``: write the category tree and its flow layout as JSON."""

    _prepare(ns)
    records = _load_records(ns)
    year = _resolve_year(ns.year, records)
    tree = aggregate_category_tree(
        records, ns.focal, year, partner=ns.partner, threshold=ns.threshold
    )
    layout = layout_flows(tree, ns.width, ns.height)
    write_json({"year": year, "tree": to_obj(tree), "layout": to_obj(layout)}, ns.output)
    return 0


def handle_categories(ns: Any) -> int:
    """Handle ``categories``: list commodity groups as value/label pairs."""

    _prepare(ns)
    records = _load_records(ns)
    options = category_options(records, year=ns.year)
    write_json([{"value": v, "label": label} for v, label in options], ns.output)
    return 0


def _add_common(p: argparse.ArgumentParser, *, boundaries: bool = True) -> None:
    p.add_argument("--records", required=True, help="Trade export CSV ('-' for stdin)")
    if boundaries:
        p.add_argument(
            "--boundaries",
            required=True,
            help="Country boundaries (TopoJSON, GeoJSON or .shp)",
        )
        p.add_argument("--object-name", default="countries", help="TopoJSON object name")
        p.add_argument(
            "--name-property", default="name", help="Feature property holding the name"
        )
    p.add_argument("--focal", default="Ireland", help="Exporting (focal) country")
    p.add_argument("--year", help="Year filter (default: latest year in records)")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    p.add_argument("--quiet", action="store_true", help="Warnings only")


def register_cli(subparsers: Any) -> None:
    p_render = subparsers.add_parser("render", help="Render one globe frame")
    _add_common(p_render)
    p_render.add_argument("--category", help="Commodity group (default: first listed)")
    p_render.add_argument(
        "--target",
        default="matplotlib",
        help=f"Surface slug ({', '.join(slugs())})",
    )
    p_render.add_argument("--output", required=True, help="Output directory")
    p_render.add_argument("--width", type=int, default=960)
    p_render.add_argument("--height", type=int, default=600)
    p_render.add_argument("--dpi", type=int, default=100)
    p_render.add_argument("--star-seed", type=int, default=None)
    p_render.add_argument(
        "--drag", nargs=2, type=float, action="append", metavar=("DX", "DY")
    )
    p_render.add_argument("--wheel", type=float, action="append", metavar="DELTA_Y")
    p_render.add_argument(
        "--click", nargs=2, type=float, action="append", metavar=("X", "Y")
    )
    p_render.add_argument("--hover", nargs=2, type=float, metavar=("X", "Y"))
    p_render.set_defaults(func=handle_render)

    p_arcs = subparsers.add_parser("arcs", help="Dump weighted trade arcs as JSON")
    _add_common(p_arcs)
    p_arcs.add_argument("--category", help="Commodity group (default: first listed)")
    p_arcs.add_argument("--output", default="-", help="Output path or '-'")
    p_arcs.set_defaults(func=handle_arcs)

    p_flows = subparsers.add_parser("flows", help="Dump the category flow tree as JSON")
    _add_common(p_flows, boundaries=False)
    p_flows.add_argument("--partner", help="Restrict to one destination country")
    p_flows.add_argument("--threshold", type=float, default=0.02)
    p_flows.add_argument("--width", type=float, default=300.0)
    p_flows.add_argument("--height", type=float, default=300.0)
    p_flows.add_argument("--output", default="-", help="Output path or '-'")
    p_flows.set_defaults(func=handle_flows)

    p_cats = subparsers.add_parser("categories", help="List commodity groups")
    p_cats.add_argument("--records", required=True)
    p_cats.add_argument("--year")
    p_cats.add_argument("--output", default="-")
    p_cats.add_argument("--verbose", action="store_true")
    p_cats.add_argument("--quiet", action="store_true")
    p_cats.set_defaults(func=handle_categories)
