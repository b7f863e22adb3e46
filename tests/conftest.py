# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from tests.helpers import country_feature, square_polygon, world
from tradeglobe.geo import load_countries
from tradeglobe.transform import TradeRecord
from tradeglobe.utils.cli_helpers import VERBOSITY_ENV

FOOD = "Food and live animals (0)"
MACHINERY = "Machinery and transport equipment (7)"
TOTAL = "Total merchandise trade (0 - 9)"


@pytest.fixture(autouse=True)
def _restore_verbosity(monkeypatch):
    """CLI handlers export their verbosity flag; keep it from leaking."""
    monkeypatch.setenv(VERBOSITY_ENV, "info")


@pytest.fixture()
def world_doc() -> dict:
    """Small world of rectangular countries around the North Atlantic."""

    return world(
        country_feature("Ireland", square_polygon(-10, 51, -6, 55), "372"),
        country_feature("United Kingdom", square_polygon(-5, 50, 1, 58), "826"),
        country_feature("France", square_polygon(0, 43, 6, 49), "250"),
        country_feature("United States of America", square_polygon(-120, 30, -75, 48), "840"),
        country_feature("Russia", square_polygon(40, 50, 100, 70), "643"),
    )


@pytest.fixture()
def countries(world_doc):
    return load_countries(world_doc)


@pytest.fixture()
def records() -> list[TradeRecord]:
    return [
        TradeRecord("United States of America", "2023", FOOD, 200.0),
        TradeRecord("France", "2023", FOOD, 100.0),
        TradeRecord("Atlantis", "2023", FOOD, 50.0),
        TradeRecord("France", "2022", FOOD, 70.0),
        TradeRecord("United States of America", "2023", MACHINERY, 40.0),
        TradeRecord("France", "2023", TOTAL, 500.0),
    ]


@pytest.fixture()
def world_path(tmp_path: Path, world_doc) -> Path:
    path = tmp_path / "world.geojson"
    path.write_text(json.dumps(world_doc), encoding="utf-8")
    return path


@pytest.fixture()
def records_path(tmp_path: Path, records) -> Path:
    path = tmp_path / "exports.csv"
    with path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(["Country", "Year", "Commodity Group", "VALUE"])
        for rec in records:
            writer.writerow([rec.country, rec.year, rec.commodity_group, rec.value])
    return path
