# SPDX-License-Identifier: Apache-2.0
"""Builders for boundary documents shared across test modules."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


def project_root(start: Path | None = None) -> Path:
    """Directory holding pyproject.toml, found by walking up from ``start``."""
    here = (start or Path(__file__)).resolve()
    return next((d for d in [here, *here.parents] if (d / "pyproject.toml").exists()), here)


def square_polygon(lon0: float, lat0: float, lon1: float, lat1: float) -> dict:
    """Closed lon/lat box, counter-clockwise when ``lon0 < lon1``."""
    ring = [[lon0, lat0], [lon1, lat0], [lon1, lat1], [lon0, lat1], [lon0, lat0]]
    return {"type": "Polygon", "coordinates": [ring]}


def country_feature(name: str, geometry: dict, fid: str | None = None) -> dict:
    feature = {"type": "Feature", "properties": {"name": name}, "geometry": geometry}
    if fid is not None:
        feature["id"] = fid
    return feature


def ring_feature(name: str, ring: Sequence[Sequence[float]]) -> dict:
    """Feature whose single polygon is ``ring`` exactly as given."""
    return country_feature(
        name, {"type": "Polygon", "coordinates": [[list(p) for p in ring]]}
    )


def world(*features: dict) -> dict:
    return {"type": "FeatureCollection", "features": list(features)}
