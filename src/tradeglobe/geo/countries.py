# SPDX-License-Identifier: Apache-2.0
"""Country boundary reference data.

Wraps a world-boundaries dataset (TopoJSON, GeoJSON or a shapefile) into an
immutable :class:`CountrySet` of named polygon features with precomputed
centroids. Loading fails fast with :class:`DataFormatError`; a partially
decoded world is never returned.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence

import numpy as np
import shapefile  # pyshp
import shapely
from shapely.errors import GEOSException
from shapely.geometry import shape as to_shape
from shapely.geometry.base import BaseGeometry
from shapely.validation import make_valid

from .spherical import polygon_centroid
from .topology import TopologyError, iter_features

LOGGER = logging.getLogger(__name__)

POLYGON_TYPES = {"Polygon", "MultiPolygon"}


class DataFormatError(ValueError):
    """Raised when boundary data is missing its expected structure."""


@dataclass(frozen=True)
class CountryFeature:
    """A named country polygon with its geographic centroid."""

    name: str
    geometry: Mapping[str, Any]
    centroid: tuple[float, float]
    feature_id: str | None = None
    shape: BaseGeometry | None = field(default=None, repr=False, compare=False)

    def contains(self, lon: float, lat: float) -> bool:
        """Point-in-country test that honours rings crossing the antimeridian.

        ``shape`` holds the rings with longitudes unwrapped past +/-180, so the
        point is tried at its own longitude and one turn either side.
        """

        if self.shape is None:
            return False
        lons = np.array([lon - 360.0, lon, lon + 360.0])
        lats = np.full(3, lat)
        return bool(shapely.contains_xy(self.shape, lons, lats).any())

    def polygons(self) -> Iterator[list[list[tuple[float, float]]]]:
        """Yield each polygon as its list of rings, exterior first."""

        return _iter_polygons(self.geometry)

    def rings(self) -> Iterator[list[tuple[float, float]]]:
        """Yield every ring (exterior and holes) as ``(lon, lat)`` pairs."""

        return _iter_rings(self.geometry)


def _iter_polygons(
    geometry: Mapping[str, Any],
) -> Iterator[list[list[tuple[float, float]]]]:
    if geometry.get("type") == "Polygon":
        polygons = [geometry.get("coordinates", [])]
    else:
        polygons = geometry.get("coordinates", [])
    for polygon in polygons:
        yield [[(float(p[0]), float(p[1])) for p in ring] for ring in polygon]


def _iter_rings(geometry: Mapping[str, Any]) -> Iterator[list[tuple[float, float]]]:
    for polygon in _iter_polygons(geometry):
        yield from polygon


def _unwrap_ring(ring: Sequence[tuple[float, float]]) -> list[tuple[float, float]]:
    """Remove +/-360 jumps so consecutive longitudes never differ by over 180.

    A ring that goes once around a pole comes back a full turn from where it
    started; it is closed through that pole so the planar polygon covers the
    polar cap.
    """

    out: list[tuple[float, float]] = []
    offset = 0.0
    prev: float | None = None
    for lon, lat in ring:
        if prev is not None:
            step = lon - prev
            if step > 180.0:
                offset -= 360.0
            elif step < -180.0:
                offset += 360.0
        out.append((lon + offset, lat))
        prev = lon
    if len(out) > 2 and abs(out[-1][0] - out[0][0]) > 180.0:
        pole = 90.0 if sum(lat for _, lat in out) >= 0 else -90.0
        out += [(out[-1][0], pole), (out[0][0], pole), out[0]]
    return out


def _shift_near(ring: list[tuple[float, float]], lon: float) -> list[tuple[float, float]]:
    mean = sum(p[0] for p in ring) / len(ring)
    turns = round((lon - mean) / 360.0)
    if not turns:
        return ring
    return [(x + 360.0 * turns, y) for x, y in ring]


def _planar_geometry(geometry: Mapping[str, Any]) -> dict[str, Any]:
    """MultiPolygon in unwrapped lon/lat, used only for containment tests."""

    polygons = []
    for polygon in _iter_polygons(geometry):
        if not polygon or len(polygon[0]) < 3:
            continue
        rings = [_unwrap_ring(ring) for ring in polygon if len(ring) >= 3]
        shell = rings[0]
        centre = sum(p[0] for p in shell) / len(shell)
        polygons.append([shell] + [_shift_near(hole, centre) for hole in rings[1:]])
    return {"type": "MultiPolygon", "coordinates": polygons}


class CountrySet(Sequence[CountryFeature]):
    """Read-only, ordered collection of countries with name lookup."""

    def __init__(self, features: Sequence[CountryFeature]) -> None:
        self._features: tuple[CountryFeature, ...] = tuple(features)
        self._by_name: dict[str, CountryFeature] = {}
        for feature in self._features:
            self._by_name.setdefault(feature.name, feature)

    def __getitem__(self, index):  # type: ignore[override]
        return self._features[index]

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[CountryFeature]:
        return iter(self._features)

    def names(self) -> list[str]:
        return [f.name for f in self._features]

    def find_by_name(self, name: str) -> CountryFeature | None:
        return self._by_name.get(name)

    def locate(self, lon: float, lat: float) -> CountryFeature | None:
        """Return the first country containing ``(lon, lat)``, if any."""

        if not (math.isfinite(lon) and math.isfinite(lat)):
            return None
        for feature in self._features:
            if feature.contains(lon, lat):
                return feature
        return None


def centroid(feature: CountryFeature) -> tuple[float, float]:
    return feature.centroid


def _property(props: Mapping[str, Any], key: str) -> Any:
    if key in props:
        return props[key]
    lowered = key.lower()
    for name, value in props.items():
        if str(name).lower() == lowered:
            return value
    return None


def _build_feature(
    raw: Mapping[str, Any], name_property: str
) -> CountryFeature | None:
    geometry = raw.get("geometry")
    if not isinstance(geometry, Mapping) or geometry.get("type") not in POLYGON_TYPES:
        return None
    props = raw.get("properties") or {}
    name = _property(props, name_property)
    if not name:
        return None
    try:
        shp = to_shape(_planar_geometry(geometry))
        center = polygon_centroid(_iter_rings(geometry))
    except (ValueError, TypeError, IndexError, AttributeError, GEOSException) as exc:
        raise DataFormatError(f"Invalid geometry for country '{name}'") from exc
    if shp.is_empty:
        return None
    if not shp.is_valid:
        shp = make_valid(shp)
    shapely.prepare(shp)
    feature_id = raw.get("id")
    return CountryFeature(
        name=str(name),
        geometry=geometry,
        centroid=center,
        feature_id=None if feature_id is None else str(feature_id),
        shape=shp,
    )


def _features_from_document(
    doc: Mapping[str, Any], object_name: str
) -> list[Mapping[str, Any]]:
    dtype = doc.get("type")
    if dtype == "Topology":
        try:
            return list(iter_features(dict(doc), object_name))
        except TopologyError as exc:
            raise DataFormatError(str(exc)) from exc
    if dtype == "FeatureCollection":
        features = doc.get("features")
        if not isinstance(features, list):
            raise DataFormatError("FeatureCollection has no 'features' array")
        return features
    raise DataFormatError(
        "Boundary data must be a TopoJSON Topology or a GeoJSON FeatureCollection"
    )


def _features_from_shapefile(path: Path) -> list[Mapping[str, Any]]:
    try:
        reader = shapefile.Reader(str(path))
    except shapefile.ShapefileException as exc:
        raise DataFormatError(f"Unreadable shapefile: {path}") from exc
    field_names = [f[0] for f in reader.fields[1:]]  # skip deletion flag
    features: list[Mapping[str, Any]] = []
    for idx in range(len(reader)):
        record = reader.record(idx)
        geom = reader.shape(idx).__geo_interface__
        props = {name: record[i] for i, name in enumerate(field_names)}
        features.append({"type": "Feature", "geometry": geom, "properties": props})
    return features


def load_countries(
    source: Mapping[str, Any] | str | Path,
    *,
    object_name: str = "countries",
    name_property: str = "name",
) -> CountrySet:
    """Load country polygons from a topology, feature collection or shapefile.

    Raises
    ------
    DataFormatError
        When the document does not have the expected geometry collection or
        yields no usable country polygons.
    """

    if isinstance(source, Mapping):
        raw_features = _features_from_document(source, object_name)
    else:
        path = Path(source).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Boundary file not found: {path}")
        if path.suffix.lower() == ".shp":
            raw_features = _features_from_shapefile(path)
        else:
            try:
                with path.open("r", encoding="utf-8") as fp:
                    doc = json.load(fp)
            except json.JSONDecodeError as exc:
                raise DataFormatError(f"Boundary file is not valid JSON: {path}") from exc
            if not isinstance(doc, Mapping):
                raise DataFormatError(f"Boundary file has no top-level object: {path}")
            raw_features = _features_from_document(doc, object_name)

    countries: list[CountryFeature] = []
    skipped = 0
    for raw in raw_features:
        if not isinstance(raw, Mapping):
            raise DataFormatError("Feature entries must be objects")
        feature = _build_feature(raw, name_property)
        if feature is None:
            skipped += 1
            continue
        countries.append(feature)
    if not countries:
        raise DataFormatError("Boundary data contains no named country polygons")
    LOGGER.debug("Loaded %d countries (%d skipped)", len(countries), skipped)
    return CountrySet(countries)


__all__ = [
    "CountryFeature",
    "CountrySet",
    "DataFormatError",
    "centroid",
    "load_countries",
]
