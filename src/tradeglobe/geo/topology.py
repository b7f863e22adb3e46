# SPDX-License-Identifier: Apache-2.0
"""Decode TopoJSON topologies into GeoJSON-style features."""

from __future__ import annotations

from typing import Any, Iterator, Sequence


class TopologyError(ValueError):
    """Raised when a topology document cannot be decoded."""


def _decode_arcs(topology: dict[str, Any]) -> list[list[tuple[float, float]]]:
    raw_arcs = topology.get("arcs")
    if not isinstance(raw_arcs, list):
        raise TopologyError("Topology has no 'arcs' array")
    transform = topology.get("transform")
    sx = sy = 1.0
    tx = ty = 0.0
    if transform:
        try:
            sx, sy = (float(v) for v in transform["scale"])
            tx, ty = (float(v) for v in transform["translate"])
        except (KeyError, TypeError, ValueError) as exc:
            raise TopologyError("Topology transform is malformed") from exc
    decoded: list[list[tuple[float, float]]] = []
    for i, arc in enumerate(raw_arcs):
        if not isinstance(arc, list):
            raise TopologyError(f"Arc {i} is not an array of positions")
        try:
            if transform:
                decoded.append(_delta_decode(arc, sx, sy, tx, ty))
            else:
                decoded.append([(float(p[0]), float(p[1])) for p in arc])
        except (TypeError, ValueError, IndexError, KeyError) as exc:
            raise TopologyError(f"Arc {i} has a malformed position") from exc
    return decoded


def _delta_decode(
    arc: list[Any], sx: float, sy: float, tx: float, ty: float
) -> list[tuple[float, float]]:
    x = y = 0.0
    points = []
    for position in arc:
        x += float(position[0])
        y += float(position[1])
        points.append((x * sx + tx, y * sy + ty))
    return points


def _stitch(
    arcs: list[list[tuple[float, float]]], indexes: Sequence[int]
) -> list[tuple[float, float]]:
    if not isinstance(indexes, list):
        raise TopologyError(f"Ring must be an array of arc indexes, got {indexes!r}")
    points: list[tuple[float, float]] = []
    for index in indexes:
        if not isinstance(index, int) or isinstance(index, bool):
            raise TopologyError(f"Arc index is not an integer: {index!r}")
        try:
            arc = arcs[~index] if index < 0 else arcs[index]
        except IndexError as exc:
            raise TopologyError(f"Arc index out of range: {index}") from exc
        if index < 0:
            arc = arc[::-1]
        if points:
            points.pop()
        points.extend(arc)
    if points and points[0] != points[-1]:
        points.append(points[0])
    return points


def _geometry(
    obj: dict[str, Any], arcs: list[list[tuple[float, float]]]
) -> dict[str, Any] | None:
    gtype = obj.get("type")
    if gtype not in ("Polygon", "MultiPolygon"):
        return None
    refs = obj.get("arcs")
    if not isinstance(refs, list):
        raise TopologyError(f"{gtype} geometry has no 'arcs' array")
    if gtype == "Polygon":
        rings = [_stitch(arcs, ring) for ring in refs]
        return {"type": "Polygon", "coordinates": rings}
    polygons = []
    for polygon in refs:
        if not isinstance(polygon, list):
            raise TopologyError("MultiPolygon arcs must be nested arrays")
        polygons.append([_stitch(arcs, ring) for ring in polygon])
    return {"type": "MultiPolygon", "coordinates": polygons}


def iter_features(
    topology: dict[str, Any], object_name: str
) -> Iterator[dict[str, Any]]:
    """Yield GeoJSON features for the geometry collection ``object_name``.

    Geometries that are not polygonal (or are null) are yielded with a
    ``None`` geometry so callers can decide whether to keep them.
    """

    if topology.get("type") != "Topology":
        raise TopologyError("Document is not a TopoJSON Topology")
    objects = topology.get("objects")
    if not isinstance(objects, dict) or object_name not in objects:
        raise TopologyError(f"Topology has no object named '{object_name}'")
    collection = objects[object_name]
    if not isinstance(collection, dict) or collection.get("type") != "GeometryCollection":
        raise TopologyError(f"Topology object '{object_name}' is not a GeometryCollection")
    geometries = collection.get("geometries", [])
    if not isinstance(geometries, list):
        raise TopologyError(f"Topology object '{object_name}' has no 'geometries' array")
    arcs = _decode_arcs(topology)
    for obj in geometries:
        if not isinstance(obj, dict):
            raise TopologyError(f"Geometry entries must be objects, got {obj!r}")
        yield {
            "type": "Feature",
            "id": obj.get("id"),
            "geometry": _geometry(obj, arcs),
            "properties": obj.get("properties") or {},
        }


__all__ = ["TopologyError", "iter_features"]
