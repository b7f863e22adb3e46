# SPDX-License-Identifier: Apache-2.0
"""Spherical geometry helpers shared by the geo adapter and the compositor."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np

_EPSILON = 1e-12


def to_cartesian(lonlat: np.ndarray) -> np.ndarray:
    """Convert ``(..., 2)`` degrees to unit vectors of shape ``(..., 3)``."""

    arr = np.radians(np.asarray(lonlat, dtype=float))
    lam = arr[..., 0]
    phi = arr[..., 1]
    cos_phi = np.cos(phi)
    return np.stack(
        (cos_phi * np.cos(lam), cos_phi * np.sin(lam), np.sin(phi)), axis=-1
    )


def to_lonlat(xyz: np.ndarray) -> np.ndarray:
    """Convert vectors of shape ``(..., 3)`` back to degrees ``(..., 2)``."""

    arr = np.asarray(xyz, dtype=float)
    norm = np.linalg.norm(arr, axis=-1)
    norm = np.where(norm == 0, 1.0, norm)
    z = np.clip(arr[..., 2] / norm, -1.0, 1.0)
    lon = np.degrees(np.arctan2(arr[..., 1], arr[..., 0]))
    lat = np.degrees(np.arcsin(z))
    return np.stack((lon, lat), axis=-1)


def interpolate(
    origin: Sequence[float], destination: Sequence[float], steps: int
) -> np.ndarray:
    """Return ``steps + 1`` points along the great circle from origin to destination.

    Uses spherical linear interpolation; coincident or antipodal endpoints fall
    back to repeating the origin.
    """

    a = to_cartesian(np.asarray(origin, dtype=float))
    b = to_cartesian(np.asarray(destination, dtype=float))
    t = np.linspace(0.0, 1.0, steps + 1)
    omega = math.acos(max(-1.0, min(1.0, float(np.dot(a, b)))))
    sin_omega = math.sin(omega)
    if sin_omega < _EPSILON:
        return np.repeat(np.asarray(origin, dtype=float)[None, :], steps + 1, axis=0)
    wa = np.sin((1.0 - t) * omega) / sin_omega
    wb = np.sin(t * omega) / sin_omega
    points = wa[:, None] * a[None, :] + wb[:, None] * b[None, :]
    return to_lonlat(points)


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Great-circle distance in degrees."""

    va = to_cartesian(np.asarray(a, dtype=float))
    vb = to_cartesian(np.asarray(b, dtype=float))
    return math.degrees(math.acos(max(-1.0, min(1.0, float(np.dot(va, vb))))))


def polygon_centroid(rings: Iterable[Sequence[Sequence[float]]]) -> tuple[float, float]:
    """Area-weighted spherical centroid of a set of rings.

    Each edge contributes its cross product scaled by the edge angle, which
    sums to a vector pointing at the centroid of the enclosed area. The sign of
    that vector depends on ring orientation, so it is flipped when it points
    away from the mean vertex direction; GeoJSON (counter-clockwise) and
    TopoJSON world atlases (clockwise) then give the same answer.
    """

    area_sum = np.zeros(3)
    line_sum = np.zeros(3)
    vertex_sum = np.zeros(3)
    for ring in rings:
        pts = np.asarray(ring, dtype=float)
        if pts.ndim != 2 or len(pts) < 2:
            continue
        xyz = to_cartesian(pts[:, :2])
        vertex_sum += xyz.sum(axis=0)
        a = xyz
        b = np.roll(xyz, -1, axis=0)
        cross = np.cross(a, b)
        m = np.linalg.norm(cross, axis=1)
        w = np.arcsin(np.clip(m, 0.0, 1.0))
        scale = np.divide(-w, m, out=np.zeros_like(m), where=m > 0)
        area_sum += (scale[:, None] * cross).sum(axis=0)
        line_sum += (w[:, None] * (a + b)).sum(axis=0)

    vector = area_sum
    if float(np.dot(vector, vector)) < 1e-18:
        vector = line_sum
    if float(np.dot(vector, vector)) < 1e-18:
        vector = vertex_sum
    if float(np.dot(vector, vector)) < 1e-18:
        return 0.0, 0.0
    if float(np.dot(vector, vertex_sum)) < 0:
        vector = -vector
    lon, lat = to_lonlat(vector)
    return float(lon), float(lat)
