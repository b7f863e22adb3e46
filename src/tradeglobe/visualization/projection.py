# SPDX-License-Identifier: Apache-2.0
"""Rotating orthographic projection.

Rotation angles follow the usual web-mapping convention: rotating by
``(lambda, phi, gamma)`` brings the geographic point ``(-lambda, -phi)`` to
the centre of the view, then spins the view by ``gamma`` around it.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from tradeglobe.geo.spherical import to_cartesian

from .camera import CameraState

SCALE_DIVISOR = 2.2
VISIBLE_EPSILON = 1e-9
LIMB_STEP = math.radians(4.0)
_TAU = 2.0 * math.pi


def _rotation_matrix(rotation: Sequence[float]) -> np.ndarray:
    lam, phi, gamma = (math.radians(float(a)) for a in rotation)
    cl, sl = math.cos(lam), math.sin(lam)
    cp, sp = math.cos(phi), math.sin(phi)
    cg, sg = math.cos(gamma), math.sin(gamma)
    rz = np.array([[cl, -sl, 0.0], [sl, cl, 0.0], [0.0, 0.0, 1.0]])
    ry = np.array([[cp, 0.0, -sp], [0.0, 1.0, 0.0], [sp, 0.0, cp]])
    rx = np.array([[1.0, 0.0, 0.0], [0.0, cg, -sg], [0.0, sg, cg]])
    return rx @ ry @ rz


def _oriented(view: np.ndarray, *, hole: bool) -> np.ndarray:
    """Wind an exterior counter-clockwise (a hole clockwise) seen from outside."""

    turn = np.cross(view, np.roll(view, -1, axis=0)).sum(axis=0)
    ccw = float(np.dot(turn, view.sum(axis=0))) >= 0.0
    return view if ccw != hole else view[::-1]


def _limb_crossing(inside: np.ndarray, outside: np.ndarray) -> np.ndarray:
    """Point where the edge from ``inside`` to ``outside`` meets the limb, as ``(y, z)``."""

    t = inside[0] / (inside[0] - outside[0])
    yz = inside[1:] + t * (outside[1:] - inside[1:])
    norm = math.hypot(float(yz[0]), float(yz[1]))
    return yz / norm if norm > 0 else yz


def _visible_runs(view: np.ndarray, visible: np.ndarray) -> list[list[np.ndarray]]:
    """Split a partly hidden ring into runs that enter and leave at the limb."""

    n = len(view)
    start = int(np.argmin(visible))  # first hidden vertex
    runs: list[list[np.ndarray]] = []
    current: list[np.ndarray] = []
    for step in range(n):
        i = (start + step) % n
        j = (i + 1) % n
        if visible[i]:
            current.append(view[i, 1:])
            if not visible[j]:
                current.append(_limb_crossing(view[i], view[j]))
                runs.append(current)
                current = []
        elif visible[j]:
            current = [_limb_crossing(view[j], view[i])]
    return runs


def _limb_arc(start: float, end: float) -> list[np.ndarray]:
    """Points strictly between two limb angles, walking counter-clockwise."""

    sweep = (end - start) % _TAU
    steps = int(sweep // LIMB_STEP)
    return [
        np.array([math.cos(a), math.sin(a)])
        for a in (start + sweep * i / (steps + 1) for i in range(1, steps + 1))
    ]


def _rejoin(runs: list[list[np.ndarray]]) -> list[np.ndarray]:
    """Close clipped runs into rings along the limb.

    Leaving the disc at some angle, the outline follows the limb
    counter-clockwise to the nearest point where a run re-enters.
    """

    entries = [math.atan2(r[0][1], r[0][0]) for r in runs]
    exits = [math.atan2(r[-1][1], r[-1][0]) for r in runs]
    used = [False] * len(runs)
    rings: list[np.ndarray] = []
    for first in range(len(runs)):
        if used[first]:
            continue
        points: list[np.ndarray] = []
        current = first
        for _ in range(len(runs)):
            used[current] = True
            points.extend(runs[current])
            leave = exits[current]
            candidates = [k for k in range(len(runs)) if k == first or not used[k]]
            nxt = min(
                candidates, key=lambda k, leave=leave: (entries[k] - leave) % _TAU
            )
            points.extend(_limb_arc(leave, entries[nxt]))
            if nxt == first:
                break
            current = nxt
        rings.append(np.asarray(points))
    return rings


class OrthographicProjection:
    """Globe projection with a visible front hemisphere.

    ``project`` returns ``None`` for points on the far side and ``invert``
    returns ``None`` for screen points outside the globe disc.
    """

    def __init__(
        self,
        rotation: Sequence[float] = (0.0, 0.0, 0.0),
        scale: float = 250.0,
        translate: Sequence[float] = (480.0, 250.0),
    ) -> None:
        self.rotation = tuple(float(a) for a in rotation)
        self.scale = float(scale)
        self.translate = (float(translate[0]), float(translate[1]))
        self._matrix = _rotation_matrix(self.rotation)

    @classmethod
    def from_camera(
        cls, camera: CameraState, width: float, height: float
    ) -> "OrthographicProjection":
        return cls(
            rotation=camera.rotation,
            scale=min(width, height) / SCALE_DIVISOR * camera.zoom,
            translate=(width / 2.0, height / 2.0),
        )

    @property
    def radius(self) -> float:
        return self.scale

    def rotate(self, lonlat: np.ndarray) -> np.ndarray:
        """Rotate ``(N, 2)`` lon/lat degrees into view-space unit vectors."""

        return to_cartesian(lonlat) @ self._matrix.T

    def project_many(self, lonlat: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Project ``(N, 2)`` points; return ``(xy, visible)``.

        Hidden points still receive their raw orthographic position (inside
        the disc), so callers decide how to treat them.
        """

        view = self.rotate(np.asarray(lonlat, dtype=float).reshape(-1, 2))
        tx, ty = self.translate
        xy = np.column_stack(
            (tx + self.scale * view[:, 1], ty - self.scale * view[:, 2])
        )
        return xy, view[:, 0] > VISIBLE_EPSILON

    def clip_polygon(
        self, rings: Sequence[Sequence[Sequence[float]]]
    ) -> list[tuple[tuple[float, float], ...]]:
        """Clip one polygon (exterior ring first, then holes) to the front hemisphere.

        Ring parts on the far side are cut where they cross the limb and the
        cut ends are joined by arcs of the limb, so the screen outline covers
        exactly the visible part of the polygon. Each ring is read as
        enclosing the smaller of the two areas it bounds; returned exteriors
        and holes wind in opposite directions.
        """

        whole: list[np.ndarray] = []
        runs: list[list[np.ndarray]] = []
        for index, ring in enumerate(rings):
            pts = np.asarray(ring, dtype=float).reshape(-1, 2)
            if len(pts) > 1 and np.array_equal(pts[0], pts[-1]):
                pts = pts[:-1]
            if len(pts) < 3:
                continue
            view = _oriented(self.rotate(pts), hole=index > 0)
            visible = view[:, 0] > VISIBLE_EPSILON
            if visible.all():
                whole.append(view[:, 1:])
            elif visible.any():
                runs.extend(_visible_runs(view, visible))
        return [self._to_screen(piece) for piece in whole + _rejoin(runs)]

    def _to_screen(self, yz: np.ndarray) -> tuple[tuple[float, float], ...]:
        tx, ty = self.translate
        return tuple(
            (float(tx + self.scale * y), float(ty - self.scale * z)) for y, z in yz
        )

    def project(self, lon: float, lat: float) -> tuple[float, float] | None:
        xy, visible = self.project_many(np.array([[lon, lat]]))
        if not visible[0]:
            return None
        return float(xy[0, 0]), float(xy[0, 1])

    def invert(self, x: float, y: float) -> tuple[float, float] | None:
        tx, ty = self.translate
        a = (float(x) - tx) / self.scale
        b = (ty - float(y)) / self.scale
        rho2 = a * a + b * b
        if not math.isfinite(rho2) or rho2 > 1.0:
            return None
        view = np.array([math.sqrt(1.0 - rho2), a, b])
        world = self._matrix.T @ view
        lon = math.degrees(math.atan2(world[1], world[0]))
        lat = math.degrees(math.asin(max(-1.0, min(1.0, world[2]))))
        return lon, lat

    def sphere_outline(self, segments: int = 128) -> list[tuple[float, float]]:
        tx, ty = self.translate
        theta = np.linspace(0.0, 2.0 * math.pi, segments, endpoint=False)
        return [
            (float(tx + self.scale * math.cos(t)), float(ty + self.scale * math.sin(t)))
            for t in theta
        ]


__all__ = ["OrthographicProjection", "SCALE_DIVISOR"]
