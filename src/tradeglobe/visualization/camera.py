# SPDX-License-Identifier: Apache-2.0
"""Camera state and the reducer that applies drag/zoom actions to it."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Union

# Rotation that centres the globe on Ireland.
IRELAND_ROTATION = (8.2439, -53.4129, 0.0)


@dataclass(frozen=True)
class CameraConfig:
    initial_rotation: tuple[float, float, float] = IRELAND_ROTATION
    initial_zoom: float = 1.0
    base_speed: float = 0.2
    min_zoom: float = 0.8
    max_zoom: float = 9.0

    def clamp_zoom(self, zoom: float) -> float:
        return min(self.max_zoom, max(self.min_zoom, zoom))


@dataclass(frozen=True)
class CameraState:
    rotation: tuple[float, float, float] = IRELAND_ROTATION
    zoom: float = 1.0

    @classmethod
    def initial(cls, config: CameraConfig | None = None) -> "CameraState":
        config = config or CameraConfig()
        return cls(
            rotation=tuple(config.initial_rotation),  # type: ignore[arg-type]
            zoom=config.clamp_zoom(config.initial_zoom),
        )

    @classmethod
    def centered_on(
        cls, lon: float, lat: float, config: CameraConfig | None = None
    ) -> "CameraState":
        config = config or CameraConfig()
        return cls(
            rotation=(_wrap_longitude(-lon), -lat, 0.0),
            zoom=config.clamp_zoom(config.initial_zoom),
        )


@dataclass(frozen=True)
class Drag:
    dx: float
    dy: float


@dataclass(frozen=True)
class Zoom:
    factor: float


@dataclass(frozen=True)
class Reset:
    pass


CameraAction = Union[Drag, Zoom, Reset]


def _wrap_longitude(value: float) -> float:
    return (value + 180.0) % 360.0 - 180.0


def reduce_camera(
    state: CameraState,
    action: CameraAction,
    config: CameraConfig | None = None,
) -> CameraState:
    """Return the camera state after ``action``; ``state`` is left untouched.

    Drags rotate by ``delta * base_speed / zoom`` so the globe surface tracks
    the pointer at a similar pace at every zoom level. Longitude wraps into
    [-180, 180); latitude rotation is left unclamped, so the globe can be
    turned over the poles. Zoom is multiplicative, anchored at the frame
    centre and always clamped to ``[min_zoom, max_zoom]``.
    """

    config = config or CameraConfig()
    if isinstance(action, Drag):
        if not (math.isfinite(action.dx) and math.isfinite(action.dy)):
            return state
        speed = config.base_speed / state.zoom
        lam, phi, gamma = state.rotation
        return replace(
            state,
            rotation=(
                _wrap_longitude(lam + action.dx * speed),
                phi - action.dy * speed,
                gamma,
            ),
        )
    if isinstance(action, Zoom):
        if not math.isfinite(action.factor) or action.factor <= 0:
            return state
        return replace(state, zoom=config.clamp_zoom(state.zoom * action.factor))
    if isinstance(action, Reset):
        return CameraState.initial(config)
    raise TypeError(f"Unsupported camera action: {action!r}")


def apply_drag(
    state: CameraState, dx: float, dy: float, config: CameraConfig | None = None
) -> CameraState:
    return reduce_camera(state, Drag(dx, dy), config)


def apply_zoom(
    state: CameraState, factor: float, config: CameraConfig | None = None
) -> CameraState:
    return reduce_camera(state, Zoom(factor), config)


def wheel_zoom_factor(delta_y: float, delta_mode: int = 0, ctrl: bool = False) -> float:
    """Zoom factor for one wheel event, matching browser zoom behaviour.

    ``delta_mode`` 1 means the delta is in lines; ``ctrl`` marks trackpad
    pinch gestures, which report much smaller deltas.
    """

    delta = -float(delta_y) * (0.05 if delta_mode == 1 else 0.002)
    if delta_mode == 2:
        delta = -float(delta_y)
    if ctrl:
        delta *= 10.0
    return 2.0**delta


__all__ = [
    "CameraAction",
    "CameraConfig",
    "CameraState",
    "Drag",
    "IRELAND_ROTATION",
    "Reset",
    "Zoom",
    "apply_drag",
    "apply_zoom",
    "reduce_camera",
    "wheel_zoom_factor",
]
