# SPDX-License-Identifier: Apache-2.0
from typing import Any

from .camera import (
    CameraConfig,
    CameraState,
    Drag,
    Reset,
    Zoom,
    apply_drag,
    apply_zoom,
    reduce_camera,
)
from .flow_layout import FlowLayout, layout_flows
from .globe import GlobeView
from .interaction import (
    Click,
    DragMove,
    DragStart,
    EventResult,
    InteractionRouter,
    PointerLeave,
    PointerMove,
    Resize,
    Wheel,
)
from .projection import OrthographicProjection
from .scene import SceneState, Starfield, TooltipState, hit_test, render
from .styles import DEFAULT_STYLE, GlobeStyle

__all__ = [
    "CameraConfig",
    "CameraState",
    "Click",
    "DEFAULT_STYLE",
    "Drag",
    "DragMove",
    "DragStart",
    "EventResult",
    "FlowLayout",
    "GlobeStyle",
    "GlobeView",
    "InteractionRouter",
    "OrthographicProjection",
    "PointerLeave",
    "PointerMove",
    "Reset",
    "Resize",
    "SceneState",
    "Starfield",
    "TooltipState",
    "Wheel",
    "Zoom",
    "apply_drag",
    "apply_zoom",
    "hit_test",
    "layout_flows",
    "reduce_camera",
    "render",
    "register_cli",
]

from .cli_globe import register_cli as _register_cli


def register_cli(subparsers: Any) -> None:
    """Register globe subcommands under a provided subparsers object."""
    _register_cli(subparsers)
