# SPDX-License-Identifier: Apache-2.0
"""Pointer, wheel and resize events routed onto a :class:`GlobeView`."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Union

from .camera import Drag, Zoom, wheel_zoom_factor
from .globe import GlobeView


@dataclass(frozen=True)
class DragStart:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class DragMove:
    dx: float
    dy: float


@dataclass(frozen=True)
class Wheel:
    delta_y: float
    delta_mode: int = 0
    ctrl: bool = False


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerLeave:
    pass


@dataclass(frozen=True)
class Click:
    x: float
    y: float


@dataclass(frozen=True)
class Resize:
    width: float
    height: float


Event = Union[DragStart, DragMove, Wheel, PointerMove, PointerLeave, Click, Resize]


@dataclass(frozen=True)
class EventResult:
    prevent_default: bool = False
    redrawn: bool = False
    hovered: str | None = None
    selected: str | None = None


class InteractionRouter:
    """Translate device events into camera updates, hover and selection.

    The router is the only writer of the view's camera. Each dispatched event
    is handled synchronously and followed by one full redraw; events are not
    coalesced.
    """

    def __init__(self, view: GlobeView) -> None:
        self.view = view
        self._handlers: dict[type, Callable[..., EventResult]] = {
            DragStart: self._on_drag_start,
            DragMove: self._on_drag_move,
            Wheel: self._on_wheel,
            PointerMove: self._on_pointer_move,
            PointerLeave: self._on_pointer_leave,
            Click: self._on_click,
            Resize: self._on_resize,
        }

    def dispatch(self, event: Event) -> EventResult:
        try:
            handler = self._handlers[type(event)]
        except KeyError as exc:
            raise TypeError(f"Unsupported event: {event!r}") from exc
        result = handler(event)
        self.view.redraw()
        return replace(result, redrawn=True)

    def _on_drag_start(self, event: DragStart) -> EventResult:
        return EventResult(prevent_default=True)

    def _on_drag_move(self, event: DragMove) -> EventResult:
        self.view.apply_camera(Drag(event.dx, event.dy))
        return EventResult()

    def _on_wheel(self, event: Wheel) -> EventResult:
        factor = wheel_zoom_factor(event.delta_y, event.delta_mode, event.ctrl)
        self.view.apply_camera(Zoom(factor))
        return EventResult(prevent_default=True)

    def _on_pointer_move(self, event: PointerMove) -> EventResult:
        feature = self.view.hit_test(event.x, event.y)
        if feature is None:
            self.view.hide_tooltip()
            return EventResult()
        self.view.show_tooltip(event.x, event.y, feature.name)
        return EventResult(hovered=feature.name)

    def _on_pointer_leave(self, event: PointerLeave) -> EventResult:
        self.view.hide_tooltip()
        return EventResult()

    def _on_click(self, event: Click) -> EventResult:
        feature = self.view.hit_test(event.x, event.y)
        if feature is None:
            return EventResult()
        return EventResult(selected=self.view.select(feature))

    def _on_resize(self, event: Resize) -> EventResult:
        self.view.resize(event.width, event.height)
        return EventResult()


__all__ = [
    "Click",
    "DragMove",
    "DragStart",
    "Event",
    "EventResult",
    "InteractionRouter",
    "PointerLeave",
    "PointerMove",
    "Resize",
    "Wheel",
]
