# SPDX-License-Identifier: Apache-2.0
"""Base interfaces for drawing surfaces that replay scene commands."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from tradeglobe.visualization.commands import DrawCommand


class SurfaceError(RuntimeError):
    """Raised when a surface cannot replay or export a frame."""


@dataclass(slots=True)
class FrameBundle:
    """Describes the files a surface wrote for its last frame."""

    output_dir: Path
    frame: Path
    assets: Sequence[Path] = field(default_factory=tuple)


class Surface(ABC):
    """Contract for surfaces that own the pixels of a globe view.

    ``present`` always receives a complete frame; a surface discards whatever
    it drew before.
    """

    slug: str = "surface"
    description: str = ""
    frame_name: str = "frame"

    def __init__(self, **options: Any) -> None:
        self._options: dict[str, Any] = dict(options)
        self._frame: list[DrawCommand] = []
        self.frames_presented = 0

    def configure(self, **options: Any) -> None:
        """Update surface options before the next frame."""

        self._options.update(options)

    @property
    def frame(self) -> list[DrawCommand]:
        return list(self._frame)

    def present(self, commands: Sequence[DrawCommand]) -> None:
        self._frame = list(commands)
        self.frames_presented += 1
        self._draw(self._frame)

    @abstractmethod
    def _draw(self, commands: list[DrawCommand]) -> None:
        """Replay ``commands`` onto the surface."""

    @abstractmethod
    def export(self, *, output_dir: Path) -> FrameBundle:
        """Write the last presented frame inside ``output_dir``."""

    def describe(self) -> dict[str, Any]:
        """Return metadata about the surface for CLI help text."""

        return {"slug": self.slug, "description": self.description}
