# SPDX-License-Identifier: Apache-2.0
"""Surface that keeps the command list and exports it as JSON."""

from __future__ import annotations

import json
from pathlib import Path

from tradeglobe.utils.serialize import to_list
from tradeglobe.visualization.commands import DrawCommand

from .base import FrameBundle, Surface, SurfaceError
from .registry import register


@register
class JsonSurface(Surface):
    slug = "json"
    description = "Records draw commands and writes them to frame.json."

    def _draw(self, commands: list[DrawCommand]) -> None:
        # Commands are kept on the base class; nothing to rasterise.
        return None

    def to_payload(self) -> dict[str, object]:
        return {
            "frames_presented": self.frames_presented,
            "commands": to_list(self._frame),
        }

    def export(self, *, output_dir: Path) -> FrameBundle:
        if not self.frames_presented:
            raise SurfaceError("No frame has been presented yet")
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / f"{self.frame_name}.json"
        indent = self._options.get("indent", 2)
        path.write_text(json.dumps(self.to_payload(), indent=indent) + "\n", encoding="utf-8")
        return FrameBundle(output_dir=output_dir, frame=path, assets=(path,))
