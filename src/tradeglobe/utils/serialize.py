# SPDX-License-Identifier: Apache-2.0
"""JSON-friendly conversion of arcs, trees, layouts and draw commands."""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from typing import Any, Iterable

import numpy as np


def to_obj(x: Any) -> Any:
    """Convert a value to a JSON-serializable object.

    - Dataclasses -> dict of converted fields, with a ``command`` tag for draw
      commands (classes exposing ``command``)
    - tuples/lists -> lists
    - numpy scalars/arrays -> Python numbers/lists
    - Mappings -> dict with converted values
    Fields declared with ``repr=False`` (cached geometry handles) are skipped.
    """
    if is_dataclass(x) and not isinstance(x, type):
        out: dict[str, Any] = {}
        command = getattr(type(x), "command", None)
        if command:
            out["command"] = command
        for f in fields(x):
            if not f.repr:
                continue
            out[f.name] = to_obj(getattr(x, f.name))
        return out
    if isinstance(x, dict):
        return {str(k): to_obj(v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [to_obj(i) for i in x]
    if isinstance(x, np.ndarray):
        return x.tolist()
    if isinstance(x, np.generic):
        return x.item()
    return x


def to_list(items: Iterable[Any]) -> list[Any]:
    """Convert an iterable of values via to_obj, returning a list."""
    return [to_obj(i) for i in items]


def dumps(value: Any, *, indent: int | None = 2) -> str:
    return json.dumps(to_obj(value), indent=indent)
