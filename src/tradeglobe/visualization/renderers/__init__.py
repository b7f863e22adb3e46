# SPDX-License-Identifier: Apache-2.0
"""Drawing surface registry and implementations."""

from __future__ import annotations

from . import json_surface as _json_surface  # noqa: F401
from . import matplotlib_surface as _matplotlib_surface  # noqa: F401
from .base import FrameBundle, Surface, SurfaceError
from .registry import available, create, get, register, slugs

__all__ = [
    "FrameBundle",
    "Surface",
    "SurfaceError",
    "available",
    "create",
    "get",
    "register",
    "slugs",
]
