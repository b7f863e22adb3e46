# SPDX-License-Identifier: Apache-2.0
"""Surface registry keyed by slug (``matplotlib``, ``json``, ...)."""

from __future__ import annotations

from typing import Any, TypeVar

from .base import Surface

_S = TypeVar("_S", bound=Surface)

_SURFACES: dict[str, type[Surface]] = {}


def register(surface_cls: type[_S]) -> type[_S]:
    """Class decorator adding ``surface_cls`` under its ``slug``.

    Re-registering the same class is a no-op; a different class claiming a
    taken slug is rejected.
    """

    if not (isinstance(surface_cls, type) and issubclass(surface_cls, Surface)):
        raise TypeError(f"{surface_cls!r} is not a Surface subclass")
    slug = (surface_cls.slug or "").strip()
    if not slug:
        raise ValueError(f"{surface_cls.__name__} has an empty slug")
    existing = _SURFACES.get(slug)
    if existing is not None and existing is not surface_cls:
        raise ValueError(
            f"Surface slug '{slug}' is taken by {existing.__name__}"
        )
    _SURFACES[slug] = surface_cls
    return surface_cls


def slugs() -> list[str]:
    return sorted(_SURFACES)


def get(slug: str) -> type[Surface]:
    try:
        return _SURFACES[slug]
    except KeyError as exc:
        raise KeyError(
            f"Unknown surface '{slug}'. Available: {', '.join(slugs())}"
        ) from exc


def create(slug: str, **options: Any) -> Surface:
    """Instantiate the surface for ``slug`` with ``options``."""

    return get(slug)(**options)


def available() -> list[type[Surface]]:
    return [_SURFACES[s] for s in slugs()]
