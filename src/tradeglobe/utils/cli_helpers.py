# SPDX-License-Identifier: Apache-2.0
"""Logging and environment helpers shared by CLI handlers."""

from __future__ import annotations

import logging
import os
from typing import Any

VERBOSITY_ENV = "TRADEGLOBE_VERBOSITY"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "quiet": logging.WARNING,
}


def env(name: str, default: str | None = None) -> str | None:
    """Return ``TRADEGLOBE_<NAME>`` from the environment, or ``default``."""

    value = os.environ.get(f"TRADEGLOBE_{name.upper()}")
    if value is None or not value.strip():
        return default
    return value.strip()


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring non-integer TRADEGLOBE_%s=%r", name.upper(), raw
        )
        return default


def apply_verbosity(ns: Any) -> None:
    """Translate ``--verbose/--quiet`` flags into the verbosity env var."""

    if getattr(ns, "verbose", False):
        os.environ[VERBOSITY_ENV] = "debug"
    elif getattr(ns, "quiet", False):
        os.environ[VERBOSITY_ENV] = "quiet"


def configure_logging_from_env(default: str = "info") -> None:
    """Configure root logging from ``TRADEGLOBE_VERBOSITY`` (debug|info|quiet)."""

    verbosity = (os.environ.get(VERBOSITY_ENV) or default).strip().lower()
    level = _LEVELS.get(verbosity, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )
