# SPDX-License-Identifier: Apache-2.0
"""Trade record rows and the CSV export reader."""

from __future__ import annotations

import csv
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from tradeglobe.utils.io_utils import open_csv

COUNTRY_COLUMN = "Country"
YEAR_COLUMN = "Year"
COMMODITY_COLUMN = "Commodity Group"
VALUE_COLUMN = "VALUE"

TOTAL_SENTINEL = "Total merchandise trade (0 - 9)"


def coerce_value(value: Any) -> float:
    """Return ``value`` as a finite float, or ``0.0`` for anything unparseable."""

    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip().replace(",", ""))
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def coerce_year(value: Any) -> str:
    """Normalise a year cell to its text form (``2023.0`` -> ``"2023"``)."""

    if value is None:
        return ""
    text = str(value).strip()
    if text.endswith(".0") and text[:-2].isdigit():
        return text[:-2]
    return text


@dataclass(frozen=True)
class TradeRecord:
    """One export row: value shipped to ``country`` in ``year`` for a commodity group."""

    country: str
    year: str
    commodity_group: str
    value: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TradeRecord":
        return cls(
            country=str(row.get(COUNTRY_COLUMN) or "").strip(),
            year=coerce_year(row.get(YEAR_COLUMN)),
            commodity_group=str(row.get(COMMODITY_COLUMN) or "").strip(),
            value=coerce_value(row.get(VALUE_COLUMN)),
        )


def read_records(stream: Iterable[str]) -> list[TradeRecord]:
    reader = csv.DictReader(stream)
    return [TradeRecord.from_row(row) for row in reader]


def load_records(path: str | Path) -> list[TradeRecord]:
    """Read the trade export CSV at ``path`` (``-`` for stdin)."""

    with open_csv(path) as fh:
        return read_records(fh)


def category_options(
    records: Iterable[TradeRecord], *, year: str | None = None
) -> list[tuple[str, str]]:
    """Distinct commodity groups as ``(value, label)`` pairs, in table order.

    The label drops the parenthesised code suffix used in the export tables,
    e.g. ``"Food and live animals (0)"`` -> ``"Food and live animals"``.
    """

    seen: set[str] = set()
    options: list[tuple[str, str]] = []
    for record in records:
        if year is not None and record.year != year:
            continue
        group = record.commodity_group
        if not group or group in seen:
            continue
        seen.add(group)
        options.append((group, group.split("(")[0].strip()))
    return options


def years(records: Iterable[TradeRecord]) -> list[str]:
    return sorted({r.year for r in records if r.year})


__all__ = [
    "COMMODITY_COLUMN",
    "COUNTRY_COLUMN",
    "TOTAL_SENTINEL",
    "TradeRecord",
    "VALUE_COLUMN",
    "YEAR_COLUMN",
    "category_options",
    "coerce_value",
    "coerce_year",
    "load_records",
    "read_records",
    "years",
]
