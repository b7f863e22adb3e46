# SPDX-License-Identifier: Apache-2.0
"""Country name aliasing between trade tables and boundary datasets."""

from __future__ import annotations

from typing import Iterable, Mapping


class AliasTable:
    """Bidirectional mapping ``trade-record name <-> canonical geo name``.

    Several trade names may resolve to one geo name (constituent countries
    merged into their sovereign polygon). The reverse direction returns the
    first trade name registered for a geo name, so selection callbacks report
    the name the trade table uses.
    """

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        self._to_geo: dict[str, str] = {}
        self._to_trade: dict[str, str] = {}
        for trade_name, geo_name in pairs:
            self.add(trade_name, geo_name)

    def add(self, trade_name: str, geo_name: str) -> None:
        if trade_name in self._to_geo and self._to_geo[trade_name] != geo_name:
            raise ValueError(
                f"Alias '{trade_name}' already maps to '{self._to_geo[trade_name]}'"
            )
        self._to_geo[trade_name] = geo_name
        self._to_trade.setdefault(geo_name, trade_name)

    def to_geo(self, trade_name: str) -> str:
        return self._to_geo.get(trade_name, trade_name)

    def to_trade(self, geo_name: str) -> str:
        return self._to_trade.get(geo_name, geo_name)

    def as_dict(self) -> Mapping[str, str]:
        return dict(self._to_geo)

    def __len__(self) -> int:
        return len(self._to_geo)

    def __contains__(self, trade_name: object) -> bool:
        return trade_name in self._to_geo


DEFAULT_ALIASES = AliasTable(
    [
        ("USA", "United States of America"),
        ("Great Britain", "United Kingdom"),
        ("Northern Ireland", "United Kingdom"),
        ("Czech Republic", "Czechia"),
        ("Russian Federation", "Russia"),
    ]
)

__all__ = ["AliasTable", "DEFAULT_ALIASES"]
