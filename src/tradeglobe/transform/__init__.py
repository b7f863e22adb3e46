# SPDX-License-Identifier: Apache-2.0
from .aggregate import (
    OTHER_LABEL,
    OTHER_THRESHOLD,
    UNIT_SCALE,
    CategoryLink,
    CategoryNode,
    CategoryTree,
    FlowArc,
    aggregate_arcs,
    aggregate_category_tree,
)
from .aliases import DEFAULT_ALIASES, AliasTable
from .records import (
    TOTAL_SENTINEL,
    TradeRecord,
    category_options,
    coerce_value,
    load_records,
    read_records,
    years,
)

__all__ = [
    "AliasTable",
    "CategoryLink",
    "CategoryNode",
    "CategoryTree",
    "DEFAULT_ALIASES",
    "FlowArc",
    "OTHER_LABEL",
    "OTHER_THRESHOLD",
    "TOTAL_SENTINEL",
    "TradeRecord",
    "UNIT_SCALE",
    "aggregate_arcs",
    "aggregate_category_tree",
    "category_options",
    "coerce_value",
    "load_records",
    "read_records",
    "years",
]
