# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import pytest

from tradeglobe.transform import (
    OTHER_LABEL,
    AliasTable,
    TradeRecord,
    aggregate_arcs,
    aggregate_category_tree,
)

FOOD = "Food and live animals (0)"


def test_arcs_for_ireland_scenario(records, countries) -> None:
    arcs = aggregate_arcs(records, "Ireland", FOOD, "2023", countries=countries)
    by_dest = {a.destination: a for a in arcs}
    assert set(by_dest) == {"United States of America", "France"}
    assert by_dest["United States of America"].normalized_weight == pytest.approx(1.0)
    assert by_dest["France"].normalized_weight == pytest.approx(0.5)
    assert by_dest["France"].raw_value == pytest.approx(100_000.0)
    france = countries.find_by_name("France")
    assert by_dest["France"].dest_coord == france.centroid
    assert by_dest["France"].origin_coord == countries.find_by_name("Ireland").centroid


def test_unknown_country_is_dropped_without_error(countries) -> None:
    rows = [TradeRecord("Atlantis", "2023", FOOD, 10.0)]
    assert aggregate_arcs(rows, "Ireland", FOOD, "2023", countries=countries) == []


def test_empty_table_gives_no_arcs(countries) -> None:
    assert aggregate_arcs([], "Ireland", FOOD, "2023", countries=countries) == []


def test_unknown_focal_country_gives_no_arcs(records, countries) -> None:
    assert aggregate_arcs(records, "Atlantis", FOOD, "2023", countries=countries) == []


def test_aggregation_is_idempotent_and_bounded(records, countries) -> None:
    first = aggregate_arcs(records, "Ireland", FOOD, "2023", countries=countries)
    second = aggregate_arcs(records, "Ireland", FOOD, "2023", countries=countries)
    assert first == second
    filtered = [r for r in records if r.commodity_group == FOOD and r.year == "2023"]
    assert len(first) <= len(filtered)
    assert all(0.0 <= a.normalized_weight <= 1.0 for a in first)


def test_aliases_merge_into_one_arc(countries) -> None:
    rows = [
        TradeRecord("Great Britain", "2023", FOOD, 10.0),
        TradeRecord("Northern Ireland", "2023", FOOD, 5.0),
        TradeRecord("USA", "2023", FOOD, 30.0),
    ]
    arcs = aggregate_arcs(rows, "Ireland", FOOD, "2023", countries=countries)
    assert [a.destination for a in arcs] == ["United Kingdom", "United States of America"]
    assert arcs[0].raw_value == pytest.approx(15_000.0)
    assert arcs[0].normalized_weight == pytest.approx(0.5)


def test_custom_alias_table(countries) -> None:
    rows = [TradeRecord("Eire", "2023", FOOD, 10.0), TradeRecord("Gaul", "2023", FOOD, 10.0)]
    table = AliasTable([("Gaul", "France")])
    arcs = aggregate_arcs(rows, "Ireland", FOOD, "2023", countries=countries, aliases=table)
    assert [a.destination for a in arcs] == ["France"]


def test_self_arcs_are_skipped(countries) -> None:
    rows = [TradeRecord("Ireland", "2023", FOOD, 10.0), TradeRecord("France", "2023", FOOD, 4.0)]
    arcs = aggregate_arcs(rows, "Ireland", FOOD, "2023", countries=countries)
    assert [a.destination for a in arcs] == ["France"]


def test_zero_peak_gives_zero_weights(countries) -> None:
    rows = [TradeRecord("France", "2023", FOOD, 0.0)]
    arcs = aggregate_arcs(rows, "Ireland", FOOD, "2023", countries=countries)
    assert arcs[0].normalized_weight == 0.0


def test_category_tree_excludes_total_and_other_year(records) -> None:
    tree = aggregate_category_tree(records, "Ireland", "2023")
    assert tree.root.id == "Ireland"
    assert tree.root.value == pytest.approx(390_000.0)
    ids = [n.id for n in tree.nodes]
    assert ids == ["Ireland", FOOD, "Machinery and transport equipment (7)"]
    assert all(link.source == "Ireland" for link in tree.links)


def test_small_categories_collapse_into_other() -> None:
    rows = [
        TradeRecord("France", "2023", "A", 90.0),
        TradeRecord("France", "2023", "B", 9.0),
        TradeRecord("France", "2023", "C", 1.0),
        TradeRecord("France", "2023", "D", -3.0),
    ]
    tree = aggregate_category_tree(rows, "Ireland", "2023", threshold=0.02)
    assert [n.id for n in tree.nodes] == ["Ireland", "A", "B", OTHER_LABEL]
    other = tree.node(OTHER_LABEL)
    assert other.kind == "other"
    assert other.value == pytest.approx(1_000.0)
    assert sum(link.value for link in tree.links) == pytest.approx(tree.root.value)


def test_literal_other_category_joins_the_merged_remainder() -> None:
    rows = [
        TradeRecord("France", "2023", "A", 90.0),
        TradeRecord("France", "2023", OTHER_LABEL, 5.0),
        TradeRecord("France", "2023", "B", 4.0),
        TradeRecord("France", "2023", "C", 1.0),
    ]
    tree = aggregate_category_tree(rows, "Ireland", "2023", threshold=0.02)
    assert [n.id for n in tree.nodes] == ["Ireland", "A", "B", OTHER_LABEL]
    others = [n for n in tree.nodes if n.id == OTHER_LABEL]
    assert len(others) == 1
    assert others[0].kind == "other"
    assert others[0].value == pytest.approx(6_000.0)
    assert [link.value for link in tree.links if link.target == OTHER_LABEL] == [
        pytest.approx(6_000.0)
    ]


def test_partner_filter_and_empty_tree() -> None:
    rows = [
        TradeRecord("France", "2023", "A", 5.0),
        TradeRecord("Spain", "2023", "B", 5.0),
    ]
    tree = aggregate_category_tree(rows, "Ireland", "2023", partner="Spain")
    assert [n.id for n in tree.nodes] == ["Ireland", "B"]
    assert aggregate_category_tree([], "Ireland", "2023").is_empty
    assert aggregate_category_tree(rows, "Ireland", "1999").root is None
