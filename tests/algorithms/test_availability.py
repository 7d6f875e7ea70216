"""Composite SLA: series, parallel, k-of-n, replicas and chaos overrides."""

import pytest

from slayer.algorithms.availability import (
    calculate_sla,
    calculate_sla_with_forced_failure,
    calculate_sla_with_override,
)
from slayer.model.item import Item, iter_items


def test_series_composition(series_pair: Item) -> None:
    assert calculate_sla(series_pair) == pytest.approx(99 * 99.9 / 100)
    assert calculate_sla(series_pair) == pytest.approx(98.901)


def test_parallel_composition_with_perfect_switch(parallel_pair: Item) -> None:
    assert calculate_sla(parallel_pair) == pytest.approx(100 - (10 * 10 / 100))


def test_component_replicas() -> None:
    item = Item.component("x", "X", 90.0, replicas=2, min_replicas_required=1)
    assert calculate_sla(item) == pytest.approx(100 - 10**2 / 100)


def test_component_defaults_to_full_availability() -> None:
    assert calculate_sla(Item(id="bare")) == 100.0


def test_empty_group_is_vacuously_available() -> None:
    assert calculate_sla(Item.group("g", "G", "series", [])) == 100.0
    assert calculate_sla(Item.group("g", "G", "parallel", [])) == 100.0


def test_replica_quorum() -> None:
    # 2 of 3 replicas at 90%: p^3 + 3 p^2 (1-p)
    item = Item.component("x", "X", 90.0, replicas=3, min_replicas_required=2)
    assert calculate_sla(item) == pytest.approx((0.729 + 3 * 0.81 * 0.1) * 100)


def test_group_replicas() -> None:
    group = Item.group(
        "g", "G", "series", [Item.component("a", "A", 90.0)], replicas=2
    )
    assert calculate_sla(group) == pytest.approx(99.0)


def test_parallel_failover_switch_reliability() -> None:
    group = Item.group(
        "g",
        "G",
        "parallel",
        [Item.component("p", "P", 90.0), Item.component("s", "S", 90.0)],
        failover_sla=95.0,
    )
    p_fail = 0.1 * ((1 - 0.95) + 0.95 * 0.1)
    assert calculate_sla(group) == pytest.approx((1 - p_fail) * 100)


def test_parallel_primary_is_first_child() -> None:
    strong_first = Item.group(
        "g",
        "G",
        "parallel",
        [Item.component("p", "P", 99.0), Item.component("s", "S", 90.0)],
        failover_sla=50.0,
    )
    weak_first = Item.group(
        "g",
        "G",
        "parallel",
        [Item.component("s", "S", 90.0), Item.component("p", "P", 99.0)],
        failover_sla=50.0,
    )
    assert calculate_sla(strong_first) > calculate_sla(weak_first)


def test_parallel_k_of_n_children() -> None:
    group = Item.group(
        "g",
        "G",
        "parallel",
        [Item.component(f"c{i}", "", 90.0) for i in range(3)],
        min_children_required=2,
        failover_sla=99.0,
    )
    assert calculate_sla(group) == pytest.approx((0.729 + 3 * 0.81 * 0.1) * 0.99 * 100)


def test_optional_subtree_counts_as_full(layered_system: Item) -> None:
    assert calculate_sla(layered_system) == pytest.approx(99.0 * (1 - 0.005**2))


def test_optional_ignores_broken_children() -> None:
    group = Item.group(
        "opt",
        "Optional",
        "series",
        [Item.component("a", "A", 0.0), Item.component("b", "B", 12.0, is_failed=True)],
        is_optional=True,
    )
    assert calculate_sla(group) == 100.0


def test_failed_item_contributes_zero() -> None:
    item = Item.component("x", "X", 99.999, replicas=5, is_failed=True)
    assert calculate_sla(item) == 0.0
    group = Item.group(
        "g", "G", "parallel", [Item.component("a", "A", 100.0)], is_failed=True
    )
    assert calculate_sla(group) == 0.0


def test_failed_takes_precedence_over_optional() -> None:
    item = Item.component("x", "X", 99.0, is_failed=True, is_optional=True)
    assert calculate_sla(item) == 0.0


def test_partially_killed_replicas() -> None:
    # Three replicas, one killed: redundancy over the two survivors
    item = Item.component("x", "X", 90.0, replicas=3, failed_replicas=1)
    assert calculate_sla(item) == pytest.approx(99.0)


def test_killing_below_quorum_is_outage() -> None:
    item = Item.component(
        "x", "X", 99.0, replicas=3, min_replicas_required=2, failed_replicas=2
    )
    assert calculate_sla(item) == 0.0


def test_killing_every_replica_is_outage() -> None:
    item = Item.component("x", "X", 99.0, replicas=2, failed_replicas=2)
    assert calculate_sla(item) == 0.0


def test_failed_child_in_parallel_falls_back_to_secondary() -> None:
    group = Item.group(
        "g",
        "G",
        "parallel",
        [Item.component("p", "P", 99.0, is_failed=True), Item.component("s", "S", 95.0)],
    )
    assert calculate_sla(group) == pytest.approx(95.0)


def test_override_pins_item_to_full(series_pair: Item) -> None:
    assert calculate_sla_with_override(series_pair, "a") == pytest.approx(99.9)
    assert calculate_sla_with_override(series_pair, "root") == 100.0
    assert calculate_sla_with_override(series_pair, "missing") == pytest.approx(98.901)


def test_override_wins_over_failed_flag() -> None:
    root = Item.group(
        "root",
        "R",
        "series",
        [Item.component("a", "A", 99.0, is_failed=True), Item.component("b", "B", 99.0)],
    )
    assert calculate_sla(root) == 0.0
    assert calculate_sla_with_override(root, "a") == pytest.approx(99.0)


def test_forced_failure(parallel_pair: Item) -> None:
    assert calculate_sla_with_forced_failure(parallel_pair, "a") == pytest.approx(90.0)
    assert calculate_sla_with_forced_failure(parallel_pair, "root") == 0.0


def test_override_never_lowers_sla(cloud_system: Item, layered_system: Item) -> None:
    for root in (cloud_system, layered_system):
        baseline = calculate_sla(root)
        for item in iter_items(root):
            assert calculate_sla_with_override(root, item.id) >= baseline - 1e-12


def test_results_stay_in_percentage_range(cloud_system: Item) -> None:
    for item in iter_items(cloud_system):
        assert 0.0 <= calculate_sla(item) <= 100.0
