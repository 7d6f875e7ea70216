"""Downtime, error budgets and RTO/RPO roll-ups."""

import pytest

from slayer.algorithms.budget import (
    aggregate_dr_value,
    calculate_dr_metrics,
    calculate_error_budget,
    get_downtime,
    sla_from_downtime,
)
from slayer.model.item import Item
from slayer.results.artifacts import GOAL_EXCEEDED, GOAL_MET
from slayer.types.base import DowntimePeriod, DRAggregation


def test_downtime_for_three_nines() -> None:
    downtime = get_downtime(99.9)
    assert downtime.per_year == pytest.approx(525.96)
    assert downtime.per_month == pytest.approx(43.83)
    assert downtime.per_day == pytest.approx(1.44)


def test_perfect_sla_has_no_downtime() -> None:
    downtime = get_downtime(100.0)
    assert (downtime.per_year, downtime.per_month, downtime.per_day) == (0.0, 0.0, 0.0)


def test_sla_from_downtime() -> None:
    assert sla_from_downtime(86.4, "day") == pytest.approx(99.9)
    assert sla_from_downtime(0, DowntimePeriod.MONTH) == 100.0
    assert sla_from_downtime(-5, "year") == 100.0
    assert sla_from_downtime(DowntimePeriod.MONTH.seconds, "month") == 0.0
    assert sla_from_downtime(10**9, "day") == 0.0


def test_unknown_period_is_rejected() -> None:
    with pytest.raises(ValueError, match="Valid values are: day, month, year"):
        sla_from_downtime(60, "week")


def test_error_budget_within_budget() -> None:
    budget = calculate_error_budget(99.9, 600, "month")
    assert budget.total_budget_seconds == pytest.approx(2629.8)
    assert budget.remaining_seconds == pytest.approx(2029.8)
    assert budget.consumed_seconds == 600
    assert not budget.is_breached


def test_error_budget_breach_clamps_remaining() -> None:
    budget = calculate_error_budget(99.9, 1e9, "month")
    assert budget.is_breached
    assert budget.remaining_seconds == 0.0


def test_error_budget_default_period_is_month() -> None:
    assert calculate_error_budget(99.0, 0).total_budget_seconds == pytest.approx(
        DowntimePeriod.MONTH.seconds * 0.01
    )


@pytest.fixture
def dr_tree() -> Item:
    return Item.group(
        "root",
        "R",
        "series",
        [
            Item.component("a", "A", 99.0, rto=20, rpo=5),
            Item.group(
                "g",
                "G",
                "series",
                [Item.component("b", "B", 99.0, rto=30)],
                rto=5,
                rpo=1,
            ),
            Item.component("opt", "Optional", 99.0, rto=500, rpo=500, is_optional=True),
        ],
        rto=10,
    )


def test_dr_max_aggregation(dr_tree: Item) -> None:
    assert aggregate_dr_value(dr_tree, "rto") == 30.0
    assert aggregate_dr_value(dr_tree, "rpo") == 5.0


def test_dr_critical_path_aggregation(dr_tree: Item) -> None:
    # 10 (root) + max(20, 5 + 30)
    assert aggregate_dr_value(dr_tree, "rto", DRAggregation.CRITICAL_PATH) == 45.0
    assert aggregate_dr_value(dr_tree, "rpo", "critical_path") == 5.0


def test_dr_metrics_status(dr_tree: Item) -> None:
    metrics = calculate_dr_metrics(dr_tree, target_rto=40, target_rpo=2)
    assert metrics.aggregation == "max"
    assert metrics.rto_status == GOAL_MET
    assert metrics.rpo_status == GOAL_EXCEEDED

    critical = calculate_dr_metrics(dr_tree, 40, 60, aggregation="critical_path")
    assert critical.rto == 45.0
    assert not critical.rto_met
    assert critical.rpo_met
    assert critical.to_dict()["rto_status"] == "exceeded"


def test_dr_defaults_for_default_system(cloud_system: Item) -> None:
    metrics = calculate_dr_metrics(cloud_system, 60, 15)
    assert (metrics.rto, metrics.rpo) == (30.0, 5.0)
    assert metrics.rto_met and metrics.rpo_met


def test_dr_without_values_is_zero() -> None:
    metrics = calculate_dr_metrics(Item.component("x", "X", 99.0), 0, 0)
    assert (metrics.rto, metrics.rpo) == (0.0, 0.0)
    assert metrics.rto_status == GOAL_MET
