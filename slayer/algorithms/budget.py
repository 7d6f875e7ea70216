"""Downtime, error budget and disaster-recovery roll-ups."""

from __future__ import annotations

from typing import Optional

from slayer.config import ENGINE_CONFIG
from slayer.model.item import Item
from slayer.results.artifacts import Downtime, DRMetrics, ErrorBudget
from slayer.types.base import YEAR_MINUTES, DowntimePeriod, DRAggregation


def get_downtime(sla: float) -> Downtime:
    """Return the expected downtime in minutes per year, month and day."""
    per_year = YEAR_MINUTES * (1 - sla / 100)
    return Downtime(per_year=per_year, per_month=per_year / 12, per_day=per_year / 365.25)


def sla_from_downtime(seconds: float, period: DowntimePeriod | str) -> float:
    """Convert acceptable downtime per period into an SLA percentage."""
    total = DowntimePeriod.from_string(period).seconds
    if seconds >= total:
        return 0.0
    if seconds <= 0:
        return 100.0
    return (1 - seconds / total) * 100


def calculate_error_budget(
    target_sla: float,
    consumed_seconds: float,
    period: DowntimePeriod | str = DowntimePeriod.MONTH,
) -> ErrorBudget:
    """Return the downtime budget of ``target_sla`` over ``period``.

    Args:
        target_sla: Target SLA percentage.
        consumed_seconds: Downtime already spent in the period.
        period: ``day``, ``month`` or ``year``.

    Returns:
        ``ErrorBudget``; remaining seconds are clamped at zero while the
        breach flag uses the unclamped difference.
    """
    total_budget = DowntimePeriod.from_string(period).seconds * (1 - target_sla / 100)
    remaining = total_budget - consumed_seconds
    return ErrorBudget(
        total_budget_seconds=total_budget,
        consumed_seconds=consumed_seconds,
        remaining_seconds=max(0.0, remaining),
        is_breached=remaining < 0,
    )


def _max_value(item: Item, attr: str) -> float:
    if item.is_optional:
        return 0.0
    own = getattr(item, attr) or 0.0
    return float(max([own, *(_max_value(c, attr) for c in item.children)]))


def _critical_path(item: Item, attr: str) -> float:
    if item.is_optional:
        return 0.0
    own = getattr(item, attr) or 0.0
    return float(own) + max((_critical_path(c, attr) for c in item.children), default=0.0)


def aggregate_dr_value(
    root: Item, attr: str, aggregation: DRAggregation | str = DRAggregation.MAX
) -> float:
    """Roll up ``rto`` or ``rpo`` across the tree; unset values count as 0."""
    if DRAggregation.from_string(aggregation) is DRAggregation.CRITICAL_PATH:
        return _critical_path(root, attr)
    return _max_value(root, attr)


def calculate_dr_metrics(
    root: Item,
    target_rto: float,
    target_rpo: float,
    aggregation: Optional[DRAggregation | str] = None,
) -> DRMetrics:
    """Roll up RTO/RPO and compare them with targets.

    Args:
        root: Tree to analyse. Optional subtrees are ignored.
        target_rto: Required recovery time in minutes.
        target_rpo: Tolerated data loss window in minutes.
        aggregation: Roll-up policy; defaults to ``ENGINE_CONFIG.dr_aggregation``.

    Returns:
        ``DRMetrics`` with ``goal met``/``exceeded`` status per metric.
    """
    policy = DRAggregation.from_string(aggregation or ENGINE_CONFIG.dr_aggregation)
    return DRMetrics(
        rto=aggregate_dr_value(root, "rto", policy),
        rpo=aggregate_dr_value(root, "rpo", policy),
        target_rto=float(target_rto),
        target_rpo=float(target_rpo),
        aggregation=policy.value,
    )
