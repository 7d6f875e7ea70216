"""Reliability propagation: SLA, incident frequency and MTTR of a subtree.

Frequencies are incidents per year and MTTRs are minutes. Series composition
is exact for independent failure processes (rates add). The parallel and
replica formulas are closed-form heuristics, not renewal-theory results:

- ``n`` replicas needing ``k`` up: ``f = f0 * (f0*m0/Y)^(n-k) * (n/k)`` and
  ``m = m0 / (n-k+1)``. Redundancy suppresses frequency and shortens the
  effective repair time, which is the intended direction.
- Parallel children: the primary's rate is folded with each secondary as a
  coincident-outage rate ``f_acc * f_i * m_i / Y``, weighted by the
  secondary's repair time only. Failed failovers add
  ``f_primary * (1 - switch)``. MTTR is backed out from the SLA.

The SLA part always equals ``calculate_sla`` for the same node.
"""

from __future__ import annotations

from slayer.algorithms.availability import apply_replicas, compose_children
from slayer.config import ENGINE_CONFIG
from slayer.model.item import Item
from slayer.results.artifacts import ReliabilityResult
from slayer.types.base import YEAR_MINUTES, Configuration


def _failed(item: Item) -> ReliabilityResult:
    return ReliabilityResult(
        sla=0.0,
        frequency=ENGINE_CONFIG.failed_frequency,
        mttr=ENGINE_CONFIG.resolve_mttr(item.mttr),
    )


def _replicate(
    item: Item, base_p: float, frequency: float, mttr: float
) -> ReliabilityResult:
    """Apply the replica heuristic to a single-instance triple."""
    n = item.alive_replicas
    k = item.min_replicas_required or 1
    sla_p = apply_replicas(item, base_p)
    scaled_frequency = (
        frequency * ((frequency * mttr) / YEAR_MINUTES) ** (n - k) * (n / k)
    )
    return ReliabilityResult(
        sla=sla_p * 100.0,
        frequency=scaled_frequency,
        mttr=mttr / (n - k + 1),
    )


def _is_replicated(item: Item) -> bool:
    return item.replica_count > 1 or item.failed_replicas > 0


def _parallel_frequency(children: list[ReliabilityResult], switch: float) -> float:
    primary = children[0]
    frequency = primary.frequency
    for other in children[1:]:
        frequency = frequency * other.frequency * other.mttr / YEAR_MINUTES
    if switch < 1.0:
        frequency += primary.frequency * (1.0 - switch)
    return frequency


def calculate_reliability(item: Item) -> ReliabilityResult:
    """Return the reliability triple of ``item``.

    Args:
        item: Root of the subtree.

    Returns:
        ``ReliabilityResult`` with SLA percentage, yearly frequency and MTTR.
    """
    if item.is_down:
        return _failed(item)
    if item.is_optional:
        return ReliabilityResult(sla=100.0, frequency=0.0, mttr=0.0)
    if _is_replicated(item) and item.alive_replicas < (item.min_replicas_required or 1):
        return _failed(item)

    if not item.is_group:
        base_p = item.own_sla / 100.0
        base_mttr = ENGINE_CONFIG.resolve_mttr(item.mttr)
        base_frequency = ((1.0 - base_p) * YEAR_MINUTES) / base_mttr
        if not _is_replicated(item):
            return ReliabilityResult(
                sla=base_p * 100.0, frequency=base_frequency, mttr=base_mttr
            )
        return _replicate(item, base_p, base_frequency, base_mttr)

    if not item.children:
        return ReliabilityResult(sla=100.0, frequency=0.0, mttr=0.0)

    child_results = [calculate_reliability(child) for child in item.children]
    sla_p = compose_children(item, [r.sla / 100.0 for r in child_results])

    if item.config is Configuration.SERIES:
        frequency = sum(r.frequency for r in child_results)
        mttr = (
            sum(r.frequency * r.mttr for r in child_results) / frequency
            if frequency > 0
            else 0.0
        )
    else:
        frequency = _parallel_frequency(child_results, item.failover_sla / 100.0)
        mttr = ((1.0 - sla_p) * YEAR_MINUTES) / frequency if frequency > 0 else 0.0

    if not _is_replicated(item):
        return ReliabilityResult(sla=sla_p * 100.0, frequency=frequency, mttr=mttr)

    group_mttr = mttr or ENGINE_CONFIG.default_mttr_minutes
    group_frequency = frequency or ((1.0 - sla_p) * YEAR_MINUTES) / group_mttr
    return _replicate(item, sla_p, group_frequency, group_mttr)
