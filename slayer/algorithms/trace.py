"""Calculation trace: a readable, post-order log of the SLA computation."""

from __future__ import annotations

from typing import List

from slayer.algorithms.reliability import calculate_reliability
from slayer.config import ENGINE_CONFIG
from slayer.model.item import Item
from slayer.results.artifacts import CalculationStep, ReliabilityResult
from slayer.types.base import Configuration
from slayer.utils.formatting import format_sla_percentage


def _step(
    item: Item,
    formula: str,
    explanation: str,
    inputs: List[str],
    rel: ReliabilityResult,
) -> CalculationStep:
    return CalculationStep(
        id=item.id,
        name=item.name,
        type=item.type.value,
        formula=formula,
        explanation=explanation,
        input_values=inputs,
        result=rel.sla,
        mttr_result=rel.mttr,
        frequency_result=rel.frequency,
    )


def _replica_note(item: Item) -> str:
    k = item.min_replicas_required or 1
    note = f"{k} of {item.replica_count} replicas required"
    if item.failed_replicas > 0:
        note += f", {item.failed_replicas} killed"
    return note


def _is_replicated(item: Item) -> bool:
    return item.replica_count > 1 or item.failed_replicas > 0


def _component_step(item: Item, rel: ReliabilityResult) -> CalculationStep:
    base_sla = format_sla_percentage(item.own_sla)
    base_mttr = ENGINE_CONFIG.resolve_mttr(item.mttr)
    if _is_replicated(item):
        return _step(
            item,
            "k-out-of-n Redundancy",
            f"{_replica_note(item)}: SLA improved by redundancy, MTTR reduced.",
            [f"Base SLA: {base_sla}%", f"Base MTTR: {base_mttr:g}m"],
            rel,
        )
    return _step(
        item, f"{base_sla}%", "Base component metrics.", [f"MTTR: {base_mttr:g}m"], rel
    )


def _group_step(item: Item, rel: ReliabilityResult) -> CalculationStep:
    child_rels = [calculate_reliability(child) for child in item.children]
    k = item.min_children_required or 1

    if item.config is Configuration.SERIES:
        formula = "Product of child SLAs | Sum of child frequencies"
        explanation = (
            "Series: The system fails if ANY component fails. "
            "Total frequency is additive."
        )
        inputs = [
            f"{format_sla_percentage(r.sla)}% ({r.frequency:.2f} freq)" for r in child_rels
        ]
    elif k > 1:
        formula = "k-out-of-n of child SLAs * Switch reliability"
        explanation = (
            f"Parallel: {k} of {len(child_rels)} children must be up "
            f"(switch {format_sla_percentage(item.failover_sla)}%)."
        )
        inputs = [f"{format_sla_percentage(r.sla)}%" for r in child_rels]
    else:
        formula = "1 - (P_fail * Switch_fail_adj)"
        explanation = (
            "Parallel: The system only fails if all components fail "
            "(adjusted by switch reliability)."
        )
        inputs = [f"{format_sla_percentage(r.sla)}%" for r in child_rels]

    if _is_replicated(item):
        formula += " | k-out-of-n Redundancy"
        explanation += f" Group replicated: {_replica_note(item)}."

    return _step(item, formula, explanation, inputs, rel)


def get_calculation_steps(item: Item) -> List[CalculationStep]:
    """Return the calculation steps for ``item`` in post-order.

    Children's steps precede their parent's. Optional and failed items
    collapse to a single step and hide their subtree.

    Args:
        item: Root of the subtree.

    Returns:
        List of ``CalculationStep``; the last one describes ``item``.
    """
    if item.is_optional and not item.is_down:
        return [
            CalculationStep(
                id=item.id,
                name=item.name,
                type=item.type.value,
                formula="100%",
                explanation="Optional component excluded from calculation",
                input_values=[],
                result=100.0,
                mttr_result=0.0,
                frequency_result=0.0,
            )
        ]

    rel = calculate_reliability(item)

    if item.is_down:
        return [_step(item, "0%", "Failed (chaos injection): contributes no availability.", [], rel)]

    if not item.is_group:
        return [_component_step(item, rel)]

    if not item.children:
        return [_step(item, "100%", "Empty group defaults to 100%", [], rel)]

    steps: List[CalculationStep] = []
    for child in item.children:
        steps.extend(get_calculation_steps(child))
    steps.append(_group_step(item, rel))
    return steps
