"""Composite SLA of an item tree.

The recursion works on probabilities in [0, 1]; percentages appear only at
the public boundary. No intermediate rounding is applied.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from slayer.algorithms.kofn import k_of_n
from slayer.model.item import Item
from slayer.types.base import Configuration

# (item id, pinned probability) short-circuit used by sensitivity analysis
Pin = Optional[Tuple[str, float]]


def compose_children(item: Item, child_probs: Sequence[float]) -> float:
    """Combine child availabilities of a group into its base availability.

    Args:
        item: The group whose ``config`` and failover settings apply.
        child_probs: Child availabilities in child order, in [0, 1].

    Returns:
        Base availability of the group before its own replicas.
    """
    if not child_probs:
        return 1.0

    if item.config is Configuration.SERIES:
        result = 1.0
        for p in child_probs:
            result *= p
        return result

    switch = item.failover_sla / 100.0
    k = item.min_children_required or 1
    if k > 1:
        return k_of_n(child_probs, k) * switch

    primary = child_probs[0]
    others_down = 1.0
    for p in child_probs[1:]:
        others_down *= 1.0 - p
    # Primary down and either the switch fails or every secondary is down too
    p_fail = (1.0 - primary) * ((1.0 - switch) + switch * others_down)
    return 1.0 - p_fail


def apply_replicas(item: Item, base: float) -> float:
    """Apply the item's replica redundancy to its base availability.

    Surviving replicas (after chaos injection) must provide at least
    ``min_replicas_required`` working instances.
    """
    if item.replica_count <= 1 and item.failed_replicas <= 0:
        return base
    return k_of_n([base] * item.alive_replicas, item.min_replicas_required or 1)


def availability(item: Item, pin: Pin = None) -> float:
    """Return the availability of ``item`` as a probability in [0, 1].

    Args:
        item: Root of the subtree.
        pin: Optional ``(id, probability)``; the matching item returns the
            pinned probability before any failed or optional checks.
    """
    if pin is not None and item.id == pin[0]:
        return pin[1]
    if item.is_down:
        return 0.0
    if item.is_optional:
        return 1.0

    if item.is_group:
        base = compose_children(item, [availability(c, pin) for c in item.children])
    else:
        base = item.own_sla / 100.0

    return apply_replicas(item, base)


def calculate_sla(item: Item) -> float:
    """Return the composite SLA percentage of ``item`` in [0, 100]."""
    return availability(item) * 100.0


def calculate_sla_with_override(root: Item, override_id: str) -> float:
    """Composite SLA of ``root`` with ``override_id`` treated as 100% available."""
    return availability(root, (override_id, 1.0)) * 100.0


def calculate_sla_with_forced_failure(root: Item, forced_failed_id: str) -> float:
    """Composite SLA of ``root`` with ``forced_failed_id`` treated as 0% available."""
    return availability(root, (forced_failed_id, 0.0)) * 100.0
