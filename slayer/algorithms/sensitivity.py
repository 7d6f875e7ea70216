"""Sensitivity analysis over the item tree.

Both analyses recompute the whole tree once per item with that item pinned:

- Bottleneck: pinned to 100%; the items with the largest root SLA gain win.
- Blast radius: pinned to 0%; the fraction of the current root SLA lost.

Each is O(items^2) and meant for trees of realistic size.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from slayer.algorithms.availability import (
    calculate_sla,
    calculate_sla_with_forced_failure,
    calculate_sla_with_override,
)
from slayer.config import ENGINE_CONFIG
from slayer.logging import get_logger
from slayer.model.item import Item, iter_items, iter_with_parent
from slayer.results.artifacts import BottleneckResult
from slayer.types.base import Configuration

logger = get_logger(__name__)


def _in_series_position(parent: Optional[Item]) -> bool:
    """True when a child's failure is not masked by sibling redundancy."""
    if parent is None or parent.config is Configuration.SERIES:
        return True
    return len(parent.children) <= 1


def find_bottleneck(root: Item) -> BottleneckResult:
    """Find the items whose improvement to 100% would most raise the root SLA.

    The root itself is a candidate only when it is the sole item. Failed items
    sitting inside real parallel redundancy are skipped. Among items tied at
    the best gain, only the individually weakest are kept.

    Args:
        root: Tree to analyse.

    Returns:
        ``BottleneckResult`` with the winning ids and the SLA gain. When no
        item improves the SLA the first zero-gain candidate is returned; the
        id list is empty only when every candidate was skipped.
    """
    tolerance = ENGINE_CONFIG.tie_tolerance
    baseline = calculate_sla(root)
    pairs = list(iter_with_parent(root))
    candidates = [(i, p) for i, p in pairs if p is not None] if len(pairs) > 1 else pairs

    max_impact = -1.0
    winners: List[Tuple[str, float]] = []

    for item, parent in candidates:
        if item.is_down and not _in_series_position(parent):
            logger.debug(f"Skipping failed item '{item.id}' behind redundancy")
            continue

        impact = calculate_sla_with_override(root, item.id) - baseline
        individual_sla = calculate_sla(item)
        logger.debug(f"Bottleneck candidate '{item.id}': impact={impact:.12g}")

        if impact > max_impact + tolerance:
            max_impact = impact
            winners = [(item.id, individual_sla)]
        elif abs(impact - max_impact) < tolerance and impact > 0:
            winners.append((item.id, individual_sla))

    if not winners:
        return BottleneckResult(ids=[], impact=0.0)

    if len(winners) > 1:
        lowest = min(sla for _, sla in winners)
        winners = [(i, sla) for i, sla in winners if sla <= lowest + tolerance]

    return BottleneckResult(ids=[i for i, _ in winners], impact=max_impact)


def get_blast_radius_map(root: Item) -> Dict[str, float]:
    """Map each item id to the share of current availability its failure destroys.

    Args:
        root: Tree to analyse.

    Returns:
        Dictionary of item id to a score in [0, 1]. Optional items other
        than the root score 0.
        When the root SLA is already 0, failed items score 1 and all others 0.
    """
    baseline = calculate_sla(root)
    scores: Dict[str, float] = {}

    for item in iter_items(root):
        if baseline <= 0:
            scores[item.id] = 1.0 if item.is_down else 0.0
            continue
        if item.is_optional and item is not root:
            # Excluded from the composite, so its failure costs nothing
            scores[item.id] = 0.0
            continue
        forced = calculate_sla_with_forced_failure(root, item.id)
        scores[item.id] = max(0.0, min(1.0, (baseline - forced) / baseline))

    return scores
