"""One-call analysis of an item tree.

``analyze()`` runs every engine over a tree snapshot and bundles the outputs
in an ``AnalysisReport``. Nothing is cached; call it again after each edit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from slayer.algorithms.availability import calculate_sla
from slayer.algorithms.budget import get_downtime
from slayer.algorithms.reliability import calculate_reliability
from slayer.algorithms.sensitivity import find_bottleneck, get_blast_radius_map
from slayer.algorithms.trace import get_calculation_steps
from slayer.logging import get_logger
from slayer.model.item import Item
from slayer.monte_carlo.simulation import run_monte_carlo
from slayer.results.artifacts import (
    BottleneckResult,
    CalculationStep,
    Downtime,
    MonteCarloResult,
    ReliabilityResult,
)
from slayer.utils.formatting import format_sla_percentage

logger = get_logger(__name__)


@dataclass
class AnalysisReport:
    """Engine outputs for one tree snapshot.

    Attributes:
        composite_sla: Root SLA percentage.
        downtime: Expected downtime for the composite SLA.
        reliability: Root reliability triple.
        bottleneck: Items whose improvement most raises the SLA.
        blast_radius: Item id to share of availability lost on failure.
        steps: Post-order calculation trace.
        monte_carlo: Simulation against the target, when requested.
    """

    composite_sla: float
    downtime: Downtime
    reliability: ReliabilityResult
    bottleneck: BottleneckResult
    blast_radius: Dict[str, float]
    steps: List[CalculationStep]
    monte_carlo: Optional[MonteCarloResult] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "compositeSla": self.composite_sla,
            "compositeSlaText": format_sla_percentage(self.composite_sla),
            "downtime": self.downtime.to_dict(),
            "reliability": self.reliability.to_dict(),
            "bottleneck": self.bottleneck.to_dict(),
            "blastRadius": dict(self.blast_radius),
            "steps": [step.to_dict() for step in self.steps],
            "monteCarlo": self.monte_carlo.to_dict() if self.monte_carlo else None,
        }


def analyze(
    root: Item,
    target_sla: Optional[float] = None,
    *,
    monte_carlo: bool = False,
    iterations: Optional[int] = None,
    seed: Optional[int] = None,
) -> AnalysisReport:
    """Run every engine over ``root``.

    Args:
        root: Tree snapshot.
        target_sla: SLA the simulation is measured against; defaults to the
            composite SLA.
        monte_carlo: Also run the downtime simulation.
        iterations: Simulated years when ``monte_carlo`` is set.
        seed: Seed for the simulation.

    Returns:
        ``AnalysisReport`` for the snapshot.
    """
    composite = calculate_sla(root)
    reliability = calculate_reliability(root)
    logger.debug(
        f"Analyzing '{root.id}': sla={composite:.12g}, "
        f"frequency={reliability.frequency:.6g}, mttr={reliability.mttr:.6g}"
    )

    simulation = None
    if monte_carlo:
        target = composite if target_sla is None else target_sla
        simulation = run_monte_carlo(reliability, target, iterations, seed=seed)

    return AnalysisReport(
        composite_sla=composite,
        downtime=get_downtime(composite),
        reliability=reliability,
        bottleneck=find_bottleneck(root),
        blast_radius=get_blast_radius_map(root),
        steps=get_calculation_steps(root),
        monte_carlo=simulation,
    )
