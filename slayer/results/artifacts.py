"""Serializable result artifacts for the availability engine.

This module defines dataclasses that capture engine outputs in a
JSON-serializable form:

- `ReliabilityResult`: SLA, incident frequency and MTTR of a subtree
- `BottleneckResult`: items whose improvement most raises the root SLA
- `CalculationStep`: one line of the calculation trace
- `Downtime`, `ErrorBudget`, `DRMetrics`: derived budget and DR figures
- `MonteCarloResult`, `HistogramBin`: simulated yearly downtime
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class ReliabilityResult:
    """Reliability triple of a subtree.

    Attributes:
        sla: Availability percentage in [0, 100].
        frequency: Expected incidents per year.
        mttr: Mean time to recovery in minutes.
    """

    sla: float
    frequency: float
    mttr: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class BottleneckResult:
    """Items whose pinning to 100% most improves the root SLA.

    Attributes:
        ids: Winning item ids (several when tied and equally weak).
        impact: Root SLA gain in percentage points.
    """

    ids: List[str]
    impact: float

    def to_dict(self) -> Dict[str, Any]:
        return {"ids": list(self.ids), "impact": self.impact}


@dataclass(frozen=True)
class CalculationStep:
    """One post-order step of the calculation trace.

    ``formula`` and ``explanation`` are documentation only; ``result``,
    ``mttr_result`` and ``frequency_result`` match the engine's values.
    """

    id: str
    name: str
    type: str
    formula: str
    explanation: str
    input_values: List[str]
    result: float
    mttr_result: Optional[float] = None
    frequency_result: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "formula": self.formula,
            "explanation": self.explanation,
            "inputValues": list(self.input_values),
            "result": self.result,
            "mttrResult": self.mttr_result,
            "frequencyResult": self.frequency_result,
        }


@dataclass(frozen=True)
class Downtime:
    """Expected downtime in minutes for an SLA."""

    per_year: float
    per_month: float
    per_day: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ErrorBudget:
    """Downtime budget for a target SLA over a period.

    ``remaining_seconds`` is clamped at zero while ``is_breached`` reflects the
    unclamped difference, so a breached budget shows zero remaining.
    """

    total_budget_seconds: float
    consumed_seconds: float
    remaining_seconds: float
    is_breached: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


GOAL_MET = "goal met"
GOAL_EXCEEDED = "exceeded"


@dataclass(frozen=True)
class DRMetrics:
    """Rolled-up RTO/RPO compared with targets (all values in minutes).

    Attributes:
        rto: Aggregated recovery time objective of the tree.
        rpo: Aggregated recovery point objective of the tree.
        target_rto: Requested RTO.
        target_rpo: Requested RPO.
        aggregation: Roll-up policy name.
    """

    rto: float
    rpo: float
    target_rto: float
    target_rpo: float
    aggregation: str

    @property
    def rto_met(self) -> bool:
        return self.rto <= self.target_rto

    @property
    def rpo_met(self) -> bool:
        return self.rpo <= self.target_rpo

    @property
    def rto_status(self) -> str:
        return GOAL_MET if self.rto_met else GOAL_EXCEEDED

    @property
    def rpo_status(self) -> str:
        return GOAL_MET if self.rpo_met else GOAL_EXCEEDED

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["rto_status"] = self.rto_status
        data["rpo_status"] = self.rpo_status
        return data


@dataclass(frozen=True)
class HistogramBin:
    """One equal-width bin of a downtime histogram.

    Attributes:
        bin: Bin start in minutes, two decimals.
        count: Samples falling in the bin.
        label: Human-readable ``start - end`` range.
    """

    bin: str
    count: int
    label: str


@dataclass
class MonteCarloResult:
    """Summary of simulated yearly downtime (minutes).

    Attributes:
        iterations: Number of simulated years.
        mean_downtime: Arithmetic mean.
        median_downtime: Sample at index ``floor(n * 0.5)``.
        p95_downtime: Sample at index ``floor(n * 0.95)``.
        p99_downtime: Sample at index ``floor(n * 0.99)``.
        breach_probability: Percentage of years over the allowed downtime.
        distribution: All samples, sorted ascending.
        metadata: Run parameters (rate, MTTR, target, seed, timing).
    """

    iterations: int
    mean_downtime: float
    median_downtime: float
    p95_downtime: float
    p99_downtime: float
    breach_probability: float
    distribution: np.ndarray
    metadata: Dict[str, Any] = field(default_factory=dict)

    def histogram(self, bins: int = 40) -> List[HistogramBin]:
        """Bin the distribution; see ``get_histogram_data``."""
        from slayer.monte_carlo.simulation import get_histogram_data

        return get_histogram_data(self.distribution, bins)

    def histogram_frame(self, bins: int = 40) -> pd.DataFrame:
        """Return the histogram as a DataFrame with bin, count, label columns."""
        rows = [asdict(b) for b in self.histogram(bins)]
        return pd.DataFrame(rows, columns=["bin", "count", "label"])

    def to_dataframe(self) -> pd.DataFrame:
        """Return the sorted samples as a one-column DataFrame."""
        return pd.DataFrame({"downtime_minutes": self.distribution})

    def to_dict(self, include_distribution: bool = False) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary.

        Args:
            include_distribution: Include every sample (10k floats by default).
        """
        data: Dict[str, Any] = {
            "iterations": self.iterations,
            "meanDowntime": self.mean_downtime,
            "medianDowntime": self.median_downtime,
            "p95Downtime": self.p95_downtime,
            "p99Downtime": self.p99_downtime,
            "breachProbability": self.breach_probability,
            "metadata": dict(self.metadata),
        }
        if include_distribution:
            data["distribution"] = [float(v) for v in self.distribution]
        return data
