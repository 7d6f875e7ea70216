"""Result artifacts."""

from .artifacts import (
    GOAL_EXCEEDED,
    GOAL_MET,
    BottleneckResult,
    CalculationStep,
    Downtime,
    DRMetrics,
    ErrorBudget,
    HistogramBin,
    MonteCarloResult,
    ReliabilityResult,
)

__all__ = [
    "GOAL_EXCEEDED",
    "GOAL_MET",
    "BottleneckResult",
    "CalculationStep",
    "Downtime",
    "DRMetrics",
    "ErrorBudget",
    "HistogramBin",
    "MonteCarloResult",
    "ReliabilityResult",
]
