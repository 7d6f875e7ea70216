"""slayer: composite SLA and reliability engine.

slayer computes the availability of a tree of infrastructure components and
groups (series, parallel with failover, k-of-n, replicas), together with
incident frequency and MTTR, bottleneck and blast-radius sensitivity, error
budgets, RTO/RPO roll-ups and a Monte Carlo distribution of yearly downtime.

Primary API:
    Item - Tree node (component or group)
    calculate_sla() - Composite SLA percentage
    calculate_reliability() - SLA, incidents/year and MTTR
    find_bottleneck(), get_blast_radius_map() - Sensitivity analysis
    run_monte_carlo() - Simulated yearly downtime
    analyze() - Everything above in one report

Example:
    from slayer import Item, analyze, calculate_sla

    root = Item.group("root", "System", "series", [
        Item.component("api", "API", 99.9, replicas=2),
        Item.component("db", "Database", 99.95),
    ])
    calculate_sla(root)
    report = analyze(root, target_sla=99.9, monte_carlo=True, seed=7)
"""

from __future__ import annotations

from slayer import logging
from slayer._version import __version__
from slayer.algorithms import (
    calculate_dr_metrics,
    calculate_error_budget,
    calculate_reliability,
    calculate_sla,
    calculate_sla_with_forced_failure,
    calculate_sla_with_override,
    find_bottleneck,
    get_blast_radius_map,
    get_calculation_steps,
    get_downtime,
    k_of_n,
    sla_from_downtime,
)
from slayer.analysis import AnalysisReport, analyze
from slayer.config import ENGINE_CONFIG, EngineConfig
from slayer.lib.nx import to_networkx
from slayer.model import Item, default_system, empty_system
from slayer.monte_carlo import get_histogram_data, run_monte_carlo
from slayer.results import (
    BottleneckResult,
    CalculationStep,
    Downtime,
    DRMetrics,
    ErrorBudget,
    HistogramBin,
    MonteCarloResult,
    ReliabilityResult,
)
from slayer.types.base import Configuration, DowntimePeriod, DRAggregation, ItemType
from slayer.utils.formatting import format_duration, format_sla_percentage

__all__ = [
    # Version
    "__version__",
    # Model
    "Item",
    "ItemType",
    "Configuration",
    "default_system",
    "empty_system",
    # Engines
    "k_of_n",
    "calculate_sla",
    "calculate_sla_with_override",
    "calculate_sla_with_forced_failure",
    "calculate_reliability",
    "find_bottleneck",
    "get_blast_radius_map",
    "get_calculation_steps",
    "calculate_error_budget",
    "calculate_dr_metrics",
    "get_downtime",
    "sla_from_downtime",
    "run_monte_carlo",
    "get_histogram_data",
    # Analysis (one-call API)
    "analyze",
    "AnalysisReport",
    # Results
    "BottleneckResult",
    "CalculationStep",
    "Downtime",
    "DRMetrics",
    "ErrorBudget",
    "HistogramBin",
    "MonteCarloResult",
    "ReliabilityResult",
    # Types and configuration
    "DowntimePeriod",
    "DRAggregation",
    "EngineConfig",
    "ENGINE_CONFIG",
    # Formatting
    "format_duration",
    "format_sla_percentage",
    # Library integrations (NetworkX)
    "to_networkx",
    # Utilities
    "logging",
]
