"""Availability, reliability and sensitivity algorithms."""

from .availability import (
    calculate_sla,
    calculate_sla_with_forced_failure,
    calculate_sla_with_override,
)
from .budget import (
    calculate_dr_metrics,
    calculate_error_budget,
    get_downtime,
    sla_from_downtime,
)
from .kofn import k_of_n
from .reliability import calculate_reliability
from .sensitivity import find_bottleneck, get_blast_radius_map
from .trace import get_calculation_steps

__all__ = [
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
]
