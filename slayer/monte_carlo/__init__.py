"""Monte Carlo simulation of yearly downtime.

Provides the downtime simulator driven by a reliability triple and the
histogram view of its sorted samples.
"""

from .simulation import (
    get_histogram_data,
    run_monte_carlo,
    sample_incident_counts,
    sample_yearly_downtime,
)

__all__ = [
    "run_monte_carlo",
    "get_histogram_data",
    "sample_incident_counts",
    "sample_yearly_downtime",
]
