"""Configuration classes for the slayer engine."""

from dataclasses import dataclass

from slayer.types.base import DRAggregation


@dataclass
class EngineConfig:
    """Tunable constants of the availability and simulation engines."""

    # Mean time to recovery (minutes) assumed when an item sets none
    default_mttr_minutes: float = 60.0

    # Incident frequency (per year) reported for a failed item
    failed_frequency: float = 999999.0

    # Above this yearly rate, incident counts use the Gaussian approximation
    gaussian_threshold: float = 100.0

    # Simulated years per Monte Carlo run
    monte_carlo_iterations: int = 10000

    # Default number of histogram bins for simulation output
    histogram_bins: int = 40

    # Tolerance used when comparing sensitivity impacts and SLAs
    tie_tolerance: float = 1e-12

    # Cap on exponential repair draws held in memory for one batch
    max_repair_draws: int = 5_000_000

    # Default RTO/RPO roll-up policy
    dr_aggregation: DRAggregation = DRAggregation.MAX

    def resolve_mttr(self, mttr: float | None) -> float:
        """Return ``mttr`` or the default when it is unset or non-positive."""
        if mttr is None or mttr <= 0:
            return self.default_mttr_minutes
        return float(mttr)


# Global configuration instance
ENGINE_CONFIG = EngineConfig()
