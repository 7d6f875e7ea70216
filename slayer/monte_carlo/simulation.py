"""Monte Carlo simulation of yearly downtime.

Each simulated year draws an incident count for the yearly rate and one
exponential repair time per incident (mean = MTTR), then sums the repairs.

Incident counts use Box-Muller Gaussian sampling when the rate is above
``EngineConfig.gaussian_threshold`` and the exact Poisson inverse transform
(multiply uniforms until the product drops below ``exp(-rate)``) otherwise.
Repair times use the inverse CDF ``-ln(1 - U) * mttr``. When a batch would
need more than ``EngineConfig.max_repair_draws`` repair samples, each year's
sum is drawn from its exact distribution, ``Gamma(count, mttr)``.

Iterations are split into fixed-size chunks, each with its own generator
derived from the master seed, so a seeded run gives identical samples with or
without worker processes.
"""

from __future__ import annotations

import math
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from slayer.config import ENGINE_CONFIG
from slayer.logging import apply_env_log_level, get_logger, publish_log_level
from slayer.results.artifacts import HistogramBin, MonteCarloResult, ReliabilityResult
from slayer.seed_manager import SeedManager
from slayer.types.base import YEAR_MINUTES
from slayer.utils.formatting import format_duration

logger = get_logger(__name__)

# Samples per chunk; fixed so seeded runs don't depend on parallelism
CHUNK_SIZE = 2500


def sample_incident_counts(
    rng: np.random.Generator,
    rate: float,
    size: int,
    gaussian_threshold: Optional[float] = None,
) -> np.ndarray:
    """Draw ``size`` yearly incident counts for a Poisson rate.

    Args:
        rng: Random generator.
        rate: Expected incidents per year.
        size: Number of years.
        gaussian_threshold: Rate above which the Gaussian approximation is used.

    Returns:
        Integer array of incident counts.
    """
    threshold = (
        ENGINE_CONFIG.gaussian_threshold
        if gaussian_threshold is None
        else gaussian_threshold
    )
    if rate <= 0 or size <= 0:
        return np.zeros(max(size, 0), dtype=np.int64)

    if rate > threshold:
        u1 = 1.0 - rng.random(size)
        u2 = rng.random(size)
        z = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
        approx = np.maximum(0.0, rate + z * math.sqrt(rate))
        # Round half up
        return np.floor(approx + 0.5).astype(np.int64)

    limit = math.exp(-rate)
    draws = np.zeros(size, dtype=np.int64)
    product = np.ones(size)
    active = np.ones(size, dtype=bool)
    while active.any():
        idx = np.flatnonzero(active)
        product[idx] *= rng.random(idx.size)
        draws[idx] += 1
        active[idx] = product[idx] > limit
    return draws - 1


def sample_yearly_downtime(
    rng: np.random.Generator,
    counts: np.ndarray,
    mttr: float,
    max_draws: Optional[int] = None,
) -> np.ndarray:
    """Sum one exponential repair time per incident for every year.

    Args:
        rng: Random generator.
        counts: Incident count per year.
        mttr: Mean repair time in minutes.
        max_draws: Cap on individual repair draws held at once.

    Returns:
        Float array of yearly downtime in minutes.
    """
    limit = ENGINE_CONFIG.max_repair_draws if max_draws is None else max_draws
    downtime = np.zeros(counts.size)
    total = int(counts.sum())
    if total == 0 or mttr <= 0:
        return downtime

    if total <= limit:
        repairs = -np.log1p(-rng.random(total)) * mttr
        owners = np.repeat(np.arange(counts.size), counts)
        return np.bincount(owners, weights=repairs, minlength=counts.size)

    positive = counts > 0
    downtime[positive] = rng.gamma(counts[positive].astype(float), mttr)
    return downtime


def _simulate_chunk(args: Tuple[float, float, int, Optional[int], float, int]) -> np.ndarray:
    """Simulate one chunk of years; module-level so worker processes can pickle it."""
    rate, mttr, size, seed, threshold, max_draws = args
    rng = np.random.default_rng(seed)
    counts = sample_incident_counts(rng, rate, size, threshold)
    return sample_yearly_downtime(rng, counts, mttr, max_draws)


def _worker_init() -> None:
    apply_env_log_level()


def _rate_and_mttr(reliability: Union[ReliabilityResult, Mapping[str, Any]]) -> Tuple[float, float]:
    if isinstance(reliability, Mapping):
        return float(reliability["frequency"]), float(reliability["mttr"])
    return float(reliability.frequency), float(reliability.mttr)


def run_monte_carlo(
    reliability: Union[ReliabilityResult, Mapping[str, Any]],
    target_sla: float,
    iterations: Optional[int] = None,
    *,
    seed: Optional[int] = None,
    parallelism: int = 1,
) -> MonteCarloResult:
    """Simulate yearly downtime and compare it with a target SLA.

    Args:
        reliability: Object or mapping with ``frequency`` (incidents/year) and
            ``mttr`` (minutes), typically from ``calculate_reliability``.
        target_sla: SLA percentage defining the allowed yearly downtime.
        iterations: Simulated years (default ``EngineConfig.monte_carlo_iterations``).
        seed: Master seed for reproducible runs.
        parallelism: Worker processes; 1 runs in-process.

    Returns:
        ``MonteCarloResult`` with summary statistics and the sorted samples.

    Raises:
        ValueError: If ``iterations`` is below 1.
    """
    n = ENGINE_CONFIG.monte_carlo_iterations if iterations is None else int(iterations)
    if n < 1:
        raise ValueError(f"iterations must be >= 1, got {n}")

    rate, mttr = _rate_and_mttr(reliability)
    allowed = YEAR_MINUTES * (1 - target_sla / 100)
    threshold = ENGINE_CONFIG.gaussian_threshold
    max_draws = ENGINE_CONFIG.max_repair_draws

    seed_mgr = SeedManager(seed)
    chunk_args = [
        (
            rate,
            mttr,
            min(CHUNK_SIZE, n - start),
            seed_mgr.derive_seed("monte_carlo", "chunk", index),
            threshold,
            max_draws,
        )
        for index, start in enumerate(range(0, n, CHUNK_SIZE))
    ]

    logger.debug(
        f"Monte Carlo parameters: rate={rate:.6g}/yr, mttr={mttr:.6g}m, "
        f"iterations={n}, chunks={len(chunk_args)}, parallelism={parallelism}"
    )

    start_time = time.time()
    workers = min(max(1, parallelism), len(chunk_args))
    if workers > 1:
        publish_log_level()
        with ProcessPoolExecutor(max_workers=workers, initializer=_worker_init) as pool:
            chunks = list(pool.map(_simulate_chunk, chunk_args))
    else:
        chunks = [_simulate_chunk(args) for args in chunk_args]
    elapsed = time.time() - start_time

    distribution = np.sort(np.concatenate(chunks))
    breaches = int(np.count_nonzero(distribution > allowed))

    result = MonteCarloResult(
        iterations=n,
        mean_downtime=float(distribution.mean()),
        median_downtime=float(distribution[int(math.floor(n * 0.5))]),
        p95_downtime=float(distribution[int(math.floor(n * 0.95))]),
        p99_downtime=float(distribution[int(math.floor(n * 0.99))]),
        breach_probability=100.0 * breaches / n,
        distribution=distribution,
        metadata={
            "frequency": rate,
            "mttr": mttr,
            "target_sla": target_sla,
            "allowed_downtime_minutes": allowed,
            "sampler": "gaussian" if rate > threshold else "poisson",
            "seed": seed,
            "parallelism": workers,
            "elapsed_seconds": elapsed,
        },
    )
    logger.info(
        f"Monte Carlo completed {n} iterations in {elapsed:.2f}s: "
        f"mean={result.mean_downtime:.2f}m, p99={result.p99_downtime:.2f}m, "
        f"breach={result.breach_probability:.2f}%"
    )
    return result


def get_histogram_data(
    distribution: Sequence[float] | np.ndarray, bins: Optional[int] = None
) -> List[HistogramBin]:
    """Partition ``[min, max]`` of the samples into equal-width bins.

    Args:
        distribution: Downtime samples in minutes.
        bins: Number of bins (default ``EngineConfig.histogram_bins``).

    Returns:
        One ``HistogramBin`` per bin; empty when there are no samples. With
        zero range every sample lands in the first bin.

    Raises:
        ValueError: If ``bins`` is below 1.
    """
    nbins = ENGINE_CONFIG.histogram_bins if bins is None else int(bins)
    if nbins < 1:
        raise ValueError(f"bins must be >= 1, got {nbins}")

    values = np.asarray(distribution, dtype=float)
    if values.size == 0:
        return []

    low = float(values.min())
    high = float(values.max())
    width = (high - low) / nbins

    if width > 0:
        index = np.minimum(np.floor((values - low) / width).astype(np.int64), nbins - 1)
    else:
        index = np.zeros(values.size, dtype=np.int64)
    counts = np.bincount(index, minlength=nbins)

    histogram = []
    for i in range(nbins):
        start = low + i * width
        end = low + (i + 1) * width
        histogram.append(
            HistogramBin(
                bin=f"{start:.2f}",
                count=int(counts[i]),
                label=f"{format_duration(start)} - {format_duration(end)}",
            )
        )
    return histogram
