"""Probability that at least k of n independent items are up."""

from __future__ import annotations

from typing import Sequence


def k_of_n(probabilities: Sequence[float], k: int) -> float:
    """Return P(at least ``k`` of the Bernoulli trials succeed).

    Dynamic program over ``dp[j]`` = probability that exactly ``j`` of the
    items seen so far are up. One row is kept and updated right to left.

    Args:
        probabilities: Success probability of each item, in [0, 1].
        k: Minimum number of successes.

    Returns:
        Probability in [0, 1]. ``k <= 0`` gives 1 and ``k > n`` gives 0.
    """
    n = len(probabilities)
    if k <= 0:
        return 1.0
    if k > n:
        return 0.0

    dp = [0.0] * (n + 1)
    dp[0] = 1.0
    for i, p in enumerate(probabilities, start=1):
        q = 1.0 - p
        for j in range(i, 0, -1):
            dp[j] = dp[j - 1] * p + dp[j] * q
        dp[0] *= q

    return sum(dp[k:])
