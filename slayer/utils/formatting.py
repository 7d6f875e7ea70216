"""Human-readable formatting of SLA percentages and durations."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal

_SLA_DECIMALS = Decimal("1e-12")


def format_sla_percentage(value: float) -> str:
    """Format an SLA percentage without ever rounding it up.

    The value is truncated to 12 decimals and fractional digits are kept up to
    and including the first digit that is not a 9, so ``99.95`` stays
    ``"99.95"`` and ``99.999999999`` never becomes ``"100"``.

    Args:
        value: Percentage.

    Returns:
        ``"100"`` for values at or above 100, ``"0"`` at or below 0.
    """
    if value >= 100:
        return "100"
    if value <= 0:
        return "0"

    truncated = Decimal(repr(float(value))).quantize(_SLA_DECIMALS, rounding=ROUND_DOWN)
    int_part, frac_part = f"{truncated:f}".split(".")

    digits = []
    for digit in frac_part:
        digits.append(digit)
        if digit != "9":
            break

    return f"{int_part}.{''.join(digits)}"


def format_duration(minutes: float) -> str:
    """Format a duration in minutes as ``"1d 2h 3m 4s"``.

    Zero-valued units are dropped. Non-positive input gives ``"0s"`` and
    anything under one second gives ``"< 1s"``.
    """
    if minutes <= 0:
        return "0s"
    if minutes < 0.017:
        return "< 1s"

    total_seconds = int(round(minutes * 60))
    days, rest = divmod(total_seconds, 24 * 60 * 60)
    hours, rest = divmod(rest, 60 * 60)
    mins, secs = divmod(rest, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if mins > 0:
        parts.append(f"{mins}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")

    return " ".join(parts)
