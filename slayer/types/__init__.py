"""Shared enums and constants."""

from .base import (
    PERIOD_SECONDS,
    YEAR_MINUTES,
    Configuration,
    DowntimePeriod,
    DRAggregation,
    ItemType,
)

__all__ = [
    "PERIOD_SECONDS",
    "YEAR_MINUTES",
    "Configuration",
    "DowntimePeriod",
    "DRAggregation",
    "ItemType",
]
