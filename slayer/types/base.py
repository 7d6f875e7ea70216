"""Base enums and constants shared by the availability engine."""

from __future__ import annotations

from enum import Enum

#: Minutes in an average (Julian) year.
YEAR_MINUTES = 365.25 * 24 * 60

#: Seconds in each supported downtime period.
PERIOD_SECONDS = {
    "year": 365.25 * 24 * 60 * 60,
    "month": (365.25 * 24 * 60 * 60) / 12,
    "day": 24 * 60 * 60,
}


class _StrEnum(str, Enum):
    """String-valued enum parsed case-insensitively from plain data."""

    @classmethod
    def from_string(cls, value: str):
        """Parse a string into an enum member.

        Args:
            value: Case-insensitive member value or name (e.g. "parallel").

        Returns:
            The corresponding enum member.

        Raises:
            ValueError: If the string doesn't match any enum member.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized or member.name.lower() == normalized:
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(
            f"Invalid {cls.__name__} '{value}'. Valid values are: {valid}"
        ) from None

    def __str__(self) -> str:
        return self.value


class ItemType(_StrEnum):
    """Kind of tree node."""

    COMPONENT = "component"
    GROUP = "group"


class Configuration(_StrEnum):
    """How a group composes its children."""

    #: Every child is required.
    SERIES = "series"
    #: Children are redundant; the first child is primary.
    PARALLEL = "parallel"


class DowntimePeriod(_StrEnum):
    """Accounting window for downtime budgets."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"

    @property
    def seconds(self) -> float:
        """Length of the period in seconds."""
        return PERIOD_SECONDS[self.value]


class DRAggregation(_StrEnum):
    """Roll-up policy for RTO/RPO values across the tree."""

    #: Worst value found anywhere in the tree.
    MAX = "max"
    #: Own value plus the worst child path, summed along the deepest chain.
    CRITICAL_PATH = "critical_path"
