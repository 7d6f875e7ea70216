"""Formatting helpers."""

from .formatting import format_duration, format_sla_percentage

__all__ = ["format_duration", "format_sla_percentage"]
