"""Third-party library integrations."""

from .nx import to_networkx

__all__ = ["to_networkx"]
