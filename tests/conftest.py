"""Shared fixtures: small trees with known composite SLAs."""

from __future__ import annotations

import pytest

from slayer.model.item import Item
from slayer.model.templates import default_system


@pytest.fixture
def series_pair() -> Item:
    """Series of 99% and 99.9%; composite 98.901%."""
    return Item.group(
        "root",
        "Series",
        "series",
        [Item.component("a", "A", 99.0), Item.component("b", "B", 99.9)],
    )


@pytest.fixture
def parallel_pair() -> Item:
    """Two 90% components in parallel with a perfect switch; composite 99%."""
    return Item.group(
        "root",
        "Parallel",
        "parallel",
        [Item.component("a", "A", 90.0), Item.component("b", "B", 90.0)],
    )


@pytest.fixture
def layered_system() -> Item:
    """Series of a weak DB, a redundant web pair and an optional cache."""
    return Item.group(
        "root",
        "System",
        "series",
        [
            Item.component("db", "Database", 99.0, mttr=120),
            Item.group(
                "web",
                "Web",
                "parallel",
                [Item.component("web-1", "Web 1", 99.5), Item.component("web-2", "Web 2", 99.5)],
            ),
            Item.component("cache", "Cache", 50.0, is_optional=True),
        ],
    )


@pytest.fixture
def cloud_system() -> Item:
    return default_system()
