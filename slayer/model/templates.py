"""Ready-made trees."""

from __future__ import annotations

from slayer.model.item import Item
from slayer.types.base import Configuration


def default_system() -> Item:
    """Return the example cloud system: DNS, ingress, app tier and data tier."""
    return Item.group(
        "root",
        "Cloud Infrastructure",
        Configuration.SERIES,
        [
            Item.component("dns", "Global DNS (Route53)", 99.99),
            Item.group(
                "ingress",
                "Edge Ingress",
                Configuration.PARALLEL,
                [
                    Item.component("lb-1", "Primary Load Balancer", 99.99),
                    Item.component("lb-2", "Secondary Load Balancer", 99.99),
                ],
            ),
            Item.group(
                "app-layer",
                "Application Tier",
                Configuration.SERIES,
                [
                    Item.component("web-api", "API Microservices", 99.9, replicas=3),
                    Item.component("auth-service", "Auth Service", 99.95, replicas=2),
                ],
            ),
            Item.group(
                "data-layer",
                "Data Tier",
                Configuration.PARALLEL,
                [
                    Item.component("db-primary", "Aurora Primary", 99.95, rto=15, rpo=5),
                    Item.component("db-replica", "Aurora Replica", 99.95, rto=30, rpo=1),
                ],
            ),
        ],
    )


def empty_system() -> Item:
    """Return an empty series root."""
    return Item.group("root", "New System", Configuration.SERIES, [])
