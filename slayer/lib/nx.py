"""NetworkX export of an item tree.

Example:
    >>> from slayer.lib.nx import to_networkx
    >>> from slayer.model import default_system
    >>>
    >>> G = to_networkx(default_system())
    >>> G.nodes["ingress"]["config"]
    'parallel'
    >>> G.edges["ingress", "lb-1"]["order"]
    0
"""

from __future__ import annotations

import networkx as nx

from slayer.algorithms.availability import calculate_sla
from slayer.model.item import Item, iter_items


def to_networkx(root: Item) -> nx.DiGraph:
    """Convert a tree into a directed graph of parent -> child edges.

    Node attributes: ``name``, ``type``, ``config`` (groups only), ``sla``
    (computed composite SLA of the subtree), ``replicas``, ``is_optional`` and
    ``is_failed``. Edge attribute ``order`` is the child index; 0 is the
    primary of a parallel group.

    Args:
        root: Tree to convert.

    Returns:
        A ``networkx.DiGraph`` keyed by item id.
    """
    G = nx.DiGraph()
    for item in iter_items(root):
        G.add_node(
            item.id,
            name=item.name,
            type=item.type.value,
            config=item.config.value if item.is_group else None,
            sla=calculate_sla(item),
            replicas=item.replica_count,
            is_optional=item.is_optional,
            is_failed=item.is_down,
        )
        for order, child in enumerate(item.children):
            G.add_edge(item.id, child.id, order=order)
    return G
