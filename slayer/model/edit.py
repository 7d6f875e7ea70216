"""Pure tree-edit helpers.

Every helper returns a new tree and leaves its input untouched. Unchanged
subtrees are shared between the old and new tree.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable

from slayer.model.item import Item, find_item


def _rebuild(root: Item, item_id: str, fn: Callable[[Item], Item]) -> Item:
    if root.id == item_id:
        return fn(root)
    if not root.children:
        return root
    children = [_rebuild(child, item_id, fn) for child in root.children]
    if all(new is old for new, old in zip(children, root.children)):
        return root
    return replace(root, children=children)


def _require(root: Item, item_id: str) -> Item:
    item = find_item(root, item_id)
    if item is None:
        raise KeyError(f"Item '{item_id}' not found")
    return item


def update_item(root: Item, item_id: str, **changes: Any) -> Item:
    """Return a tree where ``item_id`` has ``changes`` applied.

    Raises:
        KeyError: If no item has ``item_id``.
    """
    _require(root, item_id)
    return _rebuild(root, item_id, lambda item: replace(item, **changes))


def remove_item(root: Item, item_id: str) -> Item:
    """Return a tree without the subtree rooted at ``item_id``.

    Raises:
        ValueError: If ``item_id`` is the root.
        KeyError: If no item has ``item_id``.
    """
    if root.id == item_id:
        raise ValueError("Cannot remove the root item")
    _require(root, item_id)

    def prune(item: Item) -> Item:
        if not item.children:
            return item
        kept = [prune(child) for child in item.children if child.id != item_id]
        return replace(item, children=kept)

    return prune(root)


def add_child(root: Item, group_id: str, child: Item) -> Item:
    """Return a tree with ``child`` appended to the group ``group_id``.

    Raises:
        KeyError: If no item has ``group_id``.
        ValueError: If the target is a component.
    """
    target = _require(root, group_id)
    if not target.is_group:
        raise ValueError(f"Item '{group_id}' is a component and cannot hold children")
    return _rebuild(
        root, group_id, lambda item: replace(item, children=[*item.children, child])
    )


def inject_failure(root: Item, item_id: str, count: int | None = None) -> Item:
    """Kill ``count`` replicas of ``item_id`` (all of them when None).

    Killing every replica marks the item failed; a partial kill leaves it
    degraded with ``failed_replicas`` set.

    Raises:
        KeyError: If no item has ``item_id``.
    """
    target = _require(root, item_id)
    replicas = target.replica_count
    killed = replicas if count is None else max(0, min(int(count), replicas))
    if killed >= replicas:
        return update_item(root, item_id, is_failed=True, failed_replicas=0)
    return update_item(root, item_id, is_failed=False, failed_replicas=killed)


def restore_item(root: Item, item_id: str) -> Item:
    """Clear chaos overrides on ``item_id``."""
    return update_item(root, item_id, is_failed=False, failed_replicas=0)


def restore_all(root: Item) -> Item:
    """Clear chaos overrides everywhere in the tree."""
    children = [restore_all(child) for child in root.children]
    return replace(root, is_failed=False, failed_replicas=0, children=children)
