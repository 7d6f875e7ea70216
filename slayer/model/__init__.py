"""Tree model and pure edit helpers."""

from .edit import (
    add_child,
    inject_failure,
    remove_item,
    restore_all,
    restore_item,
    update_item,
)
from .item import Item, find_item, iter_items, iter_with_parent
from .templates import default_system, empty_system

__all__ = [
    "Item",
    "find_item",
    "iter_items",
    "iter_with_parent",
    "add_child",
    "inject_failure",
    "remove_item",
    "restore_all",
    "restore_item",
    "update_item",
    "default_system",
    "empty_system",
]
