"""Tree model: components and groups.

An ``Item`` is either a leaf component with its own SLA or a group that
composes its ordered children in series or in parallel. Both kinds may be
replicated. The engine treats a tree as an immutable value; edits produce new
trees (see ``slayer.model.edit``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from slayer.types.base import Configuration, ItemType

# Plain-data key -> dataclass attribute, for fields whose names differ.
_CAMEL_KEYS = {
    "minReplicasRequired": "min_replicas_required",
    "minChildrenRequired": "min_children_required",
    "failoverSla": "failover_sla",
    "isOptional": "is_optional",
    "isFailed": "is_failed",
    "failedReplicas": "failed_replicas",
}
_PLAIN_KEYS = ("id", "name", "sla", "replicas", "mttr", "rto", "rpo", "icon", "notes")


@dataclass
class Item:
    """A node of the availability tree.

    Attributes:
        id: Unique, stable identity.
        name: Display label.
        type: ``component`` or ``group``.
        sla: Own availability percentage in [0, 100]; components only.
        replicas: Redundant instances of this node (components and groups).
        min_replicas_required: Instances that must be up (k of ``replicas``).
        config: ``series`` or ``parallel``; groups only.
        min_children_required: Children that must be up in a parallel group.
        failover_sla: Percentage reliability of the failover switch.
        is_optional: Excluded from the composite (counts as 100%).
        is_failed: Chaos override; contributes 0%.
        failed_replicas: Chaos override killing some replicas.
        mttr: Mean time to recovery in minutes; None means the default.
        rto: Recovery time objective in minutes.
        rpo: Recovery point objective in minutes.
        icon: Display-only icon name.
        notes: Display-only annotation.
        children: Ordered children; the first is primary in parallel groups.
    """

    id: str
    name: str = ""
    type: ItemType = ItemType.COMPONENT
    sla: Optional[float] = None
    replicas: int = 1
    min_replicas_required: int = 1
    config: Configuration = Configuration.SERIES
    min_children_required: int = 1
    failover_sla: float = 100.0
    is_optional: bool = False
    is_failed: bool = False
    failed_replicas: int = 0
    mttr: Optional[float] = None
    rto: Optional[float] = None
    rpo: Optional[float] = None
    icon: Optional[str] = None
    notes: Optional[str] = None
    children: List[Item] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.type = ItemType.from_string(self.type)
        self.config = Configuration.from_string(self.config)

    @classmethod
    def component(cls, id: str, name: str = "", sla: float = 100.0, **kwargs: Any) -> Item:
        """Build a leaf component."""
        return cls(id=id, name=name or id, type=ItemType.COMPONENT, sla=sla, **kwargs)

    @classmethod
    def group(
        cls,
        id: str,
        name: str = "",
        config: Configuration | str = Configuration.SERIES,
        children: Optional[List[Item]] = None,
        **kwargs: Any,
    ) -> Item:
        """Build a group over ``children``."""
        return cls(
            id=id,
            name=name or id,
            type=ItemType.GROUP,
            config=config,
            children=list(children or []),
            **kwargs,
        )

    @property
    def is_group(self) -> bool:
        return self.type is ItemType.GROUP

    @property
    def own_sla(self) -> float:
        """Own SLA percentage with the default applied."""
        return 100.0 if self.sla is None else float(self.sla)

    @property
    def replica_count(self) -> int:
        """Configured replicas, never below one."""
        return max(1, int(self.replicas or 1))

    @property
    def alive_replicas(self) -> int:
        """Replicas left after chaos injection."""
        return max(0, self.replica_count - max(0, int(self.failed_replicas or 0)))

    @property
    def is_down(self) -> bool:
        """True when the node is failed outright or every replica is killed."""
        return self.is_failed or self.alive_replicas == 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Item:
        """Build a tree from its plain-data (camelCase) mapping.

        Absent keys take their defaults; ``None`` values are treated as absent.

        Args:
            data: Mapping with ``id``, ``type`` and optional fields.

        Returns:
            The root ``Item`` with children built recursively.

        Raises:
            ValueError: If ``type`` or ``config`` is not a known value.
        """
        kwargs: Dict[str, Any] = {}
        for key in _PLAIN_KEYS:
            if data.get(key) is not None:
                kwargs[key] = data[key]
        for key, attr in _CAMEL_KEYS.items():
            if data.get(key) is not None:
                kwargs[attr] = data[key]
        if data.get("type") is not None:
            kwargs["type"] = ItemType.from_string(data["type"])
        if data.get("config") is not None:
            kwargs["config"] = Configuration.from_string(data["config"])
        kwargs["children"] = [cls.from_dict(child) for child in data.get("children") or []]
        kwargs.setdefault("name", kwargs.get("id", ""))
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Return the plain-data (camelCase) mapping, omitting defaults."""
        data: Dict[str, Any] = {"id": self.id, "name": self.name, "type": self.type.value}
        if self.is_group:
            data["config"] = self.config.value
        elif self.sla is not None:
            data["sla"] = self.sla
        defaults = _DEFAULTS
        for key in _PLAIN_KEYS[3:]:
            value = getattr(self, key)
            if value != defaults[key]:
                data[key] = value
        for key, attr in _CAMEL_KEYS.items():
            value = getattr(self, attr)
            if value != defaults[attr]:
                data[key] = value
        if self.is_group:
            data["children"] = [child.to_dict() for child in self.children]
        return data


_DEFAULTS: Dict[str, Any] = {
    "replicas": 1,
    "mttr": None,
    "rto": None,
    "rpo": None,
    "icon": None,
    "notes": None,
    "min_replicas_required": 1,
    "min_children_required": 1,
    "failover_sla": 100.0,
    "is_optional": False,
    "is_failed": False,
    "failed_replicas": 0,
}


def iter_items(root: Item) -> Iterator[Item]:
    """Yield ``root`` and every descendant in pre-order."""
    yield root
    for child in root.children:
        yield from iter_items(child)


def find_item(root: Item, item_id: str) -> Optional[Item]:
    """Return the first item whose id is ``item_id``, or None."""
    for item in iter_items(root):
        if item.id == item_id:
            return item
    return None


def iter_with_parent(
    root: Item, parent: Optional[Item] = None
) -> Iterator[tuple[Item, Optional[Item]]]:
    """Yield ``(item, parent)`` pairs in pre-order; the root's parent is None."""
    yield root, parent
    for child in root.children:
        yield from iter_with_parent(child, root)
