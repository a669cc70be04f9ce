"""Role and resource hierarchies.

Both hierarchies are forests: every node has at most one parent. Nodes are
kept in an index keyed by identifier and refer to each other by identifier,
so removing a node simply leaves dangling ids behind that fail later lookups.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import Any, Generic, TypeVar

from warden_core.acl.models import HierarchyNode
from warden_core.interfaces.identity import Resource, Role, as_resource, as_role

logger = logging.getLogger(__name__)

T = TypeVar("T")


def inherits(
    nodes: Mapping[str, HierarchyNode[Any]],
    child_id: str,
    ancestor_id: str,
    direct: bool = False,
) -> bool:
    """Return True if *ancestor_id* is above *child_id* in the tree.

    With ``direct=True`` only the immediate parent counts. Pure function over
    the index; a walk that meets an id twice stops, so a corrupted index can
    never loop forever.
    """
    node = nodes.get(child_id)
    if node is None or node.parent_id is None:
        return False
    if node.parent_id == ancestor_id:
        return True
    if direct:
        return False

    seen = {child_id}
    current = node.parent_id
    while current is not None and current not in seen:
        if current == ancestor_id:
            return True
        seen.add(current)
        parent = nodes.get(current)
        if parent is None:
            return False
        current = parent.parent_id
    return False


class HierarchyRegistry(ABC, Generic[T]):
    """Id-indexed forest shared by the role and resource registries."""

    kind = "node"

    def __init__(self) -> None:
        self._nodes: dict[str, HierarchyNode[T]] = {}

    # -- Hooks -----------------------------------------------------------------

    @abstractmethod
    def _coerce(self, value: Any) -> T | None: ...

    @abstractmethod
    def _id(self, instance: T) -> str: ...

    # -- Queries ---------------------------------------------------------------

    def __contains__(self, value: object) -> bool:
        return self.get(value) is not None

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[T]:
        return (node.instance for node in self._nodes.values())

    @property
    def nodes(self) -> Mapping[str, HierarchyNode[T]]:
        return self._nodes

    def node(self, value: Any) -> HierarchyNode[T] | None:
        instance = self._coerce(value)
        if instance is None:
            return None
        return self._nodes.get(self._id(instance))

    def get(self, value: Any) -> T | None:
        node = self.node(value)
        return node.instance if node is not None else None

    def parent(self, value: Any) -> T | None:
        """Registered parent of *value*, or None at a root or dangling link."""
        node = self.node(value)
        if node is None or node.parent_id is None:
            return None
        parent = self._nodes.get(node.parent_id)
        return parent.instance if parent is not None else None

    def children(self, value: Any) -> list[str]:
        node = self.node(value)
        return list(node.children) if node is not None else []

    def roots(self) -> list[T]:
        return [n.instance for n in self._nodes.values() if n.parent_id is None]

    def inherits(self, value: Any, parent: Any, direct: bool = False) -> bool:
        child = self._coerce(value)
        ancestor = self._coerce(parent)
        if child is None or ancestor is None:
            return False
        return inherits(self._nodes, self._id(child), self._id(ancestor), direct)

    # -- Mutation --------------------------------------------------------------

    def add(self, value: Any, parent: Any = None) -> T:
        """Register *value*, linking it under *parent* unless that makes a cycle.

        Re-adding an id replaces its node and drops its previous links.
        """
        instance = self._coerce(value)
        if instance is None:
            raise TypeError(f"Cannot register None as a {self.kind}")
        node_id = self._id(instance)
        node: HierarchyNode[T] = HierarchyNode(instance=instance)
        self._nodes[node_id] = node

        parent_instance = self._coerce(parent)
        if parent_instance is None:
            return instance

        parent_id = self._id(parent_instance)
        if parent_id == node_id or inherits(self._nodes, parent_id, node_id):
            logger.debug(
                "Skipping %s parent %r for %r: would create a cycle",
                self.kind,
                parent_id,
                node_id,
            )
            return instance

        node.parent_id = parent_id
        parent_node = self._nodes.get(parent_id)
        if parent_node is not None:
            parent_node.children.append(node_id)
        else:
            # unknown parents become roots so the link can be climbed
            self._nodes[parent_id] = HierarchyNode(instance=parent_instance, children=[node_id])
        return instance

    def remove(self, value: Any) -> None:
        instance = self._coerce(value)
        if instance is None:
            return
        if self._nodes.pop(self._id(instance), None) is not None:
            logger.debug("Removed %s %r", self.kind, self._id(instance))


class RoleRegistry(HierarchyRegistry[Role]):
    """Forest of roles."""

    kind = "role"

    def _coerce(self, value: Any) -> Role | None:
        return as_role(value)

    def _id(self, instance: Role) -> str:
        return instance.role_id


class ResourceRegistry(HierarchyRegistry[Resource]):
    """Forest of resources."""

    kind = "resource"

    def _coerce(self, value: Any) -> Resource | None:
        return as_resource(value)

    def _id(self, instance: Resource) -> str:
        return instance.resource_id
