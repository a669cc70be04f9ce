"""Access control list: role tree, resource tree and rules behind one facade."""

from __future__ import annotations

import logging
from typing import Any

from warden_core.acl.models import Operation, Rule, RuleType
from warden_core.acl.registry import ResourceRegistry, RoleRegistry
from warden_core.acl.resolver import resolve_all
from warden_core.acl.rules import RuleStore
from warden_core.interfaces.identity import (
    Assertion,
    Resource,
    Role,
    as_resource,
    as_role,
)

logger = logging.getLogger(__name__)


class AccessControlList:
    """Role/resource/privilege authorization engine.

    Roles and resources each form a single-parent forest. Rules are kept
    most-recent-first; ``is_allowed`` takes the first matching rule and falls
    back to climbing the resource tree, then the role tree. Anything left
    undecided is denied.

    Not thread-safe for mutation; see ``SynchronizedAccessControlList``.
    Roles and resources may be given as objects exposing ``role_id`` /
    ``resource_id`` or as plain string ids.
    """

    def __init__(self) -> None:
        self.roles = RoleRegistry()
        self.resources = ResourceRegistry()
        self.rule_store = RuleStore()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(roles={len(self.roles)}, "
            f"resources={len(self.resources)}, rules={len(self.rule_store)})"
        )

    # -- Roles -----------------------------------------------------------------

    def add_role(self, role: Role | str, parent: Role | str | None = None) -> AccessControlList:
        """Register *role* under *parent*; a parent that would form a cycle is ignored."""
        self.roles.add(role, parent)
        return self

    def get_role(self, role: Role | str | None) -> Role | None:
        return self.roles.get(role)

    def has_role(self, role: Role | str | None) -> bool:
        return self.get_role(role) is not None

    def remove_role(self, role: Role | str | None) -> AccessControlList:
        """Forget *role*. Children keep pointing at its id."""
        self.roles.remove(role)
        return self

    def inherits_role(
        self, role: Role | str | None, parent: Role | str | None, direct: bool = False
    ) -> bool:
        return self.roles.inherits(role, parent, direct)

    def children_of_role(self, role: Role | str | None) -> list[str]:
        return self.roles.children(role)

    # -- Resources -------------------------------------------------------------

    def add_resource(
        self, resource: Resource | str, parent: Resource | str | None = None
    ) -> AccessControlList:
        """Register *resource* under *parent*; a parent that would form a cycle is ignored."""
        self.resources.add(resource, parent)
        return self

    def get_resource(self, resource: Resource | str | None) -> Resource | None:
        return self.resources.get(resource)

    def has_resource(self, resource: Resource | str | None) -> bool:
        return self.get_resource(resource) is not None

    def remove_resource(self, resource: Resource | str | None) -> AccessControlList:
        """Forget *resource*. Children keep pointing at its id."""
        self.resources.remove(resource)
        return self

    def inherits_resource(
        self,
        resource: Resource | str | None,
        parent: Resource | str | None,
        direct: bool = False,
    ) -> bool:
        return self.resources.inherits(resource, parent, direct)

    def children_of_resource(self, resource: Resource | str | None) -> list[str]:
        return self.resources.children(resource)

    # -- Rules -----------------------------------------------------------------

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Snapshot of the rules in evaluation order."""
        return self.rule_store.rules

    def set_rule(
        self,
        operation: Operation,
        rule_type: RuleType,
        role: Role | str | None,
        resource: Resource | str | None,
        *privileges: str,
        assertion: Assertion | None = None,
    ) -> Rule | None:
        return self.rule_store.set_rule(
            operation, rule_type, role, resource, *privileges, assertion=assertion
        )

    def allow(
        self,
        role: Role | str | None = None,
        resource: Resource | str | None = None,
        *privileges: str,
        assertion: Assertion | None = None,
    ) -> Rule | None:
        """Grant *privileges* (all of them when none are named)."""
        return self.set_rule(
            Operation.ADD, RuleType.ALLOW, role, resource, *privileges, assertion=assertion
        )

    def deny(
        self,
        role: Role | str | None = None,
        resource: Resource | str | None = None,
        *privileges: str,
        assertion: Assertion | None = None,
    ) -> Rule | None:
        """Withhold *privileges* (all of them when none are named)."""
        return self.set_rule(
            Operation.ADD, RuleType.DENY, role, resource, *privileges, assertion=assertion
        )

    def remove_allow(
        self,
        role: Role | str | None = None,
        resource: Resource | str | None = None,
        *privileges: str,
    ) -> Rule | None:
        return self.set_rule(Operation.REMOVE, RuleType.ALLOW, role, resource, *privileges)

    def remove_deny(
        self,
        role: Role | str | None = None,
        resource: Resource | str | None = None,
        *privileges: str,
    ) -> Rule | None:
        return self.set_rule(Operation.REMOVE, RuleType.DENY, role, resource, *privileges)

    # -- Queries ---------------------------------------------------------------

    def is_allowed(
        self,
        role: Role | str | None = None,
        resource: Resource | str | None = None,
        *privileges: str,
    ) -> bool:
        """True only if every privilege in *privileges* resolves to allow."""
        return resolve_all(self, as_role(role), as_resource(resource), privileges)

    def is_denied(
        self,
        role: Role | str | None = None,
        resource: Resource | str | None = None,
        *privileges: str,
    ) -> bool:
        return not self.is_allowed(role, resource, *privileges)

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view of the hierarchies and rules, for display."""
        return {
            "roles": {
                rid: {"parent": n.parent_id, "children": list(n.children)}
                for rid, n in self.roles.nodes.items()
            },
            "resources": {
                rid: {"parent": n.parent_id, "children": list(n.children)}
                for rid, n in self.resources.nodes.items()
            },
            "rules": [
                {
                    "type": r.type.value,
                    "role": r.role_id,
                    "resource": r.resource_id,
                    "privilege": None if r.all_privileges else r.privilege,
                    "assertion": r.assertion is not None,
                }
                for r in self.rules
            ],
        }
