"""Decision procedure for allow/deny queries.

A query is first matched against the rule store as-is. On a miss the resolver
climbs the resource tree for the same role until it runs out of parents, and
only then climbs the role tree, pairing every role ancestor with the resource
where the resource climb stopped. Role and resource ancestors are never
combined as a cross product.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from warden_core.acl.models import Rule, RuleType
from warden_core.interfaces.identity import Resource, Role

if TYPE_CHECKING:
    from warden_core.acl.acl import AccessControlList

logger = logging.getLogger(__name__)


def first_match(
    acl: AccessControlList,
    role: Role | None,
    resource: Resource | None,
    privilege: str,
) -> Rule | None:
    """Return the rule that decides (role, resource, privilege) at this level."""
    for rule in acl.rule_store:
        if not rule.matches(role, resource, privilege):
            continue
        if rule.assertion is not None and not rule.assertion(acl, role, resource, privilege):
            continue
        return rule
    return None


def resolve(
    acl: AccessControlList,
    role: Role | None,
    resource: Resource | None,
    privilege: str,
) -> bool:
    """Decide a single privilege, climbing the resource tree then the role tree."""
    while True:
        rule = first_match(acl, role, resource, privilege)
        if rule is not None:
            logger.debug(
                "%r on %r for %r decided by: %s",
                role.role_id if role is not None else None,
                resource.resource_id if resource is not None else None,
                privilege,
                rule.describe(),
            )
            return rule.type is RuleType.ALLOW

        parent_resource = acl.resources.parent(resource) if resource is not None else None
        if parent_resource is not None:
            resource = parent_resource
            continue

        parent_role = acl.roles.parent(role) if role is not None else None
        if parent_role is not None:
            role = parent_role
            continue

        return False


def resolve_all(
    acl: AccessControlList,
    role: Role | None,
    resource: Resource | None,
    privileges: tuple[str, ...],
) -> bool:
    """Conjunction over *privileges*; no privileges asks for all of them."""
    if not privileges:
        return resolve(acl, role, resource, "")
    return all(resolve(acl, role, resource, p) for p in privileges)
