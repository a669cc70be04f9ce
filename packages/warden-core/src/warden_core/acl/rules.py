"""Precedence-ordered rule store."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from warden_core.acl.models import Operation, Rule, RuleType
from warden_core.interfaces.identity import Assertion, as_resource, as_role

logger = logging.getLogger(__name__)


class RuleStore:
    """Ordered allow/deny rules, most recently added first.

    New rules are inserted at index 0, so iteration order is evaluation order.
    """

    def __init__(self) -> None:
        self._rules: list[Rule] = []

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def clear(self) -> None:
        self._rules.clear()

    def set_rule(
        self,
        operation: Operation,
        rule_type: RuleType,
        role: Any,
        resource: Any,
        *privileges: str,
        assertion: Assertion | None = None,
    ) -> Rule | None:
        """Add or remove rules; returns the last rule added or removed."""
        role = as_role(role)
        resource = as_resource(resource)
        if operation is Operation.ADD:
            return self._add(rule_type, role, resource, privileges, assertion)
        return self._remove(rule_type, role, resource, privileges)

    def _add(self, rule_type, role, resource, privileges, assertion) -> Rule:
        if not privileges:
            rule = Rule(
                type=rule_type,
                role=role,
                resource=resource,
                all_privileges=True,
                assertion=assertion,
            )
            self._rules.insert(0, rule)
            return rule

        rule = None
        for privilege in privileges:
            rule = Rule(
                type=rule_type,
                role=role,
                resource=resource,
                privilege=privilege,
                assertion=assertion,
            )
            self._rules.insert(0, rule)
        return rule

    def _remove(self, rule_type, role, resource, privileges) -> Rule | None:
        role_id = role.role_id if role is not None else None
        resource_id = resource.resource_id if resource is not None else None

        def same_slots(rule: Rule) -> bool:
            return (
                rule.type is rule_type
                and rule.role_id == role_id
                and rule.resource_id == resource_id
            )

        if not privileges:
            removed = [r for r in self._rules if same_slots(r) and r.all_privileges]
        else:
            wanted = set(privileges)
            removed = [
                r
                for r in self._rules
                if same_slots(r)
                and not r.all_privileges
                and r.privilege in wanted
                and r.assertion is None
            ]

        if not removed:
            return None
        drop = {id(r) for r in removed}
        self._rules = [r for r in self._rules if id(r) not in drop]
        logger.debug("Removed %d %s rule(s)", len(removed), rule_type.value)
        return removed[-1]
