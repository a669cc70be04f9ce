"""Tests for the rule store: precedence order, wildcards and removal."""

from __future__ import annotations

import pytest

from warden_core.acl import AccessControlList, Operation, Rule, RuleStore, RuleType
from warden_core.interfaces import GenericResource, GenericRole


def _summary(rules) -> list[tuple]:
    return [
        (r.type.value, r.role_id, r.resource_id, None if r.all_privileges else r.privilege)
        for r in rules
    ]


# ── Adding ────────────────────────────────────────────────────────────


def test_store_starts_empty(acl: AccessControlList):
    assert acl.rules == ()


def test_allow_without_privileges_is_all_privileges(acl: AccessControlList):
    rule = acl.allow("admin", None)
    assert rule.all_privileges is True
    assert rule.type is RuleType.ALLOW
    assert acl.rules == (rule,)


def test_new_rules_go_to_front(acl: AccessControlList):
    acl.allow("guest", None, "view")
    acl.deny("guest", None, "view")
    assert _summary(acl.rules) == [
        ("deny", "guest", None, "view"),
        ("allow", "guest", None, "view"),
    ]


def test_last_privilege_ends_up_frontmost(acl: AccessControlList):
    last = acl.allow("staff", None, "edit", "submit", "revise")
    assert [r.privilege for r in acl.rules] == ["revise", "submit", "edit"]
    assert last is acl.rules[0]


def test_wildcards_stored_as_none(acl: AccessControlList):
    rule = acl.deny(None, None, "delete")
    assert rule.role is None
    assert rule.resource is None
    assert rule.role_id is None
    assert rule.resource_id is None


def test_string_ids_coerced(acl: AccessControlList):
    rule = acl.allow("guest", "news", "view")
    assert rule.role == GenericRole(role_id="guest")
    assert rule.resource == GenericResource(resource_id="news")


def test_assertion_attached(acl: AccessControlList):
    def weekdays_only(acl, role, resource, privilege):
        return True

    rule = acl.allow("staff", None, "edit", assertion=weekdays_only)
    assert rule.assertion is weekdays_only


def test_empty_privilege_name_rejected(acl: AccessControlList):
    with pytest.raises(ValueError):
        acl.allow("guest", None, "")


def test_rules_snapshot_is_immutable(acl: AccessControlList):
    acl.allow("guest", None, "view")
    snapshot = acl.rules
    acl.allow("guest", None, "edit")
    assert len(snapshot) == 1
    assert isinstance(snapshot, tuple)


# ── Removing ──────────────────────────────────────────────────────────


def test_remove_all_privileges_rule(acl: AccessControlList):
    acl.allow("admin", None)
    acl.allow("admin", None, "view")
    removed = acl.remove_allow("admin", None)
    assert removed is not None and removed.all_privileges
    assert _summary(acl.rules) == [("allow", "admin", None, "view")]


def test_remove_named_privileges(acl: AccessControlList):
    acl.allow("staff", None, "edit", "submit", "revise")
    acl.remove_allow("staff", None, "edit", "revise")
    assert _summary(acl.rules) == [("allow", "staff", None, "submit")]


def test_remove_only_matching_type(acl: AccessControlList):
    acl.allow("staff", None, "edit")
    acl.deny("staff", None, "edit")
    acl.remove_deny("staff", None, "edit")
    assert _summary(acl.rules) == [("allow", "staff", None, "edit")]


def test_remove_requires_exact_slots(acl: AccessControlList):
    acl.allow(None, "news", "view")
    assert acl.remove_allow("guest", "news", "view") is None
    assert acl.remove_allow(None, None, "view") is None
    assert len(acl.rules) == 1
    acl.remove_allow(None, "news", "view")
    assert acl.rules == ()


def test_remove_deletes_duplicates(acl: AccessControlList):
    acl.allow("guest", None, "view")
    acl.allow("guest", None, "view")
    acl.remove_allow("guest", None, "view")
    assert acl.rules == ()


def test_remove_named_keeps_rules_with_assertion(acl: AccessControlList):
    acl.allow("staff", None, "edit", assertion=lambda *args: True)
    assert acl.remove_allow("staff", None, "edit") is None
    assert len(acl.rules) == 1


def test_remove_without_privileges_ignores_named_rules(acl: AccessControlList):
    acl.deny("guest", None, "edit")
    assert acl.remove_deny("guest", None) is None
    assert len(acl.rules) == 1


def test_remove_absent_is_noop(acl: AccessControlList):
    assert acl.remove_allow("ghost", "nowhere", "fly") is None
    assert acl.remove_deny() is None


# ── Direct store usage ────────────────────────────────────────────────


def test_set_rule_on_store():
    store = RuleStore()
    store.set_rule(Operation.ADD, RuleType.DENY, None, None, "a", "b")
    assert len(store) == 2
    assert [r.privilege for r in store] == ["b", "a"]
    store.clear()
    assert len(store) == 0


def test_rule_matches():
    rule = Rule(type=RuleType.ALLOW, role=GenericRole(role_id="staff"), privilege="edit")
    staff = GenericRole(role_id="staff")
    news = GenericResource(resource_id="news")
    assert rule.matches(staff, news, "edit") is True
    assert rule.matches(staff, None, "edit") is True
    assert rule.matches(None, news, "edit") is False
    assert rule.matches(GenericRole(role_id="guest"), news, "edit") is False
    assert rule.matches(staff, news, "Edit") is False


def test_rule_describe():
    rule = Rule(type=RuleType.DENY, resource=GenericResource(resource_id="news"), all_privileges=True)
    assert rule.describe() == "deny role=* resource=news privilege=*"


def test_acl_snapshot(acl: AccessControlList):
    acl.add_role("guest").add_role("staff", "guest").add_resource("news")
    acl.allow("guest", None, "view")
    acl.deny(None, "news", assertion=lambda *_: True)
    snap = acl.snapshot()
    assert snap["roles"]["staff"] == {"parent": "guest", "children": []}
    assert snap["roles"]["guest"]["children"] == ["staff"]
    assert snap["resources"] == {"news": {"parent": None, "children": []}}
    assert snap["rules"] == [
        {"type": "deny", "role": None, "resource": "news", "privilege": None, "assertion": True},
        {"type": "allow", "role": "guest", "resource": None, "privilege": "view", "assertion": False},
    ]
