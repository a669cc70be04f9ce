"""Tests for warden_core.policy: document models and YAML loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from warden_core.acl import AccessControlList
from warden_core.errors import PolicyError, WardenError
from warden_core.policy import (
    PolicyDocument,
    RuleEntry,
    build_acl,
    load_policy,
    parse_policy,
    read_policy,
)
from warden_core.policy.loader import EXAMPLE_POLICY_TEMPLATE


# ── Models ─────────────────────────────────────────────────────────


class TestRuleEntry:
    def test_defaults_are_wildcards(self):
        entry = RuleEntry(type="allow")
        assert entry.role is None
        assert entry.resource is None
        assert entry.privileges == []

    def test_single_privilege_string(self):
        assert RuleEntry(type="deny", privileges="archive").privileges == ["archive"]

    def test_null_privileges(self):
        assert RuleEntry(type="deny", privileges=None).privileges == []

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            RuleEntry(type="maybe")

    def test_blank_privilege_rejected(self):
        with pytest.raises(ValidationError):
            RuleEntry(type="allow", privileges=["view", " "])

    @pytest.mark.parametrize("field", ["role", "resource"])
    def test_blank_role_or_resource_rejected(self, field):
        with pytest.raises(ValidationError):
            RuleEntry(type="allow", **{field: ""})

    def test_extra_keys_rejected(self):
        with pytest.raises(ValidationError):
            RuleEntry(type="allow", privilege="view")


class TestPolicyDocument:
    def test_empty(self):
        doc = PolicyDocument()
        assert doc.roles == [] and doc.resources == [] and doc.rules == []

    def test_separate_list_instances(self):
        a = PolicyDocument()
        b = PolicyDocument()
        assert a.rules is not b.rules

    def test_blank_role_id_rejected(self):
        with pytest.raises(ValidationError):
            PolicyDocument(roles=[{"id": ""}])


# ── parse_policy ───────────────────────────────────────────────────


def test_parse_none_is_empty_policy():
    assert parse_policy(None) == PolicyDocument()


def test_parse_non_mapping_raises():
    with pytest.raises(PolicyError, match="mapping"):
        parse_policy(["not", "a", "mapping"])


def test_parse_blank_parent_raises_policy_error():
    with pytest.raises(PolicyError):
        parse_policy({"roles": [{"id": "staff", "parent": " "}]})


def test_parse_invalid_wraps_validation_error():
    with pytest.raises(PolicyError) as exc_info:
        parse_policy({"rules": [{"type": "perhaps"}]}, path="p.yaml")
    assert isinstance(exc_info.value.__cause__, ValidationError)
    assert exc_info.value.path == Path("p.yaml")
    assert isinstance(exc_info.value, WardenError)


# ── build_acl ──────────────────────────────────────────────────────


def test_build_acl_applies_document_in_order():
    doc = PolicyDocument.model_validate(
        {
            "roles": [{"id": "guest"}, {"id": "staff", "parent": "guest"}],
            "resources": [{"id": "news"}, {"id": "latest", "parent": "news"}],
            "rules": [
                {"type": "allow", "role": "guest", "privileges": ["view"]},
                {"type": "deny", "role": "staff", "resource": "latest", "privileges": ["view"]},
            ],
        }
    )
    acl = build_acl(doc)
    assert acl.inherits_role("staff", "guest")
    assert acl.inherits_resource("latest", "news")
    assert acl.rules[0].type.value == "deny"
    assert acl.is_allowed("staff", "news", "view") is True
    assert acl.is_allowed("staff", "latest", "view") is False


def test_build_acl_into_existing_engine():
    acl = AccessControlList()
    acl.allow("root", None)
    doc = PolicyDocument(rules=[RuleEntry(type="deny", role="root", privileges=["drop"])])
    assert build_acl(doc, acl) is acl
    assert acl.is_allowed("root", None, "drop") is False
    assert acl.is_allowed("root", None, "select") is True


# ── Files ──────────────────────────────────────────────────────────


def test_load_policy_file(policy_file: Path):
    acl = load_policy(policy_file)
    assert acl.is_allowed("editor", None, "view") is True
    assert acl.is_allowed("staff", None, "publish") is False
    assert acl.is_allowed("administrator", "announcement", "archive") is False
    assert acl.is_allowed("administrator", "news", "archive") is True


def test_load_policy_logs_summary(policy_file: Path, caplog):
    with caplog.at_level(logging.INFO, logger="warden_core"):
        load_policy(policy_file)
    assert "4 roles" in caplog.text


def test_read_policy_missing_file(tmp_path: Path):
    with pytest.raises(PolicyError, match="file not found"):
        read_policy(tmp_path / "absent.yaml")


def test_read_policy_invalid_yaml(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("roles: [unclosed\n")
    with pytest.raises(PolicyError, match="invalid YAML"):
        read_policy(bad)


def test_read_policy_empty_file(tmp_path: Path):
    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    assert read_policy(empty) == PolicyDocument()


def test_example_template_is_valid(tmp_path: Path):
    path = tmp_path / "policy.yaml"
    path.write_text(EXAMPLE_POLICY_TEMPLATE)
    acl = load_policy(path)
    assert acl.is_allowed("editor", "latest", "view") is True
    assert acl.is_allowed("administrator", "announcement", "archive") is False
    assert acl.is_allowed("guest", "news", "edit") is False
