"""Declarative YAML policies."""

from warden_core.policy.loader import build_acl, load_policy, parse_policy, read_policy
from warden_core.policy.models import PolicyDocument, ResourceEntry, RoleEntry, RuleEntry

__all__ = [
    "PolicyDocument",
    "ResourceEntry",
    "RoleEntry",
    "RuleEntry",
    "build_acl",
    "load_policy",
    "parse_policy",
    "read_policy",
]
