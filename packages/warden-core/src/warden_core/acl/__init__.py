"""Hierarchical role/resource/privilege access-control engine."""

from warden_core.acl.acl import AccessControlList
from warden_core.acl.models import HierarchyNode, Operation, Rule, RuleType
from warden_core.acl.registry import (
    HierarchyRegistry,
    ResourceRegistry,
    RoleRegistry,
    inherits,
)
from warden_core.acl.resolver import first_match, resolve, resolve_all
from warden_core.acl.rules import RuleStore
from warden_core.acl.sync import SynchronizedAccessControlList

__all__ = [
    "AccessControlList",
    "HierarchyNode",
    "HierarchyRegistry",
    "Operation",
    "ResourceRegistry",
    "RoleRegistry",
    "Rule",
    "RuleStore",
    "RuleType",
    "SynchronizedAccessControlList",
    "first_match",
    "inherits",
    "resolve",
    "resolve_all",
]
