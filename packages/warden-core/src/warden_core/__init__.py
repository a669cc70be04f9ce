"""Warden Core - hierarchical role/resource access-control engine."""

from warden_core.acl import AccessControlList, Rule, RuleType, SynchronizedAccessControlList
from warden_core.config import WardenConfig, load_config
from warden_core.errors import PolicyError, WardenError
from warden_core.interfaces import Assertion, GenericResource, GenericRole, Resource, Role
from warden_core.policy import build_acl, load_policy

__version__ = "0.1.0"

__all__ = [
    "AccessControlList",
    "Assertion",
    "GenericResource",
    "GenericRole",
    "PolicyError",
    "Resource",
    "Role",
    "Rule",
    "RuleType",
    "SynchronizedAccessControlList",
    "WardenConfig",
    "WardenError",
    "build_acl",
    "load_config",
    "load_policy",
]
