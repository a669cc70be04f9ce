"""Capability interfaces shared by the engine and its callers."""

from warden_core.interfaces.identity import (
    Assertion,
    GenericResource,
    GenericRole,
    Resource,
    Role,
    as_resource,
    as_role,
)

__all__ = [
    "Assertion",
    "GenericResource",
    "GenericRole",
    "Resource",
    "Role",
    "as_resource",
    "as_role",
]
