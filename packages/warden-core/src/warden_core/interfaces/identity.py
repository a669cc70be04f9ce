"""Role and resource capability interfaces and their generic value types."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from warden_core.acl.acl import AccessControlList


@runtime_checkable
class Role(Protocol):
    """Anything with a stable, unique role identifier."""

    @property
    def role_id(self) -> str: ...


@runtime_checkable
class Resource(Protocol):
    """Anything with a stable, unique resource identifier."""

    @property
    def resource_id(self) -> str: ...


@runtime_checkable
class Assertion(Protocol):
    """Extra predicate attached to a rule.

    Called when the rule is a candidate for a decision. Returning False
    makes the resolver skip the rule as if it did not match.
    """

    def __call__(
        self,
        acl: AccessControlList,
        role: Role | None,
        resource: Resource | None,
        privilege: str,
    ) -> bool: ...


class GenericRole(BaseModel):
    """A role that is nothing but its identifier. Any string is a valid id."""

    model_config = ConfigDict(frozen=True)

    role_id: str

    def __str__(self) -> str:
        return self.role_id


class GenericResource(BaseModel):
    """A resource that is nothing but its identifier."""

    model_config = ConfigDict(frozen=True)

    resource_id: str

    def __str__(self) -> str:
        return self.resource_id


def as_role(value: Any) -> Role | None:
    """Coerce a plain string id into a GenericRole; other roles pass through."""
    if value is None:
        return None
    if isinstance(value, str):
        return GenericRole(role_id=value)
    if isinstance(value, Role):
        return value
    raise TypeError(f"Expected a role or a role id, got {type(value).__name__}")


def as_resource(value: Any) -> Resource | None:
    """Coerce a plain string id into a GenericResource; other resources pass through."""
    if value is None:
        return None
    if isinstance(value, str):
        return GenericResource(resource_id=value)
    if isinstance(value, Resource):
        return value
    raise TypeError(f"Expected a resource or a resource id, got {type(value).__name__}")
