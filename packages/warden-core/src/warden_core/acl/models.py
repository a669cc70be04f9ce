"""Data models for the access-control engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from warden_core.interfaces.identity import Assertion, Resource, Role

T = TypeVar("T")


class RuleType(str, Enum):
    """Whether a rule grants or withholds a privilege."""

    ALLOW = "allow"
    DENY = "deny"


class Operation(str, Enum):
    """Rule store mutation kind."""

    ADD = "add"
    REMOVE = "remove"


@dataclass
class HierarchyNode(Generic[T]):
    """A registered role or resource with id links to its neighbours."""

    instance: T
    parent_id: str | None = None
    children: list[str] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


@dataclass(frozen=True)
class Rule:
    """An allow/deny statement over (role?, resource?, privilege | all).

    ``role`` and ``resource`` set to None act as wildcards.
    """

    type: RuleType
    role: Role | None = None
    resource: Resource | None = None
    all_privileges: bool = False
    privilege: str = ""
    assertion: Assertion | None = None

    def __post_init__(self) -> None:
        if not self.all_privileges and not self.privilege:
            raise ValueError("a rule needs either all_privileges or a privilege name")

    @property
    def role_id(self) -> str | None:
        return self.role.role_id if self.role is not None else None

    @property
    def resource_id(self) -> str | None:
        return self.resource.resource_id if self.resource is not None else None

    def matches(self, role: Role | None, resource: Resource | None, privilege: str) -> bool:
        """Candidate test for a single (role, resource, privilege) request."""
        if self.role is not None and (role is None or role.role_id != self.role.role_id):
            return False
        if self.resource is not None and (
            resource is None or resource.resource_id != self.resource.resource_id
        ):
            return False
        return self.all_privileges or self.privilege == privilege

    def describe(self, wildcard: str = "*") -> str:
        privilege = wildcard if self.all_privileges else self.privilege
        return (
            f"{self.type.value} role={self.role_id or wildcard} "
            f"resource={self.resource_id or wildcard} privilege={privilege}"
        )
