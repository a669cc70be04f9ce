"""Pydantic models for declarative policy documents."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _not_blank(v: str | None) -> str | None:
    if v is not None and not v.strip():
        raise ValueError("ids must not be blank")
    return v


class _Entry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    parent: str | None = None

    ids_not_blank = field_validator("id", "parent")(_not_blank)


class RoleEntry(_Entry):
    """A role and its optional parent role."""


class ResourceEntry(_Entry):
    """A resource and its optional parent resource."""


class RuleEntry(BaseModel):
    """One allow/deny statement; omitted role/resource mean any."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["allow", "deny"]
    role: str | None = None
    resource: str | None = None
    privileges: list[str] = Field(default_factory=list)

    ids_not_blank = field_validator("role", "resource")(_not_blank)

    @field_validator("privileges", mode="before")
    @classmethod
    def _single_privilege(cls, v: object) -> object:
        if isinstance(v, str):
            return [v]
        return [] if v is None else v

    @field_validator("privileges")
    @classmethod
    def _no_blank_privileges(cls, v: list[str]) -> list[str]:
        if any(not p.strip() for p in v):
            raise ValueError("privilege names must not be blank")
        return v


class PolicyDocument(BaseModel):
    """Roles, resources and rules, applied in document order."""

    model_config = ConfigDict(extra="forbid")

    roles: list[RoleEntry] = Field(default_factory=list)
    resources: list[ResourceEntry] = Field(default_factory=list)
    rules: list[RuleEntry] = Field(default_factory=list)
