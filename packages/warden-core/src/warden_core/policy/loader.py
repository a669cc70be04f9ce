"""Build access control lists from YAML policy documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from warden_core.acl import AccessControlList
from warden_core.errors import PolicyError
from warden_core.policy.models import PolicyDocument

logger = logging.getLogger(__name__)


def parse_policy(raw: Any, path: Path | str | None = None) -> PolicyDocument:
    """Validate an already-decoded mapping. Empty input is an empty policy."""
    if raw is None:
        return PolicyDocument()
    if not isinstance(raw, dict):
        raise PolicyError(f"expected a mapping at top level, got {type(raw).__name__}", path)
    try:
        return PolicyDocument.model_validate(raw)
    except ValidationError as e:
        raise PolicyError(f"invalid policy: {e}", path) from e


def read_policy(path: Path | str) -> PolicyDocument:
    """Read and validate a policy file without building an engine."""
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text())
    except FileNotFoundError as e:
        raise PolicyError("file not found", path) from e
    except yaml.YAMLError as e:
        raise PolicyError(f"invalid YAML: {e}", path) from e
    return parse_policy(raw, path)


def build_acl(
    document: PolicyDocument, acl: AccessControlList | None = None
) -> AccessControlList:
    """Apply *document* to *acl* (a new one by default).

    Roles and resources are added in order, so parents should be listed
    before their children. Rules are added in order; later rules win.
    """
    acl = acl if acl is not None else AccessControlList()
    for role in document.roles:
        acl.add_role(role.id, role.parent)
    for resource in document.resources:
        acl.add_resource(resource.id, resource.parent)
    for rule in document.rules:
        add = acl.allow if rule.type == "allow" else acl.deny
        add(rule.role, rule.resource, *rule.privileges)
    return acl


def load_policy(path: Path | str, acl: AccessControlList | None = None) -> AccessControlList:
    """Read *path* and return the populated access control list."""
    document = read_policy(path)
    acl = build_acl(document, acl)
    logger.info(
        "Loaded policy %s: %d roles, %d resources, %d rules",
        path,
        len(document.roles),
        len(document.resources),
        len(acl.rules),
    )
    return acl


# Example policy written by `warden policy init`
EXAMPLE_POLICY_TEMPLATE = """\
# policy.yaml
# Later rules take precedence over earlier ones.

roles:
  - id: guest
  - id: staff
    parent: guest
  - id: editor
    parent: staff
  - id: administrator

resources:
  - id: news
  - id: latest
    parent: news
  - id: announcement
    parent: news

rules:
  - type: allow
    role: guest
    privileges: [view]
  - type: allow
    role: staff
    privileges: [edit, submit, revise]
  - type: allow
    role: editor
    privileges: [publish, archive, delete]
  - type: allow
    role: administrator          # no privileges = all privileges
  - type: deny
    resource: announcement       # no role = any role
    privileges: [archive]
"""
