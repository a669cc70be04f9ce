"""Shared test fixtures for Warden."""

import pytest

from warden_core.acl import AccessControlList
from warden_core.config.models import WardenConfig


@pytest.fixture
def acl():
    return AccessControlList()


@pytest.fixture
def sample_config():
    return WardenConfig()


@pytest.fixture
def cms_acl():
    """Roles guest < staff < editor, plus administrator, with the classic CMS rules."""
    acl = AccessControlList()
    acl.add_role("guest")
    acl.add_role("staff", "guest")
    acl.add_role("editor", "staff")
    acl.add_role("administrator")

    acl.allow("guest", None, "view")
    acl.allow("staff", None, "edit", "submit", "revise")
    acl.allow("editor", None, "publish", "archive", "delete")
    acl.allow("administrator", None)
    return acl


@pytest.fixture
def news_acl(cms_acl):
    """cms_acl refined with marketing and a small news resource tree."""
    acl = cms_acl
    acl.add_role("marketing", "staff")

    acl.add_resource("newsletter")
    acl.add_resource("news")
    acl.add_resource("latest", "news")
    acl.add_resource("announcement", "news")

    acl.allow("marketing", "newsletter", "publish", "archive")
    acl.allow("marketing", "latest", "publish", "archive")
    acl.deny("staff", "latest", "revise")
    acl.deny(None, "announcement", "archive")
    return acl


SAMPLE_POLICY_YAML = """\
roles:
  - id: guest
  - id: staff
    parent: guest
  - id: editor
    parent: staff
  - id: administrator
resources:
  - id: news
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
    role: administrator
  - type: deny
    resource: announcement
    privileges: archive
"""


@pytest.fixture
def policy_file(tmp_path):
    path = tmp_path / "policy.yaml"
    path.write_text(SAMPLE_POLICY_YAML)
    return path
