"""Lock-wrapped access control list for shared, concurrently mutated engines."""

from __future__ import annotations

import threading
from typing import Any

from warden_core.acl.acl import AccessControlList
from warden_core.acl.models import Rule
from warden_core.interfaces.identity import Resource, Role


class SynchronizedAccessControlList:
    """Serializes every call to a wrapped AccessControlList under one RLock.

    Readers are serialized too; callers that only query after setup can use
    the plain engine directly.
    """

    _WRAPPED = (
        "add_role",
        "get_role",
        "has_role",
        "remove_role",
        "inherits_role",
        "children_of_role",
        "add_resource",
        "get_resource",
        "has_resource",
        "remove_resource",
        "inherits_resource",
        "children_of_resource",
        "set_rule",
        "allow",
        "deny",
        "remove_allow",
        "remove_deny",
        "is_denied",
        "snapshot",
    )

    def __init__(self, acl: AccessControlList | None = None) -> None:
        self._acl = acl if acl is not None else AccessControlList()
        self._lock = threading.RLock()

    @property
    def acl(self) -> AccessControlList:
        return self._acl

    @property
    def rules(self) -> tuple[Rule, ...]:
        with self._lock:
            return self._acl.rules

    def is_allowed(
        self,
        role: Role | str | None = None,
        resource: Resource | str | None = None,
        *privileges: str,
    ) -> bool:
        with self._lock:
            return self._acl.is_allowed(role, resource, *privileges)

    def __getattr__(self, name: str) -> Any:
        if name not in self._WRAPPED:
            raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")
        method = getattr(self._acl, name)

        def locked(*args: Any, **kwargs: Any) -> Any:
            with self._lock:
                result = method(*args, **kwargs)
            return self if result is self._acl else result

        locked.__name__ = name
        locked.__doc__ = method.__doc__
        return locked
