"""Authorization policy engine and the route dependencies built on it.

Two kinds of checks exist:

* capability checks, evaluated against the maximum level any of the
  account's groups holds for one of four capability families;
* resource-scoped checks, evaluated against the viewer/editor group sets
  attached to a single router.

Admins pass both unconditionally. Decisions are pure functions of the
resolved identity and a fresh ACL snapshot; nothing is cached between
requests.
"""

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Optional

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from netadmin.core.exceptions import Forbidden, ResourceNotFoundError, StoreFault, ValidationError
from netadmin.core.identity import ResolvedIdentity, get_identity
from netadmin.db.session import get_db

logger = logging.getLogger("netadmin.policy")


class Capability(str, enum.Enum):
    """Capability families carried as a level on every group."""

    ROUTERS = "router-access"
    USERS = "user-access"
    DEPARTMENTS = "department-access"
    MAILS = "mail-access"

    @property
    def column(self) -> str:
        """Group column holding the level for this capability."""
        return _CAPABILITY_COLUMNS[self]


_CAPABILITY_COLUMNS = {
    Capability.ROUTERS: "access_routers",
    Capability.USERS: "access_users",
    Capability.DEPARTMENTS: "access_departments",
    Capability.MAILS: "access_mails",
}


class Level(enum.IntEnum):
    VIEWER = 1
    EDITOR = 2


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str

    def __bool__(self) -> bool:
        return self.allowed


@dataclass(frozen=True)
class ResourceAcl:
    """Groups granted viewer and editor scope over one resource."""

    resource_id: int
    viewer_group_ids: FrozenSet[int] = frozenset()
    editor_group_ids: FrozenSet[int] = frozenset()


AclLoader = Callable[[Session, int], Optional[ResourceAcl]]


def check(identity: ResolvedIdentity, capability: Capability, level: Level) -> Decision:
    """Decide whether ``identity`` holds ``capability`` at ``level`` or above."""
    if identity.is_admin:
        decision = Decision(True, "account is admin")
    elif not identity.groups:
        decision = Decision(False, "account has no groups")
    else:
        best = max(grant.level(capability.column) for grant in identity.groups)
        if best >= level:
            decision = Decision(True, f"group level {best} >= {int(level)}")
        else:
            decision = Decision(False, f"no group with {capability.value} >= {int(level)}")

    logger.debug(
        "check %s/%s for account %s: %s (%s)",
        capability.value, level.name.lower(), identity.account_id,
        "allow" if decision else "deny", decision.reason,
    )
    return decision


def check_router_access(
    identity: ResolvedIdentity,
    acl: Optional[ResourceAcl],
    level: Level,
) -> Decision:
    """Decide router-scoped access.

    The viewer level consults only the viewer set and the editor level only
    the editor set; being an editor does not imply being a viewer.

    Raises:
        ResourceNotFoundError: If a non-admin with groups targets a missing router.
    """
    if identity.is_admin:
        decision = Decision(True, "account is admin")
    elif not identity.group_ids:
        decision = Decision(False, "account has no groups")
    elif acl is None:
        logger.debug("router check for account %s: router not found", identity.account_id)
        raise ResourceNotFoundError("Router not found")
    else:
        granted = acl.viewer_group_ids if level == Level.VIEWER else acl.editor_group_ids
        if identity.group_ids & granted:
            decision = Decision(True, f"group listed as router {level.name.lower()}")
        else:
            decision = Decision(False, f"account is not a router {level.name.lower()}")

    logger.debug(
        "router %s check %s for account %s: %s (%s)",
        acl.resource_id if acl else "-", level.name.lower(), identity.account_id,
        "allow" if decision else "deny", decision.reason,
    )
    return decision


class RequireAdmin:
    """Dependency that only lets admin accounts through."""

    async def __call__(
        self,
        identity: ResolvedIdentity = Depends(get_identity),
    ) -> ResolvedIdentity:
        if not identity.is_admin:
            logger.warning("Account %s is not admin", identity.account_id)
            raise Forbidden("Account is not admin")
        return identity


class RequireCapability:
    """Dependency that checks a capability family at a minimum level."""

    def __init__(self, capability: Capability, level: Level):
        self.capability = capability
        self.level = level

    async def __call__(
        self,
        identity: ResolvedIdentity = Depends(get_identity),
    ) -> ResolvedIdentity:
        if not check(identity, self.capability, self.level):
            raise Forbidden("Access Denied")
        return identity


class RequireResourceAccess:
    """Dependency that checks router-scoped access for the targeted resource.

    ``loader`` maps ``(db, resource_id)`` to the router ACL guarding that
    resource (or None when it does not exist). The id is read from the path
    parameters, then the query string, then the JSON body, under ``param``.
    """

    def __init__(self, loader: AclLoader, level: Level, param: str = "router_id"):
        self.loader = loader
        self.level = level
        self.param = param

    async def __call__(
        self,
        request: Request,
        identity: ResolvedIdentity = Depends(get_identity),
        db: Session = Depends(get_db),
    ) -> ResolvedIdentity:
        acl = None
        if not identity.is_admin and identity.group_ids:
            resource_id = await self._resource_id(request)
            try:
                acl = self.loader(db, resource_id)
            except SQLAlchemyError as e:
                logger.error("ACL lookup failed for %s=%s: %s", self.param, resource_id, e)
                raise StoreFault("ACL lookup failed") from e

        if not check_router_access(identity, acl, self.level):
            raise Forbidden("Access Denied")
        return identity

    async def _resource_id(self, request: Request) -> int:
        raw: Any = request.path_params.get(self.param)
        if raw is None:
            raw = request.query_params.get(self.param)
        if raw is None:
            raw = (await _json_body(request)).get(self.param)
        try:
            return int(raw)
        except (TypeError, ValueError):
            raise ValidationError(f'"{self.param}" field required')


async def _json_body(request: Request) -> dict:
    body = await request.body()
    if not body:
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


require_admin = RequireAdmin()
