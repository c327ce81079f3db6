"""Routers API router: router CRUD and per-router group ACL rows.

Guarded by the router-access capability. Per-router ACLs guard the VPNs on
each router (see ``netadmin.api.vpns``).
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from netadmin.core.identity import ResolvedIdentity
from netadmin.core.policy import Capability, Level, RequireCapability
from netadmin.db.session import get_db
from netadmin.models.router import Router, RouterGroupViewer, RouterGroupEditor
from netadmin.schemas.schemas import (
    RouterCreate, RouterUpdate, RouterOut, IdRequest,
    RouterGroupRequest, RouterGroupOut,
)
from netadmin.services.acl_service import acl_service
from netadmin.services.audit_service import audit_service
from netadmin.services.crud_service import CrudService

router = APIRouter(prefix="/db", tags=["routers"])

router_service = CrudService(Router, "Router")

can_view = RequireCapability(Capability.ROUTERS, Level.VIEWER)
can_edit = RequireCapability(Capability.ROUTERS, Level.EDITOR)


@router.get("/router")
async def get_routers(
    entity_id: Optional[int] = Query(None, alias="id"),
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_view),
):
    """Get one router by ``id`` or list all routers."""
    if entity_id is not None:
        return RouterOut.model_validate(router_service.get(db, entity_id))
    return [RouterOut.model_validate(r) for r in router_service.list(db)]


@router.post("/router", response_model=RouterOut)
async def create_router(
    body: RouterCreate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    out = RouterOut.model_validate(router_service.create(db, body.model_dump()))
    audit_service.log(
        db, identity.account_id, "create", out.model_dump(mode="json"),
        router_id=out.id,
    )
    return out


@router.put("/router", response_model=RouterOut)
async def update_router(
    body: RouterUpdate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    out = RouterOut.model_validate(router_service.update(db, body.id, changes))
    audit_service.log(
        db, identity.account_id, "update", out.model_dump(mode="json"),
        router_id=out.id,
    )
    return out


@router.delete("/router", response_model=RouterOut)
async def delete_router(
    body: IdRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    """Soft-delete a router. Its VPNs become unreachable for non-admins."""
    out = RouterOut.model_validate(router_service.soft_delete(db, body.id))
    audit_service.log(
        db, identity.account_id, "delete", out.model_dump(mode="json"),
        router_id=out.id,
    )
    return out


@router.post("/router-group-viewer", response_model=RouterGroupOut)
async def add_router_viewer(
    body: RouterGroupRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    return _grant(db, identity, RouterGroupViewer, body)


@router.delete("/router-group-viewer", response_model=RouterGroupOut)
async def remove_router_viewer(
    body: RouterGroupRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    return _revoke(db, identity, RouterGroupViewer, body)


@router.post("/router-group-editor", response_model=RouterGroupOut)
async def add_router_editor(
    body: RouterGroupRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    return _grant(db, identity, RouterGroupEditor, body)


@router.delete("/router-group-editor", response_model=RouterGroupOut)
async def remove_router_editor(
    body: RouterGroupRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    return _revoke(db, identity, RouterGroupEditor, body)


def _grant(db: Session, identity: ResolvedIdentity, model, body: RouterGroupRequest) -> RouterGroupOut:
    out = RouterGroupOut.model_validate(acl_service.grant(db, model, body.router_id, body.group_id))
    audit_service.log(
        db, identity.account_id, "create", out.model_dump(mode="json"),
        router_id=out.router_id, group_id=out.group_id,
    )
    return out


def _revoke(db: Session, identity: ResolvedIdentity, model, body: RouterGroupRequest) -> RouterGroupOut:
    removed = acl_service.revoke(db, model, body.router_id, body.group_id)
    audit_service.log(
        db, identity.account_id, "delete", removed,
        router_id=removed["router_id"], group_id=removed["group_id"],
    )
    return RouterGroupOut(**removed)
