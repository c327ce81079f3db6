"""VPN API router, guarded by the ACL of the router each VPN lives on."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from netadmin.core.exceptions import ResourceNotFoundError
from netadmin.core.identity import ResolvedIdentity
from netadmin.core.policy import Level, RequireResourceAccess
from netadmin.db.session import get_db
from netadmin.models.router import Router
from netadmin.models.vpn import Vpn
from netadmin.schemas.schemas import VpnCreate, VpnUpdate, VpnOut, IdRequest
from netadmin.services.acl_service import acl_service
from netadmin.services.audit_service import audit_service
from netadmin.services.crud_service import CrudService

router = APIRouter(prefix="/db/vpn", tags=["vpns"])

vpn_service = CrudService(Vpn, "VPN")
router_service = CrudService(Router, "Router")

router_viewer = RequireResourceAccess(acl_service.router_acl, Level.VIEWER, param="router_id")
router_editor = RequireResourceAccess(acl_service.router_acl, Level.EDITOR, param="router_id")
vpn_editor = RequireResourceAccess(acl_service.vpn_router_acl, Level.EDITOR, param="id")


@router.get("")
async def get_vpns(
    router_id: int = Query(...),
    entity_id: Optional[int] = Query(None, alias="id"),
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(router_viewer),
):
    """List the VPNs of a router, or get one of them by ``id``."""
    router_service.get(db, router_id)
    if entity_id is not None:
        vpn = vpn_service.get(db, entity_id)
        if vpn.router_id != router_id:
            raise ResourceNotFoundError(f"VPN with ID {entity_id} not found")
        return VpnOut.model_validate(vpn)
    return [VpnOut.model_validate(v) for v in vpn_service.list(db, router_id=router_id)]


@router.post("", response_model=VpnOut)
async def create_vpn(
    body: VpnCreate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(router_editor),
):
    router_service.get(db, body.router_id)
    out = VpnOut.model_validate(vpn_service.create(db, body.model_dump()))
    audit_service.log(
        db, identity.account_id, "create", out.model_dump(mode="json"),
        vpn_id=out.id, router_id=out.router_id,
    )
    return out


@router.put("", response_model=VpnOut)
async def update_vpn(
    body: VpnUpdate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(vpn_editor),
):
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    out = VpnOut.model_validate(vpn_service.update(db, body.id, changes))
    audit_service.log(
        db, identity.account_id, "update", out.model_dump(mode="json"),
        vpn_id=out.id, router_id=out.router_id,
    )
    return out


@router.delete("", response_model=VpnOut)
async def delete_vpn(
    body: IdRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(vpn_editor),
):
    out = VpnOut.model_validate(vpn_service.soft_delete(db, body.id))
    audit_service.log(
        db, identity.account_id, "delete", out.model_dump(mode="json"),
        vpn_id=out.id, router_id=out.router_id,
    )
    return out
