"""Groups and group membership API router."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from netadmin.core.identity import ResolvedIdentity, get_identity
from netadmin.core.policy import require_admin
from netadmin.db.session import get_db
from netadmin.models.group import Group
from netadmin.schemas.schemas import (
    GroupCreate, GroupUpdate, GroupOut, IdRequest,
    AccountGroupRequest, AccountGroupOut,
)
from netadmin.services.audit_service import audit_service
from netadmin.services.auth_service import auth_service
from netadmin.services.crud_service import CrudService

router = APIRouter(prefix="/security", tags=["groups"])

group_service = CrudService(Group, "Group")


@router.get("/group")
async def get_groups(
    entity_id: Optional[int] = Query(None, alias="id"),
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(get_identity),
):
    """Get one group by ``id`` or list all groups."""
    if entity_id is not None:
        return GroupOut.model_validate(group_service.get(db, entity_id))
    return [GroupOut.model_validate(g) for g in group_service.list(db)]


@router.post("/group", response_model=GroupOut)
async def create_group(
    body: GroupCreate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(require_admin),
):
    out = GroupOut.model_validate(group_service.create(db, body.model_dump()))
    audit_service.log(
        db, identity.account_id, "create", out.model_dump(mode="json"),
        group_id=out.id,
    )
    return out


@router.put("/group", response_model=GroupOut)
async def update_group(
    body: GroupUpdate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(require_admin),
):
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    out = GroupOut.model_validate(group_service.update(db, body.id, changes))
    audit_service.log(
        db, identity.account_id, "update", out.model_dump(mode="json"),
        group_id=out.id,
    )
    return out


@router.delete("/group", response_model=GroupOut)
async def delete_group(
    body: IdRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(require_admin),
):
    """Soft-delete a group. Existing memberships keep granting its levels."""
    out = GroupOut.model_validate(group_service.soft_delete(db, body.id))
    audit_service.log(
        db, identity.account_id, "delete", out.model_dump(mode="json"),
        group_id=out.id,
    )
    return out


@router.post("/account-group", response_model=AccountGroupOut)
async def add_account_to_group(
    body: AccountGroupRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(require_admin),
):
    """Join an account to a group."""
    membership = auth_service.add_membership(db, body.account_id, body.group_id)
    out = AccountGroupOut.model_validate(membership)
    audit_service.log(
        db, identity.account_id, "create", out.model_dump(mode="json"),
        account_id=out.account_id, group_id=out.group_id,
    )
    return out


@router.delete("/account-group", response_model=AccountGroupOut)
async def remove_account_from_group(
    body: AccountGroupRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(require_admin),
):
    """Remove an account from a group."""
    removed = auth_service.remove_membership(db, body.account_id, body.group_id)
    audit_service.log(
        db, identity.account_id, "delete", removed,
        account_id=removed["account_id"], group_id=removed["group_id"],
    )
    return AccountGroupOut(**removed)
