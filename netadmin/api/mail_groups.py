"""Mail groups API router: group CRUD and mailbox membership.

Guarded by the mail-access capability, like the mailboxes themselves.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from netadmin.core.identity import ResolvedIdentity
from netadmin.core.policy import Capability, Level, RequireCapability
from netadmin.db.session import get_db
from netadmin.models.mail_group import MailGroup
from netadmin.schemas.schemas import (
    MailGroupCreate, MailGroupUpdate, MailGroupOut, IdRequest,
    MailMailGroupRequest, MailMailGroupOut,
)
from netadmin.services.audit_service import audit_service
from netadmin.services.crud_service import CrudService
from netadmin.services.mail_group_service import mail_group_service

router = APIRouter(prefix="/db", tags=["mail groups"])

group_service = CrudService(MailGroup, "Mail group")

can_view = RequireCapability(Capability.MAILS, Level.VIEWER)
can_edit = RequireCapability(Capability.MAILS, Level.EDITOR)


@router.get("/mail-group")
async def get_mail_groups(
    entity_id: Optional[int] = Query(None, alias="id"),
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_view),
):
    """Get one mail group with its members by ``id`` or list all of them."""
    if entity_id is not None:
        return MailGroupOut.model_validate(group_service.get(db, entity_id))
    return [MailGroupOut.model_validate(g) for g in group_service.list(db)]


@router.post("/mail-group", response_model=MailGroupOut)
async def create_mail_group(
    body: MailGroupCreate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    out = MailGroupOut.model_validate(group_service.create(db, body.model_dump()))
    audit_service.log(
        db, identity.account_id, "create", out.model_dump(mode="json"),
        mail_group_id=out.id,
    )
    return out


@router.put("/mail-group", response_model=MailGroupOut)
async def update_mail_group(
    body: MailGroupUpdate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    out = MailGroupOut.model_validate(group_service.update(db, body.id, changes))
    audit_service.log(
        db, identity.account_id, "update", out.model_dump(mode="json"),
        mail_group_id=out.id,
    )
    return out


@router.delete("/mail-group", response_model=MailGroupOut)
async def delete_mail_group(
    body: IdRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    out = MailGroupOut.model_validate(group_service.soft_delete(db, body.id))
    audit_service.log(
        db, identity.account_id, "delete", out.model_dump(mode="json"),
        mail_group_id=out.id,
    )
    return out


@router.post("/mail-mail-group", response_model=MailMailGroupOut)
async def add_mail_to_group(
    body: MailMailGroupRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    row = mail_group_service.add_member(db, body.mail_group_id, body.mail_id)
    out = MailMailGroupOut.model_validate(row)
    audit_service.log(
        db, identity.account_id, "create", out.model_dump(mode="json"),
        mail_id=out.mail_id, mail_group_id=out.mail_group_id,
    )
    return out


@router.delete("/mail-mail-group", response_model=MailMailGroupOut)
async def remove_mail_from_group(
    body: MailMailGroupRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    removed = mail_group_service.remove_member(db, body.mail_group_id, body.mail_id)
    audit_service.log(
        db, identity.account_id, "delete", removed,
        mail_id=removed["mail_id"], mail_group_id=removed["mail_group_id"],
    )
    return MailMailGroupOut(**removed)
