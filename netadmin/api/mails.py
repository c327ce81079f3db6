"""Mail accounts API router.

Only the local records are managed here; pushing changes to the Yandex 360
directory is done by a separate sync job.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from netadmin.core.identity import ResolvedIdentity
from netadmin.core.policy import Capability, Level, RequireCapability
from netadmin.db.session import get_db
from netadmin.models.mail import Mail
from netadmin.schemas.schemas import MailCreate, MailUpdate, MailOut, IdRequest
from netadmin.services.audit_service import audit_service
from netadmin.services.crud_service import CrudService

router = APIRouter(prefix="/db/mail", tags=["mails"])

mail_service = CrudService(Mail, "Mail")

can_view = RequireCapability(Capability.MAILS, Level.VIEWER)
can_edit = RequireCapability(Capability.MAILS, Level.EDITOR)


@router.get("")
async def get_mails(
    entity_id: Optional[int] = Query(None, alias="id"),
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_view),
):
    if entity_id is not None:
        return MailOut.model_validate(mail_service.get(db, entity_id))
    return [MailOut.model_validate(m) for m in mail_service.list(db)]


@router.post("", response_model=MailOut)
async def create_mail(
    body: MailCreate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    out = MailOut.model_validate(mail_service.create(db, body.model_dump()))
    audit_service.log(
        db, identity.account_id, "create", out.model_dump(mode="json"),
        mail_id=out.id,
    )
    return out


@router.put("", response_model=MailOut)
async def update_mail(
    body: MailUpdate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    out = MailOut.model_validate(mail_service.update(db, body.id, changes))
    audit_service.log(
        db, identity.account_id, "update", out.model_dump(mode="json"),
        mail_id=out.id,
    )
    return out


@router.delete("", response_model=MailOut)
async def delete_mail(
    body: IdRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    out = MailOut.model_validate(mail_service.soft_delete(db, body.id))
    audit_service.log(
        db, identity.account_id, "delete", out.model_dump(mode="json"),
        mail_id=out.id,
    )
    return out
