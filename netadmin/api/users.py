"""Directory users API router, guarded by the user-access capability."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from netadmin.core.identity import ResolvedIdentity
from netadmin.core.policy import Capability, Level, RequireCapability
from netadmin.db.session import get_db
from netadmin.models.user import User
from netadmin.schemas.schemas import UserCreate, UserUpdate, UserOut, IdRequest
from netadmin.services.audit_service import audit_service
from netadmin.services.crud_service import CrudService

router = APIRouter(prefix="/db/user", tags=["users"])

user_service = CrudService(User, "User")

can_view = RequireCapability(Capability.USERS, Level.VIEWER)
can_edit = RequireCapability(Capability.USERS, Level.EDITOR)


@router.get("")
async def get_users(
    entity_id: Optional[int] = Query(None, alias="id"),
    department_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_view),
):
    """Get one user by ``id`` or list users, optionally of one department."""
    if entity_id is not None:
        return UserOut.model_validate(user_service.get(db, entity_id))
    users = user_service.list(db, department_id=department_id)
    return [UserOut.model_validate(u) for u in users]


@router.post("", response_model=UserOut)
async def create_user(
    body: UserCreate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    out = UserOut.model_validate(user_service.create(db, body.model_dump()))
    audit_service.log(
        db, identity.account_id, "create", out.model_dump(mode="json"),
        user_id=out.id,
    )
    return out


@router.put("", response_model=UserOut)
async def update_user(
    body: UserUpdate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    out = UserOut.model_validate(user_service.update(db, body.id, changes))
    audit_service.log(
        db, identity.account_id, "update", out.model_dump(mode="json"),
        user_id=out.id,
    )
    return out


@router.delete("", response_model=UserOut)
async def delete_user(
    body: IdRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(can_edit),
):
    out = UserOut.model_validate(user_service.soft_delete(db, body.id))
    audit_service.log(
        db, identity.account_id, "delete", out.model_dump(mode="json"),
        user_id=out.id,
    )
    return out
