"""Accounts API router. Mutations are admin only."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from netadmin.core.identity import ResolvedIdentity, get_identity
from netadmin.core.policy import require_admin
from netadmin.db.session import get_db
from netadmin.schemas.schemas import AccountCreate, AccountUpdate, AccountOut, IdRequest
from netadmin.services.audit_service import audit_service
from netadmin.services.auth_service import auth_service

router = APIRouter(prefix="/security/account", tags=["accounts"])


@router.get("")
async def get_accounts(
    entity_id: Optional[int] = Query(None, alias="id"),
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(get_identity),
):
    """Get one account by ``id`` or list all accounts."""
    if entity_id is not None:
        return AccountOut.model_validate(auth_service.get_account(db, entity_id))
    return [AccountOut.model_validate(a) for a in auth_service.list_accounts(db)]


@router.post("", response_model=AccountOut)
async def create_account(
    body: AccountCreate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(require_admin),
):
    """Create an account."""
    out = AccountOut.model_validate(auth_service.create_account(db, body.model_dump()))
    audit_service.log(
        db, identity.account_id, "create", out.model_dump(mode="json"),
        account_id=out.id,
    )
    return out


@router.put("", response_model=AccountOut)
async def update_account(
    body: AccountUpdate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(require_admin),
):
    """Update an account; the password is re-hashed when given."""
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    out = AccountOut.model_validate(auth_service.update_account(db, body.id, changes))
    audit_service.log(
        db, identity.account_id, "update", out.model_dump(mode="json"),
        account_id=out.id,
    )
    return out


@router.delete("", response_model=AccountOut)
async def delete_account(
    body: IdRequest,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(require_admin),
):
    """Soft-delete an account."""
    out = AccountOut.model_validate(auth_service.delete_account(db, body.id))
    audit_service.log(
        db, identity.account_id, "delete", out.model_dump(mode="json"),
        account_id=out.id,
    )
    return out
