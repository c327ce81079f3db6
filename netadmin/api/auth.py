"""Security API router: login and current account."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from netadmin.core.identity import ResolvedIdentity, get_identity
from netadmin.db.session import get_db
from netadmin.schemas.schemas import LoginRequest, TokenResponse, AccountOut
from netadmin.services.auth_service import auth_service

router = APIRouter(prefix="/security", tags=["security"])


@router.post("", response_model=TokenResponse)
async def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate and return a bearer token."""
    result = auth_service.authenticate(db, body.username, body.password)
    return TokenResponse(
        token=result["token"],
        account=AccountOut.model_validate(result["account"]),
    )


@router.get("", response_model=AccountOut)
async def get_me(
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(get_identity),
):
    """Get the account the bearer token belongs to."""
    return AccountOut.model_validate(auth_service.get_account(db, identity.account_id))
