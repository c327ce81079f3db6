"""Admin API router: audit log and runtime settings."""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from netadmin.core.identity import ResolvedIdentity
from netadmin.core.policy import require_admin
from netadmin.db.session import get_db
from netadmin.schemas.schemas import AuditLogOut, SettingOut, SettingUpdate
from netadmin.services.audit_service import audit_service
from netadmin.services.settings_service import settings_service

router = APIRouter(tags=["admin"])


@router.get("/log")
async def get_audit_logs(
    created_gte: Optional[datetime] = Query(None),
    created_lte: Optional[datetime] = Query(None),
    action: Optional[str] = Query(None),
    initiator_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(require_admin),
):
    """Query audit logs (admin only)."""
    logs = audit_service.query_logs(db, created_gte, created_lte, action, initiator_id)
    return [AuditLogOut.model_validate(log) for log in logs]


@router.get("/settings")
async def get_settings(
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(require_admin),
):
    return [SettingOut.model_validate(s) for s in settings_service.get_all(db)]


@router.put("/settings")
async def update_setting(
    body: SettingUpdate,
    db: Session = Depends(get_db),
    identity: ResolvedIdentity = Depends(require_admin),
):
    """Change one setting and return all of them."""
    settings_service.update(db, body.key, body.value)
    return [SettingOut.model_validate(s) for s in settings_service.get_all(db)]
