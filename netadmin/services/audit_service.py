"""Audit service: append-only audit trail for all mutations."""

import json
from datetime import datetime
from typing import Optional, Any
from sqlalchemy.orm import Session

from netadmin.models.audit_log import AuditLog


class AuditService:
    """Records immutable audit log entries for mutations."""

    @staticmethod
    def log(
        db: Session,
        initiator_id: int,
        action: str,
        new_value: Optional[Any] = None,
        **links: Optional[int],
    ) -> AuditLog:
        """Write a single audit log record.

        Args:
            action: "create", "update" or "delete"
            links: ids of the touched entities, e.g. ``account_id=3, group_id=5``

        This method commits immediately to ensure audit is never lost.
        """
        entry = AuditLog(
            initiator_id=initiator_id,
            action=action,
            new_value_json=json.dumps(new_value, default=str) if new_value is not None else None,
            **links,
        )
        db.add(entry)
        db.commit()
        return entry

    @staticmethod
    def query_logs(
        db: Session,
        created_gte: Optional[datetime] = None,
        created_lte: Optional[datetime] = None,
        action: Optional[str] = None,
        initiator_id: Optional[int] = None,
    ):
        """Query audit logs, newest first."""
        query = db.query(AuditLog)

        if created_gte:
            query = query.filter(AuditLog.created_at >= created_gte)
        if created_lte:
            query = query.filter(AuditLog.created_at <= created_lte)
        if action:
            query = query.filter(AuditLog.action == action)
        if initiator_id:
            query = query.filter(AuditLog.initiator_id == initiator_id)

        return query.order_by(AuditLog.id.desc()).all()


audit_service = AuditService()
