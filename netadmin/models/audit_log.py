"""Audit log model: append-only."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from netadmin.db.base import Base


class AuditLog(Base):
    """Immutable audit trail for all mutations.

    This table is APPEND-ONLY: no UPDATE or DELETE operations should ever
    be performed on it (enforced at application level).
    """
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String(100), nullable=False, index=True)  # e.g. "create", "delete"
    new_value_json = Column(Text, nullable=True)
    initiator_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=True)
    router_id = Column(Integer, ForeignKey("routers.id"), nullable=True)
    vpn_id = Column(Integer, ForeignKey("vpns.id"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True)
    mail_id = Column(Integer, ForeignKey("mails.id"), nullable=True)
    mail_group_id = Column(Integer, ForeignKey("mail_groups.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
