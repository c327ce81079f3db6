"""Mail account model (mirrors a Yandex 360 mailbox)."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from netadmin.db.base import Base


class Mail(Base):
    __tablename__ = "mails"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nickname = Column(String(255), nullable=False, index=True)
    name_first = Column(String(255), nullable=False, default="")
    name_last = Column(String(255), nullable=False, default="")
    name_middle = Column(String(255), nullable=False, default="")
    position = Column(String(255), nullable=False, default="")
    is_admin = Column(Integer, nullable=False, default=0)
    is_enabled = Column(Integer, nullable=False, default=1)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    deleted = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
