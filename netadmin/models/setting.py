"""Runtime key/value settings editable by admins."""

from sqlalchemy import Column, String, Text, DateTime, func
from netadmin.db.base import Base


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
