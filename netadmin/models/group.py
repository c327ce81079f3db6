"""Group model: a named bundle of capability levels."""

from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from netadmin.db.base import Base


class Group(Base):
    """Permission group.

    Each ``access_*`` column is a capability level: 0 none, 1 viewer, 2 editor.
    """
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    title = Column(String(255), nullable=False, default="")
    access_routers = Column(Integer, nullable=False, default=0)
    access_users = Column(Integer, nullable=False, default=0)
    access_departments = Column(Integer, nullable=False, default=0)
    access_mails = Column(Integer, nullable=False, default=0)
    deleted = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    account_groups = relationship("AccountGroup", back_populates="group")
    router_viewers = relationship("RouterGroupViewer", back_populates="group")
    router_editors = relationship("RouterGroupEditor", back_populates="group")
