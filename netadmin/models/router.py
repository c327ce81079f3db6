"""Router model and its per-router group ACL tables."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from netadmin.db.base import Base


class Router(Base):
    """RouterOS device managed by the backend."""
    __tablename__ = "routers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, default="")
    title = Column(String(255), nullable=False, default="")
    login = Column(String(255), nullable=False, default="")
    password = Column(String(255), nullable=False, default="")
    local_address = Column(String(45), nullable=False, default="")
    remote_address = Column(String(45), nullable=False, default="")
    default_profile = Column(String(255), nullable=False, default="")
    l2tp_key = Column(String(255), nullable=False, default="")
    disabled = Column(Integer, nullable=False, default=0)
    deleted = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    group_viewers = relationship("RouterGroupViewer", back_populates="router", lazy="selectin")
    group_editors = relationship("RouterGroupEditor", back_populates="router", lazy="selectin")
    vpns = relationship("Vpn", back_populates="router")


class RouterGroupViewer(Base):
    """Grants a group viewer scope over one router."""
    __tablename__ = "router_group_viewers"
    __table_args__ = (UniqueConstraint("router_id", "group_id", name="uq_router_group_viewer"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    router_id = Column(Integer, ForeignKey("routers.id", ondelete="CASCADE"), nullable=False, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    router = relationship("Router", back_populates="group_viewers")
    group = relationship("Group", back_populates="router_viewers")


class RouterGroupEditor(Base):
    """Grants a group editor scope over one router.

    Independent of RouterGroupViewer: an editor row does not imply a viewer row.
    """
    __tablename__ = "router_group_editors"
    __table_args__ = (UniqueConstraint("router_id", "group_id", name="uq_router_group_editor"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    router_id = Column(Integer, ForeignKey("routers.id", ondelete="CASCADE"), nullable=False, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    router = relationship("Router", back_populates="group_editors")
    group = relationship("Group", back_populates="router_editors")
