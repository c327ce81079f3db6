"""VPN account model."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from netadmin.db.base import Base


class Vpn(Base):
    """PPP secret provisioned on a router, optionally assigned to a user."""
    __tablename__ = "vpns"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    password = Column(String(255), nullable=False, default="")
    profile = Column(String(255), nullable=False, default="")
    remote_address = Column(String(45), nullable=False, default="")
    service = Column(String(50), nullable=False, default="any")
    title = Column(String(255), nullable=False, default="")
    vpn_id = Column(String(50), nullable=True)  # RouterOS ".id" of the secret
    router_id = Column(Integer, ForeignKey("routers.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    disabled = Column(Integer, nullable=False, default=0)
    deleted = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    router = relationship("Router", back_populates="vpns")
    user = relationship("User", back_populates="vpns")
