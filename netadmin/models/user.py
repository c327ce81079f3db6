"""Directory user model."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from netadmin.db.base import Base


class User(Base):
    """Person in the organization directory (not a login account)."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    surname = Column(String(255), nullable=False, default="")
    name = Column(String(255), nullable=False, default="")
    patronymic = Column(String(255), nullable=False, default="")
    fullname = Column(String(255), nullable=False, default="")
    title = Column(String(255), nullable=False, default="")
    login = Column(String(255), nullable=False, default="", index=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True, index=True)
    disabled = Column(Integer, nullable=False, default=0)
    deleted = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    department = relationship("Department", back_populates="users")
    vpns = relationship("Vpn", back_populates="user")
