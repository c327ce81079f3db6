"""Account and AccountGroup models."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from netadmin.db.base import Base


class Account(Base):
    """Login identity. Soft-deleted via ``deleted``, never removed."""
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    fullname = Column(String(255), nullable=False, default="")
    title = Column(String(255), nullable=False, default="")
    admin = Column(Integer, nullable=False, default=0)
    disabled = Column(Integer, nullable=False, default=0)
    deleted = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    account_groups = relationship("AccountGroup", back_populates="account", lazy="selectin")


class AccountGroup(Base):
    """Membership of an account in a group."""
    __tablename__ = "account_groups"
    __table_args__ = (UniqueConstraint("account_id", "group_id", name="uq_account_group"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    account = relationship("Account", back_populates="account_groups")
    group = relationship("Group", back_populates="account_groups", lazy="joined")
