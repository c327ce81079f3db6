"""Mail group model (mirrors a Yandex 360 group) and its mailbox members."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from netadmin.db.base import Base


class MailGroup(Base):
    __tablename__ = "mail_groups"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mail_group_id = Column(String(64), nullable=True, unique=True)  # directory-side id
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(255), nullable=False, default="")
    label = Column(String(255), nullable=False, default="")
    deleted = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    members = relationship("MailMailGroup", back_populates="mail_group", lazy="selectin")


class MailMailGroup(Base):
    """Membership of one mailbox in one mail group."""
    __tablename__ = "mail_mail_groups"
    __table_args__ = (UniqueConstraint("mail_id", "mail_group_id", name="uq_mail_mail_group"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    mail_id = Column(Integer, ForeignKey("mails.id", ondelete="CASCADE"), nullable=False, index=True)
    mail_group_id = Column(Integer, ForeignKey("mail_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    mail_group = relationship("MailGroup", back_populates="members")
    mail = relationship("Mail", lazy="joined")
