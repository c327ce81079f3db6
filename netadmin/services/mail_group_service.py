"""Mail group membership edits."""

from typing import Dict

from sqlalchemy.orm import Session

from netadmin.core.exceptions import ResourceConflictError, ResourceNotFoundError
from netadmin.models.mail import Mail
from netadmin.models.mail_group import MailGroup, MailMailGroup


class MailGroupService:
    """Adds mailboxes to mail groups and removes them."""

    @staticmethod
    def add_member(db: Session, mail_group_id: int, mail_id: int) -> MailMailGroup:
        """Put a non-deleted mailbox into a non-deleted mail group.

        Raises:
            ResourceNotFoundError: If the group or the mailbox is missing.
            ResourceConflictError: If the mailbox is already a member.
        """
        if not db.query(MailGroup).filter(MailGroup.id == mail_group_id, MailGroup.deleted == 0).first():
            raise ResourceNotFoundError(f"Mail group with ID {mail_group_id} not found")
        if not db.query(Mail).filter(Mail.id == mail_id, Mail.deleted == 0).first():
            raise ResourceNotFoundError(f"Mail with ID {mail_id} not found")
        if MailGroupService._find(db, mail_group_id, mail_id):
            raise ResourceConflictError(f"Mail {mail_id} is already in mail group {mail_group_id}")

        row = MailMailGroup(mail_group_id=mail_group_id, mail_id=mail_id)
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    @staticmethod
    def remove_member(db: Session, mail_group_id: int, mail_id: int) -> Dict[str, int]:
        """Delete a membership row. Returns the removed row's values."""
        row = MailGroupService._find(db, mail_group_id, mail_id)
        if not row:
            raise ResourceNotFoundError(f"Mail {mail_id} is not in mail group {mail_group_id}")
        removed = {"id": row.id, "mail_id": row.mail_id, "mail_group_id": row.mail_group_id}
        db.delete(row)
        db.commit()
        return removed

    @staticmethod
    def _find(db: Session, mail_group_id: int, mail_id: int):
        return (
            db.query(MailMailGroup)
            .filter(MailMailGroup.mail_group_id == mail_group_id, MailMailGroup.mail_id == mail_id)
            .first()
        )


mail_group_service = MailGroupService()
