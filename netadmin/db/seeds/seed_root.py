"""Seed the root admin account from env vars."""

from sqlalchemy.orm import Session
from netadmin.models.account import Account
from netadmin.core.security import hash_password
from netadmin.core.config import settings


def seed_root(db: Session) -> None:
    """Create the root admin account if not already present."""
    existing = db.query(Account).filter(Account.username == settings.ROOT_USERNAME).first()
    if existing:
        print(f"ℹ️  Root account '{settings.ROOT_USERNAME}' already exists, skipping.")
        return

    root = Account(
        username=settings.ROOT_USERNAME,
        password=hash_password(settings.ROOT_PASSWORD),
        fullname="Root",
        title="Built-in administrator",
        admin=1,
    )
    db.add(root)
    db.commit()
    print(f"✅ Created root account: {settings.ROOT_USERNAME}")
