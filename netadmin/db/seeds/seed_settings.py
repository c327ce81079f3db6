"""Seed the runtime settings table with every known key."""

from sqlalchemy.orm import Session
from netadmin.models.setting import Setting
from netadmin.core.config import settings
from netadmin.services.settings_service import SETTING_KEYS, TOKEN_LIFETIME_KEY


def seed_settings(db: Session) -> None:
    """Insert missing setting rows; existing values are left alone."""
    existing = {key for (key,) in db.query(Setting.key).all()}
    created = 0
    for key in SETTING_KEYS:
        if key in existing:
            continue
        value = settings.TOKEN_LIFETIME if key == TOKEN_LIFETIME_KEY else None
        db.add(Setting(key=key, value=value))
        created += 1
    db.commit()
    print(f"✅ Settings seeded ({created} new)")
