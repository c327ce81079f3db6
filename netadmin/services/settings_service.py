"""Runtime settings stored in the database."""

from typing import List, Optional

from sqlalchemy.orm import Session

from netadmin.core.exceptions import ConfigurationError, ResourceNotFoundError, ValidationError
from netadmin.core.security import parse_duration
from netadmin.models.setting import Setting

TOKEN_LIFETIME_KEY = "tokenLifetime"

SETTING_KEYS = [
    TOKEN_LIFETIME_KEY,
    "mailYandexToken",
    "mailYandexOrgId",
    "mailYandexDomain",
    "mailYandexTransporterHost",
    "mailYandexTransporterPort",
    "mailYandexTransporterSecure",
    "mailYandexTransporterAuthUser",
    "mailYandexTransporterAuthPass",
    "routerDefaultPort",
    "routerDefaultTimeout",
    "dnsServerAddress",
    "localDomain",
]


class SettingsService:
    """Reads and updates the key/value settings table."""

    @staticmethod
    def get_all(db: Session) -> List[Setting]:
        return db.query(Setting).order_by(Setting.key).all()

    @staticmethod
    def get_value(db: Session, key: str) -> Optional[str]:
        """Value of ``key``, or None when the row is missing or empty."""
        setting = db.query(Setting).filter(Setting.key == key).first()
        if setting is None or not setting.value:
            return None
        return setting.value

    @staticmethod
    def update(db: Session, key: str, value: Optional[str]) -> Setting:
        """Set the value of an existing key.

        An empty ``tokenLifetime`` falls back to the configured default; any
        other value must parse as a duration.

        Raises:
            ResourceNotFoundError: If ``key`` is not a known setting.
            ValidationError: If a token lifetime cannot be parsed.
        """
        setting = db.query(Setting).filter(Setting.key == key).first()
        if setting is None:
            raise ResourceNotFoundError(f"Setting '{key}' not found")
        if key == TOKEN_LIFETIME_KEY and value:
            try:
                parse_duration(value)
            except ConfigurationError as e:
                raise ValidationError(e.message) from e
        setting.value = value
        db.commit()
        db.refresh(setting)
        return setting


settings_service = SettingsService()
