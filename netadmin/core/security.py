"""Password hashing and JWT bearer tokens."""

import logging
import re
import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from jose import ExpiredSignatureError, JWTError, jwt

from netadmin.core.config import settings
from netadmin.core.exceptions import ConfigurationError, TokenExpired, TokenInvalid

logger = logging.getLogger("netadmin.security")

Duration = Union[str, int, float, timedelta]

_DURATION_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*([a-z]*)$")

_UNIT_SECONDS = {
    "": 1,
    "ms": 0.001,
    "s": 1, "sec": 1, "secs": 1, "second": 1, "seconds": 1,
    "m": 60, "min": 60, "mins": 60, "minute": 60, "minutes": 60,
    "h": 3600, "hr": 3600, "hrs": 3600, "hour": 3600, "hours": 3600,
    "d": 86400, "day": 86400, "days": 86400,
    "w": 604800, "week": 604800, "weeks": 604800,
}


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    if not hashed_password:
        return False
    pwd_bytes = plain_password.encode("utf-8")
    hashed_bytes = hashed_password.encode("utf-8")
    try:
        return bcrypt.checkpw(pwd_bytes, hashed_bytes)
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def parse_duration(value: Duration) -> timedelta:
    """Convert a lifetime such as ``"12h"``, ``"30 minutes"`` or ``3600`` to a timedelta.

    Bare numbers are seconds.

    Raises:
        ConfigurationError: If the value cannot be parsed or is not positive.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = float(value)
    else:
        match = _DURATION_RE.match(str(value).strip().lower())
        if not match or match.group(2) not in _UNIT_SECONDS:
            raise ConfigurationError(f"Invalid token lifetime: {value!r}")
        seconds = float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
    if seconds <= 0:
        raise ConfigurationError(f"Invalid token lifetime: {value!r}")
    return timedelta(seconds=seconds)


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens.

    Tokens are stateless: a token is valid exactly when its signature checks
    out and it has not expired. There is no server-side revocation.
    """

    def __init__(self, secret: Optional[str] = None, algorithm: Optional[str] = None):
        self._secret = secret
        self._algorithm = algorithm

    @property
    def secret(self) -> str:
        secret = self._secret or settings.JWT_SECRET
        if not secret:
            logger.error("JWT_SECRET is undefined")
            raise ConfigurationError("JWT_SECRET is undefined")
        return secret

    @property
    def algorithm(self) -> str:
        return self._algorithm or settings.JWT_ALGORITHM

    def ensure_configured(self) -> None:
        """Raise ConfigurationError when no signing secret is available."""
        _ = self.secret

    def issue(
        self,
        account_id: int,
        lifetime: Optional[Duration] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """Create a token for ``account_id`` expiring after ``lifetime``."""
        issued_at = now or datetime.now(timezone.utc)
        expires_at = issued_at + parse_duration(lifetime or settings.TOKEN_LIFETIME)
        payload = {
            "id": account_id,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> int:
        """Validate ``token`` and return the account id it was issued for.

        Raises:
            ConfigurationError: If no signing secret is configured.
            TokenExpired: If the token is past its expiry.
            TokenInvalid: If the token is missing, malformed or badly signed.
        """
        secret = self.secret
        if not token:
            raise TokenInvalid("Token is undefined")
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpired("Token has expired")
        except JWTError:
            raise TokenInvalid("Token signature or format is invalid")

        account_id = payload.get("id")
        if not isinstance(account_id, int) or isinstance(account_id, bool):
            raise TokenInvalid("Decoded token has no account id")
        return account_id


token_service = TokenService()
