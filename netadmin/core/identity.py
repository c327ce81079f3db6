"""Identity resolution: bearer header -> ResolvedIdentity.

Every protected route depends on ``get_identity`` (directly or through one of
the policy dependencies in ``netadmin.core.policy``). The resolved identity
is handed to the route as an ordinary argument; nothing is stashed on the
request.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from fastapi import Depends, Header
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from netadmin.core.exceptions import IdentityNotFound, StoreFault, TokenInvalid
from netadmin.core.security import TokenService, token_service
from netadmin.db.session import get_db
from netadmin.models.account import Account, AccountGroup

logger = logging.getLogger("netadmin.identity")

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class GroupGrant:
    """Capability levels of one group the account belongs to."""

    group_id: int
    access_routers: int = 0
    access_users: int = 0
    access_departments: int = 0
    access_mails: int = 0

    def level(self, column: str) -> int:
        return getattr(self, column) or 0


@dataclass(frozen=True)
class ResolvedIdentity:
    """Authenticated account plus its group memberships."""

    account_id: int
    username: str
    admin: int = 0
    disabled: int = 0
    groups: Tuple[GroupGrant, ...] = ()
    group_ids: FrozenSet[int] = field(default=frozenset())

    @property
    def is_admin(self) -> bool:
        return self.admin == 1

    @classmethod
    def from_account(cls, account: Account) -> "ResolvedIdentity":
        grants = tuple(
            GroupGrant(
                group_id=membership.group_id,
                access_routers=membership.group.access_routers,
                access_users=membership.group.access_users,
                access_departments=membership.group.access_departments,
                access_mails=membership.group.access_mails,
            )
            for membership in account.account_groups
        )
        return cls(
            account_id=account.id,
            username=account.username,
            admin=account.admin,
            disabled=account.disabled,
            groups=grants,
            group_ids=frozenset(grant.group_id for grant in grants),
        )


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        raise TokenInvalid("Token is undefined")
    if not authorization.startswith(BEARER_PREFIX):
        raise TokenInvalid('Token should start with "Bearer"')
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise TokenInvalid("Token is undefined")
    return token


def load_active_account(db: Session, account_id: int) -> Optional[Account]:
    """Non-deleted account with memberships and their groups loaded."""
    return (
        db.query(Account)
        .options(selectinload(Account.account_groups).joinedload(AccountGroup.group))
        .filter(Account.id == account_id, Account.deleted == 0)
        .first()
    )


def resolve_identity(
    db: Session,
    authorization: Optional[str],
    tokens: TokenService = token_service,
) -> ResolvedIdentity:
    """Authenticate the request.

    Raises:
        ConfigurationError: If the signing secret is missing (500).
        TokenInvalid: If the header or token is unusable (403).
        IdentityNotFound: If the account is missing or soft-deleted (403).
        StoreFault: If the database lookup fails (500).
    """
    tokens.ensure_configured()
    try:
        account_id = tokens.verify(extract_bearer_token(authorization))
    except TokenInvalid as e:
        logger.warning("Rejected token: %s", e.message)
        raise

    try:
        account = load_active_account(db, account_id)
        identity = ResolvedIdentity.from_account(account) if account else None
    except SQLAlchemyError as e:
        logger.error("Account lookup failed for id %s: %s", account_id, e)
        raise StoreFault("Account lookup failed") from e

    if identity is None:
        logger.warning("Account %s does not exist or is deleted", account_id)
        raise IdentityNotFound("Account not found")

    logger.info("Account found with id %s", identity.account_id)
    return identity


async def get_identity(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> ResolvedIdentity:
    """FastAPI dependency resolving the caller's identity from the bearer header."""
    return resolve_identity(db, authorization)
