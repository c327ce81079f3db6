"""Auth service: login, account management, group membership."""

import logging
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from netadmin.core.config import settings
from netadmin.core.exceptions import (
    AuthenticationError, ResourceConflictError, ResourceNotFoundError,
)
from netadmin.core.security import hash_password, verify_password, token_service
from netadmin.models.account import Account, AccountGroup
from netadmin.models.group import Group
from netadmin.services.settings_service import settings_service, TOKEN_LIFETIME_KEY

logger = logging.getLogger("netadmin.auth")


class AuthService:
    """Handles authentication and account management."""

    @staticmethod
    def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
        """Check credentials and issue a token.

        The token lifetime comes from the ``tokenLifetime`` setting when it is
        set, otherwise from ``TOKEN_LIFETIME``.

        Raises:
            ConfigurationError: If no signing secret is configured.
            AuthenticationError: If the account is unknown, deleted, disabled
                or the password does not match.
        """
        token_service.ensure_configured()

        account = (
            db.query(Account)
            .filter(Account.username == username, Account.deleted == 0)
            .first()
        )
        if not account or not verify_password(password, account.password):
            logger.warning("Login failed for '%s'", username)
            raise AuthenticationError("Invalid username or password")

        if account.disabled:
            logger.warning("Login refused for disabled account %s", account.id)
            raise AuthenticationError("Account is disabled")

        lifetime = settings_service.get_value(db, TOKEN_LIFETIME_KEY) or settings.TOKEN_LIFETIME
        token = token_service.issue(account.id, lifetime)
        logger.info("Token issued for account %s", account.id)

        return {"token": token, "account": account}

    @staticmethod
    def get_account(db: Session, account_id: int) -> Account:
        """Get a non-deleted account by id."""
        account = (
            db.query(Account)
            .filter(Account.id == account_id, Account.deleted == 0)
            .first()
        )
        if not account:
            raise ResourceNotFoundError(f"Account with ID {account_id} not found")
        return account

    @staticmethod
    def list_accounts(db: Session) -> List[Account]:
        return db.query(Account).filter(Account.deleted == 0).order_by(Account.id).all()

    @staticmethod
    def create_account(db: Session, data: Dict[str, Any]) -> Account:
        """Create a new account. ``data["password"]`` is plain text."""
        AuthService._ensure_username_free(db, data["username"])
        fields = dict(data)
        fields["password"] = hash_password(fields["password"])
        account = Account(**fields)
        db.add(account)
        db.commit()
        db.refresh(account)
        return account

    @staticmethod
    def update_account(db: Session, account_id: int, changes: Dict[str, Any]) -> Account:
        """Apply changes to an account, re-hashing the password when given."""
        account = AuthService.get_account(db, account_id)
        changes = dict(changes)
        if changes.get("username") and changes["username"] != account.username:
            AuthService._ensure_username_free(db, changes["username"])
        if changes.get("password"):
            changes["password"] = hash_password(changes["password"])
        else:
            changes.pop("password", None)

        for field, value in changes.items():
            if value is not None:
                setattr(account, field, value)
        db.commit()
        db.refresh(account)
        return account

    @staticmethod
    def delete_account(db: Session, account_id: int) -> Account:
        """Soft-delete an account. Tokens already issued stop resolving."""
        account = AuthService.get_account(db, account_id)
        account.deleted = 1
        db.commit()
        db.refresh(account)
        return account

    @staticmethod
    def add_membership(db: Session, account_id: int, group_id: int) -> AccountGroup:
        """Join an account to a group."""
        AuthService.get_account(db, account_id)
        group = db.query(Group).filter(Group.id == group_id, Group.deleted == 0).first()
        if not group:
            raise ResourceNotFoundError(f"Group with ID {group_id} not found")

        existing = (
            db.query(AccountGroup)
            .filter(AccountGroup.account_id == account_id, AccountGroup.group_id == group_id)
            .first()
        )
        if existing:
            raise ResourceConflictError(f"Account {account_id} is already in group {group_id}")

        membership = AccountGroup(account_id=account_id, group_id=group_id)
        db.add(membership)
        db.commit()
        db.refresh(membership)
        return membership

    @staticmethod
    def remove_membership(db: Session, account_id: int, group_id: int) -> Dict[str, int]:
        """Remove an account from a group. Returns the removed row's values."""
        membership = (
            db.query(AccountGroup)
            .filter(AccountGroup.account_id == account_id, AccountGroup.group_id == group_id)
            .first()
        )
        if not membership:
            raise ResourceNotFoundError(f"Account {account_id} is not in group {group_id}")

        removed = {
            "id": membership.id,
            "account_id": membership.account_id,
            "group_id": membership.group_id,
        }
        db.delete(membership)
        db.commit()
        return removed

    @staticmethod
    def _ensure_username_free(db: Session, username: str) -> None:
        if db.query(Account).filter(Account.username == username).first():
            raise ResourceConflictError(f"Account with username {username} already exists")


auth_service = AuthService()
