"""
Shared fixtures: in-memory SQLite database, API client, entity factories.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ.pop("JWT_SECRET", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import netadmin.models  # noqa: F401
from netadmin.core.config import settings
from netadmin.core.security import hash_password, token_service
from netadmin.db.base import Base
from netadmin.db.session import get_db
from netadmin.main import app
from netadmin.models.account import Account, AccountGroup
from netadmin.models.group import Group
from netadmin.models.router import Router, RouterGroupEditor, RouterGroupViewer
from netadmin.models.setting import Setting
from netadmin.models.vpn import Vpn

TEST_SECRET = "test-secret"


# =============================================================================
# Database
# =============================================================================


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    """Every test runs with a signing secret unless it removes it."""
    monkeypatch.setattr(settings, "JWT_SECRET", TEST_SECRET)
    return TEST_SECRET


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """API client bound to the test database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Factories
# =============================================================================


class Factory:
    """Creates committed rows in the test database."""

    def __init__(self, db):
        self.db = db

    def _save(self, entity):
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def account(self, username="alice", password=None, admin=0, disabled=0, deleted=0, groups=()):
        # hashing is slow; only accounts that log in get a real hash
        account = self._save(Account(
            username=username,
            password=hash_password(password) if password else "!",
            admin=admin,
            disabled=disabled,
            deleted=deleted,
        ))
        for group in groups:
            self._save(AccountGroup(account_id=account.id, group_id=group.id))
        self.db.expire(account)
        return account

    def group(self, name="staff", routers=0, users=0, departments=0, mails=0, deleted=0):
        return self._save(Group(
            name=name,
            access_routers=routers,
            access_users=users,
            access_departments=departments,
            access_mails=mails,
            deleted=deleted,
        ))

    def router(self, name="edge", viewers=(), editors=(), deleted=0):
        router = self._save(Router(name=name, deleted=deleted))
        for group in viewers:
            self._save(RouterGroupViewer(router_id=router.id, group_id=group.id))
        for group in editors:
            self._save(RouterGroupEditor(router_id=router.id, group_id=group.id))
        self.db.expire(router)
        return router

    def vpn(self, router, name="vpn-user"):
        return self._save(Vpn(name=name, router_id=router.id))

    def setting(self, key, value=None):
        return self._save(Setting(key=key, value=value))


@pytest.fixture
def make(db):
    return Factory(db)


@pytest.fixture
def auth_headers():
    """Build an Authorization header for an account."""

    def _headers(account):
        account_id = account if isinstance(account, int) else account.id
        return {"Authorization": f"Bearer {token_service.issue(account_id)}"}

    return _headers


@pytest.fixture
def admin(make):
    return make.account(username="root", admin=1)
