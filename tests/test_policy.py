"""
Tests for the policy engine.

Decisions are pure functions of an identity and an ACL snapshot, so most of
these build identities directly instead of going through the database.
"""

import pytest

from netadmin.core.exceptions import ResourceNotFoundError
from netadmin.core.identity import GroupGrant, ResolvedIdentity
from netadmin.core.policy import (
    Capability,
    Level,
    ResourceAcl,
    check,
    check_router_access,
)


def identity(*grants, admin=0):
    return ResolvedIdentity(
        account_id=10,
        username="someone",
        admin=admin,
        groups=tuple(grants),
        group_ids=frozenset(g.group_id for g in grants),
    )


ALL_CAPABILITIES = list(Capability)
ALL_LEVELS = list(Level)


# =============================================================================
# Capability checks
# =============================================================================


class TestCheck:
    @pytest.mark.parametrize("capability", ALL_CAPABILITIES)
    @pytest.mark.parametrize("level", ALL_LEVELS)
    def test_admin_always_allowed(self, capability, level):
        assert check(identity(admin=1), capability, level)

    @pytest.mark.parametrize("capability", ALL_CAPABILITIES)
    @pytest.mark.parametrize("level", ALL_LEVELS)
    def test_no_groups_always_denied(self, capability, level):
        decision = check(identity(), capability, level)
        assert not decision
        assert decision.reason == "account has no groups"

    def test_viewer_group(self):
        viewer = identity(GroupGrant(group_id=1, access_users=1))
        assert check(viewer, Capability.USERS, Level.VIEWER)
        assert not check(viewer, Capability.USERS, Level.EDITOR)

    def test_capabilities_are_independent(self):
        mailer = identity(GroupGrant(group_id=1, access_mails=2))
        assert check(mailer, Capability.MAILS, Level.EDITOR)
        assert not check(mailer, Capability.USERS, Level.VIEWER)
        assert not check(mailer, Capability.ROUTERS, Level.VIEWER)
        assert not check(mailer, Capability.DEPARTMENTS, Level.VIEWER)

    def test_highest_group_wins(self):
        mixed = identity(
            GroupGrant(group_id=1, access_departments=0),
            GroupGrant(group_id=2, access_departments=2),
            GroupGrant(group_id=3, access_departments=1),
        )
        assert check(mixed, Capability.DEPARTMENTS, Level.EDITOR)

    @pytest.mark.parametrize("capability", ALL_CAPABILITIES)
    @pytest.mark.parametrize("granted", [0, 1, 2])
    def test_editor_implies_viewer(self, capability, granted):
        grant = GroupGrant(group_id=1, **{capability.column: granted})
        subject = identity(grant)
        if check(subject, capability, Level.EDITOR):
            assert check(subject, capability, Level.VIEWER)


# =============================================================================
# Router-scoped checks
# =============================================================================


class TestCheckRouterAccess:
    @pytest.mark.parametrize("level", ALL_LEVELS)
    def test_admin_allowed_without_acl(self, level):
        assert check_router_access(identity(admin=1), None, level)

    @pytest.mark.parametrize("level", ALL_LEVELS)
    def test_no_groups_denied_before_lookup(self, level):
        acl = ResourceAcl(resource_id=1, viewer_group_ids=frozenset({5}))
        assert not check_router_access(identity(), acl, level)
        assert not check_router_access(identity(), None, level)

    def test_missing_router(self):
        with pytest.raises(ResourceNotFoundError):
            check_router_access(identity(GroupGrant(group_id=5)), None, Level.VIEWER)

    def test_viewer_only_group(self):
        subject = identity(GroupGrant(group_id=5, access_routers=2))
        acl = ResourceAcl(resource_id=1, viewer_group_ids=frozenset({5}))

        assert check_router_access(subject, acl, Level.VIEWER)
        assert not check_router_access(subject, acl, Level.EDITOR)

    def test_editor_only_group_is_not_viewer(self):
        subject = identity(GroupGrant(group_id=5))
        acl = ResourceAcl(resource_id=1, editor_group_ids=frozenset({5}))

        assert check_router_access(subject, acl, Level.EDITOR)
        assert not check_router_access(subject, acl, Level.VIEWER)

    def test_any_membership_matches(self):
        subject = identity(GroupGrant(group_id=1), GroupGrant(group_id=9))
        acl = ResourceAcl(
            resource_id=1,
            viewer_group_ids=frozenset({9}),
            editor_group_ids=frozenset({2, 3}),
        )
        assert check_router_access(subject, acl, Level.VIEWER)
        assert not check_router_access(subject, acl, Level.EDITOR)
