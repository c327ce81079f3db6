"""
API tests for login, identity resolution and the security routes.
"""

from jose import jwt


def login(client, username, password):
    return client.post("/api/security", json={"username": username, "password": password})


# =============================================================================
# Login
# =============================================================================


class TestLogin:
    def test_login_returns_token_and_account(self, client, make):
        account = make.account(username="bob", password="pw")

        resp = login(client, "bob", "pw")

        assert resp.status_code == 200
        data = resp.json()
        assert data["account"]["id"] == account.id
        assert data["account"]["username"] == "bob"
        assert "password" not in data["account"]
        claims = jwt.get_unverified_claims(data["token"])
        assert claims["id"] == account.id

    def test_wrong_password(self, client, make):
        make.account(username="bob", password="pw")
        resp = login(client, "bob", "nope")
        assert resp.status_code == 403
        assert resp.text == "Invalid username or password"

    def test_unknown_user_same_message(self, client):
        resp = login(client, "ghost", "pw")
        assert resp.status_code == 403
        assert resp.text == "Invalid username or password"

    def test_deleted_account_cannot_login(self, client, make):
        make.account(username="bob", password="pw", deleted=1)
        assert login(client, "bob", "pw").status_code == 403

    def test_disabled_account_cannot_login(self, client, make):
        make.account(username="bob", password="pw", disabled=1)
        resp = login(client, "bob", "pw")
        assert resp.status_code == 403
        assert resp.text == "Account is disabled"

    def test_lifetime_from_settings_table(self, client, make):
        make.account(username="bob", password="pw")
        make.setting("tokenLifetime", "1h")

        claims = jwt.get_unverified_claims(login(client, "bob", "pw").json()["token"])
        assert claims["exp"] - claims["iat"] == 3600

    def test_malformed_body(self, client):
        resp = client.post("/api/security", json={"username": "bob"})
        assert resp.status_code == 400
        assert resp.headers["content-type"].startswith("text/plain")

    def test_missing_secret(self, client, make, monkeypatch):
        from netadmin.core.config import settings
        make.account(username="bob", password="pw")
        monkeypatch.setattr(settings, "JWT_SECRET", None)

        resp = login(client, "bob", "pw")
        assert resp.status_code == 500
        assert resp.text == "JWT_SECRET is undefined"


# =============================================================================
# Identity resolution over HTTP
# =============================================================================


class TestIdentity:
    def test_current_account(self, client, make, auth_headers):
        account = make.account(username="carol")
        resp = client.get("/api/security", headers=auth_headers(account))
        assert resp.status_code == 200
        assert resp.json()["username"] == "carol"

    def test_no_header(self, client):
        resp = client.get("/api/security")
        assert resp.status_code == 403
        assert resp.text == "Invalid token"
        assert resp.headers["content-type"].startswith("text/plain")

    def test_wrong_scheme(self, client, make):
        resp = client.get("/api/security", headers={"Authorization": "Basic abc"})
        assert resp.status_code == 403
        assert resp.text == "Invalid token"

    def test_forged_token(self, client, make):
        account = make.account()
        forged = jwt.encode({"id": account.id}, "not-the-secret", algorithm="HS256")
        resp = client.get("/api/security", headers={"Authorization": f"Bearer {forged}"})
        assert resp.status_code == 403
        assert resp.text == "Invalid token"

    def test_unknown_account(self, client, auth_headers):
        resp = client.get("/api/security", headers=auth_headers(999))
        assert resp.status_code == 403
        assert resp.text == "Account not found"

    def test_missing_secret(self, client, monkeypatch):
        from netadmin.core.config import settings
        monkeypatch.setattr(settings, "JWT_SECRET", None)

        resp = client.get("/api/security", headers={"Authorization": "Bearer x"})
        assert resp.status_code == 500
        assert resp.text == "JWT_SECRET is undefined"

    def test_request_id_header(self, client):
        resp = client.get("/api")
        assert resp.status_code == 200
        assert resp.json() == {"status": "server is working"}
        assert resp.headers["X-Request-Id"]


# =============================================================================
# Scenarios
# =============================================================================


class TestScenarios:
    def test_admin_passes_capability_routes(self, client, make):
        make.account(username="root", password="pw", admin=1)
        token = login(client, "root", "pw").json()["token"]
        headers = {"Authorization": f"Bearer {token}"}

        for path in ("/api/db/user", "/api/db/router", "/api/db/department", "/api/db/mail"):
            assert client.get(path, headers=headers).status_code == 200

    def test_account_without_groups_denied(self, client, make):
        make.account(username="nogroups", password="pw")
        token = login(client, "nogroups", "pw").json()["token"]

        resp = client.get("/api/db/user", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 403
        assert resp.text == "Access Denied"

    def test_viewer_group_can_read_not_write(self, client, make, auth_headers):
        group = make.group(users=1)
        headers = auth_headers(make.account(groups=[group]))

        assert client.get("/api/db/user", headers=headers).status_code == 200
        resp = client.post("/api/db/user", json={"surname": "Doe"}, headers=headers)
        assert resp.status_code == 403

    def test_router_viewer_group(self, client, make, auth_headers):
        g5 = make.group(name="g5")
        router = make.router(viewers=[g5])
        headers = auth_headers(make.account(groups=[g5]))

        resp = client.get("/api/db/vpn", params={"router_id": router.id}, headers=headers)
        assert resp.status_code == 200
        resp = client.post(
            "/api/db/vpn", json={"router_id": router.id, "name": "x"}, headers=headers,
        )
        assert resp.status_code == 403

    def test_deleted_account_token_stops_working(self, client, make, admin, auth_headers):
        victim = make.account(username="victim")
        headers = auth_headers(victim)
        assert client.get("/api/security", headers=headers).status_code == 200

        resp = client.request(
            "DELETE", "/api/security/account", json={"id": victim.id}, headers=auth_headers(admin),
        )
        assert resp.status_code == 200

        resp = client.get("/api/security", headers=headers)
        assert resp.status_code == 403
        assert resp.text == "Account not found"


# =============================================================================
# Accounts, groups and memberships
# =============================================================================


class TestAccounts:
    def test_non_admin_cannot_create(self, client, make, auth_headers):
        group = make.group(routers=2, users=2, departments=2, mails=2)
        headers = auth_headers(make.account(groups=[group]))

        resp = client.post(
            "/api/security/account", json={"username": "x", "password": "y"}, headers=headers,
        )
        assert resp.status_code == 403
        assert resp.text == "Account is not admin"

    def test_create_update_and_login(self, client, admin, auth_headers):
        headers = auth_headers(admin)
        resp = client.post(
            "/api/security/account",
            json={"username": "dave", "password": "first", "fullname": "Dave"},
            headers=headers,
        )
        assert resp.status_code == 200
        dave_id = resp.json()["id"]
        assert "password" not in resp.json()

        resp = client.put(
            "/api/security/account", json={"id": dave_id, "password": "second"}, headers=headers,
        )
        assert resp.status_code == 200
        assert resp.json()["fullname"] == "Dave"

        assert login(client, "dave", "first").status_code == 403
        assert login(client, "dave", "second").status_code == 200

    def test_duplicate_username(self, client, admin, auth_headers):
        resp = client.post(
            "/api/security/account",
            json={"username": "root", "password": "x"},
            headers=auth_headers(admin),
        )
        assert resp.status_code == 409

    def test_password_longer_than_72_bytes(self, client, admin, auth_headers):
        headers = auth_headers(admin)

        resp = client.post(
            "/api/security/account", json={"username": "eve", "password": "\u00e9" * 72}, headers=headers,
        )
        assert resp.status_code == 400

        resp = client.post(
            "/api/security/account", json={"username": "eve", "password": "\u00e9" * 36}, headers=headers,
        )
        assert resp.status_code == 200
        eve_id = resp.json()["id"]

        resp = client.put(
            "/api/security/account", json={"id": eve_id, "password": "x" * 73}, headers=headers,
        )
        assert resp.status_code == 400
        assert login(client, "eve", "\u00e9" * 36).status_code == 200

    def test_list_and_get(self, client, make, admin, auth_headers):
        other = make.account(username="other")
        make.account(username="gone", deleted=1)
        headers = auth_headers(other)

        names = [a["username"] for a in client.get("/api/security/account", headers=headers).json()]
        assert names == ["root", "other"]

        resp = client.get("/api/security/account", params={"id": admin.id}, headers=headers)
        assert resp.json()["username"] == "root"
        resp = client.get("/api/security/account", params={"id": 999}, headers=headers)
        assert resp.status_code == 404


class TestGroups:
    def test_membership_grants_access(self, client, make, admin, auth_headers):
        account = make.account()
        user_headers = auth_headers(account)
        assert client.get("/api/db/department", headers=user_headers).status_code == 403

        resp = client.post(
            "/api/security/group",
            json={"name": "hr", "access_departments": 1},
            headers=auth_headers(admin),
        )
        group_id = resp.json()["id"]
        membership = {"account_id": account.id, "group_id": group_id}
        resp = client.post("/api/security/account-group", json=membership, headers=auth_headers(admin))
        assert resp.status_code == 200

        assert client.get("/api/db/department", headers=user_headers).status_code == 200

        resp = client.request(
            "DELETE", "/api/security/account-group", json=membership, headers=auth_headers(admin),
        )
        assert resp.status_code == 200
        assert client.get("/api/db/department", headers=user_headers).status_code == 403

    def test_duplicate_membership(self, client, make, admin, auth_headers):
        group = make.group()
        account = make.account(groups=[group])
        resp = client.post(
            "/api/security/account-group",
            json={"account_id": account.id, "group_id": group.id},
            headers=auth_headers(admin),
        )
        assert resp.status_code == 409

    def test_level_out_of_range(self, client, admin, auth_headers):
        resp = client.post(
            "/api/security/group",
            json={"name": "bad", "access_users": 3},
            headers=auth_headers(admin),
        )
        assert resp.status_code == 400
