"""End-to-end tests for registration, login and the auth gate."""

import pytest

from expense_tracker_api.app.core.security import create_access_token, verify_access_token

from .conftest import ADMIN_EMAIL, PASSWORD, bearer, register


class TestRegister:
    def test_regular_user_gets_user_role(self, client):
        body = register(client, "Bob Smith", "bob@x.com")
        assert body["role"] == "user"
        assert body["name"] == "Bob Smith"
        assert body["email"] == "bob@x.com"
        assert body["id"]
        assert body["token"]

    def test_password_is_never_returned(self, client):
        body = register(client, "Bob Smith", "bob@x.com")
        assert "password" not in body
        assert "passwordHash" not in body

    def test_requested_role_is_honoured(self, client):
        assert register(client, "Eve Admin", "eve@x.com", role="admin")["role"] == "admin"
        assert register(client, "Sam User", "sam@x.com", role="user")["role"] == "user"

    @pytest.mark.parametrize("requested", [None, "user", "admin"])
    def test_bootstrap_admin_address_is_always_admin(self, client, requested):
        body = register(client, "Site Admin", ADMIN_EMAIL, role=requested)
        assert body["role"] == "admin"

    def test_duplicate_email_is_rejected(self, client):
        register(client, "Bob Smith", "bob@x.com")
        response = client.post(
            "/api/auth/register",
            json={"name": "Bob Again", "email": "bob@x.com", "password": PASSWORD},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists with this email"

    def test_email_uniqueness_is_case_sensitive(self, client):
        register(client, "Bob Smith", "bob@x.com")
        assert register(client, "Bob Upper", "Bob@x.com")["email"] == "Bob@x.com"

    @pytest.mark.parametrize(
        "body, fragment",
        [
            ({"name": "B", "email": "bob@x.com", "password": PASSWORD}, "Name"),
            ({"name": "Bob 2", "email": "bob@x.com", "password": PASSWORD}, "Name"),
            ({"name": "Bob", "email": "not-an-email", "password": PASSWORD}, "email"),
            ({"name": "Bob", "email": "bob@x.com", "password": "weak"}, "Password"),
            ({"email": "bob@x.com", "password": PASSWORD}, "Name"),
            # The first failing field is reported.
            ({"name": "B", "email": "nope", "password": "weak"}, "Name"),
        ],
    )
    def test_invalid_input_is_rejected(self, client, body, fragment):
        response = client.post("/api/auth/register", json=body)
        assert response.status_code == 400
        assert fragment in response.json()["detail"]

    def test_unknown_role_is_a_validation_error(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "Bob", "email": "bob@x.com", "password": PASSWORD, "role": "root"},
        )
        assert response.status_code == 400


class TestLogin:
    def test_login_returns_token_for_same_user(self, client, bob):
        response = client.post("/api/auth/login", json={"email": "bob@x.com", "password": PASSWORD})
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == bob["id"]
        assert body["role"] == "user"
        assert verify_access_token(body["token"]) == bob["id"]

    def test_wrong_password(self, client, bob):
        response = client.post("/api/auth/login", json={"email": "bob@x.com", "password": "Wrong0ne!"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "ghost@x.com", "password": PASSWORD})
        assert response.status_code == 401

    def test_malformed_email(self, client):
        response = client.post("/api/auth/login", json={"email": "ghost", "password": PASSWORD})
        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter a valid email address"

    def test_short_password(self, client, bob):
        response = client.post("/api/auth/login", json={"email": "bob@x.com", "password": "abc"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Password must be at least 6 characters"


class TestAuthGate:
    def test_missing_token(self, client):
        response = client.get("/api/income")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_garbage_token(self, client):
        response = client.get("/api/income", headers=bearer("not.a.token"))
        assert response.status_code == 401

    def test_expired_token(self, client, bob):
        token = create_access_token(bob["id"], expires_delta=-1)
        response = client.get("/api/income", headers=bearer(token))
        assert response.status_code == 401

    def test_token_for_unknown_user(self, client):
        response = client.get("/api/income", headers=bearer(create_access_token("nobody")))
        assert response.status_code == 401

    def test_valid_token(self, client, bob):
        response = client.get("/api/income", headers=bearer(bob["token"]))
        assert response.status_code == 200
        assert response.json() == []


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Expense Tracker API is running!"}
