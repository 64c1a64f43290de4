"""
Unit tests for authentication endpoints.

Tests:
- Getting a token with username/password
- User registration
- Registration validation
"""

import pytest

from jobly.core.security import decode_token


class TestLogin:
    """Test POST /auth/token"""

    def test_login_success(self, client, seeded_db):
        """Test that valid credentials return a token for the user"""
        response = client.post(
            "/api/v1/auth/token",
            json={"username": "u1", "password": "password1"}
        )

        assert response.status_code == 200
        payload = decode_token(response.json()["token"])
        assert payload["sub"] == "u1"
        assert payload["is_admin"] is True

    def test_login_non_admin(self, client, seeded_db):
        response = client.post(
            "/api/v1/auth/token",
            json={"username": "u2", "password": "password2"}
        )

        assert response.status_code == 200
        assert decode_token(response.json()["token"])["is_admin"] is False

    def test_login_wrong_password(self, client, seeded_db):
        """Test that a wrong password is rejected"""
        response = client.post(
            "/api/v1/auth/token",
            json={"username": "u1", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_login_unknown_user(self, client, seeded_db):
        response = client.post(
            "/api/v1/auth/token",
            json={"username": "no-such-user", "password": "password1"}
        )
        assert response.status_code == 401

    def test_login_missing_data(self, client, seeded_db):
        response = client.post("/api/v1/auth/token", json={"username": "u1"})
        assert response.status_code == 422


class TestRegistration:
    """Test POST /auth/register"""

    new_user = {
        "username": "new",
        "firstName": "first",
        "lastName": "last",
        "password": "password",
        "email": "new@email.com",
    }

    def test_register_success(self, client, seeded_db):
        """Test that registering returns a non-admin token"""
        response = client.post("/api/v1/auth/register", json=self.new_user)

        assert response.status_code == 201
        payload = decode_token(response.json()["token"])
        assert payload["sub"] == "new"
        assert payload["is_admin"] is False

    def test_register_then_login(self, client, seeded_db):
        client.post("/api/v1/auth/register", json=self.new_user)

        response = client.post(
            "/api/v1/auth/token",
            json={"username": "new", "password": "password"}
        )
        assert response.status_code == 200

    def test_register_cannot_make_admin(self, client, seeded_db):
        """Test that isAdmin is not accepted on self-registration"""
        response = client.post("/api/v1/auth/register", json={**self.new_user, "isAdmin": True})
        assert response.status_code == 422

    def test_register_duplicate_username(self, client, seeded_db):
        response = client.post("/api/v1/auth/register", json={**self.new_user, "username": "u1"})

        assert response.status_code == 400
        assert "duplicate" in response.json()["detail"].lower()

    @pytest.mark.parametrize("changes", [
        {"email": "not-an-email"},
        {"password": "1234"},
        {"username": ""},
        {"firstName": None},
    ])
    def test_register_invalid_data(self, client, seeded_db, changes):
        response = client.post("/api/v1/auth/register", json={**self.new_user, **changes})
        assert response.status_code == 422

    def test_register_missing_data(self, client, seeded_db):
        response = client.post("/api/v1/auth/register", json={"username": "new"})
        assert response.status_code == 422
