"""Tests for the authentication router."""
import pytest
from unittest.mock import patch, Mock, AsyncMock
from fastapi.testclient import TestClient
from psycopg2 import IntegrityError

from scripture_api.main import app
from scripture_api.auth import get_current_user_dependency
from scripture_api.services.google_auth_service import get_google_auth_service


client = TestClient(app)

USER = {
    "id": 1, "name": "Ruth", "email": "ruth@example.com", "phone": None, "role": "user",
    "is_admin": False, "profile_picture": None, "is_active": True,
    "created_at": "2025-01-01T00:00:00",
}


@pytest.fixture(autouse=True)
def clear_overrides():
    app.dependency_overrides.clear()
    client.cookies.clear()
    yield
    app.dependency_overrides.clear()


def _login_as(user=None):
    app.dependency_overrides[get_current_user_dependency] = lambda: user or USER


class TestRegister:

    @patch("scripture_api.routers.auth.start_session", return_value="jwt-token")
    @patch("scripture_api.routers.auth.create_user")
    @patch("scripture_api.routers.auth.get_user_by_email")
    def test_register_success(self, mock_get_user, mock_create, mock_session):
        mock_get_user.return_value = None
        mock_create.return_value = USER

        response = client.post("/api/auth/register", json={
            "name": " Ruth ",
            "email": "ruth@example.com",
            "password": "securepassword123",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["token"] == "jwt-token"
        assert data["user"]["email"] == "ruth@example.com"
        assert data["user"]["is_admin"] is False
        assert mock_create.call_args[1]["name"] == "Ruth"

    @patch("scripture_api.routers.auth.get_user_by_email")
    def test_register_duplicate_email(self, mock_get_user):
        mock_get_user.return_value = USER

        response = client.post("/api/auth/register", json={
            "name": "Ruth",
            "email": "ruth@example.com",
            "password": "securepassword123",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "An account with this email already exists"

    @patch("scripture_api.routers.auth.create_user")
    @patch("scripture_api.routers.auth.get_user_by_email")
    def test_register_race_on_unique_email(self, mock_get_user, mock_create):
        mock_get_user.return_value = None
        mock_create.side_effect = IntegrityError("duplicate key")

        response = client.post("/api/auth/register", json={
            "name": "Ruth",
            "email": "ruth@example.com",
            "password": "securepassword123",
        })

        assert response.status_code == 400

    def test_register_short_password(self):
        response = client.post("/api/auth/register", json={
            "name": "Ruth",
            "email": "ruth@example.com",
            "password": "short",
        })

        assert response.status_code == 422

    def test_register_invalid_email(self):
        response = client.post("/api/auth/register", json={
            "name": "Ruth",
            "email": "not-an-email",
            "password": "securepassword123",
        })

        assert response.status_code == 422


class TestLogin:

    @patch("scripture_api.routers.auth.start_session", return_value="jwt-token")
    @patch("scripture_api.routers.auth.verify_password", return_value=True)
    @patch("scripture_api.routers.auth.get_user_by_email")
    def test_login_success(self, mock_get_user, mock_verify, mock_session):
        mock_get_user.return_value = {**USER, "hashed_password": "hashed"}

        response = client.post("/api/auth/login", json={
            "email": "ruth@example.com",
            "password": "password123",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["token"] == "jwt-token"
        assert "hashed_password" not in data["user"]
        mock_session.assert_called_once()

    @patch("scripture_api.routers.auth.verify_password", return_value=False)
    @patch("scripture_api.routers.auth.get_user_by_email")
    def test_login_wrong_password(self, mock_get_user, mock_verify):
        mock_get_user.return_value = {**USER, "hashed_password": "hashed"}

        response = client.post("/api/auth/login", json={
            "email": "ruth@example.com",
            "password": "wrong",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid credentials"

    @patch("scripture_api.routers.auth.get_user_by_email", return_value=None)
    def test_login_unknown_email(self, mock_get_user):
        response = client.post("/api/auth/login", json={
            "email": "nobody@example.com",
            "password": "password123",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid credentials"

    @patch("scripture_api.routers.auth.verify_password", return_value=True)
    @patch("scripture_api.routers.auth.get_user_by_email")
    def test_login_inactive(self, mock_get_user, mock_verify):
        mock_get_user.return_value = {**USER, "is_active": False, "hashed_password": "hashed"}

        response = client.post("/api/auth/login", json={
            "email": "ruth@example.com",
            "password": "password123",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "Inactive user account"

    @patch("scripture_api.routers.auth.get_user_by_email")
    def test_login_sets_cookies(self, mock_get_user):
        from scripture_api.auth import get_password_hash
        mock_get_user.return_value = {**USER, "hashed_password": get_password_hash("password123")}

        response = client.post("/api/auth/login", json={
            "email": "ruth@example.com",
            "password": "password123",
        })

        assert response.status_code == 200
        assert "scripture_auth" in response.cookies
        assert response.headers["X-CSRF-Token"] == response.cookies["scripture_csrf"]


def _google(configured=True, identity=None):
    google = Mock()
    google.is_configured.return_value = configured
    google.verify_id_token = AsyncMock(return_value=identity)
    app.dependency_overrides[get_google_auth_service] = lambda: google
    return google


IDENTITY = {"sub": "g-1", "email": "ruth@example.com", "name": "Ruth", "picture": "https://example.com/r.png"}


class TestGoogleLogin:

    def test_not_configured(self):
        _google(configured=False)

        response = client.post("/api/auth/google", json={"credential": "id-token"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Google OAuth not configured"

    def test_invalid_token(self):
        _google(identity=None)

        response = client.post("/api/auth/google", json={"credential": "bad"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Google authentication failed"

    @patch("scripture_api.routers.auth.start_session", return_value="jwt-token")
    @patch("scripture_api.routers.auth.get_user_by_google_id", return_value=USER)
    def test_existing_google_user(self, mock_by_google, mock_session):
        _google(identity=IDENTITY)

        response = client.post("/api/auth/google", json={"credential": "id-token"})

        assert response.status_code == 200
        assert response.json()["token"] == "jwt-token"

    @patch("scripture_api.routers.auth.start_session", return_value="jwt-token")
    @patch("scripture_api.routers.auth.link_google_account", return_value=USER)
    @patch("scripture_api.routers.auth.get_user_by_email", return_value=USER)
    @patch("scripture_api.routers.auth.get_user_by_google_id", return_value=None)
    def test_links_existing_email(self, mock_by_google, mock_by_email, mock_link, mock_session):
        _google(identity=IDENTITY)

        response = client.post("/api/auth/google", json={"credential": "id-token"})

        assert response.status_code == 200
        mock_link.assert_called_once_with(1, "g-1", "https://example.com/r.png")

    @patch("scripture_api.routers.auth.start_session", return_value="jwt-token")
    @patch("scripture_api.routers.auth.create_google_user", return_value=USER)
    @patch("scripture_api.routers.auth.get_user_by_email", return_value=None)
    @patch("scripture_api.routers.auth.get_user_by_google_id", return_value=None)
    def test_creates_new_user(self, mock_by_google, mock_by_email, mock_create, mock_session):
        _google(identity=IDENTITY)

        response = client.post("/api/auth/google", json={"credential": "id-token"})

        assert response.status_code == 200
        assert mock_create.call_args[1]["google_id"] == "g-1"


class TestProfile:

    def test_profile_requires_auth(self):
        response = client.get("/api/auth/profile")

        assert response.status_code == 401

    def test_get_profile(self):
        _login_as()

        response = client.get("/api/auth/profile")

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Ruth"

    def test_me(self):
        _login_as({**USER, "role": "admin"})

        response = client.get("/api/auth/me")

        assert response.json()["user"]["is_admin"] is True

    @patch("scripture_api.routers.auth.update_user_profile")
    def test_update_profile(self, mock_update):
        _login_as()
        mock_update.return_value = {**USER, "name": "Naomi"}

        response = client.put("/api/auth/profile", json={"name": " Naomi ", "phone": ""})

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Naomi"
        mock_update.assert_called_once_with(1, name="Naomi", phone=None, profile_picture=None)

    def test_update_profile_blank_name(self):
        _login_as()

        response = client.put("/api/auth/profile", json={"name": "   "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Name is required"


class TestPasswords:

    @patch("scripture_api.routers.auth.update_user_password")
    @patch("scripture_api.routers.auth.verify_password", return_value=True)
    @patch("scripture_api.routers.auth.get_user_with_password")
    def test_change_password(self, mock_get_user, mock_verify, mock_update):
        _login_as()
        mock_get_user.return_value = {**USER, "hashed_password": "hashed"}

        response = client.put("/api/auth/change-password", json={
            "old_password": "oldpass1", "new_password": "newpass1",
        })

        assert response.status_code == 200
        mock_update.assert_called_once_with(1, "newpass1")

    @patch("scripture_api.routers.auth.verify_password", return_value=False)
    @patch("scripture_api.routers.auth.get_user_with_password")
    def test_change_password_wrong_current(self, mock_get_user, mock_verify):
        _login_as()
        mock_get_user.return_value = {**USER, "hashed_password": "hashed"}

        response = client.put("/api/auth/change-password", json={
            "old_password": "wrong", "new_password": "newpass1",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "Current password is incorrect"

    @patch("scripture_api.routers.auth.get_user_by_email", return_value=None)
    def test_forgot_password_unknown_email(self, mock_get_user):
        response = client.post("/api/auth/forgot-password", json={"email": "nobody@example.com"})

        assert response.status_code == 200
        assert response.json()["reset_token"] is None

    @patch("scripture_api.routers.auth.settings")
    @patch("scripture_api.routers.auth.create_password_reset_token", return_value="reset-token")
    @patch("scripture_api.routers.auth.get_user_by_email", return_value=USER)
    def test_forgot_password_debug_returns_token(self, mock_get_user, mock_token, mock_settings):
        mock_settings.debug = True

        response = client.post("/api/auth/forgot-password", json={"email": "ruth@example.com"})

        assert response.json()["reset_token"] == "reset-token"

    @patch("scripture_api.routers.auth.settings")
    @patch("scripture_api.routers.auth.create_password_reset_token", return_value="reset-token")
    @patch("scripture_api.routers.auth.get_user_by_email", return_value=USER)
    def test_forgot_password_same_message_either_way(self, mock_get_user, mock_token, mock_settings):
        mock_settings.debug = False

        response = client.post("/api/auth/forgot-password", json={"email": "ruth@example.com"})

        assert response.json() == {
            "message": "If an account with this email exists, a password reset link will be sent.",
            "reset_token": None,
        }

    @patch("scripture_api.routers.auth.update_user_password", return_value=True)
    @patch("scripture_api.routers.auth.decode_password_reset_token", return_value=1)
    def test_reset_password(self, mock_decode, mock_update):
        response = client.post("/api/auth/reset-password", json={"token": "t", "new_password": "newpass1"})

        assert response.status_code == 200
        mock_update.assert_called_once_with(1, "newpass1")

    @patch("scripture_api.routers.auth.decode_password_reset_token", return_value=None)
    def test_reset_password_invalid_token(self, mock_decode):
        response = client.post("/api/auth/reset-password", json={"token": "t", "new_password": "newpass1"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired reset token"


class TestLogout:

    def test_logout_clears_cookies(self):
        response = client.post("/api/auth/logout")

        assert response.status_code == 204
        cookies = response.headers.get_list("set-cookie")
        assert any(cookie.startswith("scripture_auth=") for cookie in cookies)
