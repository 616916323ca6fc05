"""Tests for registration, login, token refresh and logout."""
import jwt

from core.settings import settings
from security.security_generate import token_generate


class TestRegister:
    """Tests for POST /auth/register."""

    async def test_register_returns_public_user(self, client):
        """A new account is created and no password material is returned."""
        response = await client.post(
            "/auth/register",
            json={
                "email": "  New.User@Example.com ",
                "name": "New User",
                "role": "landlord",
                "phone": "+442083661177",
                "password": "abc12345",
            },
        )

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["email"] == "new.user@example.com"
        assert user["role"] == "landlord"
        assert user["phone"] == "+442083661177"
        assert "createdAt" in user
        assert "password" not in str(response.json()).lower()

    async def test_duplicate_email_rejected(self, client, tenant):
        response = await client.post(
            "/auth/register",
            json={
                "email": tenant.email,
                "name": "Someone Else",
                "role": "tenant",
                "password": "abc12345",
            },
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Email already registered"}

    async def test_missing_field_reports_name(self, client):
        """Validation failures use the uniform error body."""
        response = await client.post(
            "/auth/register",
            json={"email": "x@example.com", "role": "tenant", "password": "abc12345"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Missing required field: name"
        assert body["details"]

    async def test_weak_password_rejected(self, client):
        response = await client.post(
            "/auth/register",
            json={
                "email": "weak@example.com",
                "name": "Weak Password",
                "role": "tenant",
                "password": "abcdefgh",
            },
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid value for password")


class TestLogin:
    """Tests for POST /auth/login."""

    async def test_login_issues_tokens(self, client, tenant):
        response = await client.post(
            "/auth/login",
            json={"email": tenant.email, "password": "secret123"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == str(tenant.id)
        assert response.cookies.get("access_token") == data["accessToken"]

        payload = jwt.decode(
            data["accessToken"], settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        assert payload["sub"] == str(tenant.id)
        assert payload["type"] == "access"

    async def test_wrong_password(self, client, tenant):
        response = await client.post(
            "/auth/login",
            json={"email": tenant.email, "password": "not-the-password1"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    async def test_unknown_email(self, client):
        response = await client.post(
            "/auth/login",
            json={"email": "ghost@example.com", "password": "secret123"},
        )

        assert response.status_code == 401


class TestRefresh:
    """Tests for POST /auth/refresh."""

    async def test_refresh_from_body(self, client, tenant):
        refresh_token = token_generate.refresh_token(tenant.id)

        response = await client.post(
            "/auth/refresh", json={"refreshToken": refresh_token}
        )

        assert response.status_code == 200
        payload = jwt.decode(
            response.json()["accessToken"],
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
        )
        assert payload["sub"] == str(tenant.id)

    async def test_refresh_from_cookie(self, client, tenant):
        await client.post(
            "/auth/login", json={"email": tenant.email, "password": "secret123"}
        )

        response = await client.post("/auth/refresh")

        assert response.status_code == 200
        assert "accessToken" in response.json()

    async def test_access_token_cannot_refresh(self, client, tenant):
        response = await client.post(
            "/auth/refresh",
            json={"refreshToken": token_generate.access_token(tenant.id)},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token type"}

    async def test_missing_refresh_token(self, client):
        response = await client.post("/auth/refresh")

        assert response.status_code == 401


class TestAuthenticationGuard:
    """Tests for bearer token handling on protected routes."""

    async def test_no_token(self, client):
        response = await client.get("/profile")

        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated"}

    async def test_garbage_token(self, client):
        response = await client.get(
            "/profile", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    async def test_refresh_token_is_not_an_access_token(self, client, tenant):
        token = token_generate.refresh_token(tenant.id)

        response = await client.get(
            "/profile", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401

    async def test_expired_token(self, client, tenant, monkeypatch):
        monkeypatch.setattr(settings, "ACCESS_EXPIRE_MINUTES", -1)
        token = token_generate.access_token(tenant.id)

        response = await client.get(
            "/profile", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Token expired"}


class TestLogout:
    """Tests for POST /auth/logout."""

    async def test_logout_revokes_access_token(self, client, tenant):
        login = await client.post(
            "/auth/login", json={"email": tenant.email, "password": "secret123"}
        )
        access_token = login.json()["accessToken"]
        headers = {"Authorization": f"Bearer {access_token}"}

        response = await client.post("/auth/logout", headers=headers)
        assert response.status_code == 200

        client.cookies.clear()
        again = await client.get("/profile", headers=headers)
        assert again.status_code == 401
        assert again.json() == {"error": "Token revoked"}

    async def test_logout_revokes_refresh_cookie(self, client, tenant):
        login = await client.post(
            "/auth/login", json={"email": tenant.email, "password": "secret123"}
        )
        refresh_token = login.json()["refreshToken"]

        await client.post("/auth/logout")
        client.cookies.clear()

        response = await client.post(
            "/auth/refresh", json={"refreshToken": refresh_token}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Refresh token revoked"}
