# ================================
# AUTH TESTS (test_auth.py)
# ================================

from datetime import timedelta

from societyhub.config import settings
from societyhub.core.security import create_access_token


REGISTER_PAYLOAD = {
    "name": "Meera Nair",
    "email": "Meera@GreenValley.org",
    "password": "secret-pass",
    "role": "resident",
    "unit": "C-303",
}


class TestRegisterAndLogin:
    """Session lifecycle through the public endpoints."""

    def test_register_sets_cookie_and_returns_token(self, client):
        response = client.post("/api/users/register", json=REGISTER_PAYLOAD)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User registered successfully"
        assert data["token"]
        assert data["user"]["email"] == "meera@greenvalley.org"
        assert data["user"]["role"] == "resident"
        assert "password_hash" not in data["user"]
        assert settings.AUTH_COOKIE_NAME in response.cookies

        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "samesite=strict" in set_cookie

    def test_cookie_authenticates_me(self, client):
        client.post("/api/users/register", json=REGISTER_PAYLOAD)

        response = client.get("/api/users/me")

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Meera Nair"

    def test_register_duplicate_email(self, client):
        client.post("/api/users/register", json=REGISTER_PAYLOAD)
        client.cookies.clear()

        response = client.post("/api/users/register", json=REGISTER_PAYLOAD)

        assert response.status_code == 400
        assert response.json()["detail"] == "User already exists"

    def test_register_short_password_rejected(self, client):
        payload = {**REGISTER_PAYLOAD, "password": "short"}
        response = client.post("/api/users/register", json=payload)
        assert response.status_code == 422

    def test_register_unknown_role_rejected(self, client):
        payload = {**REGISTER_PAYLOAD, "role": "landlord"}
        response = client.post("/api/users/register", json=payload)
        assert response.status_code == 422

    def test_login_success(self, client, resident):
        response = client.post(
            "/api/users/login",
            json={"email": "RIYA@greenvalley.org", "password": "password123"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["user"]["id"] == str(resident.id)
        assert settings.AUTH_COOKIE_NAME in response.cookies

    def test_login_wrong_password(self, client, resident):
        response = client.post(
            "/api/users/login",
            json={"email": "riya@greenvalley.org", "password": "not-the-password"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid email or password"

    def test_login_unknown_email_looks_the_same(self, client):
        response = client.post(
            "/api/users/login",
            json={"email": "nobody@greenvalley.org", "password": "password123"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid email or password"

    def test_login_inactive_account(self, client, db, resident):
        resident.is_active = False
        db.commit()

        response = client.post(
            "/api/users/login",
            json={"email": "riya@greenvalley.org", "password": "password123"}
        )

        assert response.status_code == 401

    def test_logout_clears_cookie(self, client):
        client.post("/api/users/register", json=REGISTER_PAYLOAD)

        response = client.post("/api/users/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"
        assert client.get("/api/users/me").status_code == 401


class TestAuthGate:
    """Token checks performed by get_current_user."""

    def test_missing_token(self, client):
        response = client.get("/api/users/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Authentication required"

    def test_garbage_token(self, client):
        response = client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_expired_token(self, client, resident):
        token = create_access_token(
            data={"sub": str(resident.id), "role": resident.role},
            expires_delta=timedelta(minutes=-5)
        )

        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"

    def test_token_for_deleted_user(self, client, db, resident, resident_headers):
        db.delete(resident)
        db.commit()

        response = client.get("/api/users/me", headers=resident_headers)

        assert response.status_code == 401
        assert response.json()["detail"] == "User not active or not found"

    def test_token_for_inactive_user(self, client, db, resident, resident_headers):
        resident.is_active = False
        db.commit()

        response = client.get("/api/users/me", headers=resident_headers)

        assert response.status_code == 401
        assert response.json()["detail"] == "User not active or not found"

    def test_role_is_read_from_database_not_token(self, client, db, resident, headers_for):
        headers = headers_for(resident)
        resident.role = "admin"
        db.commit()

        response = client.get("/api/users", headers=headers)

        assert response.status_code == 200

    def test_error_body_carries_request_id(self, client):
        response = client.get("/api/users/me")

        assert response.json()["request_id"] == response.headers["X-Request-ID"]
