"""Integration tests for registration, login and token handling."""

from datetime import timedelta

from marketplace.auth.tokens import create_access_token


class TestRegisterAPI:
    def test_register_returns_token_and_user(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "Alice@Example.com", "password": "secret1", "role": "Buyer"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["message"] == "User registered successfully"
        assert body["user"]["email"] == "alice@example.com"
        assert body["user"]["role"] == "buyer"
        assert "passwordHash" not in body["user"]

    def test_duplicate_email(self, client, buyer):
        response = client.post(
            "/api/auth/register",
            json={"name": "Again", "email": "alice@example.com", "password": "secret1", "role": "buyer"},
        )
        assert response.status_code == 400
        assert "already exists" in response.json()["message"]

    def test_invalid_role(self, client):
        response = client.post(
            "/api/auth/register",
            json={"name": "Mallory", "email": "m@example.com", "password": "secret1", "role": "admin"},
        )
        assert response.status_code == 400

    def test_missing_fields(self, client):
        response = client.post("/api/auth/register", json={"email": "x@example.com"})
        assert response.status_code == 400
        assert "message" in response.json()


class TestLoginAPI:
    def test_login(self, client, buyer):
        response = client.post("/api/auth/login", json={"email": "ALICE@example.com", "password": "password123"})
        assert response.status_code == 200
        assert response.json()["user"]["id"] == buyer["id"]

    def test_wrong_password(self, client, buyer):
        response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "nope"})
        assert response.status_code == 401


class TestTokens:
    def test_me(self, client, buyer):
        response = client.get("/api/auth/me", headers=buyer["headers"])
        assert response.status_code == 200
        assert response.json()["name"] == "Alice Buyer"

    def test_missing_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["message"] == "Authentication token required."

    def test_garbage_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 403
        assert response.json()["message"] == "Invalid token."

    def test_expired_token(self, client, buyer):
        token = create_access_token(buyer["id"], "buyer", expires_delta=timedelta(minutes=-5))
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == "Token expired."


class TestProfileAPI:
    def test_get_profile(self, client, seller):
        response = client.get("/api/users/profile", headers=seller["headers"])
        assert response.status_code == 200
        assert response.json()["role"] == "seller"

    def test_update_profile(self, client, buyer):
        response = client.put("/api/users/profile", json={"name": "Alice B."}, headers=buyer["headers"])
        assert response.status_code == 200
        assert response.json()["message"] == "Profile updated successfully"
        assert response.json()["user"]["name"] == "Alice B."

    def test_new_password_works_for_login(self, client, buyer):
        client.put("/api/users/profile", json={"password": "brand-new"}, headers=buyer["headers"])
        response = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "brand-new"})
        assert response.status_code == 200

    def test_short_password(self, client, buyer):
        response = client.put("/api/users/profile", json={"password": "123"}, headers=buyer["headers"])
        assert response.status_code == 400

    def test_empty_update(self, client, buyer):
        response = client.put("/api/users/profile", json={}, headers=buyer["headers"])
        assert response.status_code == 400
        assert "No update information provided." in response.json()["message"]

    def test_no_changes(self, client, buyer):
        response = client.put("/api/users/profile", json={"name": "Alice Buyer"}, headers=buyer["headers"])
        assert response.status_code == 200
        assert response.json()["message"] == "No changes detected."
