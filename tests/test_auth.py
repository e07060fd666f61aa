"""Tests for bearer-token verification and role checks."""

import os
import uuid

from jose import jwt
from sqlmodel import select

from storefront.models.user import User


def bearer(claims: dict, secret: str | None = None) -> dict:
    token = jwt.encode(claims, secret or os.environ["JWT_SECRET"], algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


class TestCurrentUser:
    """GET /api/users/me"""

    def test_first_request_provisions_profile(self, client, session):
        user_id = uuid.uuid4()
        res = client.get("/api/users/me", headers=bearer({"sub": str(user_id), "email": "jane.doe@example.com"}))
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["id"] == str(user_id)
        assert data["name"] == "jane.doe"
        assert data["role"] == "user"
        assert session.exec(select(User).where(User.id == user_id)).first() is not None

    def test_missing_header(self, client):
        res = client.get("/api/users/me")
        assert res.status_code == 401
        assert res.json() == {"success": False, "message": "No token provided"}

    def test_expired_token(self, client):
        claims = {"sub": str(uuid.uuid4()), "email": "a@example.com", "exp": 1}
        res = client.get("/api/users/me", headers=bearer(claims))
        assert res.status_code == 401
        assert res.json()["message"] == "Invalid or expired token"

    def test_wrong_secret(self, client):
        claims = {"sub": str(uuid.uuid4()), "email": "a@example.com"}
        assert client.get("/api/users/me", headers=bearer(claims, "other-secret")).status_code == 401

    def test_missing_claims(self, client):
        res = client.get("/api/users/me", headers=bearer({"sub": str(uuid.uuid4())}))
        assert res.status_code == 401
        assert res.json()["message"] == "Token missing sub/email"

    def test_non_uuid_subject(self, client):
        res = client.get("/api/users/me", headers=bearer({"sub": "abc", "email": "a@example.com"}))
        assert res.status_code == 401
        assert res.json()["message"] == "Invalid sub in token"


class TestAdminRole:
    def test_admin_passes(self, client, admin_headers):
        res = client.get("/api/users/me", headers=admin_headers)
        assert res.json()["data"]["role"] == "admin"

    def test_customer_forbidden_on_catalog_delete(self, client, user_headers):
        res = client.delete("/api/product/anything", headers=user_headers)
        assert res.status_code == 403
        assert res.json()["message"] == "Forbidden: insufficient role"


class TestMisc:
    def test_health(self, client):
        assert client.get("/api/health").json() == {"success": True, "ok": True}

    def test_unknown_route_uses_envelope(self, client):
        res = client.get("/api/nothing-here")
        assert res.status_code == 404
        assert res.json()["success"] is False
