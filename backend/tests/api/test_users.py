"""
Tests for the current-user access endpoint.
"""

import pytest
from fastapi.testclient import TestClient

from api import app
from modules.auth import Profile

client = TestClient(app)


class TestUserAccess:

    def test_requires_auth(self, overrides):
        assert client.get("/api/users/me").status_code == 401

    def test_member(self, overrides, jwt_secret, auth_headers, profile_repository):
        profile_repository.get_profile_by_id.return_value = Profile(
            id="test-user-123",
            role="member",
            full_name="Ani",
            phone="0812",
            telegram="@ani",
            city="Jakarta",
        )

        response = client.get("/api/users/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "id": "test-user-123",
            "email": "test@example.com",
            "email_verified": True,
            "role": "member",
            "profile_complete": True,
            "admin": False,
        }

    @pytest.mark.parametrize("admin_ids", [["test-user-123"]])
    def test_admin_without_profile(self, overrides, jwt_secret, auth_headers):
        data = client.get("/api/users/me", headers=auth_headers).json()

        assert data["admin"] is True
        assert data["role"] is None
        assert data["profile_complete"] is False

    def test_profile_lookup_failure_is_503(self, overrides, jwt_secret, auth_headers, profile_repository):
        profile_repository.get_profile_by_id.side_effect = ConnectionError("offline")

        response = client.get("/api/users/me", headers=auth_headers)

        assert response.status_code == 503
        assert response.json()["error"] == "PROFILE_FETCH_FAILED"

    def test_null_confirmation_claim_beats_profile(self, overrides, jwt_secret, make_token, profile_repository):
        profile_repository.get_profile_by_id.return_value = Profile(
            id="test-user-123", role="member", email_verified=True
        )
        token = make_token(email_verified=False, null_confirmation=True)

        data = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"}).json()

        assert data["email_verified"] is False

    def test_missing_confirmation_claim_uses_profile(self, overrides, jwt_secret, make_token, profile_repository):
        profile_repository.get_profile_by_id.return_value = Profile(
            id="test-user-123", role="member", email_verified=True
        )
        token = make_token(email_verified=False)

        data = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"}).json()

        assert data["email_verified"] is True
