import pytest

from modules.auth.models import SessionUser, Profile, REQUIRED_PROFILE_FIELDS


class TestSessionUser:
    def test_verification_unknown_by_default(self):
        user = SessionUser(id="user-123")
        assert user.email is None
        assert user.email_verified is None

    def test_immutable(self):
        user = SessionUser(id="user-123")
        with pytest.raises(Exception):  # Pydantic ValidationError
            user.id = "different-id"


class TestProfile:
    def test_defaults(self):
        profile = Profile(id="user-123")
        assert profile.role is None
        assert profile.email_verified is False
        assert profile.required_fields_complete is None

    def test_extra_columns_ignored(self):
        profile = Profile(id="user-123", referral_code="ABC")
        assert not hasattr(profile, "referral_code")

    def test_required_fields(self):
        assert REQUIRED_PROFILE_FIELDS == ("full_name", "phone", "telegram", "city")
