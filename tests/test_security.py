"""Tests for password hashing and the session token service."""

import pytest
from jose import jwt

from design_agent.errors import InvalidToken
from design_agent.utils.security import CredentialService, Principal, Role, hash_password, verify_password


@pytest.fixture
def credentials() -> CredentialService:
    return CredentialService("unit-secret", expire_minutes=60)


class TestPasswords:
    def test_hash_round_trip(self):
        hashed = hash_password("s3cret!")
        assert hashed != "s3cret!"
        assert verify_password("s3cret!", hashed)
        assert not verify_password("wrong", hashed)


class TestCredentialService:
    def test_issue_and_verify(self, credentials):
        token = credentials.issue("user-1", Role.USER)
        assert credentials.verify(token) == Principal(user_id="user-1", role=Role.USER)

    def test_role_is_embedded(self, credentials):
        token = credentials.issue("admin-1", Role.SUPER_ADMIN)
        claims = jwt.get_unverified_claims(token)
        assert claims["sub"] == "admin-1"
        assert claims["role"] == "super_admin"

    def test_wrong_secret_rejected(self, credentials):
        token = CredentialService("other-secret", 60).issue("user-1", Role.USER)
        with pytest.raises(InvalidToken):
            credentials.verify(token)

    def test_expired_token_rejected(self, credentials):
        token = credentials.issue("user-1", Role.USER, expires_minutes=-1)
        with pytest.raises(InvalidToken):
            credentials.verify(token)

    def test_malformed_token_rejected(self, credentials):
        with pytest.raises(InvalidToken):
            credentials.verify("not-a-jwt")

    def test_unknown_role_rejected(self, credentials):
        token = jwt.encode({"sub": "user-1", "role": "owner"}, "unit-secret", algorithm="HS256")
        with pytest.raises(InvalidToken):
            credentials.verify(token)

    def test_missing_subject_rejected(self, credentials):
        token = jwt.encode({"role": "user"}, "unit-secret", algorithm="HS256")
        with pytest.raises(InvalidToken):
            credentials.verify(token)
