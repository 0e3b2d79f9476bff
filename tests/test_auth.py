"""Tests for identity token generation."""

from datetime import timedelta

import jwt
import pytest

from isb_client.auth import (
    JWT_ALGORITHM,
    Role,
    UserClaims,
    generate_jwt,
    new_admin_user_claims,
    new_user_user_claims,
)

from tests.conftest import JWT_SECRET


class TestClaims:
    def test_admin_claims(self):
        claims = new_admin_user_claims("admin@example.com")
        assert claims == UserClaims(
            display_name="Admin",
            user_name="admin@example.com",
            email="admin@example.com",
            roles=["Admin"],
        )

    def test_user_claims(self):
        claims = new_user_user_claims("user@example.com")
        assert claims.display_name == "GitHub"
        assert claims.roles == [Role.USER.value]

    def test_to_dict_uses_wire_names(self):
        assert new_user_user_claims("u@x.io").to_dict() == {
            "displayName": "GitHub",
            "userName": "u@x.io",
            "email": "u@x.io",
            "roles": ["User"],
        }


class TestGenerateJWT:
    def test_round_trip(self):
        token = generate_jwt(new_admin_user_claims("admin@example.com"), JWT_SECRET, timedelta(hours=1))
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])

        assert payload["user"]["email"] == "admin@example.com"
        assert payload["user"]["roles"] == ["Admin"]
        assert payload["exp"] - payload["iat"] == 3600

    def test_header_is_hs256(self):
        token = generate_jwt(new_user_user_claims("u@x.io"), JWT_SECRET, timedelta(minutes=15))
        assert jwt.get_unverified_header(token)["alg"] == "HS256"

    def test_wrong_secret_fails_verification(self):
        token = generate_jwt(new_user_user_claims("u@x.io"), JWT_SECRET, timedelta(minutes=15))
        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(token, "another-secret-that-is-also-long-enough", algorithms=["HS256"])

    def test_expired_token_rejected(self):
        token = generate_jwt(new_user_user_claims("u@x.io"), JWT_SECRET, timedelta(seconds=-10))
        with pytest.raises(jwt.ExpiredSignatureError):
            jwt.decode(token, JWT_SECRET, algorithms=["HS256"])
