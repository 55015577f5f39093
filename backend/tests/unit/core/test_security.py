"""
Unit tests for the bcrypt password hasher and the JWT token signer.
"""

from datetime import timedelta

import jwt
import pytest

from sweet_shop.core.exceptions import TokenVerificationError
from sweet_shop.core.security import BcryptPasswordHasher, JWTTokenSigner

SECRET = "unit-test-secret-key-with-32-plus-bytes"


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def signer() -> JWTTokenSigner:
    return JWTTokenSigner(SECRET)


class TestBcryptPasswordHasher:
    def test_hash_is_salted_and_verifiable(self, hasher):
        first = hasher.hash("password123")
        second = hasher.hash("password123")

        assert first != "password123"
        assert first != second
        assert hasher.verify("password123", first) is True

    def test_wrong_password_fails(self, hasher):
        assert hasher.verify("wrong", hasher.hash("password123")) is False

    def test_malformed_hash_fails_instead_of_raising(self, hasher):
        assert hasher.verify("password123", "not-a-bcrypt-hash") is False


class TestJWTTokenSigner:
    def test_token_round_trip_carries_claims(self, signer):
        token = signer.sign({"userId": 1, "email": "a@b.co"}, timedelta(hours=24))

        payload = signer.verify(token)

        assert payload["userId"] == 1
        assert payload["email"] == "a@b.co"
        assert payload["exp"] - payload["iat"] == 24 * 3600

    def test_expired_token(self, signer):
        token = signer.sign({"userId": 1, "email": "a@b.co"}, timedelta(seconds=-10))

        with pytest.raises(TokenVerificationError):
            signer.verify(token)

    def test_token_signed_with_other_secret(self, signer):
        forged = JWTTokenSigner("another-secret-key-with-32-plus-bytes!").sign(
            {"userId": 1, "email": "a@b.co"}, timedelta(hours=1)
        )

        with pytest.raises(TokenVerificationError):
            signer.verify(forged)

    def test_token_without_expiry_is_rejected(self, signer):
        token = jwt.encode({"userId": 1, "email": "a@b.co"}, SECRET, algorithm="HS256")

        with pytest.raises(TokenVerificationError):
            signer.verify(token)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c", None])
    def test_malformed_token(self, signer, token):
        with pytest.raises(TokenVerificationError):
            signer.verify(token)

    def test_secret_is_required(self):
        with pytest.raises(ValueError):
            JWTTokenSigner("")
