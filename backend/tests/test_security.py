from datetime import timedelta

import jwt
import pytest

from orderdesk.core.config import settings
from orderdesk.core.security import (
    create_access_token, decode_access_token, get_password_hash, verify_password,
)


def test_password_hash_round_trip():
    hashed = get_password_hash("Password123!")
    assert hashed != "Password123!"
    assert verify_password("Password123!", hashed)
    assert not verify_password("password123!", hashed)


def test_verify_rejects_non_bcrypt_value():
    assert not verify_password("Password123!", "plain-text")


def test_access_token_carries_claims():
    token = create_access_token({"userId": 7, "role": "CLIENT", "customerId": 3})
    payload = decode_access_token(token)
    assert payload["userId"] == 7
    assert payload["customerId"] == 3
    assert "exp" in payload


def test_expired_token_is_rejected():
    token = create_access_token({"userId": 7}, expires_delta=timedelta(seconds=-10))
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token)


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"userId": 7}, "another-secret-key-that-is-long-enough-0000", algorithm=settings.ALGORITHM)
    with pytest.raises(jwt.InvalidSignatureError):
        decode_access_token(token)
