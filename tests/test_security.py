"""Tests for Supabase JWT verification."""
import base64
import time
from unittest.mock import patch

import pytest
from fastapi import HTTPException
from jose import jwt

from app.core.security import get_current_owner_id, verify_jwt

SECRET = "super-secret-jwt-signing-key-for-tests"
JWKS = {
    "keys": [{
        "kty": "oct",
        "kid": "test-key",
        "alg": "HS256",
        "k": base64.urlsafe_b64encode(SECRET.encode()).rstrip(b"=").decode(),
    }]
}


def make_token(kid="test-key", **claims) -> str:
    payload = {
        "sub": "owner-1",
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
        **claims,
    }
    return jwt.encode(payload, SECRET, algorithm="HS256", headers={"kid": kid})


@pytest.fixture
def jwks():
    with patch("app.core.security.get_jwks", return_value=JWKS) as mocked:
        yield mocked


def test_valid_token(jwks):
    payload = verify_jwt(make_token())

    assert payload["sub"] == "owner-1"


def test_wrong_audience_rejected(jwks):
    with pytest.raises(HTTPException) as exc:
        verify_jwt(make_token(aud="anon"))
    assert exc.value.status_code == 401


def test_expired_token_rejected(jwks):
    with pytest.raises(HTTPException) as exc:
        verify_jwt(make_token(exp=int(time.time()) - 10))
    assert exc.value.status_code == 401


def test_unknown_kid_refreshes_jwks_once(jwks):
    with pytest.raises(HTTPException) as exc:
        verify_jwt(make_token(kid="rotated"))

    assert exc.value.status_code == 401
    assert jwks.call_count == 2
    jwks.cache_clear.assert_called_once()


def test_garbage_token_rejected(jwks):
    with pytest.raises(HTTPException) as exc:
        verify_jwt("not-a-jwt")
    assert exc.value.status_code == 401


def test_owner_id_requires_sub():
    assert get_current_owner_id({"sub": "owner-1"}) == "owner-1"
    with pytest.raises(HTTPException):
        get_current_owner_id({})
