"""
Unit test for JWT authentication
"""

import pytest
from datetime import timedelta
import uuid
from jose import jwt

from weddingflow.core.auth import create_access_token, verify_token, decode_access_token
from weddingflow.core.config import get_settings

settings = get_settings()


def test_create_access_token():
    """Test JWT token creation"""
    user_id = uuid.uuid4()
    company_id = uuid.uuid4()

    token = create_access_token(
        user_id=user_id,
        company_id=company_id,
        role="planner",
        expires_delta=timedelta(hours=24)
    )

    assert isinstance(token, str)
    assert verify_token(token) == user_id


def test_decode_valid_token():
    """Test decoding a valid token"""
    user_id = uuid.uuid4()
    company_id = uuid.uuid4()

    token = create_access_token(
        user_id=user_id,
        company_id=company_id,
        role="admin",
        expires_delta=timedelta(hours=1)
    )

    payload = decode_access_token(token)

    assert payload is not None
    assert payload["sub"] == str(user_id)
    assert payload["company_id"] == str(company_id)
    assert payload["role"] == "admin"
    assert "exp" in payload


def test_verify_invalid_token():
    """Test token verification with invalid token"""
    assert verify_token("invalid.token.string.here") is None


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"sub": str(uuid.uuid4())}, "some-other-secret", algorithm=settings.JWT_ALGORITHM)
    assert decode_access_token(token) is None


def test_expired_token():
    """Test that expired tokens are rejected"""
    token = create_access_token(
        user_id=uuid.uuid4(),
        company_id=uuid.uuid4(),
        role="viewer",
        expires_delta=timedelta(hours=-1)
    )

    assert decode_access_token(token) is None
    assert verify_token(token) is None


@pytest.mark.parametrize("role", ["admin", "planner", "viewer"])
def test_role_claim_round_trips(role):
    token = create_access_token(user_id=uuid.uuid4(), company_id=uuid.uuid4(), role=role)
    assert decode_access_token(token)["role"] == role
