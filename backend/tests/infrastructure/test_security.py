"""Identity Tokens — verification, role-claim normalization, and rejection paths."""

from datetime import timedelta

import pytest
from jose import jwt

from villa_api.config import get_settings
from villa_api.core.errors import AuthenticationError
from villa_api.infrastructure.security import create_access_token, decode_access_token


@pytest.fixture
def settings():
    return get_settings()


def test_minted_token_round_trips_to_principal(settings):
    token = create_access_token("alice", ["admin"], settings)
    user = decode_access_token(token, settings)
    assert user.username == "alice"
    assert user.has_role("admin")


def test_role_and_roles_claims_are_merged(settings):
    token = jwt.encode(
        {"sub": "dave", "role": ["customer", "admin"], "roles": ["admin", "auditor"]},
        settings.jwt_secret_key, algorithm=settings.jwt_algorithm,
    )
    assert decode_access_token(token, settings).roles == ["customer", "admin", "auditor"]


def test_token_without_roles_has_none(settings):
    token = jwt.encode({"sub": "erin"}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    user = decode_access_token(token, settings)
    assert user.roles == []
    assert not user.has_role("admin")


def test_expired_token_rejected(settings):
    token = create_access_token("alice", [], settings, expires_delta=timedelta(seconds=-1))
    with pytest.raises(AuthenticationError):
        decode_access_token(token, settings)


def test_token_without_subject_rejected(settings):
    token = jwt.encode({"roles": ["admin"]}, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(AuthenticationError):
        decode_access_token(token, settings)


def test_garbage_token_rejected(settings):
    with pytest.raises(AuthenticationError):
        decode_access_token("not-a-jwt", settings)
