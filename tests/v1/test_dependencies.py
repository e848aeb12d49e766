# tests/v1/test_dependencies.py
"""Tests for API dependencies module."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import status
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from sprout_community.api.v1.dependencies import (
    get_current_actor,
    get_current_user,
    get_optional_actor,
)
from sprout_community.core.actor import Actor
from sprout_community.core.errors import AuthenticationError
from sprout_community.core.security import create_access_token, decode_access_token
from sprout_community.core.settings import settings


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestAccessTokens:
    """Test bearer token encoding and decoding."""

    def test_round_trip_user_id(self):
        token = create_access_token(42)
        assert decode_access_token(token) == 42

    def test_expired_token_rejected(self):
        token = jwt.encode(
            {"sub": "42", "exp": datetime.now(UTC) - timedelta(minutes=1)},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_foreign_signature_rejected(self):
        token = jwt.encode({"sub": "42"}, "another-secret", algorithm=settings.jwt_algorithm)
        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_missing_subject_rejected(self):
        token = jwt.encode({"foo": "bar"}, settings.secret_key, algorithm=settings.jwt_algorithm)
        with pytest.raises(AuthenticationError):
            decode_access_token(token)

    def test_non_numeric_subject_rejected(self):
        token = jwt.encode(
            {"sub": "not-a-number"}, settings.secret_key, algorithm=settings.jwt_algorithm
        )
        with pytest.raises(AuthenticationError):
            decode_access_token(token)


class TestGetCurrentActor:
    """Test the get_current_actor dependency."""

    def test_valid_token(self, db_session, moderator_user):
        actor = get_current_actor(
            _credentials(create_access_token(moderator_user.id)), db_session
        )
        assert actor == Actor(
            id=moderator_user.id,
            username=moderator_user.username,
            is_admin=False,
            is_moderator=True,
        )
        assert actor.can_moderate

    def test_missing_credentials(self, db_session):
        with pytest.raises(AuthenticationError) as exc_info:
            get_current_actor(None, db_session)
        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc_info.value.detail == "Not authenticated"

    def test_unknown_user(self, db_session):
        with pytest.raises(AuthenticationError) as exc_info:
            get_current_actor(_credentials(create_access_token(99999)), db_session)
        assert exc_info.value.detail == "User not found"

    def test_garbage_token(self, db_session):
        with pytest.raises(AuthenticationError):
            get_current_actor(_credentials("not.a.jwt"), db_session)


class TestGetOptionalActor:
    """Test the get_optional_actor dependency."""

    def test_anonymous(self, db_session):
        assert get_optional_actor(None, db_session) is None

    def test_authenticated(self, db_session, test_user):
        actor = get_optional_actor(_credentials(create_access_token(test_user.id)), db_session)
        assert actor is not None
        assert actor.id == test_user.id

    def test_invalid_token_still_rejected(self, db_session):
        with pytest.raises(AuthenticationError):
            get_optional_actor(_credentials("not.a.jwt"), db_session)


def test_get_current_user_returns_row(db_session, admin_user):
    user = get_current_user(Actor.from_user(admin_user), db_session)
    assert user is admin_user


def test_invalid_token_over_http(client):
    response = client.get(
        "/api/v1/users/me", headers={"Authorization": "Bearer not.a.jwt"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Could not validate credentials"
