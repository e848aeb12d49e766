# tests/v1/test_users.py
"""Tests for user profile endpoints."""

from fastapi import status


def test_get_me(client, auth_token, test_user) -> None:
    response = client.get("/api/v1/users/me", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "id": test_user.id,
        "username": test_user.username,
        "avatar": None,
        "is_admin": False,
        "is_moderator": False,
    }


def test_get_me_reports_capabilities(client, moderator_auth_token) -> None:
    data = client.get("/api/v1/users/me", headers=moderator_auth_token).json()
    assert data["is_moderator"] is True
    assert data["is_admin"] is False


def test_get_me_requires_auth(client) -> None:
    response = client.get("/api/v1/users/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
