# tests/v1/test_comments.py
"""Tests for comment thread endpoints."""

from fastapi import status


def test_add_comment(client, other_auth_token, other_user, test_post) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "  Try bottom watering instead.  "},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED

    data = response.json()
    assert data["post_id"] == test_post.id
    assert data["content"] == "Try bottom watering instead."
    assert data["author"]["id"] == other_user.id


def test_comments_listed_oldest_first(client, auth_token, other_auth_token, test_post) -> None:
    client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "First reply"},
        headers=other_auth_token,
    )
    client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Thanks, trying it now"},
        headers=auth_token,
    )

    listing = client.get(f"/api/v1/posts/{test_post.id}/comments")
    assert listing.status_code == status.HTTP_200_OK
    assert [c["content"] for c in listing.json()] == ["First reply", "Thanks, trying it now"]

    detail = client.get(f"/api/v1/posts/{test_post.id}").json()
    assert [c["content"] for c in detail["comments"]] == [
        "First reply",
        "Thanks, trying it now",
    ]


def test_empty_comment_rejected(client, auth_token, test_post) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "   "},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_overlong_comment_rejected(client, auth_token, test_post) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "x" * 1001},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_comment_on_pending_post_conflicts(client, auth_token, pending_post) -> None:
    response = client.post(
        f"/api/v1/posts/{pending_post.id}/comments",
        json={"content": "Early reply"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_409_CONFLICT


def test_comment_on_missing_post(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/99999/comments",
        json={"content": "Anyone here?"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_comment_requires_auth(client, test_post) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments", json={"content": "Anonymous reply"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_list_comments_of_hidden_post(client, pending_post) -> None:
    response = client.get(f"/api/v1/posts/{pending_post.id}/comments")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_own_comment(client, other_auth_token, test_post) -> None:
    created = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Posted in the wrong thread"},
        headers=other_auth_token,
    ).json()

    response = client.delete(f"/api/v1/comments/{created['id']}", headers=other_auth_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/posts/{test_post.id}/comments").json() == []


def test_delete_comment_of_someone_else(client, auth_token, other_auth_token, test_post) -> None:
    created = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Keep the soil moist"},
        headers=other_auth_token,
    ).json()

    response = client.delete(f"/api/v1/comments/{created['id']}", headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_deletes_any_comment(client, admin_auth_token, other_auth_token, test_post) -> None:
    created = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Buy my fertiliser at ..."},
        headers=other_auth_token,
    ).json()

    response = client.delete(f"/api/v1/comments/{created['id']}", headers=admin_auth_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT


def test_delete_missing_comment(client, auth_token) -> None:
    response = client.delete("/api/v1/comments/99999", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
