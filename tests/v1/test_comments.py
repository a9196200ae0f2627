# tests/v1/test_comments.py
"""Tests for comment endpoints."""

from fastapi import status


def test_add_comment(client, alice, bob, alice_post) -> None:
    response = client.post(
        "/api/comments",
        json={"postId": alice_post["id"], "body": "Nice post"},
        headers=bob["headers"],
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json() == {"userName": "bob", "body": "Nice post"}


def test_comments_keep_insertion_order(client, alice, bob, alice_post) -> None:
    for user, body in ((bob, "first"), (alice, "second"), (bob, "third")):
        client.post(
            "/api/comments",
            json={"postId": alice_post["id"], "body": body},
            headers=user["headers"],
        )

    listed = client.get(f"/api/comments/post/{alice_post['id']}")
    assert listed.status_code == status.HTTP_200_OK
    assert [(c["userName"], c["body"]) for c in listed.json()] == [
        ("bob", "first"),
        ("alice", "second"),
        ("bob", "third"),
    ]

    feed = client.get("/api/posts").json()
    assert [c["body"] for c in feed[0]["comments"]] == ["first", "second", "third"]
    assert feed[0]["comments"][0]["userId"] == bob["id"]


def test_whitespace_comment_rejected(client, bob, alice_post) -> None:
    response = client.post(
        "/api/comments",
        json={"postId": alice_post["id"], "body": "   "},
        headers=bob["headers"],
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_missing_body_rejected(client, bob, alice_post) -> None:
    response = client.post(
        "/api/comments", json={"postId": alice_post["id"]}, headers=bob["headers"]
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_comment_on_unknown_post(client, bob) -> None:
    response = client.post(
        "/api/comments", json={"postId": 999, "body": ""}, headers=bob["headers"]
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_comment_requires_auth(client, alice_post) -> None:
    response = client.post("/api/comments", json={"postId": alice_post["id"], "body": "hi"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_list_comments_unknown_post(client) -> None:
    response = client.get("/api/comments/post/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_comments_for_non_numeric_post_id(client) -> None:
    response = client.get("/api/comments/post/abc")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Post not found"}
