# tests/v1/test_jwt_validation.py
"""Tests for bearer token validation edge cases."""

from fastapi import status
from jose import jwt

from agora.core.security import create_access_token

NEW_POST = {"title": "Hello", "description": "World"}


class TestBearerValidation:
    """Mutating routes reject every kind of bad credential with 401."""

    def test_missing_header(self, client):
        response = client.post("/api/posts", json=NEW_POST)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Missing Authorization header"}

    def test_without_bearer_prefix(self, client, alice):
        response = client.post(
            "/api/posts", json=NEW_POST, headers={"Authorization": alice["token"]}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_empty_token(self, client):
        response = client.post("/api/posts", json=NEW_POST, headers={"Authorization": "Bearer "})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_malformed_token(self, client):
        response = client.post(
            "/api/posts", json=NEW_POST, headers={"Authorization": "Bearer not.a.valid.jwt"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_wrong_secret(self, client, alice):
        token = create_access_token(alice["id"], secret_key="wrong_secret_key")
        response = client.post(
            "/api/posts", json=NEW_POST, headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_token(self, client, alice):
        token = create_access_token(alice["id"], expires_minutes=-1)
        response = client.post(
            "/api/posts", json=NEW_POST, headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_missing_subject(self, client, test_settings):
        token = jwt.encode(
            {"exp": 4102444800},
            test_settings.secret_key,
            algorithm=test_settings.jwt_algorithm,
        )
        response = client.post(
            "/api/posts", json=NEW_POST, headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_non_numeric_subject(self, client, test_settings):
        token = jwt.encode(
            {"sub": "abc", "exp": 4102444800},
            test_settings.secret_key,
            algorithm=test_settings.jwt_algorithm,
        )
        response = client.post(
            "/api/posts", json=NEW_POST, headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_valid_token_is_accepted(self, client, alice):
        response = client.post("/api/posts", json=NEW_POST, headers=alice["headers"])
        assert response.status_code == status.HTTP_201_CREATED
