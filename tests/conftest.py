# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from agora.api.dependencies import get_repositories
from agora.core.settings import Settings
from agora.db.session import create_tables, drop_tables
from agora.main import app as fastapi_app
from agora.repositories import MemoryStore, Repositories, memory_repositories, sql_repositories

TEST_DB_URL = "sqlite://"
_TEST_SETTINGS_INSTANCE = Settings()


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    try:
        yield engine
    finally:
        drop_tables(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(params=["memory", "sql"])
def repositories(request: pytest.FixtureRequest) -> Repositories:
    """Repositories for each storage backend; tests using this run once per backend."""
    if request.param == "memory":
        return memory_repositories(MemoryStore())
    return sql_repositories(request.getfixturevalue("db_session"))


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def client(app: FastAPI, repositories: Repositories) -> Iterator[TestClient]:
    def _get_repositories_override() -> Generator[Repositories, None, None]:
        yield repositories

    app.dependency_overrides[get_repositories] = _get_repositories_override
    try:
        with TestClient(app, base_url="http://test") as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_repositories, None)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide a Settings instance aligned with runtime configuration."""
    return _TEST_SETTINGS_INSTANCE


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_user(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Register and log in a user through the API, returning id, name and headers."""

    def _make_user(username: str, password: str = "secret-pw") -> dict[str, Any]:
        response = client.post(
            "/api/auth/register", json={"username": username, "password": password}
        )
        assert response.status_code == 201, response.text
        response = client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.text
        data = response.json()
        return {
            "id": data["userId"],
            "username": data["username"],
            "token": data["token"],
            "headers": bearer(data["token"]),
        }

    return _make_user


@pytest.fixture()
def alice(make_user: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return make_user("alice", "pw1")


@pytest.fixture()
def bob(make_user: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    return make_user("bob", "pw-bob")


@pytest.fixture()
def alice_post(client: TestClient, alice: dict[str, Any]) -> dict[str, Any]:
    """A post created by alice."""
    response = client.post(
        "/api/posts",
        json={"title": "T", "description": "D"},
        headers=alice["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()
