from typing import Any

from fastapi import status


def test_health_ok(client: Any) -> None:
    """The health endpoint reports ok."""
    r = client.get("/health")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"status": "ok"}


def test_root_describes_api(client: Any) -> None:
    r = client.get("/")
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["docs"] == "/docs"


def test_unknown_route_uses_error_envelope(client: Any) -> None:
    r = client.get("/api/does-not-exist")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert "error" in r.json()
