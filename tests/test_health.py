# tests/test_health.py
from typing import Any


def test_root_responds(client: Any) -> None:
    """Verify that the root endpoint describes the API."""
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["name"] == "Sprout Community API"


def test_health_check(client: Any) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
