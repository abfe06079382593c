"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path

import pytest

try:
    from fastapi.testclient import TestClient
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    pytest.skip("fastapi not installed", allow_module_level=True)

from routedoc.errors import MissingApplicationError
from routedoc.models import Application
from routedoc.service import create_app


class _StubExtractor:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def extract(self, path: str) -> Application:
        self.calls.append(path)
        if path.endswith("empty"):
            raise MissingApplicationError()
        if path.endswith("missing"):
            raise FileNotFoundError(f"Source path not found: {path}")
        return Application(name="svc", version="1.0")


@pytest.fixture
def extractor() -> _StubExtractor:
    return _StubExtractor()


@pytest.fixture
def client(extractor: _StubExtractor) -> TestClient:
    return TestClient(create_app(lambda: extractor))  # type: ignore[arg-type, return-value]


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_extract_endpoint(client: TestClient, extractor: _StubExtractor, tmp_path: Path) -> None:
    response = client.post("/extract", json={"path": str(tmp_path)})
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "svc"
    assert data["modules"] == []
    assert extractor.calls == [str(tmp_path)]


def test_extract_errors_map_to_status_codes(client: TestClient) -> None:
    response = client.post("/extract", json={"path": "/srv/empty"})
    assert response.status_code == 422
    assert response.json()["error"] == "MissingApplicationError"

    response = client.post("/extract", json={"path": "/srv/missing"})
    assert response.status_code == 404
