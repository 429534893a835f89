"""
Health check, API root, and cross-cutting HTTP behaviour (CORS, 405, 500).
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import get_session
from app.main import app
from resource_tracker_shared.schemas.common import ErrorResponse


CORS_EXPECTED = {
    "access-control-allow-origin": "*",
    "access-control-allow-headers": "Content-Type",
    "access-control-allow-methods": "GET, POST, PUT, DELETE, OPTIONS",
}


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Health endpoint should return status ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_api_root(client: AsyncClient):
    """API v1 root should return version and endpoint list."""
    response = await client.get("/api/v1/")
    assert response.status_code == 200
    data = response.json()
    assert data["api"] == "v1"
    assert "/projects" in data["endpoints"]


@pytest.mark.asyncio
async def test_cors_headers_on_every_response(client: AsyncClient):
    for path in ("/health", "/api/v1/projects/", "/api/v1/nope"):
        response = await client.get(path)
        for header, value in CORS_EXPECTED.items():
            assert response.headers[header] == value, path


@pytest.mark.asyncio
@pytest.mark.parametrize("collection", ["projects", "engineers", "assignments"])
async def test_options_preflight(client: AsyncClient, collection):
    response = await client.options(f"/api/v1/{collection}/")
    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,collection",
    [("PATCH", "projects"), ("PATCH", "engineers"), ("PUT", "assignments")],
)
async def test_unsupported_verb_is_405(client: AsyncClient, method, collection):
    response = await client.request(method, f"/api/v1/{collection}/", json={})
    assert response.status_code == 405
    error = response.json()["error"]
    assert error["code"] == "METHOD_NOT_ALLOWED"
    assert method in error["message"]


@pytest.mark.asyncio
async def test_unexpected_error_is_generic_500():
    """Internal failures are logged, not leaked."""

    async def _broken_session():
        raise RuntimeError("connection refused: db.internal:5432")
        yield  # pragma: no cover

    app.dependency_overrides[get_session] = _broken_session
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/api/v1/projects/")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    body = response.json()
    assert body["error"]["message"] == "An internal server error occurred"
    assert "db.internal" not in response.text
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_error_body_is_shared_envelope(client: AsyncClient):
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    body = response.json()
    assert set(body) == {"error"}
    envelope = ErrorResponse.model_validate(body)
    assert envelope.error.code == "NOT_FOUND"
    assert envelope.error.status == 404
    assert envelope.error.errors == []
