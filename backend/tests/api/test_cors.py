import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app


@pytest.mark.unit
class TestCors:
    """CORS headers and preflight handling."""

    @pytest.mark.asyncio
    async def test_preflight_returns_204(self, async_client: AsyncClient):
        response = await async_client.options(
            "/api/v1/upload",
            headers={
                "Origin": "https://traceyourcase.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            }
        )

        assert response.status_code == 204
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "https://traceyourcase.com"
        allowed = response.headers["access-control-allow-methods"]
        for method in ("GET", "POST", "OPTIONS"):
            assert method in allowed
        assert "content-type" in response.headers["access-control-allow-headers"].lower()

    @pytest.mark.asyncio
    async def test_preflight_from_unknown_origin_rejected(self, async_client: AsyncClient):
        response = await async_client.options(
            "/api/v1/chat",
            headers={
                "Origin": "https://evil.example.com",
                "Access-Control-Request-Method": "POST",
            }
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    @pytest.mark.asyncio
    async def test_simple_request_echoes_allowed_origin(self, async_client: AsyncClient):
        response = await async_client.get("/health", headers={"Origin": "http://localhost:3000"})

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    @pytest.mark.asyncio
    async def test_error_responses_carry_cors_headers(self, async_client: AsyncClient, db_session):
        response = await async_client.get(
            "/api/v1/status",
            params={"jobId": "missing"},
            headers={"Origin": "https://traceyourcase.com"}
        )

        assert response.status_code == 404
        assert response.headers["access-control-allow-origin"] == "https://traceyourcase.com"

    @pytest.mark.asyncio
    async def test_unhandled_errors_carry_cors_headers(self, override_dependencies, mocker):
        mocker.patch(
            "app.services.job_store.JobStore.get_by_id",
            side_effect=RuntimeError("connection pool exhausted")
        )
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(
                "/api/v1/status",
                params={"jobId": "any"},
                headers={"Origin": "https://traceyourcase.com"}
            )

        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "Internal server error"}
        assert response.headers["access-control-allow-origin"] == "https://traceyourcase.com"

    @pytest.mark.asyncio
    async def test_unhandled_errors_skip_unknown_origins(self, override_dependencies, mocker):
        mocker.patch(
            "app.services.job_store.JobStore.get_by_id",
            side_effect=RuntimeError("connection pool exhausted")
        )
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(
                "/api/v1/status",
                params={"jobId": "any"},
                headers={"Origin": "https://evil.example.com"}
            )

        assert response.status_code == 500
        assert "access-control-allow-origin" not in response.headers
