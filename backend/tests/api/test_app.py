import pytest

from app.main import app


@pytest.mark.unit
class TestApplication:
    """Application assembly."""

    def test_routes_registered(self):
        paths = {route.path for route in app.routes}

        for path in (
            "/",
            "/health",
            "/api/v1/upload",
            "/api/v1/status",
            "/api/v1/jobs/{job_id}/status",
            "/api/v1/process-job",
            "/api/v1/chat",
            "/api/v1/summarize",
        ):
            assert path in paths

    def test_limiter_attached(self):
        assert app.state.limiter is not None
