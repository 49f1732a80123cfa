"""
Tests for the request pipeline, rate limiting and error rendering.
"""

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from api.middleware import (
    Continue,
    RequestContext,
    RequestPipeline,
    Terminate,
    extract_bearer_token,
)
from shared.exceptions import NotFoundError


class RecordingStage:
    """Stage that records calls and optionally stops the pipeline."""

    def __init__(self, name: str, log: list, stop: bool = False):
        self.name = name
        self.log = log
        self.stop = stop

    async def __call__(self, ctx: RequestContext):
        self.log.append(f"run {self.name}")
        if self.stop:
            return Terminate(NotFoundError(f"stopped at {self.name}"))
        return Continue(ctx)

    async def on_complete(self, ctx: RequestContext, succeeded: bool) -> None:
        self.log.append(f"complete {self.name} {succeeded}")


@pytest.fixture
def ctx(container):
    return RequestContext(container=container, client_ip="10.0.0.1", headers={})


class TestRequestPipeline:
    @pytest.mark.asyncio
    async def test_runs_stages_in_order(self, ctx):
        log: list[str] = []
        pipeline = RequestPipeline(RecordingStage("a", log), RecordingStage("b", log))

        outcome = await pipeline.run(ctx)

        assert isinstance(outcome, Continue)
        assert log == ["run a", "run b"]

    @pytest.mark.asyncio
    async def test_stops_at_terminate(self, ctx):
        """Nothing after a Terminate runs."""
        log: list[str] = []
        pipeline = RequestPipeline(
            RecordingStage("a", log),
            RecordingStage("b", log, stop=True),
            RecordingStage("c", log),
        )

        outcome = await pipeline.run(ctx)

        assert isinstance(outcome, Terminate)
        assert outcome.error.message == "stopped at b"
        assert log == ["run a", "run b"]

    @pytest.mark.asyncio
    async def test_complete_runs_in_reverse(self, ctx):
        log: list[str] = []
        pipeline = RequestPipeline(RecordingStage("a", log), RecordingStage("b", log))
        await pipeline.run(ctx)
        await pipeline.complete(ctx, succeeded=True)
        assert log[2:] == ["complete b True", "complete a True"]

    def test_then_returns_new_pipeline(self):
        log: list[str] = []
        base = RequestPipeline(RecordingStage("a", log))
        extended = base.then(RecordingStage("b", log))
        assert len(base.stages) == 1
        assert len(extended.stages) == 2

    def test_require_user_without_gate(self, ctx):
        with pytest.raises(RuntimeError):
            ctx.require_user()


class TestExtractBearerToken:
    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Bearer abc", "abc"),
            ("bearer abc", "abc"),
            ("Bearer ", None),
            ("Basic abc", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extract(self, header, expected):
        assert extract_bearer_token(header) == expected


class TestPipelineAsDependency:
    def test_handler_failure_reports_unsuccessful(self, app):
        """on_complete sees succeeded=False when the handler raises."""
        log: list[str] = []
        pipeline = RequestPipeline(RecordingStage("a", log))

        @app.get("/api/test/fails")
        async def fails(ctx: RequestContext = Depends(pipeline)):
            raise NotFoundError("Nothing here")

        with TestClient(app) as client:
            response = client.get("/api/test/fails")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Nothing here"}
        assert log == ["run a", "complete a False"]


class TestApiRateLimit:
    def test_headers_on_protected_routes(self, client, auth_headers):
        response = client.get("/api/transactions", headers=auth_headers)
        assert response.status_code == 200
        assert response.headers["RateLimit-Limit"] == "100"
        assert response.headers["RateLimit-Remaining"] == "99"
        assert response.headers["RateLimit-Reset"] == "900"

    def test_headers_on_handler_errors(self, client, auth_headers):
        """Counted requests carry the counters even when the handler fails."""
        response = client.get("/api/transactions/" + "a" * 24, headers=auth_headers)
        assert response.status_code == 404
        assert response.headers["RateLimit-Limit"] == "100"
        assert response.headers["RateLimit-Remaining"] == "99"

    def test_headers_on_pipeline_rejections(self, client):
        """A request stopped by the auth gate was already counted."""
        response = client.get("/api/transactions")
        assert response.status_code == 401
        assert response.headers["RateLimit-Limit"] == "100"
        assert response.headers["RateLimit-Remaining"] == "99"

    def test_limit_exceeded(self, client, container, auth_headers):
        """The general budget counts every request, successful or not."""
        container.settings.api_rate_limit_max = 3
        for _ in range(3):
            assert client.get("/api/transactions", headers=auth_headers).status_code == 200

        response = client.get("/api/transactions", headers=auth_headers)

        assert response.status_code == 429
        assert response.json() == {
            "success": False,
            "message": "Too many requests from this IP, please try again later.",
        }
        assert response.headers["Retry-After"] == "900"

    def test_unauthenticated_requests_count(self, client, container, auth_headers):
        container.settings.api_rate_limit_max = 2
        client.get("/api/transactions")
        client.get("/api/transactions")
        assert client.get("/api/transactions", headers=auth_headers).status_code == 429

    def test_window_reset(self, client, container, clock, auth_headers):
        container.settings.api_rate_limit_max = 1
        client.get("/api/transactions", headers=auth_headers)
        clock.advance(minutes=15)
        assert client.get("/api/transactions", headers=auth_headers).status_code == 200


class TestErrorHandling:
    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route not found"}

    def test_unexpected_error(self, app):
        """Unhandled errors become a generic 500 without a stack trace."""

        @app.get("/api/test/boom")
        async def boom():
            raise RuntimeError("database on fire")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/test/boom")

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Internal Server Error"}

    def test_unexpected_error_debug_stack(self, app, container):
        container.settings.debug = True

        @app.get("/api/test/boom")
        async def boom():
            raise RuntimeError("database on fire")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/test/boom")

        assert response.status_code == 500
        assert "database on fire" in response.json()["stack"]

    def test_cors_allows_configured_origin(self, client):
        response = client.options(
            "/api/health",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_cors_rejects_other_origin(self, client):
        response = client.get("/api/health", headers={"Origin": "https://evil.example.com"})
        assert "access-control-allow-origin" not in response.headers
