"""Tests for FastAPI error handlers."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sqla_panel.exceptions import (
    ActionExecutionError,
    ActionValidationError,
    AuthorizationDenied,
    ConfigurationError,
    FieldNotFoundError,
    NoPolicyError,
    ResourceNotFoundError,
)
from sqla_panel.integrations.fastapi._errors import install_error_handlers


@pytest.fixture()
def app() -> FastAPI:
    """Create a minimal FastAPI app with error handlers installed."""
    app = FastAPI()
    install_error_handlers(app)

    @app.get("/denied")
    async def trigger_denied() -> None:
        raise AuthorizationDenied(actor="user-1", action="delete", resource="products")

    @app.get("/invalid")
    async def trigger_invalid() -> None:
        raise ActionValidationError(errors={"reason": "Reason is required"})

    @app.get("/missing-resource")
    async def trigger_missing_resource() -> None:
        raise ResourceNotFoundError(slug="orders")

    @app.get("/missing-field")
    async def trigger_missing_field() -> None:
        raise FieldNotFoundError(resource="products", field="cost")

    @app.get("/no-policy")
    async def trigger_no_policy() -> None:
        raise NoPolicyError(resource="products", verb="delete")

    @app.get("/misconfigured")
    async def trigger_misconfigured() -> None:
        raise ConfigurationError("Action 'Publish' has no handler")

    @app.get("/failed")
    async def trigger_failed() -> None:
        raise ActionExecutionError(
            action="export-as-csv", resource="products", cause=OSError("disk full")
        )

    return app


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


class TestAuthorizationDeniedHandler:
    def test_returns_403(self, client: TestClient) -> None:
        response = client.get("/denied")
        assert response.status_code == 403

    def test_response_is_json(self, client: TestClient) -> None:
        response = client.get("/denied")
        assert response.headers["content-type"] == "application/json"

    def test_response_has_detail(self, client: TestClient) -> None:
        body = client.get("/denied").json()
        assert "not authorized" in body["detail"].lower()


class TestValidationHandler:
    def test_returns_422_with_errors(self, client: TestClient) -> None:
        response = client.get("/invalid")
        assert response.status_code == 422
        assert response.json() == {
            "detail": "Reason is required",
            "errors": {"reason": "Reason is required"},
        }


class TestNotFoundHandler:
    @pytest.mark.parametrize("path", ["/missing-resource", "/missing-field"])
    def test_returns_404(self, client: TestClient, path: str) -> None:
        response = client.get(path)
        assert response.status_code == 404
        assert "not" in response.json()["detail"]


class TestServerErrorHandlers:
    @pytest.mark.parametrize("path", ["/no-policy", "/misconfigured", "/failed"])
    def test_returns_500(self, client: TestClient, path: str) -> None:
        response = client.get(path)
        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"

    def test_no_policy_detail(self, client: TestClient) -> None:
        assert "no policy" in client.get("/no-policy").json()["detail"].lower()

    def test_execution_detail_includes_cause(self, client: TestClient) -> None:
        assert "disk full" in client.get("/failed").json()["detail"]
