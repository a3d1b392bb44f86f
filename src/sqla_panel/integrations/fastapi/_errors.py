"""Exception handlers for FastAPI integration."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from sqla_panel.exceptions import (
    ActionExecutionError,
    ActionValidationError,
    AuthorizationDenied,
    ConfigurationError,
    NotFoundError,
)

__all__ = ["install_error_handlers"]


def install_error_handlers(app: FastAPI) -> None:
    """Install exception handlers for sqla-panel errors on a FastAPI app.

    - ``AuthorizationDenied`` -> 403 Forbidden
    - ``ActionValidationError`` -> 422 with per-field ``errors``
    - ``NotFoundError`` -> 404 Not Found
    - ``ConfigurationError`` -> 500 Internal Server Error
    - ``ActionExecutionError`` -> 500 Internal Server Error

    Example::

        app = FastAPI()
        install_error_handlers(app)

        @app.post("/resources/{resource}/actions/{action}")
        def run(...):
            return pipeline.run(...).raise_for_status().to_dict()
    """

    @app.exception_handler(AuthorizationDenied)
    async def authorization_denied_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: AuthorizationDenied
    ) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.exception_handler(ActionValidationError)
    async def validation_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: ActionValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "errors": exc.errors},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: NotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigurationError)
    async def configuration_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: ConfigurationError
    ) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(ActionExecutionError)
    async def execution_handler(  # pyright: ignore[reportUnusedFunction]
        request: object, exc: ActionExecutionError
    ) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})
