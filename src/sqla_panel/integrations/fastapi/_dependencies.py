"""FastAPI dependencies for resolving resources and request context."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from sqla_panel._context import PanelContext
from sqla_panel.registry._registry import ResourceRegistry, get_default_registry
from sqla_panel.resource._resource import Resource

__all__ = ["ResourceDep", "get_context", "get_session"]


# ---------------------------------------------------------------------------
# Sentinel dependency functions for DI-based configuration
# ---------------------------------------------------------------------------


def get_context(request: Request) -> PanelContext:
    """Sentinel dependency; override via ``app.dependency_overrides[get_context]``.

    Raises ``NotImplementedError`` if not overridden, so the application
    must decide how actors and permissions are read from a request.

    Example::

        def current_context(request: Request) -> PanelContext:
            user = load_user(request)
            return PanelContext(actor=user, permissions=user.permissions, request=request)

        app.dependency_overrides[get_context] = current_context
    """
    raise NotImplementedError(
        "Override get_context via app.dependency_overrides[get_context]. "
        "See sqla-panel docs for configuration guide."
    )


def get_session(request: Request) -> Session:
    """Sentinel dependency; override via ``app.dependency_overrides[get_session]``."""
    raise NotImplementedError(
        "Override get_session via app.dependency_overrides[get_session]. "
        "See sqla-panel docs for configuration guide."
    )


# ---------------------------------------------------------------------------
# Dependency builder
# ---------------------------------------------------------------------------


def _make_dependency(
    slug_param: str,
    registry: ResourceRegistry | None,
) -> Callable[..., Any]:
    def _resolve(request: Request) -> Resource:
        target_registry = registry if registry is not None else get_default_registry()
        slug = request.path_params[slug_param]
        found = target_registry.get(slug)
        if found is None:
            raise HTTPException(status_code=404, detail=f"Resource {slug!r} not found")
        return found

    return _resolve


def ResourceDep(  # noqa: N802
    slug_param: str = "resource",
    *,
    registry: ResourceRegistry | None = None,
) -> Any:
    """FastAPI dependency resolving a resource from a path parameter.

    Unknown slugs become a 404 response instead of reaching the handler.

    Args:
        slug_param: Name of the path parameter holding the slug.
        registry: Registry to look in. Defaults to the global registry.

    Returns:
        A FastAPI ``Depends`` instance.

    Example::

        @app.get("/resources/{resource}/actions")
        def list_actions(
            resource: Resource = ResourceDep(),
            ctx: PanelContext = Depends(get_context),
        ) -> list[dict]:
            return [a.to_dict() for a in resource.get_actions(ctx)]
    """
    return Depends(_make_dependency(slug_param, registry))
