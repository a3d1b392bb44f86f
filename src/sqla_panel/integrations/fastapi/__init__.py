"""FastAPI integration for sqla-panel."""

from __future__ import annotations

try:
    import fastapi as _fastapi_check  # noqa: F401  # pyright: ignore[reportUnusedImport]

    del _fastapi_check
except ImportError as exc:
    raise ImportError(
        "FastAPI integration requires fastapi. Install it with: pip install sqla-panel[fastapi]"
    ) from exc

from sqla_panel.integrations.fastapi._dependencies import (
    ResourceDep,
    get_context,
    get_session,
)
from sqla_panel.integrations.fastapi._errors import install_error_handlers

__all__ = [
    "ResourceDep",
    "get_context",
    "get_session",
    "install_error_handlers",
]
