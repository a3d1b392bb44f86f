"""PanelContext: the per-request context handed to resolvers and policies."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from sqla_panel._types import ActorLike, View

__all__ = ["PanelContext"]


@dataclass(frozen=True, slots=True)
class PanelContext:
    """Carries the acting principal and request phase into the core.

    Request-scoped: built by the transport layer for one request and
    never shared across requests.

    Attributes:
        actor: The current principal, or ``None`` for anonymous requests.
        permissions: Permission names granted to the actor. ``"*"``
            grants everything.
        view: The request phase resolvers are producing items for.
        request: The underlying transport request, opaque to the core.

    Example::

        ctx = PanelContext(
            actor=current_user,
            permissions=frozenset({"products.view_any"}),
            view="detail",
        )
    """

    actor: ActorLike | None = None
    permissions: frozenset[str] = frozenset()
    view: View = "index"
    request: Any = None

    @property
    def is_authenticated(self) -> bool:
        return self.actor is not None

    def has_permission(self, permission: str) -> bool:
        """Return whether *permission* was granted to the actor."""
        if self.actor is None:
            return False
        return "*" in self.permissions or permission in self.permissions

    def with_view(self, view: View) -> PanelContext:
        """Return a copy of this context for another request phase."""
        return dataclasses.replace(self, view=view)
