"""MockActor and factory functions for testing panels."""

from __future__ import annotations

from dataclasses import dataclass

from sqla_panel._context import PanelContext
from sqla_panel._types import View

__all__ = ["MockActor", "make_admin", "make_anonymous", "make_context", "make_user"]


@dataclass(frozen=True, slots=True)
class MockActor:
    """Test actor that satisfies the ``ActorLike`` protocol.

    Example::

        actor = MockActor(id=1, role="admin")
        assert isinstance(actor, ActorLike)
    """

    id: int | str
    role: str = "viewer"


def make_admin(id: int | str = 1) -> MockActor:
    """Create an admin ``MockActor``."""
    return MockActor(id=id, role="admin")


def make_user(id: int | str = 1, role: str = "viewer") -> MockActor:
    """Create a regular user ``MockActor``."""
    return MockActor(id=id, role=role)


def make_anonymous() -> MockActor:
    """Create an anonymous ``MockActor`` with ``id=0``."""
    return MockActor(id=0, role="anonymous")


def make_context(
    actor: MockActor | None = None,
    *permissions: str,
    view: View = "index",
) -> PanelContext:
    """Build a ``PanelContext`` for *actor* holding *permissions*.

    Example::

        ctx = make_context(make_admin(), "*")
        ctx.has_permission("products.delete")  # True
    """
    return PanelContext(actor=actor, permissions=frozenset(permissions), view=view)
