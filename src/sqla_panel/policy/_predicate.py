"""Composable predicates for resource policies."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sqla_panel._audit import log_predicate_error
from sqla_panel._context import PanelContext

__all__ = [
    "Predicate",
    "always_allow",
    "always_deny",
    "has_permission",
    "is_authenticated",
    "predicate",
]


class Predicate:
    """A composable authorization predicate.

    Wraps a callable ``(context, record) -> bool``. Supports ``&`` (AND),
    ``|`` (OR) and ``~`` (NOT) composition. An absent context is
    denied before the wrapped callable runs, and a callable that raises
    is logged and treated as ``False``.

    Example::

        is_owner = Predicate(lambda ctx, post: post.author_id == ctx.actor.id)
        can_edit = has_permission("posts.update") | is_owner
        can_edit(ctx, post)  # bool
    """

    def __init__(self, fn: Callable[[PanelContext, Any], bool], *, name: str = "") -> None:
        self._fn = fn
        self._name = name or getattr(fn, "__name__", "<anonymous>")

    def __call__(self, context: PanelContext | None, record: Any = None) -> bool:
        if context is None:
            return False
        try:
            return bool(self._fn(context, record))
        except Exception as exc:
            log_predicate_error(name=self._name, exc=exc)
            return False

    def __and__(self, other: Predicate) -> Predicate:
        def _and(context: PanelContext, record: Any) -> bool:
            return self(context, record) and other(context, record)

        return Predicate(_and, name=f"({self._name} & {other._name})")

    def __or__(self, other: Predicate) -> Predicate:
        def _or(context: PanelContext, record: Any) -> bool:
            return self(context, record) or other(context, record)

        return Predicate(_or, name=f"({self._name} | {other._name})")

    def __invert__(self) -> Predicate:
        def _not(context: PanelContext, record: Any) -> bool:
            return not self(context, record)

        return Predicate(_not, name=f"~{self._name}")

    @property
    def name(self) -> str:
        """The human-readable name of this predicate."""
        return self._name

    def __repr__(self) -> str:
        return f"Predicate({self._name!r})"


def predicate(fn: Callable[[PanelContext, Any], bool]) -> Predicate:
    """Decorator/factory that creates a Predicate from a callable.

    Example::

        @predicate
        def is_admin(ctx, record):
            return ctx.actor.role == "admin"
    """
    return Predicate(fn, name=getattr(fn, "__name__", "<lambda>"))


def has_permission(permission: str) -> Predicate:
    """Predicate granting access when the context holds *permission*."""
    return Predicate(
        lambda ctx, record: ctx.has_permission(permission),
        name=f"has_permission({permission!r})",
    )


# Built-in predicates


def _always_allow(context: PanelContext, record: Any) -> bool:
    return True


def _always_deny(context: PanelContext, record: Any) -> bool:
    return False


def _is_authenticated(context: PanelContext, record: Any) -> bool:
    return context.is_authenticated


always_allow: Predicate = Predicate(_always_allow, name="always_allow")
always_deny: Predicate = Predicate(_always_deny, name="always_deny")
is_authenticated: Predicate = Predicate(_is_authenticated, name="is_authenticated")
