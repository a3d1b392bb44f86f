"""Policy: per-resource authorization predicates, one per verb."""

from __future__ import annotations

from typing import Any

from sqla_panel._context import PanelContext
from sqla_panel._types import VERBS
from sqla_panel.policy._predicate import Predicate, has_permission

__all__ = ["AllowAllPolicy", "DenyAllPolicy", "PermissionPolicy", "Policy", "PredicatePolicy"]


class Policy:
    """Base policy: every verb denies.

    Subclass and override the verbs a resource allows. Predicates must
    be pure and must not raise; they may be called several times per
    request (once to show a button, once to run the operation). An
    absent context denies every verb.

    Example::

        class ProductPolicy(Policy):
            def view_any(self, context):
                return context is not None and context.is_authenticated

            def delete(self, context, record=None):
                return context is not None and context.has_permission("products.delete")
    """

    def view_any(self, context: PanelContext | None) -> bool:
        return False

    def view(self, context: PanelContext | None, record: Any = None) -> bool:
        return False

    def create(self, context: PanelContext | None) -> bool:
        return False

    def update(self, context: PanelContext | None, record: Any = None) -> bool:
        return False

    def delete(self, context: PanelContext | None, record: Any = None) -> bool:
        return False

    def restore(self, context: PanelContext | None, record: Any = None) -> bool:
        return False

    def force_delete(self, context: PanelContext | None, record: Any = None) -> bool:
        return False


class AllowAllPolicy(Policy):
    """Allows every verb for any present context."""

    def view_any(self, context: PanelContext | None) -> bool:
        return context is not None

    def view(self, context: PanelContext | None, record: Any = None) -> bool:
        return context is not None

    def create(self, context: PanelContext | None) -> bool:
        return context is not None

    def update(self, context: PanelContext | None, record: Any = None) -> bool:
        return context is not None

    def delete(self, context: PanelContext | None, record: Any = None) -> bool:
        return context is not None

    def restore(self, context: PanelContext | None, record: Any = None) -> bool:
        return context is not None

    def force_delete(self, context: PanelContext | None, record: Any = None) -> bool:
        return context is not None


class DenyAllPolicy(Policy):
    """Denies every verb. Identical to :class:`Policy`, named for intent."""


class PredicatePolicy(Policy):
    """Policy assembled from :class:`Predicate` objects, one per verb.

    Verbs without a predicate deny.

    Example::

        policy = PredicatePolicy(
            view_any=is_authenticated,
            update=has_permission("posts.update") | is_owner,
        )
    """

    def __init__(self, **predicates: Predicate) -> None:
        unknown = set(predicates) - set(VERBS)
        if unknown:
            raise ValueError(f"Unknown policy verbs: {sorted(unknown)!r}")
        self._predicates = dict(predicates)

    def _check(self, verb: str, context: PanelContext | None, record: Any) -> bool:
        pred = self._predicates.get(verb)
        if pred is None:
            return False
        return pred(context, record)

    def view_any(self, context: PanelContext | None) -> bool:
        return self._check("view_any", context, None)

    def view(self, context: PanelContext | None, record: Any = None) -> bool:
        return self._check("view", context, record)

    def create(self, context: PanelContext | None) -> bool:
        return self._check("create", context, None)

    def update(self, context: PanelContext | None, record: Any = None) -> bool:
        return self._check("update", context, record)

    def delete(self, context: PanelContext | None, record: Any = None) -> bool:
        return self._check("delete", context, record)

    def restore(self, context: PanelContext | None, record: Any = None) -> bool:
        return self._check("restore", context, record)

    def force_delete(self, context: PanelContext | None, record: Any = None) -> bool:
        return self._check("force_delete", context, record)

    def __repr__(self) -> str:
        verbs = ", ".join(f"{v}={p.name}" for v, p in self._predicates.items())
        return f"PredicatePolicy({verbs})"


class PermissionPolicy(PredicatePolicy):
    """Maps each verb to the permission ``"<prefix>.<verb>"``.

    Example::

        policy = PermissionPolicy("users")
        policy.delete(ctx, user)  # ctx.has_permission("users.delete")
    """

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        super().__init__(**{verb: has_permission(f"{prefix}.{verb}") for verb in VERBS})

    def __repr__(self) -> str:
        return f"PermissionPolicy({self.prefix!r})"
