"""Point checks: can() and authorize() for verb-guarded resource operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqla_panel._audit import log_missing_policy
from sqla_panel._context import PanelContext
from sqla_panel._types import VERBS, Verb
from sqla_panel.config._config import get_global_config
from sqla_panel.exceptions import AuthorizationDenied, NoPolicyError

if TYPE_CHECKING:
    from sqla_panel.resource._resource import Resource

__all__ = ["authorize", "can"]

# Verbs whose predicate takes no record.
_COLLECTION_VERBS = frozenset({"view_any", "create"})


def can(
    resource: Resource,
    verb: Verb,
    context: PanelContext | None,
    record: Any = None,
) -> bool:
    """Check whether *context* may perform *verb* on *resource*.

    Delegates to the resource's policy. A resource without a policy is a
    configuration error: by default the check denies (and logs a
    warning); with ``on_missing_policy="raise"`` it raises
    :class:`~sqla_panel.exceptions.NoPolicyError`.

    Args:
        resource: The resource being guarded.
        verb: One of ``view_any``, ``view``, ``create``, ``update``,
            ``delete``, ``restore``, ``force_delete``.
        context: The request context; ``None`` denies.
        record: The candidate record for record-scoped verbs.

    Returns:
        ``True`` if allowed, ``False`` otherwise.

    Example::

        if can(products, "update", ctx, product):
            show_edit_button()
    """
    if verb not in VERBS:
        raise ValueError(f"Unknown policy verb {verb!r}; expected one of {VERBS!r}")

    policy = resource.policy
    if policy is None:
        if get_global_config().on_missing_policy == "raise":
            raise NoPolicyError(resource=resource.slug, verb=verb)
        log_missing_policy(resource=resource.slug, verb=verb)
        return False

    if context is None:
        return False

    check = getattr(policy, verb)
    if verb in _COLLECTION_VERBS:
        return bool(check(context))
    return bool(check(context, record))


def authorize(
    resource: Resource,
    verb: Verb,
    context: PanelContext | None,
    record: Any = None,
    *,
    message: str | None = None,
) -> None:
    """Assert that *context* may perform *verb* on *resource*.

    Raises:
        AuthorizationDenied: If the check denies.

    Example::

        authorize(products, "delete", ctx, product)  # raises if denied
    """
    if not can(resource, verb, context, record):
        raise AuthorizationDenied(
            actor=context.actor if context is not None else None,
            action=verb,
            resource=resource.slug,
            message=message,
        )
