"""Audit logging for authorization and action execution decisions."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from sqla_panel.config._config import get_global_config

__all__ = [
    "log_action_failure",
    "log_action_outcome",
    "log_missing_policy",
    "log_predicate_error",
    "log_registry_overwrite",
]

logger = logging.getLogger("sqla_panel")


def log_action_outcome(
    *,
    resource: str,
    action: str,
    actor: object,
    status: str,
    count: int,
    errors: Mapping[str, str] | None = None,
) -> None:
    """Log the outcome of one action invocation.

    Logging levels:
    - INFO: Summary (resource, action, status, record count)
    - DEBUG: Validation errors, when any

    Denials and validation failures are user-facing outcomes and are
    logged at INFO, never as errors. Nothing is logged unless
    ``log_action_decisions`` is enabled.

    Example::

        log_action_outcome(
            resource="products",
            action="delete-selected",
            actor=current_user,
            status="succeeded",
            count=3,
        )
    """
    if not get_global_config().log_action_decisions:
        return

    logger.info(
        "Action %s.%s %s on %d record(s) for actor %r",
        resource,
        action,
        status,
        count,
        actor,
    )

    if errors and logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Action %s.%s validation errors: %s",
            resource,
            action,
            dict(errors),
        )


def log_action_failure(
    *,
    resource: str,
    action: str,
    actor: object,
    count: int,
    exc: BaseException,
) -> None:
    """Log a handler failure. Always emitted, independent of config."""
    logger.error(
        "Action %s.%s failed on %d record(s) for actor %r; transaction rolled back: %s",
        resource,
        action,
        count,
        actor,
        exc,
    )


def log_missing_policy(*, resource: str, verb: str) -> None:
    """Log that deny-by-default was applied because no policy exists."""
    logger.warning(
        "No policy configured for resource %r (%s); deny-by-default applied",
        resource,
        verb,
    )


def log_predicate_error(*, name: str, exc: BaseException) -> None:
    """Log a predicate that raised instead of returning a boolean."""
    logging.getLogger("sqla_panel.policy").warning(
        "Predicate %s raised %s: %s; treated as deny",
        name,
        type(exc).__name__,
        exc,
    )


def log_registry_overwrite(*, slug: str, previous: object, current: object) -> None:
    """Log a registry slug being re-registered (last write wins)."""
    logging.getLogger("sqla_panel.registry").debug(
        "Resource slug %r re-registered: %r replaced by %r",
        slug,
        previous,
        current,
    )
