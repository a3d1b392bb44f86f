"""ActionResult: the uniform outcome of one action invocation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sqla_panel._types import ActionStatus
from sqla_panel.exceptions import (
    ActionNotFoundError,
    ActionValidationError,
    AuthorizationDenied,
)

__all__ = ["ActionResult"]


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome reported by the pipeline, whichever action ran.

    ``denied``, ``invalid`` and ``not_found`` are recoverable, user-facing
    outcomes; retrying them without changing the input is pointless.
    Handler failures are not represented here: they raise
    :class:`~sqla_panel.exceptions.ActionExecutionError`.

    Attributes:
        status: ``"succeeded"``, ``"denied"``, ``"invalid"`` or ``"not_found"``.
        resource: Resource slug.
        action: Action slug.
        count: Number of records the action ran on.
        message: Human-readable summary.
        errors: Per-field validation messages (``""`` for non-field errors).
        data: Whatever the handler returned.
        actor: The acting principal, for error conversion.
    """

    status: ActionStatus
    resource: str
    action: str
    count: int = 0
    message: str = ""
    errors: Mapping[str, str] = field(default_factory=dict)
    data: Any = None
    actor: Any = field(default=None, compare=False, repr=False)

    @property
    def ok(self) -> bool:
        return self.status == "succeeded"

    def raise_for_status(self) -> ActionResult:
        """Raise the matching exception for a non-successful outcome.

        Returns ``self`` on success so calls can be chained.

        Raises:
            AuthorizationDenied: status is ``"denied"``.
            ActionValidationError: status is ``"invalid"``.
            ActionNotFoundError: status is ``"not_found"``.
        """
        if self.status == "denied":
            raise AuthorizationDenied(
                actor=self.actor,
                action=self.action,
                resource=self.resource,
                message=self.message or None,
            )
        if self.status == "invalid":
            raise ActionValidationError(self.message or None, errors=self.errors)
        if self.status == "not_found":
            raise ActionNotFoundError(resource=self.resource, action=self.action)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "resource": self.resource,
            "action": self.action,
            "count": self.count,
            "message": self.message,
            "errors": dict(self.errors),
            "data": self.data,
        }
