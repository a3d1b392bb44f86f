"""Exception hierarchy for sqla-panel."""

from __future__ import annotations

from collections.abc import Mapping

__all__ = [
    "ActionExecutionError",
    "ActionNotFoundError",
    "ActionValidationError",
    "AuthorizationDenied",
    "ConfigurationError",
    "FieldNotFoundError",
    "NoPolicyError",
    "NotFoundError",
    "PanelError",
    "RecordNotFoundError",
    "ResourceNotFoundError",
]


class PanelError(Exception):
    """Base exception for all sqla-panel errors."""


class ConfigurationError(PanelError):
    """A resource or action was declared incorrectly.

    Programmer error: raised at registration or first use, never
    swallowed.

    Example::

        Action("Publish")  # no handler -> ConfigurationError
    """


class NoPolicyError(ConfigurationError):
    """A verb-guarded operation ran against a resource with no policy.

    Only raised when ``on_missing_policy="raise"``; the default is to
    deny.

    Attributes:
        resource: The slug of the resource with no policy.
        verb: The verb that was checked.
    """

    def __init__(self, *, resource: str, verb: str) -> None:
        self.resource = resource
        self.verb = verb
        super().__init__(f"No policy configured for resource {resource!r} ({verb!r})")


class AuthorizationDenied(PanelError):  # noqa: N818
    """Actor is not authorized to perform the requested operation.

    Expected and recoverable; never logged as a system fault.

    Attributes:
        actor: The actor that was denied.
        action: The verb or action slug that was attempted.
        resource: The resource slug involved.

    Example::

        try:
            authorize(products, "delete", ctx, product)
        except AuthorizationDenied as exc:
            print(f"{exc.actor} cannot {exc.action} {exc.resource}")
    """

    def __init__(
        self,
        *,
        actor: object,
        action: str,
        resource: str,
        message: str | None = None,
    ) -> None:
        self.actor = actor
        self.action = action
        self.resource = resource
        if message is None:
            message = f"Actor {actor!r} is not authorized to {action} {resource}"
        super().__init__(message)


class ActionValidationError(PanelError):
    """Submitted action input did not satisfy the action's requirements.

    Attributes:
        errors: Mapping of field key to message. The empty-string key is
            used for errors that do not belong to one field (for example
            an empty selection).

    Example::

        raise ActionValidationError(errors={"status": "Status is required"})
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        errors: Mapping[str, str] | None = None,
    ) -> None:
        self.errors: dict[str, str] = dict(errors or {})
        if message is None:
            message = "; ".join(self.errors.values()) or "Invalid action input"
        if not self.errors:
            self.errors[""] = message
        super().__init__(message)


class NotFoundError(PanelError, LookupError):
    """Base class for lookups that found nothing.

    Callers treat these as "feature unavailable here", not as crashes.
    """


class ResourceNotFoundError(NotFoundError):
    """No resource is registered under the given slug."""

    def __init__(self, *, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Resource {slug!r} is not registered")


class ActionNotFoundError(NotFoundError):
    """The resource exposes no action with the given slug in this context."""

    def __init__(self, *, resource: str, action: str) -> None:
        self.resource = resource
        self.action = action
        super().__init__(f"Action {action!r} not found on resource {resource!r}")


class FieldNotFoundError(NotFoundError):
    """The resource resolves no field with the given key."""

    def __init__(self, *, resource: str, field: str) -> None:
        self.resource = resource
        self.field = field
        super().__init__(f"Field {field!r} not found on resource {resource!r}")


class RecordNotFoundError(NotFoundError):
    """A selected record id does not exist in storage."""

    def __init__(self, *, model: str, id: object) -> None:
        self.model = model
        self.id = id
        super().__init__(f"{model} with id={id!r} not found")


class ActionExecutionError(PanelError):
    """An action handler failed; its transaction was rolled back.

    The underlying exception is preserved as ``__cause__`` and as
    :attr:`cause`.

    Attributes:
        action: The action slug.
        resource: The resource slug.
        cause: The exception raised by the handler.
    """

    def __init__(self, *, action: str, resource: str, cause: BaseException) -> None:
        self.action = action
        self.resource = resource
        self.cause = cause
        super().__init__(f"Action {action!r} failed on resource {resource!r}: {cause}")
