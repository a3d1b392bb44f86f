"""Shared protocols and type aliases for sqla-panel."""

from __future__ import annotations

from typing import Literal, Protocol, runtime_checkable

__all__ = [
    "ActionStatus",
    "ActionVisibility",
    "ActorLike",
    "OnMissingPolicy",
    "SortDirection",
    "Verb",
    "View",
    "VERBS",
]

# Valid values for PanelConfig.on_missing_policy.
OnMissingPolicy = Literal["deny", "raise"]

# Policy verbs, one predicate each.
Verb = Literal["view_any", "view", "create", "update", "delete", "restore", "force_delete"]

VERBS: tuple[str, ...] = (
    "view_any",
    "view",
    "create",
    "update",
    "delete",
    "restore",
    "force_delete",
)

# Request phase a resolver is asked to produce items for.
View = Literal["index", "detail", "create", "update"]

# Where an action is offered.
ActionVisibility = Literal["all", "index", "detail", "inline"]

# Outcome of one action invocation.
ActionStatus = Literal["succeeded", "denied", "invalid", "not_found"]

SortDirection = Literal["asc", "desc"]


@runtime_checkable
class ActorLike(Protocol):
    """Structural type for the acting principal.

    Any object with an ``id`` attribute satisfies this protocol.
    The core never looks further than that; policies and handlers may.

    Example::

        @dataclass
        class User:
            id: int
            role: str

        assert isinstance(User(id=1, role="admin"), ActorLike)
    """

    @property
    def id(self) -> int | str: ...
