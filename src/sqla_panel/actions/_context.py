"""ActionContext: the envelope passed into every action handler."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from sqlalchemy.orm import Session

from sqla_panel._context import PanelContext
from sqla_panel._types import ActorLike

if TYPE_CHECKING:
    from sqla_panel.registry._registry import ResourceRegistry

__all__ = ["ActionContext", "RecordT"]

RecordT = TypeVar("RecordT")


@dataclass(frozen=True, slots=True)
class ActionContext(Generic[RecordT]):
    """Request-scoped state for one action invocation.

    Built by the pipeline for one invocation and never shared.

    Attributes:
        records: The selected records, in the order the caller supplied.
            Never ``None``; empty when nothing was selected.
        fields: Submitted values for the action's extra inputs, keyed by
            field key. Read-only; never ``None``.
        actor: The acting principal.
        resource: Slug of the resource the action runs on.
        session: The SQLAlchemy session whose transaction the handler
            runs in.
        request: The underlying transport request, opaque to the core.
        registry: Registry for cross-resource lookups inside handlers.
        context: The request context the action was resolved for.

    Example::

        def publish(records, ctx: ActionContext[Post]) -> None:
            for post in records:
                post.status = ctx.value("status", "published")
    """

    records: Sequence[RecordT] = ()
    fields: Mapping[str, Any] = field(default_factory=dict)
    actor: ActorLike | None = None
    resource: str = ""
    session: Session | None = None
    request: Any = None
    registry: ResourceRegistry | None = None
    context: PanelContext | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records or ()))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields or {})))

    @property
    def count(self) -> int:
        return len(self.records)

    def value(self, key: str, default: Any = None) -> Any:
        """Return the submitted value for *key*, or *default*."""
        return self.fields.get(key, default)
