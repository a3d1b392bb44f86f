"""Action descriptor: a named, authorizable bulk operation."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic

from sqla_panel._audit import log_predicate_error
from sqla_panel._slug import slugify
from sqla_panel._types import ActionVisibility, View
from sqla_panel.actions._context import ActionContext, RecordT
from sqla_panel.exceptions import ConfigurationError
from sqla_panel.fields._field import FieldLike

__all__ = ["Action", "ActionHandler", "action"]

_VISIBILITIES: set[str] = {"all", "index", "detail", "inline"}

# handler(records, context) -> optional result payload; raises on failure.
ActionHandler = Callable[[Sequence[Any], ActionContext[Any]], Any]


@dataclass(frozen=True, slots=True)
class Action(Generic[RecordT]):
    """Descriptor for one bulk action.

    Attributes:
        name: Human label.
        handler: ``(records, context) -> result`` doing the work. Raising
            aborts the invocation and rolls its transaction back.
        slug: URL-safe identifier; derived from ``name`` (lowercased,
            spaces replaced by hyphens) when omitted.
        icon: Icon name.
        destructive: Marks the action as destructive for the UI.
        confirm_text: Confirmation prompt shown by the client before
            running. Carried for display only; not a server-side gate.
        confirm_button_text: Label of the confirm button.
        cancel_button_text: Label of the cancel button.
        visibility: ``"all"``, ``"index"`` (index only), ``"detail"``
            (detail only) or ``"inline"``.
        fields: Extra inputs the action collects before running.
        authorize_fn: ``(context) -> bool``; absent means always allowed.
        standalone: May run with an empty selection.
        sole: Runs on at most one record.

    Example::

        publish = Action(
            "Publish Posts",
            publish_posts,
            icon="check-circle",
            confirm_text="Publish the selected posts?",
        )
        publish.slug  # "publish-posts"
    """

    name: str
    handler: ActionHandler | None = field(default=None, compare=False)
    slug: str = ""
    icon: str = ""
    destructive: bool = False
    confirm_text: str = ""
    confirm_button_text: str = "Confirm"
    cancel_button_text: str = "Cancel"
    visibility: ActionVisibility = "all"
    fields: Sequence[FieldLike] = ()
    authorize_fn: Callable[[ActionContext[RecordT]], bool] | None = field(
        default=None, compare=False
    )
    standalone: bool = False
    sole: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("Action name must not be empty")
        if self.handler is None:
            raise ConfigurationError(f"Action {self.name!r} has no handler")
        if self.visibility not in _VISIBILITIES:
            raise ConfigurationError(
                f"Action visibility must be one of {sorted(_VISIBILITIES)!r}, "
                f"got {self.visibility!r}"
            )
        if not self.slug:
            object.__setattr__(self, "slug", slugify(self.name))
        object.__setattr__(self, "fields", tuple(self.fields))

    def authorize(self, context: ActionContext[RecordT]) -> bool:
        """Return whether the action may run for *context*.

        Without an ``authorize_fn`` the action is always allowed. A
        predicate that raises is logged and counts as a denial.
        """
        if self.authorize_fn is None:
            return True
        try:
            return bool(self.authorize_fn(context))
        except Exception as exc:
            log_predicate_error(name=f"action:{self.slug}", exc=exc)
            return False

    def execute(self, context: ActionContext[RecordT]) -> Any:
        """Invoke the handler. Call through the pipeline to get a transaction."""
        if self.handler is None:
            raise ConfigurationError(f"Action {self.name!r} has no handler")
        return self.handler(context.records, context)

    def is_visible_on(self, view: View | str) -> bool:
        """Return whether the action is offered on the given view."""
        if self.visibility == "all":
            return True
        if self.visibility == "inline":
            return view in ("index", "detail")
        return self.visibility == view

    def to_dict(self) -> dict[str, Any]:
        """Serialized metadata for the transport layer."""
        return {
            "name": self.name,
            "slug": self.slug,
            "icon": self.icon,
            "destructive": self.destructive,
            "confirm_text": self.confirm_text,
            "confirm_button_text": self.confirm_button_text,
            "cancel_button_text": self.cancel_button_text,
            "only_on_index": self.visibility == "index",
            "only_on_detail": self.visibility == "detail",
            "show_inline": self.visibility == "inline",
            "standalone": self.standalone,
            "sole": self.sole,
            "fields": [f.serialize() for f in self.fields],
        }


def action(
    name: str,
    **options: Any,
) -> Callable[[ActionHandler], Action[Any]]:
    """Decorator that builds an :class:`Action` from a handler function.

    Keyword options are passed to :class:`Action`.

    Example::

        @action("Archive Posts", destructive=True, confirm_text="Archive them?")
        def archive_posts(records, ctx):
            for post in records:
                post.status = "archived"

        archive_posts.slug  # "archive-posts"
    """

    def decorator(fn: ActionHandler) -> Action[Any]:
        return Action(name, fn, **options)

    return decorator
