"""Declarative descriptors a resource exposes: filters, lenses, sort orders, cards."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select

from sqla_panel._context import PanelContext
from sqla_panel._slug import slugify
from sqla_panel._types import SortDirection
from sqla_panel.exceptions import ConfigurationError

__all__ = ["Card", "Filter", "Lens", "Sortable"]

_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True, slots=True)
class Filter:
    """A named, user-selectable query restriction.

    Attributes:
        name: Human label.
        apply_fn: ``(stmt, value) -> stmt`` narrowing a ``Select``.
        slug: URL-safe identifier, derived from ``name`` when omitted.
        type: Widget type hint for the transport layer (``"select"``,
            ``"boolean"``, ``"text"``, ...).
        options: Allowed values mapped to labels.

    Example::

        status_filter = Filter(
            "Status",
            lambda stmt, value: stmt.where(Post.status == value),
            options={"draft": "Draft", "published": "Published"},
        )
        stmt = status_filter.apply(select(Post), "draft")
    """

    name: str
    apply_fn: Callable[[Select[Any], Any], Select[Any]] = field(compare=False)
    slug: str = ""
    type: str = "select"
    options: Mapping[str, str] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not self.slug:
            object.__setattr__(self, "slug", slugify(self.name))

    def apply(self, stmt: Select[Any], value: Any) -> Select[Any]:
        return self.apply_fn(stmt, value)


@dataclass(frozen=True, slots=True)
class Lens:
    """A named, reusable query transform exposing an alternate view of records.

    Example::

        drafts = Lens("Drafts", lambda stmt: stmt.where(Post.status == "draft"))
        stmt = drafts.apply(select(Post))
    """

    name: str
    query: Callable[[Select[Any]], Select[Any]] = field(compare=False)
    slug: str = ""
    field_resolver: Any = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.slug:
            object.__setattr__(self, "slug", slugify(self.name))

    def apply(self, stmt: Select[Any]) -> Select[Any]:
        return self.query(stmt)

    def get_fields(self, context: PanelContext | None) -> list[Any]:
        if self.field_resolver is None:
            return []
        return list(self.field_resolver.resolve(context))


@dataclass(frozen=True, slots=True)
class Sortable:
    """A default sort order: column name plus direction."""

    column: str
    direction: SortDirection = "asc"

    def __post_init__(self) -> None:
        if self.direction not in _DIRECTIONS:
            raise ConfigurationError(
                f"Sort direction must be one of {_DIRECTIONS!r}, got {self.direction!r}"
            )
        if not self.column:
            raise ConfigurationError("Sort column must not be empty")

    def apply(self, stmt: Select[Any], model: type) -> Select[Any]:
        """Append this ordering to *stmt* using *model*'s column attribute."""
        column = getattr(model, self.column, None)
        if column is None:
            raise ConfigurationError(f"{model.__name__} has no column {self.column!r}")
        return stmt.order_by(column.desc() if self.direction == "desc" else column.asc())


@dataclass(frozen=True, slots=True)
class Card:
    """A dashboard widget. ``resolve_fn`` may perform I/O (aggregate counts).

    Example::

        Card("Total Products", lambda ctx: {"value": session.scalar(count_stmt)})
    """

    name: str
    resolve_fn: Callable[[PanelContext | None], Any] = field(compare=False)
    slug: str = ""
    component: str = "value"
    width: str = "1/3"

    def __post_init__(self) -> None:
        if not self.slug:
            object.__setattr__(self, "slug", slugify(self.name))

    def resolve(self, context: PanelContext | None) -> Any:
        return self.resolve_fn(context)

    def to_dict(self, context: PanelContext | None = None) -> dict[str, Any]:
        return {
            "name": self.name,
            "slug": self.slug,
            "component": self.component,
            "width": self.width,
            "data": self.resolve(context),
        }
