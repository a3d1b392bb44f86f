"""Resource: a declared wrapper around a persisted entity type."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from sqla_panel._checks import can
from sqla_panel._context import PanelContext
from sqla_panel._types import Verb
from sqla_panel.config._config import get_global_config
from sqla_panel.exceptions import ConfigurationError, FieldNotFoundError
from sqla_panel.resource._descriptors import Card, Filter, Lens, Sortable
from sqla_panel.resolvers._resolvers import Resolver

if TYPE_CHECKING:
    from sqla_panel.actions._action import Action
    from sqla_panel.fields._field import FieldLike
    from sqla_panel.policy._base import Policy

__all__ = ["Resource"]


def _check_resolver(name: str, value: Any) -> None:
    if value is not None and not isinstance(value, Resolver):
        raise ConfigurationError(
            f"{name} must provide a resolve(context) method, got {type(value).__name__}"
        )


class Resource:
    """A resource: display metadata, a model handle, and capability references.

    A resource composes independent capabilities instead of inheriting
    behavior: one :class:`~sqla_panel.policy.Policy` and at most one
    resolver per aspect (fields, cards, filters, lenses, actions). Each
    ``get_*`` accessor delegates to its resolver and returns an empty
    list when none is attached; there is no static fallback list.

    Resources are built once at startup, registered, and then only read.

    Args:
        slug: Unique identifier used for registration and URLs.
        model: Opaque handle to the persisted type, typically a mapped class.
        title: Display title. Defaults to the slug.
        icon: Icon name for navigation.
        group: Navigation group.
        navigation_order: Position inside the group. Defaults to the
            configured ``default_navigation_order``.
        visible: Whether the resource appears in navigation.
        policy: Authorization predicates for CRUD verbs.
        fields, cards, filters, lenses, actions: Resolvers for each aspect.
        sortable: Default sort orders.
        record_title_key: Attribute used by :meth:`record_title`.
        record_title_fn: Callable overriding :meth:`record_title`.

    Example::

        products = Resource(
            "products",
            model=Product,
            title="Products",
            policy=PermissionPolicy("products"),
            fields=product_fields,
            actions=static([delete_selected(), export_csv("products.csv")]),
        )
    """

    def __init__(
        self,
        slug: str,
        *,
        model: Any = None,
        title: str | None = None,
        icon: str = "",
        group: str = "",
        navigation_order: int | None = None,
        visible: bool = True,
        policy: Policy | None = None,
        fields: Resolver[FieldLike] | None = None,
        cards: Resolver[Card] | None = None,
        filters: Resolver[Filter] | None = None,
        lenses: Resolver[Lens] | None = None,
        actions: Resolver[Action[Any]] | None = None,
        sortable: Iterable[Sortable] = (),
        record_title_key: str = "id",
        record_title_fn: Callable[[Any], str] | None = None,
    ) -> None:
        if not isinstance(slug, str) or not slug:
            raise ConfigurationError(f"Resource slug must be a non-empty string, got {slug!r}")
        for name, value in (
            ("fields", fields),
            ("cards", cards),
            ("filters", filters),
            ("lenses", lenses),
            ("actions", actions),
        ):
            _check_resolver(name, value)
        sortable = tuple(sortable)
        for entry in sortable:
            if not isinstance(entry, Sortable):
                raise ConfigurationError(f"sortable entries must be Sortable, got {entry!r}")

        self.slug = slug
        self.model = model
        self.title = title if title is not None else slug
        self.icon = icon
        self.group = group
        self.navigation_order = (
            navigation_order
            if navigation_order is not None
            else get_global_config().default_navigation_order
        )
        self.visible = visible
        self.policy = policy
        self.field_resolver = fields
        self.card_resolver = cards
        self.filter_resolver = filters
        self.lens_resolver = lenses
        self.action_resolver = actions
        self.sortable = sortable
        self.record_title_key = record_title_key
        self.record_title_fn = record_title_fn

    # ------------------------------------------------------------------
    # Resolver composition
    # ------------------------------------------------------------------

    def get_fields(self, context: PanelContext | None = None) -> list[FieldLike]:
        """Fields visible for *context*; empty when no field resolver is set."""
        if self.field_resolver is None:
            return []
        return list(self.field_resolver.resolve(context))

    def get_cards(self, context: PanelContext | None = None) -> list[Card]:
        if self.card_resolver is None:
            return []
        return list(self.card_resolver.resolve(context))

    def get_filters(self, context: PanelContext | None = None) -> list[Filter]:
        if self.filter_resolver is None:
            return []
        return list(self.filter_resolver.resolve(context))

    def get_lenses(self, context: PanelContext | None = None) -> list[Lens]:
        if self.lens_resolver is None:
            return []
        return list(self.lens_resolver.resolve(context))

    def get_actions(self, context: PanelContext | None = None) -> list[Action[Any]]:
        if self.action_resolver is None:
            return []
        return list(self.action_resolver.resolve(context))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_field(self, name: str, context: PanelContext | None = None) -> FieldLike | None:
        for candidate in self.get_fields(context):
            if candidate.key == name:
                return candidate
        return None

    def resolve_field(
        self,
        name: str,
        record: Any,
        context: PanelContext | None = None,
    ) -> Any:
        """Return the serialized value of field *name* for *record*.

        Extraction and serialization are delegated to the field catalog;
        this only adds the not-found case.

        Raises:
            FieldNotFoundError: No field with that key is resolved for
                *context*.
        """
        found = self.find_field(name, context)
        if found is None:
            raise FieldNotFoundError(resource=self.slug, field=name)
        return found.serialize(record).get("value")

    def find_action(self, slug: str, context: PanelContext | None = None) -> Action[Any] | None:
        for candidate in self.get_actions(context):
            if candidate.slug == slug:
                return candidate
        return None

    def find_lens(self, slug: str, context: PanelContext | None = None) -> Lens | None:
        for candidate in self.get_lenses(context):
            if candidate.slug == slug:
                return candidate
        return None

    def find_filter(self, slug: str, context: PanelContext | None = None) -> Filter | None:
        for candidate in self.get_filters(context):
            if candidate.slug == slug:
                return candidate
        return None

    # ------------------------------------------------------------------
    # Authorization and display
    # ------------------------------------------------------------------

    def can(self, verb: Verb, context: PanelContext | None, record: Any = None) -> bool:
        """Shortcut for :func:`sqla_panel.can` on this resource."""
        return can(self, verb, context, record)

    def record_title(self, record: Any) -> str:
        """Human-readable title for one record of this resource."""
        if record is None:
            return ""
        if self.record_title_fn is not None:
            return self.record_title_fn(record)
        value = getattr(record, self.record_title_key, None)
        return "" if value is None else str(value)

    def to_dict(self) -> dict[str, Any]:
        """Navigation metadata for the transport layer."""
        return {
            "slug": self.slug,
            "title": self.title,
            "icon": self.icon,
            "group": self.group,
            "navigation_order": self.navigation_order,
            "visible": self.visible,
            "sortable": [{"column": s.column, "direction": s.direction} for s in self.sortable],
        }

    def __repr__(self) -> str:
        return f"Resource({self.slug!r})"
