"""Resolver capabilities: per-request computation of a resource's aspects."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, runtime_checkable

from sqla_panel._context import PanelContext

if TYPE_CHECKING:
    from sqla_panel.actions._action import Action
    from sqla_panel.fields._field import FieldLike
    from sqla_panel.resource._descriptors import Card, Filter, Lens

__all__ = [
    "ActionResolver",
    "CallableResolver",
    "CardResolver",
    "FieldResolver",
    "FilterResolver",
    "LensResolver",
    "Resolver",
    "StaticResolver",
    "resolver",
    "static",
]

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Resolver(Protocol[T_co]):
    """A single-method capability producing one aspect of a resource.

    ``context`` may be ``None``. Resolvers must not raise on an absent
    context; they return the safe, minimal list instead (for example,
    no sensitive fields). The composition layer cannot enforce this, so
    it is part of the resolver author's contract.
    """

    def resolve(self, context: PanelContext | None) -> Sequence[T_co]: ...


# Aliases naming the five resolver slots of a resource.
FieldResolver = Resolver["FieldLike"]
CardResolver = Resolver["Card"]
FilterResolver = Resolver["Filter"]
LensResolver = Resolver["Lens"]
ActionResolver = Resolver["Action[Any]"]


class CallableResolver(Generic[T]):
    """Adapts a plain function ``(context) -> Iterable[T]`` to a resolver.

    Example::

        @resolver
        def product_fields(ctx):
            fields = [Field("Name"), Field("Price")]
            if ctx is not None and ctx.has_permission("products.cost"):
                fields.append(Field("Cost"))
            return fields
    """

    def __init__(self, fn: Callable[[PanelContext | None], Iterable[T]]) -> None:
        self._fn = fn
        self.__name__ = getattr(fn, "__name__", "<resolver>")
        self.__doc__ = fn.__doc__

    def resolve(self, context: PanelContext | None) -> list[T]:
        return list(self._fn(context))

    def __repr__(self) -> str:
        return f"CallableResolver({self.__name__})"


class StaticResolver(Generic[T]):
    """Resolver returning the same items for every context."""

    def __init__(self, items: Iterable[T]) -> None:
        self._items = tuple(items)

    def resolve(self, context: PanelContext | None) -> list[T]:
        return list(self._items)

    def __repr__(self) -> str:
        return f"StaticResolver({len(self._items)} item(s))"


def resolver(fn: Callable[[PanelContext | None], Iterable[T]]) -> CallableResolver[T]:
    """Decorator/factory that turns a function into a resolver."""
    return CallableResolver(fn)


def static(items: Iterable[T]) -> StaticResolver[T]:
    """Build a resolver that ignores the context."""
    return StaticResolver(items)
