"""Resolver composition: dynamic fields, cards, filters, lenses and actions."""

from sqla_panel.resolvers._resolvers import (
    ActionResolver,
    CallableResolver,
    CardResolver,
    FieldResolver,
    FilterResolver,
    LensResolver,
    Resolver,
    StaticResolver,
    resolver,
    static,
)

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
