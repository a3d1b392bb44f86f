"""Tests for resolver helpers and the Resolver protocol."""

from __future__ import annotations

from sqla_panel.fields import Field
from sqla_panel.resolvers import CallableResolver, Resolver, StaticResolver, resolver, static
from sqla_panel.testing._actors import make_context, make_user


class TestResolverHelpers:
    def test_static_ignores_context(self) -> None:
        fields = static([Field("Name")])
        assert isinstance(fields, StaticResolver)
        assert fields.resolve(None) == fields.resolve(make_context(make_user()))

    def test_static_returns_fresh_list(self) -> None:
        fields = static([Field("Name")])
        fields.resolve(None).clear()
        assert len(fields.resolve(None)) == 1

    def test_resolver_decorator(self) -> None:
        @resolver
        def names(ctx):
            """Field names."""
            return (n for n in ["a", "b"])

        assert isinstance(names, CallableResolver)
        assert names.resolve(None) == ["a", "b"]
        assert names.__name__ == "names"
        assert "names" in repr(names)

    def test_protocol_is_runtime_checkable(self) -> None:
        class Custom:
            def resolve(self, context):
                return []

        assert isinstance(Custom(), Resolver)
        assert isinstance(static([]), Resolver)
        assert not isinstance(object(), Resolver)
