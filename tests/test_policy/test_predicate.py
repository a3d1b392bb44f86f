"""Tests for policy/_predicate.py: composable predicates."""

from __future__ import annotations

import logging

import pytest

from sqla_panel.policy._predicate import (
    Predicate,
    always_allow,
    always_deny,
    has_permission,
    is_authenticated,
    predicate,
)
from sqla_panel.testing._actors import MockActor, make_context
from tests.conftest import Product


def _is_owner(ctx, record):
    return record is not None and record.id == ctx.actor.id


class TestPredicate:
    """Predicate wraps a callable and supports composition."""

    def test_single_predicate_evaluation(self):
        p = Predicate(_is_owner)
        ctx = make_context(MockActor(id=1))
        assert p(ctx, Product(id=1, name="x")) is True
        assert p(ctx, Product(id=2, name="x")) is False

    def test_and_composition(self):
        combined = has_permission("products.update") & Predicate(_is_owner)
        owner = Product(id=7, name="x")
        assert combined(make_context(MockActor(id=7), "products.update"), owner) is True
        assert combined(make_context(MockActor(id=7)), owner) is False
        assert combined(make_context(MockActor(id=8), "products.update"), owner) is False

    def test_or_composition(self):
        combined = has_permission("products.update") | Predicate(_is_owner)
        owner = Product(id=7, name="x")
        assert combined(make_context(MockActor(id=7)), owner) is True
        assert combined(make_context(MockActor(id=8), "products.update"), owner) is True
        assert combined(make_context(MockActor(id=8)), owner) is False

    def test_not_composition(self):
        inverted = ~always_allow
        assert inverted(make_context(MockActor(id=1))) is False
        assert inverted.name == "~always_allow"

    def test_composed_name(self):
        combined = is_authenticated & ~always_deny
        assert combined.name == "(is_authenticated & ~always_deny)"
        assert "is_authenticated" in repr(combined)

    def test_none_context_denies(self):
        assert always_allow(None) is False
        assert (~always_deny)(None) is False

    def test_raising_predicate_denies_and_logs(self, caplog: pytest.LogCaptureFixture):
        def boom(ctx, record):
            raise RuntimeError("db down")

        p = Predicate(boom)
        with caplog.at_level(logging.WARNING, logger="sqla_panel.policy"):
            assert p(make_context(MockActor(id=1))) is False
        assert any("boom" in r.message and "db down" in r.message for r in caplog.records)


class TestPredicateDecorator:
    def test_decorator_names_predicate(self):
        @predicate
        def is_admin(ctx, record):
            return ctx.actor.role == "admin"

        assert isinstance(is_admin, Predicate)
        assert is_admin.name == "is_admin"
        assert is_admin(make_context(MockActor(id=1, role="admin"))) is True
        assert is_admin(make_context(MockActor(id=1, role="viewer"))) is False


class TestBuiltins:
    def test_always_allow(self):
        assert always_allow(make_context(MockActor(id=1))) is True

    def test_always_deny(self):
        assert always_deny(make_context(MockActor(id=1))) is False

    def test_is_authenticated(self):
        assert is_authenticated(make_context(MockActor(id=1))) is True
        assert is_authenticated(make_context(None)) is False

    def test_has_permission_wildcard(self):
        assert has_permission("anything")(make_context(MockActor(id=1), "*")) is True

    def test_has_permission_requires_actor(self):
        assert has_permission("products.view")(make_context(None, "products.view")) is False
