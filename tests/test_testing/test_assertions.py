"""Tests for sqla_panel.testing._assertions: assertion helpers."""

from __future__ import annotations

import pytest
from sqlalchemy import update
from sqlalchemy.orm import Session

from sqla_panel.actions import ActionResult
from sqla_panel.testing._assertions import (
    assert_action_denied,
    assert_action_invalid,
    assert_action_succeeded,
    snapshot_records,
)
from tests.conftest import Product


class TestAssertActionSucceeded:
    def test_passes(self) -> None:
        assert_action_succeeded(ActionResult("succeeded", "products", "approve", count=2), count=2)

    def test_fails_on_other_status(self) -> None:
        with pytest.raises(AssertionError, match="to succeed"):
            assert_action_succeeded(ActionResult("denied", "products", "approve"))

    def test_fails_on_count(self) -> None:
        with pytest.raises(AssertionError, match="expected 3"):
            assert_action_succeeded(
                ActionResult("succeeded", "products", "approve", count=2), count=3
            )


class TestAssertActionDenied:
    def test_passes(self) -> None:
        assert_action_denied(ActionResult("denied", "products", "approve"))

    def test_fails(self) -> None:
        with pytest.raises(AssertionError, match="denied"):
            assert_action_denied(ActionResult("succeeded", "products", "approve"))


class TestAssertActionInvalid:
    def test_passes_with_fields(self) -> None:
        result = ActionResult("invalid", "products", "reject", errors={"reason": "required"})
        assert_action_invalid(result, "reason")

    def test_fails_on_missing_field(self) -> None:
        result = ActionResult("invalid", "products", "reject", errors={"reason": "required"})
        with pytest.raises(AssertionError, match="level"):
            assert_action_invalid(result, "level")

    def test_fails_on_status(self) -> None:
        with pytest.raises(AssertionError, match="invalid"):
            assert_action_invalid(ActionResult("succeeded", "products", "reject"))


class TestSnapshotRecords:
    def test_all_columns(self, session: Session, sample_data) -> None:
        snapshot = snapshot_records(session, Product, [1])
        assert snapshot == {1: {"id": 1, "name": "Widget", "price": 9.5, "status": "draft"}}

    def test_selected_columns(self, session: Session, sample_data) -> None:
        assert snapshot_records(session, Product, [2], columns=["name"]) == {
            2: {"id": 2, "name": "Gadget"}
        }

    def test_missing_ids_absent(self, session: Session, sample_data) -> None:
        assert list(snapshot_records(session, Product, [1, 99])) == [1]

    def test_reads_storage_not_identity_map(self, session: Session, sample_data) -> None:
        product = session.get(Product, 1)
        session.execute(
            update(Product).where(Product.id == 1).values(name="Changed"),
            execution_options={"synchronize_session": False},
        )
        assert product.name == "Widget"
        assert snapshot_records(session, Product, [1])[1]["name"] == "Changed"
