"""Assertion helpers for testing action outcomes and atomicity."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select
from sqlalchemy.orm import Session

from sqla_panel.actions._result import ActionResult

__all__ = [
    "assert_action_denied",
    "assert_action_invalid",
    "assert_action_succeeded",
    "snapshot_records",
]


def assert_action_succeeded(result: ActionResult, *, count: int | None = None) -> None:
    """Assert that an action invocation succeeded.

    Args:
        result: The pipeline's result.
        count: If given, the exact number of records the action ran on.

    Example::

        assert_action_succeeded(pipeline.run(...), count=3)
    """
    if result.status != "succeeded":
        raise AssertionError(
            f"expected action {result.resource}.{result.action} to succeed, "
            f"got {result.status!r}: {result.message}"
        )
    if count is not None and result.count != count:
        raise AssertionError(f"expected {count} record(s), but action ran on {result.count}")


def assert_action_denied(result: ActionResult) -> None:
    """Assert that an action invocation was denied."""
    if result.status != "denied":
        raise AssertionError(
            f"expected action {result.resource}.{result.action} to be denied, "
            f"got {result.status!r}"
        )


def assert_action_invalid(result: ActionResult, *fields: str) -> None:
    """Assert that an invocation failed validation, optionally on *fields*.

    Example::

        assert_action_invalid(result, "status")
    """
    if result.status != "invalid":
        raise AssertionError(
            f"expected action {result.resource}.{result.action} to be invalid, "
            f"got {result.status!r}"
        )
    missing = [f for f in fields if f not in result.errors]
    if missing:
        raise AssertionError(
            f"expected validation errors for {missing!r}, got {dict(result.errors)!r}"
        )


def snapshot_records(
    session: Session,
    model: type,
    ids: Iterable[Any],
    *,
    columns: Sequence[str] | None = None,
    pk: str = "id",
) -> dict[Any, dict[str, Any]]:
    """Read the stored column values for *ids* straight from the database.

    Bypasses the identity map, so the snapshot reflects what is actually
    persisted in the current transaction. Compare snapshots taken before
    and after an action to check that a failed batch left no partial
    mutation; ids missing from storage are absent from the result.

    Example::

        before = snapshot_records(session, Product, [1, 2, 3])
        ...
        assert snapshot_records(session, Product, [1, 2, 3]) == before
    """
    mapper = sa_inspect(model)
    names = list(columns) if columns is not None else [p.key for p in mapper.column_attrs]
    if pk not in names:
        names.insert(0, pk)
    table = mapper.local_table
    stmt = select(*(table.c[name] for name in names)).where(table.c[pk].in_(list(ids)))
    rows = session.execute(stmt).mappings().all()
    return {row[pk]: dict(row) for row in rows}
