"""Built-in actions reusable by any resource."""

from __future__ import annotations

import csv
from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from sqla_panel.actions._action import Action
from sqla_panel.actions._context import ActionContext
from sqla_panel.config._config import get_global_config
from sqla_panel.exceptions import ActionValidationError, ConfigurationError
from sqla_panel.fields._field import record_columns

__all__ = ["approve", "delete_selected", "export_csv"]


# ---------------------------------------------------------------------------
# Delete selected
# ---------------------------------------------------------------------------


def _delete_records(records: Sequence[Any], ctx: ActionContext[Any]) -> dict[str, int]:
    if ctx.session is None:
        raise ConfigurationError("delete-selected requires a session")
    for record in records:
        ctx.session.delete(record)
    ctx.session.flush()
    return {"deleted": len(records)}


def delete_selected() -> Action[Any]:
    """Destructive, index-only action deleting every selected record.

    All deletes run inside the pipeline's single transaction: either every
    selected record is gone afterwards or none is.
    """
    return Action(
        "Delete Selected",
        _delete_records,
        slug="delete-selected",
        icon="trash-2",
        destructive=True,
        confirm_text=(
            "Are you sure you want to delete the selected records? This cannot be undone."
        ),
        confirm_button_text="Delete",
        cancel_button_text="Cancel",
        visibility="index",
    )


# ---------------------------------------------------------------------------
# Export to CSV
# ---------------------------------------------------------------------------


def _export_path(directory: Path, filename: str | None, timestamp: str) -> Path:
    if filename:
        base = Path(filename).name
        stem, suffix = Path(base).stem, Path(base).suffix or ".csv"
    else:
        stem, suffix = "export", ".csv"
    return directory / f"{stem}_{timestamp}{suffix}"


def _cell(record: Any, column: str) -> Any:
    if isinstance(record, Mapping):
        value = record.get(column)
    else:
        value = getattr(record, column, None)
    return "" if value is None else value


def _write_csv(
    records: Sequence[Any],
    *,
    filename: str | None,
    columns: Sequence[str] | None,
) -> Path:
    if not records:
        raise ActionValidationError("No records to export")

    config = get_global_config()
    directory = Path(config.export_dir)
    directory.mkdir(parents=True, exist_ok=True)

    headers = list(columns) if columns is not None else record_columns(records[0])
    timestamp = datetime.now().strftime(config.export_timestamp_format)
    target = _export_path(directory, filename, timestamp)

    # Exports within the same timestamp get a numeric suffix.
    attempt = 0
    while True:
        candidate = (
            target if attempt == 0 else target.with_name(f"{target.stem}_{attempt}{target.suffix}")
        )
        try:
            handle = candidate.open("x", newline="", encoding="utf-8")
        except FileExistsError:
            attempt += 1
            continue
        break

    with handle:
        writer = csv.writer(handle)
        writer.writerow(headers)
        for record in records:
            writer.writerow([_cell(record, column) for column in headers])
    return candidate


def export_csv(
    filename: str | None = None,
    *,
    columns: Sequence[str] | None = None,
) -> Action[Any]:
    """Action exporting the selection to a CSV file.

    The header row comes from the shape of the first selected record
    (mapped columns for SQLAlchemy models) unless *columns* is given.
    Files land in the configured ``export_dir`` as
    ``<stem>_<timestamp><ext>``. An empty selection is a validation
    error and writes nothing.

    Args:
        filename: Base filename, e.g. ``"products.csv"``. Defaults to
            ``export_<timestamp>.csv``.
        columns: Explicit column list.

    Example::

        export = export_csv("posts.csv")
        # storage/exports/posts_20240101_120000.csv
    """

    def _export(records: Sequence[Any], ctx: ActionContext[Any]) -> dict[str, Any]:
        path = _write_csv(records, filename=filename, columns=columns)
        return {"path": str(path), "rows": len(records)}

    return Action("Export as CSV", _export, icon="download")


# ---------------------------------------------------------------------------
# Approve
# ---------------------------------------------------------------------------


def approve(
    *,
    status_field: str = "status",
    status_value: Any = "approved",
    flag_field: str = "approved",
) -> Action[Any]:
    """Action marking each selected record as approved.

    Sets *status_field* to *status_value* when the record has that
    column, otherwise sets the boolean *flag_field* to ``True``; records
    with neither are left untouched.
    """

    def _approve(records: Sequence[Any], ctx: ActionContext[Any]) -> dict[str, int]:
        approved = 0
        for record in records:
            columns = record_columns(record)
            if status_field in columns:
                setattr(record, status_field, status_value)
            elif flag_field in columns:
                setattr(record, flag_field, True)
            else:
                continue
            approved += 1
        if ctx.session is not None:
            ctx.session.flush()
        return {"approved": approved}

    return Action(
        "Approve",
        _approve,
        icon="check",
        confirm_text="Are you sure you want to approve these items?",
    )
