"""Field catalog contract and a minimal attribute-backed field."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable

__all__ = ["Field", "FieldLike", "is_empty_value", "record_columns"]

_NON_WORD = re.compile(r"\W+")


@runtime_checkable
class FieldLike(Protocol):
    """What the core needs from a field-catalog entry.

    The catalog owns rendering and type-specific rules; the core only
    extracts a record's value, serializes it, and validates submitted
    action input.
    """

    key: str
    name: str
    required: bool

    def extract(self, record: Any) -> Any: ...

    def serialize(self, record: Any = None) -> dict[str, Any]: ...

    def validate(self, value: Any) -> list[str]: ...


def is_empty_value(value: Any) -> bool:
    """Return whether *value* counts as "not provided" for a required field."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def _derive_key(name: str) -> str:
    return _NON_WORD.sub("_", name.strip().lower()).strip("_")


@dataclass(frozen=True, slots=True)
class Field:
    """A field read from a record attribute (or a custom accessor).

    Attributes:
        name: Human label.
        key: Attribute / payload key. Derived from ``name`` when omitted
            (``"New Status"`` -> ``"new_status"``).
        required: Submitted action input must provide a non-empty value.
        type: Optional type (or tuple of types) submitted values must be
            instances of.
        options: Optional mapping of allowed values to labels.
        default: Value used when the record has no such attribute.
        accessor: Optional ``(record) -> value`` replacing ``getattr``.

    Example::

        Field("Status", options={"draft": "Draft", "published": "Published"})
        Field("Price", type=(int, float), required=True)
    """

    name: str
    key: str = ""
    required: bool = False
    type: type | tuple[type, ...] | None = None
    options: Mapping[Any, str] | None = field(default=None, compare=False)
    default: Any = field(default=None, compare=False)
    accessor: Callable[[Any], Any] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.key:
            object.__setattr__(self, "key", _derive_key(self.name))

    def extract(self, record: Any) -> Any:
        """Read this field's current value from *record*."""
        if record is None:
            return self.default
        if self.accessor is not None:
            return self.accessor(record)
        if isinstance(record, Mapping):
            return record.get(self.key, self.default)
        return getattr(record, self.key, self.default)

    def serialize(self, record: Any = None) -> dict[str, Any]:
        """Return the field's metadata, plus its value when a record is given."""
        return {
            "key": self.key,
            "name": self.name,
            "required": self.required,
            "options": dict(self.options) if self.options is not None else None,
            "value": self.extract(record) if record is not None else self.default,
        }

    def validate(self, value: Any) -> list[str]:
        """Return validation messages for a submitted *value* (empty when valid)."""
        if is_empty_value(value):
            return [f"{self.name} is required"] if self.required else []
        errors: list[str] = []
        if self.type is not None and not isinstance(value, self.type):
            errors.append(f"{self.name} has an invalid type")
        if self.options is not None and value not in self.options:
            errors.append(f"{self.name} must be one of {sorted(map(str, self.options))}")
        return errors


def record_columns(record: Any) -> list[str]:
    """Return the column names describing *record*'s shape.

    Uses the SQLAlchemy mapper for mapped instances, dataclass fields for
    dataclasses, and public instance attributes otherwise.

    Example::

        record_columns(product)  # ["id", "name", "price"]
    """
    try:
        mapper = sa_inspect(record).mapper
    except NoInspectionAvailable:
        mapper = None
    if mapper is not None:
        return [prop.key for prop in mapper.column_attrs]
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return [f.name for f in dataclasses.fields(record)]
    if isinstance(record, Mapping):
        return [str(k) for k in record]
    return [k for k in vars(record) if not k.startswith("_")]
