"""Field catalog contract used by resources and action inputs."""

from sqla_panel.fields._field import Field, FieldLike, is_empty_value, record_columns

__all__ = ["Field", "FieldLike", "is_empty_value", "record_columns"]
