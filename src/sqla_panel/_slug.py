"""Slug derivation shared by actions, filters, lenses and cards."""

from __future__ import annotations

__all__ = ["slugify"]


def slugify(name: str) -> str:
    """Derive a URL-safe slug: lowercase, spaces replaced by hyphens.

    Example::

        assert slugify("Export as CSV") == "export-as-csv"
    """
    return name.lower().replace(" ", "-")
