"""Resources and the descriptors they expose."""

from sqla_panel.resource._descriptors import Card, Filter, Lens, Sortable
from sqla_panel.resource._resource import Resource

__all__ = ["Card", "Filter", "Lens", "Resource", "Sortable"]
