"""ResourceRegistry: stores and retrieves resources by slug."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqla_panel._audit import log_registry_overwrite
from sqla_panel._checks import can
from sqla_panel._context import PanelContext
from sqla_panel.exceptions import ConfigurationError, ResourceNotFoundError
from sqla_panel.registry._lock import ReadWriteLock

if TYPE_CHECKING:
    from sqla_panel.resource._resource import Resource

__all__ = ["ResourceRegistry", "get_default_registry"]


class ResourceRegistry:
    """Registry that maps slugs to resources.

    Resources that reference each other (a product has many shipment
    rows, a shipment row belongs to a product) look each other up here
    by slug at request time instead of holding direct references. The
    price is that a misspelled or late-registered slug only surfaces
    when it is looked up, so :meth:`get` returns ``None`` and callers
    must check.

    Safe for concurrent readers and writers. Registration happens at
    startup; reads happen for the life of the process.

    Example::

        registry = ResourceRegistry()
        registry.register("products", products)
        registry.get("products") is products  # True
        registry.get("missing")  # None
    """

    def __init__(self) -> None:
        self._resources: dict[str, Resource] = {}
        self._lock = ReadWriteLock()

    def register(self, slug: str, resource: Resource) -> None:
        """Store *resource* under *slug*, replacing any previous entry.

        Args:
            slug: The lookup key. Must be a non-empty string.
            resource: The resource instance; stored by reference.

        Raises:
            ConfigurationError: If *slug* is empty or not a string.

        Example::

            registry.register("shipment-rows", shipment_rows)
        """
        if not isinstance(slug, str) or not slug:
            raise ConfigurationError(f"Registry slug must be a non-empty string, got {slug!r}")
        with self._lock.write():
            previous = self._resources.get(slug)
            self._resources[slug] = resource
        if previous is not None and previous is not resource:
            log_registry_overwrite(slug=slug, previous=previous, current=resource)

    def add(self, resource: Resource) -> Resource:
        """Register *resource* under its own slug and return it.

        Example::

            products = registry.add(Resource("products", model=Product))
        """
        self.register(resource.slug, resource)
        return resource

    def get(self, slug: str) -> Resource | None:
        """Return the resource registered under *slug*, or ``None``."""
        with self._lock.read():
            return self._resources.get(slug)

    def get_or_raise(self, slug: str) -> Resource:
        """Return the resource registered under *slug*.

        Raises:
            ResourceNotFoundError: If nothing is registered under *slug*.
        """
        found = self.get(slug)
        if found is None:
            raise ResourceNotFoundError(slug=slug)
        return found

    def list(self) -> list[Resource]:
        """Return a copy of all registered resources, in registration order."""
        with self._lock.read():
            return list(self._resources.values())

    def slugs(self) -> list[str]:
        """Return a copy of all registered slugs, in registration order."""
        with self._lock.read():
            return list(self._resources)

    def navigation(self, context: PanelContext | None) -> list[Resource]:
        """Visible resources *context* may ``view_any``, in navigation order.

        Sorted by group, then navigation order, then title.
        """
        entries = [r for r in self.list() if r.visible and can(r, "view_any", context)]
        return sorted(entries, key=lambda r: (r.group, r.navigation_order, r.title))

    def clear(self) -> None:
        """Remove all registered resources.

        For test teardown only; request handling never calls this.
        """
        with self._lock.write():
            self._resources.clear()

    def __contains__(self, slug: object) -> bool:
        with self._lock.read():
            return slug in self._resources

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._resources)

    def __repr__(self) -> str:
        return f"ResourceRegistry({self.slugs()!r})"


# Module-level default registry (singleton).
_default_registry = ResourceRegistry()


def get_default_registry() -> ResourceRegistry:
    """Return the global default (singleton) resource registry.

    Used by APIs when no explicit registry is provided. Tests should
    construct their own ``ResourceRegistry`` or use
    :func:`sqla_panel.testing.isolated_panel`.
    """
    return _default_registry
