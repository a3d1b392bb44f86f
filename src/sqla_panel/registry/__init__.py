"""Resource registry: slug lookup shared across the process."""

from sqla_panel.registry._registry import ResourceRegistry, get_default_registry

__all__ = ["ResourceRegistry", "get_default_registry"]
