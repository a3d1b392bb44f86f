"""sqla-panel: resource composition and action execution for SQLAlchemy admin panels.

Declare resources around mapped models, compose their fields, cards,
filters, lenses and actions per request, and run bulk actions with
authorization and all-or-nothing transactions.

Example::

    from sqla_panel import (
        ActionPipeline, PanelContext, PermissionPolicy, Resource,
        ResourceRegistry, delete_selected, static,
    )

    registry = ResourceRegistry()
    registry.add(
        Resource(
            "products",
            model=Product,
            policy=PermissionPolicy("products"),
            actions=static([delete_selected()]),
        )
    )

    result = ActionPipeline(registry).run(
        "products", "delete-selected",
        ids=[1, 2, 3], session=session,
        context=PanelContext(actor=current_user),
    )
"""

from importlib.metadata import PackageNotFoundError, version

from sqla_panel._checks import authorize, can
from sqla_panel._context import PanelContext
from sqla_panel._types import ActorLike
from sqla_panel.actions import (
    Action,
    ActionContext,
    ActionPipeline,
    ActionResult,
    action,
    approve,
    delete_selected,
    export_csv,
    load_records,
    run_action,
)
from sqla_panel.config._config import PanelConfig, configure
from sqla_panel.exceptions import (
    ActionExecutionError,
    ActionNotFoundError,
    ActionValidationError,
    AuthorizationDenied,
    ConfigurationError,
    FieldNotFoundError,
    NoPolicyError,
    NotFoundError,
    PanelError,
    RecordNotFoundError,
    ResourceNotFoundError,
)
from sqla_panel.fields import Field
from sqla_panel.policy import PermissionPolicy, Policy, PredicatePolicy, predicate
from sqla_panel.registry import ResourceRegistry, get_default_registry
from sqla_panel.resolvers import resolver, static
from sqla_panel.resource import Card, Filter, Lens, Resource, Sortable

try:
    __version__ = version("sqla-panel")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "Action",
    "ActionContext",
    "ActionExecutionError",
    "ActionNotFoundError",
    "ActionPipeline",
    "ActionResult",
    "ActionValidationError",
    "ActorLike",
    "AuthorizationDenied",
    "Card",
    "ConfigurationError",
    "Field",
    "FieldNotFoundError",
    "Filter",
    "Lens",
    "NoPolicyError",
    "NotFoundError",
    "PanelConfig",
    "PanelContext",
    "PanelError",
    "PermissionPolicy",
    "Policy",
    "PredicatePolicy",
    "RecordNotFoundError",
    "Resource",
    "ResourceNotFoundError",
    "ResourceRegistry",
    "Sortable",
    "action",
    "approve",
    "authorize",
    "can",
    "configure",
    "delete_selected",
    "export_csv",
    "get_default_registry",
    "load_records",
    "predicate",
    "resolver",
    "run_action",
    "static",
]
