"""Actions: descriptors, execution pipeline, and built-in actions."""

from sqla_panel.actions._action import Action, ActionHandler, action
from sqla_panel.actions._builtin import approve, delete_selected, export_csv
from sqla_panel.actions._context import ActionContext
from sqla_panel.actions._pipeline import ActionPipeline, load_records, run_action
from sqla_panel.actions._result import ActionResult

__all__ = [
    "Action",
    "ActionContext",
    "ActionHandler",
    "ActionPipeline",
    "ActionResult",
    "action",
    "approve",
    "delete_selected",
    "export_csv",
    "load_records",
    "run_action",
]
