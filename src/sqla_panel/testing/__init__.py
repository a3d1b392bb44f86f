"""sqla-panel testing utilities: MockActor, assertions, and fixtures.

Provides test helpers for resources and actions:

- **MockActor / factories**: Lightweight actors and contexts for tests.
- **Assertion helpers**: ``assert_action_succeeded``, ``assert_action_denied``,
  ``assert_action_invalid``, ``snapshot_records``.
- **Fixtures**: ``panel_registry``, ``panel_pipeline``, ``panel_config``,
  ``isolated_panel_state``.

Example::

    from sqla_panel.testing import assert_action_succeeded, make_admin, make_context

    def test_delete(panel_pipeline, session):
        result = panel_pipeline.run(
            products, "delete-selected", ids=[1, 2], session=session,
            context=make_context(make_admin(), "*"),
        )
        assert_action_succeeded(result, count=2)
"""

from sqla_panel.testing._actors import (
    MockActor,
    make_admin,
    make_anonymous,
    make_context,
    make_user,
)
from sqla_panel.testing._assertions import (
    assert_action_denied,
    assert_action_invalid,
    assert_action_succeeded,
    snapshot_records,
)
from sqla_panel.testing._fixtures import (
    isolated_panel_state,
    panel_config,
    panel_pipeline,
    panel_registry,
)
from sqla_panel.testing._isolation import isolated_panel

__all__ = [
    "MockActor",
    "assert_action_denied",
    "assert_action_invalid",
    "assert_action_succeeded",
    "isolated_panel",
    "isolated_panel_state",
    "make_admin",
    "make_anonymous",
    "make_context",
    "make_user",
    "panel_config",
    "panel_pipeline",
    "panel_registry",
    "snapshot_records",
]
