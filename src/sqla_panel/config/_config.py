"""Layered configuration for sqla-panel."""

from __future__ import annotations

from dataclasses import dataclass

from sqla_panel._types import OnMissingPolicy

__all__ = [
    "PanelConfig",
    "configure",
    "get_global_config",
    "_reset_global_config",
    "_set_global_config",
]

_VALID_POLICIES: set[str] = {"deny", "raise"}


@dataclass(frozen=True, slots=True)
class PanelConfig:
    """Process-wide settings with merge semantics.

    Attributes:
        on_missing_policy: Behavior when a verb-guarded check runs against
            a resource without a policy. ``"deny"`` returns ``False``,
            ``"raise"`` raises ``NoPolicyError``.
        log_action_decisions: Log INFO/DEBUG summaries of every action
            invocation. Handler failures are logged regardless.
        export_dir: Directory the built-in CSV export writes into.
        export_timestamp_format: ``strftime`` format used to disambiguate
            export filenames.
        default_navigation_order: Navigation order for resources that
            do not set one.

    Example::

        config = PanelConfig(on_missing_policy="raise")
        merged = config.merge(export_dir="/tmp/exports")
    """

    on_missing_policy: OnMissingPolicy = "deny"
    log_action_decisions: bool = False
    export_dir: str = "storage/exports"
    export_timestamp_format: str = "%Y%m%d_%H%M%S"
    default_navigation_order: int = 99

    def __post_init__(self) -> None:
        if self.on_missing_policy not in _VALID_POLICIES:
            raise ValueError(
                f"on_missing_policy must be one of {_VALID_POLICIES!r}, "
                f"got {self.on_missing_policy!r}"
            )
        if not self.export_dir:
            raise ValueError("export_dir must not be empty")
        if not self.export_timestamp_format:
            raise ValueError("export_timestamp_format must not be empty")

    def merge(
        self,
        *,
        on_missing_policy: OnMissingPolicy | None = None,
        log_action_decisions: bool | None = None,
        export_dir: str | None = None,
        export_timestamp_format: str | None = None,
        default_navigation_order: int | None = None,
    ) -> PanelConfig:
        """Return a new config with non-None overrides applied.

        Example::

            base = PanelConfig()
            cfg = base.merge(log_action_decisions=True)
        """
        return PanelConfig(
            on_missing_policy=(
                on_missing_policy if on_missing_policy is not None else self.on_missing_policy
            ),
            log_action_decisions=(
                log_action_decisions
                if log_action_decisions is not None
                else self.log_action_decisions
            ),
            export_dir=export_dir if export_dir is not None else self.export_dir,
            export_timestamp_format=(
                export_timestamp_format
                if export_timestamp_format is not None
                else self.export_timestamp_format
            ),
            default_navigation_order=(
                default_navigation_order
                if default_navigation_order is not None
                else self.default_navigation_order
            ),
        )


# ---------------------------------------------------------------------------
# Global configuration singleton
# ---------------------------------------------------------------------------

_global_config = PanelConfig()


def get_global_config() -> PanelConfig:
    """Return the current global configuration."""
    return _global_config


def configure(
    *,
    on_missing_policy: OnMissingPolicy | None = None,
    log_action_decisions: bool | None = None,
    export_dir: str | None = None,
    export_timestamp_format: str | None = None,
    default_navigation_order: int | None = None,
) -> PanelConfig:
    """Update the global configuration by merging overrides.

    Only non-None values are applied. Returns the new global config.

    Example::

        configure(on_missing_policy="raise", export_dir="var/exports")
    """
    global _global_config
    _global_config = _global_config.merge(
        on_missing_policy=on_missing_policy,
        log_action_decisions=log_action_decisions,
        export_dir=export_dir,
        export_timestamp_format=export_timestamp_format,
        default_navigation_order=default_navigation_order,
    )
    return _global_config


def _set_global_config(cfg: PanelConfig) -> None:
    """Replace global config with an exact snapshot. For testing only."""
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    """Reset global config to defaults. For testing only."""
    global _global_config
    _global_config = PanelConfig()
