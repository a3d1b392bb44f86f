"""Configuration module for sqla-panel."""

from __future__ import annotations

from sqla_panel.config._config import PanelConfig, configure, get_global_config

__all__ = ["PanelConfig", "configure", "get_global_config"]
