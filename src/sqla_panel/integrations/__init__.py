"""Transport integrations for sqla-panel."""
