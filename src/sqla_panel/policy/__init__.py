"""Policy engine: per-resource authorization predicates."""

from sqla_panel.policy._base import (
    AllowAllPolicy,
    DenyAllPolicy,
    PermissionPolicy,
    Policy,
    PredicatePolicy,
)
from sqla_panel.policy._predicate import (
    Predicate,
    always_allow,
    always_deny,
    has_permission,
    is_authenticated,
    predicate,
)

__all__ = [
    "AllowAllPolicy",
    "DenyAllPolicy",
    "PermissionPolicy",
    "Policy",
    "Predicate",
    "PredicatePolicy",
    "always_allow",
    "always_deny",
    "has_permission",
    "is_authenticated",
    "predicate",
]
