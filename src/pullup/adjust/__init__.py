from .types import TypeUnifier, Unification
from .visibility import VisibilityDecision, VisibilityResolver, is_cross_module, resolve_level

__all__ = [
    "TypeUnifier",
    "Unification",
    "VisibilityDecision",
    "VisibilityResolver",
    "is_cross_module",
    "resolve_level",
]
