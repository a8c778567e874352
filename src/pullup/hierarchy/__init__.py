from .navigator import HierarchyNavigator
from .types import TypeSystem

__all__ = ["HierarchyNavigator", "TypeSystem"]
