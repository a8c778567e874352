from __future__ import annotations

import logging
from collections import deque

from ..model.graph import ClassGraph
from ..model.nodes import ClassNode

logger = logging.getLogger(__name__)


class HierarchyNavigator:
    """
    Ancestor, descendant and path queries over a class graph.

    All queries are pure reads. Chains stop at the universal top, at the first
    supertype that is not part of the graph, and at a class already visited,
    so a malformed cyclic chain terminates.
    """

    def __init__(self, graph: ClassGraph):
        self.graph = graph

    def supertype_of(self, cls: ClassNode) -> ClassNode | None:
        return self.graph.supertype_of(cls)

    def ancestors_of(self, cls: ClassNode) -> list[ClassNode]:
        """Ancestors from nearest to farthest, excluding the universal top."""
        chain: list[ClassNode] = []
        seen = {cls.qualified_name}
        current = self.graph.supertype_of(cls)
        while current is not None and current.qualified_name not in seen:
            chain.append(current)
            seen.add(current.qualified_name)
            current = self.graph.supertype_of(current)
        return chain

    def direct_subclasses_of(self, cls: ClassNode) -> list[ClassNode]:
        return self.graph.direct_subclasses_of(cls)

    def descendants_of(self, cls: ClassNode) -> list[ClassNode]:
        """Every transitive subclass, parents before children, siblings in graph order."""
        found: list[ClassNode] = []
        seen = {cls.qualified_name}
        queue = deque([cls])
        while queue:
            for child in self.graph.direct_subclasses_of(queue.popleft()):
                if child.qualified_name in seen:
                    continue
                seen.add(child.qualified_name)
                found.append(child)
                queue.append(child)
        return found

    def is_ancestor(self, ancestor: ClassNode, descendant: ClassNode) -> bool:
        return any(node is ancestor for node in self.ancestors_of(descendant))

    def path_between(self, descendant: ClassNode, ancestor: ClassNode) -> list[ClassNode]:
        """
        Classes strictly between `descendant` and `ancestor`, nearest first.

        Empty both when `ancestor` is the direct supertype and when it is not an
        ancestor at all; callers tell the two apart with `is_ancestor`.
        """
        between: list[ClassNode] = []
        for node in self.ancestors_of(descendant):
            if node is ancestor:
                return between
            between.append(node)
        return []

    def default_destination(self, cls: ClassNode) -> ClassNode | None:
        return self.graph.supertype_of(cls)


__all__ = ["HierarchyNavigator"]
