"""
Arena storage for the class hierarchy.

Every ClassNode lives in one dictionary keyed by qualified name. Supertype
links are names looked up through the graph, never object references, so the
structure holds no cycles of Python references however the hierarchy is
shaped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from returns.result import Failure, Result, Success

from ..app import config
from ..errors import ClassNotFound
from .nodes import ClassNode, Member

logger = logging.getLogger(__name__)


class ClassGraph:
    """An indexed store of every class taking part in a refactoring."""

    def __init__(self, classes: Iterable[ClassNode] = (), external_types: Iterable[str] = ()):
        self._classes: dict[str, ClassNode] = {}
        self.external_types: set[str] = set(external_types)
        for node in classes:
            self.add(node)

    def __iter__(self) -> Iterator[ClassNode]:
        return iter(self._classes.values())

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self._classes

    def add(self, node: ClassNode) -> ClassNode:
        if node.qualified_name in self._classes:
            raise ValueError(f"Duplicate class: {node.qualified_name}")
        self._classes[node.qualified_name] = node
        return node

    def get(self, qualified_name: str) -> ClassNode | None:
        return self._classes.get(qualified_name)

    def lookup(self, name: str) -> ClassNode | None:
        """Resolve a qualified name, or a simple name when it is unambiguous."""
        if name in self._classes:
            return self._classes[name]
        matches = [node for node in self if node.simple_name == name]
        return matches[0] if len(matches) == 1 else None

    def find(self, name: str) -> Result[ClassNode, ClassNotFound]:
        """Like `lookup`, but explains why resolution failed."""
        if name in self._classes:
            return Success(self._classes[name])
        matches = [node for node in self if node.simple_name == name]
        match matches:
            case [node]:
                return Success(node)
            case []:
                return Failure(ClassNotFound(name))
            case _:
                candidates = ", ".join(node.qualified_name for node in matches)
                return Failure(
                    ClassNotFound(name, f"Class name {name} is ambiguous: {candidates}")
                )

    def supertype_of(self, node: ClassNode) -> ClassNode | None:
        """The direct supertype when it is part of the graph."""
        if node.supertype is None or node.supertype in config.TOP_TYPE_ALIASES:
            return None
        return self.lookup(node.supertype)

    def direct_subclasses_of(self, node: ClassNode) -> list[ClassNode]:
        return [candidate for candidate in self if self.supertype_of(candidate) is node]

    def owner_of(self, member: Member) -> ClassNode | None:
        return self.get(member.owner) if member.owner else None

    def validate(self) -> list[str]:
        """Report structural problems; an empty list means the graph is well formed."""
        problems: list[str] = []
        for node in self:
            seen = {node.qualified_name}
            current = self.supertype_of(node)
            while current is not None:
                if current.qualified_name in seen:
                    problems.append(f"Inheritance cycle through {node.qualified_name}")
                    break
                seen.add(current.qualified_name)
                current = self.supertype_of(current)

            signatures = [m.signature for m in node.methods]
            if len(signatures) != len(set(signatures)):
                problems.append(f"{node.qualified_name} declares a signature twice")

            if not node.is_abstract and node.abstract_methods():
                names = ", ".join(m.describe() for m in node.abstract_methods())
                problems.append(f"Concrete class {node.qualified_name} declares abstract {names}")

        for problem in problems:
            logger.debug("Graph validation: %s", problem)
        return problems


__all__ = ["ClassGraph"]
