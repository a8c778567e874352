"""
Least-upper-bound visibility across every declaration of one logical method.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..analysis.conflicts import ConflictChecker
from ..hierarchy.navigator import HierarchyNavigator
from ..model.nodes import ClassNode, FieldNode, MethodNode, Visibility
from ..report import MigrationReport

logger = logging.getLogger(__name__)


def is_cross_module(origin: ClassNode, destination: ClassNode) -> bool:
    """True when both classes name a packaging unit and the units differ."""
    return (
        origin.module is not None
        and destination.module is not None
        and origin.module != destination.module
    )


def resolve_level(levels: Iterable[Visibility], cross_module: bool = False) -> Visibility:
    """
    Join `levels`, then floor the result.

    Private and package-private cannot survive a move across a class boundary,
    so the floor is protected, or public when the move crosses packaging units.
    """
    floor = Visibility.PUBLIC if cross_module else Visibility.PROTECTED
    return max(Visibility.join(levels), floor)


@dataclass(frozen=True)
class VisibilityDecision:
    level: Visibility
    counterparts: tuple[MethodNode, ...] = ()
    cross_module: bool = False


class VisibilityResolver:
    def __init__(self, navigator: HierarchyNavigator, checker: ConflictChecker):
        self.navigator = navigator
        self.checker = checker

    def counterparts(self, method: MethodNode, destination: ClassNode) -> list[MethodNode]:
        """Same-signature declarations across every descendant of `destination`."""
        found: list[MethodNode] = []
        for cls in self.navigator.descendants_of(destination):
            twin = self.checker.find_same_signature(method, cls)
            if twin is not None and twin is not method:
                found.append(twin)
        return found

    def ancestor_declarations(self, method: MethodNode, destination: ClassNode) -> list[MethodNode]:
        """Same-signature declarations the new destination declaration would override."""
        found: list[MethodNode] = []
        for cls in self.navigator.ancestors_of(destination):
            twin = self.checker.find_same_signature(method, cls)
            if twin is not None and twin.visibility is not Visibility.PRIVATE:
                found.append(twin)
        return found

    def decide(
        self, candidate: MethodNode, origin: ClassNode, destination: ClassNode
    ) -> VisibilityDecision:
        counterparts = self.counterparts(candidate, destination)
        bounds = self.ancestor_declarations(candidate, destination)
        cross = is_cross_module(origin, destination)
        levels = [candidate.visibility, *(m.visibility for m in counterparts + bounds)]
        level = resolve_level(levels, cross)
        logger.debug(
            "Visibility for %s resolved to %s from %s",
            candidate.name,
            level.value,
            [v.value for v in levels],
        )
        return VisibilityDecision(level, tuple(counterparts), cross)

    def apply(
        self,
        decision: VisibilityDecision,
        declaration: MethodNode,
        report: MigrationReport,
    ) -> None:
        """Give the declaration and every descendant override the resolved level."""
        declaration.visibility = decision.level
        graph = self.navigator.graph
        for override in decision.counterparts:
            owner = graph.owner_of(override)
            if override.visibility != decision.level:
                logger.info(
                    "Widening %s from %s to %s",
                    override.describe(),
                    override.visibility.value,
                    decision.level.value,
                )
                override.visibility = decision.level
                if owner is not None:
                    report.mark_visibility_changed(owner)
            if not override.is_override:
                override.is_override = True
                if owner is not None:
                    report.touch(owner)

    def resolve_field(self, fld: FieldNode, origin: ClassNode, destination: ClassNode) -> Visibility:
        return resolve_level([fld.visibility], is_cross_module(origin, destination))


__all__ = [
    "VisibilityDecision",
    "VisibilityResolver",
    "is_cross_module",
    "resolve_level",
]
