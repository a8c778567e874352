from __future__ import annotations

import logging

from returns.result import Failure, Result, Success

from ..adjust.types import TypeUnifier
from ..adjust.visibility import VisibilityResolver
from ..errors import RefactoringError, SignatureConflict, UnresolvableType
from ..hierarchy.navigator import HierarchyNavigator
from ..hierarchy.types import TypeSystem
from ..model.nodes import ClassNode, FieldNode
from ..report import MigrationReport

logger = logging.getLogger(__name__)


class FieldMigrator:
    """
    Promotes fields to an ancestor.

    Each field is validated on its own, so one field failing leaves the others
    free to move.
    """

    def __init__(
        self,
        navigator: HierarchyNavigator,
        types: TypeSystem,
        unifier: TypeUnifier,
        visibility: VisibilityResolver,
    ):
        self.navigator = navigator
        self.graph = navigator.graph
        self.types = types
        self.unifier = unifier
        self.visibility = visibility

    def check(self, fld: FieldNode, destination: ClassNode) -> Result[FieldNode, RefactoringError]:
        if destination.find_field(fld.name) is not None:
            return Failure(
                SignatureConflict(
                    f"{destination.qualified_name} already declares a field named {fld.name}"
                )
            )
        if not self.types.is_resolvable(fld.type_name):
            return Failure(UnresolvableType(fld.type_name, f"field {fld.describe()}"))
        return Success(fld)

    def _unified_type(self, fld: FieldNode, destination: ClassNode, report: MigrationReport) -> str:
        others = [
            twin.type_name
            for cls in self.navigator.descendants_of(destination)
            if (twin := cls.find_field(fld.name)) is not None and twin is not fld
        ]
        unification = self.unifier.unify(fld.type_name, others)
        for skipped in unification.incompatible:
            report.warn(
                f"Field {fld.describe()} of type {fld.type_name} cannot be unified with "
                f"{skipped}; keeping {fld.type_name}"
            )
        if unification.fell_back_to_top:
            report.warn(
                f"Field {fld.describe()} widened to {unification.type_name}: "
                "no common supertype of its declarations exists"
            )
        return unification.type_name

    def migrate(
        self,
        fld: FieldNode,
        origin: ClassNode,
        destination: ClassNode,
        report: MigrationReport,
    ) -> Result[FieldNode, RefactoringError]:
        """Move `fld` from its owner to `destination`, returning the promoted copy."""
        checked = self.check(fld, destination)
        if isinstance(checked, Failure):
            return checked

        owner = self.graph.owner_of(fld) or origin
        promoted = fld.clone()
        promoted.visibility = self.visibility.resolve_field(fld, origin, destination)
        promoted.type_name = self._unified_type(fld, destination, report)

        destination.add_field(promoted)
        owner.remove_field(fld)
        report.touch(destination, owner)
        report.moved_fields.append(promoted)
        logger.info(
            "Moved field %s.%s to %s as %s %s",
            owner.qualified_name,
            fld.name,
            destination.qualified_name,
            promoted.visibility.value,
            promoted.type_name,
        )

        for between in self.navigator.path_between(origin, destination):
            shadow = between.find_field(fld.name)
            if shadow is not None:
                between.remove_field(shadow)
                report.touch(between)
                logger.info("Removed shadowing field %s.%s", between.qualified_name, fld.name)
        return Success(promoted)


__all__ = ["FieldMigrator"]
