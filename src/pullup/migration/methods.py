"""
Pulls a method, and the members it depends on, up to an ancestor.

`prepare` works on a detached clone and never touches the graph, so any
failure it reports leaves the hierarchy exactly as it was. `commit` applies the
plan; problems from that point on become warnings on the report, and edits
already applied stay applied.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from returns.result import Failure, Result, Success

from ..adjust.types import TypeUnifier, Unification
from ..adjust.visibility import VisibilityResolver
from ..analysis.conflicts import ConflictChecker
from ..analysis.dependencies import DependencyAnalyzer, DependencyFinding
from ..analysis.resolution import MemberResolver
from ..app import config
from ..errors import RefactoringError, SignatureConflict
from ..hierarchy.navigator import HierarchyNavigator
from ..hierarchy.types import TypeSystem
from ..model.body import ExprStmt, Return
from ..model.graph import ClassGraph
from ..model.nodes import ClassNode, FieldNode, Member, MethodNode
from ..models import RefactoringOptions
from ..report import MigrationReport
from .fields import FieldMigrator
from .plan import MigrationPlan
from .rewriter import CallSiteRewriter, SuperCallSite, forwarding_call
from .stubs import StubSynthesizer

logger = logging.getLogger(__name__)


class MethodMigrator:
    """Wires the analysis and adjustment components together over one graph."""

    def __init__(self, graph: ClassGraph, options: RefactoringOptions | None = None):
        self.graph = graph
        self.options = options or RefactoringOptions()
        self.navigator = HierarchyNavigator(graph)
        self.types = TypeSystem(graph, self.navigator)
        self.resolver = MemberResolver(graph, self.navigator, self.types)
        self.analyzer = DependencyAnalyzer(self.resolver)
        self.checker = ConflictChecker(self.types)
        self.visibility = VisibilityResolver(self.navigator, self.checker)
        self.unifier = TypeUnifier(self.types)
        self.rewriter = CallSiteRewriter(self.resolver)
        self.fields = FieldMigrator(self.navigator, self.types, self.unifier, self.visibility)
        self.stubs = StubSynthesizer(self.navigator, self.checker, self.options)

    # --- Analysis (pure) ---

    def dependency_closure(
        self, member: Member, origin: ClassNode, destination: ClassNode
    ) -> list[DependencyFinding]:
        """
        Every origin or intermediate member reachable from `member`, in discovery order.

        Method bodies and field initializers of found members are searched in
        turn. Each member appears once however many paths reach it.
        """
        closure: list[DependencyFinding] = []
        seen: list[Member] = [member]

        def visit(current: Member) -> None:
            if isinstance(current, MethodNode):
                report = self.analyzer.analyze_method(current, origin, destination)
            else:
                report = self.analyzer.analyze_field(current, origin, destination)
            for finding in report.findings:
                if not finding.is_relevant or any(s is finding.member for s in seen):
                    continue
                seen.append(finding.member)
                closure.append(finding)
                visit(finding.member)

        visit(member)
        return closure

    def unify_return_type(
        self, method: MethodNode, counterparts: Iterable[MethodNode], report: MigrationReport
    ) -> Unification:
        others = [m.return_type for m in counterparts if m is not method]
        unification = self.unifier.unify(method.return_type, others)
        for skipped in unification.incompatible:
            report.warn(
                f"Return type {skipped} of a counterpart cannot be unified with "
                f"{method.return_type} for {method.name}; keeping {method.return_type}"
            )
        if unification.fell_back_to_top:
            report.warn(
                f"Return type of {method.name} widened to {unification.type_name}: "
                "its declarations share no closer supertype"
            )
        return unification

    def _check_overridden(
        self, method: MethodNode, return_type: str, destination: ClassNode
    ) -> Result[None, RefactoringError]:
        for overridden in self.visibility.ancestor_declarations(method, destination):
            if not self.types.is_subtype(return_type, overridden.return_type):
                return Failure(
                    SignatureConflict(
                        f"{method.name} would return {return_type} in "
                        f"{destination.qualified_name}, which does not override "
                        f"{overridden.describe()} returning {overridden.return_type}"
                    )
                )
        return Success(None)

    # --- Steps 1-3 ---

    def prepare(self, plan: MigrationPlan) -> Result[MigrationPlan, RefactoringError]:
        """Build the detached destination declaration for a method plan."""
        method = plan.member
        if not isinstance(method, MethodNode):
            return Failure(RefactoringError(f"{method.describe()} is not a method"))

        prepared = method.clone()
        decision = self.visibility.decide(method, plan.origin, plan.destination)
        prepared.visibility = decision.level
        unification = self.unify_return_type(method, decision.counterparts, plan.report)
        prepared.return_type = unification.type_name

        checked = self._check_overridden(method, prepared.return_type, plan.destination)
        if isinstance(checked, Failure):
            return checked
        if self.visibility.ancestor_declarations(method, plan.destination):
            prepared.is_override = True

        plan.prepared = prepared
        plan.decision = decision
        logger.debug(
            "Prepared %s as %s %s", plan.describe(), prepared.visibility.value, prepared.return_type
        )
        return Success(plan)

    # --- Steps 4-9 ---

    def commit(self, plan: MigrationPlan) -> MigrationReport:
        method, origin, destination = plan.member, plan.origin, plan.destination
        prepared, report = plan.prepared, plan.report
        if not isinstance(method, MethodNode) or prepared is None or plan.decision is None:
            raise ValueError(f"Plan {plan.describe()} has not been prepared")

        closure = self.dependency_closure(method, origin, destination)

        if self.options.downcast_self_arguments:
            scan = self.rewriter.scan(prepared, origin)
            self.rewriter.downcast_self_arguments(scan, origin, destination)

        destination.add_method(prepared)
        self.visibility.apply(plan.decision, prepared, report)
        report.touch(destination)
        if prepared.is_abstract:
            self._require_abstract(destination, report)
            report.introduced_abstract.append(prepared)
        logger.info("Added %s to %s", prepared.name, destination.qualified_name)

        self.carry_dependencies(closure, origin, destination, report)
        self.finish(destination, report)

        origin.remove_method(method)
        report.touch(origin)
        logger.info("Removed %s from %s", method.name, origin.qualified_name)
        return report

    def migrate_field(self, plan: MigrationPlan) -> Result[MigrationReport, RefactoringError]:
        """Promote a single field together with whatever its initializer needs."""
        fld, origin, destination, report = plan.member, plan.origin, plan.destination, plan.report
        if not isinstance(fld, FieldNode):
            return Failure(RefactoringError(f"{fld.describe()} is not a field"))
        closure = self.dependency_closure(fld, origin, destination)
        moved = self.fields.migrate(fld, origin, destination, report)
        if isinstance(moved, Failure):
            return moved
        self.carry_dependencies(closure, origin, destination, report)
        self.finish(destination, report)
        return Success(report)

    def carry_dependencies(
        self,
        closure: Iterable[DependencyFinding],
        origin: ClassNode,
        destination: ClassNode,
        report: MigrationReport,
    ) -> None:
        for finding in closure:
            if finding.issue:
                logger.info("%s", finding.issue)
            match finding.member:
                case FieldNode() as fld:
                    moved = self.fields.migrate(fld, origin, destination, report)
                    if isinstance(moved, Failure):
                        report.warn(f"Field {fld.describe()} was not moved: {moved.failure()}")
                case MethodNode() as dependent:
                    self.abstract_dependency(dependent, origin, destination, report)

    def finish(self, destination: ClassNode, report: MigrationReport) -> None:
        # Forwarders must exist before stubs are placed, or stubs would shadow them.
        if self.options.repair_super_calls:
            self.repair_super_calls(destination, report)
        if self.options.synthesize_stubs:
            self.stubs.synthesize(report.introduced_abstract, destination, report)
        self.settle_abstract_flag(destination, report)

    def _require_abstract(self, destination: ClassNode, report: MigrationReport) -> None:
        if not destination.is_abstract:
            destination.is_abstract = True
            report.touch(destination)
            report.warn(f"{destination.qualified_name} was made abstract")

    def abstract_dependency(
        self,
        dependent: MethodNode,
        origin: ClassNode,
        destination: ClassNode,
        report: MigrationReport,
    ) -> MethodNode | None:
        """
        Declare `dependent` abstractly on the destination; its body stays put as an override.

        Returns the new declaration, or None when the destination already
        declares the signature.
        """
        existing = self.checker.find_same_signature(dependent, destination)
        if existing is not None:
            owner = self.graph.owner_of(dependent)
            if not dependent.is_override:
                dependent.is_override = True
                if owner is not None:
                    report.touch(owner)
            if dependent.visibility < existing.visibility:
                dependent.visibility = existing.visibility
                if owner is not None:
                    report.mark_visibility_changed(owner)
            logger.debug("%s already declares %s", destination.qualified_name, dependent.name)
            return None

        declaration = MethodNode(
            name=dependent.name,
            parameters=list(dependent.parameters),
            return_type=dependent.return_type,
            visibility=dependent.visibility,
            is_abstract=True,
            body=None,
        )
        decision = self.visibility.decide(declaration, origin, destination)
        unification = self.unify_return_type(dependent, decision.counterparts, report)
        declaration.return_type = unification.type_name
        declaration.is_override = bool(self.visibility.ancestor_declarations(declaration, destination))

        self._require_abstract(destination, report)
        destination.add_method(declaration)
        self.visibility.apply(decision, declaration, report)
        report.introduced_abstract.append(declaration)
        report.touch(destination)
        logger.info(
            "Declared abstract %s %s on %s",
            declaration.return_type,
            declaration.name,
            destination.qualified_name,
        )
        return declaration

    # --- Step 7 ---

    def concrete_above(self, declaration: MethodNode, destination: ClassNode) -> MethodNode | None:
        for ancestor in self.navigator.ancestors_of(destination):
            twin = self.checker.find_same_signature(declaration, ancestor)
            if twin is not None and twin.is_concrete:
                return twin
        return None

    def _super_calls_landing_on(
        self, declaration: MethodNode, destination: ClassNode
    ) -> list[tuple[ClassNode, SuperCallSite]]:
        sites: list[tuple[ClassNode, SuperCallSite]] = []
        for counterpart in self.visibility.counterparts(declaration, destination):
            owner = self.graph.owner_of(counterpart)
            if owner is None or counterpart.body is None:
                continue
            scan = self.rewriter.scan(counterpart, owner)
            sites += [(owner, site) for site in self.rewriter.super_calls_to(scan, declaration)]
        return sites

    def repair_super_calls(self, destination: ClassNode, report: MigrationReport) -> None:
        """Fix `super` calls that would now reach a bodiless declaration."""
        for declaration in report.introduced_abstract:
            if not declaration.is_abstract:
                continue
            landing = self._super_calls_landing_on(declaration, destination)
            if not landing:
                continue

            inherited = self.concrete_above(declaration, destination)
            if inherited is not None:
                call = forwarding_call(declaration)
                declaration.body = [ExprStmt(call)] if declaration.returns_void else [Return(call)]
                declaration.is_abstract = False
                declaration.is_override = True
                report.warn(
                    f"{declaration.describe()} forwards to {inherited.describe()} so existing "
                    "super calls keep a concrete target"
                )
                continue

            marker = config.SUPER_CALL_REMOVED_MARKER.format(
                name=declaration.name, owner=destination.simple_name
            )
            removed, nested = self.rewriter.remove_super_calls([site for _, site in landing], marker)
            report.touch(*(owner for owner, _ in landing))
            if removed:
                report.warn(
                    f"Removed {removed} super call(s) to {declaration.describe()}: "
                    "no concrete implementation exists above it"
                )
            if nested:
                report.warn(
                    f"{nested} super call(s) to {declaration.describe()} are part of a larger "
                    "expression and were left in place"
                )

    # --- Step 8 ---

    def settle_abstract_flag(self, destination: ClassNode, report: MigrationReport) -> None:
        if not report.introduced_abstract or not destination.is_abstract:
            return
        if destination.abstract_methods():
            return
        destination.is_abstract = False
        report.touch(destination)
        logger.info("%s no longer declares abstract methods", destination.qualified_name)


__all__ = ["MethodMigrator"]
