"""
Finds the members a method body or field initializer needs to take along.

A reference declared on the origin class, or on a class strictly between the
origin and the destination, would be invisible from the destination once the
code moves, so it must travel too. Anything owned by the destination, by its
ancestors, or by unrelated classes is already visible and is ignored.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..model.body import FieldAccess, MethodCall, Name, Node, NodeVisitor
from ..model.nodes import ClassNode, FieldNode, Member, MethodNode, Visibility
from .resolution import MemberResolver, Scope

logger = logging.getLogger(__name__)


class DependencyKind(enum.Enum):
    ORIGIN = "origin"
    INTERMEDIATE = "intermediate"
    IRRELEVANT = "irrelevant"


@dataclass(frozen=True, eq=False)
class DependencyFinding:
    """
    A member referenced from code under migration.

    Attributes:
        member: The referenced method or field declaration.
        kind: Where the member lives relative to origin and destination.
        issue: Informational note, set for private members.
    """

    member: Member
    kind: DependencyKind
    issue: str | None = None

    @property
    def is_relevant(self) -> bool:
        return self.kind is not DependencyKind.IRRELEVANT


@dataclass
class DependencyReport:
    findings: list[DependencyFinding] = field(default_factory=list)

    def _relevant(self) -> list[DependencyFinding]:
        return [f for f in self.findings if f.is_relevant]

    @property
    def fields(self) -> list[FieldNode]:
        return [f.member for f in self._relevant() if isinstance(f.member, FieldNode)]

    @property
    def methods(self) -> list[MethodNode]:
        return [f.member for f in self._relevant() if isinstance(f.member, MethodNode)]

    @property
    def issues(self) -> list[str]:
        return [f.issue for f in self._relevant() if f.issue]

    def __contains__(self, member: object) -> bool:
        return any(f.member is member for f in self.findings)


class _ReferenceCollector(NodeVisitor):
    def __init__(self, resolver: MemberResolver, scope: Scope):
        self.resolver = resolver
        self.scope = scope
        self.members: list[Member] = []

    def _record(self, member: Member | None) -> None:
        if member is not None and all(m is not member for m in self.members):
            self.members.append(member)

    def visit_name(self, node: Name) -> None:
        self._record(self.resolver.resolve_name(node, self.scope))

    def visit_field_access(self, node: FieldAccess) -> None:
        self._record(self.resolver.resolve_field_access(node, self.scope))
        self.generic_visit(node)

    def visit_method_call(self, node: MethodCall) -> None:
        self._record(self.resolver.resolve_call(node, self.scope))
        self.generic_visit(node)


class DependencyAnalyzer:
    def __init__(self, resolver: MemberResolver):
        self.resolver = resolver
        self.navigator = resolver.navigator
        self.graph = resolver.graph

    def classify(self, member: Member, origin: ClassNode, destination: ClassNode) -> DependencyKind:
        if member.owner == origin.qualified_name:
            return DependencyKind.ORIGIN
        between = self.navigator.path_between(origin, destination)
        if any(node.qualified_name == member.owner for node in between):
            return DependencyKind.INTERMEDIATE
        return DependencyKind.IRRELEVANT

    def _analyze(
        self,
        nodes: Iterable[Node],
        scope: Scope,
        origin: ClassNode,
        destination: ClassNode,
        exclude: Member | None,
    ) -> DependencyReport:
        collector = _ReferenceCollector(self.resolver, scope)
        collector.visit_all(nodes)
        report = DependencyReport()
        for member in collector.members:
            if member is exclude:
                continue
            kind = self.classify(member, origin, destination)
            issue = None
            if kind is not DependencyKind.IRRELEVANT and member.visibility is Visibility.PRIVATE:
                issue = f"{member.describe()} is private and will be widened"
            logger.debug("Dependency %s classified as %s", member.describe(), kind.value)
            report.findings.append(DependencyFinding(member, kind, issue))
        return report

    def analyze_method(
        self, method: MethodNode, origin: ClassNode, destination: ClassNode
    ) -> DependencyReport:
        """
        Members `method` references that must travel to `destination`.

        The body is resolved in the scope of the class that currently declares
        it, which for a dependent method may be an intermediate class.
        """
        home = self.graph.owner_of(method) or origin
        scope = Scope.of_method(method, home)
        return self._analyze(method.body or [], scope, origin, destination, exclude=method)

    def analyze_field(
        self, fld: FieldNode, origin: ClassNode, destination: ClassNode
    ) -> DependencyReport:
        if fld.initializer is None:
            return DependencyReport()
        home = self.graph.owner_of(fld) or origin
        return self._analyze([fld.initializer], Scope.of_class(home), origin, destination, fld)


__all__ = ["DependencyAnalyzer", "DependencyFinding", "DependencyKind", "DependencyReport"]
