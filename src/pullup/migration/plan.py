from __future__ import annotations

from dataclasses import dataclass, field

from ..adjust.visibility import VisibilityDecision
from ..model.nodes import ClassNode, Member, MethodNode
from ..report import MigrationReport


@dataclass
class MigrationPlan:
    """
    A member cleared by every gate, ready to move.

    Attributes:
        member: The declaration being pulled up, still owned by `origin`.
        origin: The class currently declaring `member`.
        destination: The ancestor `member` moves to.
        report: Warnings and touched classes accumulated by the run.
        prepared: Detached copy of a method with visibility and return type
            already resolved, built before anything in the graph changes.
        decision: Visibility chosen for the method and its overrides.
    """

    member: Member
    origin: ClassNode
    destination: ClassNode
    report: MigrationReport = field(default_factory=MigrationReport)
    prepared: MethodNode | None = None
    decision: VisibilityDecision | None = None

    @property
    def warnings(self) -> list[str]:
        return self.report.warnings

    def describe(self) -> str:
        return f"{self.member.describe()} -> {self.destination.qualified_name}"


__all__ = ["MigrationPlan"]
