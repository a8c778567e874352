from __future__ import annotations

import logging
from collections.abc import Sequence

from ..analysis.conflicts import ConflictChecker
from ..hierarchy.navigator import HierarchyNavigator
from ..model.body import Literal, New, Statement, Throw
from ..model.nodes import ClassNode, MethodNode
from ..models import RefactoringOptions
from ..report import MigrationReport

logger = logging.getLogger(__name__)


class StubSynthesizer:
    """Back-fills overrides so concrete descendants stay compilable under new abstract methods."""

    def __init__(
        self,
        navigator: HierarchyNavigator,
        checker: ConflictChecker,
        options: RefactoringOptions,
    ):
        self.navigator = navigator
        self.checker = checker
        self.options = options

    def inherits_implementation(
        self, cls: ClassNode, declaration: MethodNode, destination: ClassNode
    ) -> bool:
        """Whether `cls`, or a class between it and `destination`, has a concrete body."""
        for node in [cls, *self.navigator.path_between(cls, destination)]:
            twin = self.checker.find_same_signature(declaration, node)
            if twin is not None and twin.is_concrete:
                return True
        return False

    def stub_body(self, declaration: MethodNode) -> list[Statement]:
        if declaration.returns_void:
            return []
        message = Literal(f'"{self.options.stub_message}"')
        return [Throw(New(self.options.stub_exception_type, [message]))]

    def stub_for(self, declaration: MethodNode) -> MethodNode:
        return MethodNode(
            name=declaration.name,
            parameters=list(declaration.parameters),
            return_type=declaration.return_type,
            visibility=declaration.visibility,
            body=self.stub_body(declaration),
            is_override=True,
        )

    def synthesize(
        self,
        declarations: Sequence[MethodNode],
        destination: ClassNode,
        report: MigrationReport,
    ) -> list[MethodNode]:
        """
        Add stubs for `declarations` wherever a concrete descendant lacks one.

        Descendants are visited parents first, so a stub placed in a class also
        satisfies that class's own subclasses.
        """
        created: list[MethodNode] = []
        for cls in self.navigator.descendants_of(destination):
            if cls.is_abstract:
                continue
            for declaration in declarations:
                if not declaration.is_abstract:
                    continue
                if self.inherits_implementation(cls, declaration, destination):
                    continue
                if self.checker.find_same_signature(declaration, cls) is not None:
                    report.warn(
                        f"{cls.qualified_name} declares {declaration.name} without a body; "
                        "no stub added"
                    )
                    continue
                stub = cls.add_method(self.stub_for(declaration))
                created.append(stub)
                report.stubs.append(stub)
                report.touch(cls)
                report.warn(f"Synthesized stub {stub.describe()}")
        logger.debug("Synthesized %d stubs below %s", len(created), destination.qualified_name)
        return created


__all__ = ["StubSynthesizer"]
