"""
Entry point of the refactoring engine.

Every request runs its hard gates first: class, member and destination
resolution, the conflict check, and type resolvability. Each gate returns a
`returns` container, and the first `Failure` ends the request before anything
in the graph changes. Past the gates, the migration engines mutate the graph in
place; an unexpected exception there is logged and reported as a failed
result, and no in-memory rollback is attempted.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Sequence
from pathlib import Path

from returns.result import Failure, Result, Success

from .analysis.conflicts import ConflictOutcome
from .app import config
from .errors import (
    DuplicateMethod,
    FieldNotFound,
    MethodNotFound,
    NotAnAncestor,
    RefactoringError,
    UnresolvableType,
)
from .migration.methods import MethodMigrator
from .migration.plan import MigrationPlan
from .model.graph import ClassGraph
from .model.nodes import ClassNode, FieldNode, Member, MethodNode
from .models import RefactoringOptions, RefactoringResult
from .snapshot import SnapshotStore
from .store.documents import ClassDocumentStore

logger = logging.getLogger(__name__)


def find_method(
    cls: ClassNode,
    name: str,
    parameter_types: Sequence[str] | None = None,
    same_type: Callable[[str, str], bool] = operator.eq,
) -> Result[MethodNode, RefactoringError]:
    candidates = cls.methods_named(name)
    if parameter_types is not None:
        wanted = list(parameter_types)
        candidates = [
            m
            for m in candidates
            if len(m.parameter_types) == len(wanted)
            and all(same_type(have, want) for have, want in zip(m.parameter_types, wanted))
        ]
    match candidates:
        case [method]:
            return Success(method)
        case []:
            return Failure(MethodNotFound(cls.qualified_name, name))
        case _:
            overloads = ", ".join(m.describe() for m in candidates)
            return Failure(
                MethodNotFound(
                    cls.qualified_name,
                    name,
                    f"{name} is overloaded in {cls.qualified_name} ({overloads}); "
                    "name the parameter types",
                )
            )


def find_field(cls: ClassNode, name: str) -> Result[FieldNode, RefactoringError]:
    found = cls.find_field(name)
    return Success(found) if found is not None else Failure(FieldNotFound(cls.qualified_name, name))


def resolve_destination(
    migrator: MethodMigrator, origin: ClassNode, destination: str | None
) -> Result[ClassNode, RefactoringError]:
    """The named ancestor of `origin`, or its direct supertype when none is named."""
    navigator = migrator.navigator
    if destination is None:
        parent = navigator.default_destination(origin)
        if parent is None:
            return Failure(
                NotAnAncestor(
                    origin.supertype or config.UNIVERSAL_TOP_TYPE,
                    origin.qualified_name,
                    f"{origin.qualified_name} has no supertype among the loaded classes",
                )
            )
        return Success(parent)

    def _check(candidate: ClassNode) -> Result[ClassNode, RefactoringError]:
        if navigator.is_ancestor(candidate, origin):
            return Success(candidate)
        return Failure(NotAnAncestor(candidate.qualified_name, origin.qualified_name))

    return migrator.graph.find(destination).bind(_check)


def check_signature_types(
    migrator: MethodMigrator, methods: Sequence[MethodNode]
) -> Result[None, RefactoringError]:
    for method in methods:
        for type_name in (method.return_type, *method.parameter_types):
            if not migrator.types.is_resolvable(type_name):
                return Failure(UnresolvableType(type_name, method.describe()))
    return Success(None)


class RefactoringOrchestrator:
    def __init__(self, options: RefactoringOptions | None = None):
        self.options = options or RefactoringOptions()

    # --- Gates ---

    def _plan(
        self,
        migrator: MethodMigrator,
        origin_name: str,
        find_member: Callable[[ClassNode], Result[Member, RefactoringError]],
        destination_name: str | None,
    ) -> Result[MigrationPlan, RefactoringError]:
        origin = migrator.graph.find(origin_name)
        if isinstance(origin, Failure):
            return origin
        member = find_member(origin.unwrap())
        if isinstance(member, Failure):
            return member
        return resolve_destination(migrator, origin.unwrap(), destination_name).map(
            lambda destination: MigrationPlan(member.unwrap(), origin.unwrap(), destination)
        )

    def _check_dependents(
        self, migrator: MethodMigrator, plan: MigrationPlan
    ) -> Result[MigrationPlan, RefactoringError]:
        closure = migrator.dependency_closure(plan.member, plan.origin, plan.destination)
        methods = [f.member for f in closure if isinstance(f.member, MethodNode)]
        if isinstance(plan.member, MethodNode):
            methods.insert(0, plan.member)
        return check_signature_types(migrator, methods).map(lambda _: plan)

    def plan_method(
        self,
        migrator: MethodMigrator,
        origin: str,
        method: str,
        destination: str | None = None,
        parameter_types: Sequence[str] | None = None,
    ) -> Result[MigrationPlan, RefactoringError]:
        """Run every method gate that does not depend on the conflict outcome."""
        return self._plan(
            migrator,
            origin,
            lambda cls: find_method(cls, method, parameter_types, migrator.types.same_type),
            destination,
        ).bind(lambda plan: self._check_dependents(migrator, plan))

    def plan_field(
        self,
        migrator: MethodMigrator,
        origin: str,
        field: str,
        destination: str | None = None,
    ) -> Result[MigrationPlan, RefactoringError]:
        return (
            self._plan(migrator, origin, lambda cls: find_field(cls, field), destination)
            .bind(
                lambda plan: migrator.fields.check(plan.member, plan.destination).map(
                    lambda _: plan
                )
            )
            .bind(lambda plan: self._check_dependents(migrator, plan))
        )

    # --- Operations ---

    def pull_up_method(
        self,
        graph: ClassGraph,
        origin: str,
        method: str,
        destination: str | None = None,
        parameter_types: Sequence[str] | None = None,
    ) -> RefactoringResult:
        """Move `origin.method` to `destination` (default: the direct supertype)."""
        migrator = MethodMigrator(graph, self.options)
        planned = self.plan_method(migrator, origin, method, destination, parameter_types)
        if isinstance(planned, Failure):
            return self._rejected(planned.failure())
        plan = planned.unwrap()

        conflict = migrator.checker.gate(plan.member, plan.destination)
        if isinstance(conflict, Failure):
            return self._rejected(conflict.failure())
        if conflict.unwrap().outcome is ConflictOutcome.DUPLICATE:
            duplicate = DuplicateMethod(conflict.unwrap().message)
            if self.options.fail_on_duplicate:
                return self._rejected(duplicate)
            plan.report.warn(str(duplicate))
            return RefactoringResult.succeeded(
                f"{plan.member.describe()} already exists in {plan.destination.qualified_name}",
                plan.report,
            )

        prepared = migrator.prepare(plan)
        if isinstance(prepared, Failure):
            return self._rejected(prepared.failure(), plan.warnings)

        try:
            migrator.commit(plan)
        except Exception as e:
            return self._crashed(plan, e)
        return RefactoringResult.succeeded(
            f"Pulled up {method} from {plan.origin.qualified_name} to "
            f"{plan.destination.qualified_name}",
            plan.report,
        )

    def pull_up_field(
        self,
        graph: ClassGraph,
        origin: str,
        field: str,
        destination: str | None = None,
    ) -> RefactoringResult:
        migrator = MethodMigrator(graph, self.options)
        planned = self.plan_field(migrator, origin, field, destination)
        if isinstance(planned, Failure):
            return self._rejected(planned.failure())
        plan = planned.unwrap()

        try:
            moved = migrator.migrate_field(plan)
        except Exception as e:
            return self._crashed(plan, e)
        if isinstance(moved, Failure):
            return self._rejected(moved.failure(), plan.warnings)
        return RefactoringResult.succeeded(
            f"Pulled up field {field} from {plan.origin.qualified_name} to "
            f"{plan.destination.qualified_name}",
            plan.report,
        )

    def run(
        self,
        roots: Sequence[Path],
        origin: str,
        member: str,
        destination: str | None = None,
        *,
        field: bool = False,
        parameter_types: Sequence[str] | None = None,
    ) -> RefactoringResult:
        """Load the documents under `roots`, migrate, snapshot, and write back."""
        store = ClassDocumentStore(roots)
        loaded = store.load()
        if isinstance(loaded, Failure):
            return self._rejected(loaded.failure())
        graph = loaded.unwrap()

        if field:
            result = self.pull_up_field(graph, origin, member, destination)
        else:
            result = self.pull_up_method(graph, origin, member, destination, parameter_types)
        if not result.success or not result.touched_classes:
            return result

        touched = [node for name in result.touched_classes if (node := graph.get(name))]
        files = store.files_for(touched)
        if self.options.dry_run:
            return result.model_copy(
                update={
                    "message": f"Dry run: {result.message}",
                    "modified_files": [str(path) for path in files],
                }
            )

        if self.options.snapshot:
            saved = SnapshotStore.for_roots(roots).save(files)
            if isinstance(saved, Failure):
                return RefactoringResult.failed(
                    f"Snapshot failed, nothing was written: {saved.failure()}", result.warnings
                )

        match store.write(graph, touched):
            case Success(paths):
                return result.model_copy(update={"modified_files": [str(p) for p in paths]})
            case Failure(error):
                return RefactoringResult.failed(str(error), result.warnings)
        return result

    def restore(self, roots: Sequence[Path]) -> Result[list[Path], str]:
        return SnapshotStore.for_roots(roots).restore()

    # --- Outcomes ---

    def _rejected(self, error: RefactoringError, warnings: Sequence[str] = ()) -> RefactoringResult:
        logger.warning("Refactoring rejected: %s", error)
        return RefactoringResult.failed(str(error), warnings)

    def _crashed(self, plan: MigrationPlan, error: Exception) -> RefactoringResult:
        logger.error("Migration of %s failed", plan.describe(), exc_info=True)
        return RefactoringResult.failed(
            f"Migration of {plan.describe()} failed: {error}", plan.warnings
        )


__all__ = [
    "RefactoringOrchestrator",
    "check_signature_types",
    "find_field",
    "find_method",
    "resolve_destination",
]
