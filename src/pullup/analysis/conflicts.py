from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from returns.result import Failure, Result, Success

from ..common.rendering import normalized_body
from ..errors import OverloadAmbiguity, RefactoringError, SignatureConflict
from ..hierarchy.types import TypeSystem
from ..model.nodes import ClassNode, MethodNode

logger = logging.getLogger(__name__)


class ConflictOutcome(enum.Enum):
    CLEAR = "clear"
    DUPLICATE = "duplicate"
    SIGNATURE_CONFLICT = "signature_conflict"
    OVERLOAD_AMBIGUITY = "overload_ambiguity"


@dataclass(frozen=True)
class ConflictCheck:
    outcome: ConflictOutcome
    message: str = ""
    existing: MethodNode | None = None

    @property
    def is_fatal(self) -> bool:
        return self.outcome in (ConflictOutcome.SIGNATURE_CONFLICT, ConflictOutcome.OVERLOAD_AMBIGUITY)


class ConflictChecker:
    """Detects collisions between a method and the destination's own declarations."""

    def __init__(self, types: TypeSystem):
        self.types = types

    def same_signature(self, a: MethodNode, b: MethodNode) -> bool:
        return (
            a.name == b.name
            and a.arity == b.arity
            and all(self.types.same_type(x, y) for x, y in zip(a.parameter_types, b.parameter_types))
        )

    def find_same_signature(self, method: MethodNode, cls: ClassNode) -> MethodNode | None:
        return next((m for m in cls.methods if self.same_signature(m, method)), None)

    def check(self, method: MethodNode, destination: ClassNode) -> ConflictCheck:
        same_name = destination.methods_named(method.name)
        if not same_name:
            return ConflictCheck(ConflictOutcome.CLEAR)

        exact = self.find_same_signature(method, destination)
        if exact is not None:
            if normalized_body(exact) == normalized_body(method):
                return ConflictCheck(
                    ConflictOutcome.DUPLICATE,
                    f"{destination.qualified_name} already declares an identical "
                    f"{method.name}; migration skipped",
                    exact,
                )
            return ConflictCheck(
                ConflictOutcome.SIGNATURE_CONFLICT,
                f"{destination.qualified_name} already declares {exact.describe()} "
                "with a different body",
                exact,
            )

        for candidate in same_name:
            if candidate.arity != method.arity:
                continue
            if all(
                self.types.related(x, y)
                for x, y in zip(candidate.parameter_types, method.parameter_types)
            ):
                return ConflictCheck(
                    ConflictOutcome.OVERLOAD_AMBIGUITY,
                    f"Moving {method.describe()} next to {candidate.describe()} "
                    "would make calls ambiguous",
                    candidate,
                )
        return ConflictCheck(ConflictOutcome.CLEAR)

    def gate(self, method: MethodNode, destination: ClassNode) -> Result[ConflictCheck, RefactoringError]:
        """Fatal outcomes become failures; CLEAR and DUPLICATE pass through."""
        check = self.check(method, destination)
        logger.debug("Conflict check for %s: %s", method.describe(), check.outcome.value)
        match check.outcome:
            case ConflictOutcome.SIGNATURE_CONFLICT:
                return Failure(SignatureConflict(check.message))
            case ConflictOutcome.OVERLOAD_AMBIGUITY:
                return Failure(OverloadAmbiguity(check.message))
            case _:
                return Success(check)


__all__ = ["ConflictCheck", "ConflictChecker", "ConflictOutcome"]
