"""
Error taxonomy for pull-up refactorings.

Gate checks never raise these: they return them inside a `returns` `Failure`
so a caller can match on the outcome before anything in the class graph is
touched. They are still real exceptions, so code that prefers to fail fast can
call `.unwrap()` on the container, or raise one directly.
"""

from __future__ import annotations


class RefactoringError(Exception):
    """Base class for every hard failure the engine reports."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ModelLoadError(RefactoringError):
    """A class document could not be read or decoded."""


class ClassNotFound(RefactoringError):
    """No class with the requested simple or qualified name exists."""

    def __init__(self, name: str, detail: str | None = None) -> None:
        super().__init__(detail or f"Class not found: {name}")
        self.name = name


class MethodNotFound(RefactoringError):
    def __init__(self, class_name: str, method_name: str, detail: str | None = None) -> None:
        super().__init__(detail or f"Method not found in {class_name}: {method_name}")
        self.class_name = class_name
        self.method_name = method_name


class FieldNotFound(RefactoringError):
    def __init__(self, class_name: str, field_name: str) -> None:
        super().__init__(f"Field not found in {class_name}: {field_name}")
        self.class_name = class_name
        self.field_name = field_name


class NotAnAncestor(RefactoringError):
    def __init__(self, ancestor: str, descendant: str, detail: str | None = None) -> None:
        super().__init__(detail or f"{ancestor} is not an ancestor of {descendant}")
        self.ancestor = ancestor
        self.descendant = descendant


class UnresolvableType(RefactoringError):
    """A type in a migrated signature cannot be seen from the destination."""

    def __init__(self, type_name: str, context: str) -> None:
        super().__init__(f"Type {type_name} used by {context} cannot be resolved from the destination")
        self.type_name = type_name
        self.context = context


class SignatureConflict(RefactoringError):
    """The destination already declares the signature with a different body."""


class DuplicateMethod(RefactoringError):
    """The destination already declares the signature with an identical body."""


class OverloadAmbiguity(RefactoringError):
    """Moving the method would make call sites on the destination ambiguous."""


__all__ = [
    "ClassNotFound",
    "DuplicateMethod",
    "FieldNotFound",
    "MethodNotFound",
    "ModelLoadError",
    "NotAnAncestor",
    "OverloadAmbiguity",
    "RefactoringError",
    "SignatureConflict",
    "UnresolvableType",
]
