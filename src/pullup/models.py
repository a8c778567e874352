from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from .app import config
from .report import MigrationReport


class ImmutableModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class RefactoringOptions(ImmutableModel):
    """Switches for the optional parts of a migration run."""

    synthesize_stubs: bool = True
    downcast_self_arguments: bool = True
    repair_super_calls: bool = True
    fail_on_duplicate: bool = False
    stub_exception_type: str = config.STUB_EXCEPTION_TYPE
    stub_message: str = config.STUB_EXCEPTION_MESSAGE
    snapshot: bool = True
    dry_run: bool = False


class RefactoringResult(BaseModel):
    """Outcome of one refactoring request, success or not."""

    success: bool
    message: str
    modified_files: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    touched_classes: list[str] = Field(default_factory=list)
    visibility_changed: list[str] = Field(default_factory=list)

    @classmethod
    def succeeded(
        cls,
        message: str,
        report: MigrationReport | None = None,
        modified_files: Sequence[str] = (),
    ) -> RefactoringResult:
        report = report or MigrationReport()
        return cls(
            success=True,
            message=message,
            modified_files=list(modified_files),
            warnings=list(report.warnings),
            touched_classes=report.touched_names,
            visibility_changed=report.visibility_changed_names,
        )

    @classmethod
    def failed(cls, message: str, warnings: Sequence[str] = ()) -> RefactoringResult:
        return cls(success=False, message=message, warnings=list(warnings))


__all__ = ["ImmutableModel", "RefactoringOptions", "RefactoringResult"]
