from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TypeVar

from .model.nodes import ClassNode, FieldNode, MethodNode

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _add_once(items: list[T], item: T) -> bool:
    if any(existing is item for existing in items):
        return False
    items.append(item)
    return True


@dataclass
class MigrationReport:
    """
    Accumulates everything a migration run did and every soft failure it hit.

    One report is threaded through every engine call of a run. Warnings are
    mirrored to the log as they are recorded.

    Attributes:
        warnings: Soft failures, in the order they occurred.
        touched: Classes whose declarations changed and need re-serialization.
        visibility_changed: Classes in which a declaration's visibility changed.
        introduced_abstract: Abstract declarations created on the destination.
        moved_fields: Fields promoted to the destination.
        stubs: Stub overrides synthesized in descendants.
    """

    warnings: list[str] = field(default_factory=list)
    touched: list[ClassNode] = field(default_factory=list)
    visibility_changed: list[ClassNode] = field(default_factory=list)
    introduced_abstract: list[MethodNode] = field(default_factory=list)
    moved_fields: list[FieldNode] = field(default_factory=list)
    stubs: list[MethodNode] = field(default_factory=list)

    def warn(self, message: str) -> None:
        logger.warning("%s", message)
        self.warnings.append(message)

    def touch(self, *classes: ClassNode) -> None:
        for cls in classes:
            _add_once(self.touched, cls)

    def mark_visibility_changed(self, cls: ClassNode) -> None:
        self.touch(cls)
        _add_once(self.visibility_changed, cls)

    @property
    def touched_names(self) -> list[str]:
        return [cls.qualified_name for cls in self.touched]

    @property
    def visibility_changed_names(self) -> list[str]:
        return [cls.qualified_name for cls in self.visibility_changed]


__all__ = ["MigrationReport"]
