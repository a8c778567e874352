from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..app import config
from ..hierarchy.types import TypeSystem, is_reference

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unification:
    """
    Outcome of unifying one declared type against its conflicting counterparts.

    Attributes:
        type_name: The unified type.
        seed: The type unification started from.
        fell_back_to_top: Whether no common ancestor short of the top existed.
        incompatible: Types skipped because primitive and reference types never unify.
    """

    type_name: str
    seed: str
    fell_back_to_top: bool = False
    incompatible: tuple[str, ...] = field(default=())

    @property
    def changed(self) -> bool:
        return self.type_name != self.seed


class TypeUnifier:
    def __init__(self, types: TypeSystem):
        self.types = types

    def common_supertype(self, current: str, other: str) -> str:
        """Widest-needed type covering both `current` and `other`; never narrows."""
        if self.types.is_subtype(other, current):
            return current
        if self.types.is_subtype(current, other):
            return other
        for ancestor in self.types.supertypes_of(current):
            if self.types.is_subtype(other, ancestor):
                return ancestor
        return config.UNIVERSAL_TOP_TYPE

    def unify(self, seed: str, others: Iterable[str]) -> Unification:
        """Fold `others` into `seed` in the order given."""
        current = seed
        incompatible: list[str] = []
        for other in others:
            if self.types.same_type(other, current):
                continue
            if not is_reference(current) or not is_reference(other):
                incompatible.append(other)
                continue
            current = self.common_supertype(current, other)
        fell_back = current == config.UNIVERSAL_TOP_TYPE and not self.types.is_top(seed)
        if current != seed:
            logger.debug("Unified %s to %s", seed, current)
        return Unification(current, seed, fell_back, tuple(incompatible))


__all__ = ["TypeUnifier", "Unification"]
