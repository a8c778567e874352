from __future__ import annotations

import copy
import enum
import functools
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..app import config
from .body import Block, Expression, clone_block


@functools.total_ordering
class Visibility(enum.Enum):
    """Access levels, totally ordered from narrowest to widest."""

    PRIVATE = "private"
    PACKAGE = "package"
    PROTECTED = "protected"
    PUBLIC = "public"

    @property
    def rank(self) -> int:
        return _VISIBILITY_ORDER.index(self)

    @property
    def keyword(self) -> str:
        """Source keyword for this level; package-private has none."""
        return "" if self is Visibility.PACKAGE else self.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Visibility):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def join(cls, levels: Iterable[Visibility]) -> Visibility:
        """Widest of `levels`; PRIVATE when empty."""
        return max(levels, default=cls.PRIVATE)


_VISIBILITY_ORDER: tuple[Visibility, ...] = (
    Visibility.PRIVATE,
    Visibility.PACKAGE,
    Visibility.PROTECTED,
    Visibility.PUBLIC,
)


@dataclass(frozen=True)
class Parameter:
    """
    A method parameter.

    Attributes:
        name: The parameter name as written in the declaration.
        type_name: The declared type, simple or qualified.
    """

    name: str
    type_name: str


Signature = tuple[str, tuple[str, ...]]


@dataclass(eq=False)
class MethodNode:
    """
    A method declaration.

    Nodes compare by identity: two declarations with the same signature in
    different classes are different methods.

    Attributes:
        name: The method name.
        parameters: Ordered parameters.
        return_type: Declared return type; `void` for none.
        visibility: Declared access level.
        is_abstract: Whether the declaration is abstract.
        body: Statements of the body, None when the method has no body.
        is_override: Whether the declaration carries the override marker.
        owner: Qualified name of the declaring class.
    """

    name: str
    parameters: list[Parameter] = field(default_factory=list)
    return_type: str = config.VOID_TYPE
    visibility: Visibility = Visibility.PACKAGE
    is_abstract: bool = False
    body: Block | None = field(default_factory=list)
    is_override: bool = False
    owner: str | None = None

    @property
    def parameter_types(self) -> tuple[str, ...]:
        return tuple(p.type_name for p in self.parameters)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def signature(self) -> Signature:
        return (self.name, self.parameter_types)

    @property
    def is_concrete(self) -> bool:
        return not self.is_abstract and self.body is not None

    @property
    def returns_void(self) -> bool:
        return self.return_type == config.VOID_TYPE

    def describe(self) -> str:
        """Human-readable `Owner.name(T1, T2)` label used in messages."""
        prefix = f"{self.owner}." if self.owner else ""
        return f"{prefix}{self.name}({', '.join(self.parameter_types)})"

    def clone(self) -> MethodNode:
        """Deep copy, detached from any owner."""
        twin = copy.copy(self)
        twin.parameters = list(self.parameters)
        twin.body = clone_block(self.body)
        twin.owner = None
        return twin


@dataclass(eq=False)
class FieldNode:
    name: str
    type_name: str
    visibility: Visibility = Visibility.PACKAGE
    initializer: Expression | None = None
    owner: str | None = None

    def describe(self) -> str:
        prefix = f"{self.owner}." if self.owner else ""
        return f"{prefix}{self.name}"

    def clone(self) -> FieldNode:
        twin = copy.copy(self)
        twin.initializer = copy.deepcopy(self.initializer)
        twin.owner = None
        return twin


Member = MethodNode | FieldNode


@dataclass(eq=False)
class ClassNode:
    """
    A class declaration.

    Attributes:
        qualified_name: Dotted identity of the class, unique in a graph.
        supertype: Name of the direct supertype; None means the universal top.
        methods: Declared methods in declaration order.
        fields: Declared fields in declaration order.
        is_abstract: Whether the class is declared abstract.
        source_file: Document the class was loaded from, if any.
        module: Packaging unit the class belongs to, if known.
    """

    qualified_name: str
    supertype: str | None = None
    methods: list[MethodNode] = field(default_factory=list)
    fields: list[FieldNode] = field(default_factory=list)
    is_abstract: bool = False
    source_file: Path | None = None
    module: str | None = None

    def __post_init__(self) -> None:
        for method in self.methods:
            method.owner = self.qualified_name
        for fld in self.fields:
            fld.owner = self.qualified_name

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    @property
    def package(self) -> str:
        head, _, _ = self.qualified_name.rpartition(".")
        return head

    # --- Methods ---

    def methods_named(self, name: str) -> list[MethodNode]:
        return [m for m in self.methods if m.name == name]

    def find_method(self, signature: Signature) -> MethodNode | None:
        return next((m for m in self.methods if m.signature == signature), None)

    def add_method(self, method: MethodNode) -> MethodNode:
        """Take exclusive ownership of `method`."""
        if self.find_method(method.signature) is not None:
            raise ValueError(f"{self.qualified_name} already declares {method.describe()}")
        method.owner = self.qualified_name
        self.methods.append(method)
        return method

    def remove_method(self, method: MethodNode) -> None:
        self.methods = [m for m in self.methods if m is not method]
        method.owner = None

    def abstract_methods(self) -> list[MethodNode]:
        return [m for m in self.methods if m.is_abstract]

    # --- Fields ---

    def find_field(self, name: str) -> FieldNode | None:
        return next((f for f in self.fields if f.name == name), None)

    def add_field(self, fld: FieldNode) -> FieldNode:
        if self.find_field(fld.name) is not None:
            raise ValueError(f"{self.qualified_name} already declares field {fld.name}")
        fld.owner = self.qualified_name
        self.fields.append(fld)
        return fld

    def remove_field(self, fld: FieldNode) -> None:
        self.fields = [f for f in self.fields if f is not fld]
        fld.owner = None


__all__ = [
    "ClassNode",
    "FieldNode",
    "Member",
    "MethodNode",
    "Parameter",
    "Signature",
    "Visibility",
]
