"""
Tagged syntax nodes for method bodies and field initializers.

Every node carries a class-level `kind` tag. Traversal goes through
`NodeVisitor`/`NodeTransformer`, which dispatch to `visit_<kind>` callbacks
the same way the standard library's `ast.NodeVisitor` dispatches on class
names; nodes never implement per-visitor double dispatch themselves.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, ClassVar

NODE_TYPES: dict[str, type[Node]] = {}


@dataclass
class Node:
    """Base class for all body nodes."""

    kind: ClassVar[str] = "node"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.kind in NODE_TYPES:
            raise TypeError(f"Duplicate node kind: {cls.kind}")
        NODE_TYPES[cls.kind] = cls

    def children(self) -> Iterator[Node]:
        """Yield direct child nodes in field order."""
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Node):
                yield value
            elif isinstance(value, list):
                yield from (item for item in value if isinstance(item, Node))

    def clone(self) -> Node:
        return copy.deepcopy(self)


class Expression(Node):
    kind: ClassVar[str] = "expression"


class Statement(Node):
    kind: ClassVar[str] = "statement"


# --- Expressions ---


@dataclass
class Name(Expression):
    """A bare identifier: a local, a parameter, or an implicit `this` field."""

    kind: ClassVar[str] = "name"
    identifier: str


@dataclass
class Literal(Expression):
    kind: ClassVar[str] = "literal"
    text: str


@dataclass
class This(Expression):
    kind: ClassVar[str] = "this"


@dataclass
class Super(Expression):
    kind: ClassVar[str] = "super"


@dataclass
class FieldAccess(Expression):
    kind: ClassVar[str] = "field_access"
    target: Expression
    name: str


@dataclass
class MethodCall(Expression):
    """A call; `target` is None for an unqualified call on the current object."""

    kind: ClassVar[str] = "method_call"
    name: str
    args: list[Expression] = field(default_factory=list)
    target: Expression | None = None


@dataclass
class New(Expression):
    kind: ClassVar[str] = "new"
    type_name: str
    args: list[Expression] = field(default_factory=list)


@dataclass
class Cast(Expression):
    kind: ClassVar[str] = "cast"
    type_name: str
    operand: Expression


@dataclass
class Binary(Expression):
    kind: ClassVar[str] = "binary"
    op: str
    left: Expression
    right: Expression


@dataclass
class Assign(Expression):
    kind: ClassVar[str] = "assign"
    target: Expression
    value: Expression


# --- Statements ---


@dataclass
class ExprStmt(Statement):
    kind: ClassVar[str] = "expr_stmt"
    expr: Expression


@dataclass
class Return(Statement):
    kind: ClassVar[str] = "return"
    value: Expression | None = None


@dataclass
class LocalVar(Statement):
    kind: ClassVar[str] = "local_var"
    type_name: str
    name: str
    init: Expression | None = None


@dataclass
class If(Statement):
    kind: ClassVar[str] = "if"
    condition: Expression
    then: list[Statement] = field(default_factory=list)
    orelse: list[Statement] = field(default_factory=list)


@dataclass
class Throw(Statement):
    kind: ClassVar[str] = "throw"
    value: Expression


@dataclass
class Comment(Statement):
    kind: ClassVar[str] = "comment"
    text: str


Block = list[Statement]


class NodeVisitor:
    """Walks a node tree, calling `visit_<kind>` where defined."""

    def visit(self, node: Node) -> Any:
        visitor = getattr(self, f"visit_{node.kind}", self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Node) -> Any:
        for child in node.children():
            self.visit(child)
        return None

    def visit_all(self, nodes: Iterable[Node]) -> None:
        for node in nodes:
            self.visit(node)


class NodeTransformer(NodeVisitor):
    """
    A visitor that rebuilds the tree from the values its callbacks return.

    A callback returning None drops the node from a statement list and a
    list return splices several statements in its place. Lists are edited in
    place so references held by owners stay valid.
    """

    def generic_visit(self, node: Node) -> Node:
        for f in dataclasses.fields(node):
            value = getattr(node, f.name)
            if isinstance(value, Node):
                replacement = self.visit(value)
                if replacement is not None:
                    setattr(node, f.name, replacement)
            elif isinstance(value, list):
                self.transform_list(value)
        return node

    def transform_list(self, items: list[Any]) -> list[Any]:
        rebuilt: list[Any] = []
        for item in items:
            if not isinstance(item, Node):
                rebuilt.append(item)
                continue
            replacement = self.visit(item)
            if replacement is None:
                continue
            if isinstance(replacement, list):
                rebuilt.extend(replacement)
            else:
                rebuilt.append(replacement)
        items[:] = rebuilt
        return items


def walk(nodes: Iterable[Node]) -> Iterator[Node]:
    """Yield every node reachable from `nodes`, parents before children."""
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.children())))


def clone_block(block: Block | None) -> Block | None:
    return copy.deepcopy(block) if block is not None else None


def local_declarations(block: Iterable[Statement]) -> dict[str, str]:
    """Map every local variable declared anywhere in `block` to its type."""
    return {node.name: node.type_name for node in walk(block) if isinstance(node, LocalVar)}


__all__ = [
    "NODE_TYPES",
    "Assign",
    "Binary",
    "Block",
    "Cast",
    "Comment",
    "ExprStmt",
    "Expression",
    "FieldAccess",
    "If",
    "Literal",
    "LocalVar",
    "MethodCall",
    "Name",
    "New",
    "Node",
    "NodeTransformer",
    "NodeVisitor",
    "Return",
    "Statement",
    "Super",
    "This",
    "Throw",
    "clone_block",
    "local_declarations",
    "walk",
]
