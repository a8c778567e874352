"""
Static typing of body expressions and member lookup along the inheritance chain.

Bodies are always resolved in the context of the class they were written in,
which for a method being pulled up is still the origin class.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..app import config
from ..hierarchy.navigator import HierarchyNavigator
from ..hierarchy.types import TypeSystem, erasure, is_reference
from ..model.body import (
    Assign,
    Binary,
    Cast,
    Expression,
    FieldAccess,
    Literal,
    MethodCall,
    Name,
    New,
    Super,
    This,
    local_declarations,
)
from ..model.graph import ClassGraph
from ..model.nodes import ClassNode, FieldNode, MethodNode

logger = logging.getLogger(__name__)

_BOOLEAN_OPERATORS = frozenset({"==", "!=", "<", ">", "<=", ">=", "&&", "||", "instanceof"})
_INTEGER = re.compile(r"^-?\d+$")
_FLOATING = re.compile(r"^-?\d*\.\d+[dDfF]?$")


@dataclass(frozen=True)
class Scope:
    """Where an expression was written: its class plus visible locals and parameters."""

    cls: ClassNode
    locals: dict[str, str] = field(default_factory=dict)

    @classmethod
    def of_method(cls, method: MethodNode, owner: ClassNode) -> Scope:
        names = {p.name: p.type_name for p in method.parameters}
        names.update(local_declarations(method.body or []))
        return cls(owner, names)

    @classmethod
    def of_class(cls, owner: ClassNode) -> Scope:
        return cls(owner)


def literal_type(text: str) -> str | None:
    text = text.strip()
    if text.startswith('"'):
        return "String"
    if text.startswith("'"):
        return "char"
    if text in ("true", "false"):
        return "boolean"
    if text.endswith(("L", "l")) and _INTEGER.match(text[:-1]):
        return "long"
    if _INTEGER.match(text):
        return "int"
    if _FLOATING.match(text):
        return "float" if text[-1] in "fF" else "double"
    return None


class MemberResolver:
    def __init__(
        self,
        graph: ClassGraph,
        navigator: HierarchyNavigator | None = None,
        types: TypeSystem | None = None,
    ):
        self.graph = graph
        self.navigator = navigator or HierarchyNavigator(graph)
        self.types = types or TypeSystem(graph, self.navigator)

    def _chain(self, cls: ClassNode) -> list[ClassNode]:
        return [cls, *self.navigator.ancestors_of(cls)]

    # --- Lookup ---

    def lookup_field(self, cls: ClassNode, name: str) -> FieldNode | None:
        for node in self._chain(cls):
            found = node.find_field(name)
            if found is not None:
                return found
        return None

    def _accepts(self, method: MethodNode, arg_types: Sequence[str | None]) -> bool:
        return all(
            arg is None or self.types.is_subtype(arg, param)
            for arg, param in zip(arg_types, method.parameter_types, strict=True)
        )

    def lookup_method(
        self, cls: ClassNode, name: str, arg_types: Sequence[str | None]
    ) -> MethodNode | None:
        """
        Nearest declaration of `name` applicable to the argument types.

        Candidates are filtered by arity first; among those, the nearest one
        whose parameters accept every known argument type wins, falling back to
        the nearest same-arity candidate when typing is inconclusive.
        """
        candidates = [
            method
            for node in self._chain(cls)
            for method in node.methods_named(name)
            if method.arity == len(arg_types)
        ]
        applicable = [m for m in candidates if self._accepts(m, arg_types)]
        if applicable:
            return applicable[0]
        return candidates[0] if candidates else None

    # --- Expression typing ---

    def type_of(self, expr: Expression, scope: Scope) -> str | None:
        match expr:
            case Name(identifier=identifier):
                if identifier in scope.locals:
                    return scope.locals[identifier]
                fld = self.lookup_field(scope.cls, identifier)
                return fld.type_name if fld is not None else None
            case Literal(text=text):
                return literal_type(text)
            case This():
                return scope.cls.qualified_name
            case Super():
                parent = self.graph.supertype_of(scope.cls)
                return parent.qualified_name if parent is not None else config.UNIVERSAL_TOP_TYPE
            case FieldAccess():
                fld = self.resolve_field_access(expr, scope)
                return fld.type_name if fld is not None else None
            case MethodCall():
                method = self.resolve_call(expr, scope)
                return method.return_type if method is not None else None
            case New(type_name=type_name) | Cast(type_name=type_name):
                return type_name
            case Binary(op=op, left=left, right=right):
                if op in _BOOLEAN_OPERATORS:
                    return "boolean"
                left_type, right_type = self.type_of(left, scope), self.type_of(right, scope)
                if op == "+" and "String" in (left_type, right_type):
                    return "String"
                return left_type or right_type
            case Assign(target=target):
                return self.type_of(target, scope)
        return None

    def class_of(self, expr: Expression, scope: Scope) -> ClassNode | None:
        """The graph class of a receiver expression, if its static type is one."""
        if isinstance(expr, This):
            return scope.cls
        if isinstance(expr, Super):
            return self.graph.supertype_of(scope.cls)
        type_name = self.type_of(expr, scope)
        if type_name is None or not is_reference(type_name):
            return None
        return self.graph.lookup(erasure(type_name))

    # --- Reference resolution ---

    def resolve_name(self, node: Name, scope: Scope) -> FieldNode | None:
        if node.identifier in scope.locals:
            return None
        return self.lookup_field(scope.cls, node.identifier)

    def resolve_field_access(self, node: FieldAccess, scope: Scope) -> FieldNode | None:
        receiver = self.class_of(node.target, scope)
        return self.lookup_field(receiver, node.name) if receiver is not None else None

    def resolve_call(self, node: MethodCall, scope: Scope) -> MethodNode | None:
        receiver = scope.cls if node.target is None else self.class_of(node.target, scope)
        if receiver is None:
            return None
        arg_types = [self.type_of(arg, scope) for arg in node.args]
        resolved = self.lookup_method(receiver, node.name, arg_types)
        if resolved is None:
            logger.debug("Unresolved call %s on %s", node.name, receiver.qualified_name)
        return resolved


__all__ = ["MemberResolver", "Scope", "literal_type"]
