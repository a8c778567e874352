"""
Single source of truth for turning the class model back into Java-like text.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from ..app import config
from ..model.body import (
    Assign,
    Binary,
    Cast,
    Comment,
    Expression,
    ExprStmt,
    FieldAccess,
    If,
    Literal,
    LocalVar,
    MethodCall,
    Name,
    New,
    NodeVisitor,
    Return,
    Statement,
    Super,
    This,
    Throw,
)
from ..model.nodes import ClassNode, FieldNode, MethodNode

_WHITESPACE = re.compile(r"\s+")


class _ExpressionRenderer(NodeVisitor):
    def visit_name(self, node: Name) -> str:
        return node.identifier

    def visit_literal(self, node: Literal) -> str:
        return node.text

    def visit_this(self, node: This) -> str:
        return "this"

    def visit_super(self, node: Super) -> str:
        return "super"

    def visit_field_access(self, node: FieldAccess) -> str:
        return f"{self.visit(node.target)}.{node.name}"

    def visit_method_call(self, node: MethodCall) -> str:
        args = ", ".join(self.visit(arg) for arg in node.args)
        if node.target is None:
            return f"{node.name}({args})"
        return f"{self.visit(node.target)}.{node.name}({args})"

    def visit_new(self, node: New) -> str:
        args = ", ".join(self.visit(arg) for arg in node.args)
        return f"new {node.type_name}({args})"

    def visit_cast(self, node: Cast) -> str:
        return f"(({node.type_name}) {self.visit(node.operand)})"

    def visit_binary(self, node: Binary) -> str:
        return f"{self.visit(node.left)} {node.op} {self.visit(node.right)}"

    def visit_assign(self, node: Assign) -> str:
        return f"{self.visit(node.target)} = {self.visit(node.value)}"


_EXPRESSIONS = _ExpressionRenderer()


def render_expression(expr: Expression) -> str:
    return _EXPRESSIONS.visit(expr)


class _StatementRenderer(NodeVisitor):
    def __init__(self, depth: int):
        self.depth = depth
        self.lines: list[str] = []

    def _emit(self, text: str) -> None:
        self.lines.append(f"{config.RENDER_INDENT * self.depth}{text}")

    def _nested(self, statements: Iterable[Statement]) -> None:
        self.depth += 1
        self.visit_all(statements)
        self.depth -= 1

    def visit_expr_stmt(self, node: ExprStmt) -> None:
        self._emit(f"{render_expression(node.expr)};")

    def visit_return(self, node: Return) -> None:
        if node.value is None:
            self._emit("return;")
        else:
            self._emit(f"return {render_expression(node.value)};")

    def visit_local_var(self, node: LocalVar) -> None:
        if node.init is None:
            self._emit(f"{node.type_name} {node.name};")
        else:
            self._emit(f"{node.type_name} {node.name} = {render_expression(node.init)};")

    def visit_if(self, node: If) -> None:
        self._emit(f"if ({render_expression(node.condition)}) {{")
        self._nested(node.then)
        if node.orelse:
            self._emit("} else {")
            self._nested(node.orelse)
        self._emit("}")

    def visit_throw(self, node: Throw) -> None:
        self._emit(f"throw {render_expression(node.value)};")

    def visit_comment(self, node: Comment) -> None:
        self._emit(f"// {node.text}")


def render_block(statements: Iterable[Statement], depth: int = 0) -> str:
    renderer = _StatementRenderer(depth)
    renderer.visit_all(statements)
    return "\n".join(renderer.lines)


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run so formatting differences compare equal."""
    return _WHITESPACE.sub(" ", text).strip()


def normalized_body(method: MethodNode) -> str | None:
    """Whitespace-normalized body text, or None for a bodiless method."""
    if method.body is None:
        return None
    return normalize_whitespace(render_block(method.body))


def _modifiers(*words: str) -> str:
    return " ".join(word for word in words if word)


def render_signature(method: MethodNode) -> str:
    params = ", ".join(f"{p.type_name} {p.name}" for p in method.parameters)
    head = _modifiers(
        method.visibility.keyword,
        "abstract" if method.is_abstract else "",
        method.return_type,
    )
    return f"{head} {method.name}({params})"


def render_method(method: MethodNode, depth: int = 0) -> str:
    indent = config.RENDER_INDENT * depth
    lines = [f"{indent}{config.OVERRIDE_MARKER}"] if method.is_override else []
    if method.body is None:
        lines.append(f"{indent}{render_signature(method)};")
        return "\n".join(lines)
    lines.append(f"{indent}{render_signature(method)} {{")
    body = render_block(method.body, depth + 1)
    if body:
        lines.append(body)
    lines.append(f"{indent}}}")
    return "\n".join(lines)


def render_field(fld: FieldNode, depth: int = 0) -> str:
    head = _modifiers(fld.visibility.keyword, fld.type_name, fld.name)
    if fld.initializer is not None:
        head = f"{head} = {render_expression(fld.initializer)}"
    return f"{config.RENDER_INDENT * depth}{head};"


def render_class(node: ClassNode) -> str:
    lines: list[str] = []
    if node.package:
        lines += [f"package {node.package};", ""]
    header = _modifiers("public", "abstract" if node.is_abstract else "", "class", node.simple_name)
    if node.supertype is not None:
        header = f"{header} extends {node.supertype}"
    lines.append(f"{header} {{")
    lines += [render_field(fld, 1) for fld in node.fields]
    for method in node.methods:
        lines += ["", render_method(method, 1)]
    lines.append("}")
    return "\n".join(lines)


__all__ = [
    "normalize_whitespace",
    "normalized_body",
    "render_block",
    "render_class",
    "render_expression",
    "render_field",
    "render_method",
    "render_signature",
]
