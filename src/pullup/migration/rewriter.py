"""
Repairs call sites inside code that has moved up the hierarchy.

One scan over a body collects both kinds of site the migration cares about:
`this` passed as a call argument, and calls made through `super`. The two
rewrites then act on the collected sites.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..analysis.resolution import MemberResolver, Scope
from ..model.body import (
    Cast,
    Comment,
    Expression,
    ExprStmt,
    If,
    MethodCall,
    Name,
    NodeVisitor,
    Statement,
    Super,
    This,
)
from ..model.nodes import ClassNode, MethodNode

logger = logging.getLogger(__name__)


@dataclass
class SelfArgumentSite:
    """`this` at position `index` of `call.args`, where `expected` is the parameter type."""

    call: MethodCall
    index: int
    expected: str | None


@dataclass
class SuperCallSite:
    """
    A call through `super`.

    `statements` and `index` locate the enclosing statement when the call is the
    whole statement; both are None when the call is nested in a larger expression.
    """

    call: MethodCall
    target: MethodNode | None
    statements: list[Statement] | None = None
    index: int | None = None

    @property
    def is_statement(self) -> bool:
        return self.statements is not None


@dataclass
class CallSiteScan:
    self_arguments: list[SelfArgumentSite] = field(default_factory=list)
    super_calls: list[SuperCallSite] = field(default_factory=list)


class _CallSiteScanner(NodeVisitor):
    def __init__(self, resolver: MemberResolver, scope: Scope):
        self.resolver = resolver
        self.scope = scope
        self.scan = CallSiteScan()

    def scan_block(self, statements: list[Statement]) -> None:
        for index, statement in enumerate(statements):
            match statement:
                case ExprStmt(expr=MethodCall(target=Super()) as call):
                    self._inspect_call(call, statements, index)
                case _:
                    self.visit(statement)

    def visit_if(self, node: If) -> None:
        self.visit(node.condition)
        self.scan_block(node.then)
        self.scan_block(node.orelse)

    def _inspect_call(
        self, node: MethodCall, statements: list[Statement] | None, index: int | None
    ) -> None:
        if isinstance(node.target, Super):
            target = self.resolver.resolve_call(node, self.scope)
            self.scan.super_calls.append(SuperCallSite(node, target, statements, index))
        callee = None
        for position, arg in enumerate(node.args):
            if isinstance(arg, This):
                callee = callee or self.resolver.resolve_call(node, self.scope)
                expected = callee.parameter_types[position] if callee is not None else None
                self.scan.self_arguments.append(SelfArgumentSite(node, position, expected))
        self.generic_visit(node)

    def visit_method_call(self, node: MethodCall) -> None:
        self._inspect_call(node, None, None)


class CallSiteRewriter:
    def __init__(self, resolver: MemberResolver):
        self.resolver = resolver
        self.types = resolver.types

    def scan(self, method: MethodNode, written_in: ClassNode) -> CallSiteScan:
        """Collect call sites of `method`'s body, resolved where the body was written."""
        scanner = _CallSiteScanner(self.resolver, Scope.of_method(method, written_in))
        scanner.scan_block(method.body or [])
        return scanner.scan

    def downcast_self_arguments(
        self, scan: CallSiteScan, origin: ClassNode, destination: ClassNode
    ) -> int:
        """
        Wrap `this` arguments in a cast to the origin where only the origin fits.

        Returns the number of arguments rewritten.
        """
        rewritten = 0
        for site in scan.self_arguments:
            if site.expected is None:
                continue
            accepts_destination = self.types.is_subtype(destination.qualified_name, site.expected)
            accepts_origin = self.types.is_subtype(origin.qualified_name, site.expected)
            if accepts_origin and not accepts_destination:
                site.call.args[site.index] = Cast(origin.qualified_name, This())
                rewritten += 1
                logger.info(
                    "Downcast this to %s in call to %s", origin.simple_name, site.call.name
                )
        return rewritten

    def super_calls_to(self, scan: CallSiteScan, target: MethodNode) -> list[SuperCallSite]:
        return [site for site in scan.super_calls if site.target is target]

    def remove_super_calls(self, sites: list[SuperCallSite], marker: str) -> tuple[int, int]:
        """
        Replace statement-level super calls with a marker comment.

        Returns `(removed, nested)`; nested calls are part of a larger expression
        and are left in place for the caller to report.
        """
        removed = nested = 0
        for site in sites:
            if site.statements is None or site.index is None:
                nested += 1
                continue
            site.statements[site.index] = Comment(marker)
            removed += 1
        return removed, nested


def forwarding_call(method: MethodNode) -> Expression:
    """`super.name(p1, p2)` passing `method`'s own parameters through."""
    return MethodCall(method.name, [Name(p.name) for p in method.parameters], Super())


__all__ = [
    "CallSiteRewriter",
    "CallSiteScan",
    "SelfArgumentSite",
    "SuperCallSite",
    "forwarding_call",
]
