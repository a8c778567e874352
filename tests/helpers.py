from collections.abc import Iterable, Sequence

from pullup.common.rendering import render_class
from pullup.model.body import ExprStmt, Expression, MethodCall, Name, Return, Statement
from pullup.model.graph import ClassGraph
from pullup.model.nodes import ClassNode, FieldNode, MethodNode, Parameter, Visibility


def call(name: str, *args: Expression, target: Expression | None = None) -> MethodCall:
    return MethodCall(name, list(args), target)


def returns(expr: Expression) -> Return:
    return Return(expr)


def does(expr: Expression) -> ExprStmt:
    return ExprStmt(expr)


def ref(identifier: str) -> Name:
    return Name(identifier)


def method(
    name: str,
    params: Sequence[tuple[str, str]] = (),
    *,
    returns: str = "void",
    body: Iterable[Statement] | None = (),
    visibility: Visibility = Visibility.PUBLIC,
    abstract: bool = False,
    override: bool = False,
) -> MethodNode:
    return MethodNode(
        name=name,
        parameters=[Parameter(pname, ptype) for pname, ptype in params],
        return_type=returns,
        visibility=visibility,
        is_abstract=abstract,
        body=None if abstract or body is None else list(body),
        is_override=override,
    )


def field(
    name: str,
    type_name: str = "int",
    visibility: Visibility = Visibility.PRIVATE,
    initializer: Expression | None = None,
) -> FieldNode:
    return FieldNode(name, type_name, visibility, initializer)


def cls(
    qualified_name: str,
    extends: str | None = None,
    *members: MethodNode | FieldNode,
    abstract: bool = False,
    module: str | None = None,
) -> ClassNode:
    return ClassNode(
        qualified_name=qualified_name,
        supertype=extends,
        methods=[m for m in members if isinstance(m, MethodNode)],
        fields=[f for f in members if isinstance(f, FieldNode)],
        is_abstract=abstract,
        module=module,
    )


def graph(*classes: ClassNode, external_types: Iterable[str] = ()) -> ClassGraph:
    return ClassGraph(classes, external_types)


def rendered(g: ClassGraph) -> dict[str, str]:
    """Source text of every class, for checking a graph was left untouched."""
    return {node.qualified_name: render_class(node) for node in g}
