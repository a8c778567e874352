from pullup.model.body import (
    NODE_TYPES,
    Binary,
    Comment,
    ExprStmt,
    If,
    Literal,
    LocalVar,
    MethodCall,
    Name,
    NodeTransformer,
    NodeVisitor,
    Return,
    This,
    clone_block,
    local_declarations,
    walk,
)


def _sample() -> list:
    return [
        LocalVar("int", "total", Literal("0")),
        If(
            Binary(">", Name("total"), Literal("1")),
            then=[ExprStmt(MethodCall("log", [This()]))],
            orelse=[LocalVar("String", "label")],
        ),
        Return(Name("total")),
    ]


def test_every_node_kind_is_registered_once() -> None:
    for kind in ("name", "method_call", "if", "return", "comment", "cast", "new"):
        assert NODE_TYPES[kind].kind == kind


def test_visitor_dispatches_on_kind_and_recurses_through_generic_visit() -> None:
    class NameCollector(NodeVisitor):
        def __init__(self) -> None:
            self.names: list[str] = []

        def visit_name(self, node: Name) -> None:
            self.names.append(node.identifier)

    collector = NameCollector()
    collector.visit_all(_sample())
    assert collector.names == ["total", "total"]


def test_walk_yields_parents_before_children() -> None:
    kinds = [node.kind for node in walk(_sample())]
    assert kinds.index("if") < kinds.index("binary") < kinds.index("expr_stmt")
    assert kinds.index("expr_stmt") < kinds.index("method_call") < kinds.index("this")
    assert kinds[-2:] == ["return", "name"]


def test_transformer_drops_and_splices_statements_in_place() -> None:
    class Rewriter(NodeTransformer):
        def visit_local_var(self, node: LocalVar):
            return None

        def visit_return(self, node: Return):
            return [Comment("done"), node]

    block = _sample()
    original = block
    Rewriter().transform_list(block)

    assert block is original
    assert [s.kind for s in block] == ["if", "comment", "return"]
    assert block[0].orelse == []


def test_local_declarations_include_nested_blocks() -> None:
    assert local_declarations(_sample()) == {"total": "int", "label": "String"}


def test_clone_block_is_deep_and_preserves_none() -> None:
    block = _sample()
    twin = clone_block(block)
    assert twin == block
    twin[0].name = "renamed"
    assert block[0].name == "total"
    assert clone_block(None) is None
