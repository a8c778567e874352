from .body import (
    Assign,
    Binary,
    Block,
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
    Node,
    NodeTransformer,
    NodeVisitor,
    Return,
    Statement,
    Super,
    This,
    Throw,
    walk,
)
from .graph import ClassGraph
from .nodes import ClassNode, FieldNode, Member, MethodNode, Parameter, Signature, Visibility

__all__ = [
    "Assign",
    "Binary",
    "Block",
    "Cast",
    "ClassGraph",
    "ClassNode",
    "Comment",
    "ExprStmt",
    "Expression",
    "FieldAccess",
    "FieldNode",
    "If",
    "Literal",
    "LocalVar",
    "Member",
    "MethodCall",
    "MethodNode",
    "Name",
    "New",
    "Node",
    "NodeTransformer",
    "NodeVisitor",
    "Parameter",
    "Return",
    "Signature",
    "Statement",
    "Super",
    "This",
    "Throw",
    "Visibility",
    "walk",
]
