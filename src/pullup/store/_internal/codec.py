"""
JSON shape of class documents, in both directions.

A document looks like::

    {
      "external_types": ["Widget"],
      "classes": [
        {
          "name": "com.zoo.Dog",
          "extends": "com.zoo.Animal",
          "abstract": false,
          "fields": [{"name": "age", "type": "int", "visibility": "private"}],
          "methods": [
            {
              "name": "describe",
              "parameters": [{"name": "prefix", "type": "String"}],
              "returns": "String",
              "visibility": "public",
              "body": [{"kind": "return", "value": {"kind": "name", "identifier": "prefix"}}]
            }
          ]
        }
      ]
    }

Body nodes are tagged with `kind`; see `pullup.model.body` for the variants.
"""

from typing import Any, TypeVar

from returns.result import Failure, Result, Success

from pullup.app import config
from pullup.model.body import (
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
    Node,
    Return,
    Statement,
    Super,
    This,
    Throw,
)
from pullup.model.nodes import ClassNode, FieldNode, MethodNode, Parameter, Visibility

from .parsers import (
    BasicParser,
    DictParser,
    LazyParser,
    ListParser,
    OptionalParser,
    Parser,
    TaggedParser,
    TransformParser,
)


def _non_empty(value: str) -> Result[str, str]:
    return Success(value) if value.strip() else Failure("Expected a non-empty string")


STRING: Parser[str] = BasicParser[str](lambda x: isinstance(x, str), "string")
NAME: Parser[str] = BasicParser[str](lambda x: isinstance(x, str), "name", _non_empty)
BOOLEAN: Parser[bool] = BasicParser[bool](lambda x: isinstance(x, bool), "boolean")


def _visibility(value: str) -> Result[Visibility, str]:
    try:
        return Success(Visibility(value))
    except ValueError:
        allowed = ", ".join(v.value for v in Visibility)
        return Failure(f"Unknown visibility {value!r}; expected one of: {allowed}")


VISIBILITY: Parser[Visibility] = TransformParser(STRING, _visibility)


T = TypeVar("T")


def _optional(parser: Parser[T], default: Any = None) -> OptionalParser[T]:
    return OptionalParser(parser, default)


EXPRESSION: Parser[Expression] = LazyParser(lambda: _EXPRESSION_VARIANTS)
STATEMENT: Parser[Statement] = LazyParser(lambda: _STATEMENT_VARIANTS)
EXPRESSIONS = ListParser(EXPRESSION)
BLOCK = ListParser(STATEMENT)

_EXPRESSION_VARIANTS: Parser[Expression] = TaggedParser(
    {
        Name.kind: DictParser({"identifier": NAME}, Name),
        Literal.kind: DictParser({"text": STRING}, Literal),
        This.kind: DictParser({}, This),
        Super.kind: DictParser({}, Super),
        FieldAccess.kind: DictParser({"target": EXPRESSION, "name": NAME}, FieldAccess),
        MethodCall.kind: DictParser(
            {
                "name": NAME,
                "args": _optional(EXPRESSIONS, []),
                "target": _optional(EXPRESSION),
            },
            lambda name, args, target: MethodCall(name, list(args), target),
        ),
        New.kind: DictParser(
            {"type": NAME, "args": _optional(EXPRESSIONS, [])},
            lambda type, args: New(type, list(args)),
        ),
        Cast.kind: DictParser(
            {"type": NAME, "operand": EXPRESSION},
            lambda type, operand: Cast(type, operand),
        ),
        Binary.kind: DictParser({"op": NAME, "left": EXPRESSION, "right": EXPRESSION}, Binary),
        Assign.kind: DictParser({"target": EXPRESSION, "value": EXPRESSION}, Assign),
    }
)

_STATEMENT_VARIANTS: Parser[Statement] = TaggedParser(
    {
        ExprStmt.kind: DictParser({"expr": EXPRESSION}, ExprStmt),
        Return.kind: DictParser({"value": _optional(EXPRESSION)}, Return),
        LocalVar.kind: DictParser(
            {"type": NAME, "name": NAME, "init": _optional(EXPRESSION)},
            lambda type, name, init: LocalVar(type, name, init),
        ),
        If.kind: DictParser(
            {
                "condition": EXPRESSION,
                "then": _optional(BLOCK, []),
                "else": _optional(BLOCK, []),
            },
            lambda condition, then, **rest: If(condition, list(then), list(rest["else"])),
        ),
        Throw.kind: DictParser({"value": EXPRESSION}, Throw),
        Comment.kind: DictParser({"text": STRING}, Comment),
    }
)

PARAMETER: Parser[Parameter] = DictParser(
    {"name": NAME, "type": NAME}, lambda name, type: Parameter(name, type)
)


def _method(name, parameters, returns, visibility, abstract, override, body) -> MethodNode:
    if body is None and not abstract:
        body = []
    return MethodNode(
        name=name,
        parameters=list(parameters),
        return_type=returns,
        visibility=visibility,
        is_abstract=abstract,
        body=body,
        is_override=override,
    )


METHOD: Parser[MethodNode] = DictParser(
    {
        "name": NAME,
        "parameters": _optional(ListParser(PARAMETER), []),
        "returns": _optional(NAME, config.VOID_TYPE),
        "visibility": _optional(VISIBILITY, Visibility.PACKAGE),
        "abstract": _optional(BOOLEAN, False),
        "override": _optional(BOOLEAN, False),
        "body": _optional(BLOCK),
    },
    _method,
)

FIELD: Parser[FieldNode] = DictParser(
    {
        "name": NAME,
        "type": NAME,
        "visibility": _optional(VISIBILITY, Visibility.PACKAGE),
        "initializer": _optional(EXPRESSION),
    },
    lambda name, type, visibility, initializer: FieldNode(name, type, visibility, initializer),
)

CLASS: Parser[ClassNode] = DictParser(
    {
        "name": NAME,
        "extends": _optional(NAME),
        "abstract": _optional(BOOLEAN, False),
        "fields": _optional(ListParser(FIELD), []),
        "methods": _optional(ListParser(METHOD), []),
    },
    lambda name, extends, abstract, fields, methods: ClassNode(
        qualified_name=name,
        supertype=extends,
        methods=list(methods),
        fields=list(fields),
        is_abstract=abstract,
    ),
)

EXTERNAL_TYPES: Parser[list[str]] = ListParser(NAME)


# --- Encoding ---


def _drop_empty(raw: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in raw.items() if value not in (None, [], False)}


_FIELD_KEYS = {"type_name": "type", "orelse": "else"}


def encode_node(node: Node) -> dict[str, Any]:
    """Tagged dictionary for any body node; inverse of the body parsers."""
    raw: dict[str, Any] = {"kind": node.kind}
    for key, value in vars(node).items():
        out = _FIELD_KEYS.get(key, key)
        if isinstance(value, Node):
            raw[out] = encode_node(value)
        elif isinstance(value, list):
            raw[out] = [encode_node(item) for item in value]
        else:
            raw[out] = value
    return {key: value for key, value in raw.items() if value is not None}


def encode_method(method: MethodNode) -> dict[str, Any]:
    return {
        "name": method.name,
        **_drop_empty(
            {
                "parameters": [{"name": p.name, "type": p.type_name} for p in method.parameters],
                "abstract": method.is_abstract,
                "override": method.is_override,
            }
        ),
        "returns": method.return_type,
        "visibility": method.visibility.value,
        "body": [encode_node(s) for s in method.body] if method.body is not None else None,
    }


def encode_field(fld: FieldNode) -> dict[str, Any]:
    raw = {"name": fld.name, "type": fld.type_name, "visibility": fld.visibility.value}
    if fld.initializer is not None:
        raw["initializer"] = encode_node(fld.initializer)
    return raw


def encode_class(node: ClassNode) -> dict[str, Any]:
    return {
        "name": node.qualified_name,
        **_drop_empty({"extends": node.supertype, "abstract": node.is_abstract}),
        "fields": [encode_field(f) for f in node.fields],
        "methods": [encode_method(m) for m in node.methods],
    }


__all__ = [
    "CLASS",
    "EXPRESSION",
    "EXTERNAL_TYPES",
    "FIELD",
    "METHOD",
    "STATEMENT",
    "encode_class",
    "encode_node",
]
