from returns.result import Failure, Success

from pullup.store._internal.parsers import (
    BasicParser,
    DictParser,
    LazyParser,
    ListParser,
    OptionalParser,
    TaggedParser,
)

IS_INT = BasicParser[int](type_check=lambda x: isinstance(x, int), type_name="int")
IS_STR = BasicParser[str](type_check=lambda x: isinstance(x, str), type_name="string")


def test_basic_parser_success_and_failure() -> None:
    ok = IS_INT.parse(3)
    err = IS_INT.parse("nope")

    assert isinstance(ok, Success)
    assert ok.unwrap() == 3

    assert isinstance(err, Failure)
    assert "Expected int" in err.failure()


def test_list_parser_success_and_element_error() -> None:
    list_parser = ListParser(IS_INT)

    ok = list_parser.parse([1, 2, 3])
    assert isinstance(ok, Success)
    assert ok.unwrap() == [1, 2, 3]

    bad = list_parser.parse([1, "x", 3])
    assert isinstance(bad, Failure)
    msg = bad.failure()
    assert "element 1" in msg and "Expected int" in msg

    not_list = list_parser.parse({})
    assert isinstance(not_list, Failure)
    assert "Expected list" in not_list.failure()


def test_dict_parser_success_and_missing_field() -> None:
    parser = DictParser(
        field_parsers={"a": IS_INT, "b": IS_STR},
        constructor=lambda a, b: (a, b),
    )

    ok = parser.parse({"a": 7, "b": "hi"})
    assert isinstance(ok, Success)
    assert ok.unwrap() == (7, "hi")

    missing = parser.parse({"a": 7})
    assert isinstance(missing, Failure)
    assert "Missing required field: b" in missing.failure()


def test_dict_parser_allows_absent_optional_fields() -> None:
    parser = DictParser(
        field_parsers={"a": IS_INT, "b": OptionalParser(IS_STR, "default")},
        constructor=lambda a, b: (a, b),
    )
    assert parser.parse({"a": 1}).unwrap() == (1, "default")
    assert isinstance(parser.parse({"a": 1, "b": 2}), Failure)


def test_tagged_parser_dispatches_on_the_tag() -> None:
    parser = TaggedParser(
        {
            "num": DictParser({"value": IS_INT}, lambda value: value),
            "text": DictParser({"value": IS_STR}, lambda value: value),
        }
    )
    assert parser.parse({"kind": "num", "value": 4}).unwrap() == 4
    assert parser.parse({"kind": "text", "value": "x"}).unwrap() == "x"

    unknown = parser.parse({"kind": "blob"})
    assert isinstance(unknown, Failure)
    assert "Unknown kind 'blob'" in unknown.failure()

    wrong = parser.parse({"kind": "num", "value": "4"})
    assert isinstance(wrong, Failure)
    assert wrong.failure().startswith("In num:")


def test_lazy_parser_supports_recursive_grammars() -> None:
    tree = LazyParser(lambda: node)
    node = DictParser(
        {"value": IS_INT, "children": OptionalParser(ListParser(tree), [])},
        lambda value, children: value + sum(children),
    )
    assert tree.parse({"value": 1, "children": [{"value": 2}, {"value": 3, "children": [{"value": 4}]}]}).unwrap() == 10
