from pathlib import Path

from returns.result import Failure, Success

from pullup.store._internal.collectors import collect_partial, collect_with_context
from pullup.store._internal.parsers import BasicParser

INT_PARSER = BasicParser[int](type_check=lambda x: isinstance(x, int), type_name="int")


def test_collect_with_context_success_and_failure() -> None:
    ok = collect_with_context([1, 2, 3], INT_PARSER)
    assert isinstance(ok, Success)
    assert ok.unwrap() == [1, 2, 3]

    bad = collect_with_context([1, "x"], INT_PARSER, error_context="class")
    assert isinstance(bad, Failure)
    assert "class 1" in bad.failure()


def test_collect_partial_returns_both_success_and_errors() -> None:
    successes, errors = collect_partial([1, "x", 3, "y"], INT_PARSER.parse)

    assert successes == [1, 3]
    assert len(errors) == 2
    assert errors[0].startswith("x:") and errors[1].startswith("y:")


def test_collect_partial_labels_errors_with_their_source(tmp_path: Path) -> None:
    def load(path: Path):
        return Success(path.name) if path.suffix == ".json" else Failure("not a document")

    successes, errors = collect_partial([tmp_path / "a.json", tmp_path / "b.txt"], load)
    assert successes == ["a.json"]
    assert errors == [f"{tmp_path / 'b.txt'}: not a document"]
