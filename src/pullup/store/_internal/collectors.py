from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from returns.result import Failure, Result, Success

from pullup.store._internal.parsers import Parser, parse

S = TypeVar("S")
T = TypeVar("T")


def collect_with_context(
    raw_items: list[Any], item_parser: Parser[T], error_context: str = "item"
) -> Result[list[T], str]:
    """Parse every item, failing fast with the index and a label of the bad item."""
    parsed_items = []
    for i, raw_item in enumerate(raw_items):
        result = parse(raw_item, item_parser)
        if isinstance(result, Failure):
            return Failure(f"Error parsing {error_context} {i}: {result.failure()}")
        parsed_items.append(result.unwrap())

    return Success(parsed_items)


def collect_partial(
    sources: Iterable[S], load: Callable[[S], Result[T, str]]
) -> tuple[list[T], list[str]]:
    """Load every source, returning both successes and failures.

    Unlike `collect_with_context`, this doesn't fail fast: each source is
    attempted and every error is reported against the source it came from.
    """
    successes = []
    errors = []

    for source in sources:
        result = load(source)
        if isinstance(result, Success):
            successes.append(result.unwrap())
        else:
            errors.append(f"{source}: {result.failure()}")

    return successes, errors


__all__ = ["collect_partial", "collect_with_context"]
