"""Generic depth-first crawl over untyped JSON documents."""

from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")

Matcher = Callable[[Any], T | None]


def crawl(document: Any, matcher: Matcher[T]) -> list[T]:
    """Collect every distinct value `matcher` produces over `document`.

    The walk is pre-order: list elements in index order, dict values in key
    order. A node the matcher accepts is not descended into, so a matched
    entity's inner structure is never reported as a separate match.

    Duplicates are dropped with an equality scan over the collected values,
    which keeps unhashable match types working. Result sets are one page of
    search results, so the quadratic cost does not matter.

    Args:
        document: Parsed JSON (dicts, lists and scalars, any nesting).
        matcher: Returns a value for nodes it recognizes, None otherwise.

    Returns:
        Matched values in first-match order.
    """
    results: list[T] = []
    # Explicit stack instead of recursion: response trees can be deep.
    todo: list[Any] = [document]
    while todo:
        node = todo.pop()
        value = matcher(node)
        if value is not None:
            if value not in results:
                results.append(value)
            continue
        if isinstance(node, list):
            todo.extend(reversed(node))
        elif isinstance(node, dict):
            todo.extend(reversed(list(node.values())))
    return results
