"""Hierarchy traversal helpers.

The layout engine never walks milestone → deliverable → task nesting by
itself. It receives a span extractor (``items -> iterable of (start, end)``)
and the default extractors below do the walking.
"""

from __future__ import annotations

from typing import (
    Any,
    Callable,
    Collection,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from .models import TimedItem

Span = Tuple[Any, Any]
SpanExtractor = Callable[[Iterable[Any]], Iterable[Span]]

DEFAULT_CHILD_KEYS: Tuple[str, ...] = ("deliverables", "tasks")
START_KEY = "calculatedStartDate"
END_KEY = "calculatedEndDate"


def walk_items(
    items: Iterable[TimedItem],
    *,
    expanded: Optional[Collection[str]] = None,
    level: int = 0,
) -> Iterator[Tuple[TimedItem, int]]:
    """Yield ``(item, level)`` depth-first.

    With ``expanded`` set, children are only visited for items whose id is
    in it, which mirrors which rows are on screen.
    """

    for item in items:
        yield item, level
        if not item.children:
            continue
        if expanded is not None and item.item_id not in expanded:
            continue
        yield from walk_items(item.children, expanded=expanded, level=level + 1)


def iter_item_spans(items: Iterable[TimedItem]) -> Iterator[Span]:
    """Span extractor for ``TimedItem`` trees: every item at every depth."""

    for item, _level in walk_items(items):
        yield item.start, item.end


def iter_record_spans(
    records: Iterable[Mapping[str, Any]],
    child_keys: Sequence[str] = DEFAULT_CHILD_KEYS,
) -> Iterator[Span]:
    """Span extractor for raw API records (camelCase dicts).

    ``child_keys[0]`` is read on the top level, ``child_keys[1]`` one level
    down and so on, matching milestone → deliverables → tasks.
    """

    for record in records or ():
        if not isinstance(record, Mapping):
            continue
        yield record.get(START_KEY), record.get(END_KEY)
        if child_keys:
            children = record.get(child_keys[0]) or ()
            yield from iter_record_spans(children, child_keys[1:])


def expand_all_ids(items: Iterable[TimedItem]) -> frozenset:
    """Ids of every item that has children ("Expand All")."""

    return frozenset(
        item.item_id for item, _level in walk_items(items) if item.has_children
    )


def iter_spans(
    items: Iterable[Any],
    child_keys: Sequence[str] = DEFAULT_CHILD_KEYS,
) -> Iterator[Span]:
    """Default span extractor: accepts ``TimedItem`` trees and raw records.

    Each element is dispatched on its own, so a list may mix both shapes.
    Anything else is skipped.
    """

    for item in items or ():
        if isinstance(item, TimedItem):
            yield from iter_item_spans((item,))
        elif isinstance(item, Mapping):
            yield from iter_record_spans((item,), child_keys)
