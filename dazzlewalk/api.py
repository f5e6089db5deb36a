"""High-level API for DazzleWalk.

This module provides simple, functional interfaces for common walking
operations over JSON-like data. These functions wrap the object-oriented
Walker / WalkContext API for ease of use in simple cases.
"""

from typing import Any, Callable, List, Optional, Tuple

from .config import WalkConfig
from .core.context import WalkContext, WalkOutcome
from .core.event import Event
from .core.item import Item
from .core.walker import Walker
from .adapters.record import RecordWalker
from .adapters.sequence import SequenceWalker


def default_walker(value: Any, config: Optional[WalkConfig] = None) -> Walker:
    """Pick a reference walker for plain JSON-like data.

    Args:
        value: Root value about to be walked
        config: Optional configuration for the walk

    Returns:
        A fresh walker able to descend into nested dicts and lists

    Raises:
        TypeError: If ``value`` is neither a dict nor a list
    """
    kwargs = {"config": config} if config is not None else {}
    if type(value) is dict:
        return RecordWalker.instance(**kwargs)
    if type(value) is list:
        return SequenceWalker.instance(**kwargs)
    raise TypeError(
        f"No default walker for {type(value).__name__}; pass walker= explicitly"
    )


def walk(
    value: Any,
    *handlers: Callable[[Event], None],
    walker: Optional[Walker] = None,
    on_end: Optional[Callable[[WalkContext], None]] = None,
    on_error: Optional[Callable[[WalkContext], None]] = None,
    config: Optional[WalkConfig] = None,
) -> WalkContext:
    """Simple interface for walking a value.

    Args:
        value: Root value to walk
        *handlers: Event handlers for this walk only, invoked in order after
            any handlers already registered on the walker
        walker: Walker to use (default: picked by ``default_walker``)
        on_end: Callback for a successful walk (this walk only)
        on_error: Callback for a failed walk (this walk only)
        config: Configuration used when no walker is given

    Returns:
        The WalkContext of the walk (already ended unless a handler paused it)

    Example:
        >>> context = walk({"a": 1}, lambda event: print(event.path, event.value))
        .a 1
    """
    if walker is None:
        walker = default_walker(value, config)
    context = walker.handle(value, handlers=handlers)
    if on_end is not None or on_error is not None:
        context.add_done_callback(lambda ctx: _route(ctx, on_end, on_error))
    return context


def collect_leaves(value: Any, walker: Optional[Walker] = None) -> List[Tuple[Optional[str], Any]]:
    """Collect ``(path, value)`` for every fired item, in walk order.

    Raises:
        Exception: The walk's cause, if a walker or handler failed

    Example:
        >>> collect_leaves({"a": "x", "b": {"c": "y"}})
        [('.a', 'x'), ('.b.c', 'y')]
    """
    leaves: List[Tuple[Optional[str], Any]] = []
    context = walk(value, lambda event: leaves.append((event.path, event.value)), walker=walker)
    _raise_on_failure(context)
    return leaves


def collect_paths(value: Any, walker: Optional[Walker] = None) -> List[Optional[str]]:
    """Collect the display path of every fired item, in walk order."""
    return [path for path, _ in collect_leaves(value, walker)]


def count_events(value: Any, walker: Optional[Walker] = None) -> int:
    """Count the events a walk of ``value`` fires.

    Example:
        >>> count_events(["x", "y", "z"])
        3
    """
    counter = [0]

    def _count(event: Event) -> None:
        counter[0] += 1

    context = walk(value, _count, walker=walker)
    _raise_on_failure(context)
    return counter[0]


def find_items(
    value: Any,
    predicate: Callable[[Event], bool],
    walker: Optional[Walker] = None,
    limit: Optional[int] = None,
) -> List[Item]:
    """Find the Items whose events match ``predicate``.

    Args:
        value: Root value to walk
        predicate: Function deciding whether an event's item is wanted
        walker: Walker to use (default: picked by ``default_walker``)
        limit: Stop the walk once this many items matched

    Returns:
        Matching Items in walk order

    Example:
        >>> items = find_items(data, lambda e: e.value == "needle", limit=1)
        >>> items[0].path
        '.haystack[3]'
    """
    found: List[Item] = []

    def _match(event: Event) -> None:
        if predicate(event):
            found.append(event.item)
            if limit is not None and len(found) >= limit:
                event.end()

    context = walk(value, _match, walker=walker)
    _raise_on_failure(context)
    return found


def _route(context: WalkContext,
           on_end: Optional[Callable[[WalkContext], None]],
           on_error: Optional[Callable[[WalkContext], None]]) -> None:
    callback = on_end if context.outcome is WalkOutcome.SUCCESS else on_error
    if callback is not None:
        callback(context)


def _raise_on_failure(context: WalkContext) -> None:
    if context.failed:
        raise context.cause
