"""Test fixtures for DazzleWalk consumers.

These helpers record what a walk did so test suites of projects that
consume DazzleWalk can assert on event order, paths and control flow
without re-implementing the same bookkeeping in every test.
"""

import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.event import Event


class EventRecorder:
    """Event handler that remembers every event it receives.

    Example:
        recorder = EventRecorder()
        walker.on_handler(recorder)
        walker.handle(data)
        assert recorder.paths == ['.a', '.b.c']
    """

    def __init__(self, on_event: Optional[Callable[[Event], None]] = None):
        """Initialize the recorder.

        Args:
            on_event: Optional callable run after each event is recorded,
                e.g. to pause or end the walk at a given point
        """
        self.events: List[Event] = []
        self._on_event = on_event
        self._lock = threading.Lock()

    def __call__(self, event: Event) -> None:
        with self._lock:
            self.events.append(event)
        if self._on_event is not None:
            self._on_event(event)

    @property
    def count(self) -> int:
        return len(self.events)

    @property
    def values(self) -> List[Any]:
        return [event.value for event in self.events]

    @property
    def paths(self) -> List[Optional[str]]:
        return [event.path for event in self.events]

    @property
    def depths(self) -> List[int]:
        return [event.depth for event in self.events]

    def pairs(self) -> List[Tuple[Optional[str], Any]]:
        """``(path, value)`` for every recorded event, in order."""
        return [(event.path, event.value) for event in self.events]

    def clear(self) -> None:
        with self._lock:
            self.events.clear()


def sample_person() -> Dict[str, Any]:
    """A small nested record with 11 leaves and 5 nested containers.

    Structure:
        name, age
        address: {street, city}
        hobbies: [reading, swimming, coding]
        phones: [{type, number}, {type, number}]
    """
    return {
        "name": "John Doe",
        "age": 30,
        "address": {
            "street": "123 Main St",
            "city": "New York",
        },
        "hobbies": ["reading", "swimming", "coding"],
        "phones": [
            {"type": "mobile", "number": "555-1234"},
            {"type": "home", "number": "555-5678"},
        ],
    }


def build_nested_record(depth: int, width: int, leaf: Any = "leaf") -> Dict[str, Any]:
    """Build a record nested ``depth`` levels deep with ``width`` fields each.

    The record has ``width ** depth`` leaves; ``depth`` 0 gives an empty record.
    """
    if depth <= 0:
        return {}
    if depth == 1:
        return {f"k{i}": leaf for i in range(width)}
    return {f"k{i}": build_nested_record(depth - 1, width, leaf) for i in range(width)}


def build_deep_chain(depth: int, leaf: Any = "bottom") -> Dict[str, Any]:
    """Build ``{"next": {"next": ... leaf}}`` nested ``depth`` times."""
    value: Any = leaf
    for _ in range(depth):
        value = {"next": value}
    return value
