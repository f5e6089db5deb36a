"""Level abstraction for DazzleWalk.

A Level is one open frontier of a walk: the not-yet-visited children of a
single composite value. The context keeps Levels on an explicit stack, and
that stack is the only record of where a walk currently is.
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional, TYPE_CHECKING

from .item import Item

if TYPE_CHECKING:
    from .context import WalkContext

logger = logging.getLogger(__name__)

# Returned by next_item() once the children are used up
EXHAUSTED = object()


class Level:
    """The pending children of one composite value.

    The children are consumed lazily, left to right, at most once. Once a
    Level is popped from the stack it is never entered again.
    """

    def __init__(self,
                 children: Iterable[Item],
                 context: "WalkContext",
                 parent: Optional[Item] = None):
        """Create a level over ``children``.

        Args:
            children: Iterable of child Items (turned into a single-pass iterator)
            context: The walk this level belongs to
            parent: Item whose children these are
        """
        self._iterator = iter(children)
        self._context = context
        self._parent = parent
        self._exhausted = False
        self._data: Optional[Dict[str, Any]] = None

        self.next_level_handler: Optional[Callable[["Level"], None]] = None
        self.exit_level_handler: Optional[Callable[["Level"], None]] = None
        self.walk_end_handler: Optional[Callable[["WalkContext"], None]] = None

    @property
    def context(self) -> "WalkContext":
        """The walk this level belongs to."""
        return self._context

    @property
    def parent(self) -> Optional[Item]:
        """Item that produced this level's children."""
        return self._parent

    @property
    def exhausted(self) -> bool:
        """True once every child has been pulled."""
        return self._exhausted

    def next_item(self) -> Any:
        """Pull the next child Item, or EXHAUSTED when there are none left.

        Errors raised by the walker's child iterator propagate to the caller.
        """
        if self._exhausted:
            return EXHAUSTED
        try:
            return next(self._iterator)
        except StopIteration:
            self._exhausted = True
            self._iterator = iter(())
            return EXHAUSTED

    # Lifecycle hooks - last registration wins

    def on_next_level(self, handler: Callable[["Level"], None]) -> "Level":
        """Call ``handler(child_level)`` when a deeper level is pushed from here."""
        self.next_level_handler = handler
        return self

    def on_exit_level(self, handler: Callable[["Level"], None]) -> "Level":
        """Call ``handler(level)`` when this level is popped."""
        self.exit_level_handler = handler
        return self

    def on_walk_end(self, handler: Callable[["WalkContext"], None]) -> "Level":
        """Call ``handler(context)`` if the walk ends while this level is open."""
        self.walk_end_handler = handler
        return self

    # Level-scoped storage

    def data(self) -> Dict[str, Any]:
        """Return the live level-scoped store."""
        if self._data is None:
            self._data = {}
        return self._data

    def put(self, key: str, value: Any) -> "Level":
        self.data()[key] = value
        return self

    def get(self, key: str, default: Any = None) -> Any:
        if self._data is None:
            return default
        return self._data.get(key, default)

    def remove(self, key: str) -> Any:
        if self._data is None:
            return None
        return self._data.pop(key, None)

    def __repr__(self) -> str:
        parent_value = self._parent.value if self._parent is not None else None
        return (f"{self.__class__.__name__}(parent={parent_value!r}, "
                f"exhausted={self._exhausted})")
