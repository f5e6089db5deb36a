"""Event delivered to handlers for every fired item."""

from typing import Any, Dict, Optional, TYPE_CHECKING

from .item import Item
from .level import Level

if TYPE_CHECKING:
    from .context import WalkContext
    from .walker import Walker


class Event:
    """Read-only view of one visited Item, plus a mutable walker slot.

    The slot holds the walker that will process this item's children once
    every handler has run. Handlers may replace it (to redirect dispatch) or
    clear it with ``set_walker_override(None)`` to treat the item as a leaf.
    """

    __slots__ = ("_item", "_level", "_depth", "_walker")

    def __init__(self, item: Item, level: Level, depth: int,
                 walker: Optional["Walker"] = None):
        self._item = item
        self._level = level
        self._depth = depth
        self._walker = walker

    @property
    def item(self) -> Item:
        return self._item

    @property
    def value(self) -> Any:
        return self._item.value

    @property
    def metadata(self) -> Dict[str, Any]:
        return self._item.metadata

    @property
    def path(self) -> Optional[str]:
        """Display path of the item under the walk's configured path key."""
        return self._item.get(self.context.config.path_key)

    @property
    def depth(self) -> int:
        """Depth of the item; the root value's own children are at 0."""
        return self._depth

    @property
    def level(self) -> Level:
        """The Level this item was pulled from."""
        return self._level

    @property
    def context(self) -> "WalkContext":
        return self._level.context

    # Control shortcuts

    def end(self) -> None:
        """End the whole walk."""
        self.context.end()

    def pause(self) -> "WalkContext":
        return self.context.pause()

    def skip_level(self) -> None:
        """Abandon the remaining siblings of this item."""
        self.context.skip_level()

    # Walker slot

    def has_walker_override(self) -> bool:
        """True when a walker will process this item's children."""
        return self._walker is not None

    def walker_override(self) -> Optional["Walker"]:
        return self._walker

    def set_walker_override(self, walker: Optional["Walker"]) -> None:
        self._walker = walker

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(value={self.value!r}, "
                f"meta={self.metadata!r}, depth={self._depth})")
