"""Item abstraction for DazzleWalk.

An Item is intentionally kept simple - it wraps one visited value together
with free-form metadata and a link to the Item it was derived from. How the
children of a value are found is the Walker's business, not the Item's.
"""

from typing import Any, Dict, Iterator, Optional


class Item:
    """One visited value plus its metadata and parent link.

    ``value`` and ``parent`` are fixed at construction; only the metadata
    store can change afterwards. The parent link points child-to-parent only
    (a parent never holds its children), so Items never form an ownership
    cycle and are released as soon as the walk drops them.

    Items compare by identity: two Items wrapping equal values at different
    positions are different Items.
    """

    __slots__ = ("_value", "_parent", "_metadata")

    def __init__(self, value: Any, parent: Optional["Item"] = None):
        """Wrap a value.

        Args:
            value: The wrapped value (may be None)
            parent: Item this one was derived from, None for the root
        """
        self._value = value
        self._parent = parent
        self._metadata: Optional[Dict[str, Any]] = None

    @property
    def value(self) -> Any:
        """The wrapped value."""
        return self._value

    @property
    def parent(self) -> Optional["Item"]:
        """The Item this one was derived from, or None for the root."""
        return self._parent

    def derive_child(self, value: Any) -> "Item":
        """Create a child Item for ``value``.

        The child starts with empty metadata; nothing is copied from the
        receiver except the parent link.
        """
        return Item(value, self)

    # Metadata

    def _store(self) -> Dict[str, Any]:
        if self._metadata is None:
            self._metadata = {}
        return self._metadata

    @property
    def metadata(self) -> Dict[str, Any]:
        """Live metadata dictionary (created on first access)."""
        return self._store()

    def all_metadata(self) -> Dict[str, Any]:
        """Return the live metadata dictionary."""
        return self._store()

    def put(self, key: str, value: Any) -> "Item":
        """Store a metadata entry, replacing any previous value.

        Returns:
            self, so calls can be chained while building children
        """
        self._store()[key] = value
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """Read a metadata entry."""
        if self._metadata is None:
            return default
        return self._metadata.get(key, default)

    def remove(self, key: str) -> Any:
        """Remove a metadata entry, returning its value (None if absent)."""
        if self._metadata is None:
            return None
        return self._metadata.pop(key, None)

    # Hierarchy helpers

    def ancestors(self) -> Iterator["Item"]:
        """Yield parent, grandparent, ... up to the root."""
        current = self._parent
        while current is not None:
            yield current
            current = current._parent

    @property
    def path(self) -> Optional[str]:
        """Display path recorded by the reference adapters, if any."""
        from ..config import Keys
        return self.get(Keys.PATH)

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}(value={self._value!r}, meta={self._metadata!r})"
