"""Walker for sequence-shaped values."""

import logging
from typing import Iterable, Iterator, Optional

from ..core.context import WalkContext
from ..core.item import Item
from ..core.walker import Walker
from .paths import join_index, path_of

logger = logging.getLogger(__name__)


class SequenceWalker(Walker):
    """Walks the elements of a ``list`` (or another exact sequence type).

    Each child carries its position: its path is the parent's path with
    ``"[<index>]"`` appended.
    """

    def __init__(self,
                 walkers: Optional[Iterable[Walker]] = None,
                 *,
                 sequence_type: type = list,
                 **kwargs):
        """Initialize the walker.

        Args:
            walkers: Child walkers to register
            sequence_type: Exact type handled, e.g. ``tuple`` (default ``list``)
            **kwargs: config / fire_entry_event, see Walker
        """
        self._sequence_type = sequence_type
        super().__init__(walkers, **kwargs)

    def value_type(self) -> type:
        return self._sequence_type

    def children_of(self, item: Item, context: WalkContext) -> Iterator[Item]:
        sequence = item.value
        path = path_of(item, context)
        key = context.config.path_key
        if not sequence:
            logger.debug("Sequence at %s is empty", path)
            return
        for index, value in enumerate(sequence):
            yield item.derive_child(value).put(key, join_index(path, index))

    @classmethod
    def instance(cls, **kwargs) -> "SequenceWalker":
        """Sequence walker that also descends into nested records and lists."""
        from .record import RecordWalker
        return cls([RecordWalker(), cls()], **kwargs)
