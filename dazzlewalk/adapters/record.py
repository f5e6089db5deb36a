"""Walker for record-shaped values (plain ``dict``)."""

import logging
from typing import Iterator

from ..core.context import WalkContext
from ..core.item import Item
from ..core.walker import Walker
from .paths import join_field, path_of
from .sequence import SequenceWalker

logger = logging.getLogger(__name__)


class RecordWalker(Walker):
    """Walks the fields of a ``dict`` in insertion order.

    Each child is keyed by field name: its path is the parent's path with
    ``".<field>"`` appended.
    """

    def value_type(self) -> type:
        return dict

    def children_of(self, item: Item, context: WalkContext) -> Iterator[Item]:
        record = item.value
        path = path_of(item, context)
        key = context.config.path_key
        logger.debug("Walking record at %s with %d fields", path, len(record))
        for name, value in record.items():
            yield item.derive_child(value).put(key, join_field(path, name))

    @classmethod
    def instance(cls, **kwargs) -> "RecordWalker":
        """Record walker that also descends into nested records and lists.

        Args:
            **kwargs: Passed to the outer walker (config, fire_entry_event)

        Returns:
            RecordWalker with RecordWalker and SequenceWalker registered
        """
        return cls([cls(), SequenceWalker()], **kwargs)
