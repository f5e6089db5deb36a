"""Walker for user-defined composite values declared as dataclasses."""

import dataclasses
from typing import Iterable, Iterator, Optional

from ..core.context import WalkContext
from ..core.item import Item
from ..core.walker import Walker
from ..exceptions import WalkerConfigurationError
from .paths import join_field, path_of


class DataclassWalker(Walker):
    """Walks the fields of one dataclass type in declaration order.

    Example:
        >>> @dataclass
        ... class Person:
        ...     name: str
        ...     skills: list
        >>> walker = RecordWalker([DataclassWalker(Person), SequenceWalker()])
    """

    def __init__(self,
                 cls: type,
                 walkers: Optional[Iterable[Walker]] = None,
                 **kwargs):
        """Initialize the walker.

        Args:
            cls: The dataclass type handled
            walkers: Child walkers to register
            **kwargs: config / fire_entry_event, see Walker

        Raises:
            WalkerConfigurationError: If ``cls`` is not a dataclass type
        """
        if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
            raise WalkerConfigurationError(f"{cls!r} is not a dataclass type")
        self._cls = cls
        super().__init__(walkers, **kwargs)

    def value_type(self) -> type:
        return self._cls

    def children_of(self, item: Item, context: WalkContext) -> Iterator[Item]:
        value = item.value
        path = path_of(item, context)
        key = context.config.path_key
        for field in dataclasses.fields(value):
            yield item.derive_child(getattr(value, field.name)).put(
                key, join_field(path, field.name)
            )
