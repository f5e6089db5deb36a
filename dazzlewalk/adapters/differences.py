"""Walker for delta records.

A ``Differences`` value is an ordered collection of ``Difference`` entries in
the shape of JSON Patch operations (``op`` / ``path`` / ``value`` /
``from``). The walker visits each entry as a leaf; entries already carry
their own target path, so no display path is assigned.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional

from ..core.context import WalkContext
from ..core.item import Item
from ..core.walker import Walker


class Operation(Enum):
    """Kind of change a Difference describes."""
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    COPY = "copy"
    TEST = "test"


@dataclass(frozen=True)
class Difference:
    """One change between two documents."""

    operation: Operation
    path: str
    value: Any = None
    from_path: Optional[str] = None    # Source path for move/copy

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Difference':
        """Build a Difference from a JSON Patch style mapping.

        Raises:
            ValueError: If ``op`` is missing or unknown
        """
        return cls(
            operation=Operation(data["op"]),
            path=data.get("path", ""),
            value=data.get("value"),
            from_path=data.get("from"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON Patch style mapping for this Difference."""
        result: Dict[str, Any] = {"op": self.operation.value, "path": self.path}
        if self.operation in (Operation.ADD, Operation.REPLACE, Operation.TEST):
            result["value"] = self.value
        if self.from_path is not None:
            result["from"] = self.from_path
        return result


class Differences:
    """Ordered collection of Difference entries."""

    def __init__(self, differences: Iterable[Difference] = ()):
        self._differences: List[Difference] = list(differences)

    @classmethod
    def from_patch(cls, patch: Iterable[Dict[str, Any]]) -> 'Differences':
        """Build from a list of JSON Patch style mappings."""
        return cls(Difference.from_dict(entry) for entry in patch)

    def append(self, difference: Difference) -> 'Differences':
        self._differences.append(difference)
        return self

    def is_empty(self) -> bool:
        return not self._differences

    def to_patch(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self._differences]

    def __iter__(self) -> Iterator[Difference]:
        return iter(self._differences)

    def __len__(self) -> int:
        return len(self._differences)

    def __getitem__(self, index: int) -> Difference:
        return self._differences[index]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._differences!r})"


class DifferencesWalker(Walker):
    """Visits each Difference of a Differences collection, in order."""

    def value_type(self) -> type:
        return Differences

    def children_of(self, item: Item, context: WalkContext) -> Iterator[Item]:
        for difference in item.value:
            yield item.derive_child(difference)
