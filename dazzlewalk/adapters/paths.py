"""Display-path helpers shared by the reference adapters.

Convention: the root is ``"."``, a field access appends ``".<field>"`` and an
indexed access appends ``"[<index>]"``. A trailing ``"."`` is collapsed
before a field is appended, so the root's field ``a`` is ``".a"`` rather
than ``"..a"``. This is adapter policy; the engine never looks at paths.
"""

from typing import Any

from ..core.context import WalkContext
from ..core.item import Item


def remove_end_dot(path: str) -> str:
    """Strip one trailing dot, if present."""
    if path.endswith("."):
        return path[:-1]
    return path


def join_field(path: str, field: Any) -> str:
    """Path of field ``field`` under ``path``."""
    return f"{remove_end_dot(path)}.{field}"


def join_index(path: str, index: int) -> str:
    """Path of element ``index`` under ``path``."""
    return f"{path}[{index}]"


def path_of(item: Item, context: WalkContext) -> str:
    """Path recorded on ``item``, or the configured root path."""
    config = context.config
    path = item.get(config.path_key)
    if path is None:
        return config.root_path
    return str(path)
