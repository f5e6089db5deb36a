"""Core abstractions for DazzleWalk.

This package contains the walk engine: Items, Levels, Events, the Walker
base class and the WalkContext that drives a walk.
"""

from .item import Item
from .level import Level
from .event import Event
from .context import WalkContext, WalkState, WalkOutcome
from .walker import Walker

__all__ = [
    "Item",
    "Level",
    "Event",
    "WalkContext",
    "WalkState",
    "WalkOutcome",
    "Walker",
]
