"""DazzleWalk - Pausable Walking of Nested Data.

DazzleWalk walks arbitrarily shaped nested data (records, sequences and
custom composite values) and fires one event per visited item to your
handlers. Handlers can pause, resume, skip or end the walk - resuming may
happen later, from another thread or an event loop callback.

Getting started:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Functional:
    from dazzlewalk import walk, collect_leaves

Walkers:
    from dazzlewalk import RecordWalker, SequenceWalker, Walker

asyncio:
    from dazzlewalk.aio import walk_async, resume_later
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

import logging

__version__ = "0.1.0"

from .config import Keys, WalkConfig
from .exceptions import WalkEndedError, WalkerConfigurationError, WalkerError
from .error_policies import (
    CollectTeardownErrorsPolicy,
    LogTeardownErrorsPolicy,
    TeardownErrorPolicy,
    ThresholdTeardownPolicy,
)
from .core import Event, Item, Level, WalkContext, WalkOutcome, WalkState, Walker
from .adapters import (
    DataclassWalker,
    Difference,
    Differences,
    DifferencesWalker,
    Operation,
    RecordWalker,
    SequenceWalker,
)
from .api import collect_leaves, collect_paths, count_events, default_walker, find_items, walk
from . import aio

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Core
    "Item",
    "Level",
    "Event",
    "Walker",
    "WalkContext",
    "WalkState",
    "WalkOutcome",
    # Adapters
    "RecordWalker",
    "SequenceWalker",
    "DifferencesWalker",
    "Difference",
    "Differences",
    "Operation",
    "DataclassWalker",
    # Config and errors
    "Keys",
    "WalkConfig",
    "WalkerError",
    "WalkerConfigurationError",
    "WalkEndedError",
    "TeardownErrorPolicy",
    "LogTeardownErrorsPolicy",
    "CollectTeardownErrorsPolicy",
    "ThresholdTeardownPolicy",
    # API
    "walk",
    "collect_leaves",
    "collect_paths",
    "count_events",
    "find_items",
    "default_walker",
    "aio",
]
