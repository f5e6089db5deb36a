"""Reference walkers for common data shapes.

These are thin adapters: they only enumerate children and record a display
path for each one. All traversal logic lives in dazzlewalk.core.
"""

from .paths import join_field, join_index, path_of, remove_end_dot
from .record import RecordWalker
from .sequence import SequenceWalker
from .differences import Difference, Differences, DifferencesWalker, Operation
from .attributes import DataclassWalker

__all__ = [
    'RecordWalker',
    'SequenceWalker',
    'DifferencesWalker',
    'Difference',
    'Differences',
    'Operation',
    'DataclassWalker',
    'join_field',
    'join_index',
    'path_of',
    'remove_end_dot',
]
