"""asyncio helpers for DazzleWalk.

The walk engine is synchronous; this package connects it to an event loop
so coroutine code can await the end of a walk and resume paused walks from
loop callbacks.
"""

from .api import resume_later, wait_for_end, walk_async

__all__ = [
    'walk_async',
    'wait_for_end',
    'resume_later',
]
