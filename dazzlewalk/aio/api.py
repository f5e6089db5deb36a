"""asyncio integration for DazzleWalk.

The engine itself never awaits anything: a walk runs synchronously until it
ends or a handler pauses it. These helpers let coroutine code wait for the
end of a walk and resume a paused walk from the event loop, e.g. after a
timer or once some I/O completed.
"""

import asyncio
import logging
from typing import Any, Optional

from ..core.context import WalkContext
from ..core.walker import Walker

logger = logging.getLogger(__name__)


async def wait_for_end(context: WalkContext, timeout: Optional[float] = None) -> WalkContext:
    """Wait until ``context`` has ended without blocking the event loop.

    The walk may be resumed from any thread; completion is handed back to
    this loop with ``call_soon_threadsafe``.

    Args:
        context: The walk to wait for
        timeout: Seconds to wait (None = no limit)

    Returns:
        The ended context

    Raises:
        asyncio.TimeoutError: If the walk did not end in time
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def _set_result(ctx: WalkContext) -> None:
        if not future.done():
            future.set_result(ctx)

    def _on_done(ctx: WalkContext) -> None:
        loop.call_soon_threadsafe(_set_result, ctx)

    context.add_done_callback(_on_done)
    return await asyncio.wait_for(future, timeout)


async def walk_async(walker: Walker, value: Any, timeout: Optional[float] = None) -> WalkContext:
    """Start a walk and await its end.

    Handlers may pause the walk and arrange for ``context.resume()`` to be
    called later (see ``resume_later``); the coroutine completes once the
    walk really ended.

    Example:
        >>> def handler(event):
        ...     event.pause()
        ...     resume_later(event.context, 0.1)
        >>> walker.on_handler(handler)
        >>> context = await walk_async(walker, data)
    """
    context = walker.handle(value)
    return await wait_for_end(context, timeout)


def resume_later(context: WalkContext, delay: float,
                 loop: Optional[asyncio.AbstractEventLoop] = None) -> asyncio.TimerHandle:
    """Schedule ``context.resume()`` on the event loop after ``delay`` seconds.

    Args:
        context: A (soon to be) paused walk
        delay: Seconds to wait before resuming
        loop: Event loop to use (default: the running loop)

    Returns:
        The TimerHandle, which can be cancelled
    """
    loop = loop or asyncio.get_running_loop()
    logger.debug("Resuming %r in %.3fs", context, delay)
    return loop.call_later(delay, context.resume)
