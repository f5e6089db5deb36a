#!/usr/bin/env python3
"""
Flow control example for DazzleWalk.

A handler pauses the walk at every phone entry and a timer thread resumes
it a moment later, the way a handler waiting on slow I/O would. A second
walk ends early as soon as a value is found.
"""

import sys
import threading
import time
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzlewalk import RecordWalker, find_items
from dazzlewalk.testing import sample_person


def paused_walk():
    started = time.perf_counter()

    def handler(event):
        elapsed = time.perf_counter() - started
        print(f"[{elapsed:5.2f}s] {event.path} = {event.value!r}")
        if event.path.startswith(".phones"):
            event.pause()
            threading.Timer(0.2, event.context.resume).start()

    walker = RecordWalker.instance().on_handler(handler)
    context = walker.handle(sample_person())
    print(f"handle() returned, walk is {context.state.value}")
    context.join()
    print(f"walk is {context.state.value} after {time.perf_counter() - started:.2f}s")


def early_end():
    items = find_items(sample_person(), lambda e: e.value == "swimming", limit=1)
    print(f"Found {items[0].value!r} at {items[0].path}")


if __name__ == "__main__":
    paused_walk()
    print()
    early_end()
