#!/usr/bin/env python3
"""
Basic walk example for DazzleWalk.

This example demonstrates:
- Walking a JSON document loaded from a file (or a built-in sample)
- Display paths of every leaf
- Opting into container events
"""

import json
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from dazzlewalk import RecordWalker, SequenceWalker, collect_leaves
from dazzlewalk.testing import sample_person


def main():
    """Print every leaf, then every event including containers."""
    if len(sys.argv) > 1:
        data = json.loads(Path(sys.argv[1]).read_text())
    else:
        data = sample_person()

    print("Leaves")
    print("-" * 50)
    for path, value in collect_leaves(data):
        print(f"{path:<30} {value!r}")

    print()
    print("All events (containers included)")
    print("-" * 50)
    walker = RecordWalker([
        RecordWalker(fire_entry_event=True),
        SequenceWalker(fire_entry_event=True),
    ])
    walker.on_handler(lambda event: print(f"{'  ' * event.depth}{event.path}"))
    walker.on_end(lambda context: print("-" * 50, "\nDone"))
    walker.handle(data)


if __name__ == "__main__":
    main()
