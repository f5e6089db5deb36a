#!/usr/bin/env python3
"""
Custom walker example for DazzleWalk.

Shows how to teach DazzleWalk a new data shape: a small org-chart type
whose children are its direct reports. Only ``value_type`` and
``children_of`` need implementing; the engine does the rest.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from dazzlewalk import Item, WalkContext, Walker
from dazzlewalk.adapters import join_field, path_of


@dataclass
class Employee:
    name: str
    title: str
    reports: List["Employee"] = field(default_factory=list)


class OrgChartWalker(Walker):
    """Visits the direct reports of an Employee."""

    def value_type(self) -> type:
        return Employee

    def children_of(self, item: Item, context: WalkContext) -> Iterator[Item]:
        path = path_of(item, context)
        for report in item.value.reports:
            yield item.derive_child(report).put("path", join_field(path, report.name))

    def enter(self, level):
        # Report team size once a manager's level closes
        level.on_exit_level(
            lambda lvl: print(f"  ({lvl.parent.value.name} has {len(lvl.parent.value.reports)} reports)")
        )


def main():
    chart = Employee("ada", "CEO", [
        Employee("grace", "CTO", [Employee("linus", "Engineer"), Employee("guido", "Engineer")]),
        Employee("barbara", "CFO"),
    ])

    walker = OrgChartWalker([OrgChartWalker(fire_entry_event=True)])
    walker.on_handler(lambda event: print(f"{'  ' * event.depth}{event.value.title}: {event.path}"))
    walker.handle(chart)


if __name__ == "__main__":
    main()
