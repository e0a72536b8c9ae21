"""
Split a length into whole prefab units plus a leftover.

Given a target length and the physical lengths of the available segment
prefabs, produce groups of units largest-first so a line can be tiled with
as few pieces as possible. Used by the segment line builder.
"""

import math
from dataclasses import dataclass, field


@dataclass
class UnitGroup:
    """
    One slot of a decomposition.

    Whole-unit groups have `unit_size` set and `items` holding `count` copies of
    the unit. The trailing remainder group has `unit_size=None` and a single
    item: the leftover length.
    """
    unit_size: float | None
    count: int
    items: list[float] = field(default_factory=list)
    is_fractional: bool = False

    @property
    def sum(self) -> float:
        return sum(self.items)

    @property
    def is_remainder(self) -> bool:
        return self.unit_size is None

    @property
    def remainder(self) -> float | None:
        return self.items[0] if self.is_remainder else None


def decompose_units(target_length: float, units) -> list[UnitGroup]:
    """
    Greedy decomposition of `target_length` into `units`, largest unit first.

    Every unit gets a group, even with a count of 0, so callers can index
    groups by unit. If anything is left over, a final remainder group is
    appended; it is fractional when the leftover lies strictly between 0 and 1.

    Example:
        decompose_units(12.5, [1, 5])
        -> [5 x2, 1 x2, remainder 0.5 (fractional)]
    """
    remaining = target_length
    groups: list[UnitGroup] = []

    for unit in sorted((u for u in units if u > 0), reverse=True):
        count = max(0, math.floor(remaining / unit))
        remaining -= unit * count
        groups.append(UnitGroup(unit_size=unit, count=count, items=[unit] * count))

    if remaining != 0:
        groups.append(UnitGroup(
            unit_size=None,
            count=1,
            items=[remaining],
            is_fractional=0 < remaining < 1,
        ))

    return groups
