from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Union


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def inner(self, margin: int = 1) -> 'Rect':
        """Area left inside a border `margin` cells thick."""
        w = max(0, self.width - 2*margin)
        h = max(0, self.height - 2*margin)
        return Rect(self.x + margin, self.y + margin, w, h)


@dataclass(frozen=True)
class Length:
    rows: int


@dataclass(frozen=True)
class Min:
    rows: int


@dataclass(frozen=True)
class Percentage:
    percent: int


Constraint = Union[Length, Min, Percentage]


def _wanted(c: Constraint, total: int) -> int:
    if isinstance(c, Length):
        return c.rows
    if isinstance(c, Min):
        return c.rows
    return total * c.percent // 100


def split_vertical(area: Rect, constraints: Sequence[Constraint]) -> List[Rect]:
    """Stack regions top to bottom inside `area`.

    Length and Percentage regions get their size; Min regions share what is
    left (the first Min takes it all). With no Min region the last region
    absorbs any rounding remainder. When the area is too short, regions are
    cut from the bottom up and may end with height 0.
    """
    heights = [_wanted(c, area.height) for c in constraints]
    spare = area.height - sum(heights)
    if spare > 0 and constraints:
        flex = [i for i, c in enumerate(constraints) if isinstance(c, Min)]
        heights[flex[0] if flex else -1] += spare

    out = []
    y = area.y
    for h in heights:
        h = max(0, min(h, area.bottom - y))
        out.append(Rect(area.x, y, area.width, h))
        y += h
    return out
