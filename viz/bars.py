from __future__ import annotations
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from memory.history import BenchmarkRecord

BAR_WIDTH = 10
BAR_GAP = 5


@dataclass(frozen=True)
class Bar:
    label: str
    value: int
    offset: int
    height: int


MAX_MS = 2**64 - 1


def to_ms(seconds: float) -> int:
    """Whole milliseconds, truncated and saturated to [0, MAX_MS]; NaN is 0."""
    ms = seconds * 1000.0
    if math.isnan(ms) or ms <= 0:
        return 0
    if ms >= MAX_MS:
        return MAX_MS
    return int(ms)


def time_series(records: Sequence[BenchmarkRecord]) -> List[Tuple[str, int]]:
    """Elapsed time per record in whole milliseconds."""
    return [(r.name, to_ms(r.elapsed_seconds)) for r in records]


def block_series(records: Sequence[BenchmarkRecord]) -> List[Tuple[str, int]]:
    return [(r.name, r.total_block_count) for r in records]


def bar_heights(values: Sequence[int], rows: int) -> np.ndarray:
    """Scale values so the largest fills `rows`; all zeros stay empty."""
    v = np.asarray(values, dtype=np.float64)
    if v.size == 0 or rows <= 0:
        return np.zeros(v.size, dtype=np.int64)
    vmax = v.max()
    if vmax <= 0:
        return np.zeros(v.size, dtype=np.int64)
    return np.floor(v / vmax * rows).astype(np.int64)


def map_bars(data: Sequence[Tuple[str, int]], width: int, rows: int) -> List[Bar]:
    """Place one bar per (label, value), left to right, keeping only whole bars."""
    heights = bar_heights([v for _, v in data], rows)
    bars = []
    x = 0
    for (label, value), h in zip(data, heights):
        if x + BAR_WIDTH > width:
            break
        bars.append(Bar(label, value, x, int(h)))
        x += BAR_WIDTH + BAR_GAP
    return bars
