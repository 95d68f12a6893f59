"""
Memory map layout.

Turns the ordered blocks of one Step into horizontal spans inside a region
`width` columns wide. Offsets are relative to the region's left edge.

Rules, applied in block order:
  - width = round(size / total_size * region_width), half away from zero
  - every block gets at least one column
  - blocks are packed left to right with no gaps
  - a block crossing the right edge is cut to the remaining columns; once
    no column remains, the rest of the blocks are not placed
A step whose blocks sum to zero produces an empty layout.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from memory.history import Block, Step

# a size label is only drawn into blocks wider than this
LABEL_MIN_WIDTH = 4

FREE_FILL = "green"
USED_FILL = "red"


@dataclass(frozen=True)
class BlockStyle:
    fill: str
    fg: str
    bold: bool


@dataclass(frozen=True)
class PlacedBlock:
    block: Block
    offset: int
    width: int
    highlighted: bool
    style: BlockStyle
    label: Optional[str] = None
    label_offset: Optional[int] = None


@dataclass(frozen=True)
class Layout:
    width: int
    placed: Tuple[PlacedBlock, ...]
    total_size: int
    block_count: int


def block_style(block: Block, highlighted: bool) -> BlockStyle:
    fill = FREE_FILL if block.is_free else USED_FILL
    if highlighted:
        return BlockStyle(fill, "white", True)
    return BlockStyle(fill, "black", False)


def proportional_widths(sizes: Sequence[int], width: int) -> np.ndarray:
    """Rounded share of `width` for each size, floored at one column.

    Caller guarantees sum(sizes) > 0.
    """
    s = np.asarray(sizes, dtype=np.float64)
    total = s.sum()
    # ratios are non-negative, so floor(x + 0.5) rounds half away from zero
    w = np.floor(s / total * float(width) + 0.5).astype(np.int64)
    return np.maximum(w, 1)


def place_label(text: str, offset: int, width: int) -> Tuple[Optional[str], Optional[int]]:
    """Center `text` inside the block's border, one column in from each side."""
    if width <= LABEL_MIN_WIDTH:
        return None, None
    inner = width - 2
    text = text[:inner]
    return text, offset + 1 + (inner - len(text)) // 2


def layout_blocks(blocks: Sequence[Block], highlight: str, width: int) -> Layout:
    total = sum(b.size for b in blocks)
    if total == 0 or width <= 0:
        return Layout(max(width, 0), (), total, len(blocks))

    placed = []
    x = 0
    for b, w in zip(blocks, proportional_widths([b.size for b in blocks], width)):
        w = int(w)
        if x + w > width:
            w = width - x
        if w == 0:
            break
        hl = b.address == highlight
        label, label_x = place_label(str(b.size), x, w)
        placed.append(PlacedBlock(b, x, w, hl, block_style(b, hl), label, label_x))
        x += w
    return Layout(width, tuple(placed), total, len(blocks))


def layout_step(step: Step, width: int) -> Layout:
    return layout_blocks(step.blocks, step.highlighted_address, width)
