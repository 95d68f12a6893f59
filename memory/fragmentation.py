from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence
import math

from memory.history import Block

@dataclass
class FragMetrics:
    total_free: int
    lfe: int
    external_frag: float
    entropy: float
    hole_count: int

def _entropy(ext_sizes: List[int]) -> float:
    total = sum(ext_sizes)
    if total <= 0:
        return 0.0
    ps = [s/total for s in ext_sizes if s>0]
    return -sum(p*math.log(p+1e-12, 2) for p in ps)

def free_extents(blocks: Sequence[Block]) -> List[int]:
    """Sizes of free runs, with adjacent free blocks merged into one extent."""
    ext=[]
    run=0
    in_run=False
    for b in blocks:
        if b.is_free:
            run += b.size
            in_run = True
        elif in_run:
            ext.append(run)
            run=0
            in_run=False
    if in_run:
        ext.append(run)
    return ext

def compute_metrics(blocks: Sequence[Block]) -> FragMetrics:
    sizes=[s for s in free_extents(blocks) if s>0]
    total_free=sum(sizes)
    lfe=max(sizes, default=0)
    holes=len(sizes)
    external = 0.0 if total_free==0 else max(0.0, 1.0 - (lfe/total_free))
    ent=_entropy(sizes)
    return FragMetrics(total_free, lfe, external, ent, holes)
