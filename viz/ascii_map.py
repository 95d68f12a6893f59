from __future__ import annotations
from viz.layout import Layout

USED_SYM = '#'
FREE_SYM = '.'
HIGHLIGHT_SYM = '*'

def render_map(layout: Layout) -> str:
    """One line per layout: '#' used, '.' free, '*' highlighted; unused columns are blank."""
    buf=[' ']*layout.width
    for p in layout.placed:
        if p.highlighted:
            ch=HIGHLIGHT_SYM
        else:
            ch=FREE_SYM if p.block.is_free else USED_SYM
        for i in range(p.offset, p.offset+p.width):
            buf[i]=ch
    return ''.join(buf)
