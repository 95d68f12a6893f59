"""
Frame composer for the curses viewer.

Screen layout (rows):

    +---------------------------+
    | tabs            (3 rows)  |
    +---------------------------+
    | content         (rest)    |   visualizer: header 3 / map rest / legend 3
    |                           |   statistics: time chart 50% / block chart 50%
    +---------------------------+
    | footer          (3 rows)  |
    +---------------------------+

Region math and text building are plain functions of the screen size and
the viewer state; `FrameComposer` only turns their output into curses
calls. Every write is clipped to the window, so a terminal smaller than
the frame shows whatever fits.
"""

from __future__ import annotations

import curses
from typing import Dict, List, Optional, Sequence, Tuple

from control.app import ViewerApp
from control.navigation import View
from memory.fragmentation import FragMetrics, compute_metrics
from memory.history import Step
from viz.bars import BAR_WIDTH, Bar, block_series, map_bars, time_series
from viz.layout import Layout, layout_step
from viz.regions import Length, Min, Percentage, Rect, split_vertical

APP_TITLE = "Heap Viz"
TAB_TITLES = ("Visualizer", "Statistics")
BOX_HEIGHT = 5
# rows between the map region's top edge and the block boxes
BOX_TOP_MARGIN = 2

KEY_TAB = 9

FOOTER_TEXT = {
    View.VISUALIZER: "Controls: [n] Next Step | [p] Prev Step | [TAB] Switch View | [q] Quit",
    View.STATISTICS: "Controls: [TAB] Switch View | [q] Quit",
}

COLORS = {
    "default": -1,
    "black": curses.COLOR_BLACK,
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
}

# (fg, bg) combinations the frame draws with
PAIRS = (
    ("black", "red"),
    ("white", "red"),
    ("black", "green"),
    ("white", "green"),
    ("black", "white"),
    ("cyan", "default"),
    ("yellow", "default"),
    ("magenta", "default"),
)


class Palette:
    """Maps (fg, bg) color names to curses attributes."""

    def __init__(self, pairs: Optional[Dict[Tuple[str, str], int]] = None):
        self.pairs = pairs or {}

    @classmethod
    def from_curses(cls) -> 'Palette':
        if not curses.has_colors():
            return cls()
        curses.start_color()
        curses.use_default_colors()
        pairs = {}
        for n, (fg, bg) in enumerate(PAIRS, start=1):
            curses.init_pair(n, COLORS[fg], COLORS[bg])
            pairs[(fg, bg)] = curses.color_pair(n)
        return cls(pairs)

    def attr(self, fg: str = "default", bg: str = "default", bold: bool = False) -> int:
        a = self.pairs.get((fg, bg), 0)
        if bold:
            a |= curses.A_BOLD
        return a


# ---------------------------------------------------------------------------
# region math and text

def frame_regions(screen: Rect) -> List[Rect]:
    """tabs, content, footer"""
    return split_vertical(screen, [Length(3), Min(1), Length(3)])


def visualizer_regions(content: Rect) -> List[Rect]:
    """header, memory map, legend"""
    return split_vertical(content, [Length(3), Min(1), Length(3)])


def statistics_regions(content: Rect) -> List[Rect]:
    return split_vertical(content, [Percentage(50), Percentage(50)])


def header_text(step: Step) -> str:
    return (f"Algorithm: {step.algorithm_name} | Step: {step.index} | "
            f"Op: {step.operation_label} | Highlight: {step.highlighted_address}")


def legend_summary(layout: Layout, metrics: Optional[FragMetrics] = None) -> Tuple[str, str]:
    """Totals text, and the fragmentation suffix shown when there is room."""
    totals = f" | Total Size: {layout.total_size} bytes | Blocks: {layout.block_count}"
    if metrics is None:
        return totals, ""
    frag = (f" | Free: {metrics.total_free} | Holes: {metrics.hole_count}"
            f" | Ext frag: {metrics.external_frag:.3f}")
    return totals, frag


LEGEND_KEYS = (
    (" Used (Red) ", ("black", "red"), False),
    (" ", None, False),
    (" Free (Green) ", ("black", "green"), False),
    (" ", None, False),
    (" Highlighted (Bold) ", None, True),
)


def box_rect(map_area: Rect, offset: int, width: int) -> Rect:
    """Screen rect of a block placed `offset` columns into the map, clipped to it."""
    y = map_area.y + BOX_TOP_MARGIN
    h = max(0, min(BOX_HEIGHT, map_area.bottom - y))
    return Rect(map_area.x + offset, y, width, h)


def apply_key(app: ViewerApp, key: int) -> bool:
    """Apply one key press; False means quit."""
    if key == ord('q'):
        return False
    if key == ord('n'):
        app.nav.next_step()
    elif key == ord('p'):
        app.nav.prev_step()
    elif key == KEY_TAB:
        app.nav.toggle_view()
    return True


# ---------------------------------------------------------------------------
# drawing

class FrameComposer:

    def __init__(self, window, palette: Optional[Palette] = None):
        self.window = window
        self.palette = palette or Palette()

    def screen(self) -> Rect:
        rows, cols = self.window.getmaxyx()
        return Rect(0, 0, cols, rows)

    def _put(self, y: int, x: int, text: str, attr: int = 0, clip: Optional[Rect] = None):
        area = self.screen()
        if clip is not None:
            left = max(area.x, clip.x)
            right = min(area.right, clip.right)
            top = max(area.y, clip.y)
            bottom = min(area.bottom, clip.bottom)
        else:
            left, right, top, bottom = area.x, area.right, area.y, area.bottom
        if not (top <= y < bottom) or x >= right or not text:
            return
        if x < left:
            text = text[left - x:]
            x = left
        text = text[:right - x]
        if not text:
            return
        try:
            self.window.addstr(y, x, text, attr)
        except curses.error:
            # writing the last cell of the window moves the cursor off-screen
            pass

    def _fill(self, rect: Rect, attr: int):
        for y in range(rect.y, rect.bottom):
            self._put(y, rect.x, " " * rect.width, attr, rect)

    def _box(self, rect: Rect, title: str = "", attr: int = 0):
        if rect.width < 2 or rect.height < 2:
            self._fill(rect, attr)
            return
        inner = rect.width - 2
        self._put(rect.y, rect.x, "┌" + "─" * inner + "┐", attr, rect)
        for y in range(rect.y + 1, rect.bottom - 1):
            self._put(y, rect.x, "│", attr, rect)
            self._put(y, rect.right - 1, "│", attr, rect)
        self._put(rect.bottom - 1, rect.x, "└" + "─" * inner + "┘", attr, rect)
        if title:
            self._put(rect.y, rect.x + 1, title[:inner], attr, rect)

    def _centered(self, rect: Rect, y: int, text: str, attr: int = 0):
        x = rect.x + max(0, (rect.width - len(text)) // 2)
        self._put(y, x, text, attr, rect)

    def draw(self, app: ViewerApp):
        self.window.erase()
        tabs, content, footer = frame_regions(self.screen())
        self.draw_tabs(tabs, app.nav.current_view)
        if app.nav.current_view is View.VISUALIZER:
            self.draw_visualizer(content, app.current_step())
        else:
            self.draw_statistics(content, app)
        self.draw_footer(footer, app.nav.current_view)
        self.window.refresh()

    def draw_tabs(self, area: Rect, view: View):
        self._box(area, APP_TITLE)
        inner = area.inner()
        x = inner.x + 1
        for i, title in enumerate(TAB_TITLES):
            if i:
                self._put(inner.y, x, " │ ", 0, inner)
                x += 3
            selected = i == view.value
            attr = self.palette.attr("yellow", bold=True) if selected else 0
            self._put(inner.y, x, title, attr, inner)
            x += len(title)

    def draw_footer(self, area: Rect, view: View):
        self._box(area, "Status")
        inner = area.inner()
        self._centered(inner, inner.y, FOOTER_TEXT[view])

    def draw_visualizer(self, area: Rect, step: Optional[Step]):
        if step is None:
            return
        header, map_area, legend = visualizer_regions(area)

        cyan = self.palette.attr("cyan")
        self._box(header, "Current Operation", cyan)
        hi = header.inner()
        self._put(hi.y, hi.x, header_text(step), cyan, hi)

        layout = layout_step(step, map_area.width)
        self.draw_map(map_area, layout)
        self.draw_legend(legend, layout, compute_metrics(step.blocks))

    def draw_map(self, map_area: Rect, layout: Layout):
        for p in layout.placed:
            style = p.style
            attr = self.palette.attr(style.fg, style.fill, style.bold)
            rect = box_rect(map_area, p.offset, p.width)
            self._fill(rect, attr)
            self._box(rect, "", attr)
            if p.label is not None:
                self._put(rect.y + 2, map_area.x + p.label_offset, p.label, attr, rect)

    def draw_legend(self, area: Rect, layout: Layout, metrics: Optional[FragMetrics] = None):
        self._box(area, "Legend")
        inner = area.inner()
        totals, frag = legend_summary(layout, metrics)
        keys_len = sum(len(t) for t, _, _ in LEGEND_KEYS)
        if keys_len + len(totals) + len(frag) > inner.width:
            frag = ""
        spans = [(t, self.palette.attr(*c) if c else self.palette.attr(bold=bold))
                 for t, c, bold in LEGEND_KEYS]
        spans.append((totals + frag, 0))
        line_len = sum(len(t) for t, _ in spans)
        x = inner.x + max(0, (inner.width - line_len) // 2)
        for text, attr in spans:
            self._put(inner.y, x, text, attr, inner)
            x += len(text)

    def draw_statistics(self, area: Rect, app: ViewerApp):
        time_area, frag_area = statistics_regions(area)
        self.draw_bar_chart(time_area, "Execution Time (ms)", time_series(app.results),
                            self.palette.attr("cyan"))
        self.draw_bar_chart(frag_area, "Total Block Count (Fragmentation)",
                            block_series(app.results), self.palette.attr("magenta"))

    def draw_bar_chart(self, area: Rect, title: str, data: Sequence[Tuple[str, int]], attr: int):
        self._box(area, title)
        inner = area.inner()
        if not data:
            self._centered(inner, inner.y + inner.height // 2, "No benchmark results")
            return
        # bottom row holds the labels
        rows = inner.height - 1
        value_attr = self.palette.attr("black", "white")
        for bar in map_bars(data, inner.width, rows):
            self.draw_bar(inner, bar, rows, attr, value_attr)

    def draw_bar(self, inner: Rect, bar: Bar, rows: int, attr: int, value_attr: int):
        x = inner.x + bar.offset
        base = inner.y + rows - 1
        for i in range(bar.height):
            self._put(base - i, x, "█" * BAR_WIDTH, attr, inner)
        value = str(bar.value)[:BAR_WIDTH]
        self._put(base, x + (BAR_WIDTH - len(value)) // 2, value, value_attr, inner)
        label = bar.label[:BAR_WIDTH]
        self._put(inner.y + rows, x + (BAR_WIDTH - len(label)) // 2, label, 0, inner)
