import pytest

from helpers import make_step
from viz.layout import (
    FREE_FILL,
    USED_FILL,
    layout_blocks,
    layout_step,
    place_label,
    proportional_widths,
)


def widths(layout):
    return [p.width for p in layout.placed]


def drawn_width(layout):
    return sum(widths(layout))


class TestProportionalWidths:
    def test_exact_shares(self):
        assert list(proportional_widths([10, 10, 80], 10)) == [1, 1, 8]

    def test_half_rounds_up(self):
        # 1/4 * 10 = 2.5
        assert list(proportional_widths([1, 3], 10)) == [3, 8]

    def test_tiny_block_gets_one_column(self):
        assert list(proportional_widths([1, 10000], 20)) == [1, 20]


class TestLayout:
    def test_sizes_10_10_80(self):
        layout = layout_step(make_step([10, 10, 80]), 10)
        assert widths(layout) == [1, 1, 8]
        assert all(w >= 1 for w in widths(layout))
        assert drawn_width(layout) <= 10

    def test_offsets_are_running_sums(self):
        layout = layout_step(make_step([25, 25, 50]), 20)
        assert [p.offset for p in layout.placed] == [0, 5, 10]
        assert widths(layout) == [5, 5, 10]

    def test_order_preserved(self):
        step = make_step([5, 50, 5, 40])
        layout = layout_step(step, 40)
        assert [p.block for p in layout.placed] == list(step.blocks)

    def test_no_blocks(self):
        layout = layout_step(make_step([]), 40)
        assert layout.placed == ()
        assert layout.total_size == 0
        assert layout.block_count == 0

    def test_all_zero_sizes(self):
        layout = layout_step(make_step([0, 0, 0]), 40)
        assert layout.placed == ()
        assert layout.total_size == 0
        assert layout.block_count == 3

    def test_right_edge_stops_layout(self):
        layout = layout_step(make_step([1] * 10), 5)
        assert len(layout.placed) == 5
        assert widths(layout) == [1] * 5
        assert drawn_width(layout) == 5

    def test_last_block_is_clamped(self):
        # widths before clamping: 1, 1, 1, 3 (7/10 * 4 = 2.8)
        layout = layout_step(make_step([1, 1, 1, 7]), 4)
        assert widths(layout) == [1, 1, 1, 1]
        assert drawn_width(layout) == 4

    def test_drift_never_exceeds_width(self):
        layout = layout_step(make_step([3] * 7 + [100]), 13)
        assert drawn_width(layout) <= 13
        last = layout.placed[-1]
        assert last.offset + last.width <= 13

    def test_zero_size_block_among_others_is_visible(self):
        layout = layout_step(make_step([0, 50, 50]), 20)
        assert widths(layout)[0] == 1

    def test_totals_for_legend(self):
        layout = layout_step(make_step([10, 20, 30]), 60)
        assert layout.total_size == 60
        assert layout.block_count == 3

    def test_non_positive_width(self):
        assert layout_step(make_step([10]), 0).placed == ()

    def test_deterministic(self):
        step = make_step([7, 13, 1, 79], highlight="0x0001", free={2})
        assert layout_step(step, 33) == layout_step(step, 33)


class TestHighlight:
    def test_exactly_one_block_highlighted(self):
        layout = layout_step(make_step([10, 20, 30], highlight="0x0001"), 60)
        assert [p.highlighted for p in layout.placed] == [False, True, False]
        hl = layout.placed[1].style
        assert hl.bold and hl.fg == "white"

    def test_no_match_no_highlight(self):
        layout = layout_step(make_step([10, 20, 30], highlight="0xdead"), 60)
        assert not any(p.highlighted for p in layout.placed)
        assert all(p.style.fg == "black" and not p.style.bold for p in layout.placed)

    def test_fill_independent_of_highlight(self):
        step = make_step([10, 10], highlight="0x0000", free={0})
        layout = layout_step(step, 20)
        assert layout.placed[0].style.fill == FREE_FILL
        assert layout.placed[1].style.fill == USED_FILL

    def test_highlight_by_raw_blocks(self):
        step = make_step([10, 10])
        layout = layout_blocks(step.blocks, "0x0000", 20)
        assert layout.placed[0].highlighted


class TestLabels:
    def test_width_3_has_no_label(self):
        layout = layout_step(make_step([3, 5]), 8)
        assert widths(layout) == [3, 5]
        assert layout.placed[0].label is None

    def test_width_5_has_label(self):
        layout = layout_step(make_step([3, 5]), 8)
        assert layout.placed[1].label == "5"

    def test_width_4_has_no_label(self):
        assert place_label("12", 0, 4) == (None, None)

    @pytest.mark.parametrize("text,offset,width,expected", [
        ("7", 0, 5, ("7", 2)),
        ("100", 10, 7, ("100", 12)),
        ("4096", 0, 6, ("4096", 1)),
        ("123456", 3, 6, ("1234", 4)),
    ])
    def test_label_centered_inside_border(self, text, offset, width, expected):
        assert place_label(text, offset, width) == expected
