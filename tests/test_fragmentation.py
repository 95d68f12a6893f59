import pytest

from helpers import make_step
from memory.fragmentation import compute_metrics, free_extents


class TestFreeExtents:
    def test_adjacent_free_blocks_merge(self):
        step = make_step([10, 20, 30, 40, 50], free={0, 1, 3})
        assert free_extents(step.blocks) == [30, 40]

    def test_trailing_run(self):
        step = make_step([10, 20, 30], free={1, 2})
        assert free_extents(step.blocks) == [50]

    def test_no_free(self):
        assert free_extents(make_step([10, 20]).blocks) == []


class TestComputeMetrics:
    def test_single_hole(self):
        m = compute_metrics(make_step([100, 400], free={1}).blocks)
        assert m.total_free == 400
        assert m.lfe == 400
        assert m.hole_count == 1
        assert m.external_frag == 0.0

    def test_two_holes(self):
        m = compute_metrics(make_step([100, 100, 100, 300], free={1, 3}).blocks)
        assert m.total_free == 400
        assert m.lfe == 300
        assert m.hole_count == 2
        assert m.external_frag == pytest.approx(0.25)
        assert m.entropy > 0

    def test_empty_step(self):
        m = compute_metrics(())
        assert (m.total_free, m.lfe, m.hole_count, m.external_frag) == (0, 0, 0, 0.0)
