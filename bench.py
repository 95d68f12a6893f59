from __future__ import annotations
import argparse
import logging
from typing import Sequence

from heapviz_logging import setup_logging
from memory.fragmentation import compute_metrics
from memory.history import BenchmarkRecord, HistoryLoadError, Step, load_history, load_results
from viz.ascii_map import render_map
from viz.bars import to_ms
from viz.layout import layout_step

logger = logging.getLogger(__name__)


def benchmark_table(records: Sequence[BenchmarkRecord]) -> str:
    header = ["allocator", "time_ms", "total_blocks"]
    lines = ["{:<20} {:>10} {:>13}".format(*header)]
    for r in records:
        lines.append("{:<20} {:>10} {:>13}".format(
            r.name[:20], to_ms(r.elapsed_seconds), r.total_block_count))
    return "\n".join(lines)


def step_report(step: Step, width: int, show_map: bool) -> str:
    layout = layout_step(step, width)
    m = compute_metrics(step.blocks)
    out = [
        f"Step {step.index}: {step.algorithm_name} {step.operation_label}  highlight={step.highlighted_address}",
        f"  total={layout.total_size} blocks={layout.block_count} free={m.total_free} "
        f"LFE={m.lfe} holes={m.hole_count} external_frag={m.external_frag:.3f} entropy={m.entropy:.3f}",
    ]
    if show_map:
        out.append("  [" + render_map(layout) + "]")
    return "\n".join(out)


def main(argv=None):
    ap=argparse.ArgumentParser(description="Text summary of a heap step history and benchmark results.")
    ap.add_argument('--history', required=True)
    ap.add_argument('--results', default=None)
    ap.add_argument('--width', type=int, default=80)
    ap.add_argument('--show-map', action='store_true')
    args=ap.parse_args(argv)

    setup_logging(logging.WARNING)
    try:
        steps = load_history(args.history)
    except HistoryLoadError as exc:
        logger.error("Cannot load history: %s", exc)
        raise SystemExit(1) from exc
    results = load_results(args.results)

    print("="*72)
    print("Heap Viz: Benchmark Table")
    print("="*72)
    if results:
        print(benchmark_table(results))
    else:
        print("No benchmark results.")
    print("="*72)
    print(f"Heap history: {len(steps)} steps")
    print("-"*72)
    for step in steps:
        print(step_report(step, args.width, args.show_map))
    print("="*72)

if __name__ == "__main__":
    main()
