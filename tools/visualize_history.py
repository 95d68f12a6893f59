"""
Heap Viz: History Heatmap

Renders a recorded heap history as a Matplotlib heatmap, one row per step and
one column per map cell, using the same proportional layout as the terminal
viewer. When a benchmark results file is given, a second figure row compares
execution time and total block count per allocator.

How to run (recommended, from repo root):
    python -m tools.visualize_history --history history.jsonl --results results.json --out out_history.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

# Ensure repo root is on sys.path when running as a script:
# (python -m tools.visualize_history already works without this,
#  but this makes `python tools/visualize_history.py ...` work too.)
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap

from heapviz_logging import setup_logging
from memory.history import BenchmarkRecord, HistoryLoadError, Step, load_history, load_results
from viz.bars import block_series, time_series
from viz.layout import layout_step

logger = logging.getLogger(__name__)

# cell values in the occupancy matrix
EMPTY, FREE, USED, HIGHLIGHT = 0, 1, 2, 3
CMAP = ListedColormap(["white", "tab:green", "tab:red", "gold"])


def render_step(step: Step, width: int) -> np.ndarray:
    """Return a 1D array of cell values for one step, binned to 'width'."""
    row = np.full(width, EMPTY, dtype=np.int8)
    for p in layout_step(step, width).placed:
        if p.highlighted:
            v = HIGHLIGHT
        else:
            v = FREE if p.block.is_free else USED
        row[p.offset : p.offset + p.width] = v
    return row


def occupancy_matrix(steps: Sequence[Step], width: int) -> np.ndarray:
    if not steps:
        return np.zeros((0, width), dtype=np.int8)
    return np.stack([render_step(s, width) for s in steps], axis=0)


def plot_history(steps: Sequence[Step], results: Sequence[BenchmarkRecord], width: int):
    H = occupancy_matrix(steps, width)
    nrows = 2 if results else 1
    fig = plt.figure(figsize=(10.5, 4.6 * nrows))

    ax = fig.add_subplot(nrows, 1, 1)
    ax.imshow(H, aspect="auto", interpolation="nearest", cmap=CMAP, vmin=EMPTY, vmax=HIGHLIGHT)
    ax.set_title("Heap Layout per Step")
    ax.set_xlabel("heap (proportional cells)")
    ax.set_ylabel("step")
    if steps:
        algos = sorted({s.algorithm_name for s in steps})
        ax.text(0.01, -0.18, "algorithms: " + ", ".join(algos), transform=ax.transAxes, fontsize=9)

    if results:
        names = [n for n, _ in time_series(results)]
        x = np.arange(len(names))
        ax_t = fig.add_subplot(nrows, 2, 3)
        ax_t.bar(x, [v for _, v in time_series(results)], color="tab:cyan")
        ax_t.set_title("Execution Time (ms)")
        ax_t.set_xticks(x, names, rotation=30, ha="right")
        ax_b = fig.add_subplot(nrows, 2, 4)
        ax_b.bar(x, [v for _, v in block_series(results)], color="tab:purple")
        ax_b.set_title("Total Block Count (Fragmentation)")
        ax_b.set_xticks(x, names, rotation=30, ha="right")

    fig.tight_layout()
    return fig


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--history", required=True, help="Path to JSONL step history")
    ap.add_argument("--results", default=None, help="Path to JSON benchmark results")
    ap.add_argument("--out", default="out_history.png", help="Output image file")
    ap.add_argument("--width", type=int, default=140, help="Heatmap width (cells)")
    args = ap.parse_args(argv)

    setup_logging(logging.INFO)
    try:
        steps = load_history(args.history)
    except HistoryLoadError as exc:
        raise SystemExit(f"Cannot load history: {exc}") from exc
    if not steps:
        raise SystemExit("No steps in history. Check --history.")

    fig = plot_history(steps, load_results(args.results), args.width)
    out_path = Path(args.out)
    fig.savefig(str(out_path), dpi=220)
    plt.close(fig)
    logger.info("Wrote: %s", out_path.resolve())


if __name__ == "__main__":
    main()
