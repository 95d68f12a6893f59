from __future__ import annotations
import argparse
import curses
import locale
import logging

from control.app import ViewerApp
from heapviz_logging import setup_logging
from memory.history import HistoryLoadError
from viz.frame import FrameComposer, Palette, apply_key

logger = logging.getLogger(__name__)


def run(window, app: ViewerApp):
    curses.curs_set(0)
    composer = FrameComposer(window, Palette.from_curses())
    composer.draw(app)
    while True:
        key = window.getch()
        if key == curses.KEY_RESIZE:
            curses.update_lines_cols()
        elif not apply_key(app, key):
            break
        composer.draw(app)


def main(argv=None):
    ap=argparse.ArgumentParser(description="Step through a recorded heap history and compare allocator benchmarks.")
    ap.add_argument('history', help="JSONL file, one heap step per line")
    ap.add_argument('results', nargs='?', default='results.json',
                    help="JSON array of benchmark results (optional; missing or invalid means no results)")
    args=ap.parse_args(argv)

    setup_logging(logging.WARNING)
    try:
        app = ViewerApp.from_files(args.history, args.results)
    except HistoryLoadError as exc:
        logger.error("Cannot load history: %s", exc)
        raise SystemExit(1) from exc

    locale.setlocale(locale.LC_ALL, '')
    curses.wrapper(run, app)

if __name__=='__main__':
    main()
