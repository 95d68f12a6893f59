from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from control.navigation import NavigationState
from memory.history import BenchmarkRecord, Step, load_history, load_results

logger = logging.getLogger(__name__)


@dataclass
class ViewerApp:
    """Loaded history and results plus the navigation state over them."""
    steps: Tuple[Step, ...]
    results: Tuple[BenchmarkRecord, ...] = ()
    nav: NavigationState = field(init=False)

    def __post_init__(self):
        self.nav = NavigationState(len(self.steps))

    @classmethod
    def from_files(cls, history_path: str, results_path: Optional[str]) -> 'ViewerApp':
        # HistoryLoadError propagates; results problems degrade to no results
        steps = load_history(history_path)
        results = tuple(load_results(results_path))
        logger.info("Viewer ready: %d steps, %d benchmark records", len(steps), len(results))
        return cls(steps, results)

    def current_step(self) -> Optional[Step]:
        if not self.steps:
            return None
        return self.steps[self.nav.current_step_index]
