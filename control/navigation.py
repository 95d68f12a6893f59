from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class View(Enum):
    VISUALIZER = 0
    STATISTICS = 1


@dataclass
class NavigationState:
    """Which step and which view the viewer is showing.

    Transitions saturate at both ends of the history and never raise;
    with no steps loaded the index stays at 0 and is unused.
    """
    step_count: int
    current_step_index: int = 0
    current_view: View = View.VISUALIZER

    def next_step(self):
        if self.current_step_index < self.step_count - 1:
            self.current_step_index += 1

    def prev_step(self):
        if self.current_step_index > 0:
            self.current_step_index -= 1

    def toggle_view(self):
        if self.current_view is View.VISUALIZER:
            self.current_view = View.STATISTICS
        else:
            self.current_view = View.VISUALIZER
