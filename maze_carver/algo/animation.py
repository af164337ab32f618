from typing import Optional, Protocol, Sequence

from maze_carver.core.cancel import CancelSignal, timeout_with_cancel
from maze_carver.core.maze import Cell, Maze

# Pause between two animation frames
STEP_TIME_MS = 50
# Pause on the finished maze before a run returns
SETTLE_TIME_MS = 5000


class Renderer(Protocol):
    """
    Anything that can paint a maze. Called synchronously once per frame;
    must not mutate the maze.
    """

    def __call__(self, maze: Maze, current: Optional[Cell], path: Sequence[Cell]) -> None:
        ...


def null_renderer(maze: Maze, current: Optional[Cell], path: Sequence[Cell]) -> None:
    """Renderer for headless runs."""


class Animator:
    """
    Bridges a carver to its renderer: paint a frame, then wait out the
    step delay unless the cancel signal fires.
    """

    def __init__(self, renderer: Renderer, cancel_signal: CancelSignal, step_time_ms: float = STEP_TIME_MS):
        self.renderer = renderer
        self.cancel_signal = cancel_signal
        self.step_time_ms = step_time_ms
        self.frame_count = 0

    async def frame(self, maze: Maze, current: Optional[Cell], path: Sequence[Cell], delay_ms: float = None):
        self.renderer(maze, current, path)
        self.frame_count += 1

        if delay_ms is None:
            delay_ms = self.step_time_ms
        await timeout_with_cancel(delay_ms, self.cancel_signal)
