import logging
import random
from typing import List, Set

from maze_carver.core.cancel import CancelSignal
from maze_carver.core.maze import Cell, Maze
from maze_carver.core.rand import random_member
from maze_carver.algo.animation import SETTLE_TIME_MS, Animator, Renderer

logger = logging.getLogger(__name__)


def erase_loop(path: List[Cell], nxt: Cell) -> List[Cell]:
    """
    Extends a walk by 'nxt'. If 'nxt' is already on the walk, the loop it
    would close is cut away instead, so the walk ends at its first
    occurrence. The result never holds a cell twice.
    """
    try:
        loop_idx = path.index(nxt)
    except ValueError:
        return path + [nxt]
    return path[:loop_idx + 1]


async def wilsons_algorithm(
    maze: Maze,
    renderer: Renderer,
    cancel_signal: CancelSignal,
    step_time_ms: float,
    settle_time_ms: float = SETTLE_TIME_MS,
    seed: int = None,
) -> int:
    """
    Carves 'maze' into a uniform spanning tree with Wilson's algorithm.

    Loop-erased random walks start from random unvisited cells and are
    grafted onto the tree once they touch it. Every walk step is rendered
    and followed by a 'step_time_ms' pause; the finished maze is rendered
    once more and held for 'settle_time_ms'.

    Returns the total number of walk steps. Raises AbortedError at the
    next pause once 'cancel_signal' fires; the maze keeps whatever was
    carved so far.
    """
    rng = random.Random(seed)
    animator = Animator(renderer, cancel_signal, step_time_ms)

    unvisited: Set[Cell] = set(maze.cells)
    visited: Set[Cell] = set()

    start_cell = random_member(maze.cells, rng)
    visited.add(start_cell)
    unvisited.discard(start_cell)

    logger.info(f"Wilson's algorithm on {maze.width}x{maze.height}, tree seeded at ({start_cell.x}, {start_cell.y})")

    steps_taken = 0
    walks = 0

    while unvisited:
        current = random_member(unvisited, rng)
        path = [current]

        # Random walk until the tree is reached
        while current not in visited:
            nxt = random_member(maze.uncarved_edges(current), rng)
            path = erase_loop(path, nxt)
            steps_taken += 1

            await animator.frame(maze, nxt, path)
            current = nxt

        for cell, next_cell in zip(path, path[1:]):
            maze.carve_edge(cell, next_cell)
        visited.update(path)
        unvisited.difference_update(path)

        walks += 1
        logger.debug(f"Walk {walks} grafted {len(path) - 1} cells, {len(unvisited)} left")

    logger.info(f"Wilson's algorithm done: {steps_taken} steps over {walks} walks")

    await animator.frame(maze, None, [], delay_ms=settle_time_ms)
    logger.info(f"Rendered {animator.frame_count} frames")
    return steps_taken
