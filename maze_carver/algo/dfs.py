import logging
import random
from typing import Iterator, List, Optional, Set, Tuple
from maze_carver.core.maze import Cell, Maze
from maze_carver.core.rand import random_member, shuffle
from maze_carver.algo.base import Generator

logger = logging.getLogger(__name__)

class RandomDepthFirstCarver(Generator):
    """
    Randomized depth-first carver. Produces a spanning tree with long,
    winding corridors.

    Runs on an explicit stack of (predecessor, x, y) frames instead of
    recursion, so grid size is not bounded by the interpreter's stack.
    """

    def run(self) -> Iterator[str]:
        rng = random.Random(self.seed)
        maze = self.maze

        root = random_member(maze.cells, rng)
        logger.debug(f"DFS root at ({root.x}, {root.y})")

        visited: Set[Tuple[int, int]] = set()
        # None predecessor marks the root frame, which carves nothing
        stack: List[Tuple[Optional[Cell], int, int]] = [(None, root.x, root.y)]

        while stack:
            last, x, y = stack.pop()

            if (x, y) in visited:
                continue
            visited.add((x, y))

            current = maze.get_cell(x, y)
            if current is None:
                continue

            if last is not None:
                maze.carve_edge(current, last)
                self.step_count += 1

                if self.step_count % 100 == 0:
                    yield f"Carving... Stack: {len(stack)}"

            # Snapshot taken now; a neighbor may be reached by another branch
            # before its frame is popped, and the visited check skips it then.
            neighbors = shuffle(maze.uncarved_edges(current), rng)
            # Reversed so the first shuffled neighbor is explored first
            for neighbor in reversed(neighbors):
                stack.append((current, neighbor.x, neighbor.y))

        yield "Done"


def solve_maze_with_random_dfs(maze: Maze, seed: int = None) -> None:
    """Carves 'maze' into a spanning tree with the randomized DFS carver."""
    logger.info(f"Carving {maze.width}x{maze.height} maze with randomized DFS...")
    carver = RandomDepthFirstCarver(maze, seed=seed)
    carver.run_all()
    logger.info(f"DFS carved {carver.step_count} edges.")
