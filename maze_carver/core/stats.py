from collections import deque
from typing import Dict, Set

from maze_carver.core.maze import Cell, Maze


class MazeStats:
    @staticmethod
    def reachable_from(maze: Maze, cell: Cell) -> Set[int]:
        """Indices of every cell reachable from 'cell' through carved edges."""
        seen = {cell.index}
        queue = deque([cell.index])
        while queue:
            idx = queue.popleft()
            for nxt in maze.cells[idx].edges:
                if nxt not in seen:
                    seen.add(nxt)
                    queue.append(nxt)
        return seen

    @staticmethod
    def is_spanning_tree(maze: Maze) -> bool:
        """
        A carved graph on n cells is a spanning tree iff it is connected
        and has exactly n - 1 edges.
        """
        total = maze.width * maze.height
        if maze.edge_count() != total - 1:
            return False
        return len(MazeStats.reachable_from(maze, maze.cells[0])) == total

    @staticmethod
    def calculate_stats(maze: Maze) -> Dict[str, float]:
        dead_ends = 0
        corridors = 0
        intersections = 0

        for cell in maze.all_cells():
            exits = len(cell.edges)
            if exits == 1: dead_ends += 1
            elif exits == 2: corridors += 1
            elif exits >= 3: intersections += 1

        total = maze.width * maze.height
        return {
            "edges": maze.edge_count(),
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
        }
