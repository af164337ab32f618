import unittest
import sys
import os
from collections import Counter

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.core.maze import Maze
from maze_carver.core.cancel import CancelSignal
from maze_carver.core.stats import MazeStats
from maze_carver.algo.animation import null_renderer
from maze_carver.algo.dfs import RandomDepthFirstCarver, solve_maze_with_random_dfs
from maze_carver.algo.wilson import erase_loop, wilsons_algorithm

def edge_set(maze):
    return frozenset(
        frozenset((cell.index, other)) for cell in maze.all_cells() for other in cell.edges
    )

class FrameLog:
    """Renderer that remembers what it was asked to draw."""
    def __init__(self):
        self.frames = []

    def __call__(self, maze, current, path):
        self.frames.append((current, list(path)))

class TestRandomDFS(unittest.TestCase):
    def test_dfs_spanning_tree(self):
        for w, h in [(20, 20), (1, 50), (50, 1), (7, 3)]:
            maze = Maze(w, h)
            solve_maze_with_random_dfs(maze, seed=42)
            self.assertEqual(maze.edge_count(), w * h - 1)
            self.assertTrue(MazeStats.is_spanning_tree(maze), f"DFS did not span {w}x{h}")

    def test_three_by_three(self):
        maze = Maze(3, 3)
        solve_maze_with_random_dfs(maze)
        self.assertEqual(maze.edge_count(), 8)
        for cell in maze.all_cells():
            self.assertEqual(len(MazeStats.reachable_from(maze, cell)), 9)

    def test_single_cell(self):
        maze = Maze(1, 1)
        solve_maze_with_random_dfs(maze, seed=1)
        self.assertEqual(maze.edge_count(), 0)

    def test_large_grid_no_recursion_limit(self):
        w, h = 120, 120
        maze = Maze(w, h)
        algo = RandomDepthFirstCarver(maze, seed=3)
        algo.run_all()
        self.assertEqual(algo.step_count, w * h - 1)
        self.assertTrue(MazeStats.is_spanning_tree(maze))

    def test_edges_within_neighbors(self):
        maze = Maze(10, 10)
        solve_maze_with_random_dfs(maze, seed=5)
        for cell in maze.all_cells():
            self.assertTrue(set(cell.edges) <= set(cell.neighbors))
            self.assertLessEqual(len(cell.edges), len(cell.neighbors))

    def test_determinism(self):
        maze1 = Maze(10, 10)
        RandomDepthFirstCarver(maze1, seed=12345).run_all()

        maze2 = Maze(10, 10)
        rec = RandomDepthFirstCarver(maze2, seed=12345)
        for _ in rec.run(): pass

        self.assertEqual(edge_set(maze1), edge_set(maze2))

    def test_run_reports_done(self):
        maze = Maze(4, 4)
        statuses = list(RandomDepthFirstCarver(maze, seed=0).run())
        self.assertEqual(statuses[-1], "Done")

class TestEraseLoop(unittest.TestCase):
    def setUp(self):
        self.maze = Maze(3, 3)
        self.c = self.maze.cells

    def test_appends_new_cell(self):
        path = [self.c[0], self.c[1]]
        self.assertEqual(erase_loop(path, self.c[4]), [self.c[0], self.c[1], self.c[4]])
        self.assertEqual(len(path), 2, "Input path must not be mutated")

    def test_cuts_loop(self):
        path = [self.c[0], self.c[1], self.c[4], self.c[3]]
        result = erase_loop(path, self.c[0])
        self.assertEqual(result, [self.c[0]])

        result = erase_loop(path, self.c[1])
        self.assertEqual(result, [self.c[0], self.c[1]])

    def test_immediate_backtrack(self):
        path = [self.c[0], self.c[1]]
        self.assertEqual(erase_loop(path, self.c[0]), [self.c[0]])

class TestWilson(unittest.IsolatedAsyncioTestCase):
    async def carve(self, maze, renderer=null_renderer, seed=None):
        return await wilsons_algorithm(maze, renderer, CancelSignal(), 0, settle_time_ms=0, seed=seed)

    async def test_wilson_spanning_tree(self):
        for w, h in [(12, 9), (1, 10), (10, 1), (2, 2)]:
            maze = Maze(w, h)
            steps = await self.carve(maze, seed=11)
            self.assertEqual(maze.edge_count(), w * h - 1)
            self.assertTrue(MazeStats.is_spanning_tree(maze), f"Wilson did not span {w}x{h}")
            self.assertGreaterEqual(steps, w * h - 1)
            for cell in maze.all_cells():
                self.assertLessEqual(len(cell.edges), len(cell.neighbors))

    async def test_single_cell(self):
        maze = Maze(1, 1)
        log = FrameLog()
        steps = await self.carve(maze, log, seed=4)
        self.assertEqual(steps, 0)
        self.assertEqual(maze.edge_count(), 0)
        # Only the settled frame
        self.assertEqual(log.frames, [(None, [])])

    async def test_logs_frame_count(self):
        with self.assertLogs("maze_carver.algo.wilson", level="INFO") as logs:
            steps = await self.carve(Maze(3, 3), seed=6)
        self.assertIn(f"Rendered {steps + 1} frames", logs.output[-1])

    async def test_frames_follow_loop_erasure(self):
        maze = Maze(6, 6)
        log = FrameLog()
        steps = await self.carve(maze, log, seed=8)

        # One frame per step plus the settled frame
        self.assertEqual(len(log.frames), steps + 1)
        self.assertEqual(log.frames[-1], (None, []))

        for current, path in log.frames[:-1]:
            self.assertIs(path[-1], current, "Path must end at the chosen cell")
            self.assertEqual(len(path), len(set(path)), "Path must not repeat cells")
            for a, b in zip(path, path[1:]):
                self.assertIn(b.index, a.neighbors)

    async def test_determinism(self):
        maze1 = Maze(8, 8)
        steps1 = await self.carve(maze1, seed=2024)
        maze2 = Maze(8, 8)
        steps2 = await self.carve(maze2, seed=2024)
        self.assertEqual(steps1, steps2)
        self.assertEqual(edge_set(maze1), edge_set(maze2))

    async def test_uniform_over_spanning_trees(self):
        # A 2x2 grid is a 4-cycle with exactly four spanning trees
        counts = Counter()
        runs = 1200
        for seed in range(runs):
            maze = Maze(2, 2)
            await self.carve(maze, seed=seed)
            counts[edge_set(maze)] += 1

        self.assertEqual(len(counts), 4)
        for tree, count in counts.items():
            self.assertTrue(220 < count < 380, f"Tree drawn {count}/{runs} times")

if __name__ == '__main__':
    unittest.main()
