import sys
import os
import time
import asyncio
from typing import List

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.core.maze import Maze
from maze_carver.core.cancel import CancelSignal
from maze_carver.core.stats import MazeStats
from maze_carver.algo.animation import null_renderer
from maze_carver.algo.dfs import solve_maze_with_random_dfs
from maze_carver.algo.wilson import wilsons_algorithm

def benchmark_size(width: int, height: int, seed: int = 42):
    print(f"\n--- Benchmarking {width}x{height} ({width*height:,} cells) ---")

    # 1. DFS
    maze = Maze(width, height)
    t0 = time.time()
    solve_maze_with_random_dfs(maze, seed=seed)
    dfs_time = time.time() - t0
    dfs_stats = MazeStats.calculate_stats(maze)
    print(f"DFS:    {dfs_time:.4f}s | dead ends {dfs_stats['dead_end_percent']:.1f}% | tree: {MazeStats.is_spanning_tree(maze)}")

    # 2. Wilson (no rendering, no pauses)
    maze = Maze(width, height)

    async def run():
        return await wilsons_algorithm(maze, null_renderer, CancelSignal(), 0, settle_time_ms=0, seed=seed)

    t0 = time.time()
    steps = asyncio.run(run())
    wilson_time = time.time() - t0
    wilson_stats = MazeStats.calculate_stats(maze)
    print(f"Wilson: {wilson_time:.4f}s | dead ends {wilson_stats['dead_end_percent']:.1f}% | tree: {MazeStats.is_spanning_tree(maze)} | walk steps {steps:,}")

def main():
    sizes: List[int] = [10, 25, 50]
    if len(sys.argv) > 1:
        sizes = [int(s) for s in sys.argv[1:]]

    for size in sizes:
        benchmark_size(size, size)

if __name__ == "__main__":
    main()
