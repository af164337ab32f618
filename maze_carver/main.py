import argparse
import asyncio
import sys
import os
import logging

# Ensure project root is in path so we can import 'maze_carver' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_carver.algo.animation import SETTLE_TIME_MS, STEP_TIME_MS

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Carver: spanning-tree maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--width", type=int, default=20, help="Maze Width")
    gen_parser.add_argument("--height", type=int, default=20, help="Maze Height")
    gen_parser.add_argument("--algo", type=str, default="wilson", choices=["dfs", "wilson"], help="Generation Algorithm")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--step-ms", type=float, default=None, help=f"Pause between animation steps (default {STEP_TIME_MS} visual, 0 headless)")
    gen_parser.add_argument("--settle-ms", type=float, default=None, help=f"Pause on the finished maze (default {SETTLE_TIME_MS} visual, 0 headless)")
    gen_parser.add_argument("--visual", action="store_true", help="Show visualization")
    gen_parser.add_argument("--size", type=int, default=800, help="Window size in pixels along the longer maze side")
    gen_parser.add_argument("--record", action="store_true", help="Record generation video")
    return parser

def window_size(maze_width: int, maze_height: int, size: int):
    """Window matching the maze's aspect ratio, longest side 'size' pixels."""
    longest = max(maze_width, maze_height)
    return max(1, size * maze_width // longest), max(1, size * maze_height // longest)

def run_generate(args, logger) -> int:
    from maze_carver.core.maze import Maze
    from maze_carver.core.stats import MazeStats
    from maze_carver.core.errors import AbortedError

    maze = Maze(args.width, args.height)
    logger.info(f"Generating {args.width}x{args.height} maze with {args.algo.upper()}...")

    if args.algo == "dfs":
        from maze_carver.algo.dfs import solve_maze_with_random_dfs
        solve_maze_with_random_dfs(maze, seed=args.seed)
    else:
        from maze_carver.core.cancel import CancelSignal
        from maze_carver.algo.animation import null_renderer
        from maze_carver.algo.wilson import wilsons_algorithm

        visual = args.visual or args.record
        step_ms = args.step_ms if args.step_ms is not None else (STEP_TIME_MS if visual else 0)
        settle_ms = args.settle_ms if args.settle_ms is not None else (SETTLE_TIME_MS if visual else 0)

        async def animate():
            # The signal must be created inside the running loop
            signal = CancelSignal()
            renderer = null_renderer
            pump = None
            if visual:
                from maze_carver.viz.recorder import VideoRecorder, fps_for_step
                from maze_carver.viz.renderer import Renderer
                recorder = VideoRecorder(
                    active=args.record,
                    fps=fps_for_step(step_ms),
                    prefix=f"wilson_{args.width}x{args.height}",
                )
                renderer = Renderer(recorder=recorder, cancel_signal=signal)
                win_w, win_h = window_size(args.width, args.height, args.size)
                renderer.init_window(win_w, win_h, title=f"Maze Carver - {args.width}x{args.height}")
                logger.info(f"Visual mode enabled - Opening {win_w}x{win_h} window...")
                # Window close must be seen during pauses too, not only when drawing
                pump = asyncio.ensure_future(renderer.pump_events())
            try:
                return await wilsons_algorithm(maze, renderer, signal, step_ms, settle_time_ms=settle_ms, seed=args.seed)
            finally:
                if pump is not None:
                    pump.cancel()
                if renderer is not null_renderer:
                    renderer.close()

        try:
            steps = asyncio.run(animate())
        except AbortedError:
            logger.warning(f"Generation aborted with {maze.edge_count()} edges carved.")
            return 1
        logger.info(f"Random walk steps: {steps}")

    stats = MazeStats.calculate_stats(maze)
    logger.info(f"Stats: {stats}")
    if not MazeStats.is_spanning_tree(maze):
        logger.error("Carved graph is not a spanning tree")
        return 1
    print("Done.")
    return 0

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_carver")

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        return run_generate(args, logger)
    return 0

if __name__ == "__main__":
    sys.exit(main())
