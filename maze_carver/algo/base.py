from abc import ABC, abstractmethod
from typing import Iterator
from maze_carver.core.maze import Maze

class Generator(ABC):
    def __init__(self, maze: Maze, seed: int = None):
        self.maze = maze
        self.seed = seed
        self.step_count = 0
        
    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual carving happens in-place on self.maze.
        """
        pass

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
