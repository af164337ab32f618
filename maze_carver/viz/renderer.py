import asyncio
import pygame
from typing import Optional, Sequence, Tuple
from maze_carver.core.cancel import CancelSignal
from maze_carver.core.maze import Cell, Maze
from maze_carver.viz.recorder import VideoRecorder

# How often window events are read while the carver is paused
INPUT_POLL_MS = 50

class Renderer:
    """
    Paints a maze onto a pygame surface. Instances are called once per
    animation frame with (maze, current cell, current path).
    """

    COLOR_BG = (0, 0, 0)
    COLOR_PASSAGE = (255, 255, 255)
    COLOR_PATH = (136, 136, 136)
    COLOR_CURRENT = (178, 34, 34)# Firebrick

    def __init__(self, surface: pygame.Surface = None, recorder: VideoRecorder = None, cancel_signal: CancelSignal = None):
        self.surface = surface
        self.recorder = recorder or VideoRecorder(active=False)
        self.cancel_signal = cancel_signal
        self.windowed = False
        self.running = True

        # Layout, refreshed every frame by fit_to_surface
        self.cell_size = 1.0
        self.offset_x = 0.0
        self.offset_y = 0.0

    def init_window(self, width=800, height=800, title="Maze Carver"):
        pygame.init()
        pygame.display.set_caption(title)
        self.surface = pygame.display.set_mode((width, height))
        self.windowed = True

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                # The carver notices at its next pause
                if self.cancel_signal:
                    self.cancel_signal.abort()

    async def pump_events(self, interval_ms: float = INPUT_POLL_MS):
        """
        Keeps reading window events while the carver sleeps between frames.
        Run as a task next to the carver; returns once the window is closed.
        """
        while self.windowed and self.running:
            self.handle_input()
            await asyncio.sleep(interval_ms / 1000)

    def fit_to_surface(self, maze: Maze):
        """Largest square cell size that shows the whole maze, centered."""
        surf_w, surf_h = self.surface.get_size()
        self.cell_size = min(surf_w / maze.width, surf_h / maze.height)
        self.offset_x = (surf_w - maze.width * self.cell_size) / 2
        self.offset_y = (surf_h - maze.height * self.cell_size) / 2

    def cell_center(self, cell: Cell) -> Tuple[int, int]:
        return (int(self.offset_x + self.cell_size * (cell.x + 0.5)),
                int(self.offset_y + self.cell_size * (cell.y + 0.5)))

    def fill_cell(self, cell: Cell, color):
        left = int(self.offset_x + self.cell_size * cell.x)
        top = int(self.offset_y + self.cell_size * cell.y)
        size = int(self.cell_size) + 1
        pygame.draw.rect(self.surface, color, (left, top, size, size))

    def draw_passages(self, maze: Maze, cell: Cell):
        if not cell.edges:
            return

        width = max(1, int(self.cell_size / 1.5))
        cap = width // 2
        start = self.cell_center(cell)
        for other in maze.edges(cell):
            end = self.cell_center(other)
            pygame.draw.line(self.surface, self.COLOR_PASSAGE, start, end, width)
            # Round the stroke ends
            if cap > 0:
                pygame.draw.circle(self.surface, self.COLOR_PASSAGE, start, cap)
                pygame.draw.circle(self.surface, self.COLOR_PASSAGE, end, cap)

    def draw_maze(self, maze: Maze, current: Optional[Cell], path: Sequence[Cell]):
        self.surface.fill(self.COLOR_BG)
        self.fit_to_surface(maze)

        # 1. Path backgrounds
        for cell in path:
            self.fill_cell(cell, self.COLOR_PATH)

        # 2. Passages (over the fills)
        for cell in maze.all_cells():
            self.draw_passages(maze, cell)

        if current is not None:
            radius = max(1, int(self.cell_size / 4))
            pygame.draw.circle(self.surface, self.COLOR_CURRENT, self.cell_center(current), radius)

    def __call__(self, maze: Maze, current: Optional[Cell], path: Sequence[Cell]) -> None:
        if self.windowed:
            self.handle_input()

        # Window closed: nothing left to paint on
        if not self.running:
            return

        self.draw_maze(maze, current, path)

        if self.windowed:
            pygame.display.flip()
        if self.recorder.active:
            self.recorder.capture_frame(self.surface)

    def close(self):
        self.recorder.stop()
        if self.windowed:
            pygame.quit()
            self.windowed = False
