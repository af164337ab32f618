from typing import Iterator, List, Optional, Tuple

from maze_carver.core.errors import NotAdjacentError


class Cell:
    """
    One grid cell. Relationships to other cells are stored as indices into
    the owning Maze's flat cell list, never as direct references.
    """

    __slots__ = ('x', 'y', 'index', 'neighbors', 'edges')

    def __init__(self, x: int, y: int, index: int):
        self.x = x
        self.y = y
        self.index = index
        self.neighbors: Tuple[int, ...] = ()
        # Carved connections, in the order they were carved
        self.edges: List[int] = []

    def __hash__(self):
        # Index hashing keeps set iteration order stable for a given seed
        return self.index

    def __repr__(self):
        return f"Cell({self.x}, {self.y})"


class Maze:
    __slots__ = ('width', 'height', 'cells', 'start', 'end')

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Maze dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.start: Optional[Cell] = None
        self.end: Optional[Cell] = None

        # Pass 1: allocate every cell, row-major
        self.cells: List[Cell] = [
            Cell(x, y, y * width + x)
            for y in range(height)
            for x in range(width)
        ]

        # Pass 2: wire neighbors now that all cells exist
        for cell in self.cells:
            x, y = cell.x, cell.y
            found = []
            if x > 0:
                found.append(cell.index - 1)  # left
            if x < width - 1:
                found.append(cell.index + 1)  # right
            if y > 0:
                found.append(cell.index - width)  # up
            if y < height - 1:
                found.append(cell.index + width)  # down
            cell.neighbors = tuple(found)

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Returns the cell at (x, y), or None outside the grid."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.cells[y * self.width + x]
        return None

    def all_cells(self) -> Iterator[Cell]:
        return iter(self.cells)

    def neighbors(self, cell: Cell) -> List[Cell]:
        return [self.cells[i] for i in cell.neighbors]

    def edges(self, cell: Cell) -> List[Cell]:
        return [self.cells[i] for i in cell.edges]

    def carve_edge(self, a: Cell, b: Cell) -> Cell:
        """
        Connects two grid-adjacent cells. The edge is recorded on both ends.
        Carving an edge that already exists changes nothing.
        Returns 'b' so walks can chain from the newly reached cell.
        """
        if b.index not in a.neighbors:
            raise NotAdjacentError(f"Cannot carve {a!r} -> {b!r}: cells are not grid neighbors")

        if b.index not in a.edges:
            a.edges.append(b.index)
            b.edges.append(a.index)
        return b

    def uncarved_edges(self, cell: Cell) -> List[Cell]:
        """Neighbors of 'cell' not yet carved to, in neighbor order."""
        return [self.cells[i] for i in cell.neighbors if i not in cell.edges]

    def edge_count(self) -> int:
        # Every undirected edge is stored on both endpoints
        return sum(len(cell.edges) for cell in self.cells) // 2
