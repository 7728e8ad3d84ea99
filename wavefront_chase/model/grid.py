"""Grid map management for the wavefront chase simulation."""

from enum import IntEnum
from typing import List, Set, Tuple

import numpy as np


Position = Tuple[int, int]


class InvalidDimensions(ValueError):
    """Raised when a board is created with a non-positive width or height."""


class Cell(IntEnum):
    """Occupancy mark stored in each grid cell."""
    EMPTY = 0
    PLAYER = 1
    ENEMY = 2


# Von Neumann neighbourhood in navigator scan order: for offset -1 then +1,
# the vertical neighbour comes before the horizontal one (N, W, S, E).
SCAN_OFFSETS = [(-1, 0), (0, -1), (1, 0), (0, 1)]


class GridMap:
    """
    Fixed-size 2D board with an occupancy layer.

    Coordinate convention: (row, col) for API, [row, col] for array indexing.
    """

    def __init__(self, width: int, height: int):
        if (not isinstance(width, (int, np.integer)) or
                not isinstance(height, (int, np.integer)) or
                isinstance(width, bool) or isinstance(height, bool)):
            raise InvalidDimensions(
                f"Board dimensions must be integers, got {width!r}x{height!r}")
        if width <= 0 or height <= 0:
            raise InvalidDimensions(
                f"Board dimensions must be positive, got {width}x{height}")

        self.width = int(width)
        self.height = int(height)

        # Occupancy: Cell values, one byte per cell
        self.occupancy = np.full((self.height, self.width), Cell.EMPTY,
                                 dtype=np.int8)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.height, self.width)

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if cell is within the board."""
        return 0 <= row < self.height and 0 <= col < self.width

    def get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get in-bounds 4-connected neighbours in scan order (N, W, S, E).
        Staying in place is never included.
        """
        neighbors = []
        for dr, dc in SCAN_OFFSETS:
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                neighbors.append((nr, nc))
        return neighbors

    def get_cell(self, row: int, col: int) -> Cell:
        """Return the occupancy mark at position."""
        if not self.in_bounds(row, col):
            raise IndexError(
                f"Position ({row}, {col}) outside {self.height}x{self.width} board")
        return Cell(int(self.occupancy[row, col]))

    def place(self, mark: Cell, row: int, col: int) -> None:
        """Place a mark at position."""
        if self.in_bounds(row, col):
            self.occupancy[row, col] = mark

    def clear(self, row: int, col: int) -> None:
        """Reset position to empty."""
        if self.in_bounds(row, col):
            self.occupancy[row, col] = Cell.EMPTY

    def move(self, mark: Cell, from_pos: Position, to_pos: Position) -> None:
        """Move a mark from one cell to another."""
        self.clear(*from_pos)
        self.place(mark, *to_pos)

    def get_occupied_positions(self) -> Set[Position]:
        """Return set of all non-empty cell positions."""
        rows, cols = np.where(self.occupancy != Cell.EMPTY)
        return {(int(r), int(c)) for r, c in zip(rows, cols)}


def manhattan(a: Position, b: Position) -> int:
    """L1 distance between two grid positions."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
