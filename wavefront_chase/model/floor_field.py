"""Distance field (wavefront) for the wavefront chase simulation."""

from collections import deque

import numpy as np

from .grid import GridMap, Position


class DistanceField:
    """
    Per-cell shortest-path distance to a reference cell.

    Computed as a breadth-first wavefront over the 4-connected board. The
    board has no obstacles, so every value equals the Manhattan distance
    to the reference. Lower distance values = closer to the reference.
    """

    def __init__(self, grid_width: int, grid_height: int):
        self.width = grid_width
        self.height = grid_height
        self.reference: Position = (0, 0)
        self.field = np.zeros((grid_height, grid_width), dtype=np.int64)

    @classmethod
    def compute(cls, grid: GridMap, reference: Position) -> "DistanceField":
        """Build a fresh field for `grid` centred on `reference`."""
        distance_field = cls(grid.width, grid.height)
        distance_field.expand(reference)
        return distance_field

    def expand(self, reference: Position) -> None:
        """Recompute the wavefront from scratch around `reference`."""
        ref_row, ref_col = reference
        if not (0 <= ref_row < self.height and 0 <= ref_col < self.width):
            raise ValueError(
                f"Reference {reference} outside {self.height}x{self.width} board")

        self.reference = (ref_row, ref_col)
        self.field = np.full((self.height, self.width), -1, dtype=np.int64)

        queue = deque()
        self.field[ref_row, ref_col] = 0
        queue.append((ref_row, ref_col, 0))

        # BFS expansion (4-connected)
        directions = [(-1, 0), (1, 0), (0, -1), (0, 1)]
        while queue:
            row, col, dist = queue.popleft()
            for dr, dc in directions:
                nr, nc = row + dr, col + dc
                if (0 <= nr < self.height and 0 <= nc < self.width
                        and self.field[nr, nc] < 0):
                    self.field[nr, nc] = dist + 1
                    queue.append((nr, nc, dist + 1))

    def get_distance(self, row: int, col: int) -> int:
        """Return distance value at position."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(
                f"Position ({row}, {col}) outside {self.height}x{self.width} board")
        return int(self.field[row, col])

    def __getitem__(self, pos: Position) -> int:
        return self.get_distance(*pos)
