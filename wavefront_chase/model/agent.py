"""Movement policies for the pursued enemy and the pursuing player."""

from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .floor_field import DistanceField
from .grid import GridMap, Position


class NoLegalMoveError(RuntimeError):
    """Raised when an agent has no legal step from its current cell."""


class Direction(Enum):
    """Compass moves as (d_row, d_col) offsets."""
    NORTH = (-1, 0)
    SOUTH = (1, 0)
    WEST = (0, -1)
    EAST = (0, 1)

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def apply(self, pos: Position) -> Position:
        dr, dc = self.value
        return (pos[0] + dr, pos[1] + dc)


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.WEST: Direction.EAST,
    Direction.EAST: Direction.WEST,
}


class EnemyWalker:
    """
    Constrained random walk of the pursued agent.

    Each step picks uniformly among the directions that stay on the board
    and do not reverse the previous move. The history is owned by the
    caller and threaded through `step`.
    """

    @staticmethod
    def legal_moves(grid: GridMap, pos: Position,
                    history: Optional[Direction]) -> List[Direction]:
        """Directions available from `pos`, in N, S, W, E order."""
        forbidden = history.opposite if history is not None else None
        moves = []
        for direction in Direction:
            if direction is forbidden:
                continue
            if grid.in_bounds(*direction.apply(pos)):
                moves.append(direction)
        return moves

    @staticmethod
    def step(grid: GridMap, pos: Position,
             history: Optional[Direction],
             rng: np.random.Generator) -> Tuple[Position, Direction]:
        """Take one step and return (new_position, new_history)."""
        moves = EnemyWalker.legal_moves(grid, pos, history)
        if not moves:
            raise NoLegalMoveError(
                f"Enemy at {pos} has no legal move "
                f"(board {grid.height}x{grid.width}, last move "
                f"{history.name if history else 'none'})")

        direction = moves[int(rng.integers(len(moves)))]
        return direction.apply(pos), direction


class PlayerNavigator:
    """
    Greedy descent of the distance field.

    The player always moves to the neighbour with the lowest field value;
    ties go to the first neighbour in N, W, S, E order.
    """

    @staticmethod
    def step(grid: GridMap, pos: Position,
             field: DistanceField) -> Position:
        """Return the player's next position."""
        best: Optional[Position] = None
        best_value = -1
        for neighbor in grid.get_neighbors(*pos):
            value = field.get_distance(*neighbor)
            # Strictly smaller only, so the first scanned neighbour keeps ties
            if best is None or value < best_value:
                best = neighbor
                best_value = value

        if best is None:
            raise NoLegalMoveError(
                f"Player at {pos} has no neighbour on a "
                f"{grid.height}x{grid.width} board")
        return best
