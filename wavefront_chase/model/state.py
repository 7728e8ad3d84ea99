"""State snapshot dataclasses for the wavefront chase simulation."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np


class SimulationStatus(Enum):
    """Lifecycle of a simulation."""
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class SimulationState:
    """Snapshot of the board after a given tick (tick 0 = initial board)."""
    tick: int
    player: Tuple[int, int]
    enemy: Tuple[int, int]
    enemy_move: Optional[str]   # "NORTH", "SOUTH", "WEST", "EAST" or None
    distance: int
    status: SimulationStatus
    occupancy: np.ndarray               # Copy of occupancy grid
    field: Optional[np.ndarray] = None  # Distance field used during the tick

    @property
    def terminated(self) -> bool:
        return self.status is SimulationStatus.TERMINATED

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        return [
            {
                "tick": self.tick,
                "player_row": self.player[0],
                "player_col": self.player[1],
                "enemy_row": self.enemy[0],
                "enemy_col": self.enemy[1],
                "enemy_move": self.enemy_move or "",
                "distance": self.distance,
                "status": self.status.value,
            }
        ]
