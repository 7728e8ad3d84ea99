"""Simulation engine for the wavefront chase."""

import logging
from typing import Callable, Dict, List, Optional, TYPE_CHECKING

import numpy as np

from .agent import Direction, EnemyWalker, PlayerNavigator
from .floor_field import DistanceField
from .grid import Cell, GridMap, Position, manhattan
from .state import SimulationState, SimulationStatus

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


class SimulationStateError(RuntimeError):
    """Raised when a tick is requested on a terminated simulation."""


class Simulation:
    """
    Orchestrates the pursuit, one tick at a time.

    A tick:
    1. Compute the distance field from the enemy's current position
    2. Move the enemy (constrained random walk)
    3. Move the player greedily over the field from step 1
    4. Re-evaluate termination and return a state snapshot

    The player reads the field computed before the enemy moved.
    """

    def __init__(self, width: int, height: int,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        self.grid = GridMap(width, height)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.current_tick = 0

        self.player: Position = (0, 0)
        self.enemy: Position = (self.grid.height - 1, self.grid.width - 1)
        self.history: Optional[Direction] = None
        self.last_field: Optional[DistanceField] = None

        self.grid.place(Cell.ENEMY, *self.enemy)
        # Player written last so a 1x1 board shows the player
        self.grid.place(Cell.PLAYER, *self.player)

        self.status = (SimulationStatus.TERMINATED if self.is_terminal()
                       else SimulationStatus.RUNNING)
        logger.debug("New %dx%d simulation, player %s, enemy %s, status %s",
                     self.grid.width, self.grid.height, self.player,
                     self.enemy, self.status.value)

    @classmethod
    def from_config(cls, config: "SimulationConfig") -> "Simulation":
        """Create a simulation from a loaded configuration."""
        return cls(config.board.width, config.board.height,
                   seed=config.seed)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def distance(self) -> int:
        """Manhattan distance between player and enemy."""
        return manhattan(self.player, self.enemy)

    def is_terminal(self) -> bool:
        """Check if the player has caught up with the enemy."""
        return self.distance() <= 1

    def occupancy_at(self, row: int, col: int) -> Cell:
        """Read-only occupancy accessor for renderers."""
        return self.grid.get_cell(row, col)

    def tick(self) -> SimulationState:
        """Execute one discrete time step."""
        if self.status is SimulationStatus.TERMINATED:
            raise SimulationStateError(
                f"Simulation terminated at tick {self.current_tick}; "
                f"no further ticks allowed")

        # Phase 1: wavefront from the enemy's pre-move position
        field = DistanceField.compute(self.grid, self.enemy)

        # Phase 2: enemy random walk
        new_enemy, self.history = EnemyWalker.step(
            self.grid, self.enemy, self.history, self.rng)
        self.grid.move(Cell.ENEMY, self.enemy, new_enemy)
        self.enemy = new_enemy

        # Phase 3: player follows the pre-move field
        new_player = PlayerNavigator.step(self.grid, self.player, field)
        self.grid.move(Cell.PLAYER, self.player, new_player)
        self.player = new_player

        self.current_tick += 1
        self.last_field = field
        if self.is_terminal():
            self.status = SimulationStatus.TERMINATED

        logger.debug("Tick %d: enemy %s -> %s, player -> %s, distance %d",
                     self.current_tick, self.history.name, self.enemy,
                     self.player, self.distance())
        if self.status is SimulationStatus.TERMINATED:
            logger.debug("Enemy caught after %d ticks", self.current_tick)

        return self.snapshot()

    def snapshot(self) -> SimulationState:
        """Create immutable snapshot of current simulation state."""
        return SimulationState(
            tick=self.current_tick,
            player=self.player,
            enemy=self.enemy,
            enemy_move=self.history.name if self.history else None,
            distance=self.distance(),
            status=self.status,
            occupancy=self.grid.occupancy.copy(),
            field=(self.last_field.field.copy()
                   if self.last_field is not None else None),
        )

    def run(self, max_ticks: Optional[int] = None,
            on_tick: Optional[Callable[["Simulation"], None]] = None
            ) -> List[SimulationState]:
        """
        Tick until terminal or `max_ticks` reached.
        Returns the snapshots of every tick executed, in order.
        """
        states = []
        while not self.is_terminal():
            if max_ticks is not None and self.current_tick >= max_ticks:
                break
            states.append(self.tick())
            if on_tick is not None:
                on_tick(self)
        return states

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        return {
            'board': f"{self.grid.width}x{self.grid.height}",
            'total_ticks': self.current_tick,
            'caught': self.status is SimulationStatus.TERMINATED,
            'player': self.player,
            'enemy': self.enemy,
            'distance': self.distance(),
        }


def new_simulation(width: int, height: int,
                   rng: Optional[np.random.Generator] = None,
                   seed: Optional[int] = None) -> Simulation:
    """Create a simulation with the player at (0, 0) and enemy opposite."""
    return Simulation(width, height, rng=rng, seed=seed)
