"""Model package for the wavefront chase simulation."""

from .state import SimulationState, SimulationStatus
from .grid import Cell, GridMap, InvalidDimensions, manhattan
from .floor_field import DistanceField
from .agent import Direction, EnemyWalker, NoLegalMoveError, PlayerNavigator
from .engine import Simulation, SimulationStateError, new_simulation

__all__ = [
    'SimulationState',
    'SimulationStatus',
    'Cell',
    'GridMap',
    'InvalidDimensions',
    'manhattan',
    'DistanceField',
    'Direction',
    'EnemyWalker',
    'NoLegalMoveError',
    'PlayerNavigator',
    'Simulation',
    'SimulationStateError',
    'new_simulation',
]
