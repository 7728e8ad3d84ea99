"""Terminal rendering for the wavefront chase."""

import sys
from typing import Callable, Optional, TextIO

from ..model.grid import Cell


class TerminalRenderer:
    """
    Draws the board as a character matrix.

    Output format (player C, enemy &, empty .):
         C  .  .
         .  .  &
    """

    SYMBOLS = {
        Cell.EMPTY: '.',
        Cell.PLAYER: 'C',
        Cell.ENEMY: '&',
    }

    CLEAR_SEQUENCE = "\033[2J\033[H"

    def __init__(self, stream: Optional[TextIO] = None,
                 clear_screen: bool = True):
        self.stream = stream if stream is not None else sys.stdout
        self.clear_screen = clear_screen

    def format_board(self, width: int, height: int,
                     cell_at: Callable[[int, int], Cell]) -> str:
        """Return the board as text, one line per row."""
        lines = []
        for row in range(height):
            lines.append("".join(f" {self.SYMBOLS[cell_at(row, col)]} "
                                 for col in range(width)))
        return "\n".join(lines)

    def clear(self) -> None:
        """Clear the terminal, or push the old frame up with blank lines."""
        if self.clear_screen:
            self.stream.write(self.CLEAR_SEQUENCE)
        else:
            self.stream.write("\n\n\n")

    def render(self, sim) -> None:
        """Draw the current board of `sim` followed by a blank gap."""
        self.clear()
        self.stream.write(self.format_board(sim.width, sim.height,
                                            sim.occupancy_at))
        self.stream.write("\n\n\n")
        self.stream.flush()

    def __call__(self, sim) -> None:
        self.render(sim)
