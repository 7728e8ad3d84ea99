"""Summary report generation for the wavefront chase."""

from typing import List, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: Optional[str], seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.distances: List[int] = []
        self.enemy_moves = {'NORTH': 0, 'SOUTH': 0, 'WEST': 0, 'EAST': 0}
        self.closing_ticks = 0
        self.widening_ticks = 0

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per tick."""
        if self.distances:
            if state.distance < self.distances[-1]:
                self.closing_ticks += 1
            elif state.distance > self.distances[-1]:
                self.widening_ticks += 1
        self.distances.append(state.distance)

        if state.enemy_move in self.enemy_moves and state.tick > 0:
            self.enemy_moves[state.enemy_move] += 1

    def generate_summary(self, final_state: "SimulationState",
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        start_distance = self.distances[0] if self.distances else final_state.distance
        outcome = "Caught" if final_state.terminated else "Not caught (stopped)"
        moves = ", ".join(f"{name.title()} {count}"
                          for name, count in self.enemy_moves.items())

        # Build report
        lines = [
            "",
            "=" * 60,
            "                 WAVEFRONT CHASE REPORT",
            "=" * 60,
            f"Configuration: {self.config_path or '(command line)'}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "CHASE METRICS",
            "-" * 40,
            f"Outcome:               {outcome}",
            f"Total Ticks:           {final_state.tick}",
            f"Start Distance:        {start_distance}",
            f"Final Distance:        {final_state.distance}",
            f"Closing / Widening:    {self.closing_ticks} / {self.widening_ticks} ticks",
            f"Enemy Moves:           {moves}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'chase_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'chase.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 60)

        return "\n".join(lines)
