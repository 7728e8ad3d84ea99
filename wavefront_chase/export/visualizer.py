"""Visualization and export for the wavefront chase."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from pathlib import Path
from typing import List, Tuple, TYPE_CHECKING
from PIL import Image
import io

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Visualizer:
    """
    Generates visual outputs using matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation

    The wavefront used during the tick is shaded under the agents,
    darker = closer to the enemy.
    """

    # Color scheme
    COLORS = {
        'floor': '#ECF0F1',     # Light gray
        'wave': '#2980B9',      # Blue
        'player': '#27AE60',    # Green
        'enemy': '#E74C3C',     # Red
        'trail': '#95A5A6',     # Gray
    }

    def __init__(self, grid_width: int, grid_height: int):
        self.width = grid_width
        self.height = grid_height
        self.frames: List[Image.Image] = []
        self.player_trail: List[Tuple[int, int]] = []

    def _create_figure(self, state: "SimulationState",
                       show_field: bool = True) -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        # Determine figure size based on grid aspect ratio
        aspect = self.width / self.height
        fig_height = 6
        fig_width = min(16, max(6, fig_height * aspect))
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        base = np.ones((self.height, self.width, 3))
        base[:, :] = to_rgb(self.COLORS['floor'])

        # Overlay wavefront shading
        if show_field and state.field is not None and np.max(state.field) > 0:
            closeness = 1.0 - state.field / np.max(state.field)
            wave_rgb = to_rgb(self.COLORS['wave'])
            for c in range(3):
                base[:, :, c] = np.clip(
                    base[:, :, c] * (1 - 0.6 * closeness) +
                    wave_rgb[c] * 0.6 * closeness,
                    0, 1
                )

        ax.imshow(base, origin='upper', aspect='equal',
                  extent=[-0.5, self.width - 0.5, self.height - 0.5, -0.5])

        # Draw the player's path so far
        if len(self.player_trail) > 1:
            rows, cols = zip(*self.player_trail)
            ax.plot(cols, rows, '-', color=self.COLORS['trail'],
                    linewidth=1.5, alpha=0.8)

        ax.plot(state.enemy[1], state.enemy[0], 's', color=self.COLORS['enemy'],
                markersize=10, markeredgecolor='black', markeredgewidth=0.5)
        ax.plot(state.player[1], state.player[0], 'o', color=self.COLORS['player'],
                markersize=10, markeredgecolor='black', markeredgewidth=0.5)

        # Title and labels
        outcome = 'caught' if state.terminated else 'running'
        ax.set_title(f'Tick {state.tick} | Distance: {state.distance} | {outcome}')
        ax.set_xlabel('Column')
        ax.set_ylabel('Row')

        # Set axis limits
        ax.set_xlim(-0.5, self.width - 0.5)
        ax.set_ylim(self.height - 0.5, -0.5)

        # Legend
        legend_elements = [
            plt.Line2D([0], [0], marker='o', color='w', label='Player',
                       markerfacecolor=self.COLORS['player'], markersize=8),
            plt.Line2D([0], [0], marker='s', color='w', label='Enemy',
                       markerfacecolor=self.COLORS['enemy'], markersize=8),
        ]
        ax.legend(handles=legend_elements, loc='upper right', fontsize=8)

        plt.tight_layout()
        return fig

    def track(self, state: "SimulationState") -> None:
        """Record the player position for the trail overlay."""
        if not self.player_trail or self.player_trail[-1] != state.player:
            self.player_trail.append(state.player)

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 4) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )
