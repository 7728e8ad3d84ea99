#!/usr/bin/env python3
"""
Wavefront Chase

A pursuer walks the wavefront (BFS distance field) toward a randomly
wandering target until the two are adjacent.

Usage:
    python -m wavefront_chase.main [--config FILE] [options]

Examples:
    python -m wavefront_chase.main --width 12 --height 8
    python -m wavefront_chase.main --config configs/default.yaml --gif
    python -m wavefront_chase.main --width 30 --height 20 --delay 0 --quiet --seed 7
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .config import SimulationConfig, load_config
from .model.engine import Simulation
from .model.grid import InvalidDimensions
from .export.trace_log import TraceWriter
from .export.renderer import TerminalRenderer
from .export.reporter import Reporter
from .export.visualizer import Visualizer


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='wavefront-chase',
        description='Wavefront pursuit on a rectangular grid',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    wavefront-chase --width 12 --height 8
    wavefront-chase --config configs/default.yaml --gif
    wavefront-chase --width 30 --height 20 --delay 0 --quiet --seed 7
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file')

    # Board and pacing overrides
    parser.add_argument('--width', type=int, default=None,
                        help='Board width (prompted if not given)')
    parser.add_argument('--height', type=int, default=None,
                        help='Board height (prompted if not given)')
    parser.add_argument('--delay', type=float, default=None,
                        help='Seconds between redraws (default: 0.7)')
    parser.add_argument('--clear', dest='clear', action='store_true', default=None,
                        help='Clear the terminal between frames (default)')
    parser.add_argument('--no-clear', dest='clear', action='store_false',
                        help='Separate frames with blank lines instead')
    parser.add_argument('--max-ticks', type=int, default=None,
                        help='Stop after this many ticks even if not caught')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress board drawing and stdout output')
    parser.add_argument('--verbose', action='store_true', default=False,
                        help='Log every tick to stderr')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    return parser.parse_args(argv)


def prompt_dimensions(input_fn: Callable[[str], str] = input) -> Tuple[int, int]:
    """Ask for 'width height' on one line."""
    answer = input_fn("Enter the width and the height of the board:\n")
    parts = answer.split()
    if len(parts) != 2:
        raise ValueError(f"Expected two integers, got {answer!r}")
    return int(parts[0]), int(parts[1])


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Load the config file (if any) and apply CLI overrides."""
    config = load_config(args.config) if args.config else SimulationConfig()

    if args.width is not None:
        config.board.width = args.width
    if args.height is not None:
        config.board.height = args.height
    if args.delay is not None:
        if args.delay < 0:
            raise ValueError(f"--delay must be non-negative, got {args.delay}")
        config.display.delay = args.delay
    if args.clear is not None:
        config.display.clear_screen = args.clear
    if args.max_ticks is not None:
        if args.max_ticks < 0:
            raise ValueError(f"--max-ticks must be non-negative, got {args.max_ticks}")
        config.max_ticks = args.max_ticks
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir
    return config


def main(argv: Optional[List[str]] = None,
         input_fn: Callable[[str], str] = input,
         sleep_fn: Callable[[float], None] = time.sleep) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    # Load configuration
    try:
        config = build_config(args)
        if config.board.width is None or config.board.height is None:
            config.board.width, config.board.height = prompt_dimensions(input_fn)
        sim = Simulation.from_config(config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except InvalidDimensions as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ValueError, EOFError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    renderer = TerminalRenderer(clear_screen=config.display.clear_screen)

    # Initialize exporters
    trace = None
    if config.csv_enabled:
        trace = TraceWriter(config.out_dir / 'chase_log.csv').open()

    visualizer = Visualizer(config.board.width, config.board.height)
    reporter = Reporter(str(args.config) if args.config else None, config.seed)

    def record(state):
        if trace is not None:
            trace.write(state)
        visualizer.track(state)
        if config.gif_enabled:
            visualizer.buffer_frame(state)
        reporter.update(state)

    final_state = sim.snapshot()
    record(final_state)
    if not config.quiet:
        renderer.render(sim)

    # Main simulation loop
    try:
        while not sim.is_terminal():
            if config.max_ticks is not None and sim.current_tick >= config.max_ticks:
                if not config.quiet:
                    print(f"Stopped after {sim.current_tick} ticks without a catch.")
                break
            if config.display.delay > 0:
                sleep_fn(config.display.delay)
            final_state = sim.tick()
            record(final_state)
            if not config.quiet:
                renderer.render(sim)

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    # Cleanup and final exports
    if trace is not None:
        trace.close()
        if not config.quiet:
            print(f"CSV saved: {config.out_dir / 'chase_log.csv'}")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'chase.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    # Print summary report
    if not config.quiet:
        report = reporter.generate_summary(
            final_state,
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
