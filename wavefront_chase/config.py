"""Configuration dataclasses and YAML loader for the wavefront chase."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from pathlib import Path
import yaml


@dataclass
class BoardConfig:
    # None = ask the user at startup
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass
class DisplayConfig:
    delay: float = 0.7          # seconds between redraws
    clear_screen: bool = True   # False = separate frames with blank lines


@dataclass
class SimulationConfig:
    board: BoardConfig = field(default_factory=BoardConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    max_ticks: Optional[int] = None

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def _optional_int(raw: Dict[str, Any], key: str,
                  minimum: Optional[int] = None) -> Optional[int]:
    """Read an optional integer, rejecting bools and values below minimum."""
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise ValueError(f"'{key}' must be >= {minimum}, got {value}")
    return value


def _optional_bool(raw: Dict[str, Any], key: str, default: bool) -> bool:
    """Read an optional flag; only YAML booleans are accepted."""
    value = raw.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be true or false, got {value!r}")
    return value


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Section '{name}' must be a mapping")
    return section


def parse_config(raw: Optional[Dict[str, Any]]) -> SimulationConfig:
    """Build a config from an already-parsed YAML mapping."""
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValueError("Configuration root must be a mapping")

    # Positivity of the board is checked by the model (InvalidDimensions)
    board_raw = _section(raw, 'board')
    board = BoardConfig(
        width=_optional_int(board_raw, 'width'),
        height=_optional_int(board_raw, 'height')
    )

    display_raw = _section(raw, 'display')
    delay = display_raw.get('delay', 0.7)
    if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
        raise ValueError(f"'delay' must be a non-negative number, got {delay!r}")
    display = DisplayConfig(
        delay=float(delay),
        clear_screen=_optional_bool(display_raw, 'clear_screen', True)
    )

    sim_raw = _section(raw, 'simulation')

    # Parse export config (optional)
    export_raw = _section(raw, 'export')

    return SimulationConfig(
        board=board,
        display=display,
        max_ticks=_optional_int(sim_raw, 'max_ticks', minimum=0),
        seed=_optional_int(sim_raw, 'seed', minimum=0),
        csv_enabled=_optional_bool(export_raw, 'csv', True),
        snapshot_enabled=_optional_bool(export_raw, 'snapshot', True),
        gif_enabled=_optional_bool(export_raw, 'gif', False)
    )


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f)
    return parse_config(raw)
