"""Per-tick chase trace written as CSV."""

import csv
from pathlib import Path
from typing import IO, Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import SimulationState


FIELDNAMES = ['tick', 'player_row', 'player_col', 'enemy_row', 'enemy_col',
              'enemy_move', 'distance', 'status']


class TraceWriter:
    """
    One CSV row per snapshot, flushed as the chase runs so an interrupted
    run still leaves a readable log.
    """

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.rows_written = 0
        self._handle: Optional[IO[str]] = None
        self._writer: Optional[csv.DictWriter] = None

    @property
    def closed(self) -> bool:
        return self._handle is None

    def open(self) -> "TraceWriter":
        """Create the file (and parent directories) and write the header."""
        if not self.closed:
            return self
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self.output_path.open('w', newline='', encoding='utf-8')
        self._writer = csv.DictWriter(self._handle, fieldnames=FIELDNAMES)
        self._writer.writeheader()
        self.rows_written = 0
        return self

    def write(self, state: "SimulationState") -> None:
        """Append the rows for one snapshot."""
        if self.closed:
            raise RuntimeError(f"Trace {self.output_path} is not open")
        rows = state.to_csv_rows()
        self._writer.writerows(rows)
        self._handle.flush()
        self.rows_written += len(rows)

    def write_all(self, states: Iterable["SimulationState"]) -> None:
        for state in states:
            self.write(state)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
        self._handle = None
        self._writer = None

    def __enter__(self) -> "TraceWriter":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
