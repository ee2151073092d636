"""
CSV logging of run states with buffered writes.

Buffers rows in memory and writes in batches to keep per-frame overhead low.
Implements the context manager protocol for safe resource handling.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

if TYPE_CHECKING:
    from cannonlab.core.animation import RunState

COLUMNS = ("t", "frame", "x", "y", "trail_points", "phase")


class CSVLogger:
    """
    Buffered CSV logger for per-frame run state.

    Parameters
    ----------
    filepath : str | Path
        Output CSV file path
    buffer_size : int
        Number of rows to buffer before writing.

    Attributes
    ----------
    filepath : Path
        Path to output CSV file
    rows_written : int
        Data rows flushed to disk so far

    Notes
    -----
    Only states that carry a projectile position are logged, so the
    baseline frame and the resting barrel produce no rows.

    Examples
    --------
    >>> with CSVLogger("run.csv") as logger:
    ...     handle = start_simulation(params, surface, scheduler, logger=logger)
    ...     scheduler.run()
    """

    def __init__(self, filepath: str | Path, buffer_size: int = 200) -> None:
        if buffer_size < 1:
            raise ValueError(f"Buffer size must be at least 1, got {buffer_size}")
        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self.rows_written = 0

        self._buffer: list[list[str]] = []
        self._file: TextIO | None = None
        self._writer: Any = None  # csv.writer is a function, not a type

        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self) -> CSVLogger:
        """Open file for writing and emit the header."""
        self._file = open(self.filepath, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        self._writer.writerow(COLUMNS)
        self._file.flush()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close file, flushing any remaining data."""
        self.close()

    @property
    def closed(self) -> bool:
        return self._file is None

    def log(self, state: RunState) -> None:
        """
        Buffer one row for a run state.

        Opens the file on first use when not used as a context manager.
        """
        if state.position is None:
            return
        if self._file is None:
            self.__enter__()

        self._buffer.append([
            f"{state.elapsed_time:.6f}",
            str(state.frame_count),
            f"{state.position.x:.6e}",
            f"{state.position.y:.6e}",
            str(len(state.trail)),
            state.phase.name,
        ])
        if len(self._buffer) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write buffered rows to disk and clear buffer."""
        if self._writer and self._buffer:
            self._writer.writerows(self._buffer)
            self.rows_written += len(self._buffer)
            if self._file:
                self._file.flush()
            self._buffer.clear()

    def close(self) -> None:
        """Flush remaining data and close file."""
        self.flush()
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None
