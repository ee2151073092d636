# src/cannonlab/utils/io.py
from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from cannonlab.logger import COLUMNS


def state_record(state: Any) -> dict[str, Any]:
    """Flatten a RunState into one row with the CSVLogger columns."""
    position = state.position
    return {
        "t": state.elapsed_time,
        "frame": state.frame_count,
        "x": position.x if position is not None else float("nan"),
        "y": position.y if position is not None else float("nan"),
        "trail_points": len(state.trail),
        "phase": state.phase.name,
    }


def save_run_history(history: Iterable[Any], filepath: str | Path) -> Path:
    """
    Saves run states or row dicts to a CSV file.

    Args:
        history: RunState objects, or dicts like {'t': 0.1, 'x': 1.0, ...}
        filepath: Destination path (e.g., 'results/run1.csv')

    Returns:
        The path written to.
    """
    rows = [row if isinstance(row, dict) else state_record(row) for row in history]
    if not rows:
        raise ValueError("Run history is empty. Nothing to save.")

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(rows)
    df.to_csv(path, index=False)
    print(f"Run history saved to {path.absolute()}")
    return path


def load_run_history(filepath: str | Path) -> pd.DataFrame:
    """Load a CSV written by CSVLogger or save_run_history."""
    df = pd.read_csv(filepath)
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise KeyError(f"Columns {missing} not found in {filepath}.")
    return df
