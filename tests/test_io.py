import pandas as pd
import pytest

from cannonlab.core.animation import AnimationController
from cannonlab.logger import COLUMNS
from cannonlab.utils.io import load_run_history, save_run_history, state_record


@pytest.fixture
def history(params, quiet_config):
    controller = AnimationController(params, quiet_config)
    return [state for state, _ in controller.iter_frames()]


def test_state_record_without_position(history):
    record = state_record(history[0])
    assert set(record) == set(COLUMNS)
    assert pd.isna(record["x"])
    assert record["phase"] == "RUNNING"


def test_save_and_load(history, tmp_path, capsys):
    path = save_run_history(history, tmp_path / "out" / "run.csv")
    assert "Run history saved to" in capsys.readouterr().out

    df = load_run_history(path)
    assert list(df.columns) == list(COLUMNS)
    assert len(df) == len(history)
    assert df["phase"].iloc[-1] == "LANDED"
    assert df["frame"].iloc[-1] == history[-1].frame_count


def test_save_accepts_dict_rows(tmp_path):
    rows = [{"t": 0.0, "frame": 1, "x": 1.0, "y": 2.0, "trail_points": 0, "phase": "RUNNING"}]
    df = load_run_history(save_run_history(rows, tmp_path / "rows.csv"))
    assert df["x"].iloc[0] == 1.0


def test_save_empty_history(tmp_path):
    with pytest.raises(ValueError, match="empty"):
        save_run_history([], tmp_path / "empty.csv")


def test_load_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"t": [0.0], "x": [1.0]}).to_csv(path, index=False)
    with pytest.raises(KeyError, match="not found"):
        load_run_history(path)
