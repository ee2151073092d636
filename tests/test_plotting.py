"""
Tests for the offline plotting helpers.
"""
import matplotlib.pyplot as plt
import pytest
from matplotlib.figure import Figure

from cannonlab.core.animation import AnimationController
from cannonlab.logger import CSVLogger
from cannonlab.visualization import plotting


@pytest.fixture
def run_csv(tmp_path, params, quiet_config):
    """Log one complete reference run."""
    path = tmp_path / "run.csv"
    controller = AnimationController(params, quiet_config)
    with CSVLogger(path) as logger:
        for state, _ in controller.iter_frames():
            logger.log(state)
    return path


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_plot_trajectory(run_csv, params, quiet_config):
    fig = plotting.plot_trajectory(str(run_csv), params, quiet_config, show=False)
    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    labels = [line.get_label() for line in ax.get_lines()]
    assert "closed form" in labels
    assert any(label.startswith("flat range 254.93") for label in labels)


def test_plot_trajectory_saves(run_csv, params, tmp_path):
    out = tmp_path / "plots" / "trajectory.png"
    plotting.plot_trajectory(str(run_csv), params, save_path=str(out), show=False)
    assert out.exists()


def test_plot_height_vs_time(run_csv, tmp_path):
    out = tmp_path / "height.png"
    fig = plotting.plot_height_vs_time(str(run_csv), save_path=str(out), show=False)
    assert len(fig.axes) == 2
    assert out.exists()


def test_missing_csv(tmp_path, params):
    with pytest.raises(FileNotFoundError):
        plotting.plot_trajectory(str(tmp_path / "nope.csv"), params, show=False)
