from __future__ import annotations

import os

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from cannonlab.config import SimulationConfig
from cannonlab.core.animation import AnimationController
from cannonlab.core.parameters import SimulationParameters
from cannonlab.dynamics.ballistics import height_at
from cannonlab.utils.io import load_run_history


def _analytic_path(controller: AnimationController, n: int = 200) -> tuple[np.ndarray, np.ndarray]:
    """Closed-form path from the muzzle to the landing point, physics frame."""
    fire = controller.geometry.fire_point
    params = controller.params
    end = controller.range if np.isfinite(controller.range) else 0.0
    xs = np.linspace(0.0, end, n)
    ys = np.array([
        height_at(x, params.speed, params.angle_degrees, controller.config.gravity) for x in xs
    ])
    return fire.x + xs, fire.y + ys


def _finish(fig: Figure, save_path: str | None, show: bool) -> Figure:
    fig.tight_layout()
    if save_path:
        os.makedirs(os.path.dirname(save_path) or ".", exist_ok=True)
        fig.savefig(save_path, dpi=180, bbox_inches="tight")
    if show:
        plt.show()
    return fig


def plot_trajectory(
    csv_path: str,
    params: SimulationParameters,
    config: SimulationConfig | None = None,
    save_path: str | None = None,
    show: bool = True,
) -> Figure:
    """
    Plot a logged run against the closed-form trajectory.

    Parameters
    ----------
    csv_path : str
        Path to a CSVLogger file.
    params : SimulationParameters
        Parameters the run was started with.
    config : SimulationConfig | None
        Config the run was started with.
    save_path : str | None
        If given, save the figure to this path (png/svg).
    show : bool
        Whether to call plt.show().

    Returns
    -------
    fig : Figure
    """
    df = load_run_history(csv_path)
    controller = AnimationController(params, config)
    fire = controller.geometry.fire_point
    cfg = controller.config

    fig, ax = plt.subplots(1, 1, figsize=(10, 5))

    ax_x, ax_y = _analytic_path(controller)
    ax.plot(ax_x, ax_y, color="#1a73e8", lw=2.0, label="closed form")
    ax.scatter(df["x"], df["y"], color=cfg.projectile_color, s=8, alpha=0.6, label="logged frames")

    ax.axhline(fire.y, color=cfg.flat_range_color, ls="--", lw=1.0, label="launch height")
    ax.axhline(0.0, color=cfg.base_color, lw=1.0)
    ax.axvline(fire.x + controller.range, color=cfg.annotation_color, lw=1.0,
               label=f"range {controller.range:.2f}")
    ax.axvline(fire.x + controller.flat_range, color=cfg.flat_range_color, lw=1.0,
               label=f"flat range {controller.flat_range:.2f}")

    ax.set_xlabel("x [px]"); ax.set_ylabel("y [px]")
    ax.set_title(f"Trajectory: v={params.speed}, angle={params.angle_degrees} deg")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")
    return _finish(fig, save_path, show)


def plot_height_vs_time(
    csv_path: str,
    save_path: str | None = None,
    show: bool = True,
) -> Figure:
    """
    Plot logged height and horizontal position over time.

    Parameters
    ----------
    csv_path : str
    save_path : str | None
    show : bool

    Returns
    -------
    fig : Figure
    """
    df = load_run_history(csv_path)
    t = df["t"].to_numpy()

    fig, axes = plt.subplots(2, 1, figsize=(10, 6), sharex=True)
    axes[0].plot(t, df["y"], color="#1a73e8", lw=2)
    axes[0].axhline(0.0, color="black", lw=1.0)
    axes[0].set_ylabel("y [px]")
    axes[0].grid(True, alpha=0.3)
    axes[0].set_title("Height vs time")

    axes[1].plot(t, df["x"], color="#34a853", lw=2)
    axes[1].set_xlabel("t [s]"); axes[1].set_ylabel("x [px]")
    axes[1].grid(True, alpha=0.3)
    axes[1].set_title("Horizontal position vs time")
    return _finish(fig, save_path, show)
