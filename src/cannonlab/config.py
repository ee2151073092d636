"""
Configuration and constants for CannonLab runs.

Holds the physical constants, the drawing style of the scene and the
animation tuning knobs. Every run gets one immutable ``SimulationConfig``.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

# Physical constants
STANDARD_GRAVITY = 9.80665  # m/s^2
TRIG_EPSILON = 1e-12  # Direction cosines below this are treated as zero

# Input defaults
DEFAULT_BARREL_LENGTH = 100.0
DEFAULT_SURFACE_WIDTH = 800.0
DEFAULT_SURFACE_HEIGHT = 600.0

# Animation
DEFAULT_TRAIL_SAMPLE_INTERVAL = 60  # updates between trail samples
MILLISECONDS = 1000.0  # timestamp units per second


@dataclass(frozen=True)
class SimulationConfig:
    """
    Tunable settings for one simulation run.

    Parameters
    ----------
    gravity : float
        Gravitational acceleration [m/s^2]. Must be positive.
    trail_sample_interval : int
        Every n-th position update is kept in the trail.
    trail_alpha : float
        Opacity of trail dots [0, 1].
    barrel_color, base_color, projectile_color : str
        Fill colors of the scene elements.
    annotation_color, flat_range_color : str
        Colors of the range and flat-range annotations.
    font : str
        Font spec passed to the surface, e.g. ``"18px Arial"``.
    annotation_height : float
        Length of the vertical annotation ticks [px].
    label_offset, label_backoff, label_margin : float
        Label placement around a range mark. The label starts at
        ``mark + label_offset`` unless ``mark + label_margin`` runs past the
        right edge, in which case it starts at ``mark - label_backoff``.
    flat_range_dash : tuple[float, float]
        Dash pattern of the flat-range reference line.
    timestamp_unit : float
        Timestamp ticks per second (milliseconds by default, like a browser
        or matplotlib frame clock).
    max_frames : int | None
        Hard cap on position updates. ``None`` means uncapped.
    verbose : bool
        Print status lines on run start and termination.
    """

    gravity: float = STANDARD_GRAVITY
    trail_sample_interval: int = DEFAULT_TRAIL_SAMPLE_INTERVAL
    trail_alpha: float = 0.5

    barrel_color: str = "#20a38d"
    base_color: str = "black"
    projectile_color: str = "red"
    annotation_color: str = "black"
    flat_range_color: str = "grey"
    font: str = "18px Arial"

    annotation_height: float = 150.0
    label_offset: float = 20.0
    label_backoff: float = 240.0
    label_margin: float = 250.0
    flat_range_dash: tuple[float, float] = (5.0, 15.0)

    timestamp_unit: float = MILLISECONDS
    max_frames: int | None = None
    verbose: bool = True

    def __post_init__(self) -> None:
        if self.gravity <= 0:
            raise ValueError(f"Gravity must be positive, got {self.gravity}")
        if self.trail_sample_interval < 1:
            raise ValueError(
                f"Trail sample interval must be at least 1, got {self.trail_sample_interval}"
            )
        if self.timestamp_unit <= 0:
            raise ValueError(f"Timestamp unit must be positive, got {self.timestamp_unit}")
        if self.max_frames is not None and self.max_frames < 0:
            raise ValueError(f"max_frames must be non-negative, got {self.max_frames}")

    @classmethod
    def preset(cls, name: str = "default", **overrides: Any) -> SimulationConfig:
        """
        Build a config from a named preset with optional overrides.

        Presets: 'default', 'headless', 'debug'
        """
        if name not in CONFIG_PRESETS:
            raise KeyError(
                f"Unknown preset '{name}'. Available: {sorted(CONFIG_PRESETS)}"
            )
        settings = dict(CONFIG_PRESETS[name])
        settings.update(overrides)
        return cls(**settings)

    def with_overrides(self, **overrides: Any) -> SimulationConfig:
        """Copy of this config with some fields replaced."""
        return replace(self, **overrides)


CONFIG_PRESETS: dict[str, dict[str, Any]] = {
    "default": {},
    "headless": {"max_frames": 36_000, "verbose": False},  # 10 min at 60 fps
    "debug": {"max_frames": 600, "trail_sample_interval": 10},
}
