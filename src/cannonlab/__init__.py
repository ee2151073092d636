"""
CannonLab - Animated projectile motion from a rotating barrel.

Core Components
---------------
SimulationParameters : Speed, angle, barrel length and surface size
AnimationController : Per-frame state machine of one shot
start_simulation : Wire a run to a drawing surface and a frame scheduler
Renderer : Draw commands for barrel, projectile, trail and annotations

Examples
--------
>>> from cannonlab import SimulationParameters, RecordingSurface, ManualScheduler, start_simulation
>>> params = SimulationParameters(speed=50.0, angle_degrees=45.0)
>>> surface = RecordingSurface(params.surface_width, params.surface_height)
>>> scheduler = ManualScheduler()
>>> handle = start_simulation(params, surface, scheduler)
>>> scheduler.run()
"""

__version__ = "0.1.0"

from cannonlab.config import CONFIG_PRESETS, STANDARD_GRAVITY, SimulationConfig

# Physics
from cannonlab.dynamics import (
    BarrelGeometry,
    Point,
    barrel_polygon_corners,
    compute_barrel_geometry,
    flat_range,
    flight_range,
    flight_time,
    height_at,
    rotate_point,
)

# Runs
from cannonlab.core import (
    AnimationController,
    ManualScheduler,
    MatplotlibScheduler,
    RunHandle,
    RunPhase,
    RunRegistry,
    RunState,
    SimulationParameters,
    Trail,
    start_simulation,
)

# Drawing
from cannonlab.visualization import (
    DrawCommand,
    MatplotlibSurface,
    RecordingSurface,
    Renderer,
)

# Logging
from cannonlab.logger import CSVLogger
from cannonlab.utils.validation import InvalidParameterError

__all__ = [
    # Version
    "__version__",
    # Config
    "SimulationConfig",
    "CONFIG_PRESETS",
    "STANDARD_GRAVITY",
    # Physics
    "Point",
    "BarrelGeometry",
    "compute_barrel_geometry",
    "barrel_polygon_corners",
    "rotate_point",
    "flight_range",
    "flat_range",
    "flight_time",
    "height_at",
    # Runs
    "SimulationParameters",
    "Trail",
    "RunPhase",
    "RunState",
    "AnimationController",
    "RunRegistry",
    "RunHandle",
    "start_simulation",
    "ManualScheduler",
    "MatplotlibScheduler",
    # Drawing
    "Renderer",
    "DrawCommand",
    "RecordingSurface",
    "MatplotlibSurface",
    # Logging
    "CSVLogger",
    "InvalidParameterError",
]
