"""Run orchestration: parameters, trail, animation state machine, schedulers."""

from .animation import (
    DEFAULT_REGISTRY,
    AnimationController,
    RunHandle,
    RunPhase,
    RunRegistry,
    RunState,
    start_simulation,
)
from .parameters import SimulationParameters, parse_number
from .scheduler import FrameScheduler, ManualScheduler, MatplotlibScheduler
from .trail import Trail

__all__ = [
    "SimulationParameters",
    "parse_number",
    "Trail",
    "RunPhase",
    "RunState",
    "AnimationController",
    "RunRegistry",
    "RunHandle",
    "DEFAULT_REGISTRY",
    "start_simulation",
    "FrameScheduler",
    "ManualScheduler",
    "MatplotlibScheduler",
]
