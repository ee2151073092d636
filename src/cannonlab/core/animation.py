"""
Frame-by-frame animation of one shot.

Manages:
- Run state machine (IDLE → RUNNING → LANDED, plus TIMED_OUT and CANCELLED)
- Per-frame projectile position from the closed-form trajectory
- Trail sampling
- Scheduling against a host frame clock, with run-id cancellation

The controller is a pure transition function
``(RunState, timestamp) -> (RunState, list[DrawCommand])``; only
``RunHandle`` touches a surface or a scheduler.
"""
from __future__ import annotations

import itertools
import warnings
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, replace
from enum import Enum, auto

from cannonlab.config import SimulationConfig
from cannonlab.dynamics.ballistics import (
    flat_range,
    flight_range,
    flight_time,
    height_at,
    horizontal_speed,
)
from cannonlab.dynamics.geometry import Point, compute_barrel_geometry
from cannonlab.logger import CSVLogger
from cannonlab.utils.validation import validate_parameters
from cannonlab.visualization.renderer import Renderer
from cannonlab.visualization.surface import DrawCommand, DrawingSurface, apply_commands

from .parameters import SimulationParameters
from .scheduler import DEFAULT_FRAME_INTERVAL, FrameScheduler
from .trail import Trail


class RunPhase(Enum):
    """
    Run states.

    State Machine:
        IDLE → RUNNING → LANDED
                  ↓
          TIMED_OUT / CANCELLED
    """

    IDLE = auto()  # Built, nothing drawn yet
    RUNNING = auto()  # Projectile in flight
    LANDED = auto()  # Reached the landing plane
    TIMED_OUT = auto()  # Hit the max_frames cap in flight
    CANCELLED = auto()  # Superseded or stopped by the caller


TERMINAL_PHASES = frozenset({RunPhase.LANDED, RunPhase.TIMED_OUT, RunPhase.CANCELLED})


@dataclass(frozen=True)
class RunState:
    """
    Snapshot of a run between two frames.

    Attributes
    ----------
    run_id : int
        Identifier of the run this state belongs to
    phase : RunPhase
        Current state machine phase
    baseline : float | None
        Timestamp of the first frame callback, None until it arrives
    elapsed_time : float
        Seconds since the baseline at the last update
    frame_count : int
        Position updates performed (the baseline frame does not count)
    trail : Trail
        Sampled past positions, physics frame
    position : Point | None
        Last projectile position, physics frame
    """
    run_id: int = 0
    phase: RunPhase = RunPhase.IDLE
    baseline: float | None = None
    elapsed_time: float = 0.0
    frame_count: int = 0
    trail: Trail = field(default_factory=Trail)
    position: Point | None = None

    @property
    def terminated(self) -> bool:
        return self.phase in TERMINAL_PHASES


class AnimationController:
    """
    State transitions and drawing of a single shot.

    Geometry and the range figures are computed once, in the constructor,
    and never change for the run.

    Parameters
    ----------
    params : SimulationParameters
        Inputs of the run
    config : SimulationConfig | None
        Physics constants and drawing style

    Attributes
    ----------
    geometry : BarrelGeometry
        Pivot and fire point
    horizontal_speed : float
        v cos(theta)
    range : float
        Distance to the landing plane, launch height included
    flat_range : float
        Level-ground distance from the muzzle
    flight_time : float
        Time back to launch height (reference only)

    Examples
    --------
    >>> controller = AnimationController(SimulationParameters(50.0, 45.0))
    >>> state, commands = controller.start(controller.initial_state())
    >>> state, commands = controller.advance(state, 0.0)     # baseline
    >>> state, commands = controller.advance(state, 16.7)    # first update
    """

    def __init__(
        self,
        params: SimulationParameters,
        config: SimulationConfig | None = None,
    ) -> None:
        self.params = params
        self.config = config if config is not None else SimulationConfig()
        g = self.config.gravity

        self.geometry = compute_barrel_geometry(params.barrel_length, params.angle_degrees)
        self.horizontal_speed = horizontal_speed(params.speed, params.angle_degrees)
        self.range = flight_range(
            params.speed, params.angle_degrees, self.geometry.launch_height, g
        )
        self.flat_range = flat_range(params.speed, params.angle_degrees, g)
        self.flight_time = flight_time(params.speed, params.angle_degrees, g)

        self.renderer = Renderer(params.surface_width, params.surface_height, self.config)

    def initial_state(self, run_id: int = 0) -> RunState:
        return RunState(run_id=run_id, trail=Trail(interval=self.config.trail_sample_interval))

    def position_at(self, elapsed_time: float) -> Point:
        """Projectile position, physics frame, ``elapsed_time`` seconds after launch."""
        fire = self.geometry.fire_point
        x = self.horizontal_speed * elapsed_time
        y = fire.y + height_at(x, self.params.speed, self.params.angle_degrees, self.config.gravity)
        return Point(fire.x + x, y)

    def start(self, state: RunState) -> tuple[RunState, list[DrawCommand]]:
        """
        Leave IDLE: empty trail, barrel drawn at rest.

        Raises
        ------
        RuntimeError
            If the state is not IDLE
        """
        if state.phase is not RunPhase.IDLE:
            raise RuntimeError(f"Run {state.run_id} already started ({state.phase.name})")
        running = replace(
            state,
            phase=RunPhase.RUNNING,
            baseline=None,
            elapsed_time=0.0,
            frame_count=0,
            trail=state.trail.cleared(),
            position=None,
        )
        return running, self.renderer.cannon(self.geometry)

    def advance(self, state: RunState, timestamp: float) -> tuple[RunState, list[DrawCommand]]:
        """
        Handle one frame callback.

        Parameters
        ----------
        state : RunState
            State after the previous callback
        timestamp : float
            Host clock, in ``config.timestamp_unit`` ticks per second

        Returns
        -------
        tuple[RunState, list[DrawCommand]]
            Next state and the commands that draw this frame

        Notes
        -----
        The first callback of a run only stores the baseline timestamp.
        Elapsed time is always measured from that baseline. A height that
        is not above the landing plane, ``nan`` included, lands the run.
        """
        if state.phase is not RunPhase.RUNNING:
            return state, []
        if state.baseline is None:
            return replace(state, baseline=timestamp), []

        cfg = self.config
        elapsed = (timestamp - state.baseline) / cfg.timestamp_unit
        position = self.position_at(elapsed)
        frame_count = state.frame_count + 1

        commands = self.renderer.scene(self.geometry, state.trail, position)
        trail = state.trail.record(position, frame_count)

        if position.y > 0:
            phase = RunPhase.RUNNING
            if cfg.max_frames is not None and frame_count >= cfg.max_frames:
                phase = RunPhase.TIMED_OUT
                warnings.warn(
                    f"Run {state.run_id} still in flight after {frame_count} frames; "
                    f"stopping at max_frames={cfg.max_frames}.",
                    RuntimeWarning,
                    stacklevel=2,
                )
        else:
            phase = RunPhase.LANDED
            commands += self.renderer.landing(self.geometry, self.range, self.flat_range)

        next_state = replace(
            state,
            phase=phase,
            elapsed_time=elapsed,
            frame_count=frame_count,
            trail=trail,
            position=position,
        )
        return next_state, commands

    def cancel(self, state: RunState) -> RunState:
        """Move a live run to CANCELLED. Terminal states are kept."""
        if state.terminated:
            return state
        return replace(state, phase=RunPhase.CANCELLED)

    def iter_frames(
        self,
        frame_interval: float = DEFAULT_FRAME_INTERVAL,
        run_id: int = 0,
    ) -> Iterator[tuple[RunState, list[DrawCommand]]]:
        """
        Drive the state machine on a fixed clock, without a surface.

        Yields the start transition, then one item per frame callback until
        the run terminates. Without ``config.max_frames`` a run that never
        lands yields forever.
        """
        state, commands = self.start(self.initial_state(run_id))
        yield state, commands
        for tick in itertools.count():
            state, commands = self.advance(state, tick * frame_interval)
            yield state, commands
            if state.terminated:
                return


class RunRegistry:
    """
    Hands out run ids and tracks which one is current.

    Activating a new run invalidates the previous id, so any frame callback
    still scheduled for the old run stops at its next invocation.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.active_id: int | None = None

    def activate(self) -> int:
        self.active_id = next(self._ids)
        return self.active_id

    def is_active(self, run_id: int) -> bool:
        return run_id == self.active_id

    def release(self, run_id: int) -> None:
        if self.is_active(run_id):
            self.active_id = None


DEFAULT_REGISTRY = RunRegistry()


class RunHandle:
    """
    A run wired to a surface and a scheduler.

    Created by ``start_simulation``. Each frame callback checks that the
    run is still the registry's active run before drawing.

    Attributes
    ----------
    run_id : int
        Identifier from the registry
    controller : AnimationController
        State machine of this run
    """

    def __init__(
        self,
        controller: AnimationController,
        surface: DrawingSurface,
        scheduler: FrameScheduler,
        registry: RunRegistry,
        logger: CSVLogger | None = None,
        on_finish: Callable[[RunHandle], None] | None = None,
    ) -> None:
        self.controller = controller
        self.surface = surface
        self.scheduler = scheduler
        self.registry = registry
        self.logger = logger
        self.on_finish = on_finish
        self.run_id = registry.activate()
        self._state = controller.initial_state(self.run_id)
        self._finished = False

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def phase(self) -> RunPhase:
        return self._state.phase

    @property
    def is_active(self) -> bool:
        return self.registry.is_active(self.run_id) and not self._state.terminated

    def begin(self) -> None:
        """Draw the barrel at rest and request the baseline frame."""
        self._state, commands = self.controller.start(self._state)
        apply_commands(self.surface, commands)
        self.scheduler.request_frame(self._on_frame)

    def cancel(self) -> None:
        """Stop the run; a pending callback returns without drawing."""
        self.registry.release(self.run_id)
        self._finish(self.controller.cancel(self._state))

    def _on_frame(self, timestamp: float) -> None:
        if self._state.terminated:
            return
        if not self.registry.is_active(self.run_id):
            self._finish(self.controller.cancel(self._state))
            return

        self._state, commands = self.controller.advance(self._state, timestamp)
        apply_commands(self.surface, commands)
        if self.logger is not None:
            self.logger.log(self._state)

        if self._state.terminated:
            self.registry.release(self.run_id)
            self._finish(self._state)
        else:
            self.scheduler.request_frame(self._on_frame)

    def _finish(self, state: RunState) -> None:
        self._state = state
        if self._finished:
            return
        self._finished = True
        if self.logger is not None:
            self.logger.flush()
        if self.controller.config.verbose:
            print(
                f"[Simulation] Run {self.run_id} {state.phase.name.lower()} "
                f"after {state.elapsed_time:.2f}s ({state.frame_count} frames)"
            )
        if self.on_finish is not None:
            self.on_finish(self)


def start_simulation(
    params: SimulationParameters,
    surface: DrawingSurface,
    scheduler: FrameScheduler,
    *,
    config: SimulationConfig | None = None,
    registry: RunRegistry | None = None,
    logger: CSVLogger | None = None,
    validate: bool = True,
    on_finish: Callable[[RunHandle], None] | None = None,
) -> RunHandle:
    """
    Start one shot on a surface.

    Parameters
    ----------
    params : SimulationParameters
        Inputs of the run
    surface : DrawingSurface
        Where frames are drawn
    scheduler : FrameScheduler
        Host frame clock
    config : SimulationConfig | None
        Physics constants and style
    registry : RunRegistry | None
        Run-id registry shared by runs on the same surface. Defaults to the
        module-level registry.
    logger : CSVLogger | None
        Receives every run state that has a projectile position
    validate : bool
        Reject degenerate parameters before anything is drawn
    on_finish : Callable[[RunHandle], None] | None
        Called once when the run reaches a terminal phase

    Returns
    -------
    RunHandle
        Handle of the started run. Any run previously started through the
        same registry is cancelled at its next frame.

    Raises
    ------
    InvalidParameterError
        If validate=True and a parameter is degenerate
    """
    if validate:
        validate_parameters(params, strict=True)

    controller = AnimationController(params, config)
    handle = RunHandle(
        controller,
        surface,
        scheduler,
        registry if registry is not None else DEFAULT_REGISTRY,
        logger=logger,
        on_finish=on_finish,
    )
    if controller.config.verbose:
        print(
            f"[Simulation] Run {handle.run_id}: v={params.speed} angle={params.angle_degrees}deg "
            f"L={params.barrel_length} -> range {controller.range:.2f}, "
            f"flat range {controller.flat_range:.2f}"
        )
    handle.begin()
    return handle
