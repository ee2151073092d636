"""
Fire-button boundary and command line entry point.

``fire`` plays the part of the button handler: it reads raw input values,
builds the parameters, picks a surface and a frame scheduler and starts
exactly one run.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import matplotlib.pyplot as plt

from cannonlab.config import (
    CONFIG_PRESETS,
    DEFAULT_SURFACE_HEIGHT,
    DEFAULT_SURFACE_WIDTH,
    SimulationConfig,
)
from cannonlab.core.animation import RunHandle, RunRegistry, start_simulation
from cannonlab.core.parameters import SimulationParameters
from cannonlab.core.scheduler import ManualScheduler, MatplotlibScheduler
from cannonlab.logger import CSVLogger
from cannonlab.utils.validation import InvalidParameterError, validate_parameters
from cannonlab.visualization.surface import MatplotlibSurface, RecordingSurface

FIGURE_DPI = 100


def fire(
    speed: object,
    angle: object,
    size: object = None,
    *,
    width: object = DEFAULT_SURFACE_WIDTH,
    height: object = DEFAULT_SURFACE_HEIGHT,
    headless: bool = False,
    config: SimulationConfig | None = None,
    log_path: str | Path | None = None,
    validate: bool = True,
    show: bool = True,
    registry: RunRegistry | None = None,
) -> RunHandle:
    """
    Start one shot from raw input values.

    Parameters
    ----------
    speed, angle, size : object
        Raw widget values, read with ``parse_number``
    width, height : object
        Drawing surface size [px]
    headless : bool
        Draw on a RecordingSurface with a ManualScheduler and run to the end
        before returning. Otherwise open a matplotlib window.
    config : SimulationConfig | None
        Defaults to the 'headless' preset when headless, else SimulationConfig()
    log_path : str | Path | None
        Write per-frame CSV log here
    validate : bool
        Reject degenerate parameters before any figure or log file is created
    show : bool
        Call plt.show() for windowed runs. When the window closes, a run
        still in flight is cancelled and its log is written out.
    registry : RunRegistry | None
        Run-id registry; a new shot cancels the previous one on it

    Returns
    -------
    RunHandle

    Raises
    ------
    InvalidParameterError
        If validate=True and a parameter is degenerate
    """
    params = SimulationParameters.from_inputs(speed, angle, size, width, height)
    if config is None:
        config = SimulationConfig.preset("headless") if headless else SimulationConfig()

    if validate:
        validate_parameters(params, strict=True)

    fig = None
    if headless:
        surface = RecordingSurface(params.surface_width, params.surface_height)
        scheduler = ManualScheduler()
    else:
        fig, ax = plt.subplots(
            figsize=(params.surface_width / FIGURE_DPI, params.surface_height / FIGURE_DPI),
            dpi=FIGURE_DPI,
        )
        fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
        surface = MatplotlibSurface(ax, params.surface_width, params.surface_height)
        scheduler = MatplotlibScheduler(fig)

    logger = CSVLogger(log_path) if log_path is not None else None

    def _on_finish(handle: RunHandle) -> None:
        if logger is not None:
            logger.close()

    handle = start_simulation(
        params, surface, scheduler,
        config=config,
        registry=registry,
        logger=logger,
        validate=False,
        on_finish=_on_finish,
    )

    def _shutdown(event=None) -> None:
        # A run left in flight still owns buffered log rows
        if handle.is_active:
            handle.cancel()
        if logger is not None:
            logger.close()

    if fig is not None:
        fig.canvas.mpl_connect("close_event", _shutdown)

    if headless:
        try:
            scheduler.run()
        finally:
            _shutdown()
    elif show:
        try:
            plt.show()
        finally:
            _shutdown()
    return handle


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cannonlab",
        description="Animate a projectile fired from a rotating barrel.",
    )
    parser.add_argument('--speed', required=True, help='Launch speed [units/s]')
    parser.add_argument('--angle', required=True, help='Barrel elevation [deg]')
    parser.add_argument('--size', default=None, help='Barrel length [px] (default 100)')
    parser.add_argument('--width', type=float, default=DEFAULT_SURFACE_WIDTH, help='Surface width [px]')
    parser.add_argument('--height', type=float, default=DEFAULT_SURFACE_HEIGHT, help='Surface height [px]')
    parser.add_argument('--preset', choices=sorted(CONFIG_PRESETS), default=None, help='Configuration preset')
    parser.add_argument('--max-frames', type=int, default=None, help='Stop a run still in flight after this many frames')
    parser.add_argument('--gravity', type=float, default=None, help='Gravitational acceleration')
    parser.add_argument('--log', type=Path, default=None, help='Write per-frame CSV log to this path')
    parser.add_argument('--headless', action='store_true', help='Run without a window and print the annotations')
    parser.add_argument('--no-validate', dest='validate', action='store_false', help='Let degenerate parameters through')
    parser.add_argument('--quiet', action='store_true', help='Suppress status lines')
    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    preset = args.preset or ("headless" if args.headless else "default")
    overrides = {}
    if args.max_frames is not None:
        overrides["max_frames"] = args.max_frames
    if args.gravity is not None:
        overrides["gravity"] = args.gravity
    if args.quiet:
        overrides["verbose"] = False
    return SimulationConfig.preset(preset, **overrides)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"[cannonlab] Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        handle = fire(
            args.speed, args.angle, args.size,
            width=args.width, height=args.height,
            headless=args.headless,
            config=config,
            log_path=args.log,
            validate=args.validate,
        )
    except InvalidParameterError as e:
        print(f"[cannonlab] Invalid parameter: {e}", file=sys.stderr)
        return 2

    if args.headless:
        for text in handle.surface.texts():
            print(text)
        print(f"Final phase: {handle.phase.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
