"""
Simple shot: one projectile fired from the rotating barrel.

Demonstrates:
- Headless run on a recording surface with a manual frame clock
- Per-frame CSV logging
- Plot of the logged path against the closed-form trajectory
"""
import time
from pathlib import Path
import sys

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cannonlab.config import SimulationConfig
from cannonlab.core.animation import start_simulation
from cannonlab.core.parameters import SimulationParameters
from cannonlab.core.scheduler import ManualScheduler
from cannonlab.logger import CSVLogger
from cannonlab.visualization.plotting import plot_trajectory
from cannonlab.visualization.surface import RecordingSurface


def main():
    """Run one shot headless and plot it."""
    print("=" * 60)
    print("Simple Shot")
    print("=" * 60)

    params = SimulationParameters(speed=50.0, angle_degrees=45.0, barrel_length=100.0)
    config = SimulationConfig.preset("headless", verbose=True)

    output_dir = Path(__file__).parent / "output"
    log_path = output_dir / "simple_shot.csv"

    print(f"\nInitial Conditions:")
    print(f"  Speed: {params.speed:.1f} units/s")
    print(f"  Angle: {params.angle_degrees:.1f} deg")
    print(f"  Barrel length: {params.barrel_length:.1f} px")

    surface = RecordingSurface(params.surface_width, params.surface_height)
    scheduler = ManualScheduler()

    print(f"\nRunning simulation...")
    start = time.time()
    with CSVLogger(log_path) as logger:
        handle = start_simulation(params, surface, scheduler, config=config, logger=logger)
        scheduler.run()
    elapsed = time.time() - start

    state = handle.state
    print(f"\nResults:")
    print(f"  Final phase: {state.phase.name}")
    print(f"  Flight time: {state.elapsed_time:.3f} s ({state.frame_count} frames)")
    print(f"  Trail samples: {len(state.trail)}")
    print(f"  Wall clock time: {elapsed:.3f} s")
    for text in surface.texts():
        print(f"  {text}")

    plot_trajectory(
        str(log_path), params, config,
        save_path=str(output_dir / "simple_shot_trajectory.png"),
        show=False,
    )
    print(f"\nOutput saved to: {output_dir}")
    print("=" * 60)


if __name__ == "__main__":
    main()
