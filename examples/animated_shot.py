"""
Animated shots in a matplotlib window.

Each mouse click fires a new shot on the same surface. A shot still in
flight is superseded and cancelled at its next frame.
"""
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import matplotlib.pyplot as plt

from cannonlab.core.animation import RunRegistry, start_simulation
from cannonlab.core.parameters import SimulationParameters
from cannonlab.core.scheduler import MatplotlibScheduler
from cannonlab.visualization.surface import MatplotlibSurface

SHOTS = [(60.0, 30.0), (45.0, 60.0), (70.0, 45.0), (35.0, 75.0)]


def main():
    fig, ax = plt.subplots(figsize=(8, 6), dpi=100)
    fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
    surface = MatplotlibSurface(ax, 800.0, 600.0)
    scheduler = MatplotlibScheduler(fig)
    registry = RunRegistry()
    shot_index = [0]

    def fire_next(event=None):
        speed, angle = SHOTS[shot_index[0] % len(SHOTS)]
        shot_index[0] += 1
        params = SimulationParameters(speed=speed, angle_degrees=angle, barrel_length=80.0)
        start_simulation(params, surface, scheduler, registry=registry)

    fig.canvas.mpl_connect("button_press_event", fire_next)
    fire_next()
    print("Click the window to fire the next shot.")
    plt.show()


if __name__ == "__main__":
    main()
