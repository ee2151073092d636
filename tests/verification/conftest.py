"""
Verification suite for CannonLab.

These tests drive full runs through the animation state machine and
compare the drawn path against textbook projectile motion.

Test Categories:
- Kinematic: position against the parametric solution, landing point
- Invariants: frame-rate independence, trail spacing
"""

import pytest

from cannonlab.config import SimulationConfig
from cannonlab.core.parameters import SimulationParameters


@pytest.fixture
def shots():
    """A spread of launches covering low, steep and level launches."""
    return [
        SimulationParameters(speed=50.0, angle_degrees=45.0),
        SimulationParameters(speed=20.0, angle_degrees=10.0, barrel_length=40.0),
        SimulationParameters(speed=80.0, angle_degrees=75.0, barrel_length=150.0),
        SimulationParameters(speed=35.0, angle_degrees=0.0),
    ]


@pytest.fixture
def config():
    return SimulationConfig(verbose=False)
