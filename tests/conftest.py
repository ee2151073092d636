import os
import sys

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for testing

import pytest

# Get the path to the project root (one level up from 'tests')
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, 'src')

# Add 'src' to sys.path
sys.path.insert(0, src_path)

from cannonlab.config import SimulationConfig
from cannonlab.core.animation import RunRegistry
from cannonlab.core.parameters import SimulationParameters
from cannonlab.core.scheduler import ManualScheduler
from cannonlab.visualization.surface import RecordingSurface


@pytest.fixture
def params():
    """Reference shot: 50 units/s at 45 deg, default barrel, 800x600 surface."""
    return SimulationParameters(
        speed=50.0, angle_degrees=45.0, barrel_length=100.0,
        surface_width=800.0, surface_height=600.0,
    )


@pytest.fixture
def quiet_config():
    return SimulationConfig(verbose=False)


@pytest.fixture
def surface(params):
    return RecordingSurface(params.surface_width, params.surface_height)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def registry():
    """Fresh registry so runs from other tests never cancel each other."""
    return RunRegistry()
