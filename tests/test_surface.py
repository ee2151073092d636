"""
Tests for drawing surfaces.

Covers:
- Arc flattening
- RecordingSurface bookkeeping
- MatplotlibSurface artists on the Agg backend
"""
import math

import matplotlib.pyplot as plt
import numpy as np
import pytest
from matplotlib.patches import Polygon

from cannonlab.visualization.surface import (
    DrawCommand,
    MatplotlibSurface,
    RecordingSurface,
    apply_commands,
    arc_points,
)


@pytest.fixture
def mpl_surface():
    fig, ax = plt.subplots()
    surface = MatplotlibSurface(ax, 800.0, 600.0)
    yield surface
    plt.close(fig)


# =============================================================================
# Arcs
# =============================================================================

def test_full_circle_closes():
    pts = arc_points(10.0, 20.0, 5.0, 0.0, 2 * math.pi)
    assert np.allclose(pts[0], pts[-1])
    assert np.allclose(np.hypot(pts[:, 0] - 10.0, pts[:, 1] - 20.0), 5.0)


def test_upper_half_in_surface_frame():
    # pi..2pi is the half above the center when y points down
    pts = arc_points(0.0, 100.0, 10.0, math.pi, 2 * math.pi)
    assert np.allclose(pts[0], (-10.0, 100.0))
    assert np.allclose(pts[-1], (10.0, 100.0))
    assert np.all(pts[:, 1] <= 100.0 + 1e-9)


def test_counterclockwise_sweep():
    pts = arc_points(0.0, 0.0, 1.0, 0.0, math.pi / 2, counterclockwise=True)
    # Goes the long way round through negative y
    assert pts[:, 1].min() < -0.9
    assert np.allclose(pts[-1], (0.0, 1.0), atol=1e-9)


def test_clockwise_end_behind_start_wraps_to_full_circle():
    pts = arc_points(0.0, 0.0, 1.0, 2 * math.pi, 0.0)
    assert len(pts) > 2
    assert np.allclose(pts[0], pts[-1])
    # Visits every quadrant
    assert pts[:, 0].min() < -0.99 and pts[:, 1].min() < -0.99


def test_clockwise_wrap_partial():
    pts = arc_points(0.0, 0.0, 1.0, math.pi / 2, 0.0)
    # Three quarters of the way round through pi
    assert pts[:, 0].min() < -0.99
    assert np.allclose(pts[-1], (1.0, 0.0), atol=1e-9)


def test_counterclockwise_end_ahead_of_start_by_full_turn():
    pts = arc_points(0.0, 0.0, 1.0, 0.0, 2 * math.pi, counterclockwise=True)
    assert len(pts) > 2
    assert pts[:, 1].max() > 0.99


# =============================================================================
# RecordingSurface
# =============================================================================

def test_recording_surface_records_calls():
    surface = RecordingSurface(100.0, 50.0)
    surface.begin_path()
    surface.move_to(1.0, 2.0)
    surface.fill_text("hello", 3.0, 4.0)
    surface.set_line_dash([5, 15])

    assert surface.commands == [
        DrawCommand("begin_path"),
        DrawCommand("move_to", (1.0, 2.0)),
        DrawCommand("fill_text", ("hello", 3.0, 4.0)),
        DrawCommand("set_line_dash", ((5, 15),)),
    ]
    assert surface.texts() == ["hello"]
    assert len(surface.calls("move_to")) == 1

    surface.reset()
    assert surface.commands == []


def test_draw_command_apply():
    surface = RecordingSurface(100.0, 50.0)
    apply_commands(surface, [DrawCommand("line_to", (5.0, 6.0)), DrawCommand("stroke")])
    assert [c.name for c in surface.commands] == ["line_to", "stroke"]


# =============================================================================
# MatplotlibSurface
# =============================================================================

def test_axes_in_surface_frame(mpl_surface):
    ax = mpl_surface.ax
    assert ax.get_xlim() == (0.0, 800.0)
    assert ax.get_ylim() == (600.0, 0.0)


def test_fill_polygon(mpl_surface):
    s = mpl_surface
    s.set_fill_style("#20a38d")
    s.begin_path()
    s.move_to(0.0, 0.0)
    s.line_to(10.0, 0.0)
    s.line_to(10.0, 10.0)
    s.close_path()
    s.fill()

    patches = s.ax.patches
    assert len(patches) == 1
    assert isinstance(patches[0], Polygon)


def test_fill_arc_and_alpha(mpl_surface):
    s = mpl_surface
    s.set_global_alpha(0.5)
    s.begin_path()
    s.arc(100.0, 100.0, 10.0, 0.0, 2 * math.pi)
    s.fill()
    assert s.ax.patches[0].get_alpha() == 0.5


def test_stroke_dashed_line(mpl_surface):
    s = mpl_surface
    s.set_stroke_style("grey")
    s.set_line_dash([5, 15])
    s.begin_path()
    s.move_to(0.0, 300.0)
    s.line_to(800.0, 300.0)
    s.stroke()

    lines = s.ax.lines
    assert len(lines) == 1
    assert list(lines[0].get_xdata()) == [0.0, 800.0]
    assert lines[0].get_linestyle() == "--"


def test_text_and_font(mpl_surface):
    s = mpl_surface
    s.set_font("18px Arial")
    s.set_fill_style("black")
    s.fill_text("Distance traveled is 1.00m", 10.0, 20.0)
    texts = s.ax.texts
    assert len(texts) == 1
    assert texts[0].get_text() == "Distance traveled is 1.00m"
    assert texts[0].get_fontsize() == pytest.approx(13.5)


def test_bad_font(mpl_surface):
    with pytest.raises(ValueError, match="Font must look like"):
        mpl_surface.set_font("bold Arial")


def test_full_clear_removes_artists(mpl_surface):
    s = mpl_surface
    s.begin_path()
    s.arc(100.0, 100.0, 10.0, 0.0, 2 * math.pi)
    s.fill()
    s.fill_text("x", 1.0, 1.0)
    s.clear_rect(0, 0, 800.0, 600.0)
    assert len(s.ax.patches) == 0
    assert len(s.ax.texts) == 0


def test_partial_clear_paints_background(mpl_surface):
    mpl_surface.clear_rect(10.0, 10.0, 50.0, 50.0)
    assert len(mpl_surface.ax.patches) == 1
