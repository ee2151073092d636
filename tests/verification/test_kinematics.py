"""
Kinematic Verification Tests.

Tests the animated projectile against analytical solutions:
- Parametric motion x(t) = v cos(theta) t, y(t) = v sin(theta) t - g t^2 / 2
- Landing point against the launch-height range formula
- Independence from the host frame rate
"""

import math

import numpy as np
import pytest

from cannonlab.core.animation import AnimationController, RunPhase

POSITION_TOLERANCE = 1e-9  # px, closed form evaluated two ways
MAX_FRAMES = 200_000


def run_to_end(controller, frame_interval):
    """Run the controller on a fixed clock and return the states with a position."""
    states = []
    for state, _ in controller.iter_frames(frame_interval):
        if state.position is not None:
            states.append(state)
        if len(states) > MAX_FRAMES:
            pytest.fail("run did not terminate")
    return states


class TestParametricMotion:
    """
    The trajectory written in terms of x must match the parametric solution.

    Analytical solution:
        x(t) = x0 + v cos(theta) t
        y(t) = y0 + v sin(theta) t - g t^2 / 2
    """

    def test_position_matches_parametric(self, shots, config):
        for params in shots:
            controller = AnimationController(params, config)
            fire = controller.geometry.fire_point
            theta = math.radians(params.angle_degrees)
            for t in np.linspace(0.0, 3.0, 13):
                x = fire.x + params.speed * math.cos(theta) * t
                y = fire.y + params.speed * math.sin(theta) * t - 0.5 * config.gravity * t**2
                p = controller.position_at(t)
                assert p.x == pytest.approx(x, abs=POSITION_TOLERANCE)
                assert p.y == pytest.approx(y, rel=1e-9, abs=1e-6)

    def test_apex_height(self, config, shots):
        params = shots[0]
        controller = AnimationController(params, config)
        vy = params.speed * math.sin(math.radians(params.angle_degrees))
        t_apex = vy / config.gravity
        apex = controller.position_at(t_apex).y - controller.geometry.fire_point.y
        assert apex == pytest.approx(vy**2 / (2 * config.gravity))


class TestLanding:
    """
    The run must end on the first update at or below the landing plane.

    Analytical solution:
        R = (v cos(theta) / g) (v sin(theta) + sqrt((v sin(theta))^2 + 2 g h))
    """

    @pytest.mark.parametrize("frame_interval", [1.0, 1000.0 / 60.0])
    def test_landing_x_within_one_frame(self, shots, config, frame_interval):
        for params in shots:
            controller = AnimationController(params, config)
            states = run_to_end(controller, frame_interval)
            final = states[-1]
            assert final.phase is RunPhase.LANDED

            travelled = final.position.x - controller.geometry.fire_point.x
            step = controller.horizontal_speed * frame_interval / config.timestamp_unit
            assert controller.range <= travelled + 1e-9
            assert travelled <= controller.range + step + 1e-9

    def test_all_but_last_update_in_flight(self, shots, config):
        controller = AnimationController(shots[2], config)
        states = run_to_end(controller, 1000.0 / 60.0)
        assert all(s.position.y > 0 for s in states[:-1])
        assert states[-1].position.y <= 0

    def test_flight_time_above_launch_height(self, shots, config):
        """Back at launch height after 2 v sin(theta) / g, still above the ground."""
        controller = AnimationController(shots[0], config)
        back = controller.position_at(controller.flight_time)
        assert back.y == pytest.approx(controller.geometry.fire_point.y, abs=1e-6)
        assert back.x - controller.geometry.fire_point.x == pytest.approx(controller.flat_range)


class TestFrameRateIndependence:

    def test_same_position_at_same_elapsed_time(self, shots, config):
        """Positions depend on elapsed time only, not on the number of frames."""
        params = shots[0]
        fast = run_to_end(AnimationController(params, config), 10.0)
        slow = run_to_end(AnimationController(params, config), 50.0)

        by_time = {round(s.elapsed_time, 9): s.position for s in fast}
        for s in slow:
            if s.elapsed_time > fast[-1].elapsed_time:
                break
            assert by_time[round(s.elapsed_time, 9)] == pytest.approx(s.position)

    def test_trail_spacing_scales_with_frame_rate(self, shots, config):
        params = shots[0]
        fast = run_to_end(AnimationController(params, config), 10.0)[-1].trail
        slow = run_to_end(AnimationController(params, config), 20.0)[-1].trail
        dx_fast = fast.points[1].x - fast.points[0].x
        dx_slow = slow.points[1].x - slow.points[0].x
        assert dx_slow == pytest.approx(2 * dx_fast)
