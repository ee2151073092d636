"""
Closed-form projectile motion in vacuum.

Physical units:
- Speeds: distance units per second
- Angles: degrees at the API, radians internally
- Gravity: distance units per second squared

Degenerate inputs never raise. Division by zero and negative square roots
follow IEEE float semantics and come back as ``inf`` or ``nan``, so callers
can decide what a non-finite result means for them.
"""
from __future__ import annotations

import numpy as np

from cannonlab.config import STANDARD_GRAVITY, TRIG_EPSILON


def to_radians(angle_degrees: float) -> float:
    """Convert degrees to radians."""
    return angle_degrees * (np.pi / 180)


def direction(angle_degrees: float) -> tuple[float, float]:
    """
    Unit launch direction (cos, sin) for an elevation in degrees.

    Components within ``TRIG_EPSILON`` of zero are snapped to exactly zero,
    so a 90 deg launch has no horizontal component at all.
    """
    theta = to_radians(angle_degrees)
    c = np.cos(theta)
    s = np.sin(theta)
    if abs(c) < TRIG_EPSILON:
        c = 0.0
    if abs(s) < TRIG_EPSILON:
        s = 0.0
    return float(c), float(s)


def horizontal_speed(speed: float, angle_degrees: float) -> float:
    """Horizontal component of the launch velocity, v cos(theta)."""
    c, _ = direction(angle_degrees)
    return float(np.float64(speed) * c)


def flight_range(
    speed: float,
    angle_degrees: float,
    launch_height: float,
    g: float = STANDARD_GRAVITY,
) -> float:
    """
    Horizontal distance until the projectile reaches the landing plane.

    Launch happens ``launch_height`` above the landing plane:

        R = (v cos(theta) / g) * (v sin(theta) + sqrt((v sin(theta))^2 + 2 g h))

    Parameters
    ----------
    speed : float
        Launch speed v
    angle_degrees : float
        Launch elevation theta [deg]
    launch_height : float
        Height h of the muzzle above the landing plane
    g : float
        Gravitational acceleration, must be positive

    Returns
    -------
    float
        Range R. ``nan`` if the discriminant is negative (only possible for
        h < 0).
    """
    c, s = direction(angle_degrees)
    v = np.float64(speed)
    with np.errstate(divide="ignore", invalid="ignore"):
        vertical = v * s
        root = np.sqrt(vertical**2 + 2 * g * np.float64(launch_height))
        return float((v * c / g) * (vertical + root))


def flat_range(speed: float, angle_degrees: float, g: float = STANDARD_GRAVITY) -> float:
    """Level-ground range, v^2 sin(2 theta) / g."""
    c, s = direction(angle_degrees)
    v = np.float64(speed)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(v**2 * (2 * s * c) / g)


def flight_time(speed: float, angle_degrees: float, g: float = STANDARD_GRAVITY) -> float:
    """
    Time to come back down to launch height, 2 v sin(theta) / g.

    Reference value only. The animation ends on the landing plane, which
    lies below the launch height.
    """
    _, s = direction(angle_degrees)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(2 * np.float64(speed) * s / g)


def height_at(
    x: float,
    speed: float,
    angle_degrees: float,
    g: float = STANDARD_GRAVITY,
) -> float:
    """
    Height above the launch point after travelling ``x`` horizontally.

        y(x) = x tan(theta) - (g / 2) * (x / (v cos(theta)))^2

    Time enters only through x = v cos(theta) * dt. With zero horizontal
    speed the expression has no meaning and evaluates to ``nan`` or ``inf``.
    """
    c, s = direction(angle_degrees)
    x = np.float64(x)
    with np.errstate(divide="ignore", invalid="ignore"):
        tangent = np.float64(s) / c
        return float(x * tangent - (g / 2) * (x / (np.float64(speed) * c)) ** 2)
