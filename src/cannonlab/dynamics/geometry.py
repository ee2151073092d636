"""
Barrel geometry in the physics frame (y pointing up).

The barrel is a tapered rectangle hinged at a pivot point. Its length fixes
the pivot position, and its angle fixes where the muzzle (fire point) sits.
All functions here are pure.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from .ballistics import to_radians


class Point(NamedTuple):
    """Planar coordinate. The frame (physics or surface) is up to the caller."""
    x: float
    y: float


@dataclass(frozen=True)
class BarrelGeometry:
    """
    Pivot and muzzle of a barrel, fixed for one run.

    Attributes
    ----------
    pivot_point : Point
        Hinge the barrel rotates about
    fire_point : Point
        Muzzle, at ``barrel_length`` from the pivot along the barrel axis
    barrel_length : float
        Barrel length [px]
    angle_degrees : float
        Barrel elevation [deg]
    """
    pivot_point: Point
    fire_point: Point
    barrel_length: float
    angle_degrees: float

    @property
    def launch_height(self) -> float:
        """Height of the muzzle above the landing plane."""
        return self.fire_point.y

    def corners(self) -> list[Point]:
        """Rotated outline of the barrel pipe."""
        return barrel_polygon_corners(self.pivot_point, self.barrel_length, self.angle_degrees)


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(a.x - b.x, a.y - b.y))


def pivot_for_length(barrel_length: float) -> Point:
    """Pivot position for a barrel of the given length, (0.7 L, 0.3 L)."""
    x = barrel_length / 5 + barrel_length / 2
    y = barrel_length / 2 - barrel_length / 5
    return Point(x, y)


def compute_barrel_geometry(barrel_length: float, angle_degrees: float) -> BarrelGeometry:
    """
    Derive pivot and fire point from barrel length and elevation.

    Parameters
    ----------
    barrel_length : float
        Barrel length L [px]
    angle_degrees : float
        Elevation above the horizontal [deg]

    Returns
    -------
    BarrelGeometry
        Pivot at (L/5 + L/2, L/2 - L/5), fire point at pivot + L (cos, sin)

    Examples
    --------
    >>> geo = compute_barrel_geometry(100.0, 0.0)
    >>> geo.fire_point
    Point(x=170.0, y=30.0)
    """
    pivot = pivot_for_length(barrel_length)
    theta = to_radians(angle_degrees)
    fire = Point(
        float(pivot.x + barrel_length * np.cos(theta)),
        float(pivot.y + barrel_length * np.sin(theta)),
    )
    return BarrelGeometry(
        pivot_point=pivot,
        fire_point=fire,
        barrel_length=barrel_length,
        angle_degrees=angle_degrees,
    )


def rotate_point(point: Point, pivot: Point, angle_degrees: float) -> Point:
    """
    Rotate ``point`` counter-clockwise about ``pivot``.

    Uses the standard rotation matrix
        [cos -sin]
        [sin  cos]
    so the distance to the pivot is preserved.
    """
    theta = to_radians(angle_degrees)
    c, s = np.cos(theta), np.sin(theta)
    dx = point.x - pivot.x
    dy = point.y - pivot.y
    return Point(
        float(c * dx - s * dy + pivot.x),
        float(s * dx + c * dy + pivot.y),
    )


def barrel_polygon_corners(
    pivot_point: Point,
    barrel_length: float,
    angle_degrees: float,
) -> list[Point]:
    """
    Outline of the barrel pipe, rotated to the firing angle.

    The unrotated pipe is wider at the breech (half-width L/5) than at the
    muzzle (half-width L/10). Corners are returned in drawing order:
    breech bottom, breech top, muzzle top, muzzle bottom.
    """
    x1 = pivot_point.x
    x2 = pivot_point.x + barrel_length
    corners = [
        Point(x1, pivot_point.y - barrel_length / 5),
        Point(x1, pivot_point.y + barrel_length / 5),
        Point(x2, pivot_point.y + barrel_length / 10),
        Point(x2, pivot_point.y - barrel_length / 10),
    ]
    return [rotate_point(p, pivot_point, angle_degrees) for p in corners]
