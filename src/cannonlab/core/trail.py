"""
Sparse record of past projectile positions.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from cannonlab.config import DEFAULT_TRAIL_SAMPLE_INTERVAL
from cannonlab.dynamics.geometry import Point


@dataclass(frozen=True)
class Trail:
    """
    Append-only, time-decimated sequence of positions (oldest first).

    Points are in the physics frame. ``record`` never edits a trail; it
    returns a new trail with the point appended when the update count is a
    multiple of ``interval``.

    Examples
    --------
    >>> trail = Trail(interval=2)
    >>> trail = trail.record(Point(1.0, 1.0), update_count=1)
    >>> trail = trail.record(Point(2.0, 2.0), update_count=2)
    >>> trail.points
    (Point(x=2.0, y=2.0),)
    """
    points: tuple[Point, ...] = ()
    interval: int = DEFAULT_TRAIL_SAMPLE_INTERVAL

    def __post_init__(self) -> None:
        if self.interval < 1:
            raise ValueError(f"Trail interval must be at least 1, got {self.interval}")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def append(self, point: Point) -> Trail:
        """New trail with ``point`` at the end."""
        return Trail(points=self.points + (Point(*point),), interval=self.interval)

    def record(self, point: Point, update_count: int) -> Trail:
        """Append ``point`` if ``update_count`` falls on the sampling interval."""
        if update_count > 0 and update_count % self.interval == 0:
            return self.append(point)
        return self

    def cleared(self) -> Trail:
        """Empty trail with the same sampling interval."""
        return Trail(interval=self.interval)
