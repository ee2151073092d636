"""
Scene rendering as lists of draw commands.

The renderer holds no run state. Given the barrel geometry, the trail and
the projectile position (all in the physics frame) it returns the
DrawCommands for one frame. The y flip into the surface frame,
``surface_y = surface_height - physics_y``, happens here and nowhere else.
"""
from __future__ import annotations

import math
from collections.abc import Iterable

from cannonlab.config import SimulationConfig
from cannonlab.dynamics.geometry import BarrelGeometry, Point

from .surface import DrawCommand

FULL_TURN = 2 * math.pi


class Renderer:
    """
    Builds draw commands for the barrel, projectile, trail and annotations.

    Parameters
    ----------
    surface_width, surface_height : float
        Drawing surface size [px]
    config : SimulationConfig | None
        Colors, font and annotation layout. Defaults to SimulationConfig().

    Examples
    --------
    >>> renderer = Renderer(800, 600)
    >>> commands = renderer.scene(geometry, trail, Point(200.0, 150.0))
    >>> apply_commands(surface, commands)
    """

    def __init__(
        self,
        surface_width: float,
        surface_height: float,
        config: SimulationConfig | None = None,
    ) -> None:
        self.width = surface_width
        self.height = surface_height
        self.config = config if config is not None else SimulationConfig()

    def to_surface(self, point: Point) -> Point:
        """Flip a physics-frame point into the surface frame."""
        return Point(point.x, self.height - point.y)

    def label_x(self, mark: float) -> float:
        """Horizontal start of a label next to a vertical mark, kept on screen."""
        cfg = self.config
        if mark + cfg.label_margin < self.width:
            return mark + cfg.label_offset
        return mark - cfg.label_backoff

    # ------------------------------------------------------------------
    # Scene elements
    # ------------------------------------------------------------------

    def clear(self) -> list[DrawCommand]:
        return [DrawCommand("clear_rect", (0, 0, self.width, self.height))]

    def barrel(self, geometry: BarrelGeometry) -> list[DrawCommand]:
        """Rotated barrel pipe as a closed, filled polygon."""
        corners = [self.to_surface(p) for p in geometry.corners()]
        commands = [
            DrawCommand("set_fill_style", (self.config.barrel_color,)),
            DrawCommand("begin_path"),
            DrawCommand("move_to", (corners[0].x, corners[0].y)),
        ]
        for i in range(1, len(corners) + 1):
            corner = corners[i % len(corners)]
            commands.append(DrawCommand("line_to", (corner.x, corner.y)))
        commands += [DrawCommand("close_path"), DrawCommand("fill")]
        return commands

    def base(self, geometry: BarrelGeometry) -> list[DrawCommand]:
        """Half-disk under the pivot, sitting on the bottom edge."""
        return [
            DrawCommand("set_fill_style", (self.config.base_color,)),
            DrawCommand("begin_path"),
            DrawCommand("arc", (
                geometry.pivot_point.x, self.height,
                geometry.barrel_length / 2, math.pi, FULL_TURN, False,
            )),
            DrawCommand("fill"),
        ]

    def cannon(self, geometry: BarrelGeometry) -> list[DrawCommand]:
        """Cleared surface with the barrel and its base."""
        return self.clear() + self.barrel(geometry) + self.base(geometry)

    def dot(self, center: Point, radius: float) -> list[DrawCommand]:
        c = self.to_surface(center)
        return [
            DrawCommand("begin_path"),
            DrawCommand("arc", (c.x, c.y, radius, 0.0, FULL_TURN, False)),
            DrawCommand("fill"),
        ]

    def trail(self, points: Iterable[Point], radius: float) -> list[DrawCommand]:
        """Past positions at reduced opacity."""
        commands = [DrawCommand("set_global_alpha", (self.config.trail_alpha,))]
        for point in points:
            commands += self.dot(point, radius)
        return commands

    def scene(
        self,
        geometry: BarrelGeometry,
        trail: Iterable[Point] = (),
        projectile: Point | None = None,
    ) -> list[DrawCommand]:
        """
        Full frame: cannon, trail and, if given, the projectile.

        Trail and projectile share the projectile color and radius L/10.
        """
        commands = self.cannon(geometry)
        if projectile is None:
            return commands

        radius = geometry.barrel_length / 10
        commands.append(DrawCommand("set_fill_style", (self.config.projectile_color,)))
        commands += self.trail(trail, radius)
        commands.append(DrawCommand("set_global_alpha", (1.0,)))
        commands += self.dot(projectile, radius)
        return commands

    # ------------------------------------------------------------------
    # Post-landing annotations
    # ------------------------------------------------------------------

    def range_annotation(self, geometry: BarrelGeometry, distance: float) -> list[DrawCommand]:
        """Tick at the landing point on the ground plus the range label."""
        cfg = self.config
        mark = distance + geometry.fire_point.x
        top = self.height - cfg.annotation_height
        return [
            DrawCommand("set_global_alpha", (1.0,)),
            DrawCommand("set_stroke_style", (cfg.annotation_color,)),
            DrawCommand("set_line_dash", ((),)),
            DrawCommand("begin_path"),
            DrawCommand("move_to", (mark, top)),
            DrawCommand("line_to", (mark, self.height)),
            DrawCommand("stroke"),
            DrawCommand("set_font", (cfg.font,)),
            DrawCommand("set_fill_style", (cfg.annotation_color,)),
            DrawCommand("fill_text", (
                f"Distance traveled is {distance:.2f}m", self.label_x(mark), top,
            )),
        ]

    def flat_range_annotation(self, geometry: BarrelGeometry, distance: float) -> list[DrawCommand]:
        """
        Where the projectile would land on ground level with the muzzle.

        Dashed reference line at launch height, a tick rising from the flat
        landing point, the label and a marker dot.
        """
        cfg = self.config
        fire = geometry.fire_point
        mark = distance + fire.x
        level = self.height - fire.y
        tick_top = level - cfg.annotation_height
        return [
            DrawCommand("set_global_alpha", (1.0,)),
            DrawCommand("set_stroke_style", (cfg.flat_range_color,)),
            DrawCommand("begin_path"),
            DrawCommand("set_line_dash", (cfg.flat_range_dash,)),
            DrawCommand("move_to", (fire.x, level)),
            DrawCommand("line_to", (self.width, level)),
            DrawCommand("stroke"),
            DrawCommand("begin_path"),
            DrawCommand("set_line_dash", ((),)),
            DrawCommand("move_to", (mark, level)),
            DrawCommand("line_to", (mark, tick_top)),
            DrawCommand("stroke"),
            DrawCommand("set_font", (cfg.font,)),
            DrawCommand("set_fill_style", (cfg.flat_range_color,)),
            DrawCommand("fill_text", (
                f"Flat distance traveled is {distance:.2f}", self.label_x(mark), tick_top,
            )),
            DrawCommand("set_fill_style", (cfg.projectile_color,)),
            *self.dot(Point(mark, fire.y), geometry.barrel_length / 10),
        ]

    def landing(
        self,
        geometry: BarrelGeometry,
        distance: float,
        flat_distance: float,
    ) -> list[DrawCommand]:
        return (
            self.range_annotation(geometry, distance)
            + self.flat_range_annotation(geometry, flat_distance)
        )
