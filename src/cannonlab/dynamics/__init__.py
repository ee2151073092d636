from .ballistics import (
    direction,
    flat_range,
    flight_range,
    flight_time,
    height_at,
    horizontal_speed,
    to_radians,
)
from .geometry import (
    BarrelGeometry,
    Point,
    barrel_polygon_corners,
    compute_barrel_geometry,
    distance,
    rotate_point,
)

__all__ = [
    "to_radians",
    "direction",
    "horizontal_speed",
    "flight_range",
    "flat_range",
    "flight_time",
    "height_at",
    "Point",
    "BarrelGeometry",
    "compute_barrel_geometry",
    "barrel_polygon_corners",
    "rotate_point",
    "distance",
]
