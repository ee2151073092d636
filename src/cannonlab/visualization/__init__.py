from .renderer import Renderer
from .surface import (
    DrawCommand,
    DrawingSurface,
    MatplotlibSurface,
    RecordingSurface,
    apply_commands,
)

__all__ = [
    "Renderer",
    "DrawCommand",
    "DrawingSurface",
    "RecordingSurface",
    "MatplotlibSurface",
    "apply_commands",
]
