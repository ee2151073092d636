"""
Immediate-mode 2D drawing surfaces.

The renderer talks to a small canvas-like API (paths, fills, strokes, text,
dash pattern, opacity) in the surface frame, where y grows downward.

Surfaces
--------
RecordingSurface : Keeps every call, for headless runs and tests
MatplotlibSurface : Emulates the API on a matplotlib Axes
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np
from matplotlib.axes import Axes
from matplotlib.patches import Polygon, Rectangle

ARC_SEGMENTS = 64  # Samples per full turn when flattening arcs
PX_TO_PT = 0.75  # CSS pixel to typographic point

_FONT_RE = re.compile(r"^\s*(?P<size>\d+(?:\.\d+)?)px\s+(?P<family>.+?)\s*$")


class DrawingSurface(Protocol):
    """Protocol for immediate-mode drawing targets."""

    width: float
    height: float

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...
    def begin_path(self) -> None: ...
    def move_to(self, x: float, y: float) -> None: ...
    def line_to(self, x: float, y: float) -> None: ...
    def arc(
        self, x: float, y: float, radius: float,
        start_angle: float, end_angle: float, counterclockwise: bool = False,
    ) -> None: ...
    def close_path(self) -> None: ...
    def fill(self) -> None: ...
    def stroke(self) -> None: ...
    def fill_text(self, text: str, x: float, y: float) -> None: ...
    def set_line_dash(self, segments: Iterable[float]) -> None: ...
    def set_fill_style(self, color: str) -> None: ...
    def set_stroke_style(self, color: str) -> None: ...
    def set_global_alpha(self, alpha: float) -> None: ...
    def set_font(self, font: str) -> None: ...


@dataclass(frozen=True)
class DrawCommand:
    """
    One call on a DrawingSurface, kept as data.

    Examples
    --------
    >>> DrawCommand("move_to", (0.0, 10.0)).apply(surface)  # doctest: +SKIP
    """
    name: str
    args: tuple[Any, ...] = ()

    def apply(self, surface: DrawingSurface) -> None:
        getattr(surface, self.name)(*self.args)


def apply_commands(surface: DrawingSurface, commands: Iterable[DrawCommand]) -> None:
    """Replay commands on a surface, in order."""
    for command in commands:
        command.apply(surface)


def arc_points(
    x: float, y: float, radius: float,
    start_angle: float, end_angle: float, counterclockwise: bool = False,
) -> np.ndarray:
    """
    Flatten a canvas-style arc into an (N, 2) array of points.

    Angles are measured from the +x axis towards +y (clockwise on screen).
    A sweep of 2*pi or more draws the full circle. An end angle behind the
    start in the drawing direction wraps forward, so ``arc(..., 2*pi, 0)``
    is a full circle too.
    """
    full = 2 * np.pi
    if counterclockwise:
        if start_angle - end_angle >= full:
            sweep = -full
        elif start_angle < end_angle:
            sweep = -(full - np.fmod(end_angle - start_angle, full))
        else:
            sweep = end_angle - start_angle
    else:
        if end_angle - start_angle >= full:
            sweep = full
        elif start_angle > end_angle:
            sweep = full - np.fmod(start_angle - end_angle, full)
        else:
            sweep = end_angle - start_angle
    n = max(2, int(np.ceil(ARC_SEGMENTS * abs(sweep) / full)) + 1)
    angles = start_angle + np.linspace(0.0, sweep, n)
    return np.column_stack([x + radius * np.cos(angles), y + radius * np.sin(angles)])


class RecordingSurface:
    """
    Surface that stores every call as a DrawCommand.

    Parameters
    ----------
    width, height : float
        Surface size [px]

    Attributes
    ----------
    commands : list[DrawCommand]
        Every call received, in order
    """

    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.commands: list[DrawCommand] = []

    def _record(self, name: str, *args: Any) -> None:
        self.commands.append(DrawCommand(name, args))

    def clear_rect(self, x, y, w, h) -> None:
        self._record("clear_rect", x, y, w, h)

    def begin_path(self) -> None:
        self._record("begin_path")

    def move_to(self, x, y) -> None:
        self._record("move_to", x, y)

    def line_to(self, x, y) -> None:
        self._record("line_to", x, y)

    def arc(self, x, y, radius, start_angle, end_angle, counterclockwise=False) -> None:
        self._record("arc", x, y, radius, start_angle, end_angle, counterclockwise)

    def close_path(self) -> None:
        self._record("close_path")

    def fill(self) -> None:
        self._record("fill")

    def stroke(self) -> None:
        self._record("stroke")

    def fill_text(self, text, x, y) -> None:
        self._record("fill_text", text, x, y)

    def set_line_dash(self, segments) -> None:
        self._record("set_line_dash", tuple(segments))

    def set_fill_style(self, color) -> None:
        self._record("set_fill_style", color)

    def set_stroke_style(self, color) -> None:
        self._record("set_stroke_style", color)

    def set_global_alpha(self, alpha) -> None:
        self._record("set_global_alpha", alpha)

    def set_font(self, font) -> None:
        self._record("set_font", font)

    def calls(self, name: str) -> list[DrawCommand]:
        """All recorded calls of one method."""
        return [c for c in self.commands if c.name == name]

    def texts(self) -> list[str]:
        """Every string drawn with fill_text."""
        return [c.args[0] for c in self.calls("fill_text")]

    def reset(self) -> None:
        self.commands.clear()


class MatplotlibSurface:
    """
    Canvas-style drawing on a matplotlib Axes.

    The axes are set up in the surface frame (origin top-left, y down), so
    coordinates from the renderer are used as-is. Filled paths become
    ``Polygon`` patches, stroked paths become lines and text becomes
    ``Axes.text`` artists. Clearing the whole surface removes them all.

    Parameters
    ----------
    ax : Axes
        Target axes. Limits, aspect and ticks are overwritten.
    width, height : float
        Surface size [px]
    """

    def __init__(self, ax: Axes, width: float, height: float) -> None:
        self.ax = ax
        self.width = width
        self.height = height

        self._subpaths: list[list[tuple[float, float]]] = []
        self._fill_style = "black"
        self._stroke_style = "black"
        self._alpha = 1.0
        self._dash: tuple[float, ...] = ()
        self._font_size = 18 * PX_TO_PT
        self._font_family = "sans-serif"

        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_aspect("equal")
        ax.set_xticks([])
        ax.set_yticks([])

    def _artists(self) -> list:
        return [*self.ax.patches, *self.ax.lines, *self.ax.texts]

    def _current(self) -> list[tuple[float, float]]:
        if not self._subpaths:
            self._subpaths.append([])
        return self._subpaths[-1]

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        if x <= 0 and y <= 0 and x + w >= self.width and y + h >= self.height:
            for artist in self._artists():
                artist.remove()
        else:
            self.ax.add_patch(Rectangle((x, y), w, h, facecolor="white", edgecolor="none"))

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(x, y)])

    def line_to(self, x: float, y: float) -> None:
        self._current().append((x, y))

    def arc(
        self, x: float, y: float, radius: float,
        start_angle: float, end_angle: float, counterclockwise: bool = False,
    ) -> None:
        pts = arc_points(x, y, radius, start_angle, end_angle, counterclockwise)
        self._current().extend((float(px), float(py)) for px, py in pts)

    def close_path(self) -> None:
        path = self._current()
        if path:
            path.append(path[0])
            self._subpaths.append([path[0]])

    def fill(self) -> None:
        for path in self._subpaths:
            if len(path) < 3:
                continue
            self.ax.add_patch(Polygon(
                path, closed=True,
                facecolor=self._fill_style, edgecolor="none", alpha=self._alpha,
            ))

    def stroke(self) -> None:
        linestyle = (0, self._dash) if self._dash else "-"
        for path in self._subpaths:
            if len(path) < 2:
                continue
            xs, ys = zip(*path)
            self.ax.plot(
                xs, ys,
                color=self._stroke_style, alpha=self._alpha,
                linestyle=linestyle, linewidth=1.0,
            )

    def fill_text(self, text: str, x: float, y: float) -> None:
        self.ax.text(
            x, y, text,
            color=self._fill_style, alpha=self._alpha,
            fontsize=self._font_size, family=self._font_family,
            va="baseline", ha="left", clip_on=True,
        )

    def set_line_dash(self, segments: Iterable[float]) -> None:
        self._dash = tuple(float(s) for s in segments)

    def set_fill_style(self, color: str) -> None:
        self._fill_style = color

    def set_stroke_style(self, color: str) -> None:
        self._stroke_style = color

    def set_global_alpha(self, alpha: float) -> None:
        self._alpha = float(alpha)

    def set_font(self, font: str) -> None:
        match = _FONT_RE.match(font)
        if match is None:
            raise ValueError(f"Font must look like '18px Arial', got '{font}'")
        self._font_size = float(match.group("size")) * PX_TO_PT
        self._font_family = match.group("family")
