"""
Simulation parameters and the boundary that parses raw input values.
"""
from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass

from cannonlab.config import (
    DEFAULT_BARREL_LENGTH,
    DEFAULT_SURFACE_HEIGHT,
    DEFAULT_SURFACE_WIDTH,
)


# Longest numeric prefix accepted by a browser's parseFloat
_NUMBER_PREFIX_RE = re.compile(r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


def parse_number(value: object) -> float:
    """
    Read a number from a widget-style value with ``parseFloat`` rules.

    Numbers pass through. Strings are read up to the end of their longest
    numeric prefix after leading whitespace, so ``"45deg"`` is 45 and
    ``"1_000"`` is 1. Only ``"Infinity"`` spells an infinity. Anything
    else becomes ``nan`` so that it propagates through the arithmetic
    instead of raising.
    """
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return float(value)
    if not isinstance(value, str):
        return math.nan
    match = _NUMBER_PREFIX_RE.match(value.lstrip())
    if match is None:
        return math.nan
    return float(match.group().replace("Infinity", "inf"))


@dataclass(frozen=True)
class SimulationParameters:
    """
    Inputs of one run. Immutable for the lifetime of the run.

    Parameters
    ----------
    speed : float
        Launch speed [units/s]
    angle_degrees : float
        Barrel elevation [deg], typically in (0, 180)
    barrel_length : float
        Barrel length [px]. Default 100
    surface_width, surface_height : float
        Drawing surface size [px]
    """
    speed: float
    angle_degrees: float
    barrel_length: float = DEFAULT_BARREL_LENGTH
    surface_width: float = DEFAULT_SURFACE_WIDTH
    surface_height: float = DEFAULT_SURFACE_HEIGHT

    @classmethod
    def from_inputs(
        cls,
        speed: object,
        angle: object,
        size: object = None,
        width: object = DEFAULT_SURFACE_WIDTH,
        height: object = DEFAULT_SURFACE_HEIGHT,
    ) -> SimulationParameters:
        """
        Build parameters from raw input values.

        Values are not validated here. A missing, zero or unparsable barrel
        size falls back to ``DEFAULT_BARREL_LENGTH``.

        Examples
        --------
        >>> SimulationParameters.from_inputs("50", "45", "", 800, 600).barrel_length
        100.0
        """
        barrel_length = parse_number(size)
        if not barrel_length or math.isnan(barrel_length):
            barrel_length = DEFAULT_BARREL_LENGTH
        return cls(
            speed=parse_number(speed),
            angle_degrees=parse_number(angle),
            barrel_length=barrel_length,
            surface_width=parse_number(width),
            surface_height=parse_number(height),
        )
