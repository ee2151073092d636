"""
Validation utilities for simulation inputs.

The core itself never rejects numbers; degenerate values just propagate as
``nan``/``inf``. These checks are applied at the boundary where a run is
started, so bad input is reported instead of producing a frozen canvas.
"""
from __future__ import annotations

import math
import warnings
from typing import TYPE_CHECKING

from cannonlab.dynamics.ballistics import direction

if TYPE_CHECKING:
    from cannonlab.core.parameters import SimulationParameters


class InvalidParameterError(ValueError):
    """A simulation parameter cannot produce a meaningful run."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"{name} {reason}, got {value}")


def _report(name: str, value: object, reason: str, strict: bool) -> None:
    if strict:
        raise InvalidParameterError(name, value, reason)
    warnings.warn(f"{name} {reason}, got {value}", RuntimeWarning, stacklevel=3)


def validate_finite(value: float, name: str, strict: bool = True) -> None:
    """
    Validate that a value is a finite real number.

    Parameters
    ----------
    value : float
        Value to validate
    name : str
        Parameter name for error messages
    strict : bool
        If True, raise InvalidParameterError. If False, issue warning.
    """
    if not math.isfinite(value):
        _report(name, value, "must be a finite number", strict)


def validate_positive(value: float, name: str, strict: bool = True) -> None:
    """
    Validate that a scalar value is positive.

    Parameters
    ----------
    value : float
        Value to validate
    name : str
        Parameter name for error messages
    strict : bool
        If True, raise InvalidParameterError. If False, issue warning.

    Raises
    ------
    InvalidParameterError
        If strict=True and value <= 0
    """
    if not value > 0:
        _report(name, value, "must be positive", strict)


def validate_launch_angle(angle_degrees: float, strict: bool = True) -> None:
    """Reject launches with no horizontal component (90 deg, 270 deg, ...)."""
    c, _ = direction(angle_degrees)
    if c == 0.0:
        _report(
            "angle_degrees", angle_degrees,
            "must not be vertical (no horizontal motion)", strict,
        )


def validate_parameters(params: SimulationParameters, strict: bool = True) -> None:
    """
    Check every field of a parameter set.

    Parameters
    ----------
    params : SimulationParameters
        Parameters of the run about to start
    strict : bool
        Raise on the first problem if True, otherwise warn about each one.

    Raises
    ------
    InvalidParameterError
        If strict=True and any parameter is non-finite, non-positive where
        a positive value is required, or the launch is vertical.
    """
    for name in ("speed", "angle_degrees", "barrel_length", "surface_width", "surface_height"):
        validate_finite(getattr(params, name), name, strict)

    validate_positive(params.speed, "speed", strict)
    validate_positive(params.barrel_length, "barrel_length", strict)
    validate_positive(params.surface_width, "surface_width", strict)
    validate_positive(params.surface_height, "surface_height", strict)

    if math.isfinite(params.angle_degrees):
        validate_launch_angle(params.angle_degrees, strict)
