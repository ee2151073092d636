"""Utility functions for CannonLab runs."""

from .io import load_run_history, save_run_history
from .validation import (
    InvalidParameterError,
    validate_finite,
    validate_launch_angle,
    validate_parameters,
    validate_positive,
)

__all__ = [
    "save_run_history",
    "load_run_history",
    "InvalidParameterError",
    "validate_finite",
    "validate_positive",
    "validate_launch_angle",
    "validate_parameters",
]
