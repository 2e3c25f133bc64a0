"""
Utility functions and classes for the Anomalia package.
"""

import warnings
from typing import Optional, Type

import numpy as np

from .config import config


class ConvergenceError(RuntimeError):
    """
    An iterative solver exhausted its iteration budget.

    Raised by the iterative Kepler solvers when successive iterates are
    still further apart than the configured tolerance after the allowed
    number of iterations, and by the parabolic solver if Barker's equation
    fails to converge (which should not happen for valid input).

    Attributes
    ----------
    iterations : int
        Number of iterations performed before giving up
    eccentricity : float or None
        Eccentricity of the orbit being solved (None for parabolic orbits)
    mean_anomaly : float
        Time-like input of the solve [rad for Kepler, W for Barker]
    last_estimate : float or None
        Last iterate computed, useful for diagnosis only
    """

    def __init__(self, message: str, iterations: int,
                 eccentricity: Optional[float] = None,
                 mean_anomaly: float = float('nan'),
                 last_estimate: Optional[float] = None):
        super().__init__(message)
        self.iterations = iterations
        self.eccentricity = eccentricity
        self.mean_anomaly = mean_anomaly
        self.last_estimate = last_estimate

    def __reduce__(self):
        return (self.__class__, (self.args[0], self.iterations, self.eccentricity,
                                 self.mean_anomaly, self.last_estimate))


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead and the caller carries on.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from anomalia.utils import validation_error
    >>> from anomalia import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid value")
    Traceback (most recent call last):
        ...
    ValueError: Invalid value

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid value")  # Issues warning
    >>> config.reset()
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=2)


def check_finite(name: str, value) -> float:
    """Coerce a scalar to float, rejecting NaN, Inf and complex input."""
    if isinstance(value, complex) or np.iscomplexobj(value):
        raise ValueError(f"{name} cannot be complex, got {value}")
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a real number, got {value!r}") from None
    if not np.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return value


def check_elliptic(e: float) -> float:
    """Validate an eccentricity for the elliptical solvers."""
    e = check_finite("Eccentricity", e)
    if not (0.0 <= e < 1.0):
        validation_error(f"Elliptical solvers require 0 <= e < 1, got e={e}")
    return e


def split_revolutions(M: float):
    """
    Split an angle into whole revolutions and a remainder in [-pi, pi].

    Returns
    -------
    k : float
        Integer number of revolutions (as float)
    Mr : float
        Remainder such that M == Mr + 2*pi*k up to rounding
    """
    k = np.round(M / (2 * np.pi))
    return float(k), float(M - 2 * np.pi * k)
