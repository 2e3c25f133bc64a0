"""
Global Configuration for Anomalia Package
=========================================

This module provides package-wide configuration settings that users can modify
to control solver tolerances, iteration budgets and validation behavior.

Examples
--------
View current configuration:

>>> import anomalia
>>> print(anomalia.config)

Modify settings:

>>> anomalia.config.NEWTON_TOL = 1e-14  # Stricter Newton convergence
>>> anomalia.config.DEFAULT_MAX_ITER = 100  # Larger default budget

Reset to defaults:

>>> anomalia.config.reset()

Temporarily modify settings:

>>> with anomalia.temp_config(STRICT_VALIDATION=False):
...     # Out-of-domain eccentricity only warns inside this block
...     anomalia.kepler3(1.2, 0.5)

Notes
-----
These settings affect package-wide behavior. Modifying them will impact
all subsequent solves until changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager
import math


@dataclass
class AnomaliaConfig:
    """
    Global configuration for Anomalia package.

    Attributes
    ----------
    FIXED_POINT_TOL : float
        Successive-iterate tolerance for the fixed-point Kepler solver [rad].
        Default: 1e-8 (better than 7 significant digits)
    NEWTON_TOL : float
        Successive-iterate tolerance for the Newton Kepler solvers, relative
        to max(1, |E|).
        Default: 1e-12
    NEWTON_STEP_LIMIT : float
        Largest correction the robust Newton solver applies per iteration [rad].
        Default: 0.5
    BISECTION_STEPS : int
        Number of interval halvings used by the bounded binary search.
        Default: 53 (float64 mantissa width)
    DEFAULT_MAX_ITER : int
        Iteration budget used by solve_kepler when none is given.
        Default: 50
    HIGH_ECCENTRICITY : float
        Eccentricity at and above which the robust Newton start is recommended.
        Default: 0.9
    PARABOLIC_TOL : float
        Successive-iterate tolerance for Barker's equation, relative
        to max(1, |s|).
        Default: 1e-15
    PARABOLIC_MAX_ITER : int
        Internal iteration bound for Barker's equation.
        Default: 100
    EQUALITY_RTOL : float
        Relative tolerance for Angle equality comparisons.
        Default: 1e-12
    EQUALITY_ATOL : float
        Absolute tolerance for Angle equality comparisons [rad].
        Default: 1e-14
    HASH_DECIMALS : int
        Number of decimal places for rounding when computing hash values.
        Derived from EQUALITY_ATOL; see Angle for the limits of this scheme
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Default: True
    """

    # Kepler solver tolerances
    FIXED_POINT_TOL: float = 1e-8
    NEWTON_TOL: float = 1e-12
    NEWTON_STEP_LIMIT: float = 0.5
    BISECTION_STEPS: int = 53

    # Strategy defaults
    DEFAULT_MAX_ITER: int = 50
    HIGH_ECCENTRICITY: float = 0.9

    # Barker's equation
    PARABOLIC_TOL: float = 1e-15
    PARABOLIC_MAX_ITER: int = 100

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    # Validation behavior
    STRICT_VALIDATION: bool = True

    @property
    def HASH_DECIMALS(self) -> int:
        """
        Compute hash rounding decimals from equality tolerance.

        Rounding is coarser than EQUALITY_ATOL so that nearly identical
        values usually share a bucket. Values just either side of a
        rounding boundary, or equal only through EQUALITY_RTOL, can still
        hash differently.

        Formula: HASH_DECIMALS = -floor(log10(ATOL)) - 2

        Returns
        -------
        int
            Number of decimal places for hash rounding
        """
        magnitude = -math.floor(math.log10(self.EQUALITY_ATOL))
        return max(magnitude - 2, 0)

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import anomalia
        >>> anomalia.config.NEWTON_TOL = 1e-6  # Modify
        >>> anomalia.config.reset()  # Back to defaults
        >>> anomalia.config.NEWTON_TOL
        1e-12
        """
        defaults = AnomaliaConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["AnomaliaConfig:"]
        lines.append("  Kepler Solvers:")
        lines.append(f"    FIXED_POINT_TOL = {self.FIXED_POINT_TOL}")
        lines.append(f"    NEWTON_TOL = {self.NEWTON_TOL}")
        lines.append(f"    NEWTON_STEP_LIMIT = {self.NEWTON_STEP_LIMIT}")
        lines.append(f"    BISECTION_STEPS = {self.BISECTION_STEPS}")
        lines.append(f"    DEFAULT_MAX_ITER = {self.DEFAULT_MAX_ITER}")
        lines.append(f"    HIGH_ECCENTRICITY = {self.HIGH_ECCENTRICITY}")
        lines.append("  Parabolic Solver:")
        lines.append(f"    PARABOLIC_TOL = {self.PARABOLIC_TOL}")
        lines.append(f"    PARABOLIC_MAX_ITER = {self.PARABOLIC_MAX_ITER}")
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append(f"    HASH_DECIMALS = {self.HASH_DECIMALS}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        return "\n".join(lines)


# Global configuration instance
config = AnomaliaConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import anomalia
    >>> with anomalia.temp_config(FIXED_POINT_TOL=1e-12):
    ...     E = anomalia.kepler1(0.1, anomalia.Angle.from_deg(5), 20)
    >>> # Original config restored here
    >>> anomalia.config.FIXED_POINT_TOL
    1e-08

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if key not in config.__dataclass_fields__:
            raise AttributeError(
                f"AnomaliaConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
