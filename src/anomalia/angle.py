'''Angle value type used at the public boundary of the anomaly solvers.

Solvers work internally on raw radians; Angle keeps degrees and radians
from being mixed up by callers.'''

import numpy as np
from numbers import Real
from typing import Tuple, Union

from .config import config


class Angle:
    """
    Immutable angle stored in radians.

    Angles are not range-reduced on construction, so an angle of several
    revolutions keeps its full value. Use ``mod2pi()`` for a reduced copy.

    Equality is tolerant (``np.isclose`` with ``config.EQUALITY_RTOL`` and
    ``config.EQUALITY_ATOL``) but the hash rounds to a fixed
    ``config.HASH_DECIMALS``. Equal angles therefore do not always hash
    alike: ``Angle(1e3) == Angle(1e3 + 5e-10)`` holds through the relative
    tolerance while the two hashes differ. Identical values always share a
    hash, so use ``mod2pi()`` or exact values as dict and set keys.

    Parameters
    ----------
    rad : float
        Angle in radians

    Examples
    --------
    >>> from anomalia import Angle
    >>> M = Angle.from_deg(5)
    >>> M.rad
    0.08726646259971647
    """
    __slots__ = ('_rad',)

    # ========== CONSTRUCTION ==========
    def __init__(self, rad: float = 0.0):
        if isinstance(rad, Angle):
            rad = rad.rad
        object.__setattr__(self, '_rad', float(rad))

    @classmethod
    def from_deg(cls, deg: float) -> "Angle":
        """Create an Angle from a value in degrees."""
        return cls(np.radians(deg))

    def __setattr__(self, name, value):
        raise AttributeError("Angle is immutable")

    # ========== PROPERTY ACCESS ==========
    @property
    def rad(self) -> float:
        """Angle in radians"""
        return self._rad

    @property
    def deg(self) -> float:
        """Angle in degrees"""
        return float(np.degrees(self._rad))

    # ========== UTILITY METHODS ==========
    def sincos(self) -> Tuple[float, float]:
        """Return (sin, cos) of the angle."""
        return float(np.sin(self._rad)), float(np.cos(self._rad))

    def mod2pi(self) -> "Angle":
        """Return the equivalent angle in [0, 2*pi)."""
        return Angle(np.mod(self._rad, 2 * np.pi))

    # ========== ARITHMETIC ==========
    def __float__(self):
        return self._rad

    def __neg__(self):
        return Angle(-self._rad)

    def __add__(self, other):
        if isinstance(other, Angle):
            return Angle(self._rad + other._rad)
        if isinstance(other, Real):
            return Angle(self._rad + other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Angle):
            return Angle(self._rad - other._rad)
        if isinstance(other, Real):
            return Angle(self._rad - other)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, Real):
            return Angle(other - self._rad)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Real):
            return Angle(self._rad * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Angle):
            return self._rad / other._rad
        if isinstance(other, Real):
            return Angle(self._rad / other)
        return NotImplemented

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        #Machine-readable representation
        return f"Angle({self._rad!r})"

    def __str__(self):
        #Human-readable representation
        return f"{self.deg:.6f}°"

    def __eq__(self, other):
        #Check equality with tolerance
        if not isinstance(other, Angle):
            return NotImplemented
        return bool(np.isclose(self._rad, other._rad,
                               rtol=config.EQUALITY_RTOL,
                               atol=config.EQUALITY_ATOL))

    def __hash__(self):
        #Hash with rounding; consistent with __eq__ only within HASH_DECIMALS
        return hash(round(self._rad, config.HASH_DECIMALS))


def to_radians(value: Union[Angle, float]) -> float:
    """Return raw radians from an Angle; plain numbers pass through as radians."""
    if isinstance(value, Angle):
        return value.rad
    return value
