'''Elliptical orbit elements.

Counterpart of ParabolicElements for closed heliocentric orbits: mean
motion from the semi-major axis, mean anomaly from the time of perihelion,
then true anomaly and radius vector through a Kepler solver.'''

import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .angle import Angle
from .defaults import GAUSS_K
from .kepler import (KeplerMethod, radius_vector, recommend_method,
                     solve_kepler, true_anomaly)
from .utils import check_elliptic, check_finite, validation_error


@dataclass(frozen=True)
class EllipticElements:
    """
    Immutable elements of an elliptical heliocentric orbit.

    Attributes
    ----------
    time_p : float
        Time of perihelion passage [JDE]
    a : float
        Semi-major axis [AU]
    e : float
        Eccentricity, 0 <= e < 1
    """
    time_p: float
    a: float
    e: float

    def __post_init__(self):
        #Validate parameters
        object.__setattr__(self, 'time_p', check_finite("Perihelion time", self.time_p))
        object.__setattr__(self, 'a', check_finite("Semi-major axis", self.a))
        object.__setattr__(self, 'e', check_elliptic(self.e))
        if self.a <= 0:
            validation_error(f"Semi-major axis must be positive, got {self.a}")

    @property
    def mean_motion(self) -> float:
        """Mean daily motion n = k / a^1.5 [rad/day]"""
        return float(GAUSS_K / self.a ** 1.5)

    @property
    def period(self) -> float:
        """Orbital period [days]"""
        return float(2 * np.pi / self.mean_motion)

    @property
    def q(self) -> float:
        """Perihelion distance [AU]"""
        return self.a * (1 - self.e)

    def mean_anomaly(self, jde: float) -> Angle:
        """Mean anomaly at a given time, not reduced to one revolution."""
        jde = check_finite("JDE", jde)
        return Angle(self.mean_motion * (jde - self.time_p))

    def eccentric_anomaly(self, jde: float,
                          method: Union[KeplerMethod, str, None] = None,
                          n: Optional[int] = None) -> Angle:
        """
        Eccentric anomaly at a given time.

        Parameters
        ----------
        jde : float
            Julian ephemeris day of interest
        method : KeplerMethod or str, optional
            Kepler solver to use; defaults to ``recommend_method(e)``
        n : int, optional
            Iteration budget for iterative solvers
        """
        if method is None:
            method = recommend_method(self.e)
        return Angle(solve_kepler(self.e, self.mean_anomaly(jde), n, method))

    def anomaly_distance(self, jde: float,
                         method: Union[KeplerMethod, str, None] = None,
                         n: Optional[int] = None) -> Tuple[Angle, float]:
        """
        True anomaly and radius vector at a given time.

        Returns
        -------
        nu : Angle
            True anomaly
        r : float
            Heliocentric distance [AU]

        Raises
        ------
        ConvergenceError
            If an iterative solver exhausts its budget
        """
        E = self.eccentric_anomaly(jde, method, n)
        return true_anomaly(self.e, E), radius_vector(self.a, self.e, E)

    def ephemeris(self, jdes, method: Union[KeplerMethod, str, None] = None,
                  n: Optional[int] = None):
        """
        Tabulate true anomaly and distance over a set of times.

        Returns
        -------
        pd.DataFrame
            Columns ['jde', 'nu_deg', 'r']
        """
        # pandas isn't needed unless this function is used
        try:
            import pandas as pd
        except ImportError:
            raise ImportError("pandas required for ephemeris()")
        jdes = np.ravel(np.asarray(jdes, dtype=float))
        rows = [self.anomaly_distance(t, method, n) for t in jdes]
        return pd.DataFrame({
            'jde': jdes,
            'nu_deg': np.array([nu.deg for nu, _ in rows], dtype=float),
            'r': np.array([r for _, r in rows], dtype=float),
        })
