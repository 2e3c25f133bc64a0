'''Parabolic orbit solver.

Position of a body on a parabolic orbit from its time since perihelion,
Meeus, Astronomical Algorithms, ch. 34.'''

import numpy as np
from dataclasses import dataclass
from typing import Tuple

from .angle import Angle
from .config import config
from .defaults import PARABOLIC_W_FACTOR
from .utils import ConvergenceError, check_finite, validation_error


def solve_barker(W: float) -> float:
    """
    Solve Barker's equation s^3 + 3s - W = 0 for s = tan(nu/2).

    Uses the Newton iteration s = (2s^3 + W) / (3(s^2 + 1)), seeded with
    W/3 for |W| <= 1 and cbrt(W) otherwise. The cubic is monotonic so the
    iteration converges in a handful of steps for any finite W; it is bounded
    by ``config.PARABOLIC_MAX_ITER`` all the same.

    Parameters
    ----------
    W : float
        Scaled time since perihelion, Meeus eq. 34.1

    Returns
    -------
    float
        s, the tangent of half the true anomaly

    Raises
    ------
    ConvergenceError
        If the iteration fails to settle (not expected for finite W)
    """
    W = check_finite("W", W)
    s = W / 3 if abs(W) <= 1 else float(np.cbrt(W))
    tol = config.PARABOLIC_TOL
    for _ in range(config.PARABOLIC_MAX_ITER):
        s0 = s
        s = (2 * s0 * s0 * s0 + W) / (3 * (s0 * s0 + 1))
        if abs(s - s0) <= tol * max(1.0, abs(s)):
            return s
    raise ConvergenceError(
        f"Barker's equation did not converge within "
        f"{config.PARABOLIC_MAX_ITER} iterations (W={W})",
        iterations=config.PARABOLIC_MAX_ITER, mean_anomaly=W, last_estimate=s)


@dataclass(frozen=True)
class ParabolicElements:
    """
    Immutable elements of a parabolic orbit.

    Attributes
    ----------
    time_p : float
        Time of perihelion passage [JDE]
    q : float
        Perihelion distance [AU]
    """
    time_p: float
    q: float

    def __post_init__(self):
        #Validate parameters
        object.__setattr__(self, 'time_p', check_finite("Perihelion time", self.time_p))
        object.__setattr__(self, 'q', check_finite("Perihelion distance", self.q))
        if self.q <= 0:
            validation_error(f"Perihelion distance must be positive, got {self.q}")

    def barker_w(self, jde: float) -> float:
        """Scaled time since perihelion W for Barker's equation."""
        jde = check_finite("JDE", jde)
        return PARABOLIC_W_FACTOR * (jde - self.time_p) / (self.q * np.sqrt(self.q))

    def anomaly_distance(self, jde: float) -> Tuple[Angle, float]:
        """
        True anomaly and distance at a given time.

        Parameters
        ----------
        jde : float
            Julian ephemeris day of interest

        Returns
        -------
        nu : Angle
            True anomaly
        r : float
            Heliocentric distance [AU]

        Examples
        --------
        >>> from anomalia import ParabolicElements
        >>> orbit = ParabolicElements(time_p=2450917.9358, q=1.487469)  # Meeus 34.a
        >>> nu, r = orbit.anomaly_distance(2451030.5)
        >>> round(nu.deg, 5), round(r, 6)
        (66.78862, 2.133911)
        """
        s = solve_barker(self.barker_w(jde))
        return Angle(2 * np.arctan(s)), float(self.q * (1 + s * s))

    def anomaly_distance_many(self, jdes) -> Tuple[np.ndarray, np.ndarray]:
        """
        True anomalies [rad] and distances [AU] for an array of times.

        Returns
        -------
        (nu, r) : tuple of np.ndarray
            Arrays with the shape of ``jdes``
        """
        jdes = np.asarray(jdes, dtype=float)
        results = [self.anomaly_distance(t) for t in jdes.ravel()]
        nu = np.array([v.rad for v, _ in results], dtype=float).reshape(jdes.shape)
        r = np.array([d for _, d in results], dtype=float).reshape(jdes.shape)
        return nu, r

    def ephemeris(self, jdes):
        """
        Tabulate true anomaly and distance over a set of times.

        Parameters
        ----------
        jdes : array-like
            Julian ephemeris days

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
        nu, r = self.anomaly_distance_many(jdes)
        return pd.DataFrame({'jde': jdes, 'nu_deg': np.degrees(nu), 'r': r})
