'''Kepler's equation solvers for elliptical orbits.

Solves M = E - e*sin(E) for the eccentric anomaly E given eccentricity e
and mean anomaly M, following Meeus, Astronomical Algorithms, ch. 30.

Six solvers share the same contract:

=============  ===============================  ===========================
function       method                           failure
=============  ===============================  ===========================
kepler1        fixed-point iteration            ConvergenceError
kepler2        Newton-Raphson, E0 = M           ConvergenceError
kepler2a       Newton-Raphson, robust start     ConvergenceError
kepler2b       kepler2a on raw radians          ConvergenceError
kepler3        binary search (Sinnott)          none for 0 <= e < 1
kepler4        first-order approximation        none
=============  ===============================  ===========================

Mean anomaly is never reduced into a different branch: the returned E
always satisfies E - e*sin(E) == M, even when |M| exceeds one revolution.'''

import numpy as np
from enum import Enum
from itertools import islice
from typing import Iterator, Optional, Tuple, Union

from .angle import Angle, to_radians
from .config import config
from .defaults import DANBY_COEFF
from .utils import (ConvergenceError, check_elliptic, check_finite,
                    split_revolutions, validation_error)

AngleLike = Union[Angle, float]

# define an enumerated list of solver strategies
class KeplerMethod(Enum):
    FIXED_POINT = 'fixed'       # kepler1
    NEWTON = 'newton'           # kepler2
    NEWTON_ROBUST = 'robust'    # kepler2a / kepler2b
    BISECTION = 'bisection'     # kepler3
    APPROXIMATE = 'approx'      # kepler4


_ITERATIVE = (KeplerMethod.FIXED_POINT, KeplerMethod.NEWTON,
              KeplerMethod.NEWTON_ROBUST)


def _prepare(e, M) -> Tuple[float, float]:
    """Validate inputs and return (e, M) as raw floats."""
    e = check_elliptic(e)
    M = check_finite("Mean anomaly", to_radians(M))
    return e, M


def _not_converged(name: str, n: int, e: float, M: float,
                   E: Optional[float]) -> ConvergenceError:
    if n <= 0:
        msg = f"{name}: iteration budget must be positive, got n={n}"
    else:
        msg = (f"{name} did not converge within {n} iterations "
               f"(e={e}, M={M} rad)")
    return ConvergenceError(msg, iterations=max(n, 0), eccentricity=e,
                            mean_anomaly=M, last_estimate=E)


# ========== FIXED POINT ==========
def kepler1(e: float, M: AngleLike, n: int) -> Angle:
    """
    Solve Kepler's equation by fixed-point iteration.

    Iterates E = M + e*sin(E) starting from E = M until successive values
    differ by less than ``config.FIXED_POINT_TOL``. Converges for any
    0 <= e < 1 but slowly as e approaches 1; use ``kepler2a`` there.

    Parameters
    ----------
    e : float
        Eccentricity, 0 <= e < 1
    M : Angle or float
        Mean anomaly (float taken as radians)
    n : int
        Maximum number of iterations

    Returns
    -------
    Angle
        Eccentric anomaly

    Raises
    ------
    ConvergenceError
        If the tolerance is not met within n iterations

    Examples
    --------
    >>> from anomalia import Angle, kepler1
    >>> E = kepler1(0.1, Angle.from_deg(5), 8)   # Meeus example 30.a
    >>> round(E.deg, 6)
    5.554589
    """
    e, M = _prepare(e, M)
    tol = config.FIXED_POINT_TOL
    E = M
    for _ in range(n):
        E0 = E
        E = M + e * np.sin(E0)
        if abs(E - E0) < tol:
            return Angle(E)
    raise _not_converged("kepler1", n, e, M, E if n > 0 else None)


# ========== NEWTON-RAPHSON ==========
def newton_iterates(e: float, M: float, E0: Optional[float] = None,
                    step_limit: Optional[float] = None) -> Iterator[Tuple[float, float]]:
    """
    Yield successive Newton-Raphson iterates for Kepler's equation.

    Each step applies E += (M + e*sin(E) - E) / (1 - e*cos(E)). If
    ``step_limit`` is given the correction is clipped to that magnitude.
    The generator is unbounded; callers impose their own budget.

    Parameters
    ----------
    e : float
        Eccentricity
    M : float
        Mean anomaly [rad]
    E0 : float, optional
        Starting value (default M)
    step_limit : float, optional
        Largest correction applied per step [rad]

    Yields
    ------
    (E, d) : tuple of float
        New iterate and the correction that produced it
    """
    E = M if E0 is None else E0
    while True:
        d = (M + e * np.sin(E) - E) / (1 - e * np.cos(E))
        if step_limit is not None:
            d = np.clip(d, -step_limit, step_limit)
        E = E + d
        yield float(E), float(d)


def _newton(name: str, e: float, M: float, n: int, E0: float,
            step_limit: Optional[float] = None) -> float:
    tol = config.NEWTON_TOL
    E = None
    for E, d in islice(newton_iterates(e, M, E0, step_limit), max(n, 0)):
        if abs(d) <= tol * max(1.0, abs(E)):
            return E
    raise _not_converged(name, n, e, M, E)


def kepler2(e: float, M: AngleLike, n: int) -> Angle:
    """
    Solve Kepler's equation by Newton-Raphson iteration starting at E = M.

    Converges quadratically for small and moderate eccentricity. For e close
    to 1 the first step can overshoot badly; prefer ``kepler2a`` there.

    Parameters
    ----------
    e : float
        Eccentricity, 0 <= e < 1
    M : Angle or float
        Mean anomaly (float taken as radians)
    n : int
        Maximum number of iterations

    Returns
    -------
    Angle
        Eccentric anomaly

    Raises
    ------
    ConvergenceError
        If the correction is still above ``config.NEWTON_TOL`` after n steps
    """
    e, M = _prepare(e, M)
    return Angle(_newton("kepler2", e, M, n, M))


def kepler2a(e: float, M: AngleLike, n: int) -> Angle:
    """
    Solve Kepler's equation by Newton-Raphson with a robust start.

    Suited to high eccentricity (e >= 0.9). Typed wrapper around
    ``kepler2b``; see there for the method.

    Examples
    --------
    >>> from anomalia import Angle, kepler2a
    >>> E = kepler2a(0.99, Angle(0.2), 14)   # Meeus p. 205
    >>> round(E.rad, 12)
    1.066997365282
    """
    return Angle(kepler2b(e, to_radians(M), n))


def kepler2b(e: float, M: float, n: int) -> float:
    """
    Solve Kepler's equation by Newton-Raphson with a robust start, on raw radians.

    Starts from Danby's value E0 = M + 0.85*e*sign(sin M) and limits every
    correction to ``config.NEWTON_STEP_LIMIT`` so the iteration cannot run
    away when 1 - e*cos(E) is small.

    Parameters
    ----------
    e : float
        Eccentricity, 0 <= e < 1
    M : float
        Mean anomaly [rad]
    n : int
        Maximum number of iterations

    Returns
    -------
    float
        Eccentric anomaly [rad]

    Raises
    ------
    ConvergenceError
        If the correction is still above ``config.NEWTON_TOL`` after n steps
    """
    e, M = _prepare(e, M)
    E0 = M + DANBY_COEFF * e * np.sign(np.sin(M))
    return _newton("kepler2b", e, M, n, float(E0), config.NEWTON_STEP_LIMIT)


# ========== NON-ITERATIVE ==========
def kepler3(e: float, M: AngleLike) -> float:
    """
    Solve Kepler's equation by binary search (Sinnott, Sky & Telescope 1985).

    M is reduced to [-pi, pi] and the search runs over [0, pi] on |M| for a
    fixed ``config.BISECTION_STEPS`` halvings; sign and whole revolutions
    are restored afterwards. Needs no iteration budget and cannot fail for
    0 <= e < 1.

    Parameters
    ----------
    e : float
        Eccentricity, 0 <= e < 1
    M : Angle or float
        Mean anomaly (float taken as radians)

    Returns
    -------
    float
        Eccentric anomaly [rad]
    """
    e, M = _prepare(e, M)
    k, Mr = split_revolutions(M)
    sign = -1.0 if Mr < 0 else 1.0
    Mr = abs(Mr)
    E = np.pi / 2
    D = np.pi / 4
    for _ in range(config.BISECTION_STEPS):
        M1 = E - e * np.sin(E)
        E = E + D * np.sign(Mr - M1)
        D /= 2
    return float(sign * E + 2 * np.pi * k)


def kepler4(e: float, M: AngleLike) -> Angle:
    """
    Approximate E in closed form, Meeus eq. 30.8.

    E = atan2(sin M, cos M - e). Accurate to roughly five significant digits
    for small e; useful as a quick estimate or a starting value.

    Examples
    --------
    >>> from anomalia import Angle, kepler4
    >>> round(kepler4(0.1, Angle.from_deg(5)).deg, 6)
    5.554599
    """
    e, M = _prepare(e, M)
    k, Mr = split_revolutions(M)
    return Angle(np.arctan2(np.sin(Mr), np.cos(Mr) - e) + 2 * np.pi * k)


# ========== STRATEGY SELECTION ==========
def _parse_method(method):
    """Convert string or enum to KeplerMethod enum"""
    if isinstance(method, KeplerMethod):
        return method
    elif isinstance(method, str):
        method_map = {
            'fixed': KeplerMethod.FIXED_POINT,
            'fixed_point': KeplerMethod.FIXED_POINT,
            'kepler1': KeplerMethod.FIXED_POINT,
            'newton': KeplerMethod.NEWTON,
            'kepler2': KeplerMethod.NEWTON,
            'robust': KeplerMethod.NEWTON_ROBUST,
            'newton_robust': KeplerMethod.NEWTON_ROBUST,
            'kepler2a': KeplerMethod.NEWTON_ROBUST,
            'kepler2b': KeplerMethod.NEWTON_ROBUST,
            'bisection': KeplerMethod.BISECTION,
            'binary': KeplerMethod.BISECTION,
            'kepler3': KeplerMethod.BISECTION,
            'approx': KeplerMethod.APPROXIMATE,
            'approximate': KeplerMethod.APPROXIMATE,
            'kepler4': KeplerMethod.APPROXIMATE,
        }
        if method.lower() in method_map:
            return method_map[method.lower()]
        else:
            raise ValueError(f"Unknown Kepler method '{method}'. "
                             f"Use: {list(method_map.keys())}")
    else:
        raise TypeError(f"method must be KeplerMethod or str, "
                        f"got {type(method)}")


def recommend_method(e: float) -> KeplerMethod:
    """
    Pick an iterative strategy for the given eccentricity.

    Plain Newton below ``config.HIGH_ECCENTRICITY``, the robust start at
    or above it.
    """
    e = check_elliptic(e)
    if e >= config.HIGH_ECCENTRICITY:
        return KeplerMethod.NEWTON_ROBUST
    return KeplerMethod.NEWTON


def solve_kepler(e: float, M: AngleLike, n: Optional[int] = None,
                 method: Union[KeplerMethod, str, None] = KeplerMethod.NEWTON_ROBUST) -> float:
    """
    Solve Kepler's equation with a selected strategy.

    Parameters
    ----------
    e : float
        Eccentricity, 0 <= e < 1
    M : Angle or float
        Mean anomaly (float taken as radians)
    n : int, optional
        Iteration budget for the iterative methods.
        Defaults to ``config.DEFAULT_MAX_ITER``; ignored otherwise.
    method : KeplerMethod or str, optional
        Strategy to use (default NEWTON_ROBUST). None picks one with
        ``recommend_method``.

    Returns
    -------
    float
        Eccentric anomaly [rad]

    Raises
    ------
    ConvergenceError
        If an iterative method exhausts its budget
    """
    method = recommend_method(e) if method is None else _parse_method(method)
    if n is None:
        n = config.DEFAULT_MAX_ITER

    if method == KeplerMethod.FIXED_POINT:
        return kepler1(e, M, n).rad
    elif method == KeplerMethod.NEWTON:
        return kepler2(e, M, n).rad
    elif method == KeplerMethod.NEWTON_ROBUST:
        return kepler2b(e, to_radians(M), n)
    elif method == KeplerMethod.BISECTION:
        return kepler3(e, M)
    else:
        return kepler4(e, M).rad


def solve_kepler_many(e: float, M_values, n: Optional[int] = None,
                      method: Union[KeplerMethod, str, None] = KeplerMethod.NEWTON_ROBUST) -> np.ndarray:
    """
    Solve Kepler's equation for an array of mean anomalies [rad].

    Returns an array of eccentric anomalies [rad] with the shape of
    ``M_values``. The first non-converging entry raises ConvergenceError.
    """
    M_values = np.asarray(M_values, dtype=float)
    E = np.array([solve_kepler(e, M, n, method) for M in M_values.ravel()],
                 dtype=float)
    return E.reshape(M_values.shape)


# ========== ORBIT GEOMETRY ==========
def true_anomaly(e: float, E: AngleLike) -> Angle:
    """
    True anomaly from eccentric anomaly, Meeus eq. 30.1.

    tan(nu/2) = sqrt((1+e)/(1-e)) * tan(E/2), evaluated with atan2 so the
    revolution count of E carries over to nu.
    """
    e = check_elliptic(e)
    E = check_finite("Eccentric anomaly", to_radians(E))
    k, Er = split_revolutions(E)
    nu = 2 * np.arctan2(np.sqrt(1 + e) * np.sin(Er / 2),
                        np.sqrt(1 - e) * np.cos(Er / 2))
    return Angle(nu + 2 * np.pi * k)


def radius_vector(a: float, e: float, E: AngleLike) -> float:
    """
    Radius vector from eccentric anomaly, Meeus eq. 30.2: r = a(1 - e*cos E).

    Units follow ``a``.
    """
    a = check_finite("Semi-major axis", a)
    if a <= 0:
        validation_error(f"Semi-major axis must be positive, got {a}")
    e = check_elliptic(e)
    return float(a * (1 - e * np.cos(to_radians(E))))
