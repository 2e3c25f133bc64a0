"""
Anomalia: Orbital Anomaly Solvers

A Python package for locating a body along its orbit at a given time:
Kepler's equation for elliptical orbits and Barker's equation for
parabolic ones, after Meeus, Astronomical Algorithms.
"""

# Configuration
from .config import config, temp_config

# Core types
from .angle import Angle
from .utils import ConvergenceError

# Elliptical solvers
from .kepler import (
    KeplerMethod,
    kepler1,
    kepler2,
    kepler2a,
    kepler2b,
    kepler3,
    kepler4,
    solve_kepler,
    solve_kepler_many,
    recommend_method,
    true_anomaly,
    radius_vector,
)
from .elliptic import EllipticElements

# Parabolic solver
from .parabolic import ParabolicElements, solve_barker

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from anomalia import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    # Types
    "Angle",
    "ConvergenceError",
    "KeplerMethod",
    "EllipticElements",
    "ParabolicElements",
    # Kepler's equation
    "kepler1",
    "kepler2",
    "kepler2a",
    "kepler2b",
    "kepler3",
    "kepler4",
    "solve_kepler",
    "solve_kepler_many",
    "recommend_method",
    "true_anomaly",
    "radius_vector",
    # Barker's equation
    "solve_barker",
]
