"""
Default Constants
=================

Astronomical constants and solver seeds shared by the elliptical and
parabolic anomaly solvers.

Values follow Meeus, Astronomical Algorithms, 2nd Edition, 1998.
Units referenced to AU and days (i.e. GAUSS_K = rad/day for a = 1 AU)
"""
import numpy as np

# Gaussian gravitational constant [rad/day]
GAUSS_K = 0.01720209895

# Barker's equation scale factor 3k/sqrt(2), Meeus eq. 34.1
PARABOLIC_W_FACTOR = 3 * GAUSS_K / np.sqrt(2)

# Danby's starting value E0 = M + 0.85*e*sign(sin M)
DANBY_COEFF = 0.85
