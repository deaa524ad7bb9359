"""
Physical and model constants for the NORAD SGP family of propagators.

Values are those published in Spacetrack Report #3 (WGS 72 based), kept at
their published precision. Distances are in Earth radii and times in
minutes unless noted otherwise; results are scaled to km and km/s on
output.
"""

from math import pi

from astropass.constants import DEG2RAD

# Geopotential and drag
CK2 = 5.413080e-4
"""Half the second zonal harmonic, ``J2 / 2`` [er^2]."""

CK4 = 0.62098875e-6
"""``-3/8 J4`` [er^4]."""

XJ3 = -0.253881e-5
"""Third zonal harmonic."""

XKE = 0.743669161e-1
"""``sqrt(GM)`` in Earth radii and minutes [er^1.5 / min]."""

QOMS2T = 1.88027916e-9
"""``(q0 - s)^4`` for the standard atmosphere [er^4]."""

S = 1.01222928
"""Density-function parameter ``s`` [er]."""

RHO = 0.15696615
"""Reference atmospheric density used to recover the SGP8 ballistic term."""

XKMPER = 6378.135
"""Earth equatorial radius [km]."""

AE = 1.0
"""Distance unit [er]."""

E6A = 1.0e-6
"""Convergence tolerance for the Kepler iterations [rad]."""

TOTHRD = 0.66666667
"""Two thirds, at the published precision."""

XMNPDA = 1440.0
"""Minutes per day."""

XSCPMN = 60.0
"""Seconds per minute."""

TWOPI = 2.0 * pi
DE2RA = DEG2RAD

VELOCITY_SCALE = XKMPER * XMNPDA / 86400.0
"""Conversion from er/min to km/s."""

DEEP_SPACE_PERIOD = 13500.0
"""Orbital period at and beyond which a body is deep space [s]; 225 minutes."""

# Deep-space lunar/solar terms
ZNS = 1.19459e-5
C1SS = 2.9864797e-6
ZES = 0.01675
ZNL = 1.5835218e-4
C1L = 4.7968065e-7
ZEL = 0.05490
ZCOSIS = 0.91744867
ZSINIS = 0.39785416
ZSINGS = -0.98088458
ZCOSGS = 0.1945905

# Deep-space resonance terms
Q22 = 1.7891679e-6
Q31 = 2.1460748e-6
Q33 = 2.2123015e-7
G22 = 5.7686396
G32 = 0.95240898
G44 = 1.8014998
G52 = 1.0508330
G54 = 4.4108898
ROOT22 = 1.7891679e-6
ROOT32 = 3.7393792e-7
ROOT44 = 7.3636953e-9
ROOT52 = 1.1428639e-7
ROOT54 = 2.1765803e-9
THDT = 4.3752691e-3
"""Earth rotation rate [rad/min]."""

STEPP = 720.0
"""Forward resonance integration step [min]."""

STEPN = -720.0
"""Backward resonance integration step [min]."""

STEP2 = 259200.0
"""Half the square of the integration step [min^2]."""

PERIODICS_CACHE_MINUTES = 30.0
"""Lunar/solar periodics are reused while the time moves less than this [min]."""

LYDDANE_INCLINATION = 0.2
"""Below this inclination [rad] periodics are applied with the Lyddane modification."""
