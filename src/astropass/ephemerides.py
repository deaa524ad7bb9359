"""Low-precision analytical ephemeris of the Sun.

Provides the apparent geocentric position of the Sun, accurate to about
0.01 degrees, for deciding whether an observer is in daylight and whether
a body is sunlit.

The position is referred to the true equator and equinox of date, the
same frame the NORAD propagators produce.  Distances are in kilometres.

References:
    1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 22 and 25.
"""

from __future__ import annotations

from math import cos, sin

import jax.numpy as jnp
from jax import Array

from astropass.config import get_dtype
from astropass.constants import AU, DEG2RAD, SUN_DIAMETER
from astropass.time import dynamical_delta, jcent2000
from astropass.utils import mod2pi

# Mean obliquity of the ecliptic at J2000.0 [deg]
_E0BASE = (21.446 / 60.0 + 26.0) / 60.0 + 23.0

# Length of the tropical year [s]
SUN_PERIOD = 31558149.7632


def nutation_in_obliquity(T: float) -> float:
    """Nutation in obliquity, low-precision series.

    Args:
        T (float): Julian centuries of dynamical time since J2000.0.

    Returns:
        Nutation in obliquity [rad].
    """
    omega = mod2pi(
        DEG2RAD * (((T / 450000.0 + 0.0020708) * T - 1934.136261) * T + 125.04452)
    )
    L = mod2pi(DEG2RAD * (36000.7698 * T + 280.4665))
    Lp = mod2pi(DEG2RAD * (481267.8813 * T + 218.3165))
    return DEG2RAD * (
        9.20 * cos(omega)
        + 0.57 * cos(2.0 * L)
        + 0.10 * cos(2.0 * Lp)
        - 0.09 * cos(2.0 * omega)
    ) / 3600.0


def obliquity(T: float) -> float:
    """True obliquity of the ecliptic.

    Args:
        T (float): Julian centuries of dynamical time since J2000.0.

    Returns:
        Mean obliquity plus nutation in obliquity [rad].
    """
    eps0 = DEG2RAD * (((0.001813 * T - 0.00059) * T - 46.8150) * T / 3600.0 + _E0BASE)
    return eps0 + nutation_in_obliquity(T)


def sun_position(timestamp: float) -> Array:
    """Apparent geocentric position of the Sun.

    Args:
        timestamp (float): Unix timestamp (universal time) in seconds.

    Returns:
        3-element Sun position ``[x, y, z]`` in *km*.

    Examples:
        ```python
        from astropass.ephemerides import sun_position
        from astropass.time import caldate_to_timestamp
        r_sun = sun_position(caldate_to_timestamp(1992, 10, 13))
        float(jnp.linalg.norm(r_sun))  # ~0.9976 AU
        ```
    """
    T = jcent2000(timestamp + dynamical_delta(timestamp))

    # Geometric mean longitude, mean anomaly and eccentricity of the Earth's orbit
    L0 = mod2pi(DEG2RAD * ((0.0003032 * T + 36000.76983) * T + 280.46646))
    M = mod2pi(DEG2RAD * ((-0.0001537 * T + 35999.05029) * T + 357.52911))
    e = (-1.267e-7 * T - 4.2037e-5) * T + 0.016708634

    # Equation of centre
    C = (
        (DEG2RAD * (-0.000014) * T + DEG2RAD * (-0.004817)) * T + DEG2RAD * 1.914602
    ) * sin(M)
    C += (DEG2RAD * 0.000101 * T + DEG2RAD * 0.019993) * sin(2.0 * M)
    C += DEG2RAD * 0.000289 * sin(3.0 * M)

    # Apparent longitude, corrected for nutation and aberration
    true_longitude = L0 + C
    omega = mod2pi(DEG2RAD * (125.04 - 1934.156 * T))
    lamda = mod2pi(true_longitude - DEG2RAD * (0.00569 + 0.00478 * sin(omega)))

    nu = M + C
    R = 1.000001018 * (1.0 - e * e) / (1.0 + e * cos(nu)) * AU

    eps = obliquity(T)
    return jnp.array(
        [
            R * cos(lamda),
            R * sin(lamda) * cos(eps),
            R * sin(lamda) * sin(eps),
        ],
        dtype=get_dtype(),
    )


class Sun:
    """The Sun as an illuminating body for pass prediction.

    Exposes the protocol the pass detector expects of an illuminator:
    a ``name``, a ``diameter`` in km and ``position(t)``.
    """

    name = "Sun"
    diameter = SUN_DIAMETER
    period = SUN_PERIOD

    def position(self, timestamp: float) -> Array:
        """Apparent geocentric position in *km* at a Unix timestamp."""
        return sun_position(timestamp)

    def __repr__(self) -> str:
        return "Sun()"
