"""Conversions between WGS84 geodetic coordinates and the Earth-fixed frame.

Geodetic positions are ``[longitude, latitude, altitude]`` with the
altitude in km above the ellipsoid.  The inverse conversion is Heikkinen's
closed form, which is exact to well below a millimetre anywhere outside
the Earth's core and needs no iteration.

References:
    1. M. Heikkinen, *Geschlossene Formeln zur Berechnung räumlicher
       geodätischer Koordinaten aus rechtwinkligen Koordinaten*,
       Zeitschrift für Vermessungswesen 107, 1982.
    2. J. Zhu, *Conversion of Earth-centered Earth-fixed coordinates to
       geodetic coordinates*, IEEE Trans. Aerospace and Electronic Systems
       30(3), 1994.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astropass.config import get_dtype
from astropass.constants import WGS84_a, WGS84_f

# Semi-minor axis [km], first and second eccentricity squared
WGS84_b = WGS84_a * (1.0 - WGS84_f)
ECC2 = WGS84_f * (2.0 - WGS84_f)
ECC2_PRIME = ECC2 / (1.0 - ECC2)


def position_geodetic_to_ecef(
    x_geod: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Earth-fixed position of a geodetic point.

    Args:
        x_geod: ``[lon, lat, alt]``; angles in *rad* (or *deg* with
            ``use_degrees``), altitude in *km*.
        use_degrees: Interpret longitude and latitude as degrees.

    Returns:
        ECEF position ``[x, y, z]`` in *km*.

    Examples:
        ```python
        import jax.numpy as jnp
        from astropass.coordinates import position_geodetic_to_ecef
        position_geodetic_to_ecef(jnp.array([0.0, 0.0, 0.0]))
        # [6378.137, 0.0, 0.0]
        ```
    """
    lon, lat, alt = jnp.asarray(x_geod, dtype=get_dtype())
    if use_degrees:
        lon, lat = jnp.deg2rad(lon), jnp.deg2rad(lat)

    # Prime vertical radius of curvature
    sin_lat = jnp.sin(lat)
    nu = WGS84_a / jnp.sqrt(1.0 - ECC2 * sin_lat**2)

    horizontal = (nu + alt) * jnp.cos(lat)
    return jnp.stack(
        [
            horizontal * jnp.cos(lon),
            horizontal * jnp.sin(lon),
            (nu * (1.0 - ECC2) + alt) * sin_lat,
        ]
    )


def position_ecef_to_geodetic(
    x_ecef: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Geodetic coordinates of an Earth-fixed position.

    Args:
        x_ecef: ECEF position ``[x, y, z]`` in *km*.
        use_degrees: Return longitude and latitude in degrees.

    Returns:
        ``[lon, lat, alt]``; angles in *rad* (or *deg*), altitude in *km*.
    """
    x, y, z = jnp.asarray(x_ecef, dtype=get_dtype())
    a2 = WGS84_a * WGS84_a
    b2 = WGS84_b * WGS84_b

    p2 = x * x + y * y
    p = jnp.sqrt(p2)
    z2 = z * z

    F = 54.0 * b2 * z2
    G = p2 + (1.0 - ECC2) * z2 - ECC2 * (a2 - b2)
    c = ECC2 * ECC2 * F * p2 / G**3
    s = jnp.cbrt(1.0 + c + jnp.sqrt(c * c + 2.0 * c))
    k = s + 1.0 + 1.0 / s
    P = F / (3.0 * k * k * G * G)
    Q = jnp.sqrt(1.0 + 2.0 * ECC2 * ECC2 * P)
    r0 = -P * ECC2 * p / (1.0 + Q) + jnp.sqrt(
        0.5 * a2 * (1.0 + 1.0 / Q)
        - P * (1.0 - ECC2) * z2 / (Q * (1.0 + Q))
        - 0.5 * P * p2
    )
    dp2 = (p - ECC2 * r0) ** 2
    U = jnp.sqrt(dp2 + z2)
    V = jnp.sqrt(dp2 + (1.0 - ECC2) * z2)
    z0 = b2 * z / (WGS84_a * V)

    lon = jnp.arctan2(y, x)
    lat = jnp.arctan2(z + ECC2_PRIME * z0, p)
    alt = U * (1.0 - b2 / (WGS84_a * V))

    if use_degrees:
        lon, lat = jnp.rad2deg(lon), jnp.rad2deg(lat)
    return jnp.stack([lon, lat, alt])
