"""The observer's local horizontal frame.

Vectors are expressed in East-North-Zenith (ENZ) axes at a geodetic
location, and turned into azimuth (clockwise from north), elevation and
range.  No refraction is applied.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astropass.config import get_dtype
from astropass.coordinates.geodetic import position_ecef_to_geodetic


def rotation_ecef_to_enz(
    x_geod: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Rotation from ECEF into the ENZ axes of a geodetic location.

    Args:
        x_geod: ``[lon, lat, alt]`` of the observer; the altitude is ignored.
        use_degrees: Interpret longitude and latitude as degrees.

    Returns:
        3x3 matrix whose rows are the east, north and zenith unit vectors.
    """
    lon, lat, _ = jnp.asarray(x_geod, dtype=get_dtype())
    if use_degrees:
        lon, lat = jnp.deg2rad(lon), jnp.deg2rad(lat)

    zero = jnp.zeros_like(lon)
    east = jnp.stack([-jnp.sin(lon), jnp.cos(lon), zero])
    zenith = jnp.stack(
        [jnp.cos(lat) * jnp.cos(lon), jnp.cos(lat) * jnp.sin(lon), jnp.sin(lat)]
    )
    north = jnp.cross(zenith, east)
    return jnp.stack([east, north, zenith])


def relative_position_ecef_to_enz(
    location_ecef: ArrayLike,
    r_ecef: ArrayLike,
) -> Array:
    """ENZ offset of a target from an observer, both given in ECEF *km*."""
    location_ecef = jnp.asarray(location_ecef, dtype=get_dtype())
    rotation = rotation_ecef_to_enz(position_ecef_to_geodetic(location_ecef))
    return rotation @ (jnp.asarray(r_ecef, dtype=get_dtype()) - location_ecef)


def position_enz_to_azel(
    x_enz: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Azimuth, elevation and range of an ENZ vector.

    Args:
        x_enz: ``[east, north, zenith]`` in *km*.
        use_degrees: Return the angles in degrees.

    Returns:
        ``[azimuth, elevation, range]``.  Azimuth is in ``[0, 2pi)`` and is
        zero straight overhead.

    Examples:
        ```python
        import jax.numpy as jnp
        from astropass.coordinates import position_enz_to_azel
        position_enz_to_azel(jnp.array([100.0, 0.0, 0.0]), use_degrees=True)
        # [90.0, 0.0, 100.0]
        ```
    """
    east, north, up = jnp.asarray(x_enz, dtype=get_dtype())
    horizontal = jnp.hypot(east, north)

    azimuth = jnp.mod(jnp.arctan2(east, north), 2.0 * jnp.pi)
    elevation = jnp.arctan2(up, horizontal)
    rng = jnp.hypot(horizontal, up)

    if use_degrees:
        azimuth, elevation = jnp.rad2deg(azimuth), jnp.rad2deg(elevation)
    return jnp.stack([azimuth, elevation, rng])
