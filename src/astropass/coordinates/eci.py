"""Rotation between the inertial (ECI) and Earth-fixed (ECEF) frames.

The propagators produce positions in the true-equator, mean-equinox frame
of the NORAD models.  The Earth-fixed frame is reached by a single
rotation about the z-axis through the Greenwich mean sidereal angle;
polar motion and nutation are neglected.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astropass.config import get_dtype
from astropass.time import thetag


def rotation_eci_to_ecef(timestamp: float) -> Array:
    """Rotation matrix from ECI to ECEF.

    Args:
        timestamp (float): Unix timestamp in seconds.

    Returns:
        3x3 rotation matrix ``Rz(thetag)``.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = thetag(timestamp)
    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[ +c,   +s,  0.0],
                      [ -s,   +c,  0.0],
                      [0.0,  0.0,  1.0]], dtype=get_dtype())


def position_eci_to_ecef(timestamp: float, x_eci: ArrayLike) -> Array:
    """Transform an inertial position to the Earth-fixed frame.

    Args:
        timestamp (float): Unix timestamp in seconds.
        x_eci: ECI position ``[x, y, z]`` in *km*.

    Returns:
        ECEF position ``[x, y, z]`` in *km*.
    """
    return rotation_eci_to_ecef(timestamp) @ jnp.asarray(x_eci, dtype=get_dtype())


def position_ecef_to_eci(timestamp: float, x_ecef: ArrayLike) -> Array:
    """Transform an Earth-fixed position to the inertial frame.

    Args:
        timestamp (float): Unix timestamp in seconds.
        x_ecef: ECEF position ``[x, y, z]`` in *km*.

    Returns:
        ECI position ``[x, y, z]`` in *km*.
    """
    return rotation_eci_to_ecef(timestamp).T @ jnp.asarray(x_ecef, dtype=get_dtype())
