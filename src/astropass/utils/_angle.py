"""Angle normalization helpers.

Scalar helpers shared by the propagators, the deep-space engine and the
time module.  They operate on Python floats because the propagation
arithmetic is carried out in double precision outside of JAX.
"""

from math import atan2, floor

from astropass.constants import TWOPI


def mod2pi(angle: float) -> float:
    """Reduce an angle to the range ``[0, 2pi)``.

    Args:
        angle: Angle in radians.

    Returns:
        The equivalent angle in ``[0, 2pi)``.
    """
    return angle - floor(angle / TWOPI) * TWOPI


def actan(sinx: float, cosx: float) -> float:
    """Two-argument arctangent normalized to ``[0, 2pi)``.

    Args:
        sinx: Quantity proportional to the sine of the angle.
        cosx: Quantity proportional to the cosine of the angle.

    Returns:
        The angle in ``[0, 2pi)``.
    """
    angle = atan2(sinx, cosx)
    return angle + TWOPI if angle < 0.0 else angle
