"""
Kepler's equation solvers used by the SGP family of propagators.

Each model iterates its own first-order Newton correction, at most ten
times, stopping once the correction falls below ``E6A``.  Non-convergence
is not an error: the last estimate is used as is.  The three loop forms
below are kept distinct because the published models differ in their
starting guess, their convergence test and which quantities they carry
out of the loop.
"""

from __future__ import annotations

from math import cos, sin

from astropass.models._constants import E6A

_MAX_ITERATIONS = 10


def solve_kepler_sgp(u: float, axnsl: float, aynsl: float) -> tuple[float, float]:
    """Solve Kepler's equation in the SGP form.

    Newton iteration on the eccentric anomaly plus argument of perigee,
    with each correction clamped to one radian.

    Args:
        u: Mean longitude minus node, reduced to ``[0, 2pi)`` [rad].
        axnsl: ``e cos(omega)`` with long-period corrections.
        aynsl: ``e sin(omega)`` with long-period corrections.

    Returns:
        ``(sin(E + omega), cos(E + omega))`` at the final estimate.
    """
    iteration = 0
    eo1 = u
    tem5 = 1.0
    while True:
        sineo1 = sin(eo1)
        coseo1 = cos(eo1)
        if abs(tem5) < E6A or iteration >= _MAX_ITERATIONS:
            break
        iteration += 1
        tem5 = (u - aynsl * coseo1 + axnsl * sineo1 - eo1) / (
            1.0 - coseo1 * axnsl - sineo1 * aynsl
        )
        if abs(tem5) > 1.0:
            tem5 = 1.0 if tem5 > 0 else -1.0
        eo1 += tem5
    return sineo1, coseo1


def solve_kepler_sgp4(
    capu: float, axn: float, ayn: float
) -> tuple[float, float, float, float, float, float]:
    """Solve Kepler's equation in the SGP4/SDP4 form.

    Args:
        capu: Mean longitude minus node, reduced to ``[0, 2pi)`` [rad].
        axn: ``e cos(omega)``.
        ayn: ``e sin(omega)`` with long-period corrections.

    Returns:
        ``(sinepw, cosepw, temp3, temp4, temp5, temp6)`` where ``temp3`` to
        ``temp6`` are ``axn sin``, ``ayn cos``, ``axn cos`` and ``ayn sin``
        of the last evaluated estimate.
    """
    temp2 = capu
    for _ in range(_MAX_ITERATIONS):
        sinepw = sin(temp2)
        cosepw = cos(temp2)
        temp3 = axn * sinepw
        temp4 = ayn * cosepw
        temp5 = axn * cosepw
        temp6 = ayn * sinepw
        epw = (capu - temp4 + temp3 - temp2) / (1.0 - temp5 - temp6) + temp2
        if abs(epw - temp2) <= E6A:
            break
        temp2 = epw
    return sinepw, cosepw, temp3, temp4, temp5, temp6


def solve_kepler_sgp8(xmam: float, em: float) -> tuple[float, float, float]:
    """Solve Kepler's equation in the SGP8/SDP8 form.

    Starts from a second-order guess for the eccentric anomaly.

    Args:
        xmam: Mean anomaly [rad].
        em: Eccentricity.

    Returns:
        ``(sin(E), cos(E), 1 / (1 - e cos(E)))`` at the last evaluated estimate.
    """
    zc2 = xmam + em * sin(xmam) * (1.0 + em * cos(xmam))
    for _ in range(_MAX_ITERATIONS):
        sine = sin(zc2)
        cose = cos(zc2)
        zc5 = 1.0 / (1.0 - em * cose)
        cape = (xmam + em * sine - zc2) * zc5 + zc2
        if abs(cape - zc2) <= E6A:
            break
        zc2 = cape
    return sine, cose, zc5
