"""
The SGP (Simplified General Perturbations) near-earth model.

SGP is the oldest member of the family: Kozai's gravitational model with
drag expressed through the published first and second derivatives of the
mean motion.  Initialization produces an :class:`SGPState`; propagation is
a pure function of the elements, that state and the elapsed time.

References:
    1. F. R. Hoots and R. L. Roehrich, *Spacetrack Report No. 3: Models for
       Propagation of NORAD Element Sets*, 1980.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import cos, pow, sin, sqrt

from astropass.models._constants import AE, CK2, E6A, TOTHRD, XJ3, XKE
from astropass.models._kepler import solve_kepler_sgp
from astropass.models._orientation import orient
from astropass.models._types import OrbitalElements
from astropass.utils import actan, mod2pi


@dataclass(frozen=True)
class SGPState:
    """Initialization-time constants of the SGP model.

    Attributes:
        a0: Semi-major axis at epoch [er].
        q0: Perigee distance at epoch [er].
        xlo: Mean longitude at epoch [rad].
        d10, d20, d30, d40: Short-period coefficients.
        omgdt: Secular rate of the argument of perigee [rad/min].
        xnodot: Secular rate of the node [rad/min].
        c5, c6: Long-period coefficients.
    """

    a0: float
    q0: float
    xlo: float
    d10: float
    d20: float
    d30: float
    d40: float
    omgdt: float
    xnodot: float
    c5: float
    c6: float


def sgp_init(elements: OrbitalElements) -> SGPState:
    """Compute the SGP initialization constants.

    Args:
        elements: Mean elements of a near-earth body.

    Returns:
        The SGP model state.
    """
    c1 = CK2 * 1.5
    c2 = CK2 / 4.0
    c3 = CK2 / 2.0
    c4 = XJ3 * AE**3 / (4.0 * CK2)
    cosi0 = cos(elements.inclination)
    sini0 = sin(elements.inclination)
    ecc = elements.eccentricity
    a1 = (XKE / elements.meanmotion) ** TOTHRD
    d1 = c1 / a1 / a1 * (3.0 * cosi0 * cosi0 - 1.0) / (1.0 - ecc * ecc) ** 1.5
    a0 = a1 * (1.0 - d1 / 3.0 - d1 * d1 - 134.0 / 81.0 * d1 * d1 * d1)
    p0 = a0 * (1.0 - ecc * ecc)
    d30 = c1 * cosi0
    po2no = elements.meanmotion / (p0 * p0)
    return SGPState(
        a0=a0,
        q0=a0 * (1.0 - ecc),
        xlo=elements.meananomaly + elements.argumentofperigee + elements.rightascension,
        d10=c3 * sini0 * sini0,
        d20=c2 * (7.0 * cosi0 * cosi0 - 1.0),
        d30=d30,
        d40=d30 * sini0,
        omgdt=c1 * po2no * (5.0 * cosi0 * cosi0 - 1.0),
        xnodot=-2.0 * d30 * po2no,
        c5=0.5 * c4 * sini0 * (3.0 + 5.0 * cosi0) / (1.0 + cosi0),
        c6=c4 * sini0,
    )


def sgp_propagate(
    elements: OrbitalElements, state: SGPState, tsince: float
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """Propagate a body with the SGP model.

    Args:
        elements: Mean elements of the body.
        state: Constants from :func:`sgp_init`.
        tsince: Minutes since the element epoch.

    Returns:
        ``(position, velocity)`` in Earth radii and Earth radii per minute.
    """
    n0 = elements.meanmotion
    ndot = elements.firstderivative
    nddot = elements.secondderivative

    # Secular gravity and drag
    a = n0 + (2.0 * ndot + 3.0 * nddot * tsince) * tsince
    a = state.a0 * pow(n0 / a, TOTHRD)
    e = 1.0 - state.q0 / a if a > state.q0 else E6A
    p = a * (1.0 - e * e)
    xnodes = elements.rightascension + state.xnodot * tsince
    omgas = elements.argumentofperigee + state.omgdt * tsince
    xls = mod2pi(
        state.xlo
        + (n0 + state.omgdt + state.xnodot + (ndot + nddot * tsince) * tsince) * tsince
    )

    # Long-period periodics
    axnsl = e * cos(omgas)
    aynsl = e * sin(omgas) - state.c6 / p
    xl = mod2pi(xls - state.c5 / p * axnsl)

    u = mod2pi(xl - xnodes)
    sineo1, coseo1 = solve_kepler_sgp(u, axnsl, aynsl)

    # Short-period preliminary quantities
    ecose = axnsl * coseo1 + aynsl * sineo1
    esine = axnsl * sineo1 - aynsl * coseo1
    el2 = axnsl * axnsl + aynsl * aynsl
    pl = a * (1.0 - el2)
    pl2 = pl * pl
    r = a * (1.0 - ecose)
    rdot = XKE * sqrt(a) / r * esine
    rvdot = XKE * sqrt(pl) / r
    temp = esine / (1.0 + sqrt(1.0 - el2))
    sinu = a / r * (sineo1 - aynsl - axnsl * temp)
    cosu = a / r * (coseo1 - axnsl + aynsl * temp)
    su = actan(sinu, cosu)

    # Short-period periodics
    sin2u = (cosu + cosu) * sinu
    cos2u = 1.0 - 2.0 * sinu * sinu
    rk = r + state.d10 / pl * cos2u
    uk = su - state.d20 / pl2 * sin2u
    xnodek = xnodes + state.d30 * sin2u / pl2
    xinck = elements.inclination + state.d40 / pl2 * cos2u

    return orient(rk, uk, xnodek, xinck, rdot, rvdot)
