"""
Recovery of the original (Brouwer) mean motion and semi-major axis.

The mean motion published in an element set is the Kozai mean motion.
SGP4, SDP4, SGP8 and SDP8 all start by un-Kozai-ing it; the recovered
quantities also give the orbital period that decides between the
near-earth and deep-space models.
"""

from __future__ import annotations

from math import cos, sqrt
from typing import NamedTuple

from astropass.models._constants import CK2, TOTHRD, TWOPI, XKE, XSCPMN
from astropass.models._types import OrbitalElements


class RecoveredElements(NamedTuple):
    """Initialization quantities shared by the SGP4/SDP4/SGP8/SDP8 models.

    Attributes:
        cosi: Cosine of the inclination.
        theta2: ``cos^2(i)``.
        x3thm1: ``3 cos^2(i) - 1``.
        eosq: Eccentricity squared.
        beta02: ``1 - e^2``.
        beta0: ``sqrt(1 - e^2)``.
        a0: Semi-major axis before the final correction [er].
        del0: Second-stage correction factor.
        aodp: Recovered semi-major axis [er].
        xnodp: Recovered mean motion [rad/min].
    """

    cosi: float
    theta2: float
    x3thm1: float
    eosq: float
    beta02: float
    beta0: float
    a0: float
    del0: float
    aodp: float
    xnodp: float


def recover_elements(elements: OrbitalElements) -> RecoveredElements:
    """Recover the original mean motion and semi-major axis.

    Args:
        elements: Mean elements of the body.

    Returns:
        The recovered initialization quantities.
    """
    a1 = (XKE / elements.meanmotion) ** TOTHRD
    cosi = cos(elements.inclination)
    theta2 = cosi * cosi
    x3thm1 = 3.0 * theta2 - 1.0
    eosq = elements.eccentricity * elements.eccentricity
    beta02 = 1.0 - eosq
    beta0 = sqrt(beta02)
    del1 = 1.5 * CK2 * x3thm1 / (a1 * a1 * beta0 * beta02)
    a0 = a1 * (1.0 - del1 * (0.5 * TOTHRD + del1 * (1.0 + 134.0 / 81.0 * del1)))
    del0 = 1.5 * CK2 * x3thm1 / (a0 * a0 * beta0 * beta02)
    return RecoveredElements(
        cosi=cosi,
        theta2=theta2,
        x3thm1=x3thm1,
        eosq=eosq,
        beta02=beta02,
        beta0=beta0,
        a0=a0,
        del0=del0,
        aodp=a0 / (1.0 - del0),
        xnodp=elements.meanmotion / (1.0 + del0),
    )


def orbital_period(elements: OrbitalElements) -> float:
    """Orbital period from the recovered mean motion.

    Args:
        elements: Mean elements of the body.

    Returns:
        Period in seconds.
    """
    a1 = (XKE / elements.meanmotion) ** TOTHRD
    temp = (
        1.5
        * CK2
        * (3.0 * cos(elements.inclination) ** 2 - 1.0)
        / (1.0 - elements.eccentricity * elements.eccentricity) ** 1.5
    )
    del1 = temp / (a1 * a1)
    a0 = a1 * (1.0 - del1 * (0.5 * TOTHRD + del1 * (1.0 + 134.0 / 81.0 * del1)))
    del0 = temp / (a0 * a0)
    xnodp = elements.meanmotion / (1.0 + del0)
    return TWOPI / xnodp * XSCPMN
