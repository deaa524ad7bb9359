"""
The SGP8 near-earth model, and the terms it shares with SDP8.

SGP8 uses the same gravitational and atmospheric models as SGP4 but
integrates the drag equations analytically, which behaves better during
re-entry.  Its drag rates have two regimes: when the mean-motion decay is
below ``2.16e-3`` rad/day^2 the rates are linear in time ("isimp"); above
it they follow a power-law fit through the second and third derivatives.

References:
    1. F. R. Hoots and R. L. Roehrich, *Spacetrack Report No. 3: Models for
       Propagation of NORAD Element Sets*, 1980.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from math import cos, sin, sqrt
from typing import NamedTuple

from astropass.errors import DecayError, EccentricityError
from astropass.models._constants import AE, CK2, CK4, QOMS2T, RHO, S, TOTHRD, XJ3, XKE
from astropass.models._kepler import solve_kepler_sgp8
from astropass.models._mean_motion import recover_elements
from astropass.models._orientation import Vector
from astropass.models._types import OrbitalElements
from astropass.utils import actan, mod2pi

# Below this mean-motion decay [rad/day^2] the drag rates are linear in time
_ISIMP_DECAY = 2.16e-3

_MINUTES_PER_DAY = 1440.0


@dataclass(frozen=True)
class SGP8Terms:
    """Initialization constants shared by SGP8 and SDP8.

    Attributes:
        xnodp: Recovered mean motion [rad/min].
        aodp: Recovered semi-major axis [er].
        a3cof: ``-J3 / k2``.
        cosi: Cosine of the epoch inclination.
        sini: Sine of the epoch inclination.
        cosio2: Cosine of half the epoch inclination.
        sinio2: Sine of half the epoch inclination.
        theta2: ``cos^2(i)``.
        tthmun: ``3 cos^2(i) - 1``.
        unm5th: ``1 - 5 cos^2(i)``.
        unmth2: ``1 - cos^2(i)``.
        xmdt1: First-order gravity rate of the mean anomaly [rad/min].
        xgdt1: First-order gravity rate of the argument of perigee [rad/min].
        xhdt1: First-order gravity rate of the node [rad/min].
        xlldot: Secular rate of the mean anomaly [rad/min].
        omgdt: Secular rate of the argument of perigee [rad/min].
        xnodot: Secular rate of the node [rad/min].
        xndt: Drag rate of the mean motion [rad/min^2].
        xndtn: ``xndt / xnodp`` [1/min].
    """

    xnodp: float
    aodp: float
    a3cof: float
    cosi: float
    sini: float
    cosio2: float
    sinio2: float
    theta2: float
    tthmun: float
    unm5th: float
    unmth2: float
    xmdt1: float
    xgdt1: float
    xhdt1: float
    xlldot: float
    omgdt: float
    xnodot: float
    xndt: float
    xndtn: float


class _DragTerms(NamedTuple):
    """Intermediate drag quantities needed by the full SGP8 regime."""

    b1: float
    b2: float
    b3: float
    c0: float
    c1: float
    c4: float
    c5: float
    d1: float
    d2: float
    d3: float
    d4: float
    d5: float
    tsi: float
    eta: float
    eta2: float
    eeta: float
    psim2: float
    alpha2: float
    eosq: float
    beta02: float
    sing: float
    cosg: float
    cos2g: float


@dataclass(frozen=True)
class SGP8State:
    """Initialization-time constants of the SGP8 model.

    The power-law coefficients are only meaningful when ``isimp`` is false.

    Attributes:
        terms: Constants shared with SDP8.
        isimp: Whether the linear drag regime applies.
        edot: Drag rate of the eccentricity [1/min].
        xnd: Power-law amplitude of the mean motion.
        ed: Power-law amplitude of the eccentricity.
        gamma: Power-law time scale [1/min].
        pp: Power-law exponent of the mean motion.
        qq: Power-law exponent of the eccentricity.
        ovgpp: ``1 / (gamma (pp + 1))``.
    """

    terms: SGP8Terms
    isimp: bool
    edot: float
    xnd: float = 0.0
    ed: float = 0.0
    gamma: float = 0.0
    pp: float = 0.0
    qq: float = 0.0
    ovgpp: float = 0.0


def sgp8_terms(elements: OrbitalElements) -> tuple[SGP8Terms, _DragTerms]:
    """Compute the initialization constants shared by SGP8 and SDP8.

    Args:
        elements: Mean elements of the body.

    Returns:
        The shared constants and the intermediate drag quantities.
    """
    ecc = elements.eccentricity
    rec = recover_elements(elements)
    aodp = rec.aodp
    xnodp = rec.xnodp
    cosi = rec.cosi
    theta2 = rec.theta2
    tthmun = rec.x3thm1
    eosq = rec.eosq
    beta02 = rec.beta02
    beta0 = rec.beta0
    b = 2.0 * elements.bstardrag / RHO

    po = aodp * beta02
    pom2 = 1.0 / (po * po)
    sini = sin(elements.inclination)
    sing = sin(elements.argumentofperigee)
    cosg = cos(elements.argumentofperigee)
    half = 0.5 * elements.inclination
    theta4 = theta2 * theta2
    unm5th = 1.0 - 5.0 * theta2
    unmth2 = 1.0 - theta2
    a3cof = -XJ3 / CK2 * AE**3
    pardt1 = 3.0 * CK2 * pom2 * xnodp
    pardt2 = pardt1 * CK2 * pom2
    pardt4 = 1.25 * CK4 * pom2 * pom2 * xnodp
    xmdt1 = 0.5 * pardt1 * beta0 * tthmun
    xgdt1 = -0.5 * pardt1 * unm5th
    xhdt1 = -pardt1 * cosi
    xlldot = xnodp + xmdt1 + 0.0625 * pardt2 * beta0 * (13.0 - 78.0 * theta2 + 137.0 * theta4)
    omgdt = (
        xgdt1
        + 0.0625 * pardt2 * (7.0 - 114.0 * theta2 + 395.0 * theta4)
        + pardt4 * (3.0 - 36.0 * theta2 + 49.0 * theta4)
    )
    xnodot = xhdt1 + (
        0.5 * pardt2 * (4.0 - 19.0 * theta2) + 2.0 * pardt4 * (3.0 - 7.0 * theta2)
    ) * cosi

    tsi = 1.0 / (po - S)
    eta = ecc * S * tsi
    eta2 = eta * eta
    psim2 = abs(1.0 / (1.0 - eta2))
    alpha2 = 1.0 + eosq
    eeta = ecc * eta
    cos2g = 2.0 * cosg * cosg - 1.0
    d5 = tsi * psim2
    d1 = d5 / po
    d2 = 12.0 + eta2 * (36.0 + 4.5 * eta2)
    d3 = eta2 * (15.0 + 2.5 * eta2)
    d4 = eta * (5.0 + 3.75 * eta2)
    b1 = CK2 * tthmun
    b2 = -CK2 * unmth2
    b3 = a3cof * sini
    c0 = (
        0.5 * b * RHO * QOMS2T * xnodp * aodp * tsi**4 * psim2**3.5 / sqrt(alpha2)
    )
    c1 = 1.5 * xnodp * alpha2 * alpha2 * c0
    c4 = d1 * d3 * b2
    c5 = d5 * d4 * b3
    xndt = c1 * (
        (2.0 + eta2 * (3.0 + 34.0 * eosq) + 5.0 * eeta * (4.0 + eta2) + 8.5 * eosq)
        + d1 * d2 * b1
        + c4 * cos2g
        + c5 * sing
    )

    terms = SGP8Terms(
        xnodp=xnodp,
        aodp=aodp,
        a3cof=a3cof,
        cosi=cosi,
        sini=sini,
        cosio2=cos(half),
        sinio2=sin(half),
        theta2=theta2,
        tthmun=tthmun,
        unm5th=unm5th,
        unmth2=unmth2,
        xmdt1=xmdt1,
        xgdt1=xgdt1,
        xhdt1=xhdt1,
        xlldot=xlldot,
        omgdt=omgdt,
        xnodot=xnodot,
        xndt=xndt,
        xndtn=xndt / xnodp,
    )
    drag = _DragTerms(
        b1=b1,
        b2=b2,
        b3=b3,
        c0=c0,
        c1=c1,
        c4=c4,
        c5=c5,
        d1=d1,
        d2=d2,
        d3=d3,
        d4=d4,
        d5=d5,
        tsi=tsi,
        eta=eta,
        eta2=eta2,
        eeta=eeta,
        psim2=psim2,
        alpha2=alpha2,
        eosq=eosq,
        beta02=beta02,
        sing=sing,
        cosg=cosg,
        cos2g=cos2g,
    )
    return terms, drag


def linear_edot(terms: SGP8Terms, eccentricity: float) -> float:
    """Eccentricity decay rate of the linear drag regime [1/min]."""
    return -TOTHRD * terms.xndtn * (1.0 - eccentricity)


def sgp8_init(elements: OrbitalElements) -> SGP8State:
    """Compute the SGP8 initialization constants.

    Args:
        elements: Mean elements of a near-earth body.

    Returns:
        The SGP8 model state.
    """
    terms, drag = sgp8_terms(elements)
    ecc = elements.eccentricity
    xndt = terms.xndt
    xndtn = terms.xndtn
    xnodp = terms.xnodp
    xgdt1 = terms.xgdt1
    aodp = terms.aodp

    if abs(xndtn * _MINUTES_PER_DAY) < _ISIMP_DECAY:
        return SGP8State(terms=terms, isimp=True, edot=linear_edot(terms, ecc))

    (b1, b2, b3, c0, c1, c4, c5, d1, d2, d3, d4, d5,
     tsi, eta, eta2, eeta, psim2, alpha2, eosq, beta02, sing, cosg, cos2g) = drag

    d6 = eta * (30.0 + 22.5 * eta2)
    d7 = eta * (5.0 + 12.5 * eta2)
    d8 = 1.0 + eta2 * (6.75 + eta2)
    c8 = d1 * d7 * b2
    c9 = d5 * d8 * b3
    edot = -c0 * (
        eta * (4.0 + eta2 + eosq * (15.5 + 7.0 * eta2))
        + ecc * (5.0 + 15.0 * eta2)
        + d1 * d6 * b1
        + c8 * cos2g
        + c9 * sing
    )
    d20 = 0.5 * TOTHRD * xndtn
    aldtal = ecc * edot / alpha2
    tsdtts = 2.0 * aodp * tsi * (d20 * beta02 + ecc * edot)
    etdt = (edot + ecc * tsdtts) * tsi * S
    psdtps = -eta * etdt * psim2
    sin2g = 2.0 * sing * cosg
    c0dtc0 = d20 + 4.0 * tsdtts - aldtal - 7.0 * psdtps
    c1dtc1 = xndtn + 4.0 * aldtal + c0dtc0
    d9 = eta * (6.0 + 68.0 * eosq) + ecc * (20.0 + 15.0 * eta2)
    d10 = 5.0 * eta * (4.0 + eta2) + ecc * (17.0 + 68.0 * eta2)
    d11 = eta * (72.0 + 18.0 * eta2)
    d12 = eta * (30.0 + 10.0 * eta2)
    d13 = 5.0 + 11.25 * eta2
    d14 = tsdtts - 2.0 * psdtps
    d15 = 2.0 * (d20 + ecc * edot / beta02)
    d1dt = d1 * (d14 + d15)
    d2dt = etdt * d11
    d3dt = etdt * d12
    d4dt = etdt * d13
    d5dt = d5 * d14
    c4dt = b2 * (d1dt * d3 + d1 * d3dt)
    c5dt = b3 * (d5dt * d4 + d5 * d4dt)
    d16 = (
        d9 * etdt
        + d10 * edot
        + b1 * (d1dt * d2 + d1 * d2dt)
        + c4dt * cos2g
        + c5dt * sing
        + xgdt1 * (c5 * cosg - 2.0 * c4 * sin2g)
    )
    xnddt = c1dtc1 * xndt + c1 * d16
    eddot = c0dtc0 * edot - c0 * (
        (4.0 + 3.0 * eta2 + 30.0 * eeta + eosq * (15.5 + 21.0 * eta2)) * etdt
        + (5.0 + 15.0 * eta2 + eeta * (31.0 + 14.0 * eta2)) * edot
        + b1 * (d1dt * d6 + d1 * etdt * (30.0 + 67.5 * eta2))
        + b2 * (d1dt * d7 + d1 * etdt * (5.0 + 37.5 * eta2)) * cos2g
        + b3 * (d5dt * d8 + d5 * etdt * eta * (13.5 + 4.0 * eta2)) * sing
        + xgdt1 * (c9 * cosg - 2.0 * c8 * sin2g)
    )
    d25 = edot * edot
    d17 = xnddt / xnodp - xndtn * xndtn
    tsddts = 2.0 * tsdtts * (tsdtts - d20) + aodp * tsi * (
        TOTHRD * beta02 * d17 - 4.0 * d20 * ecc * edot + 2.0 * (d25 + ecc * eddot)
    )
    etddt = (eddot + 2.0 * edot * tsdtts) * tsi * S + tsddts * eta
    d18 = tsddts - tsdtts * tsdtts
    d19 = -psdtps * psdtps / eta2 - eta * etddt * psim2 - psdtps * psdtps
    d23 = etdt * etdt
    d1ddt = d1dt * (d14 + d15) + d1 * (
        d18
        - 2.0 * d19
        + TOTHRD * d17
        + 2.0 * (alpha2 * d25 / beta02 + ecc * eddot) / beta02
    )
    xntrdt = (
        xndt
        * (
            2.0 * TOTHRD * d17
            + 3.0 * (d25 + ecc * eddot) / alpha2
            - 6.0 * aldtal * aldtal
            + 4.0 * d18
            - 7.0 * d19
        )
        + c1dtc1 * xnddt
        + c1
        * (
            c1dtc1 * d16
            + d9 * etddt
            + d10 * eddot
            + d23 * (6.0 + 30.0 * eeta + 68.0 * eosq)
            + etdt * edot * (40.0 + 30.0 * eta2 + 272.0 * eeta)
            + d25 * (17.0 + 68.0 * eta2)
            + b1 * (d1ddt * d2 + 2.0 * d1dt * d2dt + d1 * (etddt * d11 + d23 * (72.0 + 54.0 * eta2)))
            + b2 * (d1ddt * d3 + 2.0 * d1dt * d3dt + d1 * (etddt * d12 + d23 * (30.0 + 30.0 * eta2)))
            * cos2g
            + b3
            * (
                (d5dt * d14 + d5 * (d18 - 2.0 * d19)) * d4
                + 2.0 * d4dt * d5dt
                + d5 * (etddt * d13 + 22.5 * eta * d23)
            )
            * sing
            + xgdt1
            * (
                (7.0 * d20 + 4.0 * ecc * edot / beta02) * (c5 * cosg - 2.0 * c4 * sin2g)
                + (
                    (2.0 * c5dt * cosg - 4.0 * c4dt * sin2g)
                    - xgdt1 * (c5 * sing + 4.0 * c4 * cos2g)
                )
            )
        )
    )
    tmnddt = xnddt * 1.0e9
    temp = tmnddt * tmnddt - xndt * 1.0e18 * xntrdt
    pp = (temp + tmnddt * tmnddt) / temp
    gamma = -xntrdt / (xnddt * (pp - 2.0))
    qq = 1.0 - eddot / (edot * gamma)
    return SGP8State(
        terms=terms,
        isimp=False,
        edot=edot,
        xnd=xndt / (pp * gamma),
        ed=edot / (qq * gamma),
        gamma=gamma,
        pp=pp,
        qq=qq,
        ovgpp=1.0 / (gamma * (pp + 1.0)),
    )


def sgp8_propagate(
    elements: OrbitalElements, state: SGP8State, tsince: float
) -> tuple[Vector, Vector]:
    """Propagate a body with the SGP8 model.

    Args:
        elements: Mean elements of the body.
        state: Constants from :func:`sgp8_init`.
        tsince: Minutes since the element epoch.

    Returns:
        ``(position, velocity)`` in Earth radii and Earth radii per minute.

    Raises:
        EccentricityError: If drag drives the eccentricity out of ``[-1, 1]``.
        DecayError: If ``tsince`` is past the end of the power-law drag fit.
    """
    terms = state.terms

    # Secular gravity and atmospheric drag
    xmam = mod2pi(elements.meananomaly + terms.xlldot * tsince)
    omgasm = elements.argumentofperigee + terms.omgdt * tsince
    xnodes = elements.rightascension + terms.xnodot * tsince
    if state.isimp:
        xn = terms.xnodp + terms.xndt * tsince
        em = elements.eccentricity + state.edot * tsince
        z1 = 0.5 * terms.xndt * tsince * tsince
    else:
        temp = 1.0 - state.gamma * tsince
        if temp <= 0.0:
            raise DecayError(tsince)
        temp1 = math.pow(temp, state.pp)
        xn = terms.xnodp + state.xnd * (1.0 - temp1)
        em = elements.eccentricity + state.ed * (1.0 - math.pow(temp, state.qq))
        z1 = state.xnd * (tsince + state.ovgpp * (temp * temp1 - 1.0))
    z7 = 3.5 * TOTHRD * z1 / terms.xnodp
    xmam = mod2pi(xmam + z1 + z7 * terms.xmdt1)
    omgasm = omgasm + z7 * terms.xgdt1
    xnodes = xnodes + z7 * terms.xhdt1

    return sgp8_short_period(terms, xn, em, xmam, omgasm, xnodes, terms.sinio2, tsince)


def sgp8_short_period(
    terms: SGP8Terms,
    xn: float,
    em: float,
    xmam: float,
    omgasm: float,
    xnodes: float,
    sinio2: float,
    tsince: float,
) -> tuple[Vector, Vector]:
    """Solve Kepler, apply short-period periodics and build the state vectors.

    Args:
        terms: Shared SGP8/SDP8 constants.
        xn: Mean motion [rad/min].
        em: Eccentricity.
        xmam: Mean anomaly [rad].
        omgasm: Argument of perigee [rad].
        xnodes: Node [rad].
        sinio2: Sine of half the inclination used by the orientation terms.
        tsince: Minutes since epoch, for error reporting.

    Returns:
        ``(position, velocity)`` in Earth radii and Earth radii per minute.

    Raises:
        EccentricityError: If ``em`` is outside ``[-1, 1]``.
    """
    if em > 1.0 or em < -1.0:
        raise EccentricityError(em, tsince)
    sine, cose, zc5 = solve_kepler_sgp8(xmam, em)

    # Short-period preliminary quantities
    am = (XKE / xn) ** TOTHRD
    beta2m = 1.0 - em * em
    sinos = sin(omgasm)
    cosos = cos(omgasm)
    axnm = em * cosos
    aynm = em * sinos
    pm = am * beta2m
    g1 = 1.0 / pm
    g2 = 0.5 * CK2 * g1
    g3 = g2 * g1
    beta = sqrt(beta2m)
    g4 = 0.25 * terms.a3cof * terms.sini
    g5 = 0.25 * terms.a3cof * g1
    snf = beta * sine * zc5
    csf = (cose - em) * zc5
    fm = actan(snf, csf)
    snfg = snf * cosos + csf * sinos
    csfg = csf * cosos - snf * sinos
    sn2f2g = 2.0 * snfg * csfg
    cs2f2g = 2.0 * csfg * csfg - 1.0
    ecosf = em * csf
    g10 = fm - xmam + em * snf
    rm = pm / (1.0 + ecosf)
    aovr = am / rm
    g13 = xn * aovr
    g14 = -g13 * aovr
    dr = g2 * (terms.unmth2 * cs2f2g - 3.0 * terms.tthmun) - g4 * snfg
    diwc = 3.0 * g3 * terms.sini * cs2f2g - g5 * aynm
    di = diwc * terms.cosi

    # Short-period periodics
    sni2du = terms.sinio2 * (
        g3 * (0.5 * (1.0 - 7.0 * terms.theta2) * sn2f2g - 3.0 * terms.unm5th * g10)
        - g5 * terms.sini * csfg * (2.0 + ecosf)
    ) - 0.5 * g5 * terms.theta2 * axnm / terms.cosio2
    xlamb = (
        fm
        + omgasm
        + xnodes
        + g3
        * (
            0.5 * (1.0 + 6.0 * terms.cosi - 7.0 * terms.theta2) * sn2f2g
            - 3.0 * (terms.unm5th + 2.0 * terms.cosi) * g10
        )
        + g5 * terms.sini * (terms.cosi * axnm / (1.0 + terms.cosi) - (2.0 + ecosf) * csfg)
    )
    y4 = sinio2 * snfg + csfg * sni2du + 0.5 * snfg * terms.cosio2 * di
    y5 = sinio2 * csfg - snfg * sni2du + 0.5 * csfg * terms.cosio2 * di
    r = rm + dr
    rdot = xn * am * em * snf / beta + g14 * (2.0 * g2 * terms.unmth2 * sn2f2g + g4 * csfg)
    rvdot = xn * am * am * beta / rm + g14 * dr + am * g13 * terms.sini * diwc

    # Orientation vectors
    snlamb = sin(xlamb)
    cslamb = cos(xlamb)
    temp = 2.0 * (y5 * snlamb - y4 * cslamb)
    ux = y4 * temp + cslamb
    vx = y5 * temp - snlamb
    temp = 2.0 * (y5 * cslamb + y4 * snlamb)
    uy = -y4 * temp + snlamb
    vy = -y5 * temp + cslamb
    temp = 2.0 * sqrt(1.0 - y4 * y4 - y5 * y5)
    uz = y4 * temp
    vz = y5 * temp

    return (
        (r * ux, r * uy, r * uz),
        (rdot * ux + rvdot * vx, rdot * uy + rvdot * vy, rdot * uz + rvdot * vz),
    )
