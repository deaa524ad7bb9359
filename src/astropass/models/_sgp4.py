"""
The SGP4 near-earth model, and the near-earth terms it shares with SDP4.

SGP4 uses Lane and Cranford's drag model with the B* ballistic term and
Brouwer's gravitational theory.  Bodies whose perigee is below 220 km use
a simplified ("isimp") form that drops the higher-order drag terms.

The initialization is split in two: :func:`near_earth_terms` computes the
constants SGP4 and SDP4 have in common, and :func:`sgp4_init` adds the
near-earth-only drag terms.  Likewise :func:`sgp4_short_period` carries
the long-period, Kepler and short-period steps that both models share.

References:
    1. F. R. Hoots and R. L. Roehrich, *Spacetrack Report No. 3: Models for
       Propagation of NORAD Element Sets*, 1980.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import cos, sin, sqrt

from astropass.errors import EccentricityError
from astropass.models._constants import AE, CK2, CK4, QOMS2T, S, TOTHRD, XJ3, XKE, XKMPER
from astropass.models._kepler import solve_kepler_sgp4
from astropass.models._mean_motion import RecoveredElements, recover_elements
from astropass.models._orientation import Vector, orient
from astropass.models._types import OrbitalElements
from astropass.utils import actan, mod2pi

# Perigee heights [km] at which the atmospheric density model is adjusted
_PERIGEE_SIMPLE = 220.0
_PERIGEE_ADJUST = 156.0
_PERIGEE_FLOOR = 98.0


@dataclass(frozen=True)
class NearEarthTerms:
    """Initialization constants shared by SGP4 and SDP4.

    Attributes:
        xnodp: Recovered mean motion [rad/min].
        aodp: Recovered semi-major axis [er].
        s4: Density-function parameter, adjusted for low perigee [er].
        tsi: ``1 / (aodp - s4)``.
        eta: ``aodp e tsi``.
        coef: ``(q0 - s)^4 tsi^4``.
        coef1: ``coef / psi^7``.
        c1: First-order drag coefficient.
        c4: Drag coefficient of the eccentricity decay.
        cosi0: Cosine of the epoch inclination.
        sini0: Sine of the epoch inclination.
        theta2: ``cos^2(i)``.
        beta0: ``sqrt(1 - e^2)``.
        beta02: ``1 - e^2``.
        eosq: Eccentricity squared.
        x3thm1: ``3 cos^2(i) - 1``.
        x1mth2: ``1 - cos^2(i)``.
        x7thm1: ``7 cos^2(i) - 1``.
        xmdot: Secular rate of the mean anomaly [rad/min].
        omgdot: Secular rate of the argument of perigee [rad/min].
        xnodot: Secular rate of the node [rad/min].
        xnodcf: Drag coefficient of the node.
        t2cof: Drag coefficient of the mean longitude (``t^2`` term).
        xlcof: Long-period coefficient of the mean longitude.
        aycof: Long-period coefficient of ``e sin(omega)``.
        a3ovk2: ``-J3 / k2``.
    """

    xnodp: float
    aodp: float
    s4: float
    tsi: float
    eta: float
    coef: float
    coef1: float
    c1: float
    c4: float
    cosi0: float
    sini0: float
    theta2: float
    beta0: float
    beta02: float
    eosq: float
    x3thm1: float
    x1mth2: float
    x7thm1: float
    xmdot: float
    omgdot: float
    xnodot: float
    xnodcf: float
    t2cof: float
    xlcof: float
    aycof: float
    a3ovk2: float


@dataclass(frozen=True)
class SGP4State:
    """Initialization-time constants of the SGP4 model.

    Attributes:
        terms: Constants shared with SDP4.
        isimp: Whether the simplified drag form applies (perigee below 220 km).
        c5: Drag coefficient of the mean-anomaly dependent eccentricity term.
        omgcof: Drag coefficient of the argument of perigee.
        xmcof: Drag coefficient of the mean anomaly.
        delmo: ``(1 + eta cos(M0))^3``.
        sinmo: ``sin(M0)``.
        d2, d3, d4: Higher-order drag coefficients of the semi-major axis.
        t3cof, t4cof, t5cof: Higher-order drag coefficients of the mean longitude.
    """

    terms: NearEarthTerms
    isimp: bool
    c5: float
    omgcof: float
    xmcof: float
    delmo: float
    sinmo: float
    d2: float = 0.0
    d3: float = 0.0
    d4: float = 0.0
    t3cof: float = 0.0
    t4cof: float = 0.0
    t5cof: float = 0.0


def near_earth_terms(
    elements: OrbitalElements, rec: RecoveredElements | None = None
) -> NearEarthTerms:
    """Compute the initialization constants shared by SGP4 and SDP4.

    Args:
        elements: Mean elements of the body.
        rec: Recovered mean motion, if already computed.

    Returns:
        The shared constants.
    """
    if rec is None:
        rec = recover_elements(elements)
    ecc = elements.eccentricity
    bstar = elements.bstardrag
    aodp = rec.aodp
    xnodp = rec.xnodp
    theta2 = rec.theta2
    x3thm1 = rec.x3thm1
    beta02 = rec.beta02
    cosi0 = rec.cosi

    # Adjust the density parameter for perigees below 156 km
    s4 = S
    qoms24 = QOMS2T
    perige = (aodp * (1.0 - ecc) - AE) * XKMPER
    if perige < _PERIGEE_ADJUST:
        s4 = perige - 78.0 if perige > _PERIGEE_FLOOR else 20.0
        qoms24 = ((120.0 - s4) * AE / XKMPER) ** 4
        s4 = s4 / XKMPER + AE

    pinvsq = 1.0 / (aodp * aodp * beta02 * beta02)
    tsi = 1.0 / (aodp - s4)
    eta = aodp * ecc * tsi
    etasq = eta * eta
    eeta = ecc * eta
    psisq = abs(1.0 - etasq)
    coef = qoms24 * tsi**4
    coef1 = coef / psisq**3.5
    c2 = coef1 * xnodp * (
        aodp * (1.0 + 1.5 * etasq + eeta * (4.0 + etasq))
        + 0.75 * CK2 * tsi / psisq * x3thm1 * (8.0 + 3.0 * etasq * (8.0 + etasq))
    )
    c1 = bstar * c2
    sini0 = sin(elements.inclination)
    a3ovk2 = -XJ3 / CK2 * AE**3
    x1mth2 = 1.0 - theta2
    c4 = (
        2.0
        * xnodp
        * coef1
        * aodp
        * beta02
        * (
            eta * (2.0 + 0.5 * etasq)
            + ecc * (0.5 + 2.0 * etasq)
            - 2.0
            * CK2
            * tsi
            / (aodp * psisq)
            * (
                -3.0 * x3thm1 * (1.0 - 2.0 * eeta + etasq * (1.5 - 0.5 * eeta))
                + 0.75
                * x1mth2
                * (2.0 * etasq - eeta * (1.0 + etasq))
                * cos(2.0 * elements.argumentofperigee)
            )
        )
    )
    theta4 = theta2 * theta2
    temp1 = 3.0 * CK2 * pinvsq * xnodp
    temp2 = temp1 * CK2 * pinvsq
    temp3 = 1.25 * CK4 * pinvsq * pinvsq * xnodp
    xmdot = (
        xnodp
        + 0.5 * temp1 * rec.beta0 * x3thm1
        + 0.0625 * temp2 * rec.beta0 * (13.0 - 78.0 * theta2 + 137.0 * theta4)
    )
    x1m5th = 1.0 - 5.0 * theta2
    omgdot = (
        -0.5 * temp1 * x1m5th
        + 0.0625 * temp2 * (7.0 - 114.0 * theta2 + 395.0 * theta4)
        + temp3 * (3.0 - 36.0 * theta2 + 49.0 * theta4)
    )
    xhdot1 = -temp1 * cosi0
    xnodot = xhdot1 + (
        0.5 * temp2 * (4.0 - 19.0 * theta2) + 2.0 * temp3 * (3.0 - 7.0 * theta2)
    ) * cosi0

    return NearEarthTerms(
        xnodp=xnodp,
        aodp=aodp,
        s4=s4,
        tsi=tsi,
        eta=eta,
        coef=coef,
        coef1=coef1,
        c1=c1,
        c4=c4,
        cosi0=cosi0,
        sini0=sini0,
        theta2=theta2,
        beta0=rec.beta0,
        beta02=beta02,
        eosq=rec.eosq,
        x3thm1=x3thm1,
        x1mth2=x1mth2,
        x7thm1=7.0 * theta2 - 1.0,
        xmdot=xmdot,
        omgdot=omgdot,
        xnodot=xnodot,
        xnodcf=3.5 * beta02 * xhdot1 * c1,
        t2cof=1.5 * c1,
        xlcof=0.125 * a3ovk2 * sini0 * (3.0 + 5.0 * cosi0) / (1.0 + cosi0),
        aycof=0.25 * a3ovk2 * sini0,
        a3ovk2=a3ovk2,
    )


def sgp4_init(elements: OrbitalElements) -> SGP4State:
    """Compute the SGP4 initialization constants.

    Args:
        elements: Mean elements of a near-earth body.

    Returns:
        The SGP4 model state.
    """
    ecc = elements.eccentricity
    bstar = elements.bstardrag
    terms = near_earth_terms(elements)
    aodp = terms.aodp
    tsi = terms.tsi
    eta = terms.eta
    etasq = eta * eta
    eeta = ecc * eta
    c1 = terms.c1

    isimp = aodp * (1.0 - ecc) / AE < _PERIGEE_SIMPLE / XKMPER + AE
    c3 = terms.coef * tsi * terms.a3ovk2 * terms.xnodp * AE * terms.sini0 / ecc
    c5 = 2.0 * terms.coef1 * aodp * terms.beta02 * (
        1.0 + 2.75 * (etasq + eeta) + eeta * etasq
    )
    extra = {}
    if not isimp:
        c1sq = c1 * c1
        d2 = 4.0 * aodp * tsi * c1sq
        temp = d2 * tsi * c1 / 3.0
        d3 = (17.0 * aodp + terms.s4) * temp
        d4 = 0.5 * temp * aodp * tsi * (221.0 * aodp + 31.0 * terms.s4) * c1
        extra = {
            "d2": d2,
            "d3": d3,
            "d4": d4,
            "t3cof": d2 + 2.0 * c1sq,
            "t4cof": 0.25 * (3.0 * d3 + c1 * (12.0 * d2 + 10.0 * c1sq)),
            "t5cof": 0.2
            * (3.0 * d4 + 12.0 * c1 * d3 + 6.0 * d2 * d2 + 15.0 * c1sq * (2.0 * d2 + c1sq)),
        }

    return SGP4State(
        terms=terms,
        isimp=isimp,
        c5=c5,
        omgcof=bstar * c3 * cos(elements.argumentofperigee),
        xmcof=-TOTHRD * terms.coef * bstar * AE / eeta,
        delmo=(1.0 + eta * cos(elements.meananomaly)) ** 3,
        sinmo=sin(elements.meananomaly),
        **extra,
    )


def sgp4_propagate(
    elements: OrbitalElements, state: SGP4State, tsince: float
) -> tuple[Vector, Vector]:
    """Propagate a body with the SGP4 model.

    Args:
        elements: Mean elements of the body.
        state: Constants from :func:`sgp4_init`.
        tsince: Minutes since the element epoch.

    Returns:
        ``(position, velocity)`` in Earth radii and Earth radii per minute.

    Raises:
        EccentricityError: If drag drives the eccentricity out of ``[-1, 1]``.
    """
    terms = state.terms
    bstar = elements.bstardrag

    # Secular gravity and atmospheric drag
    xmdf = elements.meananomaly + terms.xmdot * tsince
    omgadf = elements.argumentofperigee + terms.omgdot * tsince
    xnoddf = elements.rightascension + terms.xnodot * tsince
    omega = omgadf
    xmp = xmdf
    tsq = tsince * tsince
    xnode = xnoddf + terms.xnodcf * tsq
    tempa = 1.0 - terms.c1 * tsince
    tempe = bstar * terms.c4 * tsince
    templ = terms.t2cof * tsq
    if not state.isimp:
        delomg = state.omgcof * tsince
        delm = state.xmcof * ((1.0 + terms.eta * cos(xmdf)) ** 3 - state.delmo)
        temp = delomg + delm
        xmp = xmdf + temp
        omega = omgadf - temp
        tcube = tsq * tsince
        tfour = tsince * tcube
        tempa = tempa - state.d2 * tsq - state.d3 * tcube - state.d4 * tfour
        tempe = tempe + bstar * state.c5 * (sin(xmp) - state.sinmo)
        templ = templ + state.t3cof * tcube + tfour * (state.t4cof + tsince * state.t5cof)

    a = terms.aodp * tempa**2
    e = elements.eccentricity - tempe
    xl = xmp + omega + xnode + terms.xnodp * templ
    return sgp4_short_period(terms, a, e, xl, omega, xnode, elements.inclination, tsince)


def sgp4_short_period(
    terms: NearEarthTerms,
    a: float,
    e: float,
    xl: float,
    omega: float,
    xnode: float,
    xinc: float,
    tsince: float,
) -> tuple[Vector, Vector]:
    """Apply long-period periodics, solve Kepler and apply short-period periodics.

    Args:
        terms: Shared SGP4/SDP4 constants.
        a: Secularly updated semi-major axis [er].
        e: Secularly updated eccentricity.
        xl: Mean longitude [rad].
        omega: Argument of perigee [rad].
        xnode: Right ascension of the ascending node [rad].
        xinc: Inclination [rad].
        tsince: Minutes since epoch, for error reporting.

    Returns:
        ``(position, velocity)`` in Earth radii and Earth radii per minute.

    Raises:
        EccentricityError: If ``e`` is outside ``[-1, 1]``.
    """
    if e > 1.0 or e < -1.0:
        raise EccentricityError(e, tsince)
    beta = sqrt(1.0 - e * e)
    xn = XKE / a**1.5

    # Long-period periodics
    axn = e * cos(omega)
    temp = 1.0 / (a * beta * beta)
    xll = temp * terms.xlcof * axn
    aynl = temp * terms.aycof
    xlt = xl + xll
    ayn = e * sin(omega) + aynl

    capu = mod2pi(xlt - xnode)
    sinepw, cosepw, temp3, temp4, temp5, temp6 = solve_kepler_sgp4(capu, axn, ayn)

    # Short-period preliminary quantities
    ecose = temp5 + temp6
    esine = temp3 - temp4
    elsq = axn * axn + ayn * ayn
    temp = 1.0 - elsq
    pl = a * temp
    r = a * (1.0 - ecose)
    temp1 = 1.0 / r
    rdot = XKE * sqrt(a) * esine * temp1
    rfdot = XKE * sqrt(pl) * temp1
    temp2 = a * temp1
    betal = sqrt(temp)
    temp3 = 1.0 / (1.0 + betal)
    cosu = temp2 * (cosepw - axn + ayn * esine * temp3)
    sinu = temp2 * (sinepw - ayn - axn * esine * temp3)
    u = actan(sinu, cosu)
    sin2u = 2.0 * sinu * cosu
    cos2u = 2.0 * cosu * cosu - 1.0
    temp = 1.0 / pl
    temp1 = CK2 * temp
    temp2 = temp1 * temp

    # Short-period periodics
    rk = r * (1.0 - 1.5 * temp2 * betal * terms.x3thm1) + 0.5 * temp1 * terms.x1mth2 * cos2u
    uk = u - 0.25 * temp2 * terms.x7thm1 * sin2u
    xnodek = xnode + 1.5 * temp2 * terms.cosi0 * sin2u
    xinck = xinc + 1.5 * temp2 * terms.cosi0 * terms.sini0 * cos2u
    rdotk = rdot - xn * temp1 * terms.x1mth2 * sin2u
    rfdotk = rfdot + xn * temp1 * (terms.x1mth2 * cos2u + 1.5 * terms.x3thm1)

    return orient(rk, uk, xnodek, xinck, rdotk, rfdotk)
