"""
Deep-space perturbation engine shared by the SDP4 and SDP8 models.

Bodies with periods of 225 minutes or more feel the Sun and the Moon, and
those in 12-hour or 24-hour orbits are in resonance with the Earth's
tesseral harmonics.  This module provides the three entry points the
deep-space models call:

- :func:`deep_space_init` computes the lunar/solar coefficients and
  classifies the resonance;
- :func:`deep_space_secular` applies the secular lunar/solar rates and
  integrates the resonance terms;
- :func:`deep_space_periodics` applies the lunar/solar periodic terms.

Secular and periodic evaluation mutate the :class:`DeepSpaceState`: the
resonance integrator keeps its position between calls, and the periodic
terms are reused while the time moves by less than 30 minutes.  The owning
body serializes access to it.

References:
    1. F. R. Hoots and R. L. Roehrich, *Spacetrack Report No. 3: Models for
       Propagation of NORAD Element Sets*, 1980.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from math import cos, pi, sin, sqrt

from astropass.models._constants import (
    C1L,
    C1SS,
    G22,
    G32,
    G44,
    G52,
    G54,
    LYDDANE_INCLINATION,
    PERIODICS_CACHE_MINUTES,
    Q22,
    Q31,
    Q33,
    ROOT22,
    ROOT32,
    ROOT44,
    ROOT52,
    ROOT54,
    STEP2,
    STEPN,
    STEPP,
    THDT,
    ZCOSGS,
    ZCOSIS,
    ZEL,
    ZES,
    ZNL,
    ZNS,
    ZSINGS,
    ZSINIS,
)
from astropass.models._types import OrbitalElements
from astropass.time import ds50, thetag
from astropass.utils import actan, mod2pi

logger = logging.getLogger(__name__)

# Mean-motion bands [rad/min] of the resonant orbits
_SYNCHRONOUS_LOW = 0.0034906585
_SYNCHRONOUS_HIGH = 0.0052359877
_HALF_DAY_LOW = 8.26e-3
_HALF_DAY_HIGH = 9.24e-3
_HALF_DAY_MIN_ECCENTRICITY = 0.5

# Below this inclination [rad] the lunar/solar node rate is not applied
_SH_MIN_INCLINATION = 5.2359877e-2


class Resonance(enum.IntEnum):
    """Geopotential resonance regime of a deep-space orbit."""

    NONE = 0
    SYNCHRONOUS = 1
    HALF_DAY = 2


@dataclass
class ResonanceIntegrator:
    """Cursor of the resonance integrator.

    The integrator advances in fixed 720-minute steps.  Its position is
    kept between calls so that propagating forward in time only integrates
    the new interval.  A cursor sitting at epoch (``atime == 0``) is
    re-anchored on the next call, as is one on the other side of epoch from
    the requested time.

    Attributes:
        atime: Minutes since epoch the integration has reached.
        xli: Integrated resonance longitude at ``atime`` [rad].
        xni: Integrated mean motion at ``atime`` [rad/min].
    """

    atime: float = 0.0
    xli: float = 0.0
    xni: float = 0.0

    def needs_restart(self, tsince: float) -> bool:
        """Whether the cursor must be re-anchored at epoch to reach ``tsince``."""
        return (
            self.atime == 0.0
            or (tsince >= 0.0 and self.atime < 0.0)
            or (tsince < 0.0 and self.atime >= 0.0)
        )

    def restart(self, xlamo: float, xnq: float) -> None:
        """Re-anchor the cursor at epoch."""
        self.atime = 0.0
        self.xli = xlamo
        self.xni = xnq


@dataclass
class PeriodicTerms:
    """Lunar/solar periodic corrections from the last full evaluation.

    Attributes:
        time: Minutes since epoch of the last evaluation, or ``None``.
        pe: Eccentricity correction.
        pinc: Inclination correction [rad].
        pl: Mean anomaly correction [rad].
        sghs: Solar argument-of-perigee term.
        shs: Solar node term.
        sghl: Lunar argument-of-perigee term.
        shl: Lunar node term.
    """

    time: float | None = None
    pe: float = 0.0
    pinc: float = 0.0
    pl: float = 0.0
    sghs: float = 0.0
    shs: float = 0.0
    sghl: float = 0.0
    shl: float = 0.0


@dataclass
class DeepSpaceState:
    """Lunar/solar and resonance coefficients of a deep-space body.

    The coefficient fields are fixed after :func:`deep_space_init`.  Only
    ``integrator`` and ``periodics`` change during propagation.
    """

    eccentricity: float
    inclination: float
    argumentofperigee: float
    thgr: float
    xnq: float
    xqncl: float
    siniq: float
    cosiq: float
    omgdt: float
    zmos: float
    zmol: float
    # Secular rates
    sse: float
    ssi: float
    ssl: float
    ssg: float
    ssh: float
    # Solar periodic coefficients
    se2: float
    se3: float
    si2: float
    si3: float
    sl2: float
    sl3: float
    sl4: float
    sgh2: float
    sgh3: float
    sgh4: float
    sh2: float
    sh3: float
    # Lunar periodic coefficients
    ee2: float
    e3: float
    xi2: float
    xi3: float
    xl2: float
    xl3: float
    xl4: float
    xgh2: float
    xgh3: float
    xgh4: float
    xh2: float
    xh3: float
    # Resonance
    resonance: Resonance = Resonance.NONE
    xlamo: float = 0.0
    xfact: float = 0.0
    del1: float = 0.0
    del2: float = 0.0
    del3: float = 0.0
    fasx2: float = 0.0
    fasx4: float = 0.0
    fasx6: float = 0.0
    d2201: float = 0.0
    d2211: float = 0.0
    d3210: float = 0.0
    d3222: float = 0.0
    d4410: float = 0.0
    d4422: float = 0.0
    d5220: float = 0.0
    d5232: float = 0.0
    d5421: float = 0.0
    d5433: float = 0.0
    integrator: ResonanceIntegrator = field(default_factory=ResonanceIntegrator)
    periodics: PeriodicTerms = field(default_factory=PeriodicTerms)


def classify_resonance(xnq: float, eccentricity: float) -> Resonance:
    """Classify the geopotential resonance of an orbit.

    Args:
        xnq: Recovered mean motion [rad/min].
        eccentricity: Eccentricity.

    Returns:
        ``SYNCHRONOUS`` for 24-hour orbits, ``HALF_DAY`` for eccentric
        12-hour orbits and ``NONE`` otherwise.
    """
    if _SYNCHRONOUS_LOW < xnq < _SYNCHRONOUS_HIGH:
        return Resonance.SYNCHRONOUS
    if (
        xnq < _HALF_DAY_LOW
        or xnq > _HALF_DAY_HIGH
        or eccentricity < _HALF_DAY_MIN_ECCENTRICITY
    ):
        return Resonance.NONE
    return Resonance.HALF_DAY


def deep_space_init(
    elements: OrbitalElements,
    eqsq: float,
    siniq: float,
    cosiq: float,
    rteqsq: float,
    a0: float,
    cosq2: float,
    sinomo: float,
    cosomo: float,
    bsq: float,
    xlldot: float,
    omgdt: float,
    xnodot: float,
    xnodp: float,
) -> DeepSpaceState:
    """Compute the lunar/solar and resonance coefficients of a deep-space body.

    Args:
        elements: Mean elements of the body.
        eqsq: Eccentricity squared.
        siniq: Sine of the inclination.
        cosiq: Cosine of the inclination.
        rteqsq: ``sqrt(1 - e^2)``.
        a0: Recovered semi-major axis [er].
        cosq2: ``cos^2(i)``.
        sinomo: Sine of the argument of perigee.
        cosomo: Cosine of the argument of perigee.
        bsq: ``1 - e^2``.
        xlldot: Secular rate of the mean anomaly [rad/min].
        omgdt: Secular rate of the argument of perigee [rad/min].
        xnodot: Secular rate of the node [rad/min].
        xnodp: Recovered mean motion [rad/min].

    Returns:
        The deep-space state, with the integrator anchored at epoch.
    """
    thgr = thetag(elements.epoch)
    eq = elements.eccentricity
    xnq = xnodp
    aqnv = 1.0 / a0
    xqncl = elements.inclination
    xmao = elements.meananomaly
    xpidot = omgdt + xnodot
    sinq = sin(elements.rightascension)
    cosq = cos(elements.rightascension)

    # Lunar and solar terms for the epoch day
    day = ds50(elements.epoch) + 18261.5
    xnodce = 4.5236020 - 9.2422029e-4 * day
    stem = sin(xnodce)
    ctem = cos(xnodce)
    zcosil = 0.91375164 - 0.03568096 * ctem
    zsinil = sqrt(1.0 - zcosil * zcosil)
    zsinhl = 0.089683511 * stem / zsinil
    zcoshl = sqrt(1.0 - zsinhl * zsinhl)
    c = 4.7199672 + 0.22997150 * day
    gam = 5.8351514 + 0.0019443680 * day
    zmol = mod2pi(c - gam)
    zx = 0.39785416 * stem / zsinil
    zy = zcoshl * ctem + 0.91744867 * zsinhl * stem
    zx = actan(zx, zy)
    zx = gam + zx - xnodce
    zcosgl = cos(zx)
    zsingl = sin(zx)
    zmos = mod2pi(6.2565837 + 0.017201977 * day)

    xnoi = 1.0 / xnq
    sse = ssi = ssl = ssh = ssg = 0.0
    solar: dict[str, float] = {}
    lunar: dict[str, float] = {}
    perturbers = (
        (ZCOSGS, ZSINGS, ZCOSIS, ZSINIS, cosq, sinq, C1SS, ZNS, ZES, solar),
        (
            zcosgl,
            zsingl,
            zcosil,
            zsinil,
            zcoshl * cosq + zsinhl * sinq,
            sinq * zcoshl - cosq * zsinhl,
            C1L,
            ZNL,
            ZEL,
            lunar,
        ),
    )
    for zcosg, zsing, zcosi, zsini, zcosh, zsinh, cc, zn, ze, coeffs in perturbers:
        a1 = zcosg * zcosh + zsing * zcosi * zsinh
        a3 = -zsing * zcosh + zcosg * zcosi * zsinh
        a7 = -zcosg * zsinh + zsing * zcosi * zcosh
        a8 = zsing * zsini
        a9 = zsing * zsinh + zcosg * zcosi * zcosh
        a10 = zcosg * zsini
        a2 = cosiq * a7 + siniq * a8
        a4 = cosiq * a9 + siniq * a10
        a5 = -siniq * a7 + cosiq * a8
        a6 = -siniq * a9 + cosiq * a10
        x1 = a1 * cosomo + a2 * sinomo
        x2 = a3 * cosomo + a4 * sinomo
        x3 = -a1 * sinomo + a2 * cosomo
        x4 = -a3 * sinomo + a4 * cosomo
        x5 = a5 * sinomo
        x6 = a6 * sinomo
        x7 = a5 * cosomo
        x8 = a6 * cosomo
        z31 = 12.0 * x1 * x1 - 3.0 * x3 * x3
        z32 = 24.0 * x1 * x2 - 6.0 * x3 * x4
        z33 = 12.0 * x2 * x2 - 3.0 * x4 * x4
        z1 = 3.0 * (a1 * a1 + a2 * a2) + z31 * eqsq
        z2 = 6.0 * (a1 * a3 + a2 * a4) + z32 * eqsq
        z3 = 3.0 * (a3 * a3 + a4 * a4) + z33 * eqsq
        z11 = -6.0 * a1 * a5 + eqsq * (-24.0 * x1 * x7 - 6.0 * x3 * x5)
        z12 = -6.0 * (a1 * a6 + a3 * a5) + eqsq * (
            -24.0 * (x2 * x7 + x1 * x8) - 6.0 * (x3 * x6 + x4 * x5)
        )
        z13 = -6.0 * a3 * a6 + eqsq * (-24.0 * x2 * x8 - 6.0 * x4 * x6)
        z21 = 6.0 * a2 * a5 + eqsq * (24.0 * x1 * x5 - 6.0 * x3 * x7)
        z22 = 6.0 * (a4 * a5 + a2 * a6) + eqsq * (
            24.0 * (x2 * x5 + x1 * x6) - 6.0 * (x4 * x7 + x3 * x8)
        )
        z23 = 6.0 * a4 * a6 + eqsq * (24.0 * x2 * x6 - 6.0 * x4 * x8)
        z1 = z1 + z1 + bsq * z31
        z2 = z2 + z2 + bsq * z32
        z3 = z3 + z3 + bsq * z33
        s3 = cc * xnoi
        s2 = -0.5 * s3 / rteqsq
        s4 = s3 * rteqsq
        s1 = -15.0 * eq * s4
        s5 = x1 * x3 + x2 * x4
        s6 = x2 * x3 + x1 * x4
        s7 = x2 * x4 - x1 * x3
        se = s1 * zn * s5
        si = s2 * zn * (z11 + z13)
        sl = -zn * s3 * (z1 + z3 - 14.0 - 6.0 * eqsq)
        sgh = s4 * zn * (z31 + z33 - 6.0)
        sh = 0.0 if xqncl < _SH_MIN_INCLINATION else -zn * s2 * (z21 + z23)
        coeffs.update(
            e2=2.0 * s1 * s6,
            e3=2.0 * s1 * s7,
            i2=2.0 * s2 * z12,
            i3=2.0 * s2 * (z13 - z11),
            l2=-2.0 * s3 * z2,
            l3=-2.0 * s3 * (z3 - z1),
            l4=-2.0 * s3 * (-21.0 - 9.0 * eqsq) * ze,
            gh2=2.0 * s4 * z32,
            gh3=2.0 * s4 * (z33 - z31),
            gh4=-18.0 * s4 * ze,
            h2=-2.0 * s2 * z22,
            h3=-2.0 * s2 * (z23 - z21),
        )
        sse += se
        ssi += si
        ssl += sl
        ssh += sh / siniq
        if coeffs is lunar:
            ssg += sgh - cosiq / siniq * sh
        else:
            ssg += sgh - cosiq * ssh

    state = DeepSpaceState(
        eccentricity=eq,
        inclination=xqncl,
        argumentofperigee=elements.argumentofperigee,
        thgr=thgr,
        xnq=xnq,
        xqncl=xqncl,
        siniq=siniq,
        cosiq=cosiq,
        omgdt=omgdt,
        zmos=zmos,
        zmol=zmol,
        sse=sse,
        ssi=ssi,
        ssl=ssl,
        ssg=ssg,
        ssh=ssh,
        se2=solar["e2"],
        se3=solar["e3"],
        si2=solar["i2"],
        si3=solar["i3"],
        sl2=solar["l2"],
        sl3=solar["l3"],
        sl4=solar["l4"],
        sgh2=solar["gh2"],
        sgh3=solar["gh3"],
        sgh4=solar["gh4"],
        sh2=solar["h2"],
        sh3=solar["h3"],
        ee2=lunar["e2"],
        e3=lunar["e3"],
        xi2=lunar["i2"],
        xi3=lunar["i3"],
        xl2=lunar["l2"],
        xl3=lunar["l3"],
        xl4=lunar["l4"],
        xgh2=lunar["gh2"],
        xgh3=lunar["gh3"],
        xgh4=lunar["gh4"],
        xh2=lunar["h2"],
        xh3=lunar["h3"],
    )

    state.resonance = classify_resonance(xnq, eq)
    if state.resonance is Resonance.SYNCHRONOUS:
        _init_synchronous(state, eqsq, aqnv, xmao, elements, xlldot, xpidot)
    elif state.resonance is Resonance.HALF_DAY:
        _init_half_day(state, eqsq, cosq2, aqnv, xmao, elements, xlldot, xnodot)
    if state.resonance is not Resonance.NONE:
        state.integrator.restart(state.xlamo, xnq)
    return state


def _init_synchronous(
    state: DeepSpaceState,
    eqsq: float,
    aqnv: float,
    xmao: float,
    elements: OrbitalElements,
    xlldot: float,
    xpidot: float,
) -> None:
    """Resonance coefficients of a 24-hour orbit."""
    cosiq = state.cosiq
    siniq = state.siniq
    xnq = state.xnq
    g200 = 1.0 + eqsq * (-2.5 + 0.8125 * eqsq)
    g310 = 1.0 + 2.0 * eqsq
    g300 = 1.0 + eqsq * (-6.0 + 6.60937 * eqsq)
    f220 = 0.75 * (1.0 + cosiq) * (1.0 + cosiq)
    f311 = 0.9375 * siniq * siniq * (1.0 + 3.0 * cosiq) - 0.75 * (1.0 + cosiq)
    f330 = 1.0 + cosiq
    f330 = 1.875 * f330 * f330 * f330
    del1 = 3.0 * xnq * xnq * aqnv * aqnv
    state.del2 = 2.0 * del1 * f220 * g200 * Q22
    state.del3 = 3.0 * del1 * f330 * g300 * Q33 * aqnv
    state.del1 = del1 * f311 * g310 * Q31 * aqnv
    state.fasx2 = 0.13130908
    state.fasx4 = 2.8843198
    state.fasx6 = 0.37448087
    state.xlamo = xmao + elements.rightascension + elements.argumentofperigee - state.thgr
    bfact = xlldot + xpidot - THDT
    bfact = bfact + state.ssl + state.ssg + state.ssh
    state.xfact = bfact - xnq


def _init_half_day(
    state: DeepSpaceState,
    eqsq: float,
    cosq2: float,
    aqnv: float,
    xmao: float,
    elements: OrbitalElements,
    xlldot: float,
    xnodot: float,
) -> None:
    """Geopotential resonance coefficients of an eccentric 12-hour orbit."""
    eq = state.eccentricity
    cosiq = state.cosiq
    siniq = state.siniq
    xnq = state.xnq
    eoc = eq * eqsq
    g201 = -0.306 - (eq - 0.64) * 0.440
    if eq <= 0.65:
        g211 = 3.616 - 13.247 * eq + 16.290 * eqsq
        g310 = -19.302 + 117.390 * eq - 228.419 * eqsq + 156.591 * eoc
        g322 = -18.9068 + 109.7927 * eq - 214.6334 * eqsq + 146.5816 * eoc
        g410 = -41.122 + 242.694 * eq - 471.094 * eqsq + 313.953 * eoc
        g422 = -146.407 + 841.880 * eq - 1629.014 * eqsq + 1083.435 * eoc
        g520 = -532.114 + 3017.977 * eq - 5740.0 * eqsq + 3708.276 * eoc
    else:
        g211 = -72.099 + 331.819 * eq - 508.738 * eqsq + 266.724 * eoc
        g310 = -346.844 + 1582.851 * eq - 2415.925 * eqsq + 1246.113 * eoc
        g322 = -342.585 + 1554.908 * eq - 2366.899 * eqsq + 1215.972 * eoc
        g410 = -1052.797 + 4758.686 * eq - 7193.992 * eqsq + 3651.957 * eoc
        g422 = -3581.69 + 16178.11 * eq - 24462.77 * eqsq + 12422.52 * eoc
        if eq > 0.715:
            g520 = -5149.66 + 29936.92 * eq - 54087.36 * eqsq + 31324.56 * eoc
        else:
            g520 = 1464.74 - 4664.75 * eq + 3763.64 * eqsq
    if eq < 0.7:
        g533 = -919.2277 + 4988.61 * eq - 9064.77 * eqsq + 5542.21 * eoc
        g521 = -822.71072 + 4568.6173 * eq - 8491.4146 * eqsq + 5337.524 * eoc
        g532 = -853.666 + 4690.25 * eq - 8624.77 * eqsq + 5341.4 * eoc
    else:
        g533 = -37995.78 + 161616.52 * eq - 229838.2 * eqsq + 109377.94 * eoc
        g521 = -51752.104 + 218913.95 * eq - 309468.16 * eqsq + 146349.42 * eoc
        g532 = -40023.88 + 170470.89 * eq - 242699.48 * eqsq + 115605.82 * eoc

    sini2 = siniq * siniq
    f220 = 0.75 * (1.0 + 2.0 * cosiq + cosq2)
    f221 = 1.5 * sini2
    f321 = 1.875 * siniq * (1.0 - 2.0 * cosiq - 3.0 * cosq2)
    f322 = -1.875 * siniq * (1.0 + 2.0 * cosiq - 3.0 * cosq2)
    f441 = 35.0 * sini2 * f220
    f442 = 39.3750 * sini2 * sini2
    f522 = 9.84375 * siniq * (
        sini2 * (1.0 - 2.0 * cosiq - 5.0 * cosq2)
        + 0.33333333 * (-2.0 + 4.0 * cosiq + 6.0 * cosq2)
    )
    f523 = siniq * (
        4.92187512 * sini2 * (-2.0 - 4.0 * cosiq + 10.0 * cosq2)
        + 6.56250012 * (1.0 + 2.0 * cosiq - 3.0 * cosq2)
    )
    f542 = 29.53125 * siniq * (2.0 - 8.0 * cosiq + cosq2 * (-12.0 + 8.0 * cosiq + 10.0 * cosq2))
    f543 = 29.53125 * siniq * (-2.0 - 8.0 * cosiq + cosq2 * (12.0 + 8.0 * cosiq - 10.0 * cosq2))

    xno2 = xnq * xnq
    ainv2 = aqnv * aqnv
    temp1 = 3.0 * xno2 * ainv2
    temp = temp1 * ROOT22
    state.d2201 = temp * f220 * g201
    state.d2211 = temp * f221 * g211
    temp1 = temp1 * aqnv
    temp = temp1 * ROOT32
    state.d3210 = temp * f321 * g310
    state.d3222 = temp * f322 * g322
    temp1 = temp1 * aqnv
    temp = 2.0 * temp1 * ROOT44
    state.d4410 = temp * f441 * g410
    state.d4422 = temp * f442 * g422
    temp1 = temp1 * aqnv
    temp = temp1 * ROOT52
    state.d5220 = temp * f522 * g520
    state.d5232 = temp * f523 * g532
    temp = 2.0 * temp1 * ROOT54
    state.d5421 = temp * f542 * g521
    state.d5433 = temp * f543 * g533
    state.xlamo = xmao + 2.0 * elements.rightascension - 2.0 * state.thgr
    bfact = xlldot + xnodot + xnodot - THDT - THDT
    bfact = bfact + state.ssl + state.ssh + state.ssh
    state.xfact = bfact - xnq


# ---------------------------------------------------------------------------
# Secular effects and resonance integration
# ---------------------------------------------------------------------------


def _dot_terms(state: DeepSpaceState) -> tuple[float, float, float]:
    """Rates of the resonance longitude and mean motion at the cursor.

    Returns:
        ``(xldot, xndot, xnddt)``.
    """
    integ = state.integrator
    xli = integ.xli
    if state.resonance is Resonance.SYNCHRONOUS:
        xndot = (
            state.del1 * sin(xli - state.fasx2)
            + state.del2 * sin(2.0 * (xli - state.fasx4))
            + state.del3 * sin(3.0 * (xli - state.fasx6))
        )
        xnddt = (
            state.del1 * cos(xli - state.fasx2)
            + 2.0 * state.del2 * cos(2.0 * (xli - state.fasx4))
            + 3.0 * state.del3 * cos(3.0 * (xli - state.fasx6))
        )
    else:
        xomi = state.argumentofperigee + state.omgdt * integ.atime
        x2omi = xomi + xomi
        x2li = xli + xli
        xndot = (
            state.d2201 * sin(x2omi + xli - G22)
            + state.d2211 * sin(xli - G22)
            + state.d3210 * sin(xomi + xli - G32)
            + state.d3222 * sin(-xomi + xli - G32)
            + state.d4410 * sin(x2omi + x2li - G44)
            + state.d4422 * sin(x2li - G44)
            + state.d5220 * sin(xomi + xli - G52)
            + state.d5232 * sin(-xomi + xli - G52)
            + state.d5421 * sin(xomi + x2li - G54)
            + state.d5433 * sin(-xomi + x2li - G54)
        )
        xnddt = (
            state.d2201 * cos(x2omi + xli - G22)
            + state.d2211 * cos(xli - G22)
            + state.d3210 * cos(xomi + xli - G32)
            + state.d3222 * cos(-xomi + xli - G32)
            + state.d5220 * cos(xomi + xli - G52)
            + state.d5232 * cos(-xomi + xli - G52)
            + 2.0
            * (
                state.d4410 * cos(x2omi + x2li - G44)
                + state.d4422 * cos(x2li - G44)
                + state.d5421 * cos(xomi + x2li - G54)
                + state.d5433 * cos(-xomi + x2li - G54)
            )
        )
    xldot = integ.xni + state.xfact
    xnddt = xnddt * xldot
    return xldot, xndot, xnddt


def _integrate(state: DeepSpaceState, delt: float) -> None:
    """Advance the resonance integrator by one step of ``delt`` minutes."""
    xldot, xndot, xnddt = _dot_terms(state)
    integ = state.integrator
    integ.xli = integ.xli + xldot * delt + xndot * STEP2
    integ.xni = integ.xni + xndot * delt + xnddt * STEP2
    integ.atime = integ.atime + delt


def deep_space_secular(
    state: DeepSpaceState,
    xll: float,
    omgasm: float,
    xnodes: float,
    xn: float,
    tsince: float,
    debug: bool = False,
) -> tuple[float, float, float, float, float, float]:
    """Apply lunar/solar secular effects and geopotential resonance.

    Args:
        state: Deep-space state of the body; its integrator is advanced.
        xll: Mean anomaly after near-earth secular terms [rad].
        omgasm: Argument of perigee after near-earth secular terms [rad].
        xnodes: Node after near-earth secular terms [rad].
        xn: Mean motion [rad/min].
        tsince: Minutes since epoch.
        debug: Log integrator restarts.

    Returns:
        ``(xll, omgasm, xnodes, em, xinc, xn)`` with the deep-space
        secular effects applied.
    """
    xll = xll + state.ssl * tsince
    omgasm = omgasm + state.ssg * tsince
    xnodes = xnodes + state.ssh * tsince
    em = state.eccentricity + state.sse * tsince
    xinc = state.inclination + state.ssi * tsince
    if xinc < 0.0:
        xinc = -xinc
        xnodes = xnodes + pi
        omgasm = omgasm - pi

    if state.resonance is Resonance.NONE:
        return xll, omgasm, xnodes, em, xinc, xn

    integ = state.integrator
    while True:
        if integ.needs_restart(tsince):
            delt = STEPP if tsince >= 0.0 else STEPN
            integ.restart(state.xlamo, state.xnq)
            if debug:
                logger.debug("Resonance integrator restarted at epoch for t=%s min", tsince)
            break
        if abs(tsince) >= abs(integ.atime):
            delt = STEPP if tsince > 0.0 else STEPN
            break
        # Step back toward epoch
        delt = STEPN if tsince > 0.0 else STEPP
        _integrate(state, delt)

    while abs(tsince - integ.atime) >= STEPP:
        _integrate(state, delt)

    ft = tsince - integ.atime
    xldot, xndot, xnddt = _dot_terms(state)
    xn = integ.xni + xndot * ft + xnddt * ft * ft * 0.5
    xl = integ.xli + xldot * ft + xndot * ft * ft * 0.5
    temp = -xnodes + state.thgr + tsince * THDT
    if state.resonance is Resonance.SYNCHRONOUS:
        xll = xl - omgasm + temp
    else:
        xll = xl + temp + temp
    return xll, omgasm, xnodes, em, xinc, xn


# ---------------------------------------------------------------------------
# Periodic effects
# ---------------------------------------------------------------------------


def _update_periodics(state: DeepSpaceState, tsince: float) -> None:
    """Re-evaluate the lunar/solar periodic terms at ``tsince``."""
    cache = state.periodics
    cache.time = tsince

    zm = state.zmos + ZNS * tsince
    zf = zm + 2.0 * ZES * sin(zm)
    sinzf = sin(zf)
    f2 = 0.5 * sinzf * sinzf - 0.25
    f3 = -0.5 * sinzf * cos(zf)
    ses = state.se2 * f2 + state.se3 * f3
    sis = state.si2 * f2 + state.si3 * f3
    sls = state.sl2 * f2 + state.sl3 * f3 + state.sl4 * sinzf
    cache.sghs = state.sgh2 * f2 + state.sgh3 * f3 + state.sgh4 * sinzf
    cache.shs = state.sh2 * f2 + state.sh3 * f3

    zm = state.zmol + ZNL * tsince
    zf = zm + 2.0 * ZEL * sin(zm)
    sinzf = sin(zf)
    f2 = 0.5 * sinzf * sinzf - 0.25
    f3 = -0.5 * sinzf * cos(zf)
    sel = state.ee2 * f2 + state.e3 * f3
    sil = state.xi2 * f2 + state.xi3 * f3
    sll = state.xl2 * f2 + state.xl3 * f3 + state.xl4 * sinzf
    cache.sghl = state.xgh2 * f2 + state.xgh3 * f3 + state.xgh4 * sinzf
    cache.shl = state.xh2 * f2 + state.xh3 * f3

    cache.pe = ses + sel
    cache.pinc = sis + sil
    cache.pl = sls + sll


def deep_space_periodics(
    state: DeepSpaceState,
    em: float,
    xinc: float,
    omgasm: float,
    xnodes: float,
    xll: float,
    tsince: float,
) -> tuple[float, float, float, float, float]:
    """Apply lunar/solar periodic effects.

    The periodic terms are only re-evaluated when ``tsince`` is 30 minutes
    or more from the last evaluation.  Below an epoch inclination of
    0.2 rad they are applied through the Lyddane modification, which
    avoids the singularity at zero inclination.

    Args:
        state: Deep-space state of the body; its periodic cache may be refreshed.
        em: Eccentricity.
        xinc: Inclination [rad].
        omgasm: Argument of perigee [rad].
        xnodes: Node [rad].
        xll: Mean anomaly [rad].
        tsince: Minutes since epoch.

    Returns:
        ``(em, xinc, omgasm, xnodes, xll)`` with the periodics applied.
    """
    sinis = sin(xinc)
    cosis = cos(xinc)
    cache = state.periodics
    if cache.time is None or abs(cache.time - tsince) >= PERIODICS_CACHE_MINUTES:
        _update_periodics(state, tsince)

    pgh = cache.sghs + cache.sghl
    ph = cache.shs + cache.shl
    xinc = xinc + cache.pinc
    em = em + cache.pe

    if state.inclination >= LYDDANE_INCLINATION:
        ph = ph / state.siniq
        pgh = pgh - state.cosiq * ph
        omgasm = omgasm + pgh
        xnodes = xnodes + ph
        xll = xll + cache.pl
    else:
        sinok = sin(xnodes)
        cosok = cos(xnodes)
        alfdp = sinis * sinok
        betdp = sinis * cosok
        dalf = ph * cosok + cache.pinc * cosis * sinok
        dbet = -ph * sinok + cache.pinc * cosis * cosok
        alfdp = alfdp + dalf
        betdp = betdp + dbet
        xls = xll + omgasm + cosis * xnodes
        dls = cache.pl + pgh - cache.pinc * xnodes * sinis
        xls = xls + dls
        xnodes = actan(alfdp, betdp)
        xll = xll + cache.pl
        omgasm = xls - xll - cos(xinc) * xnodes
    return em, xinc, omgasm, xnodes, xll
