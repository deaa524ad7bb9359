"""Orientation vectors shared by the SGP, SGP4 and SDP4 models."""

from __future__ import annotations

from math import cos, sin

Vector = tuple[float, float, float]


def orient(
    rk: float,
    uk: float,
    xnodek: float,
    xinck: float,
    rdotk: float,
    rfdotk: float,
) -> tuple[Vector, Vector]:
    """Build position and velocity from osculating polar quantities.

    Args:
        rk: Radius [er].
        uk: Argument of latitude [rad].
        xnodek: Right ascension of the ascending node [rad].
        xinck: Inclination [rad].
        rdotk: Radial velocity [er/min].
        rfdotk: Transverse velocity [er/min].

    Returns:
        ``(position, velocity)`` in Earth radii and Earth radii per minute.
    """
    sinuk = sin(uk)
    cosuk = cos(uk)
    sinik = sin(xinck)
    cosik = cos(xinck)
    sinnok = sin(xnodek)
    cosnok = cos(xnodek)
    xmx = -sinnok * cosik
    xmy = cosnok * cosik
    ux = xmx * sinuk + cosnok * cosuk
    uy = xmy * sinuk + sinnok * cosuk
    uz = sinik * sinuk
    vx = xmx * cosuk - cosnok * sinuk
    vy = xmy * cosuk - sinnok * sinuk
    vz = sinik * cosuk
    return (
        (rk * ux, rk * uy, rk * uz),
        (rdotk * ux + rfdotk * vx, rdotk * uy + rfdotk * vy, rdotk * uz + rfdotk * vz),
    )
