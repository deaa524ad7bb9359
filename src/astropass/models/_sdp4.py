"""
The SDP4 deep-space model.

SDP4 is SGP4 extended with the lunar/solar and resonance effects of
:mod:`astropass.models._deep_space`.  It applies to bodies with periods of
225 minutes or more.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import cos, sin

from astropass.models._constants import TOTHRD, XKE
from astropass.models._deep_space import (
    DeepSpaceState,
    deep_space_init,
    deep_space_periodics,
    deep_space_secular,
)
from astropass.models._orientation import Vector
from astropass.models._sgp4 import NearEarthTerms, near_earth_terms, sgp4_short_period
from astropass.models._types import OrbitalElements


@dataclass(frozen=True)
class SDP4State:
    """Initialization-time state of the SDP4 model.

    Attributes:
        terms: Constants shared with SGP4.
        deep: Deep-space coefficients, integrator and periodic cache.
    """

    terms: NearEarthTerms
    deep: DeepSpaceState


def sdp4_init(elements: OrbitalElements) -> SDP4State:
    """Compute the SDP4 initialization constants.

    Args:
        elements: Mean elements of a deep-space body.

    Returns:
        The SDP4 model state.
    """
    terms = near_earth_terms(elements)
    deep = deep_space_init(
        elements,
        eqsq=terms.eosq,
        siniq=terms.sini0,
        cosiq=terms.cosi0,
        rteqsq=terms.beta0,
        a0=terms.aodp,
        cosq2=terms.theta2,
        sinomo=sin(elements.argumentofperigee),
        cosomo=cos(elements.argumentofperigee),
        bsq=terms.beta02,
        xlldot=terms.xmdot,
        omgdt=terms.omgdot,
        xnodot=terms.xnodot,
        xnodp=terms.xnodp,
    )
    return SDP4State(terms=terms, deep=deep)


def sdp4_propagate(
    elements: OrbitalElements, state: SDP4State, tsince: float, debug: bool = False
) -> tuple[Vector, Vector]:
    """Propagate a body with the SDP4 model.

    Args:
        elements: Mean elements of the body.
        state: State from :func:`sdp4_init`; its deep-space part is updated.
        tsince: Minutes since the element epoch.
        debug: Log resonance integrator restarts.

    Returns:
        ``(position, velocity)`` in Earth radii and Earth radii per minute.

    Raises:
        EccentricityError: If the perturbed eccentricity leaves ``[-1, 1]``.
    """
    terms = state.terms

    # Secular gravity and atmospheric drag
    xmdf = elements.meananomaly + terms.xmdot * tsince
    omgadf = elements.argumentofperigee + terms.omgdot * tsince
    xnoddf = elements.rightascension + terms.xnodot * tsince
    tsq = tsince * tsince
    xnode = xnoddf + terms.xnodcf * tsq
    tempa = 1.0 - terms.c1 * tsince
    tempe = elements.bstardrag * terms.c4 * tsince
    templ = terms.t2cof * tsq

    xmdf, omgadf, xnode, em, xinc, xn = deep_space_secular(
        state.deep, xmdf, omgadf, xnode, terms.xnodp, tsince, debug=debug
    )
    a = (XKE / xn) ** TOTHRD * tempa * tempa
    e = em - tempe
    xmam = xmdf + terms.xnodp * templ

    e, xinc, omgadf, xnode, xmam = deep_space_periodics(
        state.deep, e, xinc, omgadf, xnode, xmam, tsince
    )
    xl = xmam + omgadf + xnode
    return sgp4_short_period(terms, a, e, xl, omgadf, xnode, xinc, tsince)
