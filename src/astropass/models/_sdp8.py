"""
The SDP8 deep-space model.

SDP8 is SGP8 with the lunar/solar and resonance effects of
:mod:`astropass.models._deep_space`.  Its drag rates are always the linear
ones of the simplified SGP8 regime.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import sin, sqrt

from astropass.models._constants import TOTHRD
from astropass.models._deep_space import (
    DeepSpaceState,
    deep_space_init,
    deep_space_periodics,
    deep_space_secular,
)
from astropass.models._orientation import Vector
from astropass.models._sgp8 import SGP8Terms, linear_edot, sgp8_short_period, sgp8_terms
from astropass.models._types import OrbitalElements
from astropass.utils import mod2pi


@dataclass(frozen=True)
class SDP8State:
    """Initialization-time state of the SDP8 model.

    Attributes:
        terms: Constants shared with SGP8.
        edot: Drag rate of the eccentricity [1/min].
        deep: Deep-space coefficients, integrator and periodic cache.
    """

    terms: SGP8Terms
    edot: float
    deep: DeepSpaceState


def sdp8_init(elements: OrbitalElements) -> SDP8State:
    """Compute the SDP8 initialization constants.

    Args:
        elements: Mean elements of a deep-space body.

    Returns:
        The SDP8 model state.
    """
    terms, drag = sgp8_terms(elements)
    deep = deep_space_init(
        elements,
        eqsq=drag.eosq,
        siniq=terms.sini,
        cosiq=terms.cosi,
        rteqsq=sqrt(drag.beta02),
        a0=terms.aodp,
        cosq2=terms.theta2,
        sinomo=drag.sing,
        cosomo=drag.cosg,
        bsq=drag.beta02,
        xlldot=terms.xlldot,
        omgdt=terms.omgdt,
        xnodot=terms.xnodot,
        xnodp=terms.xnodp,
    )
    return SDP8State(terms=terms, edot=linear_edot(terms, elements.eccentricity), deep=deep)


def sdp8_propagate(
    elements: OrbitalElements, state: SDP8State, tsince: float, debug: bool = False
) -> tuple[Vector, Vector]:
    """Propagate a body with the SDP8 model.

    Args:
        elements: Mean elements of the body.
        state: State from :func:`sdp8_init`; its deep-space part is updated.
        tsince: Minutes since the element epoch.
        debug: Log resonance integrator restarts.

    Returns:
        ``(position, velocity)`` in Earth radii and Earth radii per minute.

    Raises:
        EccentricityError: If the perturbed eccentricity leaves ``[-1, 1]``.
    """
    terms = state.terms

    # Secular gravity and atmospheric drag
    z1 = 0.5 * terms.xndt * tsince * tsince
    z7 = 3.5 * TOTHRD * z1 / terms.xnodp
    xmamdf = elements.meananomaly + terms.xlldot * tsince
    omgasm = elements.argumentofperigee + terms.omgdt * tsince + z7 * terms.xgdt1
    xnodes = elements.rightascension + terms.xnodot * tsince + z7 * terms.xhdt1

    xmamdf, omgasm, xnodes, em, xinc, xn = deep_space_secular(
        state.deep, xmamdf, omgasm, xnodes, terms.xnodp, tsince, debug=debug
    )
    xn = xn + terms.xndt * tsince
    em = em + state.edot * tsince
    xmam = xmamdf + z1 + z7 * terms.xmdt1

    em, xinc, omgasm, xnodes, xmam = deep_space_periodics(
        state.deep, em, xinc, omgasm, xnodes, xmam, tsince
    )
    xmam = mod2pi(xmam)
    return sgp8_short_period(terms, xn, em, xmam, omgasm, xnodes, sin(0.5 * xinc), tsince)
