"""
NORAD element-set propagators.

This module provides the five models of Spacetrack Report #3 (SGP, SGP4,
SGP8, SDP4, SDP8) with the shared deep-space perturbation engine, the
model selector, and the :class:`TLE` body that binds an element set to
them.  The propagators are plain Python functions of the mean elements,
their cached initialization state, and the minutes since epoch; ``TLE``
adds caching, unit conversion to km and km/s, and the pass-prediction
attributes.  ``TLESet`` groups several element sets of one body and
propagates with the one in force at each time.
"""

from astropass.models._deep_space import (
    DeepSpaceState,
    PeriodicTerms,
    Resonance,
    ResonanceIntegrator,
    classify_resonance,
    deep_space_init,
    deep_space_periodics,
    deep_space_secular,
)
from astropass.models._kepler import solve_kepler_sgp, solve_kepler_sgp4, solve_kepler_sgp8
from astropass.models._mean_motion import RecoveredElements, orbital_period, recover_elements
from astropass.models._satellite import TLE
from astropass.models._sdp4 import SDP4State, sdp4_init, sdp4_propagate
from astropass.models._sdp8 import SDP8State, sdp8_init, sdp8_propagate
from astropass.models._set import TLESet
from astropass.models._selector import Model
from astropass.models._sgp import SGPState, sgp_init, sgp_propagate
from astropass.models._sgp4 import SGP4State, sgp4_init, sgp4_propagate
from astropass.models._sgp8 import SGP8State, sgp8_init, sgp8_propagate
from astropass.models._tle import compute_checksum, parse_tle
from astropass.models._types import MODEL_ATTRIBUTES, OrbitalElements, PositionVelocity

__all__ = [
    # Types
    "OrbitalElements",
    "PositionVelocity",
    "MODEL_ATTRIBUTES",
    "Model",
    "TLE",
    "TLESet",
    # TLE Parsing
    "parse_tle",
    "compute_checksum",
    # Kepler solvers
    "solve_kepler_sgp",
    "solve_kepler_sgp4",
    "solve_kepler_sgp8",
    # Mean motion recovery
    "RecoveredElements",
    "recover_elements",
    "orbital_period",
    # Near-earth models
    "SGPState",
    "sgp_init",
    "sgp_propagate",
    "SGP4State",
    "sgp4_init",
    "sgp4_propagate",
    "SGP8State",
    "sgp8_init",
    "sgp8_propagate",
    # Deep-space engine and models
    "Resonance",
    "ResonanceIntegrator",
    "PeriodicTerms",
    "DeepSpaceState",
    "classify_resonance",
    "deep_space_init",
    "deep_space_secular",
    "deep_space_periodics",
    "SDP4State",
    "sdp4_init",
    "sdp4_propagate",
    "SDP8State",
    "sdp8_init",
    "sdp8_propagate",
]
