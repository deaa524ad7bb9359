"""
Pass prediction.

Finds the passes of a body over a ground station, with refined rise,
culmination, set, illumination-change and appulse events.
"""

from astropass.passes._detector import compute_passes
from astropass.passes._types import LIGHTING, Appulse, Event, Pass, PassEvent

__all__ = [
    "compute_passes",
    "PassEvent",
    "LIGHTING",
    "Appulse",
    "Event",
    "Pass",
]
