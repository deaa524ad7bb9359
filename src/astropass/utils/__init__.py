"""Shared utility functions for astropass.

Provides angle normalization helpers and the bisection search used to
refine pass events.
"""

from astropass.utils._angle import actan, mod2pi
from astropass.utils._search import find_first_true

__all__ = [
    "actan",
    "find_first_true",
    "mod2pi",
]
