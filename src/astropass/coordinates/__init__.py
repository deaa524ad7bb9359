"""Coordinate transformations and ground observers.

This sub-module provides the geometry the pass detector needs:

- **Geodetic**: WGS84 ellipsoid model ``[lon, lat, alt]`` ↔ ECEF
- **ECI/ECEF**: rotation through the Greenwich mean sidereal angle
- **Topocentric (ENZ)**: East-North-Zenith local horizontal frame for
  observer-relative satellite tracking
- **Station**: a fixed observer with azimuth/elevation, angular
  separation and elevation-crossing searches
"""

from .eci import (
    position_ecef_to_eci,
    position_eci_to_ecef,
    rotation_eci_to_ecef,
)
from .geodetic import (
    position_ecef_to_geodetic,
    position_geodetic_to_ecef,
)
from .station import (
    Station,
    angle_between,
    horizon_dip,
    target_position,
)
from .topocentric import (
    position_enz_to_azel,
    relative_position_ecef_to_enz,
    rotation_ecef_to_enz,
)

__all__ = [
    "position_geodetic_to_ecef",
    "position_ecef_to_geodetic",
    "rotation_eci_to_ecef",
    "position_eci_to_ecef",
    "position_ecef_to_eci",
    "rotation_ecef_to_enz",
    "relative_position_ecef_to_enz",
    "position_enz_to_azel",
    "angle_between",
    "horizon_dip",
    "target_position",
    "Station",
]
