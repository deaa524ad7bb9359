"""
astropass predicts where an Earth-orbiting body is from its NORAD element
set, and when it can be seen from the ground.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AU,
    WGS84_a,
    WGS84_f,
)

from .config import set_dtype, get_dtype

from .errors import (
    OrbitalError,
    ModelMismatchError,
    UnknownModelError,
    EccentricityError,
    DecayError,
    EmptySetError,
    MalformedWindowError,
)

from .time import (
    ds50,
    jday2000,
    jcent2000,
    thetag,
    dynamical_delta,
    caldate_to_timestamp,
    timestamp_to_caldate,
    epoch_from_tle,
)

from .coordinates import (
    position_geodetic_to_ecef,
    position_ecef_to_geodetic,
    rotation_eci_to_ecef,
    position_eci_to_ecef,
    position_ecef_to_eci,
    position_enz_to_azel,
    Station,
)

from .ephemerides import Sun, sun_position

from .models import (
    Model,
    OrbitalElements,
    PositionVelocity,
    TLE,
    TLESet,
    parse_tle,
)

from .passes import (
    compute_passes,
    PassEvent,
    Pass,
    Event,
    Appulse,
)

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "AU",
    "WGS84_a",
    "WGS84_f",
    # Configuration
    "set_dtype",
    "get_dtype",
    # Errors
    "OrbitalError",
    "ModelMismatchError",
    "UnknownModelError",
    "EccentricityError",
    "DecayError",
    "EmptySetError",
    "MalformedWindowError",
    # Time
    "ds50",
    "jday2000",
    "jcent2000",
    "thetag",
    "dynamical_delta",
    "caldate_to_timestamp",
    "timestamp_to_caldate",
    "epoch_from_tle",
    # Coordinates
    "position_geodetic_to_ecef",
    "position_ecef_to_geodetic",
    "rotation_eci_to_ecef",
    "position_eci_to_ecef",
    "position_ecef_to_eci",
    "position_enz_to_azel",
    "Station",
    # Sun
    "Sun",
    "sun_position",
    # Models
    "Model",
    "OrbitalElements",
    "PositionVelocity",
    "TLE",
    "TLESet",
    "parse_tle",
    # Passes
    "compute_passes",
    "PassEvent",
    "Pass",
    "Event",
    "Appulse",
]
