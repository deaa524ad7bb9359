"""
Ground observers and observer-relative geometry.

A :class:`Station` is a fixed point on the WGS84 ellipsoid.  It answers the
questions the pass detector asks: where a target is in the observer's sky,
how far apart two targets appear, and when a body next crosses a given
elevation.

Targets may be given either as an ECI position (km) or as any object with
a ``position(t)`` method returning a position array or an object with a
``position`` attribute (such as :class:`~astropass.models.PositionVelocity`).
"""

from __future__ import annotations

from math import acos, asin

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from astropass.config import get_dtype
from astropass.constants import DEG2RAD, WGS84_a
from astropass.coordinates.eci import position_ecef_to_eci, position_eci_to_ecef
from astropass.coordinates.geodetic import (
    position_ecef_to_geodetic,
    position_geodetic_to_ecef,
)
from astropass.coordinates.topocentric import position_enz_to_azel, rotation_ecef_to_enz
from astropass.utils import find_first_true

# Search step and horizon of Station.next_elevation [s]
_ELEVATION_STEP = 600.0
_ELEVATION_LIMIT = 2.0 * 86400.0


def target_position(target, timestamp: float) -> Array:
    """ECI position of a target at a time.

    Args:
        target: ECI position in *km*, or an object with ``position(t)``.
        timestamp (float): Unix timestamp in seconds.

    Returns:
        ECI position ``[x, y, z]`` in *km*.

    Raises:
        ValueError: If the target does not report a position, as a body
            with the ``null`` model does.
    """
    locate = getattr(target, "position", None)
    if callable(locate):
        state = locate(timestamp)
        if state is None:
            raise ValueError(f"{target!r} has no position at {timestamp}")
        target = getattr(state, "position", state)
    return jnp.asarray(target, dtype=get_dtype())


def horizon_dip(altitude: float) -> float:
    """Dip of the geometric horizon seen from a given altitude.

    Args:
        altitude (float): Height above the ellipsoid in *km*.

    Returns:
        Angle of the horizon below the local horizontal, as a non-positive
        number of radians.  Zero at or below the surface.
    """
    if altitude <= 0.0:
        return 0.0
    return -acos(WGS84_a / (WGS84_a + altitude))


def angle_between(observer: ArrayLike, a: ArrayLike, b: ArrayLike) -> float:
    """Angle between two points as seen from an observer.

    Args:
        observer: Observer position ``[x, y, z]``.
        a: First point, same frame and units.
        b: Second point, same frame and units.

    Returns:
        Separation in radians, in ``[0, pi]``.
    """
    observer = jnp.asarray(observer, dtype=get_dtype())
    da = jnp.asarray(a, dtype=get_dtype()) - observer
    db = jnp.asarray(b, dtype=get_dtype()) - observer
    return float(jnp.arctan2(jnp.linalg.norm(jnp.cross(da, db)), jnp.dot(da, db)))


class Station:
    """A fixed observer on the Earth's surface.

    Args:
        latitude: Geodetic latitude.
        longitude: Longitude, positive east.
        altitude: Height above the WGS84 ellipsoid in *km*. Default: ``0.0``
        name: Display name. Default: ``""``
        use_degrees: If ``True``, latitude and longitude are in degrees.

    Examples:
        ```python
        from astropass.coordinates import Station
        sta = Station(38.898748, -77.037684, 0.0167, name="White House",
                      use_degrees=True)
        azimuth, elevation, rng = sta.azel(body, t)
        ```
    """

    def __init__(
        self,
        latitude: float,
        longitude: float,
        altitude: float = 0.0,
        name: str = "",
        use_degrees: bool = False,
    ) -> None:
        if use_degrees:
            latitude = latitude * DEG2RAD
            longitude = longitude * DEG2RAD
        self.latitude = float(latitude)
        self.longitude = float(longitude)
        self.altitude = float(altitude)
        self.name = name
        self._geodetic = jnp.array(
            [self.longitude, self.latitude, self.altitude], dtype=get_dtype()
        )
        self._ecef = position_geodetic_to_ecef(self._geodetic)
        self._rotation = rotation_ecef_to_enz(self._geodetic)

    @classmethod
    def from_eci(cls, x_eci: ArrayLike, timestamp: float, name: str = "") -> Station:
        """Observer at the sub-point and height of an inertial position.

        Used to look at the sky from an orbiting body, e.g. to decide
        whether the Sun is above its horizon.

        Args:
            x_eci: ECI position in *km*.
            timestamp (float): Unix timestamp in seconds.
            name: Display name. Default: ``""``

        Returns:
            The observer.
        """
        lon, lat, alt = position_ecef_to_geodetic(position_eci_to_ecef(timestamp, x_eci))
        return cls(float(lat), float(lon), float(alt), name=name)

    # ---- geometry ----

    def position(self, timestamp: float) -> Array:
        """ECI position of the station in *km* at a time."""
        return position_ecef_to_eci(timestamp, self._ecef)

    def dip(self) -> float:
        """Dip of the geometric horizon at the station's altitude [rad]."""
        return horizon_dip(self.altitude)

    def enz(self, target, timestamp: float) -> Array:
        """Target position in the station's East-North-Zenith frame [km]."""
        r_ecef = position_eci_to_ecef(timestamp, target_position(target, timestamp))
        return self._rotation @ (r_ecef - self._ecef)

    def azel(
        self, target, timestamp: float, upper: bool = False
    ) -> tuple[float, float, float]:
        """Azimuth, elevation and range of a target.

        Args:
            target: ECI position in *km*, or an object with ``position(t)``.
            timestamp (float): Unix timestamp in seconds.
            upper: If ``True`` and the target has a ``diameter`` [km], report
                the elevation of its upper limb.

        Returns:
            ``(azimuth, elevation, range)`` in radians, radians and *km*.
        """
        az, el, rng = (float(v) for v in position_enz_to_azel(self.enz(target, timestamp)))
        if upper:
            diameter = getattr(target, "diameter", 0.0)
            if diameter:
                el += asin(min(1.0, diameter / 2.0 / rng))
        return az, el, rng

    def angle(self, a, b, timestamp: float) -> float:
        """Angular separation of two targets seen from the station [rad]."""
        return angle_between(
            self.position(timestamp),
            target_position(a, timestamp),
            target_position(b, timestamp),
        )

    def next_elevation(
        self,
        body,
        timestamp: float,
        angle: float = 0.0,
        upper: bool = False,
    ) -> tuple[float, bool]:
        """Next time a body crosses an elevation.

        Steps forward until the body changes side of ``angle``, then bisects
        to the second.  If no crossing happens within two days the end of
        the search is returned with the current side unchanged.

        Args:
            body: Object with ``position(t)``.
            timestamp (float): Unix timestamp to search from.
            angle: Elevation of interest [rad]. Default: ``0.0``
            upper: Use the elevation of the body's upper limb.

        Returns:
            ``(time, rising)`` where ``rising`` is ``True`` if the body is
            below ``angle`` at ``timestamp`` (so the crossing is a rise).
        """
        rising = self.azel(body, timestamp, upper)[1] < angle

        def crossed(t: float) -> bool:
            return (self.azel(body, t, upper)[1] < angle) != rising

        begin = timestamp
        while True:
            end = begin + _ELEVATION_STEP
            if crossed(end):
                break
            if end - timestamp >= _ELEVATION_LIMIT:
                return end, rising
            begin = end
        return find_first_true(begin, end, crossed), rising

    def __repr__(self) -> str:
        return (
            f"Station(name={self.name!r}, lat={self.latitude:.6f} rad, "
            f"lon={self.longitude:.6f} rad, alt={self.altitude:.4f} km)"
        )
