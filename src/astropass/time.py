"""
Time scales used by the propagators and the pass detector.

All absolute times in astropass are Unix timestamps (seconds since
1970-01-01T00:00:00 UT, leap seconds ignored).  This module converts them
to the day counts the NORAD models and the Meeus algorithms are written
against, and provides the Greenwich sidereal angle that links the
inertial and Earth-fixed frames.
"""

from __future__ import annotations

from calendar import timegm
from datetime import datetime, timedelta, timezone
from math import floor

from astropass.constants import (
    DAYS_PER_CENTURY,
    DS50_Y2000,
    J2000_TIMESTAMP,
    SECONDS_PER_DAY,
    Y2000_TIMESTAMP,
)
from astropass.utils import mod2pi

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ds50(timestamp: float) -> float:
    """Days since 1950 January 0.0 UT, the NORAD epoch day count.

    Args:
        timestamp (float): Unix timestamp in seconds.

    Returns:
        Days (and fraction) since 1950 January 0.0 UT.
    """
    return (timestamp - Y2000_TIMESTAMP) / SECONDS_PER_DAY + DS50_Y2000


def jday2000(timestamp: float) -> float:
    """Days since the J2000.0 epoch (2000-01-01T12:00:00).

    Args:
        timestamp (float): Unix timestamp in seconds.

    Returns:
        Days (and fraction) since J2000.0.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, p. 62.
    """
    return (timestamp - J2000_TIMESTAMP) / SECONDS_PER_DAY


def jcent2000(timestamp: float) -> float:
    """Julian centuries since the J2000.0 epoch.

    Args:
        timestamp (float): Unix timestamp in seconds.

    Returns:
        Julian centuries since J2000.0.
    """
    return jday2000(timestamp) / DAYS_PER_CENTURY


def thetag(timestamp: float) -> float:
    """Greenwich hour angle of the mean equinox.

    Args:
        timestamp (float): Unix timestamp in seconds.

    Returns:
        Greenwich mean sidereal angle in radians.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, eq. 12.4.
    """
    T = jcent2000(timestamp)
    return (
        mod2pi(4.89496121273579 + 6.30038809898496 * jday2000(timestamp))
        + (6.77070812713916e-06 - 4.5087296615715e-10 * T) * T * T
    )


def dynamical_delta(timestamp: float) -> float:
    """Difference between dynamical (TT) and universal time.

    Uses Meeus' polynomial (10.2) with his correction term, evaluated for
    the calendar year containing ``timestamp``.

    Args:
        timestamp (float): Unix timestamp (universal time) in seconds.

    Returns:
        TT - UT in seconds.
    """
    year = timestamp_to_caldate(timestamp)[0]
    t = (year - 2000) / 100
    return (25.3 * t + 102) * t + 102 + 0.37 * (year - 2100)


def caldate_to_timestamp(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> float:
    """Convert a UT calendar date to a Unix timestamp.

    Args:
        year (int): Year of the calendar date.
        month (int): Month of the calendar date.
        day (int): Day of the calendar date.
        hour (int): Hour of the calendar date. Default: ``0``
        minute (int): Minute of the calendar date. Default: ``0``
        second (float): Second of the calendar date. Default: ``0.0``

    Returns:
        Unix timestamp in seconds.
    """
    whole = floor(second)
    return timegm((year, month, day, hour, minute, whole, 0, 0, 0)) + (second - whole)


def timestamp_to_caldate(timestamp: float) -> tuple[int, int, int, int, int, float]:
    """Convert a Unix timestamp to a UT calendar date.

    Args:
        timestamp (float): Unix timestamp in seconds.

    Returns:
        ``(year, month, day, hour, minute, second)``.
    """
    whole = floor(timestamp)
    dt = _UNIX_EPOCH + timedelta(seconds=whole)
    return (dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second + (timestamp - whole))


def epoch_from_tle(year: int, day: float) -> float:
    """Convert a TLE epoch field to a Unix timestamp.

    Two-digit years below 57 are taken to be in the 2000s, the rest in the
    1900s.

    Args:
        year (int): Two-digit (or four-digit) epoch year.
        day (float): Day of year with fraction, starting at 1.0.

    Returns:
        Unix timestamp of the epoch in seconds.
    """
    if year < 57:
        year += 2000
    elif year < 100:
        year += 1900
    return timegm((year, 1, 1, 0, 0, 0, 0, 0, 0)) + (day - 1) * SECONDS_PER_DAY
