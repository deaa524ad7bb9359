"""
Pass prediction: when a body is above a station's horizon, and whether it
can be seen.

The detector samples the body's elevation across a time window, coarsely
while the body is far below the horizon and at the base interval near it.
Each run of samples above the horizon that includes a visible sample
becomes a :class:`Pass`.  Rise, set, culmination, illumination changes and
appulses are then refined by bisection to the second (appulses to a tenth
of a second).

A sample is ``DAY`` when the Sun is above the ``twilight`` elevation at the
station.  Otherwise it is ``LIT`` when the illuminating body is above the
body's own horizon, and ``SHADOWED`` when it is not.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from operator import attrgetter
from typing import TYPE_CHECKING

from astropass.constants import SECONDS_PER_DAY
from astropass.coordinates import Station, target_position
from astropass.ephemerides import Sun
from astropass.errors import MalformedWindowError
from astropass.passes._types import LIGHTING, Appulse, Event, Pass, PassEvent
from astropass.utils import find_first_true

if TYPE_CHECKING:
    from astropass.models import TLE, TLESet

logger = logging.getLogger(__name__)

# Below this elevation [rad] the search takes large steps
_FAR_BELOW_HORIZON = -0.4

# Default sampling step [s], and the coarse step as a multiple of it
_DEFAULT_STEP = 60
_BIG_STEP_FACTOR = 5

# Resolution [s] of the appulse search
_APPULSE_RESOLUTION = 0.1


def _collapse(events: list[Event]) -> list[Event]:
    """Sort events by time and drop each one sharing the previous one's time.

    Appulses are always kept.
    """
    kept: list[Event] = []
    previous = None
    for event in sorted(events, key=attrgetter("time")):
        if (
            previous is None
            or event.time != previous.time
            or event.event == PassEvent.APPULSE
        ):
            kept.append(event)
        previous = event
    return kept


class _PassFinder:
    """Working state of one pass search, configured from the body's attributes."""

    def __init__(self, body: TLE, station: Station, sky: Iterable) -> None:
        self.body = body
        self.station = station
        self.sky = list(sky)
        self.sun = Sun()
        self.illum = body.get("illum")
        self.horizon = body.get("horizon")
        self.effective_horizon = 0.0 if body.get("geometric") else self.horizon
        self.twilight = body.get("twilight")
        self.limb = body.get("limb")
        self.want_visible = body.get("visible")
        self.appulse = body.get("appulse")
        self.verbose = body.get("interval")
        self.debug = body.get("debug")
        self.littlestep = self.verbose or _DEFAULT_STEP
        self.bigstep = _BIG_STEP_FACTOR * self.littlestep

    # ---- geometry ----

    def elevation(self, t: float) -> float:
        return self.station.azel(self.body, t)[1]

    def separation(self, other, t: float) -> float:
        return self.station.angle(other, self.body, t)

    def twilight_crossing(self, t: float) -> tuple[float, bool]:
        return self.station.next_elevation(self.sun, t, self.twilight)

    def lighting(self, t: float, suntim: float, rise: bool) -> PassEvent:
        """Illumination class of the body at ``t``.

        ``(suntim, rise)`` is the next twilight crossing at or after ``t``.
        """
        litup = 2 - int(rise) if t < suntim else 1 + int(rise)
        if litup == 1:
            onboard = Station.from_eci(target_position(self.body, t), t)
            if onboard.azel(self.illum, t, upper=self.limb)[1] < onboard.dip():
                litup = 0
        return LIGHTING[litup]

    # ---- search ----

    def run(self, start: float, end: float, deadline: float | None) -> list[Pass]:
        passes: list[Pass] = []
        info: list[Event] = []
        visible = False
        suntim, rise = self.twilight_crossing(start)
        step = self.littlestep
        t = start
        while t <= end:
            if deadline is not None and time.time() >= deadline:
                logger.info(
                    "Pass search for %s stopped at deadline with %d passes",
                    self.body.get("id"),
                    len(passes),
                )
                break

            if t >= suntim:
                suntim, rise = self.twilight_crossing(suntim)

            # Nothing to see while the Sun is up
            if self.want_visible and not info and not rise and t < suntim:
                t += step
                continue

            azimuth, elevation, rng = self.station.azel(self.body, t)
            step = self.bigstep if elevation < _FAR_BELOW_HORIZON else self.littlestep

            if elevation < self.effective_horizon:
                if visible and info:
                    passes.append(self.refine(info, step))
                info = []
                visible = False
                t += step
                continue

            illumination = self.lighting(t, suntim, rise)
            visible = visible or (
                (illumination is PassEvent.LIT or not self.want_visible)
                and elevation > self.horizon
            )
            info.append(Event(t, azimuth, elevation, rng, illumination))
            t += step
        return passes

    # ---- refinement ----

    def _illumination_change(self, before: Event, after: Event) -> float:
        suntim, rise = self.twilight_crossing(before.time)
        return find_first_true(
            before.time,
            after.time,
            lambda t: self.lighting(t, suntim, rise) == after.illumination,
        )

    def _closest_approach(self, other, begin: float, end: float) -> float:
        return find_first_true(
            begin,
            end,
            lambda t: self.separation(other, t)
            < self.separation(other, t + _APPULSE_RESOLUTION),
            _APPULSE_RESOLUTION,
        )

    def refine(self, info: list[Event], step: float) -> Pass:
        """Turn the samples of one pass into its events."""
        horizon = self.effective_horizon
        first = info[0].time
        last = info[-1].time

        rise_time = find_first_true(first - step, first, lambda t: self.elevation(t) >= horizon)
        set_time = find_first_true(last, last + step, lambda t: self.elevation(t) < horizon)
        max_time = find_first_true(
            first, last, lambda t: self.elevation(t) > self.elevation(t + 1)
        )
        found: list[tuple[float, PassEvent, Appulse | None]] = [
            (rise_time, PassEvent.RISE, None),
            (set_time, PassEvent.SET, None),
            (max_time, PassEvent.MAX, None),
        ]

        for before, after in zip(info, info[1:]):
            if after.illumination != before.illumination:
                found.append(
                    (self._illumination_change(before, after), after.illumination, None)
                )

        for other in self.sky:
            when = self._closest_approach(other, rise_time, set_time)
            angle = self.separation(other, when)
            if angle <= self.appulse:
                found.append((when, PassEvent.APPULSE, Appulse(angle=angle, body=other)))

        if self.debug:
            for when, kind, _ in found:
                logger.debug("%s %s at %.1f", self.body.get("id"), kind.name, when)

        events = list(info) if self.verbose else []
        suntim = None
        rise = False
        for when, kind, appulse in sorted(found, key=lambda item: item[0]):
            if suntim is None or when >= suntim:
                suntim, rise = self.twilight_crossing(when)
            azimuth, elevation, rng = self.station.azel(self.body, when)
            events.append(
                Event(
                    time=when,
                    azimuth=azimuth,
                    elevation=elevation,
                    range=rng,
                    illumination=self.lighting(when, suntim, rise),
                    event=kind,
                    appulse=appulse,
                )
            )

        return Pass(body=self.body, events=_collapse(events), time=max_time)


def compute_passes(
    body: TLE | TLESet,
    station: Station,
    start: float | None = None,
    end: float | None = None,
    sky: Iterable = (),
    deadline: float | None = None,
) -> list[Pass]:
    """Passes of a body over a station in a time window.

    The search is configured by the body's attributes (``horizon``,
    ``twilight``, ``visible``, ``limb``, ``geometric``, ``appulse``,
    ``interval``, ``illum``, ``backdate``; see :class:`~astropass.models.TLE`).

    Args:
        body: The body to predict, propagated with its configured model.
            A :class:`~astropass.models.TLESet` propagates whichever member
            is in force at each sample time.
        station: The observer.
        start: Start of the window as a Unix timestamp. Default: now.
        end: End of the window. Default: seven days after ``start``.
        sky: Background bodies (anything with ``position(t)``) to report
            appulses with.
        deadline: Wall-clock Unix time after which sampling stops.  Passes
            completed by then are returned unchanged.

    Returns:
        Passes in time order.  Empty if the body never rises, is never
        visible, or the window collapses because ``backdate`` is off.

    Raises:
        MalformedWindowError: If ``end`` is before ``start``.
        EccentricityError: If propagation fails during the search.
        DecayError: If the SGP8 drag fit expires during the search.

    Examples:
        ```python
        from astropass.coordinates import Station
        from astropass.passes import compute_passes
        sta = Station(38.898748, -77.037684, 0.0167, use_degrees=True)
        for p in compute_passes(iss, sta, start, start + 86400.0):
            print(p.time, [str(e.event) for e in p.events])
        ```
    """
    if start is None:
        start = time.time()
    if end is None:
        end = start + 7.0 * SECONDS_PER_DAY
    if end < start:
        raise MalformedWindowError(
            f"End time {end} must be after start time {start}"
        )

    if not body.get("backdate"):
        # A set of element sets answers with the member in force at start
        select = getattr(body, "select", None)
        real = select(start) if select is not None else body
        start = max(start, real.get("epoch"))
        if start > end:
            return []

    return _PassFinder(body, station, sky).run(start, end, deadline)
