"""Pass event codes and the records produced by the pass detector."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

_PASS_EVENT_TAG: dict[int, str] = {
    0: "",
    1: "shdw",
    2: "lit",
    3: "day",
    4: "rise",
    5: "max",
    6: "set",
    7: "apls",
}


class PassEvent(IntEnum):
    """Kind of a pass event, and illumination class of a sample.

    ``SHADOWED``, ``LIT`` and ``DAY`` double as illumination classes and as
    the events marking a change into that class.
    """

    NONE = 0
    SHADOWED = 1
    LIT = 2
    DAY = 3
    RISE = 4
    MAX = 5
    SET = 6
    APPULSE = 7

    def as_str(self) -> str:
        """Return the short tag of the event (``'rise'``, ``'lit'``, ...)."""
        return _PASS_EVENT_TAG[self.value]

    def __str__(self) -> str:
        return _PASS_EVENT_TAG[self.value]


# Illumination class indexed by 0 (shadowed), 1 (lit) or 2 (day)
LIGHTING: tuple[PassEvent, PassEvent, PassEvent] = (
    PassEvent.SHADOWED,
    PassEvent.LIT,
    PassEvent.DAY,
)


@dataclass(frozen=True)
class Appulse:
    """Close approach of the body to a background body.

    Attributes:
        angle: Separation seen from the station [rad].
        body: The background body.
    """

    angle: float
    body: Any


@dataclass(frozen=True)
class Event:
    """One instant of a pass.

    Attributes:
        time: Unix timestamp [s].
        azimuth: Azimuth from the station [rad].
        elevation: Elevation from the station [rad].
        range: Distance from the station [km].
        illumination: ``SHADOWED``, ``LIT`` or ``DAY``.
        event: What happened, or ``NONE`` for a raw sample.
        appulse: Details of an ``APPULSE`` event.
    """

    time: float
    azimuth: float
    elevation: float
    range: float
    illumination: PassEvent
    event: PassEvent = PassEvent.NONE
    appulse: Appulse | None = None


@dataclass
class Pass:
    """One passage of a body above a station's horizon.

    Attributes:
        body: The body that passed.
        events: Events in time order, from rise to set.
        time: Time of culmination (maximum elevation) [s].
    """

    body: Any
    events: list[Event] = field(default_factory=list)
    time: float = 0.0

    def event_times(self, kind: PassEvent) -> list[float]:
        """Times of the events of one kind."""
        return [e.time for e in self.events if e.event == kind]
