"""
Several element sets of one body, used together.

A catalogue often holds more than one element set for a body, each fitted
at a different epoch.  :class:`TLESet` keeps them ordered by epoch and
propagates with whichever one was current at the requested time: the latest
member whose epoch is not after that time, or the earliest member when all
of them are.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from typing import Any

from astropass.errors import EmptySetError
from astropass.models._satellite import TLE
from astropass.models._types import PositionVelocity
from astropass.passes import compute_passes

logger = logging.getLogger(__name__)


class TLESet:
    """Element sets of one body, selected by time.

    Propagation calls (:meth:`position`, :meth:`sgp4`, :meth:`model`, ...)
    first :meth:`select` the member for their time, then run on it.  Other
    queries go to the currently selected member.

    Args:
        *members: Initial members, as accepted by :meth:`add`.

    Examples:
        ```python
        from astropass.models import TLESet, parse_tle
        (iss,) = TLESet.aggregate(parse_tle(catalogue))
        iss.position(t)  # propagated with the member in force at t
        ```
    """

    def __init__(self, *members: TLE | TLESet) -> None:
        self._members: list[TLE] = []
        self._current: TLE | None = None
        self._lock = threading.RLock()
        if members:
            self.add(*members)

    @classmethod
    def aggregate(cls, bodies: Iterable[TLE], singleton: bool = False) -> list[TLE | TLESet]:
        """Group bodies by catalog number.

        Args:
            bodies: Parsed element sets, in any order.
            singleton: Wrap a lone element set in a set too. Default: ``False``

        Returns:
            One entry per catalog number, ordered by catalog number.  A number
            with a single element set gives that ``TLE`` itself unless
            ``singleton`` is set.
        """
        groups: dict[str, list[TLE]] = {}
        for body in bodies:
            groups.setdefault(body.get("id"), []).append(body)
        return [
            cls(*groups[key]) if singleton or len(groups[key]) > 1 else groups[key][0]
            for key in sorted(groups)
        ]

    # ---- membership ----

    def add(self, *members: TLE | TLESet) -> TLESet:
        """Add element sets.

        Sets are flattened into their members.  The first member added to an
        empty set becomes the selected one.  A member whose epoch is already
        present is ignored.

        Returns:
            The set, for chaining.

        Raises:
            TypeError: If a member is not a :class:`TLE`.
            ValueError: If a member's catalog number differs from the set's.
        """
        with self._lock:
            epochs = {member.get("epoch") for member in self._members}
            for member in _flatten(members):
                if not isinstance(member, TLE):
                    raise TypeError(
                        f"Members of a TLESet must be TLE, not {type(member).__name__}"
                    )
                if self._members and member.get("id") != self._members[0].get("id"):
                    raise ValueError(
                        f"Catalog number mismatch: cannot add {member.get('id')} "
                        f"to the set of {self._members[0].get('id')}"
                    )
                if self._current is None:
                    self._current = member
                epoch = member.get("epoch")
                if epoch in epochs:
                    continue
                epochs.add(epoch)
                self._members.append(member)
            self._members.sort(key=lambda member: member.get("epoch"))
        return self

    def members(self) -> list[TLE]:
        """Members in ascending order of epoch."""
        return list(self._members)

    def clear(self) -> None:
        """Remove every member."""
        with self._lock:
            self._members = []
            self._current = None

    def select(self, timestamp: float | None = None) -> TLE:
        """Select the member in force at a time.

        Args:
            timestamp: Unix timestamp.  When omitted the selection is
                unchanged.

        Returns:
            The selected member.

        Raises:
            EmptySetError: If the set has no members.
        """
        with self._lock:
            if not self._members:
                raise EmptySetError("Cannot select a member of an empty TLESet")
            if timestamp is not None:
                chosen = self._members[0]
                for member in self._members[1:]:
                    if member.get("epoch") > timestamp:
                        break
                    chosen = member
                self._current = chosen
            return self._current

    # ---- attributes ----

    def _selected(self) -> TLE:
        if self._current is None:
            raise EmptySetError("TLESet has no members")
        return self._current

    def get(self, name: str) -> Any:
        """Attribute of the selected member.

        Raises:
            EmptySetError: If the set has no members.
            AttributeError: If ``name`` is not an attribute.
        """
        return self._selected().get(name)

    def set(self, **attrs: Any) -> TLESet:
        """Set attributes.

        Model attributes (the element fields the propagators use) go to the
        selected member only.  Everything else goes to every member.  On an
        empty set this does nothing.

        Returns:
            The set, for chaining.
        """
        if self._current is None:
            return self
        for name, value in attrs.items():
            if TLE.is_model_attribute(name):
                self.set_selected(**{name: value})
            else:
                self.set_all(**{name: value})
        return self

    def set_all(self, **attrs: Any) -> TLESet:
        """Set attributes on every member."""
        for member in self._members:
            member.set(**attrs)
        return self

    def set_selected(self, **attrs: Any) -> TLESet:
        """Set attributes on the selected member.

        Raises:
            EmptySetError: If the set has no members.
        """
        self._selected().set(**attrs)
        return self

    def is_model_attribute(self, name: str) -> bool:
        return TLE.is_model_attribute(name)

    def is_valid_model(self, name: str) -> bool:
        return TLE.is_valid_model(name)

    def period(self) -> float:
        """Orbital period of the selected member, in seconds."""
        return self._selected().period()

    def is_deep(self) -> bool:
        """Return True if the selected member needs a deep-space model."""
        return self._selected().is_deep()

    def copy(self) -> TLESet:
        """Clone the set and each of its members."""
        with self._lock:
            clone = TLESet()
            clone._members = [member.copy() for member in self._members]
            if self._current is not None:
                clone._current = clone._members[self._members.index(self._current)]
            return clone

    # ---- propagation ----

    def _run(self, method: str, timestamp: float) -> PositionVelocity | None:
        with self._lock:
            member = self.select(timestamp)
            if member.get("debug"):
                logger.debug(
                    "%s at %.1f uses the element set of epoch %.1f",
                    member.get("id"),
                    timestamp,
                    member.get("epoch"),
                )
            return getattr(member, method)(timestamp)

    def sgp(self, timestamp: float) -> PositionVelocity:
        return self._run("sgp", timestamp)

    def sgp4(self, timestamp: float) -> PositionVelocity:
        return self._run("sgp4", timestamp)

    def sgp8(self, timestamp: float) -> PositionVelocity:
        return self._run("sgp8", timestamp)

    def sdp4(self, timestamp: float) -> PositionVelocity:
        return self._run("sdp4", timestamp)

    def sdp8(self, timestamp: float) -> PositionVelocity:
        return self._run("sdp8", timestamp)

    def model(self, timestamp: float) -> PositionVelocity:
        return self._run("model", timestamp)

    def model4(self, timestamp: float) -> PositionVelocity:
        return self._run("model4", timestamp)

    def model8(self, timestamp: float) -> PositionVelocity:
        return self._run("model8", timestamp)

    def null(self, timestamp: float) -> None:
        return None

    def position(self, timestamp: float) -> PositionVelocity | None:
        """Propagate the member in force at ``timestamp`` with its ``model``."""
        return self._run("position", timestamp)

    # ---- passes ----

    def passes(
        self,
        station,
        start: float | None = None,
        end: float | None = None,
        sky: Iterable = (),
        deadline: float | None = None,
    ) -> list:
        """Passes of the body over a station, switching members as time goes on.

        See :func:`astropass.passes.compute_passes`.
        """
        return compute_passes(self, station, start=start, end=end, sky=sky, deadline=deadline)

    # ---- container protocol ----

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[TLE]:
        return iter(self.members())

    def __repr__(self) -> str:
        if not self._members:
            return "TLESet()"
        epochs = ", ".join(f"{member.get('epoch'):.0f}" for member in self._members)
        return f"TLESet({self._members[0].get('id')}, epochs=[{epochs}])"


def _flatten(members: Iterable[TLE | TLESet]) -> Iterator[TLE]:
    for member in members:
        if isinstance(member, TLESet):
            yield from member.members()
        else:
            yield member
