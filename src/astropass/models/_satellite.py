"""
The :class:`TLE` body: an element set bound to its propagators.

A ``TLE`` owns one :class:`OrbitalElements`, the per-model initialization
cache for it, and the per-body attributes that tune pass prediction.
Propagation calls on the same body serialize on a re-entrant lock, because
the deep-space resonance integrator is path dependent.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

import jax.numpy as jnp

from astropass.config import get_dtype
from astropass.constants import DEG2RAD
from astropass.ephemerides import Sun
from astropass.errors import ModelMismatchError
from astropass.models._constants import AE, DEEP_SPACE_PERIOD, VELOCITY_SCALE, XKMPER
from astropass.models._mean_motion import orbital_period
from astropass.models._orientation import Vector
from astropass.models._sdp4 import sdp4_init, sdp4_propagate
from astropass.models._sdp8 import sdp8_init, sdp8_propagate
from astropass.models._selector import Model
from astropass.models._sgp import sgp_init, sgp_propagate
from astropass.models._sgp4 import sgp4_init, sgp4_propagate
from astropass.models._sgp8 import sgp8_init, sgp8_propagate
from astropass.models._types import MODEL_ATTRIBUTES, OrbitalElements, PositionVelocity
from astropass.passes import compute_passes
from astropass.time import ds50, dynamical_delta

logger = logging.getLogger(__name__)

_ELEMENT_FIELDS: frozenset[str] = frozenset(
    f.name for f in dataclasses.fields(OrbitalElements)
)

_READ_ONLY: frozenset[str] = frozenset({"ds50", "epoch_dynamical", "tle"})

# (init, propagate, takes debug flag)
_PROPAGATORS: dict[Model, tuple[Callable, Callable, bool]] = {
    Model.SGP: (sgp_init, sgp_propagate, False),
    Model.SGP4: (sgp4_init, sgp4_propagate, False),
    Model.SGP8: (sgp8_init, sgp8_propagate, False),
    Model.SDP4: (sdp4_init, sdp4_propagate, True),
    Model.SDP8: (sdp8_init, sdp8_propagate, True),
}


def _default_attributes() -> dict[str, Any]:
    return {
        "appulse": 10.0 * DEG2RAD,
        "backdate": True,
        "debug": False,
        "geometric": False,
        "horizon": 20.0 * DEG2RAD,
        "illum": Sun(),
        "interval": 0,
        "limb": True,
        "model": Model.MODEL,
        "twilight": -6.0 * DEG2RAD,
        "visible": True,
    }


_ATTRIBUTES: frozenset[str] = frozenset(_default_attributes())


class TLE:
    """An orbiting body described by a NORAD element set.

    Args:
        elements: Mean elements of the body.
        tle: Text of the element set the body was parsed from. Default: ``""``
        **attrs: Initial attribute values, as accepted by :meth:`set`.

    Attributes that tune pass prediction:

    - ``appulse``: largest reported angular separation from a sky body [rad].
    - ``backdate``: if ``False``, passes are not computed before the epoch.
    - ``debug``: log initialization constants and pass refinement.
    - ``geometric``: refine rise and set against the geometric horizon
      instead of ``horizon``.
    - ``horizon``: elevation a pass must reach to be reported [rad].
    - ``illum``: illuminating body, :class:`~astropass.ephemerides.Sun` by default.
    - ``interval``: sampling step [s]; when non-zero the raw samples are
      kept in each pass.
    - ``limb``: use the illuminator's upper limb when deciding if the body is lit.
    - ``model``: propagation model run by :meth:`position`.
    - ``twilight``: illuminator elevation that ends daylight at the observer [rad].
    - ``visible``: report only passes in which the body could be seen.

    Examples:
        ```python
        from astropass.models import parse_tle
        (iss,) = parse_tle(line1, line2)
        pv = iss.sgp4(iss.get("epoch") + 3600.0)
        pv.position  # km
        ```
    """

    def __init__(self, elements: OrbitalElements, *, tle: str = "", **attrs: Any) -> None:
        self._elements = elements
        self._tle = tle
        self._attrs = _default_attributes()
        self._models: dict[Model, Any] = {}
        self._period: float | None = None
        self._lock = threading.RLock()
        if attrs:
            self.set(**attrs)

    # ---- attributes ----

    @property
    def elements(self) -> OrbitalElements:
        """The current mean elements."""
        return self._elements

    @staticmethod
    def is_model_attribute(name: str) -> bool:
        """Return True if changing ``name`` invalidates the model cache."""
        return name in MODEL_ATTRIBUTES

    @staticmethod
    def is_valid_model(name: str | Model) -> bool:
        """Return True if ``name`` names a propagation model."""
        try:
            Model.from_name(name)
        except ValueError:
            return False
        return True

    def get(self, name: str) -> Any:
        """Value of an attribute.

        Args:
            name: Element field, tuning attribute, or one of ``ds50``,
                ``epoch_dynamical`` and ``tle``.

        Returns:
            The value. ``model`` is returned as its name.

        Raises:
            AttributeError: If ``name`` is not an attribute.
        """
        if name in _ELEMENT_FIELDS:
            return getattr(self._elements, name)
        if name == "ds50":
            return ds50(self._elements.epoch)
        if name == "epoch_dynamical":
            return self._elements.epoch + dynamical_delta(self._elements.epoch)
        if name == "tle":
            return self._tle
        if name == "model":
            return self._attrs["model"].as_str()
        if name in self._attrs:
            return self._attrs[name]
        raise AttributeError(f"Attribute '{name}' does not exist")

    def set(self, **attrs: Any) -> TLE:
        """Set attributes.

        Changing any element field used by the models discards every cached
        model state, along with the cached period.

        Args:
            **attrs: Attribute names and their new values.

        Returns:
            The body, for chaining.

        Raises:
            AttributeError: If an attribute is read-only or unknown.
            UnknownModelError: If ``model`` is not a model name.
        """
        with self._lock:
            for name, value in attrs.items():
                if name in _READ_ONLY:
                    raise AttributeError(f"Attribute '{name}' is read-only")
                if name in _ELEMENT_FIELDS:
                    self._elements = dataclasses.replace(self._elements, **{name: value})
                    if name in MODEL_ATTRIBUTES:
                        self._models.clear()
                        self._period = None
                elif name == "model":
                    self._attrs["model"] = Model.from_name(value)
                elif name in _ATTRIBUTES:
                    self._attrs[name] = value
                else:
                    raise AttributeError(f"Attribute '{name}' does not exist")
        return self

    def copy(self) -> TLE:
        """Clone the body with an empty model cache.

        The clone shares no mutable state with the original, so each thread
        can propagate its own copy.
        """
        clone = TLE(self._elements, tle=self._tle)
        clone._attrs = dict(self._attrs)
        return clone

    # ---- classification ----

    def period(self) -> float:
        """Orbital period in seconds, from the recovered mean motion."""
        with self._lock:
            if self._period is None:
                self._period = orbital_period(self._elements)
            return self._period

    def is_deep(self) -> bool:
        """Return True if the body needs a deep-space model (period >= 225 min)."""
        return self.period() >= DEEP_SPACE_PERIOD

    # ---- propagation ----

    def _state(self, model: Model, init: Callable) -> Any:
        state = self._models.get(model)
        if state is None:
            state = init(self._elements)
            self._models[model] = state
            if self._attrs["debug"]:
                logger.debug("%s initialized for %s: %r", model, self._elements.id, state)
        return state

    def _propagate(self, model: Model, timestamp: float) -> PositionVelocity:
        with self._lock:
            deep = self.is_deep()
            if model.is_near_earth() and deep:
                raise ModelMismatchError(
                    f"{model.as_str().upper()} is not valid for deep-space body "
                    f"{self._elements.id}; use a deep-space model"
                )
            if model.is_deep_space() and not deep:
                raise ModelMismatchError(
                    f"{model.as_str().upper()} is not valid for near-earth body "
                    f"{self._elements.id}; use a near-earth model"
                )
            init, propagate, takes_debug = _PROPAGATORS[model]
            state = self._state(model, init)
            tsince = (timestamp - self._elements.epoch) / 60.0
            if takes_debug:
                pos, vel = propagate(self._elements, state, tsince, debug=self._attrs["debug"])
            else:
                pos, vel = propagate(self._elements, state, tsince)
        return _scale(timestamp, pos, vel)

    def sgp(self, timestamp: float) -> PositionVelocity:
        """Propagate with SGP to a Unix timestamp."""
        return self._propagate(Model.SGP, timestamp)

    def sgp4(self, timestamp: float) -> PositionVelocity:
        """Propagate with SGP4 to a Unix timestamp.

        Raises:
            ModelMismatchError: If the body is a deep-space body.
            EccentricityError: If drag drives the eccentricity out of range.
        """
        return self._propagate(Model.SGP4, timestamp)

    def sgp8(self, timestamp: float) -> PositionVelocity:
        """Propagate with SGP8 to a Unix timestamp.

        Raises:
            ModelMismatchError: If the body is a deep-space body.
            EccentricityError: If drag drives the eccentricity out of range.
            DecayError: If the drag fit has run past the decay of the body.
        """
        return self._propagate(Model.SGP8, timestamp)

    def sdp4(self, timestamp: float) -> PositionVelocity:
        """Propagate with SDP4 to a Unix timestamp.

        Raises:
            ModelMismatchError: If the body is a near-earth body.
        """
        return self._propagate(Model.SDP4, timestamp)

    def sdp8(self, timestamp: float) -> PositionVelocity:
        """Propagate with SDP8 to a Unix timestamp."""
        return self._propagate(Model.SDP8, timestamp)

    def model(self, timestamp: float) -> PositionVelocity:
        """Propagate with SGP4 or SDP4, whichever suits the body."""
        return self._propagate(Model.MODEL.resolve(self.is_deep()), timestamp)

    def model4(self, timestamp: float) -> PositionVelocity:
        """Propagate with SGP4 or SDP4, whichever suits the body."""
        return self._propagate(Model.MODEL4.resolve(self.is_deep()), timestamp)

    def model8(self, timestamp: float) -> PositionVelocity:
        """Propagate with SGP8 or SDP8, whichever suits the body."""
        return self._propagate(Model.MODEL8.resolve(self.is_deep()), timestamp)

    def null(self, timestamp: float) -> None:
        """Do not propagate."""
        return None

    def position(self, timestamp: float) -> PositionVelocity | None:
        """Propagate with the configured ``model``.

        Returns:
            The state, or ``None`` when the model is ``null``.
        """
        concrete = self._attrs["model"].resolve(self.is_deep())
        if concrete is None:
            return None
        return self._propagate(concrete, timestamp)

    # ---- passes ----

    def passes(
        self,
        station,
        start: float | None = None,
        end: float | None = None,
        sky: Iterable = (),
        deadline: float | None = None,
    ) -> list:
        """Passes of the body over a station.

        See :func:`astropass.passes.compute_passes`.
        """
        return compute_passes(self, station, start=start, end=end, sky=sky, deadline=deadline)

    def __repr__(self) -> str:
        label = f" {self._elements.name}" if self._elements.name else ""
        return f"TLE({self._elements.id}{label}, model={self._attrs['model'].as_str()})"


def _scale(timestamp: float, pos: Vector, vel: Vector) -> PositionVelocity:
    dtype = get_dtype()
    return PositionVelocity(
        time=timestamp,
        position=jnp.array([c * XKMPER / AE for c in pos], dtype=dtype),
        velocity=jnp.array([c * VELOCITY_SCALE for c in vel], dtype=dtype),
    )
