"""Propagation model names and the near-earth/deep-space dispatch."""

from __future__ import annotations

from enum import Enum

from astropass.errors import UnknownModelError


class Model(Enum):
    """Propagation model of a body.

    The five concrete models are SGP, SGP4, SGP8 (near-earth) and SDP4,
    SDP8 (deep-space).  ``MODEL`` and ``MODEL4`` select SGP4 or SDP4 by the
    body's period, ``MODEL8`` selects SGP8 or SDP8, and ``NULL`` does not
    propagate at all.
    """

    SGP = "sgp"
    SGP4 = "sgp4"
    SGP8 = "sgp8"
    SDP4 = "sdp4"
    SDP8 = "sdp8"
    MODEL = "model"
    MODEL4 = "model4"
    MODEL8 = "model8"
    NULL = "null"

    @classmethod
    def from_name(cls, name: str | Model) -> Model:
        """Look up a model by name.

        Args:
            name: Model name (case-insensitive) or a :class:`Model`.

        Returns:
            The model.

        Raises:
            UnknownModelError: If ``name`` is not a model name.
        """
        if isinstance(name, Model):
            return name
        try:
            return _MODEL_BY_NAME[str(name).lower()]
        except KeyError:
            raise UnknownModelError(f"Illegal model name '{name}'") from None

    def as_str(self) -> str:
        """Return the model name."""
        return self.value

    def is_deep_space(self) -> bool:
        """Return True for the models valid only for deep-space bodies."""
        return self in (Model.SDP4, Model.SDP8)

    def is_near_earth(self) -> bool:
        """Return True for the models valid only for near-earth bodies."""
        return self in (Model.SGP, Model.SGP4, Model.SGP8)

    def resolve(self, deep: bool) -> Model | None:
        """Concrete model to run for a body.

        Args:
            deep: Whether the body is a deep-space body.

        Returns:
            The concrete model, or ``None`` for ``NULL``.
        """
        if self in (Model.MODEL, Model.MODEL4):
            return Model.SDP4 if deep else Model.SGP4
        if self is Model.MODEL8:
            return Model.SDP8 if deep else Model.SGP8
        if self is Model.NULL:
            return None
        return self

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Model.{_MODEL_DISPLAY[self.value]}"


_MODEL_BY_NAME: dict[str, Model] = {m.value: m for m in Model}

_MODEL_DISPLAY: dict[str, str] = {
    "sgp": "SGP",
    "sgp4": "SGP4",
    "sgp8": "SGP8",
    "sdp4": "SDP4",
    "sdp8": "SDP8",
    "model": "MODEL",
    "model4": "MODEL4",
    "model8": "MODEL8",
    "null": "NULL",
}
