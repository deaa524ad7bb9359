"""
Exception hierarchy for astropass.

Every error raised on purpose by the propagators and the pass detector
derives from :class:`OrbitalError`, so callers can catch the family in one
place. Each concrete error also derives from the closest builtin
(``ValueError`` or ``ArithmeticError``) so that generic handlers keep
working. Element-set parse failures are plain ``ValueError``.
"""


class OrbitalError(Exception):
    """Base class for astropass errors."""


class ModelMismatchError(OrbitalError, ValueError):
    """A near-earth model was asked to propagate a deep-space body, or vice versa."""


class UnknownModelError(OrbitalError, ValueError):
    """A model name is not one of the known propagation models."""


class EccentricityError(OrbitalError, ArithmeticError):
    """The effective eccentricity left the interval [-1, 1] during propagation.

    Attributes:
        eccentricity: The offending eccentricity value.
        tsince: Minutes since epoch at which it was reached.
    """

    def __init__(self, eccentricity: float, tsince: float) -> None:
        super().__init__(
            f"Effective eccentricity {eccentricity} out of range at "
            f"{tsince} minutes since epoch"
        )
        self.eccentricity = eccentricity
        self.tsince = tsince


class MalformedWindowError(OrbitalError, ValueError):
    """A pass-prediction window ends before it starts."""


class DecayError(OrbitalError, ArithmeticError):
    """The drag model has run past the point where the body would have decayed.

    SGP8 and SDP8 fit the decay of the mean motion with a power law in
    ``1 - gamma * tsince``; the fit has no meaning once that base reaches
    zero.

    Attributes:
        tsince: Minutes since epoch of the failed propagation.
    """

    def __init__(self, tsince: float) -> None:
        super().__init__(f"Drag fit expired at {tsince} minutes since epoch")
        self.tsince = tsince


class EmptySetError(OrbitalError, LookupError):
    """A :class:`~astropass.models.TLESet` with no members was asked for one."""
