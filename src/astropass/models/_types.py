"""
Data types for the SGP family of propagators.
"""

from __future__ import annotations

from dataclasses import dataclass

import jax.numpy as jnp
from jax import Array


@dataclass(frozen=True)
class OrbitalElements:
    """Mean orbital elements of one body, as published in an element set.

    This is a plain Python dataclass (not a JAX pytree). Field names match
    the body attribute names accepted by :meth:`TLE.get` and
    :meth:`TLE.set`. All values are in the units the propagators consume.

    Attributes:
        id: Catalog number as a string (e.g. ``'25544'``).
        name: Common name, from the name line of a three-line set.
        classification: Classification character (``'U'``, ``'C'``, or ``'S'``).
        international: International launch designator (e.g. ``'98067A'``).
        epoch: Epoch of the elements as a Unix timestamp [s].
        firstderivative: First time derivative of mean motion, divided by 2 [rad/min^2].
        secondderivative: Second time derivative of mean motion, divided by 6 [rad/min^3].
        bstardrag: B* drag term [1/er].
        ephemeristype: Ephemeris type (typically 0).
        elementnumber: Element set number.
        inclination: Inclination [rad].
        rightascension: Right ascension of the ascending node [rad].
        eccentricity: Eccentricity [dimensionless].
        argumentofperigee: Argument of perigee [rad].
        meananomaly: Mean anomaly [rad].
        meanmotion: Mean motion [rad/min].
        revolutionsatepoch: Revolution number at epoch.
    """

    id: str
    epoch: float
    firstderivative: float
    secondderivative: float
    bstardrag: float
    inclination: float
    rightascension: float
    eccentricity: float
    argumentofperigee: float
    meananomaly: float
    meanmotion: float
    name: str = ""
    classification: str = "U"
    international: str = ""
    ephemeristype: int = 0
    elementnumber: int = 0
    revolutionsatepoch: int = 0


MODEL_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "epoch",
        "firstderivative",
        "secondderivative",
        "bstardrag",
        "inclination",
        "rightascension",
        "eccentricity",
        "argumentofperigee",
        "meananomaly",
        "meanmotion",
    }
)
"""Element fields whose change invalidates every cached model state."""


@dataclass(frozen=True)
class PositionVelocity:
    """Propagated state of a body in the inertial (TEME) frame.

    Attributes:
        time: Time of the state as a Unix timestamp [s].
        position: Position ``[x, y, z]`` [km].
        velocity: Velocity ``[vx, vy, vz]`` [km/s].
    """

    time: float
    position: Array
    velocity: Array

    @property
    def state(self) -> Array:
        """6-element state ``[x, y, z, vx, vy, vz]`` in km and km/s."""
        return jnp.concatenate([self.position, self.velocity])
