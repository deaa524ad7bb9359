"""Tests for the low-precision solar ephemeris."""

from math import asin, atan2, degrees

import jax.numpy as jnp
import pytest

from astropass.constants import AU, SUN_DIAMETER
from astropass.ephemerides import Sun, obliquity, sun_position
from astropass.time import caldate_to_timestamp, jcent2000


class TestSunPosition:
    def test_meeus_example_25a(self) -> None:
        # Astronomical Algorithms, example 25.a: 1992 October 13.0
        r = sun_position(caldate_to_timestamp(1992, 10, 13))
        x, y, z = (float(c) for c in r)
        distance = float(jnp.linalg.norm(r))
        ra = degrees(atan2(y, x)) % 360.0
        dec = degrees(asin(z / distance))
        assert distance / AU == pytest.approx(0.99766, abs=1e-4)
        assert ra == pytest.approx(198.38083, abs=0.01)
        assert dec == pytest.approx(-7.78507, abs=0.01)

    def test_equinox(self) -> None:
        r = sun_position(caldate_to_timestamp(2024, 3, 20, 3, 6))
        dec = degrees(asin(float(r[2]) / float(jnp.linalg.norm(r))))
        assert dec == pytest.approx(0.0, abs=0.02)

    def test_obliquity_j2000(self) -> None:
        assert degrees(obliquity(0.0)) == pytest.approx(23.4392911, abs=0.005)
        assert degrees(obliquity(jcent2000(caldate_to_timestamp(1992, 10, 13)))) == (
            pytest.approx(23.44023, abs=0.005)
        )


class TestSun:
    def test_attributes(self) -> None:
        sun = Sun()
        assert sun.name == "Sun"
        assert sun.diameter == SUN_DIAMETER
        assert sun.period == pytest.approx(365.25636 * 86400.0, rel=1e-6)
        assert repr(sun) == "Sun()"

    def test_position(self) -> None:
        t = caldate_to_timestamp(2001, 7, 4)
        assert jnp.allclose(Sun().position(t), sun_position(t))
        assert float(jnp.linalg.norm(sun_position(t))) / AU == pytest.approx(1.0167, abs=2e-4)
