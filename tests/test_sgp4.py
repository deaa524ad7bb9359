"""Tests for the SGP4 propagator.

Reference vectors are the SGP4 test case of Spacetrack Report #3 (element
set 88888).  The report's values come from a single-precision program, so
positions are compared to 1e-5 relative and velocities to 1e-4 km/s.
"""

import jax.numpy as jnp
import pytest
from sgp4.api import WGS72OLD as SGP4_WGS72OLD
from sgp4.api import Satrec

from astropass.errors import EccentricityError, ModelMismatchError
from astropass.models import (
    SGP4State,
    parse_tle,
    sgp4_init,
    sgp4_propagate,
)
from astropass.models._constants import VELOCITY_SCALE, XKMPER

LINE1 = "1 88888U          80275.98708465  .00073094  13844-3  66816-4 0    8"
LINE2 = "2 88888  72.8435 115.9689 0086731  52.6988 110.5714 16.05824518  105"

# Deep-space test case of the same report
DEEP_LINE1 = "1 11801U          80230.29629788  .01431103  00000-0  14311-1       8"
DEEP_LINE2 = "2 11801  46.7916 230.4354 7318036  47.4722  10.4117  2.28537848     6"

# ISS, for the cross-check against python-sgp4
ISS_LINE1 = "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927"
ISS_LINE2 = "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537"

REFERENCE = [
    (0.0, [2328.97048951, -5995.22076416, 1719.97067261], [2.91207230, -0.98341546, -7.09081703]),
    (360.0, [2456.10705566, -6071.93853760, 1222.89727783], [2.67938992, -0.44829041, -7.22879231]),
    (720.0, [2567.56195068, -6112.50384522, 713.96397400], [2.44024599, 0.09810869, -7.31995916]),
    (1080.0, [2663.09078980, -6115.48229980, 196.39640427], [2.19611958, 0.65241995, -7.35282016]),
    (1440.0, [2742.55133057, -6079.67144775, -326.38095856], [1.94850229, 1.21106251, -7.34525177]),
]


def _reference(line1: str, line2: str, tsince: float) -> tuple:
    """Position and velocity from python-sgp4 with the report's constants."""
    sat = Satrec.twoline2rv(line1, line2, SGP4_WGS72OLD)
    e, r, v = sat.sgp4_tsince(tsince)
    return e, r, v


class TestSGP4Reference:
    """Spacetrack Report #3 test case."""

    @pytest.mark.parametrize("tsince, position, velocity", REFERENCE)
    def test_reference_vectors(self, tsince, position, velocity) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        pv = body.sgp4(body.get("epoch") + tsince * 60.0)

        assert jnp.allclose(pv.position, jnp.array(position), rtol=1e-5, atol=1e-2), (
            f"Position mismatch at {tsince} min: {pv.position} vs {position}"
        )
        assert jnp.allclose(pv.velocity, jnp.array(velocity), atol=1e-4), (
            f"Velocity mismatch at {tsince} min: {pv.velocity} vs {velocity}"
        )

    def test_model_dispatches_to_sgp4(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        t = body.get("epoch") + 720.0 * 60.0
        assert jnp.array_equal(body.model(t).position, body.sgp4(t).position)

    def test_state_time_tag(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        t = body.get("epoch") + 100.0
        assert body.sgp4(t).time == t


class TestSGP4Functions:
    """The propagator as plain functions."""

    def test_init_returns_state(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        state = sgp4_init(body.elements)
        assert isinstance(state, SGP4State)
        # Perigee of about 201 km is below the 220 km limit
        assert state.isimp

    def test_propagate_units(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        state = sgp4_init(body.elements)
        pos, vel = sgp4_propagate(body.elements, state, 0.0)
        assert pos[0] * XKMPER == pytest.approx(REFERENCE[0][1][0], rel=1e-5)
        assert vel[2] * VELOCITY_SCALE == pytest.approx(REFERENCE[0][2][2], abs=1e-4)

    def test_deterministic(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        state = sgp4_init(body.elements)
        assert sgp4_propagate(body.elements, state, 512.0) == sgp4_propagate(
            body.elements, state, 512.0
        )

    def test_zero_eccentricity_raises(self) -> None:
        # The drag coefficients divide by the eccentricity
        (body,) = parse_tle(LINE1, LINE2)
        body.set(eccentricity=0.0)
        with pytest.raises(ZeroDivisionError):
            body.sgp4(body.get("epoch"))


class TestSGP4Guards:
    def test_deep_space_body_rejected(self) -> None:
        (body,) = parse_tle(DEEP_LINE1, DEEP_LINE2)
        with pytest.raises(ModelMismatchError):
            body.sgp4(body.get("epoch"))

    def test_rejection_leaves_cache_empty(self) -> None:
        (body,) = parse_tle(DEEP_LINE1, DEEP_LINE2)
        with pytest.raises(ModelMismatchError):
            body.sgp4(body.get("epoch"))
        assert body._models == {}

    def test_aged_elements_fail_the_same_way_each_call(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        body.set(bstardrag=1.0)
        epoch = body.get("epoch")
        late = epoch + 100.0 * 86400.0

        with pytest.raises(EccentricityError) as first:
            body.sgp4(late)
        with pytest.raises(EccentricityError) as second:
            body.sgp4(late)
        assert first.value.eccentricity == second.value.eccentricity
        assert first.value.tsince == pytest.approx(100.0 * 1440.0)

        pv = body.sgp4(epoch)
        assert jnp.all(jnp.isfinite(pv.position))


class TestSGP4CrossCheck:
    """Agreement with python-sgp4 using the same WGS72 (old) constants."""

    @pytest.mark.parametrize("tsince", [0.0, 360.0, 720.0, 1440.0, -720.0])
    def test_88888(self, tsince) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        pv = body.sgp4(body.get("epoch") + tsince * 60.0)
        e, r, v = _reference(LINE1, LINE2, tsince)
        assert e == 0
        assert jnp.allclose(pv.position, jnp.array(r), atol=0.1)
        assert jnp.allclose(pv.velocity, jnp.array(v), atol=1e-4)

    @pytest.mark.parametrize("tsince", [0.0, 90.0, 1440.0])
    def test_iss(self, tsince) -> None:
        (body,) = parse_tle(ISS_LINE1, ISS_LINE2)
        pv = body.sgp4(body.get("epoch") + tsince * 60.0)
        e, r, v = _reference(ISS_LINE1, ISS_LINE2, tsince)
        assert e == 0
        assert jnp.allclose(pv.position, jnp.array(r), atol=0.1)
        assert jnp.allclose(pv.velocity, jnp.array(v), atol=1e-4)
