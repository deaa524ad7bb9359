"""Tests for the deep-space perturbation engine."""

import pytest

from astropass.models import (
    Resonance,
    ResonanceIntegrator,
    classify_resonance,
    parse_tle,
    sdp4_init,
    sdp4_propagate,
)
from astropass.models._constants import TWOPI

# Spacetrack Report #3 deep-space case (10.5 h, not resonant)
SRR3_LINE1 = "1 11801U          80230.29629788  .01431103  00000-0  14311-1       8"
SRR3_LINE2 = "2 11801  46.7916 230.4354 7318036  47.4722  10.4117  2.28537848     6"

# Molniya 2-14 (eccentric 12 h orbit)
MOLNIYA_LINE1 = "1 08195U 75081A   06176.33215444  .00000099  00000-0  11873-3 0   813"
MOLNIYA_LINE2 = "2 08195  64.1586 279.0717 6877146 264.7651  20.2257  2.00491383225656"

# XM-3 (geosynchronous, near-zero inclination)
GEO_LINE1 = "1 28626U 05008A   06176.46683397 -.00000205  00000-0  10000-3 0  2190"
GEO_LINE2 = "2 28626   0.0019 286.9433 0000335  13.7918  55.6504  1.00270176  4891"


def _state(line1: str, line2: str):
    (body,) = parse_tle(line1, line2)
    return body.elements, sdp4_init(body.elements)


class TestClassifyResonance:
    def test_synchronous_band(self) -> None:
        assert classify_resonance(TWOPI / 1436.0, 0.0) is Resonance.SYNCHRONOUS

    def test_half_day_needs_eccentricity(self) -> None:
        xnq = TWOPI / 718.0
        assert classify_resonance(xnq, 0.7) is Resonance.HALF_DAY
        assert classify_resonance(xnq, 0.01) is Resonance.NONE

    def test_outside_bands(self) -> None:
        assert classify_resonance(TWOPI / 630.0, 0.7) is Resonance.NONE

    def test_bodies(self) -> None:
        assert _state(SRR3_LINE1, SRR3_LINE2)[1].deep.resonance is Resonance.NONE
        assert _state(MOLNIYA_LINE1, MOLNIYA_LINE2)[1].deep.resonance is Resonance.HALF_DAY
        assert _state(GEO_LINE1, GEO_LINE2)[1].deep.resonance is Resonance.SYNCHRONOUS


class TestResonanceIntegrator:
    def test_fresh_cursor_needs_restart(self) -> None:
        assert ResonanceIntegrator().needs_restart(100.0)

    def test_restart_across_epoch(self) -> None:
        integ = ResonanceIntegrator(atime=720.0)
        assert integ.needs_restart(-10.0)
        assert not integ.needs_restart(10.0)
        integ = ResonanceIntegrator(atime=-720.0)
        assert integ.needs_restart(10.0)
        assert not integ.needs_restart(-10.0)

    def test_restart_anchors_at_epoch(self) -> None:
        integ = ResonanceIntegrator(atime=1440.0, xli=1.0, xni=2.0)
        integ.restart(0.5, 0.004)
        assert (integ.atime, integ.xli, integ.xni) == (0.0, 0.5, 0.004)

    @pytest.mark.parametrize(
        "tsince, atime",
        [(100.0, 0.0), (720.0, 720.0), (1000.0, 720.0), (1440.0, 1440.0), (-1000.0, -720.0)],
    )
    def test_cursor_after_propagation(self, tsince, atime) -> None:
        elements, state = _state(MOLNIYA_LINE1, MOLNIYA_LINE2)
        sdp4_propagate(elements, state, tsince)
        assert state.deep.integrator.atime == atime

    def test_steps_back_toward_epoch(self) -> None:
        elements, state = _state(MOLNIYA_LINE1, MOLNIYA_LINE2)
        sdp4_propagate(elements, state, 2880.0)
        sdp4_propagate(elements, state, 800.0)
        assert state.deep.integrator.atime == 720.0

    def test_crossing_epoch_matches_fresh_state(self) -> None:
        elements, state = _state(GEO_LINE1, GEO_LINE2)
        sdp4_propagate(elements, state, 1440.0)
        crossed = sdp4_propagate(elements, state, -1440.0)

        _, fresh = _state(GEO_LINE1, GEO_LINE2)
        assert crossed == sdp4_propagate(elements, fresh, -1440.0)

    def test_non_resonant_cursor_untouched(self) -> None:
        elements, state = _state(SRR3_LINE1, SRR3_LINE2)
        sdp4_propagate(elements, state, 1440.0)
        assert state.deep.integrator.atime == 0.0

    def test_deterministic_sequence(self) -> None:
        times = [0.0, 360.0, 720.0, 1080.0, 1440.0, 100.0, -300.0]
        results = []
        for _ in range(2):
            elements, state = _state(MOLNIYA_LINE1, MOLNIYA_LINE2)
            results.append([sdp4_propagate(elements, state, t) for t in times])
        assert results[0] == results[1]


class TestPeriodicsCache:
    def test_reused_within_thirty_minutes(self) -> None:
        elements, state = _state(SRR3_LINE1, SRR3_LINE2)
        sdp4_propagate(elements, state, 100.0)
        sdp4_propagate(elements, state, 129.0)
        assert state.deep.periodics.time == 100.0

    def test_refreshed_after_thirty_minutes(self) -> None:
        elements, state = _state(SRR3_LINE1, SRR3_LINE2)
        sdp4_propagate(elements, state, 100.0)
        sdp4_propagate(elements, state, 130.0)
        assert state.deep.periodics.time == 130.0


class TestLowInclination:
    def test_geo_stays_near_geosynchronous_radius(self) -> None:
        (body,) = parse_tle(GEO_LINE1, GEO_LINE2)
        for hours in (0.0, 6.0, 12.0, 24.0):
            pv = body.sdp4(body.get("epoch") + hours * 3600.0)
            radius = float((pv.position**2).sum() ** 0.5)
            assert radius == pytest.approx(42164.0, rel=2e-3)
            assert abs(float(pv.position[2])) < 300.0
