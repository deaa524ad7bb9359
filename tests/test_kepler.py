"""Tests for the per-model Kepler equation solvers."""

from math import atan2, cos, pi, sin

import pytest

from astropass.models import solve_kepler_sgp, solve_kepler_sgp4, solve_kepler_sgp8

CASES = [
    (0.3, 0.0, 0.0),
    (1.2, 0.0086731, 0.0),
    (4.0, 0.05, -0.03),
    (5.9, 0.2, 0.1),
]


class TestSolveKeplerSGP:
    @pytest.mark.parametrize("u, axn, ayn", CASES)
    def test_residual(self, u, axn, ayn) -> None:
        s, c = solve_kepler_sgp(u, axn, ayn)
        eo = atan2(s, c) % (2.0 * pi)
        residual = eo - axn * s + ayn * c - u
        residual = (residual + pi) % (2.0 * pi) - pi
        assert abs(residual) < 1e-5
        assert s * s + c * c == pytest.approx(1.0)

    def test_circular_is_identity(self) -> None:
        s, c = solve_kepler_sgp(0.7, 0.0, 0.0)
        assert s == pytest.approx(sin(0.7))
        assert c == pytest.approx(cos(0.7))


class TestSolveKeplerSGP4:
    @pytest.mark.parametrize("u, axn, ayn", CASES)
    def test_residual(self, u, axn, ayn) -> None:
        sinepw, cosepw, temp3, temp4, temp5, temp6 = solve_kepler_sgp4(u, axn, ayn)
        epw = atan2(sinepw, cosepw) % (2.0 * pi)
        residual = epw - axn * sinepw + ayn * cosepw - u
        residual = (residual + pi) % (2.0 * pi) - pi
        assert abs(residual) < 1e-5

    def test_auxiliary_products(self) -> None:
        sinepw, cosepw, temp3, temp4, temp5, temp6 = solve_kepler_sgp4(2.0, 0.1, 0.2)
        assert temp3 == pytest.approx(0.1 * sinepw)
        assert temp4 == pytest.approx(0.2 * cosepw)
        assert temp5 == pytest.approx(0.1 * cosepw)
        assert temp6 == pytest.approx(0.2 * sinepw)


class TestSolveKeplerSGP8:
    @pytest.mark.parametrize("mean_anomaly", [0.1, 1.0, 2.5, 4.0, 6.0])
    @pytest.mark.parametrize("eccentricity", [0.0, 0.01, 0.3, 0.73])
    def test_residual(self, mean_anomaly, eccentricity) -> None:
        sine, cose, zc5 = solve_kepler_sgp8(mean_anomaly, eccentricity)
        E = atan2(sine, cose) % (2.0 * pi)
        residual = E - eccentricity * sine - mean_anomaly
        residual = (residual + pi) % (2.0 * pi) - pi
        assert abs(residual) < 1e-5
        assert zc5 == pytest.approx(1.0 / (1.0 - eccentricity * cose))

    def test_non_convergence_returns_estimate(self) -> None:
        # Highly eccentric orbits may stop on the iteration bound without error
        sine, cose, zc5 = solve_kepler_sgp8(0.05, 0.95)
        assert sine * sine + cose * cose == pytest.approx(1.0)
