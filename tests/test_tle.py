"""Tests for element-set parsing."""

from math import pi

import pytest

from astropass.models import TLE, compute_checksum, parse_tle
from astropass.time import caldate_to_timestamp

LINE1 = "1 88888U          80275.98708465  .00073094  13844-3  66816-4 0    8"
LINE2 = "2 88888  72.8435 115.9689 0086731  52.6988 110.5714 16.05824518  105"

ISS_LINE1 = "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927"
ISS_LINE2 = "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537"

DEEP_LINE1 = "1 11801U          80230.29629788  .01431103  00000-0  14311-1       8"
DEEP_LINE2 = "2 11801  46.7916 230.4354 7318036  47.4722  10.4117  2.28537848     6"

DEG2RAD = pi / 180.0


class TestChecksum:
    def test_iss_lines(self) -> None:
        assert compute_checksum(ISS_LINE1) == 7
        assert compute_checksum(ISS_LINE2) == 7

    def test_minus_counts_one(self) -> None:
        assert compute_checksum("1 -" + " " * 65) == 2


class TestParseTwoLine:
    def test_returns_bodies(self) -> None:
        bodies = parse_tle(LINE1, LINE2)
        assert len(bodies) == 1
        assert isinstance(bodies[0], TLE)

    def test_identity_fields(self) -> None:
        (body,) = parse_tle(ISS_LINE1, ISS_LINE2)
        assert body.get("id") == "25544"
        assert body.get("classification") == "U"
        assert body.get("international") == "98067A"
        assert body.get("ephemeristype") == 0
        assert body.get("elementnumber") == 292
        assert body.get("revolutionsatepoch") == 56353
        assert body.get("name") == ""

    def test_epoch(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        expected = caldate_to_timestamp(1980, 1, 1) + 274.98708465 * 86400.0
        assert body.get("epoch") == pytest.approx(expected, abs=1e-4)

    def test_angles_in_radians(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        assert body.get("inclination") == pytest.approx(72.8435 * DEG2RAD, abs=1e-12)
        assert body.get("rightascension") == pytest.approx(115.9689 * DEG2RAD, abs=1e-12)
        assert body.get("argumentofperigee") == pytest.approx(52.6988 * DEG2RAD, abs=1e-12)
        assert body.get("meananomaly") == pytest.approx(110.5714 * DEG2RAD, abs=1e-12)

    def test_eccentricity_implied_decimal(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        assert body.get("eccentricity") == pytest.approx(0.0086731, abs=1e-15)

    def test_mean_motion_and_derivatives(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        scale = 2.0 * pi / 1440.0
        assert body.get("meanmotion") == pytest.approx(16.05824518 * scale, rel=1e-12)
        assert body.get("firstderivative") == pytest.approx(0.00073094 * scale / 1440.0, rel=1e-12)
        assert body.get("secondderivative") == pytest.approx(
            0.13844e-3 * scale / 1440.0 / 1440.0, rel=1e-12
        )

    def test_bstar_exponent(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        assert body.get("bstardrag") == pytest.approx(0.66816e-4, rel=1e-12)

    def test_negative_bstar(self) -> None:
        (body,) = parse_tle(ISS_LINE1, ISS_LINE2)
        assert body.get("bstardrag") == pytest.approx(-0.11606e-4, rel=1e-12)
        assert body.get("firstderivative") < 0.0

    def test_blank_fields(self) -> None:
        (body,) = parse_tle(DEEP_LINE1, DEEP_LINE2)
        assert body.get("secondderivative") == 0.0
        assert body.get("elementnumber") == 0
        assert body.get("revolutionsatepoch") == 0

    def test_tle_text_kept(self) -> None:
        (body,) = parse_tle(LINE1, LINE2)
        assert body.get("tle") == f"{LINE1}\n{LINE2}\n"


class TestParseText:
    def test_three_line_set(self) -> None:
        (body,) = parse_tle(f"ISS (ZARYA)\n{ISS_LINE1}\n{ISS_LINE2}\n")
        assert body.get("name") == "ISS (ZARYA)"
        assert body.get("tle") == f"ISS (ZARYA)\n{ISS_LINE1}\n{ISS_LINE2}\n"

    def test_multiple_sets_comments_and_blanks(self) -> None:
        text = "\n".join(
            [
                "# test catalogue",
                LINE1,
                LINE2,
                "",
                "   ",
                "ISS",
                ISS_LINE1,
                ISS_LINE2,
            ]
        )
        bodies = parse_tle(text, DEEP_LINE1 + "\r\n" + DEEP_LINE2)
        assert [b.get("id") for b in bodies] == ["88888", "25544", "11801"]
        assert [b.get("name") for b in bodies] == ["", "ISS", ""]

    def test_indented_comment_is_not_a_name(self) -> None:
        text = "\n".join(["ISS", ISS_LINE1, ISS_LINE2, "  # indented note", LINE1, LINE2])
        bodies = parse_tle(text)
        assert [b.get("name") for b in bodies] == ["ISS", ""]
        assert bodies[1].get("id") == "88888"

    def test_empty_input(self) -> None:
        assert parse_tle("") == []

    def test_checksum_not_verified(self) -> None:
        bad = ISS_LINE1[:68] + "0"
        assert compute_checksum(bad) != int(bad[68])
        assert parse_tle(bad, ISS_LINE2)[0].get("id") == "25544"


class TestParseErrors:
    def test_mismatched_ids(self) -> None:
        with pytest.raises(ValueError, match="do not match"):
            parse_tle(LINE1, ISS_LINE2)

    def test_wrong_line_number(self) -> None:
        with pytest.raises(ValueError, match="line 2"):
            parse_tle(LINE1, "3" + LINE2[1:])

    def test_internal_format(self) -> None:
        with pytest.raises(ValueError, match="G \\(internal\\) format"):
            parse_tle(LINE1.ljust(79) + "G", LINE2)

    def test_incomplete_set(self) -> None:
        with pytest.raises(ValueError, match="Incomplete"):
            parse_tle(LINE1)
