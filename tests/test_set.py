"""Tests for TLESet, several element sets of one body selected by time."""

import jax.numpy as jnp
import pytest

from astropass.coordinates import Station
from astropass.errors import EmptySetError, OrbitalError
from astropass.models import TLE, TLESet, parse_tle
from astropass.passes import compute_passes

LINE1 = "1 88888U          80275.98708465  .00073094  13844-3  66816-4 0    8"
LINE2 = "2 88888  72.8435 115.9689 0086731  52.6988 110.5714 16.05824518  105"

# Two element sets of the ISS fitted one day apart
ISS_LINE1 = "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927"
ISS_LINE2 = "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537"
ISS_LATER_LINE1 = "1 25544U 98067A   08265.51782528 -.00002182  00000-0 -11606-4 0  2927"
ISS_LATER_LINE2 = "2 25544  51.6416 242.4627 0006703 130.5360 325.0288 15.72125391563537"

DAY = 86400.0


def _iss_pair() -> tuple[TLE, TLE]:
    (early,) = parse_tle(ISS_LINE1, ISS_LINE2)
    (late,) = parse_tle(ISS_LATER_LINE1, ISS_LATER_LINE2)
    return early, late


def _station() -> Station:
    return Station(38.898748, -77.037684, 0.0167, name="White House", use_degrees=True)


class TestMembership:
    def test_members_sorted_by_epoch(self) -> None:
        early, late = _iss_pair()
        bodies = TLESet(late, early)
        assert bodies.members() == [early, late]
        assert len(bodies) == 2
        assert list(bodies) == [early, late]

    def test_first_member_is_selected(self) -> None:
        early, late = _iss_pair()
        assert TLESet(late, early).select() is late

    def test_duplicate_epoch_ignored(self) -> None:
        early, late = _iss_pair()
        (again,) = parse_tle(ISS_LINE1, ISS_LINE2)
        bodies = TLESet(early, late).add(again)
        assert bodies.members() == [early, late]

    def test_sets_are_flattened(self) -> None:
        early, late = _iss_pair()
        bodies = TLESet(early).add(TLESet(late))
        assert bodies.members() == [early, late]

    def test_catalog_number_mismatch(self) -> None:
        early, _ = _iss_pair()
        (other,) = parse_tle(LINE1, LINE2)
        with pytest.raises(ValueError, match="mismatch"):
            TLESet(early, other)

    def test_members_must_be_element_sets(self) -> None:
        with pytest.raises(TypeError):
            TLESet("25544")

    def test_clear(self) -> None:
        bodies = TLESet(*_iss_pair())
        bodies.clear()
        assert bodies.members() == []
        with pytest.raises(EmptySetError):
            bodies.select()

    def test_repr(self) -> None:
        assert repr(TLESet()) == "TLESet()"
        assert repr(TLESet(*_iss_pair())).startswith("TLESet(25544, epochs=[")


class TestSelect:
    def test_before_every_epoch_takes_earliest(self) -> None:
        early, late = _iss_pair()
        bodies = TLESet(late, early)
        assert bodies.select(early.get("epoch") - DAY) is early

    def test_between_epochs_takes_latest_not_after(self) -> None:
        early, late = _iss_pair()
        bodies = TLESet(early, late)
        assert bodies.select(early.get("epoch") + 0.5 * DAY) is early
        assert bodies.select(late.get("epoch")) is late
        assert bodies.select(late.get("epoch") + 10.0 * DAY) is late

    def test_selection_sticks(self) -> None:
        early, late = _iss_pair()
        bodies = TLESet(early, late)
        bodies.select(late.get("epoch") + 60.0)
        assert bodies.select() is late
        assert bodies.get("epoch") == late.get("epoch")

    def test_empty_set(self) -> None:
        with pytest.raises(EmptySetError) as excinfo:
            TLESet().select(0.0)
        assert isinstance(excinfo.value, OrbitalError)
        assert isinstance(excinfo.value, LookupError)


class TestAggregate:
    def test_groups_by_catalog_number(self) -> None:
        text = "\n".join([ISS_LATER_LINE1, ISS_LATER_LINE2, LINE1, LINE2, ISS_LINE1, ISS_LINE2])
        grouped = TLESet.aggregate(parse_tle(text))
        assert [g.get("id") for g in grouped] == ["25544", "88888"]
        assert isinstance(grouped[0], TLESet)
        assert len(grouped[0]) == 2
        assert isinstance(grouped[1], TLE)

    def test_singleton(self) -> None:
        grouped = TLESet.aggregate(parse_tle(LINE1, LINE2), singleton=True)
        assert len(grouped) == 1
        assert isinstance(grouped[0], TLESet)

    def test_parse_tle_aggregate(self) -> None:
        grouped = parse_tle(
            ISS_LINE1, ISS_LINE2, ISS_LATER_LINE1, ISS_LATER_LINE2, aggregate=True
        )
        assert len(grouped) == 1
        assert [m.get("epoch") for m in grouped[0].members()] == sorted(
            m.get("epoch") for m in grouped[0].members()
        )


class TestDelegation:
    def test_position_uses_member_in_force(self) -> None:
        early, late = _iss_pair()
        bodies = TLESet(early, late)
        before = early.get("epoch") + 3600.0
        after = late.get("epoch") + 3600.0

        assert jnp.array_equal(bodies.position(before).position, early.position(before).position)
        assert bodies.select() is early
        assert jnp.array_equal(bodies.sgp4(after).position, late.sgp4(after).position)
        assert bodies.select() is late

    def test_model_attributes_go_to_selected(self) -> None:
        early, late = _iss_pair()
        bodies = TLESet(early, late)
        bodies.select(late.get("epoch"))
        bodies.set(bstardrag=0.0)
        assert late.get("bstardrag") == 0.0
        assert early.get("bstardrag") != 0.0

    def test_other_attributes_go_to_all(self) -> None:
        early, late = _iss_pair()
        bodies = TLESet(early, late).set(horizon=0.0, visible=False)
        assert early.get("horizon") == late.get("horizon") == 0.0
        assert not early.get("visible") and not late.get("visible")

    def test_set_on_empty_set(self) -> None:
        bodies = TLESet()
        assert bodies.set(horizon=0.0) is bodies
        with pytest.raises(EmptySetError):
            bodies.get("horizon")

    def test_copy_is_independent(self) -> None:
        bodies = TLESet(*_iss_pair())
        clone = bodies.copy()
        clone.set(horizon=0.0)
        assert bodies.get("horizon") != 0.0
        assert clone.select().get("epoch") == bodies.select().get("epoch")


class TestSetPasses:
    def test_no_backdate_uses_member_in_force_at_start(self) -> None:
        early, late = _iss_pair()
        # The later set is selected first; the window still starts from the earlier epoch
        bodies = TLESet(late, early).set(backdate=False, visible=False, horizon=0.0)
        start = early.get("epoch")
        end = late.get("epoch") - 600.0

        passes = compute_passes(bodies, _station(), start, end)
        assert passes
        alone = compute_passes(early, _station(), start, end)
        assert [p.time for p in passes] == [p.time for p in alone]

    def test_no_backdate_window_before_every_epoch(self) -> None:
        early, late = _iss_pair()
        bodies = TLESet(early, late).set(backdate=False)
        epoch = early.get("epoch")
        assert bodies.passes(_station(), epoch - 2.0 * DAY, epoch - DAY) == []
