"""Tests for the propagation model selector."""

import pytest

from astropass.errors import OrbitalError, UnknownModelError
from astropass.models import Model


class TestModelLookup:
    @pytest.mark.parametrize(
        "name, model",
        [
            ("sgp", Model.SGP),
            ("sgp4", Model.SGP4),
            ("sgp8", Model.SGP8),
            ("sdp4", Model.SDP4),
            ("sdp8", Model.SDP8),
            ("model", Model.MODEL),
            ("model4", Model.MODEL4),
            ("model8", Model.MODEL8),
            ("null", Model.NULL),
        ],
    )
    def test_from_name(self, name, model) -> None:
        assert Model.from_name(name) is model

    def test_case_insensitive(self) -> None:
        assert Model.from_name("SDP4") is Model.SDP4

    def test_model_passes_through(self) -> None:
        assert Model.from_name(Model.SGP8) is Model.SGP8

    def test_unknown_name(self) -> None:
        with pytest.raises(UnknownModelError, match="Illegal model name"):
            Model.from_name("sgp5")

    def test_unknown_name_error_family(self) -> None:
        with pytest.raises(OrbitalError):
            Model.from_name("")
        with pytest.raises(ValueError):
            Model.from_name("kepler")


class TestModelResolve:
    @pytest.mark.parametrize(
        "model, near, deep",
        [
            (Model.MODEL, Model.SGP4, Model.SDP4),
            (Model.MODEL4, Model.SGP4, Model.SDP4),
            (Model.MODEL8, Model.SGP8, Model.SDP8),
            (Model.SGP, Model.SGP, Model.SGP),
            (Model.SDP8, Model.SDP8, Model.SDP8),
        ],
    )
    def test_resolve(self, model, near, deep) -> None:
        assert model.resolve(False) is near
        assert model.resolve(True) is deep

    def test_null_resolves_to_none(self) -> None:
        assert Model.NULL.resolve(False) is None
        assert Model.NULL.resolve(True) is None


class TestModelClassification:
    def test_deep_space_models(self) -> None:
        assert {m for m in Model if m.is_deep_space()} == {Model.SDP4, Model.SDP8}

    def test_near_earth_models(self) -> None:
        assert {m for m in Model if m.is_near_earth()} == {Model.SGP, Model.SGP4, Model.SGP8}

    def test_str_and_repr(self) -> None:
        assert str(Model.SGP4) == "sgp4"
        assert Model.SGP4.as_str() == "sgp4"
        assert repr(Model.MODEL8) == "Model.MODEL8"
