"""
Test the per-terrain strokes-remaining polynomials.
"""

from __future__ import annotations

import pytest

from golfsg.exceptions import ConfigurationError, InvalidInputError
from golfsg.strokes.model import DEFAULT_COEFFICIENTS, StrokesModel, default_strokes_model
from golfsg.terrain.models import TerrainCategory


def test_zero_distance_equals_constant_term():
    model = default_strokes_model()
    for category, coeffs in DEFAULT_COEFFICIENTS.items():
        assert model.strokes_remaining(0.0, category) == coeffs[0]


def test_polynomial_evaluation():
    model = StrokesModel({"fairway": [2.0, 0.5, 0.25]})
    assert model.strokes_remaining(2.0, "fairway") == pytest.approx(2.0 + 1.0 + 1.0)
    assert model.strokes_remaining(10, "Fairway") == pytest.approx(2.0 + 5.0 + 25.0)


def test_default_model_covers_every_named_category():
    model = default_strokes_model()
    assert model.missing_categories([c.value for c in TerrainCategory]) == []


def test_default_curves_increase_with_distance():
    model = default_strokes_model()
    for category in ("tee", "fairway", "rough", "bunker", "hazard", "penalty"):
        values = [model.strokes_remaining(d, category) for d in range(0, 400, 25)]
        assert values == sorted(values)
    greens = [model.strokes_remaining(d, "green") for d in range(0, 45, 5)]
    assert greens == sorted(greens)


def test_missing_category_is_configuration_error():
    model = StrokesModel({"fairway": [2.0]})
    with pytest.raises(ConfigurationError):
        model.strokes_remaining(100.0, "green")
    assert model.missing_categories(["fairway", "green", "rough", "green"]) == ["green", "rough"]
    assert model.covers("FAIRWAY")
    assert not model.covers("green")


def test_zero_coefficients_are_valid_not_missing():
    model = StrokesModel({"green": [0.0]})
    assert model.strokes_remaining(5.0, "green") == 0.0


@pytest.mark.parametrize(
    "coefficients",
    [{"green": []}, {"green": "1,2"}, {"green": [1.0, "x"]}, {"green": [float("nan")]}, {"": [1.0]}],
)
def test_malformed_coefficients_rejected(coefficients):
    with pytest.raises(ConfigurationError):
        StrokesModel(coefficients)


def test_from_dict_accepts_wrapped_mapping():
    model = StrokesModel.from_dict({"coefficients": {"tee": [3, 0.01]}})
    assert model.categories == ["tee"]
    assert model.coefficients_for("tee") == (3.0, 0.01)
    with pytest.raises(ConfigurationError):
        StrokesModel.from_dict(["tee"])


def test_model_is_read_only():
    model = default_strokes_model()
    with pytest.raises(TypeError):
        model.coefficients["green"] = (0.0,)


def test_vectorized_matches_scalar():
    model = default_strokes_model()
    distances = [0.0, 12.5, 80.0, 140.0]
    categories = ["green", "fairway", "rough", "tee"]
    many = model.strokes_remaining_many(distances, categories)
    assert list(many) == pytest.approx(
        [model.strokes_remaining(d, c) for d, c in zip(distances, categories)]
    )


def test_negative_distance_rejected():
    model = default_strokes_model()
    with pytest.raises(InvalidInputError):
        model.strokes_remaining(-1.0, "fairway")
    with pytest.raises(InvalidInputError):
        model.strokes_remaining_many([1.0, -2.0], ["fairway", "fairway"])


def test_default_green_curve_shape():
    model = default_strokes_model()
    putts = [model.strokes_remaining(d, "green") for d in range(0, 50, 5)]
    assert putts == sorted(putts)
    # past about 50 m the cubic turns down, so long-green values are illustrative only
    assert model.strokes_remaining(55.0, "green") < model.strokes_remaining(50.0, "green")
