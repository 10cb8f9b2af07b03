import math

import pytest
from pydantic import ValidationError

from fifa_wage_model.data_models import DashboardConfig, FeatureVector
from fifa_wage_model.errors import NonFiniteResult
from fifa_wage_model.predict import (
    UNAVAILABLE,
    format_currency,
    inverse_link,
    linear_predictor,
    predict,
    require_finite,
)

COEFS = {
    "Intercept": 6.0,
    "age": -0.01,
    "overall_rating": 0.05,
    "position_group_Midfielder": 0.1,
    "preferred_foot_Right": 0.02,
}


def test_end_to_end_log_target():
    features = FeatureVector(age=24, rating=85, position_group="Midfielder", preferred_foot="Right")
    config = DashboardConfig(target_is_log=True, currency_rate=1.08)

    assert linear_predictor(COEFS, features) == pytest.approx(10.13)
    assert predict(COEFS, features, config) == pytest.approx(math.exp(10.13) * 1.08)


def test_identity_link():
    features = FeatureVector(age=24, rating=85, position_group="Midfielder", preferred_foot="Right")
    config = DashboardConfig(target_is_log=False, currency_rate=2.0)

    assert predict(COEFS, features, config) == pytest.approx(10.13 * 2.0)


@pytest.mark.parametrize("target_is_log, expected", [(True, 1.08), (False, 0.0)])
def test_empty_coefficients_baseline(target_is_log, expected):
    config = DashboardConfig(target_is_log=target_is_log, currency_rate=1.08)
    for features in (FeatureVector(), FeatureVector(age=40, rating=50, position_group="Goalkeeper", preferred_foot="Left")):
        assert predict({}, features, config) == pytest.approx(expected)


def test_missing_category_terms_contribute_zero():
    gk = FeatureVector(position_group="Goalkeeper", preferred_foot="Left")
    expected = 6.0 - 0.01 * gk.age + 0.05 * gk.rating
    assert linear_predictor(COEFS, gk) == pytest.approx(expected)


def test_linear_in_age():
    base = dict(COEFS, age=0.0)
    doubled = dict(COEFS, age=-0.02)
    zero_age = linear_predictor(base, FeatureVector(age=40))

    assert linear_predictor(COEFS, FeatureVector(age=40)) - zero_age == pytest.approx(-0.40)
    assert linear_predictor(doubled, FeatureVector(age=20)) == pytest.approx(linear_predictor(COEFS, FeatureVector(age=40)))


def test_inverse_link_overflow_is_infinite():
    assert inverse_link(1000.0, True) == math.inf
    assert inverse_link(1000.0, False) == 1000.0


def test_overflow_formats_as_unavailable():
    value = predict({"Intercept": 1000.0}, FeatureVector(), DashboardConfig())
    assert math.isinf(value)
    assert format_currency(value) == UNAVAILABLE
    assert format_currency(float("nan")) == UNAVAILABLE


def test_require_finite():
    assert require_finite(1.5) == 1.5
    with pytest.raises(NonFiniteResult):
        require_finite(float("inf"))


def test_format_currency():
    assert format_currency(26988.4) == "$26,988"
    assert format_currency(-1500) == "-$1,500"
    assert format_currency(1234.0, "EUR") == "1,234 EUR"


def test_feature_vector_rejects_unknown_group():
    with pytest.raises(ValidationError):
        FeatureVector(position_group="Striker")


def test_config_rejects_non_positive_rate():
    with pytest.raises(ValidationError):
        DashboardConfig(currency_rate=0)


@pytest.mark.parametrize("kwargs", [{"age": 5}, {"age": 46}, {"rating": 39}, {"rating": 100}])
def test_feature_vector_rejects_out_of_range_inputs(kwargs):
    with pytest.raises(ValidationError):
        FeatureVector(**kwargs)


def test_feature_vector_accepts_range_edges():
    assert FeatureVector(age=16, rating=99).age == 16
    assert FeatureVector(age=45, rating=40).rating == 40


def test_format_currency_rounds_before_choosing_sign():
    assert format_currency(-0.4) == "$0"
    assert format_currency(-0.4, "EUR") == "0 EUR"
    assert format_currency(-0.6) == "-$1"
