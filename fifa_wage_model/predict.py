# file: fifa_wage_model/predict.py
from __future__ import annotations

import logging
import math
from typing import Mapping

from .data_models import DashboardConfig, FeatureVector
from .errors import NonFiniteResult
from .utils import AGE_TERM, FOOT_PREFIX, INTERCEPT, POSITION_PREFIX, RATING_TERM

logger = logging.getLogger(__name__)

# Shown instead of a number when the prediction overflowed or is NaN
UNAVAILABLE = "—"


def linear_predictor(coefs: Mapping[str, float], features: FeatureVector) -> float:
    """
    eta = b0 + b_age*age + b_rating*rating + b_pos(group) + b_foot(foot).
    Missing terms (e.g. the reference level of a category) contribute 0.
    """
    eta = 0.0
    eta += coefs.get(INTERCEPT, 0.0)
    eta += coefs.get(AGE_TERM, 0.0) * features.age
    eta += coefs.get(RATING_TERM, 0.0) * features.rating
    eta += coefs.get(f"{POSITION_PREFIX}{features.position_group}", 0.0)
    eta += coefs.get(f"{FOOT_PREFIX}{features.preferred_foot}", 0.0)
    return eta


def inverse_link(eta: float, target_is_log: bool) -> float:
    """Identity or log link. exp() overflows to inf rather than raising."""
    if not target_is_log:
        return eta
    try:
        return math.exp(eta)
    except OverflowError:
        return math.inf


def predict(coefs: Mapping[str, float], features: FeatureVector, config: DashboardConfig) -> float:
    """Predicted wage in the display currency. Pure; may return inf/nan."""
    wage_eur = inverse_link(linear_predictor(coefs, features), config.target_is_log)
    return wage_eur * config.currency_rate


def require_finite(value: float) -> float:
    if not math.isfinite(value):
        raise NonFiniteResult(value)
    return value


def format_currency(value: float, currency: str = "USD") -> str:
    """Whole-unit currency string (``$26,988``) or the UNAVAILABLE marker."""
    try:
        value = require_finite(value)
    except NonFiniteResult as e:
        logger.info("%s; showing %s", e.message, UNAVAILABLE)
        return UNAVAILABLE
    sign = "-" if round(value) < 0 else ""
    amount = f"{abs(value):,.0f}"
    if currency == "USD":
        return f"{sign}${amount}"
    return f"{sign}{amount} {currency}"


def link_caption(target_is_log: bool, currency: str = "USD") -> str:
    if target_is_log:
        return f"model target was log wage, converted with exp then to {currency}"
    return f"model target was wage, shown in {currency}"
