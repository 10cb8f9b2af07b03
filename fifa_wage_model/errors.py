# file: fifa_wage_model/errors.py
"""Error taxonomy for loading coefficients/players and formatting predictions.

None of these are fatal for the dashboard: loaders degrade to empty data,
malformed terms count as zero and non-finite predictions render as a marker.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class WageModelError(Exception):
    """Base exception for fifa_wage_model."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context or {}


class SourceUnavailable(WageModelError):
    """A coefficient or dataset resource could not be fetched or parsed."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source} unavailable: {reason}", context={"source": source})
        self.source = source
        self.reason = reason


class MalformedCoefficient(WageModelError):
    """A term is present but its estimate is not a number."""

    def __init__(self, term: str, raw: Any):
        super().__init__(f"coefficient {term!r} has non-numeric estimate {raw!r}", context={"term": term})
        self.term = term
        self.raw = raw


class NonFiniteResult(WageModelError):
    """Prediction overflowed or turned NaN."""

    def __init__(self, value: float):
        super().__init__(f"prediction is not finite: {value!r}", context={"value": value})
        self.value = value
