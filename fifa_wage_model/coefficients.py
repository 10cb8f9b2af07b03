# file: fifa_wage_model/coefficients.py
"""Loading of the fitted model's term -> estimate table.

The resource is a JSON array of ``{"term": ..., "estimate": ...}`` records,
read from a local path or URL. Estimates may be numbers or numeric strings.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

import pandas as pd

from .data_models import Coefficient
from .errors import MalformedCoefficient, SourceUnavailable
from .utils import ensure_columns

logger = logging.getLogger(__name__)

Source = Union[str, Path]


def read_coefficients(source: Source) -> Tuple[Dict[str, float], List[MalformedCoefficient]]:
    """Strict read: raise SourceUnavailable if the resource can't be fetched or parsed.

    Terms whose estimate isn't numeric are kept at 0.0 and returned as issues.
    """
    name = str(source)
    try:
        df = pd.read_json(source, dtype=False, convert_dates=False)
    except (OSError, ValueError) as e:
        raise SourceUnavailable(name, str(e)) from e
    if df.empty:
        return {}, []
    try:
        ensure_columns(df, ["term", "estimate"], name)
    except ValueError as e:
        raise SourceUnavailable(name, str(e)) from e

    estimates = pd.to_numeric(df["estimate"], errors="coerce")
    coefs: Dict[str, float] = {}
    issues: List[MalformedCoefficient] = []
    for term, raw, value in zip(df["term"].astype(str), df["estimate"], estimates):
        if term in coefs:
            logger.warning("Duplicate coefficient term %r in %s; keeping the last value", term, name)
        if pd.isna(value):
            issue = MalformedCoefficient(term, raw)
            logger.warning("%s; treating it as 0", issue.message)
            issues.append(issue)
            coefs[term] = 0.0
        else:
            coefs[term] = float(value)
    return coefs, issues


@dataclass(frozen=True)
class CoefficientSnapshot:
    """Immutable view of one load of the coefficient resource."""
    source: Optional[str] = None
    coefficients: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    issues: Tuple[MalformedCoefficient, ...] = ()
    error: Optional[SourceUnavailable] = None

    def get(self, term: str) -> float:
        """Estimate for `term`; absent terms contribute 0."""
        return self.coefficients.get(term, 0.0)

    def __len__(self) -> int:
        return len(self.coefficients)

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_records(self) -> List[Coefficient]:
        return [Coefficient(term=t, estimate=v) for t, v in self.coefficients.items()]

    def to_frame(self) -> pd.DataFrame:
        """term/estimate table, e.g. for the coefficient chart."""
        return pd.DataFrame([c.model_dump() for c in self.as_records()], columns=["term", "estimate"])


class CoefficientStore:
    """Owns the current coefficient snapshot; loads replace it, never mutate it."""

    def __init__(self, source: Optional[Source] = None):
        self._source = source
        self._snapshot = CoefficientSnapshot()

    @property
    def snapshot(self) -> CoefficientSnapshot:
        return self._snapshot

    def load(self, source: Optional[Source] = None) -> CoefficientSnapshot:
        """Best-effort load. On SourceUnavailable the snapshot is empty and carries the error."""
        if source is not None:
            self._source = source
        if self._source is None:
            raise ValueError("no coefficient source configured")
        name = str(self._source)
        try:
            coefs, issues = read_coefficients(self._source)
        except SourceUnavailable as e:
            logger.warning("Coefficients not loaded (%s); all terms count as 0", e.message)
            snap = CoefficientSnapshot(source=name, error=e)
        else:
            logger.info("Loaded %d coefficient terms from %s", len(coefs), name)
            snap = CoefficientSnapshot(
                source=name,
                coefficients=MappingProxyType(coefs),
                issues=tuple(issues),
            )
        self._snapshot = snap
        return snap

    def reload(self) -> CoefficientSnapshot:
        """Re-read the last source into a fresh snapshot."""
        return self.load()
