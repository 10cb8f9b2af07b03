# file: fifa_wage_model/pipeline.py
"""
Declarative transform pipeline feeding the charts:

    derive (group) -> rescale (wage_usd) -> filter (group) -> aggregate

Every stage returns a new frame; inputs are never modified, so a pipeline
can be re-run on the same records whenever the user changes a control.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

import numpy as np
import pandas as pd

from .data_models import (
    BoxSummaryStage,
    DashboardConfig,
    DeriveStage,
    FilterStage,
    HistogramStage,
    PipelineSpec,
    RescaleStage,
)
from .features import add_position_group
from .utils import ALL, PLAYER_COLUMNS, POSITION_GROUPS

logger = logging.getLogger(__name__)

Records = Union[pd.DataFrame, Iterable[Mapping[str, Any]]]

HISTOGRAM_COLUMNS: List[str] = ["bin_start", "bin_end", "count"]
BOX_COLUMNS: List[str] = ["min", "q1", "median", "q3", "max", "count"]


def _as_frame(records: Records) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        return records
    rows = list(records)
    if not rows:
        return pd.DataFrame(columns=PLAYER_COLUMNS)
    return pd.DataFrame(rows)


def derive(df: pd.DataFrame, stage: DeriveStage) -> pd.DataFrame:
    return add_position_group(df, source=stage.source, target=stage.target)


def rescale(df: pd.DataFrame, stage: RescaleStage) -> pd.DataFrame:
    out = df.copy()
    out[stage.target] = pd.to_numeric(out[stage.source], errors="coerce") * stage.factor
    return out


def apply_filter(df: pd.DataFrame, stage: FilterStage) -> pd.DataFrame:
    if stage.value == ALL:
        return df.reset_index(drop=True)
    return df[df[stage.field] == stage.value].reset_index(drop=True)


def _finite(df: pd.DataFrame, field: str) -> pd.Series:
    values = pd.to_numeric(df[field], errors="coerce").astype(float)
    keep = np.isfinite(values)
    dropped = int((~keep).sum())
    if dropped:
        logger.debug("Skipping %d rows with missing %s", dropped, field)
    return values[keep]


def histogram(df: pd.DataFrame, stage: HistogramStage) -> pd.DataFrame:
    """Equal-width bins over [min, max] of the (filtered) data, one row per bin."""
    values = _finite(df, stage.field) if len(df) else pd.Series(dtype=float)
    if values.empty:
        return pd.DataFrame(columns=HISTOGRAM_COLUMNS)
    lo, hi = float(values.min()), float(values.max())
    if lo == hi:
        # zero-width range: one unit-wide bin centred on the value
        return pd.DataFrame({"bin_start": [lo - 0.5], "bin_end": [hi + 0.5], "count": [len(values)]})
    counts, edges = np.histogram(values.to_numpy(), bins=stage.maxbins, range=(lo, hi))
    return pd.DataFrame({"bin_start": edges[:-1], "bin_end": edges[1:], "count": counts.astype(int)})


def box_summary(df: pd.DataFrame, stage: BoxSummaryStage) -> pd.DataFrame:
    """min / q1 / median / q3 / max of `field` per group, groups in display order."""
    if not len(df):
        return pd.DataFrame(columns=[stage.by, *BOX_COLUMNS])
    values = _finite(df, stage.field)
    if values.empty:
        return pd.DataFrame(columns=[stage.by, *BOX_COLUMNS])
    grouped = values.groupby(df.loc[values.index, stage.by], sort=False)
    out = pd.DataFrame(
        {
            "min": grouped.min(),
            "q1": grouped.quantile(0.25),
            "median": grouped.median(),
            "q3": grouped.quantile(0.75),
            "max": grouped.max(),
            "count": grouped.size(),
        }
    )
    known = [g for g in POSITION_GROUPS if g in out.index]
    extra = sorted(g for g in out.index if g not in POSITION_GROUPS)
    out = out.loc[known + extra]
    out.index.name = stage.by
    return out.reset_index()


def prepare(records: Records, spec: PipelineSpec) -> pd.DataFrame:
    """Row-level stages only (derive, rescale, filter)."""
    df = _as_frame(records)
    df = derive(df, spec.derive)
    df = rescale(df, spec.rescale)
    return apply_filter(df, spec.filter)


def run(records: Records, spec: PipelineSpec) -> pd.DataFrame:
    """Full pipeline; returns the chart series (empty frame when nothing survives the filter)."""
    df = prepare(records, spec)
    if isinstance(spec.aggregate, HistogramStage):
        return histogram(df, spec.aggregate)
    return box_summary(df, spec.aggregate)


def histogram_pipeline(config: DashboardConfig, group: str = ALL, maxbins: Optional[int] = None) -> PipelineSpec:
    """Spec for the wage histogram, optionally filtered to one position group."""
    return PipelineSpec(
        rescale=RescaleStage(factor=config.currency_rate),
        filter=FilterStage(value=group),
        aggregate=HistogramStage(maxbins=maxbins or config.maxbins),
    )


def box_pipeline(config: DashboardConfig) -> PipelineSpec:
    """Spec for the per-group wage box summary (no filter)."""
    return PipelineSpec(
        rescale=RescaleStage(factor=config.currency_rate),
        aggregate=BoxSummaryStage(),
    )
