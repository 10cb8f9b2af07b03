# file: fifa_wage_model/charts.py
"""Vega-Lite chart descriptions built from pipeline output.

Data is inlined as records; the pipeline spec that produced it travels along
under ``usermeta.pipeline`` so a renderer can show or re-run the transform.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd

from .data_models import BoxSummaryStage, PipelineSpec
from .utils import ALL

SCHEMA = "https://vega.github.io/schema/vega-lite/v5.json"
CURRENCY_FORMAT = "$,.0f"


def _values(df: pd.DataFrame) -> list:
    return df.to_dict(orient="records")


def _base(df: pd.DataFrame, pipeline: Optional[PipelineSpec]) -> Dict[str, Any]:
    chart: Dict[str, Any] = {"$schema": SCHEMA, "data": {"values": _values(df)}}
    if pipeline is not None:
        chart["usermeta"] = {"pipeline": pipeline.model_dump()}
    return chart


def histogram_chart(series: pd.DataFrame, pipeline: PipelineSpec, currency: str = "USD") -> Dict[str, Any]:
    """Bars over pre-binned ChartSeries rows (bin_start, bin_end, count)."""
    group = pipeline.filter.value
    chart = _base(series, pipeline)
    chart.update(
        {
            "title": "Wage distribution" if group == ALL else f"Wage distribution: {group}",
            "mark": "bar",
            "encoding": {
                "x": {
                    "field": "bin_start",
                    "bin": {"binned": True},
                    "type": "quantitative",
                    "title": f"Wage ({currency})",
                    "axis": {"format": CURRENCY_FORMAT},
                },
                "x2": {"field": "bin_end"},
                "y": {"field": "count", "type": "quantitative", "title": "Players"},
                "tooltip": [{"field": "count", "type": "quantitative", "title": "Players"}],
            },
            "width": "container",
            "height": 280,
        }
    )
    return chart


def box_chart(summary: pd.DataFrame, pipeline: PipelineSpec, currency: str = "USD") -> Dict[str, Any]:
    """Min-max whisker boxes from box_summary rows."""
    by = pipeline.aggregate.by if isinstance(pipeline.aggregate, BoxSummaryStage) else "group"
    y = {"type": "quantitative", "title": f"Wage ({currency})", "axis": {"format": CURRENCY_FORMAT}}
    x = {"field": by, "type": "nominal", "title": "Position group", "sort": None}
    chart = _base(summary, pipeline)
    chart.update(
        {
            "encoding": {"x": x},
            "layer": [
                {"mark": {"type": "rule"}, "encoding": {"y": {"field": "min", **y}, "y2": {"field": "max"}}},
                {"mark": {"type": "bar", "size": 28}, "encoding": {"y": {"field": "q1", **y}, "y2": {"field": "q3"}}},
                {"mark": {"type": "tick", "color": "white", "size": 28}, "encoding": {"y": {"field": "median", **y}}},
            ],
            "width": "container",
            "height": 320,
        }
    )
    return chart


def coefficient_chart(coefficients: pd.DataFrame) -> Dict[str, Any]:
    """Horizontal bars of estimates by term with a zero rule; right of zero raises the prediction."""
    chart = _base(coefficients, None)
    chart.update(
        {
            "layer": [
                {"mark": {"type": "bar"}},
                {"mark": {"type": "rule", "color": "#666"}, "encoding": {"x": {"datum": 0}}},
            ],
            "encoding": {
                "x": {"field": "estimate", "type": "quantitative", "title": "β"},
                "y": {"field": "term", "type": "nominal", "sort": "-x", "title": None},
            },
            "width": 520,
            "height": 320,
        }
    )
    return chart
