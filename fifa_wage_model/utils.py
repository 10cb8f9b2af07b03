# file: fifa_wage_model/utils.py
from __future__ import annotations

import logging
from typing import List, Union

import pandas as pd

# Position groups in display order; Forward is the fallback group
POSITION_GROUPS: List[str] = ["Goalkeeper", "Defender", "Midfielder", "Forward"]

FEET: List[str] = ["Left", "Right"]

# Filter sentinel that keeps every record
ALL = "All"

DEFAULT_MAXBINS = 30

# Model term names as written by the fitting software
INTERCEPT = "Intercept"
AGE_TERM = "age"
RATING_TERM = "overall_rating"
POSITION_PREFIX = "position_group_"
FOOT_PREFIX = "preferred_foot_"

# Columns the dataset must carry
PLAYER_COLUMNS: List[str] = ["positions", "wage_euro"]


def ensure_columns(df: pd.DataFrame, cols: List[str], name: str) -> None:
    """Raise with a clear message if required columns are missing."""
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"{name} missing columns: {missing}")


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """Basic stream logging for the CLI and the dashboard."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("fifa_wage_model").setLevel(level)
