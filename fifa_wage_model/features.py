# file: fifa_wage_model/features.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple, Union

import pandas as pd

from .errors import SourceUnavailable
from .utils import PLAYER_COLUMNS, ensure_columns

logger = logging.getLogger(__name__)

# Ordered (group, codes) rules; first match wins, Forward is the fallback.
# Substring match on the raw text, so "RWB" also hits "RW"; order decides.
GROUP_RULES: List[Tuple[str, Tuple[str, ...]]] = [
    ("Goalkeeper", ("GK",)),
    ("Defender", ("CB", "LB", "RB", "RWB", "LWB")),
    ("Midfielder", ("CM", "CDM", "CAM", "RM", "LM", "RW", "LW")),
]
FALLBACK_GROUP = "Forward"


def derive_group(positions: str) -> str:
    """Coarse position group from a free-text positions field (e.g. "LB, LM")."""
    text = "" if positions is None or (isinstance(positions, float) and pd.isna(positions)) else str(positions)
    for group, codes in GROUP_RULES:
        if any(code in text for code in codes):
            return group
    return FALLBACK_GROUP


def add_position_group(df: pd.DataFrame, source: str = "positions", target: str = "group") -> pd.DataFrame:
    """Copy of df with `target` (re)derived from `source`."""
    out = df.copy()
    out[target] = out[source].map(derive_group) if len(out) else pd.Series(dtype=object)
    return out


def load_players(path: Union[str, Path]) -> pd.DataFrame:
    """Read the player wage table; extra columns are kept but ignored downstream."""
    name = str(path)
    try:
        df = pd.read_csv(path)
        ensure_columns(df, PLAYER_COLUMNS, name)
    except (OSError, ValueError) as e:
        raise SourceUnavailable(name, str(e)) from e
    df["positions"] = df["positions"].fillna("").astype(str)
    df["wage_euro"] = pd.to_numeric(df["wage_euro"], errors="coerce")
    logger.info("Loaded %d players from %s", len(df), name)
    return df


def load_players_or_empty(path: Union[str, Path]) -> pd.DataFrame:
    """Best-effort variant of load_players: an empty table when unavailable."""
    try:
        return load_players(path)
    except SourceUnavailable as e:
        logger.warning("Player data not loaded (%s); charts will be empty", e.message)
        return pd.DataFrame(columns=PLAYER_COLUMNS)
