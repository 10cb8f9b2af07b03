# file: fifa_wage_model/data_models.py
from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .utils import ALL, DEFAULT_MAXBINS

PositionGroup = Literal["Goalkeeper", "Defender", "Midfielder", "Forward"]
Foot = Literal["Left", "Right"]


class DashboardConfig(BaseModel):
    """Process-wide display and resource settings."""
    model_config = ConfigDict(frozen=True)

    wages_path: str = "data/fifa_clean.csv"
    coefficients_path: str = "data/model_coefficients.json"
    # True when the fitted target was log(wage); exp() recovers the wage
    target_is_log: bool = True
    # EUR -> display currency
    currency_rate: float = Field(1.08, gt=0)
    currency: str = "USD"
    maxbins: int = Field(DEFAULT_MAXBINS, ge=1)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "DashboardConfig":
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))


class FeatureVector(BaseModel):
    """Predictor inputs; every field has a default."""
    model_config = ConfigDict(frozen=True)

    age: int = Field(24, ge=16, le=45)
    rating: int = Field(85, ge=40, le=99, description="FIFA overall rating")
    position_group: PositionGroup = "Midfielder"
    preferred_foot: Foot = "Right"


class Coefficient(BaseModel):
    """One fitted model term."""
    model_config = ConfigDict(frozen=True)

    term: str
    estimate: float


# ---- transform pipeline stages ----

class DeriveStage(BaseModel):
    """Attach a position group derived from the free-text positions column."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["derive"] = "derive"
    source: str = "positions"
    target: str = "group"


class RescaleStage(BaseModel):
    """Attach `target = source * factor`."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["rescale"] = "rescale"
    source: str = "wage_euro"
    target: str = "wage_usd"
    factor: float = 1.0


class FilterStage(BaseModel):
    """Keep rows whose `field` equals `value`; the ALL sentinel keeps everything."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["filter"] = "filter"
    field: str = "group"
    value: str = ALL


class HistogramStage(BaseModel):
    """Equal-width bins over the observed range of `field`."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["bin"] = "bin"
    field: str = "wage_usd"
    maxbins: int = Field(DEFAULT_MAXBINS, ge=1)


class BoxSummaryStage(BaseModel):
    """Min, quartiles and max of `field` per `by` group."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["boxplot"] = "boxplot"
    field: str = "wage_usd"
    by: str = "group"


AggregateStage = Annotated[Union[HistogramStage, BoxSummaryStage], Field(discriminator="kind")]


class PipelineSpec(BaseModel):
    """derive -> rescale -> filter -> aggregate, in that fixed order."""
    model_config = ConfigDict(frozen=True)

    derive: DeriveStage = DeriveStage()
    rescale: RescaleStage = RescaleStage()
    filter: FilterStage = FilterStage()
    aggregate: AggregateStage = HistogramStage()
