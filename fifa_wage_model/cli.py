# file: fifa_wage_model/cli.py
from __future__ import annotations

from typing import Optional

import typer

from .coefficients import CoefficientStore
from .data_models import DashboardConfig, FeatureVector
from .features import load_players_or_empty
from .pipeline import box_pipeline, histogram_pipeline, run
from .predict import format_currency, link_caption, predict as predict_wage
from .utils import ALL, FEET, POSITION_GROUPS, configure_logging

app = typer.Typer(add_completion=False, help="FIFA wage model CLI")


def _config(ctx: typer.Context) -> DashboardConfig:
    return ctx.obj if isinstance(ctx.obj, DashboardConfig) else DashboardConfig()


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, help="JSON file with DashboardConfig overrides"),
    wages: Optional[str] = typer.Option(None, help="Player wage CSV"),
    coefficients: Optional[str] = typer.Option(None, help="Model coefficients JSON"),
    currency_rate: Optional[float] = typer.Option(None, help="EUR -> display currency factor"),
    linear: bool = typer.Option(False, "--linear", help="Model target was wage, not log wage"),
    log_level: str = typer.Option("WARNING", help="Logging level"),
):
    configure_logging(log_level)
    cfg = DashboardConfig.from_json(config) if config else DashboardConfig()
    overrides = {}
    if wages:
        overrides["wages_path"] = wages
    if coefficients:
        overrides["coefficients_path"] = coefficients
    if currency_rate is not None:
        overrides["currency_rate"] = currency_rate
    if linear:
        overrides["target_is_log"] = False
    ctx.obj = DashboardConfig.model_validate({**cfg.model_dump(), **overrides})


@app.command()
def predict(
    ctx: typer.Context,
    age: int = typer.Option(24, min=16, max=45),
    rating: int = typer.Option(85, min=40, max=99, help="FIFA overall rating"),
    position_group: str = typer.Option("Midfielder", help=" / ".join(POSITION_GROUPS)),
    foot: str = typer.Option("Right", help=" / ".join(FEET)),
):
    cfg = _config(ctx)
    if position_group not in POSITION_GROUPS:
        raise typer.BadParameter(f"must be one of {POSITION_GROUPS}", param_hint="--position-group")
    if foot not in FEET:
        raise typer.BadParameter(f"must be one of {FEET}", param_hint="--foot")
    snapshot = CoefficientStore(cfg.coefficients_path).load()
    features = FeatureVector(age=age, rating=rating, position_group=position_group, preferred_foot=foot)
    value = predict_wage(snapshot.coefficients, features, cfg)
    typer.echo(f"predicted wage: {format_currency(value, cfg.currency)}")
    typer.echo(link_caption(cfg.target_is_log, cfg.currency))


@app.command()
def histogram(
    ctx: typer.Context,
    group: str = typer.Option(ALL, help="Position group filter"),
    maxbins: Optional[int] = typer.Option(None, min=1),
):
    cfg = _config(ctx)
    if group != ALL and group not in POSITION_GROUPS:
        raise typer.BadParameter(f"must be {ALL} or one of {POSITION_GROUPS}", param_hint="--group")
    series = run(load_players_or_empty(cfg.wages_path), histogram_pipeline(cfg, group, maxbins))
    typer.echo(series.to_string(index=False) if len(series) else "no players")


@app.command()
def summary(ctx: typer.Context):
    cfg = _config(ctx)
    table = run(load_players_or_empty(cfg.wages_path), box_pipeline(cfg))
    typer.echo(table.to_string(index=False) if len(table) else "no players")


@app.command()
def coefficients(ctx: typer.Context):
    cfg = _config(ctx)
    snapshot = CoefficientStore(cfg.coefficients_path).load()
    if snapshot.error is not None:
        typer.echo(f"unavailable: {snapshot.error.message}", err=True)
    frame = snapshot.to_frame()
    typer.echo(frame.to_string(index=False) if len(frame) else "no coefficients")
    for issue in snapshot.issues:
        typer.echo(f"warning: {issue.message}", err=True)


if __name__ == "__main__":
    app()
