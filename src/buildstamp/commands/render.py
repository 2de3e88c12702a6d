"""Render command - expand a template without touching the history."""

import os

import typer

from ..config import parse_project_start_date
from ..constants import EXIT_INVALID
from ..core import expand
from ..models import BuildCounters
from ..output import get_output_context
from .next import parse_timestamp


def render(
    template: str = typer.Argument(..., help="Version template, e.g. '1.0.${BUILDS_TODAY,XX}'"),
    today: int = typer.Option(1, "--today", min=0, help="Value of BUILDS_TODAY"),
    week: int = typer.Option(1, "--week", min=0, help="Value of BUILDS_THIS_WEEK"),
    month: int = typer.Option(1, "--month", min=0, help="Value of BUILDS_THIS_MONTH"),
    year: int = typer.Option(1, "--year", min=0, help="Value of BUILDS_THIS_YEAR"),
    all_time: int = typer.Option(1, "--all-time", min=0, help="Value of BUILDS_ALL_TIME"),
    timestamp: str | None = typer.Option(
        None,
        "--timestamp",
        "-t",
        help="Build time (ISO-8601, defaults to now)",
    ),
    start_date: str | None = typer.Option(
        None,
        "--start-date",
        help="Project start date (yyyy-MM-dd)",
    ),
) -> None:
    """Expand a version template with the given counters."""
    ctx = get_output_context()

    try:
        build_time = parse_timestamp(timestamp)
    except ValueError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_INVALID) from None

    counters = BuildCounters(
        builds_today=today,
        builds_this_week=week,
        builds_this_month=month,
        builds_this_year=year,
        builds_all_time=all_time,
    )
    version = expand(
        template,
        counters,
        dict(os.environ),
        build_time,
        parse_project_start_date(start_date),
    )
    ctx.emit({"version": version, "template": template}, version)
