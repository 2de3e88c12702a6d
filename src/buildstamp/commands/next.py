"""Next command - stamp a new build and print its version."""

import logging
import os
from datetime import datetime
from pathlib import Path

import typer

from ..config import (
    ConfigError,
    check_config,
    clear_overrides,
    get_stamp_dir,
    load_config,
    save_config,
)
from ..constants import EXIT_INVALID, EXIT_IO_ERROR
from ..core import stamp_build
from ..models import BuildRecord, BuildResult
from ..output import get_output_context
from ..services import HistoryError, HistoryStore

logger = logging.getLogger(__name__)


def parse_timestamp(value: str | None) -> datetime:
    """Parse an ISO-8601 timestamp, defaulting to now in local time.

    Raises:
        ValueError: If the value is not ISO-8601
    """
    if value is None:
        return datetime.now().astimezone()
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Not an ISO-8601 timestamp: {value}") from None


def parse_result(value: str | None) -> BuildResult | None:
    """Parse an optional build result name.

    Raises:
        ValueError: If the result name is unknown
    """
    if value is None:
        return None
    return BuildResult.parse(value)


def next_build(
    project_dir: Path | None = typer.Option(
        None,
        "--dir",
        "-d",
        help="Project directory (defaults to cwd)",
    ),
    timestamp: str | None = typer.Option(
        None,
        "--timestamp",
        "-t",
        help="Build start time (ISO-8601, defaults to now)",
    ),
    result: str | None = typer.Option(
        None,
        "--result",
        "-r",
        help="Result to record with the build, if already known",
    ),
    export: bool = typer.Option(
        False,
        "--export",
        "-e",
        help="Print NAME=value for shell eval instead of the bare version",
    ),
) -> None:
    """Stamp a new build: resolve counters, format and record the version."""
    ctx = get_output_context()
    stamp_dir = get_stamp_dir(project_dir)

    if not stamp_dir.exists():
        ctx.error("Buildstamp not initialized. Run 'buildstamp init' first.")
        raise typer.Exit(EXIT_INVALID)

    try:
        build_time = parse_timestamp(timestamp)
        build_result = parse_result(result)
    except ValueError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_INVALID) from None

    try:
        config = load_config(stamp_dir)
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_IO_ERROR) from None

    errors = [issue for issue in check_config(config) if issue.level == "error"]
    if errors:
        for issue in errors:
            ctx.error(f"{issue.field}: {issue.message}")
        raise typer.Exit(EXIT_INVALID)

    store = HistoryStore.in_dir(stamp_dir)
    try:
        store.load()
    except HistoryError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_IO_ERROR) from None

    build = BuildRecord(number=store.next_number(), timestamp=build_time, result=build_result)
    stamp = stamp_build(config, store, build, build_time, dict(os.environ))
    record = build.model_copy(
        update={"counters": stamp.counters, "version": stamp.version, "prefix": stamp.prefix}
    )

    if ctx.dry_run:
        ctx.note_dry_run(f"Would record build #{record.number}")
        if stamp.consumed:
            ctx.note_dry_run(f"Would clear overrides: {', '.join(stamp.consumed)}")
    else:
        try:
            store.append(record)
        except HistoryError as e:
            ctx.error(str(e))
            raise typer.Exit(EXIT_IO_ERROR) from None

        if stamp.consumed:
            # The version is already recorded; a stale override only affects the next build
            try:
                save_config(stamp_dir, clear_overrides(config, stamp.consumed))
            except ConfigError as e:
                logger.warning("Could not clear applied overrides: %s", e)
                ctx.warning(f"Overrides {', '.join(stamp.consumed)} were not cleared")

    variable_name = config.version.variable_name
    if ctx.json_mode:
        ctx.emit_json(
            {
                "number": record.number,
                "version": stamp.version,
                "variable": variable_name,
                "prefix": stamp.prefix,
                "display_name": stamp.display_name,
                "counters": stamp.counters.model_dump(),
                "consumed_overrides": list(stamp.consumed),
                "dry_run": ctx.dry_run,
            }
        )
    elif export:
        ctx.export(variable_name, stamp.version)
    else:
        ctx.emit({}, stamp.version)
