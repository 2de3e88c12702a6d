"""Finish command - record the final result of a stamped build."""

from pathlib import Path

import typer

from ..config import get_stamp_dir
from ..constants import EXIT_INVALID, EXIT_IO_ERROR
from ..output import get_output_context
from ..services import HistoryError, HistoryStore
from .next import parse_result


def finish(
    result: str = typer.Option(
        ...,
        "--result",
        "-r",
        help="Final result: SUCCESS, UNSTABLE, FAILURE, ABORTED or NOT_BUILT",
    ),
    number: int | None = typer.Option(
        None,
        "--number",
        "-n",
        help="Build number (defaults to the latest build)",
    ),
    project_dir: Path | None = typer.Option(
        None,
        "--dir",
        "-d",
        help="Project directory (defaults to cwd)",
    ),
) -> None:
    """Record the final result of a build for the next build's increment policy."""
    ctx = get_output_context()

    try:
        build_result = parse_result(result)
    except ValueError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_INVALID) from None
    assert build_result is not None

    store = HistoryStore.in_dir(get_stamp_dir(project_dir))
    try:
        store.load()
    except HistoryError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_IO_ERROR) from None

    if number is None:
        latest = store.latest()
        if latest is None:
            ctx.error("No builds recorded yet")
            raise typer.Exit(EXIT_INVALID)
        number = latest.number
    elif store.get(number) is None:
        ctx.error(f"Build #{number} not found")
        raise typer.Exit(EXIT_INVALID)

    if ctx.dry_run:
        ctx.note_dry_run(f"Would record {build_result.value} for build #{number}")
        return

    try:
        store.update_result(number, build_result)
    except HistoryError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_IO_ERROR) from None

    ctx.success(
        f"Build #{number}: {build_result.value}",
        {"number": number, "result": build_result.value},
    )
