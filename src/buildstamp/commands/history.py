"""History command - list recorded builds."""

from pathlib import Path

import typer
from rich.table import Table

from ..config import get_stamp_dir
from ..constants import EXIT_IO_ERROR
from ..output import get_output_context
from ..services import HistoryError, HistoryStore


def history(
    limit: int = typer.Option(10, "--limit", "-l", min=1, help="Number of builds to show"),
    project_dir: Path | None = typer.Option(
        None,
        "--dir",
        "-d",
        help="Project directory (defaults to cwd)",
    ),
) -> None:
    """Show the most recent stamped builds."""
    ctx = get_output_context()
    store = HistoryStore.in_dir(get_stamp_dir(project_dir))

    try:
        records = store.load()[-limit:]
    except HistoryError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_IO_ERROR) from None

    if ctx.json_mode:
        ctx.emit_json({"builds": [r.model_dump(mode="json") for r in records]})
        return

    if not records:
        ctx.print("No builds recorded yet.")
        return

    table = Table(title="Build history")
    table.add_column("#", justify="right")
    table.add_column("Started")
    table.add_column("Version")
    table.add_column("Result")
    table.add_column("Day/Week/Month/Year/All", justify="right")

    for record in reversed(records):
        counters = record.counters
        counts = (
            "/".join(
                str(v)
                for v in (
                    counters.builds_today,
                    counters.builds_this_week,
                    counters.builds_this_month,
                    counters.builds_this_year,
                    counters.builds_all_time,
                )
            )
            if counters
            else "-"
        )
        table.add_row(
            str(record.number),
            record.timestamp.strftime("%Y-%m-%d %H:%M"),
            record.version or "-",
            record.result.value if record.result else "-",
            counts,
        )

    ctx.console.print(table)
