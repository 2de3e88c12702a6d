"""Init command implementation."""

from pathlib import Path

import typer

from ..config import get_stamp_dir, write_config_template
from ..constants import CONFIG_FILE, EXIT_IO_ERROR
from ..output import get_output_context
from ..services import HistoryError, HistoryStore


def init(
    project_dir: Path | None = typer.Option(
        None,
        "--dir",
        "-d",
        help="Project directory (defaults to cwd)",
    ),
) -> None:
    """Initialize buildstamp in a project."""
    ctx = get_output_context()
    stamp_dir = get_stamp_dir(project_dir)
    config_path = stamp_dir / CONFIG_FILE
    store = HistoryStore.in_dir(stamp_dir)

    if ctx.dry_run:
        ctx.note_dry_run("Would initialize buildstamp:")
        ctx.console.print(f"  Create directory: {stamp_dir}")
        if not config_path.exists():
            ctx.console.print(f"  Create config: {config_path}")
        if not store.path.exists():
            ctx.console.print(f"  Create history: {store.path}")
        return

    stamp_dir.mkdir(parents=True, exist_ok=True)

    if not config_path.exists():
        write_config_template(stamp_dir)
        ctx.print(f"[green]Created config template:[/green] {config_path}")
    else:
        ctx.print(f"[yellow]Config already exists:[/yellow] {config_path}")

    if not store.path.exists():
        try:
            store.create()
        except HistoryError as e:
            ctx.error(str(e))
            raise typer.Exit(EXIT_IO_ERROR) from None
        ctx.print(f"[green]Created history:[/green] {store.path}")

    ctx.success("Buildstamp initialized successfully!", {"path": str(stamp_dir)})
