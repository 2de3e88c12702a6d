"""Check command - validate the configuration."""

from pathlib import Path

import typer

from ..config import ConfigError, check_config, get_stamp_dir, load_config
from ..constants import EXIT_INVALID, EXIT_IO_ERROR
from ..output import get_output_context


def check(
    project_dir: Path | None = typer.Option(
        None,
        "--dir",
        "-d",
        help="Project directory (defaults to cwd)",
    ),
) -> None:
    """Validate .buildstamp/config.toml."""
    ctx = get_output_context()

    try:
        config = load_config(get_stamp_dir(project_dir))
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_IO_ERROR) from None

    issues = check_config(config)
    if ctx.json_mode:
        ctx.emit_json({"issues": [issue.model_dump() for issue in issues]})
    else:
        for issue in issues:
            color = "red" if issue.level == "error" else "yellow"
            ctx.console.print(f"[{color}]{issue.level}[/{color}] {issue.field}: {issue.message}")

    if any(issue.level == "error" for issue in issues):
        raise typer.Exit(EXIT_INVALID)

    ctx.print("[green]Configuration OK[/green]")
