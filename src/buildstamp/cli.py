"""Buildstamp CLI: build counters and version strings for CI jobs."""

import typer

from buildstamp import __version__

from .commands import check, finish, history, init, next_build, render
from .logging import configure_logging
from .output import OutputContext, set_output_context


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"buildstamp {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="buildstamp",
    help="Rolling build counters and version strings for CI jobs",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Debug logging with time and source location (same as -vv)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Compute and print without writing history or config",
    ),
) -> None:
    """Buildstamp - rolling build counters and version strings."""
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
        debug=debug,
    )
    set_output_context(OutputContext(console=console, json_mode=json_output, dry_run=dry_run))


app.command()(init)
app.command("next")(next_build)
app.command()(finish)
app.command()(render)
app.command()(history)
app.command()(check)


if __name__ == "__main__":
    app()
