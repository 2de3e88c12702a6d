"""Console and stdout output for the buildstamp CLI.

CI scripts capture stdout (``VERSION=$(buildstamp next)``), so only the
machine-readable result goes there: the bare version, a ``NAME=value``
export line or a JSON document. Everything meant for people goes to the Rich
console on stderr.
"""

import json
import shlex
from dataclasses import dataclass
from typing import Any

from rich.console import Console

DRY_RUN_TAG = "[cyan][DRY RUN][/cyan]"


@dataclass
class OutputContext:
    """Where and how a command reports.

    Attributes:
        console: Rich console for human-readable messages (stderr).
        json_mode: Emit JSON on stdout instead of text.
        dry_run: Commands compute but do not write history or config.
    """

    console: Console
    json_mode: bool = False
    dry_run: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Show a message unless JSON output was requested."""
        if not self.json_mode:
            self.console.print(message, style=style)

    def note_dry_run(self, message: str) -> None:
        self.console.print(f"{DRY_RUN_TAG} {message}")

    def emit_json(self, data: dict[str, Any]) -> None:
        """Write a JSON document to stdout (JSON mode only)."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def emit(self, data: dict[str, Any], text: str = "") -> None:
        """Write a command's result to stdout: `data` as JSON or `text` as is."""
        if self.json_mode:
            self.emit_json(data)
        elif text:
            print(text)

    def export(self, name: str, value: str) -> None:
        """Write ``NAME=value`` quoted for ``eval`` in a POSIX shell."""
        print(f"{name}={shlex.quote(value)}")

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        if self.json_mode:
            self.emit_json({"error": message, **(data or {})})
        else:
            self.console.print(f"[red]Error: {message}[/red]")

    def warning(self, message: str) -> None:
        if not self.json_mode:
            self.console.print(f"[yellow]Warning: {message}[/yellow]")

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Report a completed change; `data` is the JSON-mode payload."""
        if self.json_mode:
            self.emit_json({"success": message, **(data or {})})
        else:
            self.console.print(f"[green]{message}[/green]")


_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Return the context installed by the CLI callback.

    Outside the CLI (library use, tests) a plain stderr context is returned.
    """
    if _ctx is None:
        return OutputContext(Console(stderr=True))
    return _ctx


def set_output_context(ctx: OutputContext | None) -> None:
    global _ctx
    _ctx = ctx
