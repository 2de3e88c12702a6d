"""Tests for output formatting."""

import io
import json

import pytest
from rich.console import Console

from buildstamp.output import OutputContext, get_output_context, set_output_context


def make_ctx(json_mode: bool = False) -> tuple[OutputContext, io.StringIO]:
    output = io.StringIO()
    console = Console(file=output, force_terminal=False)
    return OutputContext(console=console, json_mode=json_mode), output


class TestOutputContextPrint:
    """Tests for OutputContext.print method."""

    def test_print_in_normal_mode(self) -> None:
        """print should output message in normal mode."""
        ctx, output = make_ctx()
        ctx.print("Hello world")
        assert "Hello world" in output.getvalue()

    def test_print_suppressed_in_json_mode(self) -> None:
        """print should be suppressed in json mode."""
        ctx, output = make_ctx(json_mode=True)
        ctx.print("Hello world")
        assert output.getvalue() == ""


class TestOutputContextResult:
    """Tests for machine-readable output on stdout."""

    def test_emit_prints_bare_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        ctx, output = make_ctx()
        ctx.emit({"version": "1.0.3"}, "1.0.3")
        assert capsys.readouterr().out == "1.0.3\n"
        assert output.getvalue() == ""

    def test_emit_in_json_mode(self, capsys: pytest.CaptureFixture[str]) -> None:
        ctx, _ = make_ctx(json_mode=True)
        ctx.emit({"version": "1.0.3"}, "1.0.3")
        assert json.loads(capsys.readouterr().out) == {"version": "1.0.3"}

    def test_emit_json_suppressed_in_normal_mode(self, capsys: pytest.CaptureFixture[str]) -> None:
        ctx, _ = make_ctx()
        ctx.emit_json({"key": "value"})
        assert capsys.readouterr().out == ""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1.0.3", "BUILD_VERSION=1.0.3\n"),
            ("1.0 beta", "BUILD_VERSION='1.0 beta'\n"),
            ("it's", "BUILD_VERSION='it'\"'\"'s'\n"),
        ],
    )
    def test_export_is_shell_quoted(
        self, capsys: pytest.CaptureFixture[str], value: str, expected: str
    ) -> None:
        ctx, _ = make_ctx()
        ctx.export("BUILD_VERSION", value)
        assert capsys.readouterr().out == expected


class TestOutputContextMessages:
    """Tests for error, warning and success messages."""

    def test_error_in_normal_mode(self) -> None:
        ctx, output = make_ctx()
        ctx.error("Something went wrong")
        assert "Error: Something went wrong" in output.getvalue()

    def test_error_in_json_mode(self, capsys: pytest.CaptureFixture[str]) -> None:
        ctx, _ = make_ctx(json_mode=True)
        ctx.error("Something went wrong", {"code": 2})
        assert json.loads(capsys.readouterr().out) == {"error": "Something went wrong", "code": 2}

    def test_warning_suppressed_in_json_mode(self, capsys: pytest.CaptureFixture[str]) -> None:
        ctx, output = make_ctx(json_mode=True)
        ctx.warning("Careful")
        assert output.getvalue() == ""
        assert capsys.readouterr().out == ""

    def test_dry_run_note(self) -> None:
        ctx, output = make_ctx()
        ctx.note_dry_run("Would record build #3")
        assert "[DRY RUN] Would record build #3" in output.getvalue()

    def test_success_in_normal_mode(self) -> None:
        ctx, output = make_ctx()
        ctx.success("Done")
        assert "Done" in output.getvalue()


class TestGlobalContext:
    """Tests for the process-wide output context."""

    def test_set_and_get(self) -> None:
        ctx, _ = make_ctx(json_mode=True)
        set_output_context(ctx)
        try:
            assert get_output_context() is ctx
        finally:
            set_output_context(None)

    def test_default_context(self) -> None:
        set_output_context(None)
        ctx = get_output_context()
        assert ctx.json_mode is False
        assert ctx.dry_run is False
