"""Shared test fixtures for buildstamp tests."""

import os
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from buildstamp.constants import CONFIG_FILE, STAMP_DIR_NAME


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Create an empty project directory and make it the cwd."""
    original_cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)


@pytest.fixture
def stamp_dir(project_dir: Path) -> Path:
    """Create an initialized .buildstamp directory with a minimal config.

    Returns the .buildstamp directory path.
    """
    d = project_dir / STAMP_DIR_NAME
    d.mkdir()
    config = """[version]
format = "1.0.${BUILDS_ALL_TIME}"
variable_name = "APP_VERSION"
"""
    (d / CONFIG_FILE).write_text(config)
    return d


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove variables the tests set so the host environment cannot leak in."""
    for name in ("VERSION_PREFIX", "BASE_BUILD", "GIT_COMMIT", "APP_VERSION"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
