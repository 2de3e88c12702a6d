"""Configuration management for buildstamp."""

import logging
import tomllib
from datetime import date, datetime
from pathlib import Path
from typing import Any, Literal

import tomli_w
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .constants import (
    CONFIG_FILE,
    DEFAULT_VARIABLE_NAME,
    MIN_FORMAT_LENGTH,
    PROJECT_START_DATE_FORMAT,
    STAMP_DIR_NAME,
)
from .models import COUNTER_FIELDS, BuildResult, OverrideSpec, normalize_override

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Error reading or writing the configuration file."""


def parse_project_start_date(value: str | None) -> date | None:
    """Parse a yyyy-MM-dd date, returning None when absent or malformed."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), PROJECT_START_DATE_FORMAT).date()
    except ValueError:
        return None


class OverridesConfig(BaseModel):
    """Per-counter overrides.

    Each value is empty, an integer >= 0 (applied to the next build only) or
    an environment reference like ``${BASE_BUILD}`` (read on every build).
    """

    builds_today: str = ""
    builds_this_week: str = ""
    builds_this_month: str = ""
    builds_this_year: str = ""
    builds_all_time: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> str:
        # Hand-edited config files may hold junk or negative numbers
        if value is None:
            return ""
        return normalize_override(str(value))

    def specs(self) -> dict[str, OverrideSpec]:
        """Get override specs keyed by counter field."""
        return {field: OverrideSpec.parse(getattr(self, field)) for field in COUNTER_FIELDS}


class VersionConfig(BaseModel):
    """How the version string is built and exported."""

    format: str = Field(default="", description="Version template, e.g. '1.0.${BUILDS_TODAY}'")
    project_start_date: str | None = Field(default=None, description="Start date (yyyy-MM-dd)")
    variable_name: str = Field(
        default=DEFAULT_VARIABLE_NAME, description="Environment variable to export"
    )
    prefix_variable: str | None = Field(
        default=None, description="Environment variable holding the version prefix"
    )
    version_prefix: str | None = Field(default=None, description="Literal version prefix")
    prepend_prefix: bool = Field(
        default=False, description="Prepend the prefix to the formatted version"
    )
    worst_result_for_increment: BuildResult = BuildResult.NOT_BUILT
    use_as_display_name: bool = False
    use_utc: bool = Field(default=False, description="Format build dates in UTC")

    @model_validator(mode="before")
    @classmethod
    def _upgrade_legacy(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.pop("skip_failed_builds", False):
            logger.warning(
                "Config key 'skip_failed_builds' is deprecated; "
                "using worst_result_for_increment = 'SUCCESS'"
            )
            data["worst_result_for_increment"] = BuildResult.SUCCESS
        worst = data.get("worst_result_for_increment")
        if worst is not None and not isinstance(worst, BuildResult):
            try:
                data["worst_result_for_increment"] = BuildResult.parse(str(worst))
            except ValueError:
                logger.warning(
                    "Unknown worst_result_for_increment %r; using 'SUCCESS'", worst
                )
                data["worst_result_for_increment"] = BuildResult.SUCCESS
        return data

    def start_date(self) -> date | None:
        """Project start date, or None if unset or unparseable."""
        return parse_project_start_date(self.project_start_date)


class BuildstampConfig(BaseModel):
    """Root configuration for buildstamp."""

    version: VersionConfig = Field(default_factory=VersionConfig)
    overrides: OverridesConfig = Field(default_factory=OverridesConfig)


class ConfigIssue(BaseModel):
    """Problem reported by check_config."""

    level: Literal["error", "warning"]
    field: str
    message: str


def check_config(config: BuildstampConfig) -> list[ConfigIssue]:
    """Validate a configuration the way the settings form would.

    Returns:
        Issues found, errors and warnings in field order (empty if valid).
    """
    issues: list[ConfigIssue] = []
    version = config.version

    if not version.format:
        issues.append(
            ConfigIssue(
                level="error",
                field="version.format",
                message="Please set a version number format string",
            )
        )
    elif len(version.format) < MIN_FORMAT_LENGTH:
        issues.append(
            ConfigIssue(
                level="warning",
                field="version.format",
                message="Isn't the format string too short?",
            )
        )

    if not version.variable_name:
        issues.append(
            ConfigIssue(
                level="error",
                field="version.variable_name",
                message="Please set an environment variable name",
            )
        )

    if version.project_start_date and version.start_date() is None:
        issues.append(
            ConfigIssue(
                level="error",
                field="version.project_start_date",
                message="Valid dates are in the format yyyy-mm-dd",
            )
        )

    return issues


def clear_overrides(
    config: BuildstampConfig, fields: tuple[str, ...] | list[str]
) -> BuildstampConfig:
    """Return a copy of `config` with the given override fields emptied."""
    if not fields:
        return config
    overrides = config.overrides.model_copy(update={field: "" for field in fields})
    return config.model_copy(update={"overrides": overrides})


def get_stamp_dir(project_dir: Path | None = None) -> Path:
    """Get the .buildstamp directory of a project (cwd by default)."""
    return (project_dir or Path.cwd()) / STAMP_DIR_NAME


def load_config(stamp_dir: Path) -> BuildstampConfig:
    """Load config from .buildstamp/config.toml.

    Args:
        stamp_dir: Path to .buildstamp directory

    Returns:
        Loaded configuration, or defaults if config.toml doesn't exist

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    config_path = stamp_dir / CONFIG_FILE
    if not config_path.exists():
        return BuildstampConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return BuildstampConfig.model_validate(data)
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e


def save_config(stamp_dir: Path, config: BuildstampConfig) -> Path:
    """Write config back to .buildstamp/config.toml.

    Raises:
        ConfigError: If the file cannot be written
    """
    config_path = stamp_dir / CONFIG_FILE
    data = config.model_dump(mode="json", exclude_none=True)
    try:
        with open(config_path, "wb") as f:
            tomli_w.dump(data, f)
    except OSError as e:
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e
    return config_path


def write_config_template(stamp_dir: Path) -> Path:
    """Write default config.toml template.

    Args:
        stamp_dir: Path to .buildstamp directory

    Returns:
        Path to the written config file
    """
    config_path = stamp_dir / CONFIG_FILE
    template = {
        "version": {
            "format": "1.0.${BUILDS_THIS_YEAR}.${BUILDS_TODAY,XX}",
            "variable_name": DEFAULT_VARIABLE_NAME,
            "worst_result_for_increment": BuildResult.NOT_BUILT.value,
            "use_as_display_name": False,
            "use_utc": False,
        },
        # Overrides: an integer applies to the next build only,
        # "${VAR}" is read from the environment on every build
        "overrides": {field: "" for field in COUNTER_FIELDS},
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
