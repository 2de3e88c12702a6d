"""Inputs describing the build being stamped."""

from collections.abc import Mapping
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .result import BuildResult


class BuildContext(BaseModel):
    """Read-only view of the current build.

    Attributes:
        timestamp: When the build started.
        result: Result so far (usually unknown while stamping).
        environment: Build environment variables (case-sensitive keys).
        version_prefix: Prefix selecting which ancestor counts as previous.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    result: BuildResult | None = None
    environment: Mapping[str, str] = Field(default_factory=dict)
    version_prefix: str | None = None
