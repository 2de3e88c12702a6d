"""Build record model for the history file.

One record is appended per stamped build. The next build reads the most
recent matching record back as its previous build.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .counters import BuildCounters
from .result import BuildResult


class BuildRecord(BaseModel):
    """Stamped build written to .buildstamp/history.json.

    Attributes:
        number: Sequential build number within the history (1-indexed).
        timestamp: When the build started.
        result: Final build result (None until the build reports it).
        counters: Counters resolved for this build (None if stamping failed).
        version: Formatted version string.
        prefix: Version prefix in effect for this build.
    """

    number: int = Field(ge=1, description="Build number")
    timestamp: datetime = Field(description="Build start time")
    result: BuildResult | None = Field(default=None, description="Final result")
    counters: BuildCounters | None = Field(default=None, description="Resolved counters")
    version: str | None = Field(default=None, description="Formatted version string")
    prefix: str | None = Field(default=None, description="Version prefix in effect")


class BuildHistory(BaseModel):
    """Top-level document of the history file."""

    builds: list[BuildRecord] = Field(default_factory=list)
