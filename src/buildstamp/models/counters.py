"""Build counter value object."""

from pydantic import BaseModel, ConfigDict, Field

COUNTER_FIELDS = (
    "builds_today",
    "builds_this_week",
    "builds_this_month",
    "builds_this_year",
    "builds_all_time",
)


class BuildCounters(BaseModel):
    """Resolved counters for one build.

    Produced once per build, stored with the build record and read back as the
    previous build's counters by the next build in the chain.

    Attributes:
        builds_today: Builds in the current calendar day.
        builds_this_week: Builds in the current ISO week.
        builds_this_month: Builds in the current month.
        builds_this_year: Builds in the current year.
        builds_all_time: Builds since the counter was started.
    """

    model_config = ConfigDict(frozen=True)

    builds_today: int = Field(default=1, ge=0, description="Builds today")
    builds_this_week: int = Field(default=1, ge=0, description="Builds this week")
    builds_this_month: int = Field(default=1, ge=0, description="Builds this month")
    builds_this_year: int = Field(default=1, ge=0, description="Builds this year")
    builds_all_time: int = Field(default=1, ge=0, description="Builds all time")

    def get(self, field: str) -> int:
        """Get a counter by field name."""
        if field not in COUNTER_FIELDS:
            raise KeyError(field)
        return getattr(self, field)
