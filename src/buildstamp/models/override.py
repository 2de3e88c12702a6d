"""Counter override model.

An override replaces the computed value of one counter. It is written in the
configuration as either a non-negative integer literal (applied once, then
cleared) or an environment reference such as ``${BASE_BUILD}`` or
``$BASE_BUILD`` (read again on every build).
"""

import re
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, field_validator

ENV_REFERENCE_PATTERN = re.compile(r"\$\{(\w+)\}|\$(\w+)")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
MAX_OVERRIDE = 2**31 - 1


def parse_non_negative(value: str | None) -> int | None:
    """Parse a decimal integer in [0, MAX_OVERRIDE], returning None for anything else."""
    if value is None:
        return None
    text = value.strip()
    if not INTEGER_PATTERN.fullmatch(text):
        return None
    try:
        number = int(text)
    except ValueError:
        # Beyond the interpreter's integer string limit
        return None
    return number if 0 <= number <= MAX_OVERRIDE else None


def normalize_override(value: str | None) -> str:
    """Return the canonical form of an override string.

    Integers >= 0 are kept in canonical decimal form, environment references
    are kept verbatim and everything else (negative or oversized numbers, junk) becomes
    the empty string.
    """
    if value is None:
        return ""
    text = value.strip()
    if INTEGER_PATTERN.fullmatch(text):
        number = parse_non_negative(text)
        return "" if number is None else str(number)
    if ENV_REFERENCE_PATTERN.fullmatch(text):
        return text
    return ""


class OverrideSpec(BaseModel):
    """Override configured for a single counter field."""

    model_config = ConfigDict(frozen=True)

    raw: str = ""

    @field_validator("raw", mode="before")
    @classmethod
    def _normalize(cls, value: str | None) -> str:
        return normalize_override(value)

    @classmethod
    def parse(cls, value: str | None) -> "OverrideSpec":
        """Build an override from a user-provided string."""
        return cls(raw=value)

    @property
    def is_empty(self) -> bool:
        return self.raw == ""

    @property
    def variable(self) -> str | None:
        """Name of the referenced environment variable, if any."""
        match = ENV_REFERENCE_PATTERN.fullmatch(self.raw)
        if match is None:
            return None
        return match.group(1) or match.group(2)

    @property
    def is_one_shot(self) -> bool:
        """True for literal overrides, which are cleared after being applied."""
        return not self.is_empty and self.variable is None

    def resolve(self, environment: Mapping[str, str]) -> int | None:
        """Resolve the override to a counter value.

        Returns:
            The override value, or None if the override is empty or the
            referenced variable is missing or not an integer >= 0.
        """
        if self.is_empty:
            return None
        name = self.variable
        if name is None:
            return parse_non_negative(self.raw)
        return parse_non_negative(environment.get(name))
