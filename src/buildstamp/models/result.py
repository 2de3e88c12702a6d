"""Build result severity model."""

from enum import Enum


class BuildResult(str, Enum):
    """Outcome of a build, ordered from least to most severe."""

    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
    ABORTED = "ABORTED"
    NOT_BUILT = "NOT_BUILT"

    @property
    def severity(self) -> int:
        """Position in the severity ordering (0 = SUCCESS)."""
        return _SEVERITY.index(self)

    def is_worse_than(self, other: "BuildResult") -> bool:
        """Return True if this result is strictly more severe than `other`."""
        return self.severity > other.severity

    @classmethod
    def parse(cls, value: str) -> "BuildResult":
        """Parse a result name case-insensitively.

        Raises:
            ValueError: If the name is not a known result.
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            names = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown build result '{value}' (expected one of: {names})") from None


_SEVERITY = list(BuildResult)
