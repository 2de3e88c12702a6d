"""Build history file for the command-line host.

Keeps one BuildRecord per stamped build in .buildstamp/history.json. Records
are never edited after the build finishes except for setting the final result.
Writes go to a temporary file that is renamed over the history file.
"""

import contextlib
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from ..constants import HISTORY_FILE
from ..models import BuildHistory, BuildRecord, BuildResult

logger = logging.getLogger(__name__)


class HistoryError(Exception):
    """Error reading or writing the build history."""


class HistoryStore:
    """Build records backed by a JSON file.

    Implements the BuildChain protocol: previous(build) returns the record
    with the highest number below the build's number, so it also works for a
    build that has not been appended yet.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._records: list[BuildRecord] | None = None

    @classmethod
    def in_dir(cls, stamp_dir: Path) -> "HistoryStore":
        """Open the history file of a .buildstamp directory."""
        return cls(stamp_dir / HISTORY_FILE)

    def load(self) -> list[BuildRecord]:
        """Read the history file.

        Returns:
            Records ordered by build number (empty if the file is missing).

        Raises:
            HistoryError: If the file cannot be read or is corrupt
        """
        if not self.path.exists():
            self._records = []
            return self._records
        try:
            history = BuildHistory.model_validate_json(self.path.read_text())
        except (OSError, ValidationError) as e:
            raise HistoryError(f"Cannot read build history {self.path}: {e}") from e
        self._records = sorted(history.builds, key=lambda r: r.number)
        return self._records

    @property
    def records(self) -> list[BuildRecord]:
        if self._records is None:
            return self.load()
        return self._records

    def latest(self) -> BuildRecord | None:
        records = self.records
        return records[-1] if records else None

    def get(self, number: int) -> BuildRecord | None:
        for record in self.records:
            if record.number == number:
                return record
        return None

    def next_number(self) -> int:
        latest = self.latest()
        return latest.number + 1 if latest else 1

    def previous(self, build: BuildRecord) -> BuildRecord | None:
        candidate = None
        for record in self.records:
            if record.number >= build.number:
                break
            candidate = record
        return candidate

    def create(self) -> None:
        """Write an empty history file unless one exists.

        Raises:
            HistoryError: If the write fails
        """
        if not self.path.exists():
            self._write([])

    def append(self, record: BuildRecord) -> None:
        """Add a record and write the history file.

        Raises:
            HistoryError: If the number is already taken or the write fails
        """
        if self.get(record.number) is not None:
            raise HistoryError(f"Build #{record.number} already recorded")
        records = [*self.records, record]
        self._write(records)

    def update_result(self, number: int, result: BuildResult) -> BuildRecord:
        """Set the final result of a recorded build.

        Raises:
            HistoryError: If the build is unknown or the write fails
        """
        record = self.get(number)
        if record is None:
            raise HistoryError(f"Build #{number} not found in {self.path}")
        updated = record.model_copy(update={"result": result})
        records = [updated if r.number == number else r for r in self.records]
        self._write(records)
        return updated

    def _write(self, records: list[BuildRecord]) -> None:
        content = BuildHistory(builds=records).model_dump_json(indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".history-")
            try:
                with os.fdopen(fd, "w") as f:
                    f.write(content)
                os.replace(tmp_name, self.path)
            except BaseException:
                with contextlib.suppress(FileNotFoundError):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise HistoryError(f"Cannot write build history {self.path}: {e}") from e
        self._records = sorted(records, key=lambda r: r.number)
        logger.debug("Wrote %d build records to %s", len(records), self.path)
