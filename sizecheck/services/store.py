# Two-slot report persistence.
#
#   current   CHECKSIZE.md       the report written by the latest run
#   previous  CHECKSIZE.md.bak   the report it replaced
#
# A run reads trend rows from the current slot (or the previous slot when no
# current report exists), renders the new report, then saves it: the new text
# goes to a temporary file first, the old current report is moved into the
# previous slot, and the temporary file is moved into the current slot.
#
# There is no locking.  Two runs against the same directory at the same time
# are not supported and may interleave their slot moves.

from __future__ import annotations

import contextlib
import logging
import os
import re

from result import Err, Ok, Result

from sizecheck.models.report import TrendRow
from sizecheck.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)

_TREND_ROW = re.compile(r"^\|\s*(\d{4}-\d{2}-\d{2})\s*\|(.*)\|\s*$")


def parse_trend_rows(text: str) -> list[TrendRow]:
    """Extract ``| YYYY-MM-DD | total | deps | notes |`` rows in document order."""
    rows: list[TrendRow] = []
    for line in text.splitlines():
        match = _TREND_ROW.match(line.strip())
        if match is None:
            continue
        cells = [cell.strip() for cell in match.group(2).split("|")]
        if len(cells) != 3:
            continue
        rows.append(TrendRow(match.group(1), cells[0], cells[1], cells[2]))
    return rows


def format_trend_row(row: TrendRow) -> str:
    return f"| {row.date} | {row.total_size} | {row.dependency_size} | {row.notes} |"


class ReportStore:
    def __init__(
        self,
        root: str,
        output_file: str,
        backup_file: str | None = None,
        fs: FileSystem = DEFAULT_FS,
    ) -> None:
        self.current_path = os.path.join(root, output_file)
        self.backup_path = os.path.join(root, backup_file or f"{output_file}.bak")
        self.tmp_path = f"{self.current_path}.tmp"
        self._fs = fs

    @property
    def paths(self) -> tuple[str, str, str]:
        """Every file the store writes, for leaving out of measurements."""
        return (self.current_path, self.backup_path, self.tmp_path)

    def history(self, limit: int) -> list[TrendRow]:
        """Up to *limit* trend rows carried over from the most recent saved report."""
        if limit <= 0:
            return []
        for path in (self.current_path, self.backup_path):
            if not self._fs.exists(path):
                continue
            try:
                text = self._fs.read_text(path)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Cannot read previous report %s: %s", path, exc)
                return []
            return parse_trend_rows(text)[:limit]
        return []

    def save(self, text: str) -> Result[str, str]:
        """Rotate the current report into the previous slot and write *text* as current."""
        tmp_path = self.tmp_path
        try:
            self._fs.write_text(tmp_path, text)
        except OSError as exc:
            return Err(f"Failed writing {tmp_path}: {exc}")

        if self._fs.exists(self.current_path):
            try:
                self._fs.replace(self.current_path, self.backup_path)
            except OSError as exc:
                with contextlib.suppress(OSError):
                    self._fs.remove(tmp_path)
                return Err(f"Failed backing up {self.current_path}: {exc}")
            logger.info("Previous report saved to %s", self.backup_path)

        try:
            self._fs.replace(tmp_path, self.current_path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                self._fs.remove(tmp_path)
            return Err(f"Failed writing {self.current_path}: {exc}")
        return Ok(self.current_path)
