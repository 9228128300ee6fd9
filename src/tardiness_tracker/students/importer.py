"""Roster reconciliation from a delimited feed (nis,nama,kelas[,status]).

The parser is intentionally simple: no quoting, so a field containing the
delimiter shifts the columns after it. Feeds must be sanitised upstream.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.constants import IMPORT_PREVIEW_LIMIT
from ..core.engine_config import EngineConfig
from ..core.enums import StudentStatus
from ..core.exceptions import StoreError, ValidationError
from .model import RosterRow
from .repository import StudentRepository

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("nis", "nama", "kelas")
HEADER_HINT = "nis,nama,kelas,status (status optional)"


def _split(line: str, delimiter: str) -> List[str]:
    return [cell.strip() for cell in line.split(delimiter)]


def parse_roster_csv(text: str, *, delimiter: str = ",") -> List[RosterRow]:
    """Parse roster text into accepted rows.

    Raises ValidationError when the header lacks nis, nama or kelas; a
    partial header is never partially processed. Data rows with a blank
    required field are dropped without being reported.
    """
    lines = [line.strip() for line in re.split(r"\r?\n", (text or "").lstrip("\ufeff"))]
    lines = [line for line in lines if line]
    if not lines:
        raise ValidationError(f"Roster is empty. Expected header: {HEADER_HINT}")

    header = _split(lines[0].lower(), delimiter)
    missing = [name for name in REQUIRED_COLUMNS if name not in header]
    if missing:
        raise ValidationError(f"Roster header is missing {', '.join(missing)}. Expected header: {HEADER_HINT}")

    idx_nis = header.index("nis")
    idx_nama = header.index("nama")
    idx_kelas = header.index("kelas")
    idx_status = header.index("status") if "status" in header else -1

    rows: List[RosterRow] = []
    for line in lines[1:]:
        cols = _split(line, delimiter)

        def col(i: int) -> str:
            return cols[i] if 0 <= i < len(cols) else ""

        nis, nama, kelas = col(idx_nis), col(idx_nama), col(idx_kelas)
        if not nis or not nama or not kelas:
            continue
        rows.append(RosterRow(nis=nis, nama=nama, kelas=kelas, status=StudentStatus.from_label(col(idx_status))))

    return rows


def chunked(rows: Sequence[RosterRow], size: int) -> List[Sequence[RosterRow]]:
    return [rows[i : i + size] for i in range(0, len(rows), size)]


@dataclass(frozen=True)
class ImportPreview:
    total_rows: int
    rows: Tuple[RosterRow, ...]


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a batched import.

    Batches before `failed_batch` stay committed. Re-running the same feed
    is safe because rows are keyed by nis.
    """

    total_rows: int
    succeeded: int
    batches_total: int
    failed_batch: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failed_batch is None

    @property
    def remaining(self) -> int:
        return self.total_rows - self.succeeded


class ImportReconciler:
    def __init__(self, students: StudentRepository, config: EngineConfig | None = None):
        self._students = students
        self._config = config or EngineConfig()

    def preview(self, text: str, *, limit: int = IMPORT_PREVIEW_LIMIT) -> ImportPreview:
        rows = self._parse_non_empty(text)
        return ImportPreview(total_rows=len(rows), rows=tuple(rows[:limit]))

    def import_text(self, text: str) -> ImportResult:
        return self.import_rows(self._parse_non_empty(text))

    def import_rows(self, rows: Sequence[RosterRow]) -> ImportResult:
        batches = chunked(list(rows), self._config.import_batch_size)
        succeeded = 0

        for number, batch in enumerate(batches, start=1):
            try:
                self._students.upsert_by_nis(batch)
            except StoreError as exc:
                logger.error(
                    "Roster import stopped at batch %s/%s after %s rows: %s",
                    number,
                    len(batches),
                    succeeded,
                    exc,
                )
                return ImportResult(
                    total_rows=len(rows),
                    succeeded=succeeded,
                    batches_total=len(batches),
                    failed_batch=number,
                    error=str(exc),
                )
            succeeded += len(batch)

        logger.info("Roster import finished: %s rows in %s batches", succeeded, len(batches))
        return ImportResult(total_rows=len(rows), succeeded=succeeded, batches_total=len(batches))

    @staticmethod
    def _parse_non_empty(text: str) -> List[RosterRow]:
        rows = parse_roster_csv(text)
        if not rows:
            raise ValidationError(f"Roster has no usable rows. Expected header: {HEADER_HINT}")
        return rows
