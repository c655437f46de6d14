"""Parser for the weekly load report export.

One row per line::

    TEACHER;BRANCH;LEVEL;SUBJECT;CLASS;HOURS;DIST

At least ``min_fields`` fields are required and trailing extras are ignored.
Fields may be wrapped in double quotes. A class cell may name several classes
(``5-A/5-B``, ``7A, 7B``, ``1A | 1B``, ``6A - 6B``); the row's hours count
for each of them.

Rows that cannot be read are counted and skipped, never raised. That includes
lines that are not valid in the given encoding when the report is passed as
bytes.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from models.time_grid import Level


logger = logging.getLogger(__name__)

# "5-A" stays one class; "6A - 6B" (spaced hyphen) is two.
_CLASS_SPLIT_RE = re.compile(r"[/,|]|\s+-\s+")


@dataclass(frozen=True)
class LoadRecord:
    teacher_id: str
    branch: str
    level: str
    subject_name: str
    class_id: str
    weekly_hours: int
    distribution_code: str = ""

    @property
    def parsed_level(self) -> Level | None:
        try:
            return Level.parse(self.level)
        except ValueError:
            return None


@dataclass(frozen=True)
class SkippedRow:
    line_number: int
    reason: str
    raw: str


@dataclass(frozen=True)
class ParsedLoadReport:
    records: list[LoadRecord] = field(default_factory=list)
    skipped_rows: list[SkippedRow] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return len(self.skipped_rows)


def _parse_hours(raw: str) -> int | None:
    s = raw.strip()
    if not s or not (s.isascii() and s.isdigit()):
        return None
    return int(s)


def _clean_field(raw: str) -> str:
    s = raw.strip()
    if s.startswith('"'):
        s = s[1:]
    if s.endswith('"'):
        s = s[:-1]
    return s.strip()


def split_class_cell(cell: str) -> list[str]:
    return [name.strip() for name in _CLASS_SPLIT_RE.split(cell) if name.strip()]


def _split_lines(source: str | bytes | Iterable[str | bytes]) -> Iterable[str | bytes]:
    if isinstance(source, (str, bytes)):
        return source.splitlines()
    return source


def parse_load_report(
    source: str | bytes | Iterable[str | bytes],
    *,
    delimiter: str = ";",
    min_fields: int = 6,
    encoding: str = "utf-8",
) -> ParsedLoadReport:
    # Columns are positional; a row shorter than six can never be read.
    required = max(int(min_fields), 6)

    records: list[LoadRecord] = []
    skipped: list[SkippedRow] = []
    for line_number, raw in enumerate(_split_lines(source), start=1):
        if isinstance(raw, bytes):
            try:
                raw = raw.decode(encoding)
            except UnicodeDecodeError as exc:
                text = raw.decode(encoding, errors="replace")
                skipped.append(SkippedRow(line_number, f"not valid {encoding}: {exc.reason}", text))
                continue

        line = raw.rstrip("\r\n")
        if line_number == 1:
            line = line.lstrip("\ufeff")
        if not line.strip():
            continue

        parts = [_clean_field(p) for p in line.split(delimiter)]
        if len(parts) < required:
            skipped.append(SkippedRow(line_number, f"expected at least {required} fields, got {len(parts)}", line))
            continue

        teacher, branch, level, subject, class_cell, hours_raw = parts[:6]
        hours = _parse_hours(hours_raw)
        if hours is None:
            skipped.append(SkippedRow(line_number, f"weekly hours {hours_raw!r} is not a non-negative integer", line))
            continue
        class_names = split_class_cell(class_cell)
        if not teacher or not class_names:
            skipped.append(SkippedRow(line_number, "missing teacher or class", line))
            continue

        distribution = parts[6] if len(parts) > 6 else ""
        for class_name in class_names:
            records.append(
                LoadRecord(
                    teacher_id=teacher,
                    branch=branch,
                    level=level,
                    subject_name=subject,
                    class_id=class_name,
                    weekly_hours=hours,
                    distribution_code=distribution,
                )
            )

    for row in skipped:
        logger.debug("Load report line %d skipped: %s", row.line_number, row.reason)
    return ParsedLoadReport(records=records, skipped_rows=skipped)
