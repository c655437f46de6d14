"""Pre-flight weekly load audit.

Two checks over a parsed load report:

- class load: weekly hours per class against the weekly cap
  (``OVERLOAD`` / ``UNDERLOAD`` / ``OK``);
- teacher/class feasibility in the audited tier: a pair needing more than
  ``daily_hour_cap * school_days`` hours cannot be spread over the week
  without some day exceeding the daily cap (``IMPOSSIBLE``).

Passing the second check does not prove a valid daily distribution exists.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from math import ceil
from typing import Any, Iterable

from core.config import Settings
from diagnostics.load_report import LoadRecord, ParsedLoadReport
from models.time_grid import Level


logger = logging.getLogger(__name__)

STATUS_OK = "OK"
STATUS_OVERLOAD = "OVERLOAD"
STATUS_UNDERLOAD = "UNDERLOAD"
STATUS_IMPOSSIBLE = "IMPOSSIBLE"


@dataclass(frozen=True)
class AuditPolicy:
    weekly_hour_cap: int = 45
    daily_hour_cap: int = 3
    school_days: int = 5
    audited_level: Level = Level.ORTAOKUL

    @property
    def weekly_limit(self) -> int:
        return int(self.daily_hour_cap) * int(self.school_days)

    @classmethod
    def from_settings(cls, s: Settings, **overrides: Any) -> "AuditPolicy":
        values = {
            "weekly_hour_cap": s.weekly_hour_cap,
            "daily_hour_cap": s.daily_hour_cap,
            "school_days": s.school_days,
            "audited_level": Level.parse(s.audited_level),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        values["audited_level"] = Level.parse(values["audited_level"])
        return cls(**values)


@dataclass(frozen=True)
class ClassLoad:
    class_id: str
    total_hours: int
    status: str


@dataclass(frozen=True)
class PairLoad:
    teacher_id: str
    class_id: str
    total_hours: int
    status: str
    average_per_day: float
    required_daily_cap: int


@dataclass(frozen=True)
class LoadAuditReport:
    policy: AuditPolicy
    classes: list[ClassLoad] = field(default_factory=list)
    pairs: list[PairLoad] = field(default_factory=list)
    skipped: int = 0

    @property
    def impossible(self) -> list[PairLoad]:
        return [p for p in self.pairs if p.status == STATUS_IMPOSSIBLE]

    @property
    def overloaded(self) -> list[ClassLoad]:
        return [c for c in self.classes if c.status == STATUS_OVERLOAD]

    @property
    def has_blocking_issues(self) -> bool:
        return bool(self.impossible or self.overloaded)


def class_load_totals(records: Iterable[LoadRecord]) -> dict[str, int]:
    totals: dict[str, int] = defaultdict(int)
    for r in records:
        totals[r.class_id] += int(r.weekly_hours)
    return dict(totals)


def _class_status(total: int, cap: int) -> str:
    if total > cap:
        return STATUS_OVERLOAD
    if total < cap:
        return STATUS_UNDERLOAD
    return STATUS_OK


def class_load(records: Iterable[LoadRecord], policy: AuditPolicy | None = None) -> list[ClassLoad]:
    policy = policy or AuditPolicy()
    totals = class_load_totals(records)
    return [
        ClassLoad(class_id=cid, total_hours=int(total), status=_class_status(int(total), int(policy.weekly_hour_cap)))
        for cid, total in sorted(totals.items(), key=lambda kv: kv[0])
    ]


def teacher_class_feasibility(records: Iterable[LoadRecord], policy: AuditPolicy | None = None) -> list[PairLoad]:
    policy = policy or AuditPolicy()
    required_by_pair: dict[tuple[str, str], int] = defaultdict(int)
    for r in records:
        if r.parsed_level != policy.audited_level:
            continue
        required_by_pair[(r.teacher_id, r.class_id)] += int(r.weekly_hours)

    days = int(policy.school_days)
    limit = policy.weekly_limit
    out: list[PairLoad] = []
    for (tid, cid), req in sorted(required_by_pair.items(), key=lambda kv: kv[0]):
        out.append(
            PairLoad(
                teacher_id=tid,
                class_id=cid,
                total_hours=int(req),
                status=STATUS_IMPOSSIBLE if int(req) > limit else STATUS_OK,
                average_per_day=int(req) / days,
                required_daily_cap=ceil(int(req) / days),
            )
        )
    return out


def impossible_pairs(records: Iterable[LoadRecord], policy: AuditPolicy | None = None) -> list[PairLoad]:
    return [p for p in teacher_class_feasibility(records, policy) if p.status == STATUS_IMPOSSIBLE]


def audit(parsed: ParsedLoadReport, policy: AuditPolicy | None = None) -> LoadAuditReport:
    policy = policy or AuditPolicy()
    report = LoadAuditReport(
        policy=policy,
        classes=class_load(parsed.records, policy),
        pairs=teacher_class_feasibility(parsed.records, policy),
        skipped=parsed.skipped,
    )
    logger.info(
        "Load audit: %d records, %d skipped, %d classes (%d overloaded), %d %s pairs (%d impossible)",
        len(parsed.records),
        report.skipped,
        len(report.classes),
        len(report.overloaded),
        len(report.pairs),
        policy.audited_level.value,
        len(report.impossible),
    )
    return report


def render_report(report: LoadAuditReport) -> list[str]:
    policy = report.policy
    lines = ["--- Class Weekly Load Report ---"]
    for c in report.classes:
        lines.append(f"{c.class_id}: {c.total_hours} hours [{c.status}]")

    lines.append(f"--- Teacher Weekly Hours Per Class ({policy.audited_level.value}) ---")
    impossible = report.impossible
    for p in impossible:
        lines.append(
            f"{STATUS_IMPOSSIBLE}: {p.teacher_id} || {p.class_id} has {p.total_hours} hours. "
            f"(Avg {p.average_per_day:g}, needs >{policy.daily_hour_cap} hours/day)"
        )
    if not impossible:
        lines.append(
            f"All {policy.audited_level.value} teacher-class pairs are <= {policy.weekly_limit} hours. "
            f"{policy.daily_hour_cap}-hour daily limit is theoretically possible."
        )

    if report.skipped:
        lines.append(f"Skipped {report.skipped} malformed row(s).")
    return lines


def summarize(report: LoadAuditReport) -> dict[str, Any]:
    """Plain dict view, in the shape the API returns."""
    return {
        "policy": {
            "weekly_hour_cap": int(report.policy.weekly_hour_cap),
            "daily_hour_cap": int(report.policy.daily_hour_cap),
            "school_days": int(report.policy.school_days),
            "audited_level": report.policy.audited_level.value,
            "weekly_limit": int(report.policy.weekly_limit),
        },
        "classes": [
            {"class_id": c.class_id, "total_hours": int(c.total_hours), "status": c.status} for c in report.classes
        ],
        "pairs": [
            {
                "teacher_id": p.teacher_id,
                "class_id": p.class_id,
                "total_hours": int(p.total_hours),
                "status": p.status,
                "average_per_day": float(p.average_per_day),
                "required_daily_cap": int(p.required_daily_cap),
            }
            for p in report.pairs
        ],
        "skipped": int(report.skipped),
        "has_blocking_issues": report.has_blocking_issues,
    }
