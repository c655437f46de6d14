from __future__ import annotations

import argparse
import codecs
import logging
import sys
from pathlib import Path

# Allow running this script from any working directory.
BACKEND_DIR = Path(__file__).resolve().parents[0]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from core.config import settings
from core.logging import setup_logging
from diagnostics.load_auditor import AuditPolicy, audit, render_report
from diagnostics.load_report import parse_load_report


logger = logging.getLogger("audit_loads")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Audit weekly class loads and teacher/class daily-cap feasibility.")
    parser.add_argument("report", help="Path to the ';'-delimited load report")
    parser.add_argument("--weekly-cap", type=int, default=None, help=f"Weekly class cap (default: {settings.weekly_hour_cap})")
    parser.add_argument("--daily-cap", type=int, default=None, help=f"Daily teacher/class cap (default: {settings.daily_hour_cap})")
    parser.add_argument("--days", type=int, default=None, help=f"School days per week (default: {settings.school_days})")
    parser.add_argument("--level", default=None, help=f"Audited level (default: {settings.audited_level})")
    parser.add_argument("--delimiter", default=None, help=f"Field delimiter (default: {settings.load_report_delimiter!r})")
    parser.add_argument("--encoding", default="utf-8", help="File encoding (default: utf-8)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped rows")
    args = parser.parse_args(argv)

    setup_logging(environment="development", level="DEBUG" if args.verbose else "WARNING")

    path = Path(args.report)
    if not path.exists():
        raise SystemExit(f"No such file: {path}")
    try:
        codecs.lookup(args.encoding)
    except LookupError:
        raise SystemExit(f"Unknown encoding: {args.encoding}")

    try:
        policy = AuditPolicy.from_settings(
            settings,
            weekly_hour_cap=args.weekly_cap,
            daily_hour_cap=args.daily_cap,
            school_days=args.days,
            audited_level=args.level,
        )
    except ValueError as exc:
        raise SystemExit(str(exc))

    parsed = parse_load_report(
        path.read_bytes(),
        delimiter=args.delimiter or settings.load_report_delimiter,
        min_fields=settings.load_report_min_fields,
        encoding=args.encoding,
    )
    report = audit(parsed, policy)
    for line in render_report(report):
        print(line)
    return 1 if report.has_blocking_issues else 0


if __name__ == "__main__":
    raise SystemExit(main())
