"""Cron entry point for the daily absentee sweep.

    python scripts/mark_absentees.py               # today, in ATTENDANCE_TIMEZONE
    python scripts/mark_absentees.py --date 2026-02-02
"""

from __future__ import annotations

import argparse
import importlib

from dotenv import load_dotenv

from dayflow.common.datetime_utils import parse_iso_date
from dayflow.common.logger import configure_logging
from dayflow.config import get_settings_module
from dayflow.container import build_container


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Mark ABSENT/LEAVE records for employees with no attendance.")
    parser.add_argument("--date", type=parse_iso_date, default=None, help="Work date (YYYY-MM-DD); defaults to today")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), settings=settings)
    result = container.sweep_service.mark_absentees(args.date)

    if result.skipped:
        print(f"Skipped {result.work_date} ({result.reason})")
    else:
        print(f"{result.work_date}: marked={result.marked} absent={result.absent} on_leave={result.on_leave}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
