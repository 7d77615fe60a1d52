"""
Run the overdue payment and lease expiration sweep once.

Usage:
    python -m scripts.check_notifications
    python -m scripts.check_notifications --date 2025-01-16 --quiet

Meant for system cron or manual runs when the in-process scheduler is disabled.
"""
import argparse
import asyncio
import sys
from datetime import date

from core.logger import setup_logging
from database.postgres import SessionLocal
from service.notification_sweep import run_all_checks
import logging

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Check for overdue payments and expiring leases and notify owners."
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Run the sweep as of this day (YYYY-MM-DD). Defaults to today.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print the summary.",
    )
    return parser.parse_args(argv)


async def run(run_date=None, session_factory=SessionLocal):
    db = session_factory()
    try:
        return await run_all_checks(db, run_date)
    finally:
        db.close()


def main(argv=None, session_factory=SessionLocal) -> int:
    args = parse_args(argv)
    try:
        summary = asyncio.run(run(args.date, session_factory))
    except Exception as e:
        logger.error(f"Notification check failed: {str(e)}", exc_info=True)
        return 1

    if not args.quiet:
        print(f"Overdue payment notifications sent: {summary.overdue_payments}")
        print(f"Lease expiration notifications sent: {summary.lease_expirations}")
        print(f"Payments marked overdue: {summary.payments_marked_overdue}")
        print(f"Records skipped: {summary.skipped_records}")
    return 0


if __name__ == "__main__":
    setup_logging(serialize=False)
    sys.exit(main())
