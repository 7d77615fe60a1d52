from datetime import datetime, timedelta
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger
from sqlalchemy.orm import Session

from config.settings import settings
from database.postgres import SessionLocal
from schemas.notifications import SweepSummary
from service.notification_sweep import run_all_checks
import logging

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "notification_sweep"
SWEEP_RETRY_JOB_ID = "notification_sweep_retry"

scheduler = AsyncIOScheduler(timezone=ZoneInfo(settings.SWEEP_TIMEZONE))


def init_scheduler():
    """Register the daily notification sweep."""

    # Daily overdue payment and lease expiration sweep (7:00 AM Manila by default)
    scheduler.add_job(
        run_notification_sweep,
        CronTrigger(
            hour=settings.SWEEP_HOUR,
            minute=settings.SWEEP_MINUTE,
            timezone=ZoneInfo(settings.SWEEP_TIMEZONE),
        ),
        id=SWEEP_JOB_ID,
        name="Overdue payment and lease expiration notifications",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    logger.info(
        f"Scheduler initialized: {SWEEP_JOB_ID} daily at "
        f"{settings.SWEEP_HOUR:02d}:{settings.SWEEP_MINUTE:02d} {settings.SWEEP_TIMEZONE}"
    )


async def run_notification_sweep(
    attempt: int = 0,
    session_factory: Callable[[], Session] = SessionLocal,
) -> Optional[SweepSummary]:
    """Wrapper to run the notification sweep with its own database session."""
    logger.info(f"Running scheduled notification sweep (attempt {attempt + 1})")
    db = session_factory()
    try:
        return await run_all_checks(db)
    except Exception as e:
        logger.error(f"Error in scheduled notification sweep: {str(e)}", exc_info=True)
        schedule_retry(attempt + 1, session_factory)
        return None
    finally:
        db.close()


def schedule_retry(attempt: int, session_factory: Callable[[], Session] = SessionLocal):
    """Queue a one-shot rerun of the sweep unless the retry budget is spent."""
    if attempt > settings.SWEEP_MAX_RETRIES:
        logger.error(
            f"Notification sweep failed {attempt} time(s); giving up until the next scheduled run"
        )
        return None

    run_at = datetime.now(ZoneInfo(settings.SWEEP_TIMEZONE)) + timedelta(
        minutes=settings.SWEEP_RETRY_DELAY_MINUTES
    )
    job = scheduler.add_job(
        run_notification_sweep,
        DateTrigger(run_date=run_at),
        id=SWEEP_RETRY_JOB_ID,
        name="Notification sweep retry",
        kwargs={"attempt": attempt, "session_factory": session_factory},
        replace_existing=True,
        max_instances=1,
    )
    logger.warning(
        f"Notification sweep retry {attempt}/{settings.SWEEP_MAX_RETRIES} scheduled for {run_at.isoformat()}"
    )
    return job


def start_scheduler():
    """Start the scheduler."""
    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started successfully")


def shutdown_scheduler():
    """Shutdown the scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler shutdown successfully")
