"""
Daily notification sweep: overdue rent payments and upcoming lease expirations.

Each check stages its status transitions and notifications in one transaction
and commits once at the end, so a payment's pending -> overdue move and the
notification about it are never split. Any storage error rolls the check back
and propagates; the sweep is safe to re-run for the same day.
"""
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from config.settings import settings
from models.rent_payment import RentPayment
from models.tenant import Tenant
from schemas.notifications import CheckResult, SweepSummary
from service.notifications import create_notification, notification_exists
from store.enums import NotificationType
from store.repositories import (
    NotificationRepository,
    RentPaymentRepository,
    TenantRepository,
)
import logging

logger = logging.getLogger(__name__)

DATE_FORMAT = "%b %d, %Y"


def resolve_sweep_date(now: Union[date, datetime, None] = None) -> date:
    """
    Calendar day the sweep runs for; defaults to today in the sweep timezone.

    Aware datetimes are converted to the sweep timezone before truncation,
    naive ones are taken as already local.
    """
    if now is None:
        return datetime.now(ZoneInfo(settings.SWEEP_TIMEZONE)).date()
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            now = now.astimezone(ZoneInfo(settings.SWEEP_TIMEZONE))
        return now.date()
    return now


def _resolve_repo(repo, repo_cls, db: Session):
    return repo if repo is not None else repo_cls(db)


def overdue_payment_key(payment: RentPayment) -> str:
    return f"rent_payment:{payment.id}"


def lease_expiration_key(tenant: Tenant, threshold: int) -> str:
    return f"tenant:{tenant.id}:lease_end:{tenant.lease_end_date.isoformat()}:threshold:{threshold}"


def format_overdue_message(payment: RentPayment, days_overdue: int) -> str:
    return (
        f"Payment of {settings.CURRENCY_SYMBOL}{payment.amount:,.2f} "
        f"for {payment.apartment.display_name} "
        f"was due on {payment.due_date.strftime(DATE_FORMAT)}. "
        f"It is now {days_overdue} day(s) overdue."
    )


def format_lease_message(tenant: Tenant) -> str:
    return (
        f"The lease for {tenant.name} at {tenant.apartment.display_name} "
        f"will expire on {tenant.lease_end_date.strftime(DATE_FORMAT)}. "
        "Please prepare for renewal or move-out procedures."
    )


async def check_overdue_payments(
    db: Session,
    now: Union[date, datetime, None] = None,
    *,
    payment_repo: RentPaymentRepository | None = None,
    notification_repo: NotificationRepository | None = None,
) -> CheckResult:
    """
    Mark pending payments past their due date as overdue and notify owners.

    A payment due on ``today`` is not overdue yet. Each unpaid payment gets at
    most one notification per calendar day for as long as it stays overdue.
    """
    today = resolve_sweep_date(now)
    payment_repo = _resolve_repo(payment_repo, RentPaymentRepository, db)
    notification_repo = _resolve_repo(notification_repo, NotificationRepository, db)
    session = payment_repo.db
    result = CheckResult()

    try:
        logger.info(f"Running overdue payments check for {today.isoformat()}")
        for payment in payment_repo.get_unpaid_due_before(today):
            tenant = payment.tenant
            apartment = payment.apartment
            owner = (tenant.owner if tenant else None) or (apartment.owner if apartment else None)
            if owner is None or tenant is None or apartment is None:
                missing = "tenant" if tenant is None else "apartment" if apartment is None else "owner"
                logger.warning(f"Skipping payment {payment.id}: missing {missing}")
                result.skipped += 1
                continue

            if payment_repo.mark_overdue(payment):
                result.transitioned += 1

            dedup_key = overdue_payment_key(payment)
            if notification_exists(
                notification_repo,
                user_id=owner.id,
                notification_type=NotificationType.OVERDUE_PAYMENT,
                dedup_key=dedup_key,
                day=today,
            ):
                continue

            days_overdue = (today - payment.due_date).days
            create_notification(
                notification_repo,
                user_id=owner.id,
                notification_type=NotificationType.OVERDUE_PAYMENT,
                title=f"Overdue Payment: {tenant.name}",
                message=format_overdue_message(payment, days_overdue),
                related_entity_id=payment.id,
                related_entity_type="rent_payment",
                dedup_key=dedup_key,
                notify_date=today,
            )
            result.notified += 1

        session.commit()
    except Exception as exc:
        session.rollback()
        logger.error(f"Error in check_overdue_payments: {exc}")
        raise

    logger.info(
        f"Completed overdue payments check: notified={result.notified} "
        f"transitioned={result.transitioned} skipped={result.skipped}"
    )
    return result


async def check_lease_expirations(
    db: Session,
    now: Union[date, datetime, None] = None,
    *,
    thresholds: Optional[Iterable[int]] = None,
    tenant_repo: TenantRepository | None = None,
    notification_repo: NotificationRepository | None = None,
) -> CheckResult:
    """
    Notify owners about active leases ending exactly ``threshold`` days from today.

    Thresholds are tried smallest first and a tenant is labelled by the first
    one it matches. A (tenant, lease end, threshold) is notified once ever, so
    re-runs and later days stay silent until the lease is renewed.
    """
    today = resolve_sweep_date(now)
    thresholds = sorted(set(thresholds if thresholds is not None else settings.LEASE_EXPIRATION_THRESHOLDS))
    tenant_repo = _resolve_repo(tenant_repo, TenantRepository, db)
    notification_repo = _resolve_repo(notification_repo, NotificationRepository, db)
    session = tenant_repo.db
    result = CheckResult()
    labelled: set[int] = set()

    try:
        logger.info(f"Running lease expiration check for {today.isoformat()} thresholds={thresholds}")
        for days in thresholds:
            expiration_date = today + timedelta(days=days)
            for tenant in tenant_repo.get_active_leases_ending_on(expiration_date):
                if tenant.id in labelled:
                    continue
                labelled.add(tenant.id)

                if tenant.owner is None or tenant.apartment is None:
                    logger.warning(
                        f"Skipping tenant {tenant.id}: missing "
                        f"{'owner' if tenant.owner is None else 'apartment'}"
                    )
                    result.skipped += 1
                    continue

                dedup_key = lease_expiration_key(tenant, days)
                if notification_exists(
                    notification_repo,
                    user_id=tenant.owner.id,
                    notification_type=NotificationType.LEASE_EXPIRATION,
                    dedup_key=dedup_key,
                ):
                    continue

                create_notification(
                    notification_repo,
                    user_id=tenant.owner.id,
                    notification_type=NotificationType.LEASE_EXPIRATION,
                    title=f"Lease Expiring in {days} Days: {tenant.name}",
                    message=format_lease_message(tenant),
                    related_entity_id=tenant.id,
                    related_entity_type="tenant",
                    dedup_key=dedup_key,
                    notify_date=today,
                )
                result.notified += 1

        session.commit()
    except Exception as exc:
        session.rollback()
        logger.error(f"Error in check_lease_expirations: {exc}")
        raise

    logger.info(
        f"Completed lease expiration check: notified={result.notified} skipped={result.skipped}"
    )
    return result


async def run_all_checks(
    db: Session,
    now: Union[date, datetime, None] = None,
) -> SweepSummary:
    """Run both checks for the same day and report what was emitted."""
    today = resolve_sweep_date(now)
    overdue = await check_overdue_payments(db, today)
    leases = await check_lease_expirations(db, today)

    summary = SweepSummary(
        overdue_payments=overdue.notified,
        lease_expirations=leases.notified,
        payments_marked_overdue=overdue.transitioned,
        skipped_records=overdue.skipped + leases.skipped,
    )
    logger.info(
        f"Scheduled notifications sent: overdue_payments={summary.overdue_payments} "
        f"lease_expirations={summary.lease_expirations}"
    )
    if summary.skipped_records:
        logger.warning(f"Notification sweep skipped {summary.skipped_records} incomplete record(s)")
    return summary
