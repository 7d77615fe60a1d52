"""
Tests for the daily overdue payment and lease expiration sweep.
"""
import logging
from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from models.notification import Notification
from models.rent_payment import RentPayment
from service.notification_sweep import (
    check_lease_expirations,
    check_overdue_payments,
    resolve_sweep_date,
    run_all_checks,
)
from service.notifications import create_notification, notification_exists
from store.enums import NotificationType, PaymentStatus, TenantStatus
from store.repositories import NotificationRepository


def _notifications(db, notification_type=None):
    query = db.query(Notification)
    if notification_type:
        query = query.filter(Notification.notification_type == notification_type)
    return query.order_by(Notification.id).all()


# ========================
# OVERDUE PAYMENTS
# ========================

async def test_overdue_payment_is_marked_and_owner_notified(db, factory, owner, apartment):
    """Test the 2025-01-01 due / 2025-01-16 sweep scenario."""
    tenant = factory.tenant(owner, apartment)
    payment = factory.payment(tenant, apartment, due_date=date(2025, 1, 1))

    result = await check_overdue_payments(db, date(2025, 1, 16))

    assert result.notified == 1
    assert result.transitioned == 1
    assert db.get(RentPayment, payment.id).status == PaymentStatus.OVERDUE

    [notification] = _notifications(db)
    assert notification.user_id == owner.id
    assert notification.notification_type == NotificationType.OVERDUE_PAYMENT
    assert notification.title == "Overdue Payment: Juan Dela Cruz"
    assert notification.message == (
        "Payment of ₱5,000.00 for Sunset Apartments (Unit: 2B) was due on Jan 01, 2025. "
        "It is now 15 day(s) overdue."
    )
    assert notification.related_entity_id == payment.id
    assert notification.related_entity_type == "rent_payment"
    assert notification.read_at is None


async def test_payment_due_today_is_not_overdue(db, factory, owner, apartment):
    tenant = factory.tenant(owner, apartment)
    payment = factory.payment(tenant, apartment, due_date=date(2025, 3, 10))

    result = await check_overdue_payments(db, date(2025, 3, 10))

    assert result.notified == 0
    assert result.transitioned == 0
    assert db.get(RentPayment, payment.id).status == PaymentStatus.PENDING
    assert _notifications(db) == []


async def test_payment_due_yesterday_is_one_day_overdue(db, factory, owner, apartment):
    tenant = factory.tenant(owner, apartment)
    factory.payment(tenant, apartment, due_date=date(2025, 3, 9))

    await check_overdue_payments(db, date(2025, 3, 10))

    [notification] = _notifications(db)
    assert notification.message.endswith("It is now 1 day(s) overdue.")


async def test_paid_payments_are_ignored(db, factory, owner, apartment):
    tenant = factory.tenant(owner, apartment)
    payment = factory.payment(
        tenant, apartment, due_date=date(2025, 1, 1),
        status=PaymentStatus.PAID, payment_date=date(2025, 1, 3),
    )

    result = await check_overdue_payments(db, date(2025, 2, 1))

    assert result.notified == 0
    assert db.get(RentPayment, payment.id).status == PaymentStatus.PAID


async def test_apartment_without_unit_number_uses_plain_name(db, factory, owner):
    apartment = factory.apartment(owner, name="Casa Verde", unit_number=None)
    tenant = factory.tenant(owner, apartment)
    factory.payment(tenant, apartment, amount="12500.50", due_date=date(2025, 1, 1))

    await check_overdue_payments(db, date(2025, 1, 2))

    [notification] = _notifications(db)
    assert notification.message.startswith("Payment of ₱12,500.50 for Casa Verde was due on")


async def test_already_overdue_payment_notified_again_next_day(db, factory, owner, apartment):
    tenant = factory.tenant(owner, apartment)
    payment = factory.payment(tenant, apartment, due_date=date(2025, 1, 1))

    first = await check_overdue_payments(db, date(2025, 1, 16))
    second = await check_overdue_payments(db, date(2025, 1, 17))

    assert first.transitioned == 1
    assert second.transitioned == 0
    assert second.notified == 1
    assert db.get(RentPayment, payment.id).status == PaymentStatus.OVERDUE

    messages = [n.message for n in _notifications(db)]
    assert messages[0].endswith("15 day(s) overdue.")
    assert messages[1].endswith("16 day(s) overdue.")


async def test_payment_with_missing_apartment_is_skipped(db, factory, owner, apartment):
    tenant = factory.tenant(owner, apartment)
    orphan = factory.payment(tenant, apartment_id=999, due_date=date(2025, 1, 1))
    factory.payment(tenant, apartment, due_date=date(2025, 1, 1))

    result = await check_overdue_payments(db, date(2025, 1, 5))

    assert result.skipped == 1
    assert result.notified == 1
    assert db.get(RentPayment, orphan.id).status == PaymentStatus.PENDING


async def test_overdue_notice_falls_back_to_apartment_owner(db, factory, owner, apartment):
    tenant = factory.tenant(owner, apartment)
    payment = factory.payment(tenant, apartment, due_date=date(2025, 1, 1))
    # dangling owner reference; SQLite does not enforce the foreign key
    tenant.owner_id = 9999
    db.commit()
    db.expire_all()

    result = await check_overdue_payments(db, date(2025, 1, 16))

    assert result.notified == 1
    assert result.transitioned == 1
    assert result.skipped == 0
    [notification] = _notifications(db)
    assert notification.user_id == owner.id
    assert notification.related_entity_id == payment.id


async def test_failed_overdue_check_rolls_back_transitions(db, factory, owner, apartment):
    class FailingNotificationRepository(NotificationRepository):
        def create(self, obj_in):
            raise RuntimeError("storage unavailable")

    tenant = factory.tenant(owner, apartment)
    payment = factory.payment(tenant, apartment, due_date=date(2025, 1, 1))

    with pytest.raises(RuntimeError):
        await check_overdue_payments(
            db, date(2025, 1, 16), notification_repo=FailingNotificationRepository(db)
        )

    assert db.get(RentPayment, payment.id).status == PaymentStatus.PENDING
    assert _notifications(db) == []


# ========================
# LEASE EXPIRATIONS
# ========================

async def test_lease_ending_in_exactly_thirty_days_is_notified(db, factory, owner, apartment):
    today = date(2025, 5, 1)
    factory.tenant(owner, apartment, name="Ana Reyes", lease_end_date=today + timedelta(days=30))

    result = await check_lease_expirations(db, today)

    assert result.notified == 1
    [notification] = _notifications(db)
    assert notification.notification_type == NotificationType.LEASE_EXPIRATION
    assert notification.title == "Lease Expiring in 30 Days: Ana Reyes"
    assert notification.message == (
        "The lease for Ana Reyes at Sunset Apartments (Unit: 2B) will expire on May 31, 2025. "
        "Please prepare for renewal or move-out procedures."
    )
    assert notification.related_entity_type == "tenant"


async def test_lease_ending_in_thirty_one_days_is_not_notified(db, factory, owner, apartment):
    today = date(2025, 5, 1)
    factory.tenant(owner, apartment, lease_end_date=today + timedelta(days=31))

    result = await check_lease_expirations(db, today)

    assert result.notified == 0
    assert _notifications(db) == []


async def test_each_threshold_notifies_once(db, factory, owner, apartment):
    today = date(2025, 5, 1)
    for days in (30, 60, 90, 120):
        factory.tenant(owner, apartment, name=f"Tenant {days}", lease_end_date=today + timedelta(days=days))

    first = await check_lease_expirations(db, today)
    second = await check_lease_expirations(db, today)

    assert first.notified == 3
    assert second.notified == 0
    titles = sorted(n.title for n in _notifications(db))
    assert titles == [
        "Lease Expiring in 30 Days: Tenant 30",
        "Lease Expiring in 60 Days: Tenant 60",
        "Lease Expiring in 90 Days: Tenant 90",
    ]


async def test_custom_thresholds_are_sorted(db, factory, owner, apartment):
    today = date(2025, 5, 1)
    factory.tenant(owner, apartment, lease_end_date=today + timedelta(days=7))

    result = await check_lease_expirations(db, today, thresholds=[14, 7, 7])

    assert result.notified == 1
    assert _notifications(db)[0].title.startswith("Lease Expiring in 7 Days")


async def test_inactive_tenants_are_ignored(db, factory, owner, apartment):
    today = date(2025, 5, 1)
    factory.tenant(owner, apartment, lease_end_date=today + timedelta(days=30), status=TenantStatus.INACTIVE)

    result = await check_lease_expirations(db, today)

    assert result.notified == 0


async def test_renewed_lease_is_notified_again(db, factory, owner, apartment):
    today = date(2025, 5, 1)
    tenant = factory.tenant(owner, apartment, lease_end_date=today + timedelta(days=30))

    await check_lease_expirations(db, today)

    tenant.lease_end_date = today + timedelta(days=60)
    db.commit()
    result = await check_lease_expirations(db, today)

    assert result.notified == 1
    titles = [n.title for n in _notifications(db)]
    assert titles[-1].startswith("Lease Expiring in 60 Days")


async def test_tenant_without_apartment_is_skipped(db, factory, owner):
    today = date(2025, 5, 1)
    factory.tenant(owner, None, lease_end_date=today + timedelta(days=30))

    result = await check_lease_expirations(db, today)

    assert result.skipped == 1
    assert result.notified == 0


async def test_tenant_without_owner_is_skipped_and_logged(db, factory, owner, apartment, caplog):
    caplog.set_level(logging.WARNING)
    today = date(2025, 5, 1)
    tenant = factory.tenant(owner, apartment, lease_end_date=today + timedelta(days=30))
    tenant.owner_id = 9999
    db.commit()
    db.expire_all()

    result = await check_lease_expirations(db, today)

    assert result.skipped == 1
    assert result.notified == 0
    assert _notifications(db) == []
    assert f"Skipping tenant {tenant.id}: missing owner" in caplog.text


# ========================
# FULL SWEEP
# ========================

async def test_run_all_checks_is_idempotent(db, factory, owner, apartment, caplog):
    caplog.set_level(logging.INFO)
    today = date(2025, 1, 16)
    tenant = factory.tenant(owner, apartment, lease_end_date=today + timedelta(days=60))
    factory.payment(tenant, apartment, due_date=date(2025, 1, 1))
    factory.payment(tenant, apartment, due_date=date(2025, 1, 10))

    first = await run_all_checks(db, today)
    second = await run_all_checks(db, today)

    assert first.overdue_payments == 2
    assert first.lease_expirations == 1
    assert first.payments_marked_overdue == 2
    assert second.overdue_payments == 0
    assert second.lease_expirations == 0
    assert second.payments_marked_overdue == 0
    assert len(_notifications(db)) == 3
    assert "Scheduled notifications sent: overdue_payments=2 lease_expirations=1" in caplog.text


async def test_run_all_checks_accepts_datetime(db, factory, owner, apartment):
    tenant = factory.tenant(owner, apartment)
    factory.payment(tenant, apartment, due_date=date(2025, 1, 1))

    summary = await run_all_checks(db, datetime(2025, 1, 16, 23, 59))

    assert summary.overdue_payments == 1
    assert _notifications(db)[0].notify_date == date(2025, 1, 16)


def test_resolve_sweep_date():
    assert resolve_sweep_date(date(2025, 1, 16)) == date(2025, 1, 16)
    assert resolve_sweep_date(datetime(2025, 1, 16, 7, 0)) == date(2025, 1, 16)
    assert isinstance(resolve_sweep_date(), date)


def test_resolve_sweep_date_converts_aware_datetime_to_sweep_timezone():
    # 20:00 UTC on the 15th is already the 16th in Manila (UTC+8)
    evening_utc = datetime(2025, 1, 15, 20, 0, tzinfo=timezone.utc)
    assert resolve_sweep_date(evening_utc) == date(2025, 1, 16)

    morning_utc = datetime(2025, 1, 15, 1, 0, tzinfo=timezone.utc)
    assert resolve_sweep_date(morning_utc) == date(2025, 1, 15)


# ========================
# DEDUP GATE
# ========================

def test_notification_exists_with_and_without_day(db, owner):
    repo = NotificationRepository(db)
    create_notification(
        repo,
        user_id=owner.id,
        notification_type=NotificationType.OVERDUE_PAYMENT,
        title="Overdue Payment: Juan",
        message="...",
        dedup_key="rent_payment:1",
        notify_date=date(2025, 1, 16),
    )
    db.commit()

    kwargs = dict(user_id=owner.id, notification_type=NotificationType.OVERDUE_PAYMENT, dedup_key="rent_payment:1")
    assert notification_exists(repo, **kwargs)
    assert notification_exists(repo, day=date(2025, 1, 16), **kwargs)
    assert not notification_exists(repo, day=date(2025, 1, 17), **kwargs)
    assert not notification_exists(
        repo, user_id=owner.id, notification_type=NotificationType.LEASE_EXPIRATION, dedup_key="rent_payment:1"
    )


def test_duplicate_dedup_key_rejected_by_storage(db, owner):
    repo = NotificationRepository(db)
    values = dict(
        user_id=owner.id,
        notification_type=NotificationType.OVERDUE_PAYMENT,
        title="Overdue Payment: Juan",
        message="...",
        dedup_key="rent_payment:1",
        notify_date=date(2025, 1, 16),
    )
    create_notification(repo, **values)
    db.commit()

    with pytest.raises(IntegrityError):
        create_notification(repo, **values)
    db.rollback()
