"""
Tests that the audit mixin stamps created_at and updated_at.
"""
from datetime import datetime, timezone

from models.apartment import Apartment
from models.audit import receive_before_insert, receive_before_update
from store.enums import ApartmentStatus


def test_explicit_created_at_is_kept():
    stamp = datetime(2024, 12, 1, tzinfo=timezone.utc)
    item = Apartment(name="Test", created_by=1, created_at=stamp)

    receive_before_insert(None, None, item)

    assert item.created_at == stamp
    assert item.created_by == 1


def test_missing_created_at_is_filled():
    item = Apartment(name="Test")

    receive_before_insert(None, None, item)

    assert item.created_at is not None
    assert item.updated_at is None


def test_update_sets_updated_at():
    item = Apartment(name="Test")
    receive_before_update(None, None, item)
    assert item.updated_at is not None


def test_audit_fields_on_persisted_rows(db, owner, apartment):
    assert apartment.created_at is not None
    assert apartment.updated_at is None

    apartment.status = ApartmentStatus.MAINTENANCE
    db.commit()

    assert apartment.updated_at is not None
