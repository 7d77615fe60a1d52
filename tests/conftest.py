"""
Shared fixtures: an in-memory SQLite database and small model factories.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("ENABLE_SCHEDULER", "false")

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_db_models
from database.postgres import Base, configure_mappers
from models.apartment import Apartment
from models.rent_payment import RentPayment
from models.task import Task
from models.tenant import Tenant
from models.user import User
from store.enums import ApartmentStatus, PaymentStatus, Role, TaskStatus, TenantStatus
from utils.auth import hash_password

get_db_models()


@pytest.fixture
def engine():
    configure_mappers()
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


class Factory:
    """Creates and commits rows with sensible defaults."""

    def __init__(self, db):
        self.db = db
        self._emails = 0

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        return obj

    def user(self, role=Role.OWNER, name="Maria Santos", email=None, password="secret123", is_active=True):
        self._emails += 1
        return self._save(User(
            name=name,
            email=email or f"user{self._emails}@example.com",
            password_hash=hash_password(password),
            role=role,
            is_active=is_active,
        ))

    def apartment(self, owner, name="Sunset Apartments", unit_number="2B",
                  status=ApartmentStatus.OCCUPIED, **kwargs):
        return self._save(Apartment(
            owner_id=owner.id,
            name=name,
            address="123 Rizal Ave, Manila",
            unit_number=unit_number,
            monthly_rent=Decimal("5000.00"),
            status=status,
            **kwargs,
        ))

    def tenant(self, owner, apartment=None, name="Juan Dela Cruz", lease_end_date=None,
               status=TenantStatus.ACTIVE, **kwargs):
        return self._save(Tenant(
            owner_id=owner.id,
            apartment_id=apartment.id if apartment else None,
            name=name,
            lease_end_date=lease_end_date,
            monthly_rent=Decimal("5000.00"),
            status=status,
            **kwargs,
        ))

    def payment(self, tenant, apartment=None, amount="5000.00", due_date=date(2025, 1, 1),
                status=PaymentStatus.PENDING, apartment_id=None, **kwargs):
        return self._save(RentPayment(
            tenant_id=tenant.id,
            apartment_id=apartment_id if apartment_id is not None else apartment.id,
            amount=Decimal(amount),
            due_date=due_date,
            status=status,
            **kwargs,
        ))

    def task(self, owner, apartment=None, tenant=None, title="Fix leaking faucet",
             status=TaskStatus.TODO, due_date=None):
        return self._save(Task(
            owner_id=owner.id,
            apartment_id=apartment.id if apartment else None,
            tenant_id=tenant.id if tenant else None,
            title=title,
            status=status,
            due_date=due_date,
        ))


@pytest.fixture
def factory(db):
    return Factory(db)


@pytest.fixture
def owner(factory):
    return factory.user(role=Role.OWNER, name="Maria Santos", email="owner@example.com")


@pytest.fixture
def apartment(factory, owner):
    return factory.apartment(owner)
