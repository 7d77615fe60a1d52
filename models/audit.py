from sqlalchemy import Column, Integer, DateTime, ForeignKey, event
from sqlalchemy.orm import declared_attr
from datetime import datetime, timezone


class AuditMixin:
    """
    Mixin class that provides automatic audit fields for database models.

    Automatically tracks:
    - created_by: User ID who created the record
    - created_at: Timestamp when the record was created
    - updated_by: User ID who last updated the record
    - updated_at: Timestamp when the record was last updated

    Usage:
        class MyModel(AuditMixin, Base):
            __tablename__ = "my_table"
            id = Column(Integer, primary_key=True)
            # ... other fields

    created_at and updated_at are populated by SQLAlchemy event listeners.
    """
    __tablename__ = None

    @declared_attr
    def created_by(cls):
        return Column(
            Integer,
            ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
            comment="ID of the user who created this record"
        )

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        comment="Timestamp when this record was created"
    )

    @declared_attr
    def updated_by(cls):
        return Column(
            Integer,
            ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
            comment="ID of the user who last updated this record"
        )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=True,
        comment="Timestamp when this record was last updated"
    )


@event.listens_for(AuditMixin, "before_insert", propagate=True)
def receive_before_insert(mapper, connection, target):
    """
    Set created_at before inserting a new record.

    Values already set explicitly in service code are kept.
    """
    if not target.created_at:
        target.created_at = datetime.now(timezone.utc)


@event.listens_for(AuditMixin, "before_update", propagate=True)
def receive_before_update(mapper, connection, target):
    """
    Set updated_at on every update.

    updated_by is left to the service layer, which knows the acting user.
    """
    target.updated_at = datetime.now(timezone.utc)
