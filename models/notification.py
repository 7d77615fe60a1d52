from sqlalchemy import Column, Integer, String, ForeignKey, Enum, DateTime, Date, Text, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from database.postgres import Base
from models.audit import AuditMixin
from store.enums import NotificationType


class Notification(AuditMixin, Base):
    __tablename__ = "notifications"
    __table_args__ = (
        # Storage-level backstop for the sweep's dedup gate.
        UniqueConstraint(
            "user_id", "notification_type", "dedup_key", "notify_date",
            name="uq_notifications_dedup",
        ),
        Index("ix_notifications_user_read", "user_id", "read_at"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    notification_type = Column(
        Enum(NotificationType, values_callable=lambda obj: [e.value for e in obj], name="notificationtype"),
        nullable=False,
    )
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    read_at = Column(DateTime(timezone=True), nullable=True)
    related_entity_id = Column(Integer, nullable=True)  # ID of the payment, tenant or task
    related_entity_type = Column(String(50), nullable=True)  # e.g. "rent_payment", "tenant", "task"
    dedup_key = Column(String(200), nullable=True)
    notify_date = Column(Date, nullable=True)  # calendar day of the sweep that emitted it

    user = relationship("User", foreign_keys=[user_id], back_populates="notifications")

    @property
    def is_read(self) -> bool:
        return self.read_at is not None
