from sqlalchemy import Column, Integer, String, ForeignKey, Enum, Date, Text
from sqlalchemy.orm import relationship
from database.postgres import Base
from models.audit import AuditMixin
from store.enums import TaskStatus


class Task(AuditMixin, Base):
    """Maintenance task tracked on the owner's kanban board."""
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    apartment_id = Column(Integer, ForeignKey("apartments.id", ondelete="CASCADE"), nullable=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(TaskStatus, values_callable=lambda obj: [e.value for e in obj], name="taskstatus"),
        nullable=False,
        default=TaskStatus.TODO,
    )
    due_date = Column(Date, nullable=True)

    owner = relationship("User", foreign_keys=[owner_id])
    apartment = relationship("Apartment")
    tenant = relationship("Tenant", back_populates="tasks")
