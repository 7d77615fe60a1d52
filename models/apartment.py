from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Enum, Text
from sqlalchemy.orm import relationship
from database.postgres import Base
from models.audit import AuditMixin
from store.enums import ApartmentStatus


class Apartment(AuditMixin, Base):
    __tablename__ = "apartments"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    address = Column(Text, nullable=False, default="")
    unit_number = Column(String(50), nullable=True)
    monthly_rent = Column(Numeric(10, 2), nullable=False, default=0)
    status = Column(
        Enum(ApartmentStatus, values_callable=lambda obj: [e.value for e in obj], name="apartmentstatus"),
        nullable=False,
        default=ApartmentStatus.AVAILABLE,
    )

    owner = relationship("User", foreign_keys=[owner_id], back_populates="apartments")
    tenants = relationship("Tenant", back_populates="apartment")
    rent_payments = relationship("RentPayment", back_populates="apartment")

    @property
    def display_name(self) -> str:
        """Apartment name with the unit suffix used in notification texts."""
        if self.unit_number:
            return f"{self.name} (Unit: {self.unit_number})"
        return self.name
