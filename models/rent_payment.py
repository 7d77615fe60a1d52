from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Enum, Date
from sqlalchemy.orm import relationship
from database.postgres import Base
from models.audit import AuditMixin
from store.enums import PaymentStatus


class RentPayment(AuditMixin, Base):
    __tablename__ = "rent_payments"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    apartment_id = Column(Integer, ForeignKey("apartments.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    payment_date = Column(Date, nullable=True)  # set together with status=paid
    status = Column(
        Enum(PaymentStatus, values_callable=lambda obj: [e.value for e in obj], name="paymentstatus"),
        nullable=False,
        default=PaymentStatus.PENDING,
        index=True,
    )
    payment_method = Column(String(50), nullable=True)
    reference_number = Column(String(100), nullable=True)

    tenant = relationship("Tenant", back_populates="rent_payments")
    apartment = relationship("Apartment", back_populates="rent_payments")
