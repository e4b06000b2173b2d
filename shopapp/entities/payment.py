# shopapp/entities/payment.py

import enum

from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship

from ..database.core import Base, utcnow


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class Payment(Base):
    __tablename__ = 'payments'

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey('orders.id'), nullable=False, index=True)

    amount = Column(Float, nullable=False)
    status = Column(Enum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING)
    payment_method = Column(String(50), nullable=False)

    # One payment per client-supplied key; duplicates short-circuit to the stored result
    idempotency_key = Column(String(255), unique=True, nullable=False, index=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)

    order = relationship("Order", back_populates="payments")
