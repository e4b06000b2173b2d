from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from ..entities.payment import PaymentStatus


class PaymentRequest(BaseModel):
    order_id: Optional[int] = None
    payment_method: Optional[str] = None
    idempotency_key: Optional[str] = None


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    amount: float
    status: PaymentStatus
    payment_method: str
    idempotency_key: str
    created_at: datetime
