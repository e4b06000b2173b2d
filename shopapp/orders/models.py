from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from ..entities.order import OrderStatus


class CreateOrderRequest(BaseModel):
    shipping_address: Optional[str] = None


class UpdateOrderStatusRequest(BaseModel):
    status: Optional[str] = None
    message: Optional[str] = None


class OrderItemResponse(BaseModel):
    id: int
    product_id: int
    product_name: str
    product_image: Optional[str] = None
    quantity: int
    unit_price: float
    subtotal: float


class OrderResponse(BaseModel):
    id: int
    user_id: int
    user_email: str
    items: List[OrderItemResponse]
    total_amount: float
    status: OrderStatus
    shipping_address: str
    created_at: datetime
    updated_at: datetime
