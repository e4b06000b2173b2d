from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class CartItemRequest(BaseModel):
    product_id: Optional[int] = None
    quantity: Optional[int] = None


class CartItemUpdate(BaseModel):
    quantity: Optional[int] = None


class CartItemResponse(BaseModel):
    id: int
    product_id: int
    product_name: str
    product_image: Optional[str] = None
    unit_price: float
    quantity: int
    subtotal: float


class CartResponse(BaseModel):
    id: int
    user_id: int
    items: List[CartItemResponse]
    total_amount: float
    total_items: int
    created_at: datetime


class CartCount(BaseModel):
    count: int
