from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    price: float
    stock: int
    image_url: Optional[str] = None
    category: Optional[str] = None
    rating: float
    created_at: datetime
    updated_at: datetime


class ProductRequest(BaseModel):
    """Create and partial update payload. Missing fields are left untouched on update."""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    image_url: Optional[str] = None
    category: Optional[str] = None


class ProductMutationResponse(BaseModel):
    message: str
    product: ProductResponse
