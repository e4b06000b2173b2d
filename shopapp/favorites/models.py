from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from ..products.models import ProductResponse


class FavoriteRequest(BaseModel):
    product_id: Optional[int] = None


class FavoriteResponse(BaseModel):
    id: int
    user_id: int
    user_email: str
    product: ProductResponse
    created_at: datetime


class FavoriteMutationResponse(BaseModel):
    message: str
    favorite: FavoriteResponse


class FavoriteCheck(BaseModel):
    product_id: int
    is_favorited: bool


class FavoriteCount(BaseModel):
    count: int


class FavoriteToggleResponse(BaseModel):
    message: str
    favorited: bool
    favorite: Optional[FavoriteResponse] = None
