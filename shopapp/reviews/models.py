from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class ReviewRequest(BaseModel):
    product_id: Optional[int] = None
    rating: Optional[int] = None
    comment: Optional[str] = None


class ReviewUpdate(BaseModel):
    rating: Optional[int] = None
    comment: Optional[str] = None


class ReviewResponse(BaseModel):
    id: int
    user_id: int
    user_name: str
    product_id: int
    product_name: str
    rating: int
    comment: Optional[str] = None
    created_at: datetime


class AverageRatingResponse(BaseModel):
    product_id: int
    average_rating: float
    review_count: int
