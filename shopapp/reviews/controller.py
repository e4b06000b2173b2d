# shopapp/reviews/controller.py
from typing import List
from fastapi import APIRouter
from starlette import status

from . import models
from .service import ReviewService
from ..auth.models import MessageResponse
from ..auth.service import CurrentUser
from ..database.core import DbSession

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.post("/", response_model=models.ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(request: models.ReviewRequest, current_user: CurrentUser, db: DbSession):
    """Review a product the user has bought."""
    return ReviewService.create_review(db, current_user, request)


@router.get("/my-reviews", response_model=List[models.ReviewResponse])
async def get_my_reviews(current_user: CurrentUser, db: DbSession):
    return ReviewService.get_user_reviews(db, current_user)


@router.get("/product/{product_id}", response_model=List[models.ReviewResponse])
async def get_product_reviews(product_id: int, db: DbSession):
    return ReviewService.get_product_reviews(db, product_id)


@router.get("/product/{product_id}/average", response_model=models.AverageRatingResponse)
async def get_product_average_rating(product_id: int, db: DbSession):
    return ReviewService.get_average_rating(db, product_id)


@router.get("/{review_id}", response_model=models.ReviewResponse)
async def get_review(review_id: int, db: DbSession):
    return ReviewService.get_review(db, review_id)


@router.put("/{review_id}", response_model=models.ReviewResponse)
async def update_review(review_id: int, request: models.ReviewUpdate, current_user: CurrentUser, db: DbSession):
    return ReviewService.update_review(db, current_user, review_id, request)


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(review_id: int, current_user: CurrentUser, db: DbSession):
    ReviewService.delete_review(db, current_user, review_id)
    return MessageResponse(message="Review deleted successfully")
