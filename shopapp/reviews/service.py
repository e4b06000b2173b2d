# shopapp/reviews/service.py

import logging
from typing import List, Tuple
from sqlalchemy import func
from sqlalchemy.orm import Session

from . import models
from ..core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
    require_value,
)
from ..entities.order import Order, OrderItem, PURCHASED_STATUSES
from ..entities.product import Product
from ..entities.review import Review
from ..entities.user import User

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def _validate_rating(rating) -> None:
    if rating is None or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationFailedError("Rating must be between 1 and 5", field="rating")


class ReviewService:

    @staticmethod
    def to_response(review: Review) -> models.ReviewResponse:
        return models.ReviewResponse(
            id=review.id,
            user_id=review.user_id,
            user_name=review.user.username,
            product_id=review.product_id,
            product_name=review.product.name,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
        )

    @staticmethod
    def _get_product(db: Session, product_id: int) -> Product:
        product = db.get(Product, product_id)
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    @staticmethod
    def _get_review(db: Session, review_id: int) -> Review:
        review = db.get(Review, review_id)
        if not review:
            raise NotFoundError("Review", review_id)
        return review

    @staticmethod
    def has_purchased(db: Session, user_id: int, product_id: int) -> bool:
        """True when the product is in one of the user's paid, shipped or delivered orders."""
        return (
            db.query(OrderItem.id)
            .join(Order, OrderItem.order_id == Order.id)
            .filter(
                Order.user_id == user_id,
                OrderItem.product_id == product_id,
                Order.status.in_(PURCHASED_STATUSES),
            )
            .first()
            is not None
        )

    @staticmethod
    def _rating_stats(db: Session, product_id: int) -> Tuple[float, int]:
        average, count = (
            db.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.product_id == product_id)
            .one()
        )
        return (round(float(average), 2) if average is not None else 0.0), count

    @staticmethod
    def _refresh_product_rating(db: Session, product_id: int) -> None:
        db.flush()
        product = db.get(Product, product_id)
        if product is not None:
            product.rating, _ = ReviewService._rating_stats(db, product_id)

    @staticmethod
    def create_review(db: Session, user: User, request: models.ReviewRequest) -> models.ReviewResponse:
        product_id = require_value(request.product_id, "Product ID", "product_id")
        product = ReviewService._get_product(db, product_id)

        already = db.query(Review).filter(Review.user_id == user.id, Review.product_id == product.id).first()
        if already:
            raise ConflictError("You have already reviewed this product", {"review_id": already.id})
        if not ReviewService.has_purchased(db, user.id, product.id):
            raise PermissionDeniedError("You can only review products you have purchased")
        _validate_rating(request.rating)

        review = Review(user_id=user.id, product_id=product.id, rating=request.rating, comment=request.comment)
        try:
            db.add(review)
            ReviewService._refresh_product_rating(db, product.id)
            db.commit()
            db.refresh(review)
        except Exception:
            db.rollback()
            raise
        logger.info(f"User {user.id} reviewed product {product.id} ({review.rating}/5)")
        return ReviewService.to_response(review)

    @staticmethod
    def update_review(db: Session, user: User, review_id: int, request: models.ReviewUpdate) -> models.ReviewResponse:
        review = ReviewService._get_review(db, review_id)
        if review.user_id != user.id:
            raise PermissionDeniedError("You don't have permission to update this review")
        if request.rating is not None:
            _validate_rating(request.rating)
            review.rating = request.rating
        if request.comment is not None:
            review.comment = request.comment
        try:
            ReviewService._refresh_product_rating(db, review.product_id)
            db.commit()
            db.refresh(review)
        except Exception:
            db.rollback()
            raise
        return ReviewService.to_response(review)

    @staticmethod
    def delete_review(db: Session, user: User, review_id: int) -> None:
        review = ReviewService._get_review(db, review_id)
        if review.user_id != user.id:
            raise PermissionDeniedError("You don't have permission to delete this review")
        product_id = review.product_id
        try:
            db.delete(review)
            ReviewService._refresh_product_rating(db, product_id)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Review {review_id} deleted by user {user.id}")

    @staticmethod
    def get_product_reviews(db: Session, product_id: int) -> List[models.ReviewResponse]:
        ReviewService._get_product(db, product_id)
        reviews = (
            db.query(Review)
            .filter(Review.product_id == product_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )
        return [ReviewService.to_response(r) for r in reviews]

    @staticmethod
    def get_user_reviews(db: Session, user: User) -> List[models.ReviewResponse]:
        reviews = (
            db.query(Review)
            .filter(Review.user_id == user.id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )
        return [ReviewService.to_response(r) for r in reviews]

    @staticmethod
    def get_review(db: Session, review_id: int) -> models.ReviewResponse:
        return ReviewService.to_response(ReviewService._get_review(db, review_id))

    @staticmethod
    def get_average_rating(db: Session, product_id: int) -> models.AverageRatingResponse:
        ReviewService._get_product(db, product_id)
        average, count = ReviewService._rating_stats(db, product_id)
        return models.AverageRatingResponse(product_id=product_id, average_rating=average, review_count=count)
