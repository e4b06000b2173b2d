# shopapp/favorites/service.py

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from . import models
from ..core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
    require_value,
)
from ..entities.favorite import Favorite
from ..entities.product import Product
from ..entities.user import User
from ..products.models import ProductResponse

logger = logging.getLogger(__name__)


class FavoriteService:

    @staticmethod
    def to_response(favorite: Favorite) -> models.FavoriteResponse:
        return models.FavoriteResponse(
            id=favorite.id,
            user_id=favorite.user_id,
            user_email=favorite.user.email,
            product=ProductResponse.model_validate(favorite.product),
            created_at=favorite.created_at,
        )

    @staticmethod
    def _get_product(db: Session, product_id: int) -> Product:
        product = db.get(Product, product_id)
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    @staticmethod
    def _find(db: Session, user_id: int, product_id: int) -> Optional[Favorite]:
        return (
            db.query(Favorite)
            .filter(Favorite.user_id == user_id, Favorite.product_id == product_id)
            .first()
        )

    @staticmethod
    def _list_for(db: Session, user_id: int) -> List[models.FavoriteResponse]:
        favorites = (
            db.query(Favorite)
            .filter(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
            .all()
        )
        return [FavoriteService.to_response(f) for f in favorites]

    @staticmethod
    def add_favorite(db: Session, user: User, product_id) -> models.FavoriteResponse:
        product_id = require_value(product_id, "Product ID", "product_id")
        product = FavoriteService._get_product(db, product_id)
        if FavoriteService._find(db, user.id, product.id):
            raise ConflictError("Product is already in your favorites", {"product_id": product.id})

        favorite = Favorite(user_id=user.id, product_id=product.id)
        try:
            db.add(favorite)
            db.commit()
            db.refresh(favorite)
        except Exception:
            db.rollback()
            raise
        logger.info(f"User {user.id} favorited product {product.id}")
        return FavoriteService.to_response(favorite)

    @staticmethod
    def remove_favorite(db: Session, user: User, product_id: int) -> None:
        product = FavoriteService._get_product(db, product_id)
        favorite = FavoriteService._find(db, user.id, product.id)
        if not favorite:
            raise NotFoundError("Favorite", message="Product is not in your favorites")
        try:
            db.delete(favorite)
            db.commit()
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def get_my_favorites(db: Session, user: User) -> List[models.FavoriteResponse]:
        return FavoriteService._list_for(db, user.id)

    @staticmethod
    def get_user_favorites(db: Session, user_id: int) -> List[models.FavoriteResponse]:
        if db.get(User, user_id) is None:
            raise NotFoundError("User", user_id)
        return FavoriteService._list_for(db, user_id)

    @staticmethod
    def is_favorited(db: Session, user: User, product_id: int) -> bool:
        FavoriteService._get_product(db, product_id)
        return FavoriteService._find(db, user.id, product_id) is not None

    @staticmethod
    def count(db: Session, user: User) -> int:
        return db.query(Favorite).filter(Favorite.user_id == user.id).count()

    @staticmethod
    def clear_favorites(db: Session, user: User) -> int:
        favorites = db.query(Favorite).filter(Favorite.user_id == user.id).all()
        if not favorites:
            raise ValidationFailedError("You have no favorites to clear")
        try:
            for favorite in favorites:
                db.delete(favorite)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Cleared {len(favorites)} favorites for user {user.id}")
        return len(favorites)

    @staticmethod
    def get_favorite(db: Session, user: User, favorite_id: int) -> models.FavoriteResponse:
        favorite = db.get(Favorite, favorite_id)
        if not favorite:
            raise NotFoundError("Favorite", favorite_id)
        if favorite.user_id != user.id:
            raise PermissionDeniedError("You don't have permission to access this favorite")
        return FavoriteService.to_response(favorite)

    @staticmethod
    def toggle_favorite(db: Session, user: User, product_id: int) -> Optional[models.FavoriteResponse]:
        """Add the product if absent, remove it if present. Returns the new favorite or None when removed."""
        product = FavoriteService._get_product(db, product_id)
        existing = FavoriteService._find(db, user.id, product.id)
        if existing:
            FavoriteService.remove_favorite(db, user, product.id)
            return None
        return FavoriteService.add_favorite(db, user, product.id)
