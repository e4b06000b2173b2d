# shopapp/favorites/controller.py
from typing import List
from fastapi import APIRouter
from starlette import status

from . import models
from .service import FavoriteService
from ..auth.models import MessageResponse
from ..auth.service import CurrentUser
from ..database.core import DbSession

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.post("/", response_model=models.FavoriteMutationResponse, status_code=status.HTTP_201_CREATED)
async def add_favorite(request: models.FavoriteRequest, current_user: CurrentUser, db: DbSession):
    favorite = FavoriteService.add_favorite(db, current_user, request.product_id)
    return models.FavoriteMutationResponse(message="Product added to favorites successfully", favorite=favorite)


@router.get("/", response_model=List[models.FavoriteResponse])
async def get_my_favorites(current_user: CurrentUser, db: DbSession):
    return FavoriteService.get_my_favorites(db, current_user)


@router.delete("/", response_model=MessageResponse)
async def clear_favorites(current_user: CurrentUser, db: DbSession):
    FavoriteService.clear_favorites(db, current_user)
    return MessageResponse(message="All favorites cleared successfully")


@router.get("/count", response_model=models.FavoriteCount)
async def get_favorites_count(current_user: CurrentUser, db: DbSession):
    return models.FavoriteCount(count=FavoriteService.count(db, current_user))


@router.get("/user/{user_id}", response_model=List[models.FavoriteResponse])
async def get_user_favorites(user_id: int, current_user: CurrentUser, db: DbSession):
    return FavoriteService.get_user_favorites(db, user_id)


@router.get("/check/{product_id}", response_model=models.FavoriteCheck)
async def check_favorite(product_id: int, current_user: CurrentUser, db: DbSession):
    return models.FavoriteCheck(
        product_id=product_id,
        is_favorited=FavoriteService.is_favorited(db, current_user, product_id),
    )


@router.get("/detail/{favorite_id}", response_model=models.FavoriteResponse)
async def get_favorite(favorite_id: int, current_user: CurrentUser, db: DbSession):
    return FavoriteService.get_favorite(db, current_user, favorite_id)


@router.post("/toggle/{product_id}", response_model=models.FavoriteToggleResponse)
async def toggle_favorite(product_id: int, current_user: CurrentUser, db: DbSession):
    favorite = FavoriteService.toggle_favorite(db, current_user, product_id)
    if favorite is None:
        return models.FavoriteToggleResponse(message="Product removed from favorites", favorited=False)
    return models.FavoriteToggleResponse(message="Product added to favorites", favorited=True, favorite=favorite)


@router.delete("/{product_id}", response_model=MessageResponse)
async def remove_favorite(product_id: int, current_user: CurrentUser, db: DbSession):
    FavoriteService.remove_favorite(db, current_user, product_id)
    return MessageResponse(message="Product removed from favorites successfully")
