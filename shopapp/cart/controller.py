# shopapp/cart/controller.py
from fastapi import APIRouter

from . import models
from .service import CartService
from ..auth.models import MessageResponse
from ..auth.service import CurrentUser
from ..database.core import DbSession

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("/", response_model=models.CartResponse)
async def get_cart(current_user: CurrentUser, db: DbSession):
    return CartService.get_cart(db, current_user)


@router.post("/", response_model=models.CartResponse)
async def add_to_cart(request: models.CartItemRequest, current_user: CurrentUser, db: DbSession):
    return CartService.add_to_cart(db, current_user, request)


@router.delete("/", response_model=MessageResponse)
async def clear_cart(current_user: CurrentUser, db: DbSession):
    CartService.clear_cart(db, current_user)
    return MessageResponse(message="Cart cleared successfully")


@router.get("/count", response_model=models.CartCount)
async def get_cart_count(current_user: CurrentUser, db: DbSession):
    return models.CartCount(count=CartService.get_item_count(db, current_user))


@router.put("/{product_id}", response_model=models.CartResponse)
async def update_cart_item(product_id: int, request: models.CartItemUpdate, current_user: CurrentUser, db: DbSession):
    return CartService.update_cart_item(db, current_user, product_id, request.quantity)


@router.delete("/{product_id}", response_model=models.CartResponse)
async def remove_from_cart(product_id: int, current_user: CurrentUser, db: DbSession):
    return CartService.remove_from_cart(db, current_user, product_id)
