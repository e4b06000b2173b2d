# shopapp/orders/controller.py
from typing import List
from fastapi import APIRouter
from starlette import status

from . import models
from .service import OrderService
from ..auth.service import CurrentUser, CurrentAdmin
from ..database.core import DbSession

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=models.OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(order_data: models.CreateOrderRequest, current_user: CurrentUser, db: DbSession):
    """Create an order from the authenticated user's cart."""
    return OrderService.create_order(db, current_user, order_data)


@router.get("/", response_model=List[models.OrderResponse])
async def get_user_orders(current_user: CurrentUser, db: DbSession):
    return OrderService.get_user_orders(db, current_user)


@router.get("/admin/all", response_model=List[models.OrderResponse])
async def get_all_orders(admin: CurrentAdmin, db: DbSession):
    return OrderService.get_all_orders(db)


@router.get("/admin/status/{order_status}", response_model=List[models.OrderResponse])
async def get_orders_by_status(order_status: str, admin: CurrentAdmin, db: DbSession):
    return OrderService.get_orders_by_status(db, order_status)


@router.put("/admin/{order_id}/status", response_model=models.OrderResponse)
async def update_order_status(
    order_id: int,
    request: models.UpdateOrderStatusRequest,
    admin: CurrentAdmin,
    db: DbSession
):
    return OrderService.update_order_status(db, order_id, request)


@router.get("/{order_id}", response_model=models.OrderResponse)
async def get_order(order_id: int, current_user: CurrentUser, db: DbSession):
    """Get a specific order (users can only see their own orders)"""
    return OrderService.get_order(db, current_user, order_id)


@router.post("/{order_id}/cancel", response_model=models.OrderResponse)
async def cancel_order(order_id: int, current_user: CurrentUser, db: DbSession):
    return OrderService.cancel_order(db, current_user, order_id)
