# shopapp/payments/controller.py
from typing import List
from fastapi import APIRouter

from . import models
from .service import PaymentService
from ..auth.service import CurrentUser, CurrentAdmin
from ..database.core import DbSession

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/process", response_model=models.PaymentResponse)
async def process_payment(request: models.PaymentRequest, current_user: CurrentUser, db: DbSession):
    """Pay for an order. Retrying with the same idempotency key returns the original payment."""
    return await PaymentService.process_payment(db, current_user, request)


@router.get("/order/{order_id}", response_model=models.PaymentResponse)
async def get_payment_by_order(order_id: int, current_user: CurrentUser, db: DbSession):
    return PaymentService.get_payment_by_order(db, current_user, order_id)


@router.get("/history", response_model=List[models.PaymentResponse])
async def get_payment_history(current_user: CurrentUser, db: DbSession):
    return PaymentService.get_payment_history(db, current_user)


@router.get("/admin/all", response_model=List[models.PaymentResponse])
async def get_all_payments(admin: CurrentAdmin, db: DbSession):
    return PaymentService.get_all_payments(db)
