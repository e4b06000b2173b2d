# shopapp/payments/service.py

import logging
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models
from .gateway import gateway
from ..core.exceptions import (
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    require_text,
    require_value,
)
from ..entities.order import Order, OrderStatus, PURCHASED_STATUSES
from ..entities.payment import Payment, PaymentStatus
from ..entities.user import User
from ..notifications.service import NotificationService

logger = logging.getLogger(__name__)


class PaymentService:

    @staticmethod
    def _find_by_key(db: Session, key: str):
        return db.query(Payment).filter(Payment.idempotency_key == key).first()

    @staticmethod
    def _ensure_owner(payment: Payment, user: User) -> Payment:
        if payment.order.user_id != user.id:
            raise PermissionDeniedError("You don't have permission to access this payment")
        return payment

    @staticmethod
    def _record_outcome(db: Session, user: User, payment: Payment, order_id: int, approved: bool) -> None:
        """Stage the gateway result against the order as it stands now."""
        order = (
            db.query(Order)
            .filter(Order.id == order_id)
            .with_for_update()
            .populate_existing()
            .one()
        )

        if approved and order.status.can_transition_to(OrderStatus.PAID):
            payment.status = PaymentStatus.SUCCEEDED
            order.status = OrderStatus.PAID
            NotificationService.create_for_user(
                db,
                user,
                "Payment Successful",
                f"Payment of ${payment.amount:.2f} for order #{order.id} was successful. "
                f"Your order will be shipped soon.",
            )
            return

        payment.status = PaymentStatus.FAILED
        if approved:
            # The order left the payable states while the gateway was deciding
            logger.warning(
                f"Order #{order.id} is {order.status.value}, discarding approved payment {payment.id}"
            )
            message = (
                f"Payment of ${payment.amount:.2f} for order #{order.id} was not applied "
                f"because the order is {order.status.value.lower()}."
            )
        else:
            if order.status.can_transition_to(OrderStatus.PENDING_PAYMENT):
                order.status = OrderStatus.PENDING_PAYMENT
            message = f"Payment of ${payment.amount:.2f} for order #{order.id} failed. Please try again."
        NotificationService.create_for_user(db, user, "Payment Failed", message)

    @staticmethod
    async def process_payment(db: Session, user: User, request: models.PaymentRequest) -> Payment:
        """
        Charge an order once per idempotency key.

        A repeated key returns the stored payment untouched. Otherwise a PENDING
        payment is committed first so the key is claimed, the gateway is awaited,
        and the outcome is written together with the order status and notification.
        If the gateway or that write fails, the payment is marked FAILED before
        the error propagates, so the key never stays PENDING.
        """
        key = require_text(request.idempotency_key, "Idempotency key", "idempotency_key").strip()

        existing = PaymentService._find_by_key(db, key)
        if existing:
            logger.info(f"Idempotent replay for key {key}, returning payment {existing.id}")
            return PaymentService._ensure_owner(existing, user)

        order_id = require_value(request.order_id, "Order ID", "order_id")
        order = db.get(Order, order_id)
        if not order:
            raise NotFoundError("Order", order_id)
        if order.user_id != user.id:
            raise PermissionDeniedError("You don't have permission to pay for this order")
        if order.status in PURCHASED_STATUSES:
            raise InvalidStateError("Order is already paid", current_status=order.status.value)
        if order.status == OrderStatus.CANCELLED:
            raise InvalidStateError("Cannot pay for a cancelled order", current_status=order.status.value)
        payment_method = require_text(request.payment_method, "Payment method", "payment_method").strip()

        payment = Payment(
            order_id=order.id,
            amount=order.total_amount,
            status=PaymentStatus.PENDING,
            payment_method=payment_method,
            idempotency_key=key,
        )
        try:
            db.add(payment)
            db.commit()
        except IntegrityError:
            # Another request claimed the key first
            db.rollback()
            existing = PaymentService._find_by_key(db, key)
            if existing is None:
                raise
            return PaymentService._ensure_owner(existing, user)

        payment_id = payment.id
        try:
            approved = await gateway.charge(payment.amount, payment_method)
            PaymentService._record_outcome(db, user, payment, order_id, approved)
            db.commit()
        except Exception:
            db.rollback()
            logger.error(f"Payment {payment_id} for order #{order_id} was interrupted, marking it failed")
            try:
                PaymentService._record_outcome(db, user, payment, order_id, approved=False)
                db.commit()
            except Exception:
                db.rollback()
                logger.exception(f"Could not mark payment {payment_id} as failed")
            raise

        db.refresh(payment)
        logger.info(f"Payment {payment.id} for order #{order_id}: {payment.status.value}")
        return payment

    @staticmethod
    def get_payment_by_order(db: Session, user: User, order_id: int) -> Payment:
        """Most recent payment attempt for one of the user's orders."""
        order = db.get(Order, order_id)
        if not order:
            raise NotFoundError("Order", order_id)
        if order.user_id != user.id:
            raise PermissionDeniedError("You don't have permission to access this payment")
        payment = (
            db.query(Payment)
            .filter(Payment.order_id == order_id)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .first()
        )
        if not payment:
            raise NotFoundError("Payment", order_id, field="order id")
        return payment

    @staticmethod
    def get_payment_history(db: Session, user: User) -> List[Payment]:
        return (
            db.query(Payment)
            .join(Order, Payment.order_id == Order.id)
            .filter(Order.user_id == user.id)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .all()
        )

    @staticmethod
    def get_all_payments(db: Session) -> List[Payment]:
        return db.query(Payment).order_by(Payment.created_at.desc(), Payment.id.desc()).all()
