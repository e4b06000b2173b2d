# shopapp/orders/service.py

import logging
from typing import List
from sqlalchemy.orm import Session

from . import models
from ..core.exceptions import (
    InsufficientStockError,
    InvalidStateError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
    require_text,
)
from ..entities.cart import Cart
from ..entities.order import Order, OrderItem, OrderStatus, CUSTOMER_CANCELLABLE
from ..entities.product import Product
from ..entities.user import User
from ..notifications.service import NotificationService

logger = logging.getLogger(__name__)


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus.parse(value)
    except ValueError as e:
        raise ValidationFailedError(str(e), field="status")


class OrderService:

    @staticmethod
    def build_order_response(order: Order) -> models.OrderResponse:
        return models.OrderResponse(
            id=order.id,
            user_id=order.user_id,
            user_email=order.user.email,
            items=[
                models.OrderItemResponse(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product.name,
                    product_image=item.product.image_url,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    subtotal=item.subtotal,
                )
                for item in order.items
            ],
            total_amount=order.total_amount,
            status=order.status,
            shipping_address=order.shipping_address,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    @staticmethod
    def _get_order(db: Session, order_id: int) -> Order:
        order = db.get(Order, order_id)
        if not order:
            raise NotFoundError("Order", order_id)
        return order

    @staticmethod
    def get_owned_order(db: Session, user: User, order_id: int, action: str = "access") -> Order:
        order = OrderService._get_order(db, order_id)
        if order.user_id != user.id:
            raise PermissionDeniedError(f"You don't have permission to {action} this order")
        return order

    @staticmethod
    def restore_stock(db: Session, order: Order) -> None:
        """Give back exactly the quantities the order took out of stock."""
        for item in order.items:
            product = (
                db.query(Product)
                .filter(Product.id == item.product_id)
                .with_for_update()
                .one()
            )
            product.stock += item.quantity
        logger.info(f"Stock restored for order #{order.id}")

    @staticmethod
    def create_order(db: Session, user: User, request: models.CreateOrderRequest) -> models.OrderResponse:
        """
        Turn the user's cart into an order.

        Stock is checked and decremented under row locks, the cart is emptied,
        and the user and every admin are notified. Everything commits together
        or not at all.
        """
        shipping_address = require_text(request.shipping_address, "Shipping address", "shipping_address").strip()

        cart = db.query(Cart).filter(Cart.user_id == user.id).first()
        if cart is None:
            raise NotFoundError("Cart", message="Cart not found")
        if not cart.items:
            raise ValidationFailedError("Cart is empty. Add items before creating an order")

        try:
            product_ids = [item.product_id for item in cart.items]
            products = {
                p.id: p
                for p in db.query(Product).filter(Product.id.in_(product_ids)).with_for_update().all()
            }

            for cart_item in cart.items:
                product = products[cart_item.product_id]
                if product.stock < cart_item.quantity:
                    raise InsufficientStockError(
                        f"Insufficient stock for product '{product.name}'. "
                        f"Available: {product.stock}, Requested: {cart_item.quantity}",
                        product_id=product.id,
                        available=product.stock,
                        requested=cart_item.quantity,
                    )

            order = Order(user_id=user.id, status=OrderStatus.CREATED, shipping_address=shipping_address)
            total = 0.0
            for cart_item in cart.items:
                product = products[cart_item.product_id]
                subtotal = round(product.price * cart_item.quantity, 2)
                order.items.append(OrderItem(
                    product_id=product.id,
                    quantity=cart_item.quantity,
                    unit_price=product.price,
                    subtotal=subtotal,
                ))
                product.stock -= cart_item.quantity
                total += product.price * cart_item.quantity
            order.total_amount = round(total, 2)

            db.add(order)
            cart.items.clear()
            db.flush()

            NotificationService.create_for_user(
                db,
                user,
                "Order Created Successfully",
                f"Your order #{order.id} has been created successfully. Total: ${order.total_amount:.2f}",
            )
            NotificationService.notify_admins_about_new_order(db, order.id, user.email, order.total_amount)

            db.commit()
            db.refresh(order)
        except Exception:
            db.rollback()
            raise

        logger.info(f"Order #{order.id} created for user {user.id}, total {order.total_amount:.2f}")
        return OrderService.build_order_response(order)

    @staticmethod
    def get_user_orders(db: Session, user: User) -> List[models.OrderResponse]:
        orders = (
            db.query(Order)
            .filter(Order.user_id == user.id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )
        return [OrderService.build_order_response(o) for o in orders]

    @staticmethod
    def get_order(db: Session, user: User, order_id: int) -> models.OrderResponse:
        return OrderService.build_order_response(OrderService.get_owned_order(db, user, order_id))

    @staticmethod
    def cancel_order(db: Session, user: User, order_id: int) -> models.OrderResponse:
        order = OrderService.get_owned_order(db, user, order_id, action="cancel")
        if order.status not in CUSTOMER_CANCELLABLE:
            raise InvalidStateError(
                f"Cannot cancel order with status: {order.status.value}",
                current_status=order.status.value,
            )
        try:
            OrderService.restore_stock(db, order)
            order.status = OrderStatus.CANCELLED
            NotificationService.create_for_user(
                db, user, "Order Cancelled", f"Your order #{order.id} has been cancelled successfully"
            )
            db.commit()
            db.refresh(order)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Order #{order.id} cancelled by user {user.id}")
        return OrderService.build_order_response(order)

    # --- Admin operations ---

    @staticmethod
    def get_all_orders(db: Session) -> List[models.OrderResponse]:
        orders = db.query(Order).order_by(Order.created_at.desc(), Order.id.desc()).all()
        return [OrderService.build_order_response(o) for o in orders]

    @staticmethod
    def get_orders_by_status(db: Session, status: str) -> List[models.OrderResponse]:
        order_status = parse_status(status)
        orders = (
            db.query(Order)
            .filter(Order.status == order_status)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )
        return [OrderService.build_order_response(o) for o in orders]

    @staticmethod
    def update_order_status(db: Session, order_id: int, request: models.UpdateOrderStatusRequest) -> models.OrderResponse:
        order = OrderService._get_order(db, order_id)
        new_status = parse_status(request.status)
        if not order.status.can_transition_to(new_status):
            raise InvalidStateError(
                f"Cannot change order status from {order.status.value} to {new_status.value}",
                current_status=order.status.value,
            )
        try:
            if new_status == OrderStatus.CANCELLED:
                OrderService.restore_stock(db, order)
            previous = order.status
            order.status = new_status
            NotificationService.notify_user_about_order_status(
                db, order.user, order.id, new_status.value, request.message
            )
            db.commit()
            db.refresh(order)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Order #{order.id} status changed {previous.value} -> {new_status.value}")
        return OrderService.build_order_response(order)
