# shopapp/cart/service.py

import logging
from sqlalchemy.orm import Session

from . import models
from ..core.exceptions import (
    InsufficientStockError,
    NotFoundError,
    ValidationFailedError,
    require_value,
)
from ..entities.cart import Cart, CartItem
from ..entities.product import Product
from ..entities.user import User

logger = logging.getLogger(__name__)


class CartService:

    @staticmethod
    def get_or_create_cart(db: Session, user: User) -> Cart:
        """Return the user's cart, creating an empty one on first use."""
        cart = db.query(Cart).filter(Cart.user_id == user.id).first()
        if cart is None:
            cart = Cart(user_id=user.id)
            db.add(cart)
            db.flush()
            logger.info(f"Created cart for user {user.id}")
        return cart

    @staticmethod
    def _find_item(db: Session, cart: Cart, product_id: int) -> CartItem:
        item = (
            db.query(CartItem)
            .filter(CartItem.cart_id == cart.id, CartItem.product_id == product_id)
            .first()
        )
        if item is None:
            raise NotFoundError("Cart item", message="Item not found in cart")
        return item

    @staticmethod
    def _get_product(db: Session, product_id: int) -> Product:
        product = db.get(Product, product_id)
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    @staticmethod
    def _ensure_stock(product: Product, requested: int) -> None:
        if product.stock < requested:
            raise InsufficientStockError(
                f"Insufficient stock. Available: {product.stock}",
                product_id=product.id,
                available=product.stock,
                requested=requested,
            )

    @staticmethod
    def build_cart_response(cart: Cart) -> models.CartResponse:
        """Lines are priced from the live product price."""
        items = []
        for item in cart.items:
            product = item.product
            items.append(models.CartItemResponse(
                id=item.id,
                product_id=product.id,
                product_name=product.name,
                product_image=product.image_url,
                unit_price=product.price,
                quantity=item.quantity,
                subtotal=round(product.price * item.quantity, 2),
            ))
        return models.CartResponse(
            id=cart.id,
            user_id=cart.user_id,
            items=items,
            total_amount=round(sum(i.subtotal for i in items), 2),
            total_items=sum(i.quantity for i in items),
            created_at=cart.created_at,
        )

    @staticmethod
    def get_cart(db: Session, user: User) -> models.CartResponse:
        try:
            cart = CartService.get_or_create_cart(db, user)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return CartService.build_cart_response(cart)

    @staticmethod
    def add_to_cart(db: Session, user: User, request: models.CartItemRequest) -> models.CartResponse:
        product_id = require_value(request.product_id, "Product ID", "product_id")
        if request.quantity is None or request.quantity <= 0:
            raise ValidationFailedError("Quantity must be greater than 0", field="quantity")

        try:
            cart = CartService.get_or_create_cart(db, user)
            product = CartService._get_product(db, product_id)
            CartService._ensure_stock(product, request.quantity)

            existing = (
                db.query(CartItem)
                .filter(CartItem.cart_id == cart.id, CartItem.product_id == product.id)
                .first()
            )
            if existing:
                new_quantity = existing.quantity + request.quantity
                CartService._ensure_stock(product, new_quantity)
                existing.quantity = new_quantity
            else:
                cart.items.append(CartItem(product_id=product.id, quantity=request.quantity))
            db.commit()
            db.refresh(cart)
        except Exception:
            db.rollback()
            raise
        logger.info(f"User {user.id} added product {product_id} x{request.quantity} to cart")
        return CartService.build_cart_response(cart)

    @staticmethod
    def update_cart_item(db: Session, user: User, product_id: int, quantity) -> models.CartResponse:
        """Set the line quantity. Zero removes the line."""
        if quantity is None or quantity < 0:
            raise ValidationFailedError("Quantity must be 0 or greater", field="quantity")

        try:
            cart = CartService.get_or_create_cart(db, user)
            product = CartService._get_product(db, product_id)
            item = CartService._find_item(db, cart, product.id)
            if quantity == 0:
                cart.items.remove(item)
            else:
                CartService._ensure_stock(product, quantity)
                item.quantity = quantity
            db.commit()
            db.refresh(cart)
        except Exception:
            db.rollback()
            raise
        return CartService.build_cart_response(cart)

    @staticmethod
    def remove_from_cart(db: Session, user: User, product_id: int) -> models.CartResponse:
        try:
            cart = CartService.get_or_create_cart(db, user)
            product = CartService._get_product(db, product_id)
            item = CartService._find_item(db, cart, product.id)
            cart.items.remove(item)
            db.commit()
            db.refresh(cart)
        except Exception:
            db.rollback()
            raise
        return CartService.build_cart_response(cart)

    @staticmethod
    def clear_cart(db: Session, user: User) -> None:
        try:
            cart = CartService.get_or_create_cart(db, user)
            if not cart.items:
                raise ValidationFailedError("Cart is already empty")
            cart.items.clear()
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Cart cleared for user {user.id}")

    @staticmethod
    def get_item_count(db: Session, user: User) -> int:
        cart = db.query(Cart).filter(Cart.user_id == user.id).first()
        if cart is None:
            return 0
        return sum(item.quantity for item in cart.items)
