from .user import User, Role
from .admin import Admin
from .product import Product
from .cart import Cart, CartItem
from .order import Order, OrderItem, OrderStatus
from .payment import Payment, PaymentStatus
from .review import Review
from .favorite import Favorite
from .notification import Notification

__all__ = [
    "User",
    "Role",
    "Admin",
    "Product",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Payment",
    "PaymentStatus",
    "Review",
    "Favorite",
    "Notification",
]
