# Central models file: importing it registers every table on Base.metadata

from .core import Base

from ..entities import (
    User,
    Admin,
    Product,
    Cart,
    CartItem,
    Order,
    OrderItem,
    Payment,
    Review,
    Favorite,
    Notification,
)

# Export all models
__all__ = [
    "Base",
    "User",
    "Admin",
    "Product",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "Payment",
    "Review",
    "Favorite",
    "Notification",
]
