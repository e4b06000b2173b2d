# shopapp/entities/cart.py

from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database.core import Base, utcnow


class Cart(Base):
    __tablename__ = 'carts'

    id = Column(Integer, primary_key=True, index=True)

    # Unique ensures a one-to-one relationship with the user
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # --- Relationships ---
    user = relationship("User", back_populates="cart")
    items = relationship("CartItem", back_populates="cart", cascade="all, delete-orphan", order_by="CartItem.id")


class CartItem(Base):
    """A product line in a cart. Prices are never stored here; they are read live from the product."""
    __tablename__ = 'cart_items'
    __table_args__ = (UniqueConstraint('cart_id', 'product_id', name='uq_cart_item_product'),)

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey('carts.id'), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey('products.id'), nullable=False)
    quantity = Column(Integer, nullable=False)

    cart = relationship("Cart", back_populates="items")
    product = relationship("Product", back_populates="cart_items")
