# shopapp/entities/product.py

from sqlalchemy import Column, String, Integer, Float, DateTime, Text
from sqlalchemy.orm import relationship

from ..database.core import Base, utcnow


class Product(Base):
    __tablename__ = 'products'

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    image_url = Column(String, nullable=True)
    category = Column(String, nullable=True, index=True)
    rating = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # --- Relationships ---
    # Order items are not cascaded; ordered products cannot be deleted.
    # Dependents are removed with the product but orphaned only through their owning side.
    order_items = relationship("OrderItem", back_populates="product")
    cart_items = relationship("CartItem", back_populates="product", cascade="all")
    favorites = relationship("Favorite", back_populates="product", cascade="all")
    reviews = relationship("Review", back_populates="product", cascade="all")

    def __repr__(self):
        return f"<Product(name='{self.name}', stock={self.stock})>"
