# shopapp/products/service.py

import logging
from typing import List
from sqlalchemy.orm import Session

from . import models
from ..core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from ..entities.order import OrderItem
from ..entities.product import Product

logger = logging.getLogger(__name__)


class ProductService:

    @staticmethod
    def _validate_price(price) -> None:
        if price is None or price <= 0:
            raise ValidationFailedError("Product price must be greater than 0", field="price")

    @staticmethod
    def _validate_stock(stock) -> None:
        if stock is None or stock < 0:
            raise ValidationFailedError("Product stock cannot be negative", field="stock")

    @staticmethod
    def get_all_products(db: Session) -> List[Product]:
        return db.query(Product).order_by(Product.id).all()

    @staticmethod
    def get_product(db: Session, product_id: int) -> Product:
        product = db.get(Product, product_id)
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    @staticmethod
    def get_products_by_category(db: Session, category: str) -> List[Product]:
        return db.query(Product).filter(Product.category == category).order_by(Product.id).all()

    @staticmethod
    def search_products(db: Session, keyword: str) -> List[Product]:
        """Case-insensitive substring match on the product name."""
        term = (keyword or "").strip().lower()
        # Match % and _ literally
        term = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return (
            db.query(Product)
            .filter(Product.name.ilike(f"%{term}%", escape="\\"))
            .order_by(Product.id)
            .all()
        )

    @staticmethod
    def create_product(db: Session, request: models.ProductRequest) -> Product:
        if request.name is None or not request.name.strip():
            raise ValidationFailedError("Product name is required", field="name")
        ProductService._validate_price(request.price)
        ProductService._validate_stock(request.stock)

        product = Product(
            name=request.name.strip(),
            description=request.description,
            price=request.price,
            stock=request.stock,
            image_url=request.image_url,
            category=request.category,
            rating=0.0,
        )
        try:
            db.add(product)
            db.commit()
            db.refresh(product)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Product created: {product.name} (ID: {product.id})")
        return product

    @staticmethod
    def update_product(db: Session, product_id: int, request: models.ProductRequest) -> Product:
        product = ProductService.get_product(db, product_id)

        # Blank names are ignored rather than rejected
        if request.name is not None and request.name.strip():
            product.name = request.name.strip()
        if request.description is not None:
            product.description = request.description
        if request.price is not None:
            ProductService._validate_price(request.price)
            product.price = request.price
        if request.stock is not None:
            ProductService._validate_stock(request.stock)
            product.stock = request.stock
        if request.image_url is not None:
            product.image_url = request.image_url
        if request.category is not None:
            product.category = request.category

        try:
            db.commit()
            db.refresh(product)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Product updated: {product.name} (ID: {product.id})")
        return product

    @staticmethod
    def delete_product(db: Session, product_id: int) -> None:
        """Delete a product together with its cart lines, favorites and reviews. Ordered products are kept."""
        product = ProductService.get_product(db, product_id)
        if db.query(OrderItem).filter(OrderItem.product_id == product_id).first():
            raise ConflictError(
                "Product cannot be deleted because it appears in existing orders",
                {"product_id": product_id},
            )
        try:
            db.delete(product)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Product deleted: ID {product_id}")
