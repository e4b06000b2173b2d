# shopapp/database/seed.py

import logging

from sqlalchemy.orm import Session

from ..entities.product import Product

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS = [
    {
        "name": "Wireless Headphones",
        "description": "Noise-cancelling over-ear headphones with 20 hours battery life.",
        "price": 1200.0,
        "stock": 15,
        "image_url": "https://example.com/headphones.jpg",
        "category": "Electronics",
        "rating": 4.5,
    },
    {
        "name": "Smart Watch",
        "description": "Waterproof smartwatch with heart rate monitor and GPS.",
        "price": 950.0,
        "stock": 20,
        "image_url": "https://example.com/smartwatch.jpg",
        "category": "Wearables",
        "rating": 4.3,
    },
    {
        "name": "Bluetooth Speaker",
        "description": "Portable Bluetooth speaker with deep bass and 10-hour playtime.",
        "price": 650.0,
        "stock": 30,
        "image_url": "https://example.com/speaker.jpg",
        "category": "Audio",
        "rating": 4.6,
    },
    {
        "name": "Laptop Backpack",
        "description": "Water-resistant backpack for 15.6-inch laptops with multiple compartments.",
        "price": 480.0,
        "stock": 40,
        "image_url": "https://example.com/backpack.jpg",
        "category": "Accessories",
        "rating": 4.2,
    },
    {
        "name": "Mechanical Keyboard",
        "description": "RGB backlit mechanical keyboard with blue switches.",
        "price": 850.0,
        "stock": 25,
        "image_url": "https://example.com/keyboard.jpg",
        "category": "Computer Peripherals",
        "rating": 4.7,
    },
]


def seed_sample_products(db: Session) -> int:
    """Insert the sample catalog when no products exist. Returns the number of rows added."""
    if db.query(Product).first() is not None:
        logger.info("Products already present, skipping sample data")
        return 0

    for data in SAMPLE_PRODUCTS:
        db.add(Product(**data))
    db.commit()
    logger.info(f"Seeded {len(SAMPLE_PRODUCTS)} sample products")
    return len(SAMPLE_PRODUCTS)
