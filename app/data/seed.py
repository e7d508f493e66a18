# app/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import sessionmaker

from app.data.database import SessionLocal
from app.data.models.product import ProductModel
from app.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {"id": 1, "name": "Keyboard", "price": Decimal("199.99")},
    {"id": 2, "name": "Mouse", "price": Decimal("49.50")},
    {"id": 3, "name": "Monitor", "price": Decimal("899.00")},
    {"id": 4, "name": "USB Cable", "price": Decimal("3.33")},
    {"id": 5, "name": "Headset", "price": Decimal("10.00")},
]


def seed(session_factory: sessionmaker = SessionLocal) -> int:
    db = session_factory()
    try:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            return 0
        db.add_all(ProductModel(**p) for p in PRODUCTS)
        db.commit()
        logger.info(f"Seeded {len(PRODUCTS)} products")
        return len(PRODUCTS)
    finally:
        db.close()
