# app/data/seed.py
from decimal import Decimal

from app.data.database import SessionLocal
from app.data.models.product import ProductModel
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    {"name": "Cuddly Bear", "description": "Soft and cuddly companion", "price": Decimal("24.99"),
     "inventory": 40, "section": "retail", "is_bestseller": True},
    {"name": "Rainbow Blocks", "description": "Creative construction set", "price": Decimal("39.50"),
     "inventory": 25, "section": "retail", "is_new": True},
    {"name": "Puzzle Planet", "description": "Brain-teasing challenge", "price": Decimal("12.00"),
     "inventory": 60, "section": "retail"},
    {"name": "Cuddly Bear (case of 12)", "description": "Wholesale case", "price": Decimal("239.00"),
     "inventory": 10, "section": "wholesale"},
    {"name": "Toy Trucks (case of 24)", "description": "Wholesale case", "price": Decimal("310.00"),
     "inventory": 8, "section": "wholesale"},
]


def seed(db=None) -> int:
    """Wrzuca demo katalog, tylko jesli tabela produktow jest pusta."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        repo = ProductRepo(db)
        if repo.count():
            return 0
        for data in DEMO_PRODUCTS:
            db.add(ProductModel(**data))
        db.commit()
        logger.info(f"Seeded {len(DEMO_PRODUCTS)} demo products")
        return len(DEMO_PRODUCTS)
    finally:
        if own_session:
            db.close()
