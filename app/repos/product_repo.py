# app/repos/product_repo.py
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel


class ProductRepo:
    """Katalog produktow. Dla koszyka i zamowien tylko do odczytu."""

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def resolve(self, product_id: int) -> ProductModel | None:
        # nieaktywny produkt = nie istnieje dla koszyka i checkoutu
        product = self.get_product(product_id)
        if product is None or not product.is_active:
            return None
        return product

    def resolve_many(self, product_ids: Iterable[int]) -> dict[int, ProductModel]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(ids), ProductModel.is_active.is_(True))
        ).scalars().all()
        return {p.id: p for p in rows}

    def list_products(self, section: str | None = None) -> list[ProductModel]:
        stmt = select(ProductModel).where(ProductModel.is_active.is_(True))
        if section:
            stmt = stmt.where(ProductModel.section == section)
        stmt = stmt.order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product_id: int, changes: dict) -> ProductModel | None:
        product = self.get_product(product_id)
        if product is None:
            return None
        for key, value in changes.items():
            setattr(product, key, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def count(self) -> int:
        return self.db.query(ProductModel).count()
