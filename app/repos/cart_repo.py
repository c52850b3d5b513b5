# app/repos/cart_repo.py
from datetime import datetime

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from app.data.models.cart_item import CartItemModel


class CartRepo:
    """
    Dostep do linii koszyka. Nie commituje sam z siebie,
    transakcja nalezy do serwisu (commit / rollback ponizej).
    """

    def __init__(self, db: Session):
        self.db = db

    def get_lines(self, session_id: str, for_update: bool = False) -> list[CartItemModel]:
        stmt = (
            select(CartItemModel)
            .where(CartItemModel.session_id == session_id)
            .order_by(CartItemModel.id)
        )
        if for_update:
            # na postgresie blokuje wiersze do konca transakcji, sqlite ignoruje
            stmt = stmt.with_for_update(of=CartItemModel)
        return list(self.db.execute(stmt).unique().scalars().all())

    def get_line(self, line_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, line_id)

    def get_line_for_product(self, session_id: str, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.session_id == session_id,
                CartItemModel.product_id == product_id,
            )
        ).unique().scalar_one_or_none()

    def add_line(self, line: CartItemModel) -> CartItemModel:
        self.db.add(line)
        self.db.flush()
        return line

    def delete_line(self, line: CartItemModel) -> None:
        self.db.delete(line)
        self.db.flush()

    def delete_session_lines(self, session_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.session_id == session_id)
        )
        return result.rowcount or 0

    def delete_lines_older_than(self, cutoff: datetime) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.created_at < cutoff)
        )
        return result.rowcount or 0

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def refresh(self, line: CartItemModel):
        self.db.refresh(line)
